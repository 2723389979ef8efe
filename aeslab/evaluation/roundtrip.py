"""Algebraic unit testing: roundtrip verification P = D(E(P, K), K).

Generates randomized (key, plaintext) pairs for every key size and mode and
verifies that the full stream path (header, padding, chaining) inverts
exactly, including empty and block-aligned plaintexts.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from aeslab.cipher.key_schedule import VARIANTS
from aeslab.cipher.modes import Mode
from aeslab.codec import AES
from aeslab.errors import AESError


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Error kind and message if encrypt/decrypt raised


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one key size and mode."""
    variant: str
    mode: str
    key_size_bits: int
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.variant}-{self.mode}: "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _plaintext_length(rng: random.Random, index: int, max_len: int) -> int:
    # First vectors pin the padding edge cases: empty, aligned, one short
    edge = [0, 16, 15, 32]
    if index < len(edge):
        return min(edge[index], max_len)
    return rng.randrange(0, max_len + 1)


def run_roundtrip_tests(
    key_bytes: int,
    mode: Mode,
    *,
    num_vectors: int = 200,
    max_plaintext_len: int = 80,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Run roundtrip verification across many random (key, plaintext) pairs.

    Args:
        key_bytes: 16, 24 or 32.
        mode: Mode of operation for the encrypted stream.
        num_vectors: Number of random pairs to test.
        max_plaintext_len: Upper bound on random plaintext length in bytes.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    variant = VARIANTS[key_bytes]
    mode = Mode(mode)
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        key = _rand_bytes(rng, key_bytes)
        pt = _rand_bytes(rng, _plaintext_length(rng, i, max_plaintext_len))
        ct = b""

        try:
            aes = AES(key)
            ct = aes.encrypt_bytes(pt, mode)
            pt2 = aes.decrypt_bytes(ct)

            if pt == pt2:
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        plaintext_hex=pt.hex(),
                        key_hex=key.hex(),
                        ciphertext_hex=ct.hex(),
                        decrypted_hex=pt2.hex(),
                        error=None,
                    ))
        except AESError as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_hex=pt.hex(),
                    key_hex=key.hex(),
                    ciphertext_hex=ct.hex() or "<error>",
                    decrypted_hex="<error>",
                    error=f"{exc.kind}: {exc}",
                ))

    elapsed = time.perf_counter() - start

    return RoundtripResult(
        variant=variant.name,
        mode=mode.name,
        key_size_bits=key_bytes * 8,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_variants(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for every key size in both modes.

    Args:
        num_vectors: Number of test vectors per (key size, mode).
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(label, current_index, total).

    Returns:
        List of RoundtripResult ordered by key size, then mode.
    """
    combos = [(kb, m) for kb in sorted(VARIANTS) for m in Mode]
    results: List[RoundtripResult] = []

    for idx, (key_bytes, mode) in enumerate(combos):
        if progress_callback:
            progress_callback(f"{VARIANTS[key_bytes].name}-{mode.name}", idx, len(combos))
        results.append(run_roundtrip_tests(
            key_bytes,
            mode,
            num_vectors=num_vectors,
            seed=seed,
        ))

    return results
