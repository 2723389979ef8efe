"""Strict Avalanche Criterion (SAC) calculator with per-bit analysis.

Measures whether flipping each individual input bit causes each output bit
to flip with probability ~0.5. A cipher satisfying SAC has good diffusion.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from aeslab.cipher.block import BLOCK_SIZE, encrypt_block
from aeslab.cipher.key_schedule import VARIANTS, expand_key


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    variant: str
    input_type: str             # "plaintext" or "key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)

    # Overall statistics
    global_mean: float = 0.0    # Mean across all per-bit means (~0.5 ideal)
    global_std: float = 0.0     # Std dev of per-bit means (lower = more uniform)
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # Mean |per_bit - 0.5| (0.0 = perfect SAC)

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC {self.variant} ({self.input_type}): "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    out = bytearray(data)
    out[bit_index // 8] ^= 0x80 >> (bit_index % 8)
    return bytes(out)


def hamming_fraction(a: bytes, b: bytes) -> float:
    """Fraction of differing bits between two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    diff = np.frombuffer(a, dtype=np.uint8) ^ np.frombuffer(b, dtype=np.uint8)
    return float(np.unpackbits(diff).mean())


def compute_sac(
    key_bytes: int = 16,
    *,
    input_type: str = "plaintext",
    trials: int = 64,
    seed: int = 1337,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute Strict Avalanche Criterion with per-input-bit analysis.

    For each trial a random key and plaintext are drawn; every input bit is
    flipped once and the fraction of flipped ciphertext bits recorded.

    Args:
        key_bytes: 16, 24 or 32.
        input_type: "plaintext" or "key" (which input to perturb).
        trials: Number of random (key, plaintext) pairs.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(current_trial, total_trials).

    Returns:
        SACResult with per-bit and aggregate statistics.
    """
    if key_bytes not in VARIANTS:
        raise ValueError(f"key_bytes must be one of {sorted(VARIANTS)}, got {key_bytes}")
    if input_type == "plaintext":
        num_input_bits = BLOCK_SIZE * 8
    elif input_type == "key":
        num_input_bits = key_bytes * 8
    else:
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")

    rng = np.random.default_rng(seed)
    fractions = np.zeros((trials, num_input_bits), dtype=np.float64)

    for t in range(trials):
        if progress_callback:
            progress_callback(t, trials)

        key = rng.integers(0, 256, size=key_bytes, dtype=np.uint8).tobytes()
        pt = rng.integers(0, 256, size=BLOCK_SIZE, dtype=np.uint8).tobytes()
        round_keys = expand_key(key)
        ct = encrypt_block(pt, round_keys)

        for bit_i in range(num_input_bits):
            if input_type == "plaintext":
                ct2 = encrypt_block(_flip_bit(pt, bit_i), round_keys)
            else:
                ct2 = encrypt_block(pt, expand_key(_flip_bit(key, bit_i)))
            fractions[t, bit_i] = hamming_fraction(ct, ct2)

    per_bit = fractions.mean(axis=0)
    global_std = float(per_bit.std(ddof=1)) if num_input_bits > 1 else 0.0

    return SACResult(
        variant=VARIANTS[key_bytes].name,
        input_type=input_type,
        num_trials=trials,
        num_input_bits=num_input_bits,
        num_output_bits=BLOCK_SIZE * 8,
        per_input_bit_mean=[round(float(p), 6) for p in per_bit],
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(global_std, 6),
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(per_bit - 0.5).mean()), 6),
    )
