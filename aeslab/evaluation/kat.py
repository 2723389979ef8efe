"""Known-answer tests: published single-block AES vectors.

Sources: FIPS-197 Appendix B and C, and the AES Algorithm Validation Suite
(AESAVS) GFSbox / KeySbox / VarTxt / VarKey families for 128-bit keys.
GFSbox and KeySbox are pinned in full. The VarTxt / VarKey generators give the
inputs of the full 128-vector families; only their first answers are pinned here.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterator, List, Optional

from aeslab.codec import AES


@dataclass(frozen=True)
class KnownAnswerVector:
    name: str
    key_hex: str
    plaintext_hex: str
    ciphertext_hex: str

    @property
    def key(self) -> bytes:
        return bytes.fromhex(self.key_hex)

    @property
    def plaintext(self) -> bytes:
        return bytes.fromhex(self.plaintext_hex)

    @property
    def ciphertext(self) -> bytes:
        return bytes.fromhex(self.ciphertext_hex)


_ZERO_128 = "00" * 16

FIPS197_VECTORS: List[KnownAnswerVector] = [
    KnownAnswerVector("fips197-B", "2b7e151628aed2a6abf7158809cf4f3c",
                      "3243f6a8885a308d313198a2e0370734", "3925841d02dc09fbdc118597196a0b32"),
    KnownAnswerVector("fips197-C.1", "000102030405060708090a0b0c0d0e0f",
                      "00112233445566778899aabbccddeeff", "69c4e0d86a7b0430d8cdb78070b4c55a"),
    KnownAnswerVector("fips197-C.2", "000102030405060708090a0b0c0d0e0f1011121314151617",
                      "00112233445566778899aabbccddeeff", "dda97ca4864cdfe06eaf70a0ec0d7191"),
    KnownAnswerVector("fips197-C.3", "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
                      "00112233445566778899aabbccddeeff", "8ea2b7ca516745bfeafc49904b496089"),
    KnownAnswerVector("zero-128", _ZERO_128, _ZERO_128, "66e94bd4ef8a2c3b884cfa59ca342b2e"),
    KnownAnswerVector("zero-192", "00" * 24, _ZERO_128, "aae06992acbf52a3e8f4a96ec9300bd7"),
    KnownAnswerVector("zero-256", "00" * 32, _ZERO_128, "dc95c078a2408989ad48a21492842087"),
]

GFSBOX_128_VECTORS: List[KnownAnswerVector] = [
    KnownAnswerVector(f"gfsbox-128-{i}", _ZERO_128, pt, ct)
    for i, (pt, ct) in enumerate([
        ("f34481ec3cc627bacd5dc3fb08f273e6", "0336763e966d92595a567cc9ce537f5e"),
        ("9798c4640bad75c7c3227db910174e72", "a9a1631bf4996954ebc093957b234589"),
        ("96ab5c2ff612d9dfaae8c31f30c42168", "ff4f8391a6a40ca5b25d23bedd44a597"),
        ("6a118a874519e64e9963798a503f1d35", "dc43be40be0e53712f7e2bf5ca707209"),
        ("cb9fceec81286ca3e989bd979b0cb284", "92beedab1895a94faa69b632e5cc47ce"),
        ("b26aeb1874e47ca8358ff22378f09144", "459264f4798f6a78bacb89c15ed3d601"),
        ("58c8e00b2631686d54eab84b91f0aca1", "08a4e2efec8a8e3312ca7460b9040bbf"),
    ])
]

KEYSBOX_128_VECTORS: List[KnownAnswerVector] = [
    KnownAnswerVector(f"keysbox-128-{i}", key, _ZERO_128, ct)
    for i, (key, ct) in enumerate([
        ("10a58869d74be5a374cf867cfb473859", "6d251e6944b051e04eaa6fb4dbf78465"),
        ("caea65cdbb75e9169ecd22ebe6e54675", "6e29201190152df4ee058139def610bb"),
        ("a2e2fa9baf7d20822ca9f0542f764a41", "c3b44b95d9d2f25670eee9a0de099fa3"),
        ("b6364ac4e1de1e285eaf144a2415f7a0", "5d9b05578fc944b3cf1ccf0e746cd581"),
        ("64cf9c7abc50b888af65f49d521944b2", "f7efc89d5dba578104016ce5ad659c05"),
        ("47d6742eefcc0465dc96355e851b64d9", "0306194f666d183624aa230a8b264ae7"),
        ("3eb39790678c56bee34bbcdeccf6cdb5", "858075d536d79ccee571f7d7204b1f67"),
        ("64110a924f0743d500ccadae72c13427", "35870c6a57e9e92314bcb8087cde72ce"),
        ("18d8126516f8a12ab1a36d9f04d68e51", "6c68e9be5ec41e22c825b7c7affb4363"),
        ("f530357968578480b398a3c251cd1093", "f5df39990fc688f1b07224cc03e86cea"),
        ("da84367f325d42d601b4326964802e8e", "bba071bcb470f8f6586e5d3add18bc66"),
        ("e37b1c6aa2846f6fdb413f238b089f23", "43c9f7e62f5d288bb27aa40ef8fe1ea8"),
        ("6c002b682483e0cabcc731c253be5674", "3580d19cff44f1014a7c966a69059de5"),
        ("143ae8ed6555aba96110ab58893a8ae1", "806da864dd29d48deafbe764f8202aef"),
        ("b69418a85332240dc82492353956ae0c", "a303d940ded8f0baff6f75414cac5243"),
        ("71b5c08a1993e1362e4d0ce9b22b78d5", "c2dabd117f8a3ecabfbb11d12194d9d0"),
        ("e234cdca2606b81f29408d5f6da21206", "fff60a4740086b3b9c56195b98d91a7b"),
        ("13237c49074a3da078dc1d828bb78c6f", "8146a08e2357f0caa30ca8c94d1a0544"),
        ("3071a2a48fe6cbd04f1a129098e308f8", "4b98e06d356deb07ebb824e5713f7be3"),
        ("90f42ec0f68385f2ffc5dfc03a654dce", "7a20a53d460fc9ce0423a7a0764c6cf2"),
        ("febd9a24d8b65c1c787d50a4ed3619a9", "f4a70d8af877f9b02b4c40df57d45b17"),
    ])
]

AESAVS_128_VECTORS: List[KnownAnswerVector] = [
    KnownAnswerVector("vartxt-128-0", _ZERO_128,
                      "80000000000000000000000000000000", "3ad78e726c1ec02b7ebfe92b23d9ec34"),
    KnownAnswerVector("varkey-128-0", "80000000000000000000000000000000",
                      _ZERO_128, "0edd33d3c621e546455bd8ba1418bec8"),
]


def builtin_vectors() -> List[KnownAnswerVector]:
    return FIPS197_VECTORS + GFSBOX_128_VECTORS + KEYSBOX_128_VECTORS + AESAVS_128_VECTORS


def leading_ones(count: int, width_bytes: int = 16) -> bytes:
    """Value with the top ``count`` bits set: 80.., c0.., e0.., ..., ff..ff."""
    bits = width_bytes * 8
    if not 0 <= count <= bits:
        raise ValueError(f"count must be in [0, {bits}]")
    value = ((1 << count) - 1) << (bits - count)
    return value.to_bytes(width_bytes, "big")


def vartxt_128_inputs() -> Iterator[tuple]:
    """(key, plaintext) for the 128 VarTxt vectors: zero key, growing plaintexts."""
    for i in range(1, 129):
        yield bytes(16), leading_ones(i)


def varkey_128_inputs() -> Iterator[tuple]:
    """(key, plaintext) for the 128 VarKey vectors: growing keys, zero plaintext."""
    for i in range(1, 129):
        yield leading_ones(i), bytes(16)


def aesavs_128_inputs() -> Iterator[tuple]:
    """(key, plaintext) for all 284 AESAVS 128-bit vectors: GFSbox, KeySbox, VarTxt, VarKey."""
    for vec in GFSBOX_128_VECTORS + KEYSBOX_128_VECTORS:
        yield vec.key, vec.plaintext
    yield from vartxt_128_inputs()
    yield from varkey_128_inputs()


@dataclass
class KATResult:
    """Outcome of running a batch of known-answer vectors."""
    total_vectors: int
    passed: int
    failed: int
    failed_names: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["is_perfect"] = self.is_perfect
        return d

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] known-answer vectors: {self.passed}/{self.total_vectors} passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def check_vector(vec: KnownAnswerVector) -> bool:
    """Encrypt and decrypt one vector through the raw (no header, no padding) stream path."""
    aes = AES(vec.key)
    ct = aes.encrypt_bytes(vec.plaintext, "ecb", use_padding=False, use_header=False)
    if ct != vec.ciphertext:
        return False
    pt = aes.decrypt_bytes(vec.ciphertext, use_padding=False, use_header=False)
    return pt == vec.plaintext


def run_known_answer_tests(vectors: Optional[List[KnownAnswerVector]] = None) -> KATResult:
    vectors = builtin_vectors() if vectors is None else vectors
    start = time.perf_counter()
    failed_names = [v.name for v in vectors if not check_vector(v)]
    elapsed = time.perf_counter() - start
    return KATResult(
        total_vectors=len(vectors),
        passed=len(vectors) - len(failed_names),
        failed=len(failed_names),
        failed_names=failed_names,
        elapsed_seconds=round(elapsed, 4),
    )
