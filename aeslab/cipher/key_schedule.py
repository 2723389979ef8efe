"""AES key expansion (FIPS-197 section 5.2).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..errors import InvalidKeyLength
from .tables import RC, SBOX

# Nr + 1 sixteen-byte round keys, column-major like the state.
RoundKeySet = Tuple[bytes, ...]


@dataclass(frozen=True)
class KeyVariant:
    name: str
    key_bytes: int
    nk: int       # 32-bit words in the key
    rounds: int   # Nr

    @property
    def num_round_keys(self) -> int:
        return self.rounds + 1


AES128 = KeyVariant(name="AES-128", key_bytes=16, nk=4, rounds=10)
AES192 = KeyVariant(name="AES-192", key_bytes=24, nk=6, rounds=12)
AES256 = KeyVariant(name="AES-256", key_bytes=32, nk=8, rounds=14)

VARIANTS: Dict[int, KeyVariant] = {v.key_bytes: v for v in (AES128, AES192, AES256)}


def variant_for_key_length(length: int) -> KeyVariant:
    try:
        return VARIANTS[length]
    except KeyError:
        raise InvalidKeyLength(length) from None


def rot_word(word: bytes) -> bytes:
    """Rotate a 4-byte word left by one byte."""
    return word[1:] + word[:1]


def sub_word(word: bytes) -> bytes:
    """Apply the S-box to each byte of a 4-byte word."""
    return bytes(SBOX[b] for b in word)


def expand_key(key: bytes) -> RoundKeySet:
    """Expand a 16/24/32-byte key into Nr+1 round keys.

    Raises InvalidKeyLength for any other length; nothing is produced in that case.
    """
    key = bytes(key)
    variant = variant_for_key_length(len(key))
    nk = variant.nk
    total_words = 4 * variant.num_round_keys

    words: List[bytes] = [key[4 * i:4 * i + 4] for i in range(nk)]
    for i in range(nk, total_words):
        temp = words[i - 1]
        if i % nk == 0:
            temp = sub_word(rot_word(temp))
            temp = bytes([temp[0] ^ RC[i // nk - 1]]) + temp[1:]
        elif nk == 8 and i % nk == 4:
            # AES-256 only: extra substitution halfway through each key block
            temp = sub_word(temp)
        prev = words[i - nk]
        words.append(bytes(a ^ b for a, b in zip(prev, temp)))

    return tuple(
        b"".join(words[4 * r:4 * r + 4]) for r in range(variant.num_round_keys)
    )
