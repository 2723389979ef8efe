"""ECB and CBC chaining over the single-block transform.

One class per mode; both share ``encrypt_block`` / ``decrypt_block``.
ECB (both directions) and CBC decryption have no dependency between blocks and
may run on a fixed thread pool; output order is always the input order.
CBC encryption is inherently sequential.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, ClassVar, Iterable, Iterator, List, Optional, Sequence, TypeVar

from .block import BLOCK_SIZE, decrypt_block, encrypt_block
from .key_schedule import RoundKeySet

IV_SIZE = BLOCK_SIZE

T = TypeVar("T")


class Mode(IntEnum):
    """Mode of operation; the value is the header tag byte."""

    ECB = 0x00
    CBC = 0x01

    @property
    def needs_iv(self) -> bool:
        return self is Mode.CBC

    @classmethod
    def from_name(cls, name: str) -> "Mode":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown mode: {name!r} (expected 'ecb' or 'cbc')") from None


def new_iv() -> bytes:
    """Fresh random IV from the OS CSPRNG."""
    return secrets.token_bytes(IV_SIZE)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError("xor_bytes length mismatch")
    return bytes(x ^ y for x, y in zip(a, b))


def _map_ordered(fn: Callable[[T], bytes], items: Iterable[T], workers: int) -> Iterator[bytes]:
    if workers <= 1:
        return map(fn, items)
    # Executor.map yields results in submission order
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return iter(list(pool.map(fn, items)))


class BlockMode(ABC):
    mode: ClassVar[Mode]
    iv: Optional[bytes] = None

    @abstractmethod
    def encrypt_blocks(self, blocks: Iterable[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        pass

    @abstractmethod
    def decrypt_blocks(self, blocks: Sequence[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        pass


@dataclass
class ECBMode(BlockMode):
    """Electronic codebook: every block is transformed on its own.

    Identical plaintext blocks give identical ciphertext blocks under one key.
    That leak is a property of the mode, not a bug.
    """

    mode: ClassVar[Mode] = Mode.ECB
    workers: int = 1

    def encrypt_blocks(self, blocks: Iterable[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        return _map_ordered(lambda b: encrypt_block(b, round_keys), blocks, self.workers)

    def decrypt_blocks(self, blocks: Sequence[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        return _map_ordered(lambda b: decrypt_block(b, round_keys), blocks, self.workers)


@dataclass
class CBCMode(BlockMode):
    """Cipher block chaining, seeded with a 16-byte IV.

    The IV must be fresh for every encryption under a key; reusing it voids the
    chaining guarantee.
    """

    mode: ClassVar[Mode] = Mode.CBC
    iv: bytes = b""
    workers: int = 1

    def __post_init__(self):
        if len(self.iv) != IV_SIZE:
            raise ValueError(f"CBC IV must be {IV_SIZE} bytes, got {len(self.iv)}")
        self.iv = bytes(self.iv)

    def encrypt_blocks(self, blocks: Iterable[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        chain = self.iv
        for block in blocks:
            chain = encrypt_block(xor_bytes(block, chain), round_keys)
            yield chain

    def decrypt_blocks(self, blocks: Sequence[bytes], round_keys: RoundKeySet) -> Iterator[bytes]:
        blocks = list(blocks)
        previous: List[bytes] = [self.iv] + blocks[:-1]

        def _one(pair):
            prev, cur = pair
            return xor_bytes(decrypt_block(cur, round_keys), prev)

        return _map_ordered(_one, zip(previous, blocks), self.workers)


def mode_for(mode: Mode, iv: Optional[bytes] = None, *, workers: int = 1) -> BlockMode:
    """Build the controller for ``mode``; CBC without an IV gets a fresh one."""
    mode = Mode(mode)
    if mode is Mode.ECB:
        return ECBMode(workers=workers)
    return CBCMode(iv=iv if iv is not None else new_iv(), workers=workers)
