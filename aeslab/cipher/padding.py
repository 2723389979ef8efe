"""PKCS#7 padding for 16-byte blocks."""
from __future__ import annotations

from ..errors import MalformedCiphertext
from .block import BLOCK_SIZE


def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Append 1..block_size bytes of value k; aligned input gains a full block."""
    pad_len = block_size - (len(data) % block_size)
    return bytes(data) + bytes([pad_len]) * pad_len


def pkcs7_unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    if not data or len(data) % block_size != 0:
        raise MalformedCiphertext("padded data must be a positive multiple of the block size")
    pad_len = data[-1]
    if pad_len < 1 or pad_len > block_size:
        raise MalformedCiphertext(f"bad padding length: {pad_len}")
    if data[-pad_len:] != bytes([pad_len]) * pad_len:
        raise MalformedCiphertext("bad padding bytes")
    return bytes(data[:-pad_len])
