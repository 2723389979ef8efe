"""Streaming AES encode/decode with a mode header and PKCS#7 padding.

Ciphertext stream layout:

    1 byte    mode tag (0x00 ECB, 0x01 CBC)
    16 bytes  IV, only when the mode is CBC
    N*16      ciphertext blocks of the PKCS#7-padded plaintext

The codec only sees caller-supplied binary streams (anything with ``read`` /
``write``). It never opens files.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional, Union

from .cipher.block import BLOCK_SIZE, decrypt_block, encrypt_block
from .cipher.key_schedule import RoundKeySet, expand_key, variant_for_key_length
from .cipher.modes import IV_SIZE, Mode, mode_for
from .cipher.padding import pkcs7_pad, pkcs7_unpad
from .errors import MalformedCiphertext, StreamIOError

logger = logging.getLogger(__name__)

ModeLike = Union[Mode, int, str]


def _as_mode(mode: ModeLike) -> Mode:
    if isinstance(mode, str):
        return Mode.from_name(mode)
    return Mode(mode)


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read up to n bytes, looping over short reads; fewer than n means EOF."""
    buf = b""
    while len(buf) < n:
        try:
            chunk = stream.read(n - len(buf))
        except OSError as e:
            raise StreamIOError(f"read failed: {e}") from e
        if not chunk:
            break
        buf += chunk
    return buf


def _write(stream: BinaryIO, data: bytes) -> None:
    try:
        stream.write(data)
    except OSError as e:
        raise StreamIOError(f"write failed: {e}") from e


@dataclass(frozen=True)
class Header:
    mode: Mode
    iv: Optional[bytes] = None

    def __post_init__(self):
        if self.mode.needs_iv and (self.iv is None or len(self.iv) != IV_SIZE):
            raise ValueError(f"{self.mode.name} header needs a {IV_SIZE}-byte IV")
        if not self.mode.needs_iv and self.iv is not None:
            raise ValueError(f"{self.mode.name} header carries no IV")

    def to_bytes(self) -> bytes:
        return bytes([self.mode.value]) + (self.iv or b"")

    @classmethod
    def read(cls, stream: BinaryIO) -> "Header":
        tag = _read_exact(stream, 1)
        if not tag:
            raise MalformedCiphertext("ciphertext is empty, missing mode header")
        try:
            mode = Mode(tag[0])
        except ValueError:
            raise MalformedCiphertext(f"unknown mode tag in header: 0x{tag[0]:02x}") from None
        if not mode.needs_iv:
            return cls(mode=mode)
        iv = _read_exact(stream, IV_SIZE)
        if len(iv) != IV_SIZE:
            raise MalformedCiphertext(f"truncated IV in header: {len(iv)} of {IV_SIZE} bytes")
        return cls(mode=mode, iv=iv)


class AES:
    """AES-128/192/256 over byte streams.

    The key is expanded once at construction; the round keys are read-only
    afterwards and shared by every call on this instance.
    """

    def __init__(self, key: bytes, *, workers: int = 1):
        self.variant = variant_for_key_length(len(key))
        self._round_keys: RoundKeySet = expand_key(key)
        self.workers = max(1, int(workers))

    @property
    def round_keys(self) -> RoundKeySet:
        return self._round_keys

    def encrypt_block(self, plaintext_block: bytes) -> bytes:
        return encrypt_block(plaintext_block, self._round_keys)

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:
        return decrypt_block(ciphertext_block, self._round_keys)

    # -- streams -----------------------------------------------------------

    def _plaintext_blocks(self, stream: BinaryIO, use_padding: bool) -> Iterator[bytes]:
        while True:
            chunk = _read_exact(stream, BLOCK_SIZE)
            if len(chunk) == BLOCK_SIZE:
                yield chunk
                continue
            # Short (or empty) chunk: end of input
            if use_padding:
                yield pkcs7_pad(chunk)
            elif chunk:
                raise ValueError(
                    f"unpadded plaintext must be a multiple of {BLOCK_SIZE} bytes"
                )
            return

    def encrypt(
        self,
        plaintext: BinaryIO,
        ciphertext: BinaryIO,
        mode: ModeLike = Mode.CBC,
        *,
        use_padding: bool = True,
        use_header: bool = True,
    ) -> int:
        """Encrypt ``plaintext`` into ``ciphertext``; returns bytes written.

        CBC always draws a fresh random IV and stores it in the header, so
        headerless CBC is rejected. ``use_padding=False`` and
        ``use_header=False`` exist for fixed-length reference vectors only.
        Nothing is written unless the whole input has been read and encrypted.
        """
        mode = _as_mode(mode)
        if mode.needs_iv and not use_header:
            raise ValueError("headerless CBC encryption would discard the IV")
        controller = mode_for(mode, workers=self.workers)
        logger.debug("Encrypting with %s in %s mode", self.variant.name, mode.name)

        out = io.BytesIO()
        if use_header:
            out.write(Header(mode=mode, iv=controller.iv).to_bytes())

        count = 0
        blocks = self._plaintext_blocks(plaintext, use_padding)
        for block in controller.encrypt_blocks(blocks, self._round_keys):
            out.write(block)
            count += 1
        logger.debug("Encrypted %d block(s)", count)

        data = out.getvalue()
        _write(ciphertext, data)
        return len(data)

    def _ciphertext_blocks(self, stream: BinaryIO) -> List[bytes]:
        blocks: List[bytes] = []
        while True:
            chunk = _read_exact(stream, BLOCK_SIZE)
            if not chunk:
                break
            if len(chunk) != BLOCK_SIZE:
                raise MalformedCiphertext(
                    f"ciphertext length is not a multiple of {BLOCK_SIZE} bytes"
                )
            blocks.append(chunk)
        if not blocks:
            raise MalformedCiphertext("ciphertext contains no blocks")
        return blocks

    def decrypt(
        self,
        ciphertext: BinaryIO,
        plaintext: BinaryIO,
        use_padding: bool = True,
        use_header: bool = True,
        *,
        mode: ModeLike = Mode.ECB,
        iv: Optional[bytes] = None,
    ) -> int:
        """Decrypt ``ciphertext`` into ``plaintext``; returns bytes written.

        Nothing is written unless the whole stream decrypts and its padding
        checks out. ``mode`` and ``iv`` are only used when ``use_header`` is
        False (raw reference vectors).
        """
        if use_header:
            header = Header.read(ciphertext)
            mode, iv = header.mode, header.iv
        else:
            mode = _as_mode(mode)
            if mode.needs_iv and iv is None:
                raise ValueError("headerless CBC decryption needs an explicit IV")
        controller = mode_for(mode, iv, workers=self.workers)

        blocks = self._ciphertext_blocks(ciphertext)
        logger.debug(
            "Decrypting %d block(s) with %s in %s mode",
            len(blocks), self.variant.name, mode.name,
        )
        data = b"".join(controller.decrypt_blocks(blocks, self._round_keys))
        if use_padding:
            data = pkcs7_unpad(data)

        _write(plaintext, data)
        return len(data)

    # -- in-memory helpers -------------------------------------------------

    def encrypt_bytes(self, data: bytes, mode: ModeLike = Mode.CBC, **kwargs) -> bytes:
        out = io.BytesIO()
        self.encrypt(io.BytesIO(data), out, mode, **kwargs)
        return out.getvalue()

    def decrypt_bytes(self, data: bytes, **kwargs) -> bytes:
        out = io.BytesIO()
        self.decrypt(io.BytesIO(data), out, **kwargs)
        return out.getvalue()
