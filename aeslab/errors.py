"""Error kinds raised by the cipher core and the stream codec.

Every error is raised synchronously to the caller of ``AES.encrypt`` /
``AES.decrypt``. Treat any of them as "no usable output produced".
"""
from __future__ import annotations


class AESError(Exception):
    """Base class for all aeslab errors."""

    kind: str = "aes_error"


class InvalidKeyLength(AESError, ValueError):
    """Key is not 16, 24 or 32 bytes long."""

    kind = "invalid_key_length"

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"AES key must be 16, 24 or 32 bytes, got {length}")


class MalformedCiphertext(AESError, ValueError):
    """Ciphertext has a bad header, a bad length, or bad PKCS7 padding."""

    kind = "malformed_ciphertext"


class StreamIOError(AESError, OSError):
    """A caller-supplied stream failed to read or write."""

    kind = "stream_io_error"
