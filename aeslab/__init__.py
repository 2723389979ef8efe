"""aeslab: AES-128/192/256 from first principles, with ECB/CBC stream encoding.

Research / education only. Do NOT use in production.
"""

from .cipher.modes import Mode
from .codec import AES, Header
from .errors import AESError, InvalidKeyLength, MalformedCiphertext, StreamIOError

__version__ = "0.1.0"

__all__ = [
    "AES",
    "Header",
    "Mode",
    "AESError",
    "InvalidKeyLength",
    "MalformedCiphertext",
    "StreamIOError",
]
