"""AES building blocks: tables, key schedule, round transform, modes, padding."""

from .block import BLOCK_SIZE, decrypt_block, encrypt_block
from .key_schedule import AES128, AES192, AES256, KeyVariant, RoundKeySet, expand_key, variant_for_key_length
from .modes import CBCMode, ECBMode, Mode, mode_for, new_iv
from .padding import pkcs7_pad, pkcs7_unpad

__all__ = [
    "BLOCK_SIZE",
    "encrypt_block",
    "decrypt_block",
    "AES128",
    "AES192",
    "AES256",
    "KeyVariant",
    "RoundKeySet",
    "expand_key",
    "variant_for_key_length",
    "Mode",
    "ECBMode",
    "CBCMode",
    "mode_for",
    "new_iv",
    "pkcs7_pad",
    "pkcs7_unpad",
]
