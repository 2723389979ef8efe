"""AES round operations and the single-block cipher.

Every function takes a 16-byte state (column-major: bytes 0-3 are column 0)
and returns a new ``bytes`` state; nothing is modified in place.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List, Sequence

from .tables import GMUL2, GMUL3, GMUL9, GMUL11, GMUL13, GMUL14, INV_SBOX, SBOX

BLOCK_SIZE = 16  # bytes


def _check_state(data: bytes, name: str) -> None:
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"{name} requires 16-byte state, got {len(data)}")


# Row r lives at positions r, r+4, r+8, r+12. Output column c of row r takes
# the byte from column (c + r) % 4 when shifting left.
_SHIFT_ROWS_MAP: List[int] = []
_INV_SHIFT_ROWS_MAP: List[int] = []
for col in range(4):
    for row in range(4):
        _SHIFT_ROWS_MAP.append(((col + row) % 4) * 4 + row)
        _INV_SHIFT_ROWS_MAP.append(((col - row) % 4) * 4 + row)
del col, row


def add_round_key(state: bytes, round_key: bytes) -> bytes:
    """XOR the state with a 16-byte round key."""
    _check_state(state, "add_round_key")
    _check_state(round_key, "add_round_key")
    return bytes(s ^ k for s, k in zip(state, round_key))


def sub_bytes(state: bytes) -> bytes:
    _check_state(state, "sub_bytes")
    return bytes(SBOX[b] for b in state)


def inv_sub_bytes(state: bytes) -> bytes:
    _check_state(state, "inv_sub_bytes")
    return bytes(INV_SBOX[b] for b in state)


def shift_rows(state: bytes) -> bytes:
    """Rotate row r left by r positions."""
    _check_state(state, "shift_rows")
    return bytes(state[i] for i in _SHIFT_ROWS_MAP)


def inv_shift_rows(state: bytes) -> bytes:
    """Rotate row r right by r positions."""
    _check_state(state, "inv_shift_rows")
    return bytes(state[i] for i in _INV_SHIFT_ROWS_MAP)


def mix_columns(state: bytes) -> bytes:
    """Multiply each column by the MDS matrix [2 3 1 1] (circulant)."""
    _check_state(state, "mix_columns")
    out = bytearray(BLOCK_SIZE)
    for c in range(4):
        i = c * 4
        a0, a1, a2, a3 = state[i], state[i+1], state[i+2], state[i+3]
        out[i+0] = GMUL2[a0] ^ GMUL3[a1] ^ a2 ^ a3
        out[i+1] = a0 ^ GMUL2[a1] ^ GMUL3[a2] ^ a3
        out[i+2] = a0 ^ a1 ^ GMUL2[a2] ^ GMUL3[a3]
        out[i+3] = GMUL3[a0] ^ a1 ^ a2 ^ GMUL2[a3]
    return bytes(out)


def inv_mix_columns(state: bytes) -> bytes:
    """Multiply each column by the inverse matrix [14 11 13 9] (circulant)."""
    _check_state(state, "inv_mix_columns")
    out = bytearray(BLOCK_SIZE)
    for c in range(4):
        i = c * 4
        a0, a1, a2, a3 = state[i], state[i+1], state[i+2], state[i+3]
        out[i+0] = GMUL14[a0] ^ GMUL11[a1] ^ GMUL13[a2] ^ GMUL9[a3]
        out[i+1] = GMUL9[a0] ^ GMUL14[a1] ^ GMUL11[a2] ^ GMUL13[a3]
        out[i+2] = GMUL13[a0] ^ GMUL9[a1] ^ GMUL14[a2] ^ GMUL11[a3]
        out[i+3] = GMUL11[a0] ^ GMUL13[a1] ^ GMUL9[a2] ^ GMUL14[a3]
    return bytes(out)


def encrypt_block(block: bytes, round_keys: Sequence[bytes]) -> bytes:
    """Forward cipher on one 16-byte block."""
    _check_state(block, "encrypt_block")
    rounds = len(round_keys) - 1

    state = add_round_key(block, round_keys[0])
    for r in range(1, rounds):
        state = sub_bytes(state)
        state = shift_rows(state)
        state = mix_columns(state)
        state = add_round_key(state, round_keys[r])

    # Final round omits MixColumns
    state = sub_bytes(state)
    state = shift_rows(state)
    return add_round_key(state, round_keys[rounds])


def decrypt_block(block: bytes, round_keys: Sequence[bytes]) -> bytes:
    """Inverse cipher on one 16-byte block."""
    _check_state(block, "decrypt_block")
    rounds = len(round_keys) - 1

    state = add_round_key(block, round_keys[rounds])
    for r in reversed(range(1, rounds)):
        state = inv_shift_rows(state)
        state = inv_sub_bytes(state)
        state = add_round_key(state, round_keys[r])
        state = inv_mix_columns(state)

    state = inv_shift_rows(state)
    state = inv_sub_bytes(state)
    return add_round_key(state, round_keys[0])
