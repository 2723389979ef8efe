import random

import pytest

from aeslab.cipher.block import (
    add_round_key,
    decrypt_block,
    encrypt_block,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
)
from aeslab.cipher.key_schedule import expand_key


def h(s: str) -> bytes:
    return bytes.fromhex(s.replace(" ", ""))


STATE_ZERO = bytes(16)
STATE_KEY = h("4920e299 a5205261 64696f47 6174756e")
STATE_MIXED = h("3c5a4ed7 5b03418c 652bfc8f 181075ea")
STATE_COLUMNS = h("db135345 f20a225c 01010101 2d26314c")


def test_add_round_key():
    round_keys = expand_key(STATE_KEY)
    state = add_round_key(STATE_ZERO, round_keys[0])
    assert state == STATE_KEY
    state = add_round_key(state, round_keys[1])
    assert state == bytes(a ^ b for a, b in zip(STATE_KEY, h("dabd7d767f9d2f171bf440507a80353e")))


def test_sub_bytes_reference_states():
    assert sub_bytes(STATE_ZERO) == bytes([0x63]) * 16
    assert sub_bytes(STATE_KEY) == h("3bb798ee 06b700ef 43f9a8a0 ef929d9f")
    assert inv_sub_bytes(sub_bytes(STATE_KEY)) == STATE_KEY


def test_shift_rows_reference_states():
    assert shift_rows(STATE_ZERO) == STATE_ZERO
    assert shift_rows(STATE_KEY) == h("49206f6e a5697599 6474e261 61205247")
    assert shift_rows(STATE_MIXED) == h("3c03fcea 5b2b75d7 65104e8c 185a418f")
    assert inv_shift_rows(shift_rows(STATE_MIXED)) == STATE_MIXED


def test_shift_rows_moves_rows_by_index():
    state = bytes(range(16))
    # Row 0 fixed, row 1 left by 1, row 2 left by 2, row 3 left by 3
    assert shift_rows(state) == bytes([0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12, 1, 6, 11])
    assert inv_shift_rows(state) == bytes([0, 13, 10, 7, 4, 1, 14, 11, 8, 5, 2, 15, 12, 9, 6, 3])


def test_mix_columns_reference_state():
    assert mix_columns(STATE_COLUMNS) == h("8e4da1bc 9fdc589d 01010101 4d7ebdf8")
    assert inv_mix_columns(h("8e4da1bc 9fdc589d 01010101 4d7ebdf8")) == STATE_COLUMNS


def test_operations_are_invertible_on_random_states():
    rng = random.Random(1337)
    for _ in range(200):
        s = bytes(rng.randrange(256) for _ in range(16))
        assert inv_sub_bytes(sub_bytes(s)) == s
        assert inv_shift_rows(shift_rows(s)) == s
        assert inv_mix_columns(mix_columns(s)) == s


def test_fips197_appendix_b_block():
    round_keys = expand_key(h("2b7e151628aed2a6abf7158809cf4f3c"))
    pt = h("3243f6a8885a308d313198a2e0370734")
    ct = encrypt_block(pt, round_keys)
    assert ct == h("3925841d02dc09fbdc118597196a0b32")
    assert decrypt_block(ct, round_keys) == pt


@pytest.mark.parametrize("key_len", [16, 24, 32])
def test_encrypt_then_decrypt_is_identity(key_len):
    rng = random.Random(key_len)
    for _ in range(25):
        round_keys = expand_key(bytes(rng.randrange(256) for _ in range(key_len)))
        block = bytes(rng.randrange(256) for _ in range(16))
        assert decrypt_block(encrypt_block(block, round_keys), round_keys) == block


def test_input_is_not_mutated():
    state = bytearray(STATE_KEY)
    sub_bytes(state)
    shift_rows(state)
    mix_columns(state)
    assert bytes(state) == STATE_KEY


@pytest.mark.parametrize("fn", [sub_bytes, inv_sub_bytes, shift_rows, inv_shift_rows, mix_columns, inv_mix_columns])
def test_wrong_state_length_rejected(fn):
    with pytest.raises(ValueError):
        fn(bytes(15))


def test_wrong_block_length_rejected():
    round_keys = expand_key(bytes(16))
    with pytest.raises(ValueError):
        encrypt_block(bytes(17), round_keys)
    with pytest.raises(ValueError):
        decrypt_block(b"", round_keys)
