import pytest

from aeslab.cipher.padding import pkcs7_pad, pkcs7_unpad
from aeslab.errors import MalformedCiphertext


def test_empty_input_pads_to_full_block():
    assert pkcs7_pad(b"") == bytes([0x10]) * 16


def test_aligned_input_gains_full_block():
    data = b"A" * 32
    padded = pkcs7_pad(data)
    assert len(padded) == 48
    assert padded[32:] == bytes([0x10]) * 16


@pytest.mark.parametrize("length", range(1, 16))
def test_short_input_padding_value(length):
    padded = pkcs7_pad(b"x" * length)
    k = 16 - length
    assert len(padded) == 16
    assert padded[length:] == bytes([k]) * k
    assert pkcs7_unpad(padded) == b"x" * length


def test_unpad_full_padding_block():
    assert pkcs7_unpad(b"B" * 16 + bytes([16]) * 16) == b"B" * 16


@pytest.mark.parametrize("block", [
    b"A" * 15 + b"\x00",                  # k = 0
    b"A" * 15 + b"\x11",                  # k = 17
    b"A" * 15 + b"\xff",
    b"A" * 13 + b"\x01\x02\x03",          # inconsistent padding bytes
    b"A" * 12 + b"\x04\x04\x05\x04",
])
def test_unpad_rejects_bad_padding(block):
    with pytest.raises(MalformedCiphertext):
        pkcs7_unpad(block)


@pytest.mark.parametrize("data", [b"", b"\x01" * 15, b"\x01" * 17])
def test_unpad_rejects_bad_length(data):
    with pytest.raises(MalformedCiphertext):
        pkcs7_unpad(data)
