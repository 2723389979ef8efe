import pytest

from aeslab.cipher.key_schedule import (
    AES128,
    AES192,
    AES256,
    expand_key,
    rot_word,
    sub_word,
    variant_for_key_length,
)
from aeslab.errors import InvalidKeyLength


# ---------------------------------------------------------------------------
# AES-128: full round-key sequences for four reference keys
# ---------------------------------------------------------------------------

ROUND_KEYS_128 = {
    # all-zero key
    "00000000000000000000000000000000": [
        "00000000000000000000000000000000",
        "62636363626363636263636362636363",
        "9b9898c9f9fbfbaa9b9898c9f9fbfbaa",
        "90973450696ccffaf2f457330b0fac99",
        "ee06da7b876a1581759e42b27e91ee2b",
        "7f2e2b88f8443e098dda7cbbf34b9290",
        "ec614b851425758c99ff09376ab49ba7",
        "217517873550620bacaf6b3cc61bf09b",
        "0ef903333ba9613897060a04511dfa9f",
        "b1d4d8e28a7db9da1d7bb3de4c664941",
        "b4ef5bcb3e92e21123e951cf6f8f188e",
    ],
    # all-0xff key
    "ffffffffffffffffffffffffffffffff": [
        "ffffffffffffffffffffffffffffffff",
        "e8e9e9e917161616e8e9e9e917161616",
        "adaeae19bab8b80f525151e6454747f0",
        "090e2277b3b69a78e1e7cb9ea4a08c6e",
        "e16abd3e52dc2746b33becd8179b60b6",
        "e5baf3ceb766d488045d385013c658e6",
        "71d07db3c6b6a93bc2eb916bd12dc98d",
        "e90d208d2fbb89b6ed5018dd3c7dd150",
        "96337366b988fad054d8e20d68a5335d",
        "8bf03f233278c5f366a027fe0e0514a3",
        "d60a3588e472f07b82d2d7858cd7c326",
    ],
    # sequential bytes
    "000102030405060708090a0b0c0d0e0f": [
        "000102030405060708090a0b0c0d0e0f",
        "d6aa74fdd2af72fadaa678f1d6ab76fe",
        "b692cf0b643dbdf1be9bc5006830b3fe",
        "b6ff744ed2c2c9bf6c590cbf0469bf41",
        "47f7f7bc95353e03f96c32bcfd058dfd",
        "3caaa3e8a99f9deb50f3af57adf622aa",
        "5e390f7df7a69296a7553dc10aa31f6b",
        "14f9701ae35fe28c440adf4d4ea9c026",
        "47438735a41c65b9e016baf4aebf7ad2",
        "549932d1f08557681093ed9cbe2c974e",
        "13111d7fe3944a17f307a78b4d2b30c5",
    ],
    # ASCII-derived key: "I \u2665 RadioGatun" encoded as UTF-8
    "4920e299a520526164696f476174756e": [
        "4920e299a520526164696f476174756e",
        "dabd7d767f9d2f171bf440507a80353e",
        "152bcfac6ab6e0bb7142a0eb0bc295d5",
        "3401cc875eb72c3c2ff58cd724371902",
        "a6d5bbb1f862978dd7971b5af3a00258",
        "56a2d1bcaec0463179575d6b8af75f33",
        "1e6d12c2b0ad54f3c9fa0998430d56ab",
        "89dc70d83971242bf08b2db3b3867b18",
        "4dfdddb5748cf99e8407d42d3781af35",
        "5a844b2f2e08b2b1aa0f669c9d8ec9a9",
        "755998715b512ac0f15e4c5c6cd085f5",
    ],
}


@pytest.mark.parametrize("key_hex", sorted(ROUND_KEYS_128))
def test_aes128_round_keys_match_reference(key_hex):
    round_keys = expand_key(bytes.fromhex(key_hex))
    assert [rk.hex() for rk in round_keys] == ROUND_KEYS_128[key_hex]


def test_fips197_appendix_a1_last_round_key():
    round_keys = expand_key(bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"))
    assert round_keys[1].hex() == "a0fafe1788542cb123a339392a6c7605"
    assert round_keys[10].hex() == "d014f9a8c9ee2589e13f0cc8b6630ca6"


# ---------------------------------------------------------------------------
# AES-192 / AES-256
# ---------------------------------------------------------------------------

def test_fips197_appendix_a2_last_words():
    key = bytes.fromhex("8e73b0f7da0e6452c810f32b809079e562f8ead2522c6b7b")
    round_keys = expand_key(key)
    assert len(round_keys) == 13
    assert round_keys[0] == key[:16]
    assert round_keys[12].hex() == "e98ba06f448c773c8ecc720401002202"


def test_fips197_appendix_a3_last_words():
    key = bytes.fromhex("603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4")
    round_keys = expand_key(key)
    assert len(round_keys) == 15
    assert round_keys[0] + round_keys[1] == key
    assert round_keys[14].hex() == "fe4890d1e6188d0b046df344706c631e"


def test_sequential_keys_final_round_key():
    # FIPS-197 Appendix C.2 / C.3 round[Nr].k_sch
    k192 = bytes(range(24))
    k256 = bytes(range(32))
    assert expand_key(k192)[12].hex() == "a4970a331a78dc09c418c271e3a41d5d"
    assert expand_key(k256)[14].hex() == "24fc79ccbf0979e9371ac23c6d68de36"


def test_zero_key_192_first_round_keys():
    round_keys = expand_key(bytes(24))
    assert round_keys[0] == bytes(16)
    assert round_keys[1].hex() == "00000000000000006263636362636363"
    assert round_keys[2].hex() == "62636363626363636263636362636363"
    assert round_keys[3].hex()[:8] == "9b9898c9"


def test_zero_key_256_extra_subword():
    round_keys = expand_key(bytes(32))
    assert round_keys[0] == bytes(16)
    assert round_keys[1] == bytes(16)
    assert round_keys[2].hex() == "62636363626363636263636362636363"
    # i mod Nk == 4: SubWord without rotation or round constant
    assert round_keys[3].hex() == "aafbfbfbaafbfbfbaafbfbfbaafbfbfb"


@pytest.mark.parametrize("variant", [AES128, AES192, AES256])
def test_round_key_count(variant):
    round_keys = expand_key(bytes(variant.key_bytes))
    assert len(round_keys) == variant.rounds + 1
    assert all(len(rk) == 16 for rk in round_keys)
    assert isinstance(round_keys, tuple)


# ---------------------------------------------------------------------------
# Helpers and errors
# ---------------------------------------------------------------------------

def test_rot_word_and_sub_word():
    assert rot_word(bytes.fromhex("09cf4f3c")) == bytes.fromhex("cf4f3c09")
    assert sub_word(bytes.fromhex("cf4f3c09")) == bytes.fromhex("8a84eb01")


def test_variant_lookup():
    assert variant_for_key_length(16) is AES128
    assert variant_for_key_length(24).rounds == 12
    assert variant_for_key_length(32).nk == 8


@pytest.mark.parametrize("length", [0, 1, 15, 17, 20, 31, 33, 64])
def test_invalid_key_length_rejected(length):
    with pytest.raises(InvalidKeyLength) as exc_info:
        expand_key(bytes(length))
    assert exc_info.value.length == length
    assert isinstance(exc_info.value, ValueError)
