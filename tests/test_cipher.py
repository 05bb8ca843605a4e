"""
Snuffle - Cipher State Machine Tests
"""

import pytest
from Crypto.Cipher import ChaCha20 as CryptoChaCha20
from Crypto.Cipher import Salsa20 as CryptoSalsa20

from snuffle import (
    CounterExhausted,
    InvalidCounter,
    InvalidEncoding,
    InvalidKeyLength,
    InvalidNonceLength,
    SnuffleCipher,
    chacha20,
    new,
    salsa20,
)
from snuffle.cipher import CONSTRUCTED, NONCE_SET, STREAMING

# RFC 8439 appendix A.1, test vector 1 (all-zero key, nonce and counter)
CHACHA20_ZERO_BLOCK = bytes.fromhex(
    "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
    "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
)

# ECRYPT eSTREAM Salsa20/20 set 1, vector 0 (key 0x80 then zeros, IV 0), stream[0..63]
SALSA20_SET1_VECTOR0_256 = bytes.fromhex(
    "E3BE8FDD8BECA2E3EA8EF9475B29A6E7003951E1097A5C38D23B7A5FAD9F6844"
    "B22C97559E2723C7CBBD3FE4FC8D9A0744652A83E72A9C461876AF4D7EF1A117"
)
SALSA20_SET1_VECTOR0_128 = bytes.fromhex(
    "4DFA5E481DA23EA09A31022050859936DA52FCEE218005164F267CB65F5CFD7F"
    "2B4F97E0FF16924A52DF269515110A07F9E460BC65EF95DA58F740B7D1DBB0AA"
)

SIGMA_WORDS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)
TAU_WORDS = (0x61707865, 0x3120646E, 0x79622D36, 0x6B206574)


def _library_keystream(variant, key, nonce, length, counter=0):
    if variant == "chacha20":
        cipher = CryptoChaCha20.new(key=key, nonce=nonce)
        cipher.seek(counter * 64)
    else:
        cipher = CryptoSalsa20.new(key=key, nonce=nonce)
        cipher.encrypt(bytes(counter * 64))
    return cipher.encrypt(bytes(length))


# construction

def test_salsa20_layout(key32, nonce):
    cipher = salsa20(key32)
    cipher.set_nonce(nonce)
    cipher.set_counter(0x0000000200000001)
    rows = cipher.rows()

    assert (rows[0][0], rows[1][1], rows[2][2], rows[3][3]) == SIGMA_WORDS
    assert rows[0][1:] == (0x04030201, 0x08070605, 0x0C0B0A09)
    assert rows[1][0] == 0x100F0E0D
    assert rows[2][3] == 0x14131211
    assert rows[3][:3] == (0x18171615, 0x1C1B1A19, 0x201F1E1D)
    assert rows[1][2:] == (0x04030201, 0x08070605)
    assert rows[2][:2] == (1, 2)


def test_chacha20_layout(key32, nonce):
    cipher = chacha20(key32)
    cipher.set_nonce(nonce)
    cipher.set_counter(0x0000000200000001)
    rows = cipher.rows()

    assert rows[0] == SIGMA_WORDS
    assert rows[1] == (0x04030201, 0x08070605, 0x0C0B0A09, 0x100F0E0D)
    assert rows[2] == (0x14131211, 0x18171615, 0x1C1B1A19, 0x201F1E1D)
    assert rows[3] == (1, 2, 0x04030201, 0x08070605)


def test_short_key_is_duplicated_with_tau(key16):
    cipher = chacha20(key16)
    rows = cipher.rows()
    assert rows[0] == TAU_WORDS
    assert rows[1] == rows[2]
    assert cipher.key_length == 16


@pytest.mark.parametrize("variant", ["salsa20", "chacha20"])
def test_key_forms_agree(variant):
    text_key = "0123456789abcdef0123456789abcdef"
    from_text = new(text_key, variant)
    from_bytes = new(text_key.encode("ascii"), variant)
    from_hex = new(text_key.encode("ascii").hex(), variant, hex_key=True)
    blocks = {c.generate_block() for c in (from_text, from_bytes, from_hex)}
    assert len(blocks) == 1


def test_hex_key_uppercase(key32):
    assert new(key32.hex().upper(), hex_key=True).generate_block() == new(key32).generate_block()


def test_starts_with_zero_nonce_and_counter(key32):
    cipher = SnuffleCipher(key32)
    assert cipher.counter == 0
    assert cipher.nonce == bytes(8)
    assert cipher.phase == CONSTRUCTED
    assert cipher.name == "salsa20"


# known answers

def test_salsa20_zero_key_block():
    cipher = salsa20(bytes(32))
    assert cipher.generate_block() == _library_keystream("salsa20", bytes(32), bytes(8), 64)


def test_salsa20_published_vector_256():
    cipher = salsa20(b"\x80" + bytes(31))
    cipher.set_nonce(bytes(8))
    assert cipher.generate_block() == SALSA20_SET1_VECTOR0_256


def test_salsa20_published_vector_128():
    cipher = salsa20(b"\x80" + bytes(15))
    cipher.set_nonce("0000000000000000")
    assert cipher.generate_block() == SALSA20_SET1_VECTOR0_128


def test_chacha20_zero_key_block():
    cipher = chacha20(bytes(32))
    assert cipher.generate_block() == CHACHA20_ZERO_BLOCK


@pytest.mark.parametrize("variant", ["salsa20", "chacha20"])
def test_blocks_match_pycryptodome(variant, key32, nonce):
    cipher = new(key32, variant)
    cipher.set_nonce(nonce)
    stream = b"".join(cipher.generate_block() for _ in range(4))
    assert stream == _library_keystream(variant, key32, nonce, 256)


def test_salsa20_short_key_matches_pycryptodome(key16, nonce):
    cipher = salsa20(key16)
    cipher.set_nonce(nonce)
    assert cipher.generate_block() == _library_keystream("salsa20", key16, nonce, 64)


def test_chacha20_counter_carry_matches_pycryptodome(key32, nonce):
    cipher = chacha20(key32)
    cipher.set_nonce(nonce)
    cipher.set_counter(0xFFFFFFFF)
    blocks = cipher.generate_block() + cipher.generate_block()

    assert cipher.counter == 0x100000001
    assert cipher.rows()[3][:2] == (1, 1)
    assert blocks == _library_keystream("chacha20", key32, nonce, 128, counter=0xFFFFFFFF)


def test_salsa20_counter_carry(key32):
    cipher = salsa20(key32)
    cipher.set_counter(0xFFFFFFFF)
    cipher.generate_block()
    assert cipher.rows()[2][:2] == (0, 1)
    assert cipher.counter == 1 << 32


# nonce / counter handling

@pytest.mark.parametrize("variant", ["salsa20", "chacha20"])
def test_set_nonce_resets_counter(variant, key32, nonce):
    cipher = new(key32, variant)
    cipher.set_nonce(nonce)
    first = cipher.generate_block()
    cipher.generate_block()
    assert cipher.counter == 2

    cipher.set_nonce(nonce)
    assert cipher.counter == 0
    assert cipher.phase == NONCE_SET
    assert cipher.generate_block() == first

    cipher.set_counter(0)
    assert cipher.generate_block() == first


def test_set_counter_keeps_nonce(key32, nonce):
    cipher = chacha20(key32)
    cipher.set_nonce(nonce)
    cipher.set_counter(12345)
    assert cipher.nonce == nonce
    assert cipher.counter == 12345
    assert cipher.phase == STREAMING


def test_set_counter_hex(key32):
    cipher = salsa20(key32)
    cipher.set_counter("0500000000000000")
    assert cipher.counter == 5


def test_nonce_hex_equals_bytes(key32, nonce):
    a = salsa20(key32)
    a.set_nonce(nonce.hex())
    b = salsa20(key32)
    b.set_nonce(nonce)
    assert a.nonce == b.nonce == nonce
    assert a.generate_block() == b.generate_block()


@pytest.mark.parametrize("variant", ["salsa20", "chacha20"])
@pytest.mark.parametrize("skip", [0, 1, 5])
def test_skip_blocks_matches_sequential(variant, skip, key32, nonce):
    sequential = new(key32, variant)
    sequential.set_nonce(nonce)
    for _ in range(skip):
        sequential.generate_block()
    expected = sequential.generate_block()

    seeking = new(key32, variant)
    seeking.set_nonce(nonce)
    seeking.skip_blocks(skip)
    assert seeking.generate_block() == expected


def test_skip_blocks_rejects_negative(key32):
    with pytest.raises(InvalidCounter):
        salsa20(key32).skip_blocks(-1)


def test_phases(key32, nonce):
    cipher = salsa20(key32)
    assert cipher.phase == CONSTRUCTED
    cipher.set_nonce(nonce)
    assert cipher.phase == NONCE_SET
    cipher.generate_block()
    assert cipher.phase == STREAMING


# counter exhaustion

def test_counter_exhausted_after_last_block(key32):
    cipher = chacha20(key32)
    cipher.set_counter(2 ** 64 - 1)
    cipher.generate_block()
    assert cipher.counter == 2 ** 64

    with pytest.raises(CounterExhausted):
        cipher.generate_block()


def test_skip_past_end_is_rejected_without_mutation(key32):
    cipher = salsa20(key32)
    cipher.set_counter(2 ** 64 - 2)
    with pytest.raises(CounterExhausted):
        cipher.skip_blocks(3)
    assert cipher.counter == 2 ** 64 - 2

    cipher.skip_blocks(2)
    with pytest.raises(CounterExhausted):
        cipher.generate_block()


def test_set_nonce_recovers_from_exhaustion(key32, nonce):
    cipher = salsa20(key32)
    cipher.set_counter(2 ** 64 - 1)
    cipher.generate_block()
    cipher.set_nonce(nonce)
    assert cipher.counter == 0
    cipher.generate_block()


@pytest.mark.parametrize("value", [-1, 2 ** 64, 1.5, True, "00"])
def test_set_counter_rejects_out_of_range(key32, value):
    with pytest.raises(InvalidCounter):
        salsa20(key32).set_counter(value)


# validation

@pytest.mark.parametrize("key", [bytes(15), bytes(17), bytes(24), b"", "a" * 15, "a" * 33])
def test_invalid_key_length(key):
    with pytest.raises(InvalidKeyLength):
        SnuffleCipher(key)


@pytest.mark.parametrize("key", ["0" * 30, "0" * 63, "0" * 16])
def test_invalid_hex_key_length(key):
    with pytest.raises(InvalidKeyLength):
        SnuffleCipher(key, hex_key=True)


def test_invalid_hex_key_encoding():
    with pytest.raises(InvalidEncoding):
        SnuffleCipher("g" * 64, hex_key=True)
    with pytest.raises(InvalidEncoding):
        SnuffleCipher("0x" + "0" * 62, hex_key=True)


def test_non_ascii_key_text():
    with pytest.raises(InvalidEncoding):
        SnuffleCipher("é" * 16)


@pytest.mark.parametrize("nonce", ["0" * 17, "0" * 15, bytes(7), bytes(9)])
def test_invalid_nonce_length(key32, nonce):
    with pytest.raises(InvalidNonceLength):
        salsa20(key32).set_nonce(nonce)


def test_invalid_nonce_encoding(key32):
    with pytest.raises(InvalidEncoding):
        salsa20(key32).set_nonce("000000000000000g")


def test_failed_set_nonce_leaves_state(key32, nonce):
    cipher = chacha20(key32)
    cipher.set_nonce(nonce)
    cipher.generate_block()
    epoch = cipher.epoch

    with pytest.raises(InvalidEncoding):
        cipher.set_nonce("g" * 16)

    assert cipher.nonce == nonce
    assert cipher.counter == 1
    assert cipher.epoch == epoch


def test_unknown_variant(key32):
    with pytest.raises(ValueError):
        SnuffleCipher(key32, variant="rc4")


def test_format_matrix(key32):
    text = salsa20(key32).format_matrix("matrix:")
    lines = text.splitlines()
    assert lines[0] == "matrix:"
    assert lines[1].startswith("61707865")
    assert len(lines) == 5


@pytest.mark.parametrize("key", [32, 16, 0])
def test_int_key_is_rejected(key):
    with pytest.raises(TypeError):
        SnuffleCipher(key)
    with pytest.raises(TypeError):
        SnuffleCipher(key, hex_key=True)


@pytest.mark.parametrize("bad_nonce", [8, 0, 2 ** 63, 2 ** 40, None])
def test_int_nonce_is_rejected(key32, nonce, bad_nonce):
    cipher = salsa20(key32)
    cipher.set_nonce(nonce)
    cipher.generate_block()

    with pytest.raises(TypeError):
        cipher.set_nonce(bad_nonce)
    assert cipher.nonce == nonce
    assert cipher.counter == 1
