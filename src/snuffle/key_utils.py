import os
from typing import List, Tuple, Union

from .core.codec import (
    is_hex,
    word_from_ascii_chars,
    word_from_hex_chars,
    word_from_little_endian_bytes,
    words_to_bytes,
)
from .core.errors import InvalidCounter, InvalidEncoding, InvalidKeyLength, InvalidNonceLength

KEY_SIZES = (16, 32)
NONCE_SIZE = 8
COUNTER_LIMIT = 1 << 64

SIGMA = b"expand 32-byte k"
TAU = b"expand 16-byte k"

KeyInput = Union[str, bytes, bytearray, memoryview]
BYTES_TYPES = (bytes, bytearray, memoryview)


def format_key_size(size_bits):
    # convert key size in bits to bytes
    return size_bits // 8


def generate_key(key_size=256):
    # random 128- or 256-bit key
    key_bytes = format_key_size(int(key_size))
    if key_bytes not in KEY_SIZES:
        raise InvalidKeyLength(f"Invalid key size: {key_size} bits. Must be 128 or 256 bits.")
    return os.urandom(key_bytes)


def generate_nonce():
    # random 64-bit nonce
    return os.urandom(NONCE_SIZE)


def constant_words(key_length: int) -> List[int]:
    # "expand 32-byte k" for long keys, "expand 16-byte k" for short ones
    constants = SIGMA if key_length == 32 else TAU
    return [word_from_little_endian_bytes(constants, i) for i in range(0, 16, 4)]


def _as_bytes(value, label):
    # bytes-like objects only, ints are rejected
    if not isinstance(value, BYTES_TYPES):
        raise TypeError(f"{label} must be str, bytes, bytearray or memoryview, got {type(value).__name__}")
    return bytes(value)


def parse_key(key: KeyInput, hex_key: bool = False) -> Tuple[List[int], int]:
    """
    Decode a key into eight 32-bit words.

    Args:
        key: raw bytes, ASCII text, or hex text when hex_key is set
        hex_key: interpret a str (or bytes) key as hex characters

    Returns:
        (key_words, key_length) where key_length is 16 or 32. A 16-byte key
        is duplicated into both halves of key_words.
    """
    if hex_key:
        if not isinstance(key, str):
            try:
                key = _as_bytes(key, "Key").decode("ascii")
            except UnicodeDecodeError:
                raise InvalidEncoding("Hex key must contain only hex characters") from None

        if len(key) not in (32, 64):
            raise InvalidKeyLength(
                f"Key length has to be 16 or 32 bytes (32 or 64 hex chars, no 0x prefix), got {len(key)} chars"
            )
        if not is_hex(key):
            raise InvalidEncoding("Hex key needs to contain only hex chars (also no 0x prefix)")

        key_words = [word_from_hex_chars(key, i) for i in range(0, len(key), 8)]
        key_length = len(key) // 2

    elif isinstance(key, str):
        if len(key) not in KEY_SIZES:
            raise InvalidKeyLength(f"Key length has to be 16 or 32 bytes, got {len(key)}")
        key_words = [word_from_ascii_chars(key, i) for i in range(0, len(key), 4)]
        key_length = len(key)

    else:
        key = _as_bytes(key, "Key")
        if len(key) not in KEY_SIZES:
            raise InvalidKeyLength(f"Key length has to be 16 or 32 bytes, got {len(key)}")
        key_words = [word_from_little_endian_bytes(key, i) for i in range(0, len(key), 4)]
        key_length = len(key)

    # if short key, copy same key in other half of key words
    if key_length == 16:
        key_words = key_words + key_words

    return key_words, key_length


def parse_nonce(nonce: KeyInput) -> Tuple[int, int]:
    # decode an 8-byte nonce (raw bytes or 16 hex chars) into two words
    if isinstance(nonce, str):
        if len(nonce) != 2 * NONCE_SIZE:
            raise InvalidNonceLength(
                f"Nonce has to be 8 bytes (16 hex chars, no 0x prefix), got {len(nonce)} chars"
            )
        if not is_hex(nonce):
            raise InvalidEncoding("Nonce needs to contain only hex chars (also no 0x prefix)")
        return word_from_hex_chars(nonce, 0), word_from_hex_chars(nonce, 8)

    nonce = _as_bytes(nonce, "Nonce")
    if len(nonce) != NONCE_SIZE:
        raise InvalidNonceLength(f"Nonce has to be 8 bytes, got {len(nonce)}")
    return word_from_little_endian_bytes(nonce, 0), word_from_little_endian_bytes(nonce, 4)


def parse_counter(counter: Union[int, str]) -> int:
    # block counter as int, or 16 hex chars holding 8 little-endian bytes
    if isinstance(counter, str):
        if len(counter) != 16:
            raise InvalidCounter(f"Counter has to be 8 bytes (16 hex chars), got {len(counter)} chars")
        if not is_hex(counter):
            raise InvalidEncoding("Counter needs to contain only hex chars (also no 0x prefix)")
        return int.from_bytes(bytes.fromhex(counter), "little")

    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidCounter(f"Counter must be an int or hex string, got {type(counter).__name__}")
    if not 0 <= counter < COUNTER_LIMIT:
        raise InvalidCounter(f"Counter must be in [0, 2**64), got {counter}")
    return counter


def key_to_bytes(key: KeyInput, hex_key: bool = False) -> bytes:
    # validated raw key bytes (16 or 32), for backends that take bytes
    key_words, key_length = parse_key(key, hex_key)
    return words_to_bytes(key_words)[:key_length]


def nonce_to_bytes(nonce: KeyInput) -> bytes:
    # validated raw nonce bytes (8)
    return words_to_bytes(parse_nonce(nonce))
