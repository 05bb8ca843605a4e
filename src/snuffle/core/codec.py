import struct
from typing import Union

from .errors import InvalidEncoding, OutOfRange

WORD_MASK = 0xFFFFFFFF
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_WORD = struct.Struct("<I")


def rotate_left(value: int, shift: int) -> int:
    # rotate a 32-bit integer left by shift bits
    if not 1 <= shift <= 31:
        raise ValueError(f"Rotation must be between 1 and 31 bits, got {shift}")
    return ((value << shift) | (value >> (32 - shift))) & WORD_MASK


def word_from_little_endian_bytes(data: bytes, offset: int = 0) -> int:
    # assemble four bytes into a 32-bit word, least significant byte first
    return _WORD.unpack_from(data, offset)[0]


def bytes_from_word(word: int) -> bytes:
    # split a 32-bit word into four little-endian bytes
    return _WORD.pack(word & WORD_MASK)


def is_hex(text: str) -> bool:
    # only plain hex digits count, no 0x prefix, signs, spaces or underscores
    return all(ch in HEX_DIGITS for ch in text)


def word_from_hex_chars(hex_str: str, offset: int) -> int:
    # read 8 hex chars (4 bytes) starting at offset as a little-endian word
    if offset < 0 or offset + 8 > len(hex_str):
        raise OutOfRange(
            f"Need 8 hex chars at offset {offset}, string has {len(hex_str)}"
        )

    chunk = hex_str[offset:offset + 8]
    if not is_hex(chunk):
        raise InvalidEncoding(f"Non-hex character in {chunk!r} (no 0x prefix allowed)")

    return word_from_little_endian_bytes(bytes.fromhex(chunk))


def word_from_ascii_chars(text: Union[str, bytes], offset: int) -> int:
    # read 4 raw characters starting at offset as a little-endian word
    if offset < 0 or offset + 4 > len(text):
        raise OutOfRange(
            f"Need 4 characters at offset {offset}, input has {len(text)}"
        )

    chunk = text[offset:offset + 4]
    if isinstance(chunk, str):
        try:
            chunk = chunk.encode("ascii")
        except UnicodeEncodeError:
            raise InvalidEncoding(f"Non-ASCII character in {chunk!r}") from None

    return word_from_little_endian_bytes(chunk)


def words_to_bytes(words) -> bytes:
    # serialize a sequence of 32-bit words little-endian
    return struct.pack(f"<{len(words)}I", *words)


def xor_bytes(data: bytes, keystream: bytes) -> bytes:
    # xor two equal-length buffers
    if len(data) != len(keystream):
        raise ValueError(
            f"Buffers must have equal length ({len(data)} != {len(keystream)})"
        )
    if not data:
        return b""

    mixed = int.from_bytes(data, "little") ^ int.from_bytes(keystream, "little")
    return mixed.to_bytes(len(data), "little")
