"""
Snuffle - Cipher State Machine

One engine for both Salsa20 and ChaCha20. The variant descriptor decides
where constants, key, nonce and counter live in the 16-word matrix and
which double round scrambles it; everything else is shared.
"""

from typing import List, Optional

from .core.codec import WORD_MASK, words_to_bytes
from .core.errors import CounterExhausted, InvalidCounter
from .core.registry import get_variant
from .core.variant import DOUBLE_ROUNDS, MATRIX_WORDS
from .key_utils import COUNTER_LIMIT, constant_words, parse_counter, parse_key, parse_nonce

BLOCK_SIZE = 64

# lifecycle phases
CONSTRUCTED = "constructed"
NONCE_SET = "nonce_set"
STREAMING = "streaming"


class SnuffleCipher:
    """
    Keystream generator for a single key.

    The nonce and counter start at zero. set_nonce() always resets the
    counter, so two messages under one key never share a keystream unless
    the caller explicitly rewinds with set_counter().

    Instances are not thread-safe; give each thread its own instance and a
    disjoint block range (see skip_blocks).
    """

    def __init__(self, key, variant="salsa20", hex_key: bool = False):
        self.variant = get_variant(variant)
        self._key_words, self.key_length = parse_key(key, hex_key)

        self._matrix: List[int] = [0] * MATRIX_WORDS
        self._working: List[int] = [0] * MATRIX_WORDS
        self._exhausted = False
        self._nonce_set = False
        self.phase = CONSTRUCTED

        # bumped whenever the keystream position jumps, so cursors can resync
        self.epoch = 0

        self._init_matrix()

    def _init_matrix(self):
        # constants and key words in the variant layout, nonce/counter zero
        variant = self.variant
        for slot, word in zip(variant.constant_slots, constant_words(self.key_length)):
            self._matrix[slot] = word
        for slot, word in zip(variant.key_slots, self._key_words):
            self._matrix[slot] = word

    @property
    def name(self):
        return self.variant.name

    @property
    def counter(self) -> int:
        # number of the next block; 2**64 once the keystream is used up
        if self._exhausted:
            return COUNTER_LIMIT
        low, high = self.variant.counter_slots
        return self._matrix[low] | (self._matrix[high] << 32)

    @property
    def nonce(self) -> bytes:
        return words_to_bytes([self._matrix[slot] for slot in self.variant.nonce_slots])

    def _store_counter(self, value: int):
        low, high = self.variant.counter_slots
        self._matrix[low] = value & WORD_MASK
        self._matrix[high] = (value >> 32) & WORD_MASK

    def set_nonce(self, nonce):
        # parse fully before touching the matrix
        words = parse_nonce(nonce)

        for slot, word in zip(self.variant.nonce_slots, words):
            self._matrix[slot] = word

        # nonce acts as IV, so the counter restarts
        self._store_counter(0)
        self._exhausted = False
        self._nonce_set = True
        self.phase = NONCE_SET
        self.epoch += 1

    def set_counter(self, counter):
        # jump to a known block; the nonce stays as it is
        value = parse_counter(counter)

        self._store_counter(value)
        self._exhausted = False
        if value:
            self.phase = STREAMING
        elif self._nonce_set:
            self.phase = NONCE_SET
        self.epoch += 1

    def skip_blocks(self, count: int):
        """
        Advance the counter by count blocks without producing output.

        After skip_blocks(3) the next generate_block() returns the fourth
        block of the keystream, which allows decrypting a slice of a long
        stream without computing everything before it.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidCounter(f"Block count must be a non-negative int, got {count!r}")
        if not count:
            return

        target = self.counter + count
        if target > COUNTER_LIMIT:
            raise CounterExhausted(
                f"Cannot skip {count} blocks from block {self.counter}, keystream ends at 2**64"
            )

        if target == COUNTER_LIMIT:
            self._store_counter(0)
            self._exhausted = True
        else:
            self._store_counter(target)
        self.phase = STREAMING
        self.epoch += 1

    def generate_block(self) -> bytes:
        # produce the next 64 keystream bytes and advance the counter
        if self._exhausted:
            raise CounterExhausted("All 2**64 keystream blocks for this nonce have been used")

        # the original matrix is needed again after the rounds
        state = self._working
        state[:] = self._matrix

        double_round = self.variant.double_round
        for _ in range(DOUBLE_ROUNDS):
            double_round(state)

        # add original state (mod 2**32)
        matrix = self._matrix
        for i in range(MATRIX_WORDS):
            state[i] = (state[i] + matrix[i]) & WORD_MASK

        block = words_to_bytes(state)
        self._increment_counter()
        self.phase = STREAMING
        return block

    def _increment_counter(self):
        low, high = self.variant.counter_slots
        matrix = self._matrix
        matrix[low] = (matrix[low] + 1) & WORD_MASK
        if not matrix[low]:
            matrix[high] = (matrix[high] + 1) & WORD_MASK
            if not matrix[high]:
                self._exhausted = True

    def rows(self):
        # current matrix as four rows of four words
        return [tuple(self._matrix[row * 4:row * 4 + 4]) for row in range(4)]

    def format_matrix(self, title: Optional[str] = None) -> str:
        # printable hex dump of the matrix for debug logging
        lines = [title] if title else []
        for row in self.rows():
            lines.append("  ".join(f"{word:08x}" for word in row))
        return "\n".join(lines)

    def __repr__(self):
        return (
            f"SnuffleCipher(variant={self.variant.name!r}, key_length={self.key_length}, "
            f"counter={self.counter}, phase={self.phase!r})"
        )


def new(key, variant="salsa20", hex_key: bool = False) -> SnuffleCipher:
    # construct a cipher for key; nonce and counter start at zero
    return SnuffleCipher(key, variant=variant, hex_key=hex_key)


def salsa20(key, hex_key: bool = False) -> SnuffleCipher:
    return SnuffleCipher(key, variant="salsa20", hex_key=hex_key)


def chacha20(key, hex_key: bool = False) -> SnuffleCipher:
    return SnuffleCipher(key, variant="chacha20", hex_key=hex_key)
