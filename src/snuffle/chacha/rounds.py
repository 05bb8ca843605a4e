"""
ChaCha20 round functions.

Column groups run straight down the matrix, diagonal groups wrap around
it, as in Bernstein's ChaCha paper and RFC 8439.
"""

from typing import List, Tuple

from ..core.codec import WORD_MASK

COLUMN_GROUPS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONAL_GROUPS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) & WORD_MASK) | (value >> (32 - shift))


def _quarter_round(state: List[int], a: int, b: int, c: int, d: int) -> None:
    # perform a chacha20 quarter round on 4 state elements
    # a += b; d ^= a; d <<<= 16;
    state[a] = (state[a] + state[b]) & WORD_MASK
    state[d] = _rotl(state[d] ^ state[a], 16)

    # c += d; b ^= c; b <<<= 12;
    state[c] = (state[c] + state[d]) & WORD_MASK
    state[b] = _rotl(state[b] ^ state[c], 12)

    # a += b; d ^= a; d <<<= 8;
    state[a] = (state[a] + state[b]) & WORD_MASK
    state[d] = _rotl(state[d] ^ state[a], 8)

    # c += d; b ^= c; b <<<= 7;
    state[c] = (state[c] + state[d]) & WORD_MASK
    state[b] = _rotl(state[b] ^ state[c], 7)


def quarter_round(a: int, b: int, c: int, d: int) -> Tuple[int, int, int, int]:
    # pure form of the quarter round, returns the new (a, b, c, d)
    state = [a & WORD_MASK, b & WORD_MASK, c & WORD_MASK, d & WORD_MASK]
    _quarter_round(state, 0, 1, 2, 3)
    return tuple(state)


def column_round(state: List[int]) -> None:
    for a, b, c, d in COLUMN_GROUPS:
        _quarter_round(state, a, b, c, d)


def diagonal_round(state: List[int]) -> None:
    for a, b, c, d in DIAGONAL_GROUPS:
        _quarter_round(state, a, b, c, d)


def double_round(state: List[int]) -> None:
    # first column, then diagonal round
    column_round(state)
    diagonal_round(state)
