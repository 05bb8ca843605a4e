"""
Salsa20 round functions.

Indices follow Bernstein's Salsa20 specification; the column round feeds
each column starting at its diagonal element, the row round does the same
for rows.
"""

from typing import List, Tuple

from ..core.codec import WORD_MASK

# (a, b, c, d) groups, see quarter_round
COLUMN_GROUPS = ((0, 4, 8, 12), (5, 9, 13, 1), (10, 14, 2, 6), (15, 3, 7, 11))
ROW_GROUPS = ((0, 1, 2, 3), (5, 6, 7, 4), (10, 11, 8, 9), (15, 12, 13, 14))


def _rotl(value: int, shift: int) -> int:
    # input already reduced mod 2**32
    return ((value << shift) & WORD_MASK) | (value >> (32 - shift))


def _quarter_round(state: List[int], a: int, b: int, c: int, d: int) -> None:
    # perform a salsa20 quarter round on 4 state elements
    state[b] ^= _rotl((state[a] + state[d]) & WORD_MASK, 7)
    state[c] ^= _rotl((state[b] + state[a]) & WORD_MASK, 9)
    state[d] ^= _rotl((state[c] + state[b]) & WORD_MASK, 13)
    state[a] ^= _rotl((state[d] + state[c]) & WORD_MASK, 18)


def quarter_round(a: int, b: int, c: int, d: int) -> Tuple[int, int, int, int]:
    # pure form of the quarter round, returns the new (a, b, c, d)
    state = [a & WORD_MASK, b & WORD_MASK, c & WORD_MASK, d & WORD_MASK]
    _quarter_round(state, 0, 1, 2, 3)
    return tuple(state)


def column_round(state: List[int]) -> None:
    for a, b, c, d in COLUMN_GROUPS:
        _quarter_round(state, a, b, c, d)


def row_round(state: List[int]) -> None:
    for a, b, c, d in ROW_GROUPS:
        _quarter_round(state, a, b, c, d)


def double_round(state: List[int]) -> None:
    # first column, then row round
    column_round(state)
    row_round(state)
