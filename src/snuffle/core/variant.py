"""
Snuffle - Variant Descriptor

Salsa20 and ChaCha20 share the same engine; they only differ in where the
constants, key, nonce and counter words sit in the 4x4 matrix and in the
double round applied to it. A SnuffleVariant carries exactly those pieces.
Matrix cells are addressed by flat index (row * 4 + col).
"""

from typing import Callable, List, Sequence

MATRIX_WORDS = 16
DOUBLE_ROUNDS = 10


class SnuffleVariant:
    # describes the matrix layout and round function of one cipher

    def __init__(self, name: str, constant_slots: Sequence[int], key_slots: Sequence[int],
                 nonce_slots: Sequence[int], counter_slots: Sequence[int],
                 double_round: Callable[[List[int]], None], description: str = ""):
        self.name = name
        self.constant_slots = tuple(constant_slots)
        self.key_slots = tuple(key_slots)
        self.nonce_slots = tuple(nonce_slots)
        # (low word, high word)
        self.counter_slots = tuple(counter_slots)
        self.double_round = double_round
        self.description = description or name

        self._check_layout()

    def _check_layout(self):
        # every cell must be claimed exactly once
        sizes = (
            (len(self.constant_slots), 4, "constant"),
            (len(self.key_slots), 8, "key"),
            (len(self.nonce_slots), 2, "nonce"),
            (len(self.counter_slots), 2, "counter"),
        )
        for got, expected, label in sizes:
            if got != expected:
                raise ValueError(f"{self.name}: expected {expected} {label} slots, got {got}")

        cells = self.constant_slots + self.key_slots + self.nonce_slots + self.counter_slots
        if sorted(cells) != list(range(MATRIX_WORDS)):
            raise ValueError(f"{self.name}: layout does not cover each matrix cell once")

    def __repr__(self):
        return f"SnuffleVariant({self.name!r})"
