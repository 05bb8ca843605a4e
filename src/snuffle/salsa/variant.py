from ..core.registry import register_variant
from ..core.variant import SnuffleVariant
from .rounds import double_round

#  c  k  k  k
#  k  c  n  n
#  t  t  c  k
#  k  k  k  c
SALSA20 = register_variant(SnuffleVariant(
    name="salsa20",
    constant_slots=(0, 5, 10, 15),
    key_slots=(1, 2, 3, 4, 11, 12, 13, 14),
    nonce_slots=(6, 7),
    counter_slots=(8, 9),
    double_round=double_round,
    description="Salsa20/20 (64-bit nonce, 64-bit counter)",
))
