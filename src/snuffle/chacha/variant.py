from ..core.registry import register_variant
from ..core.variant import SnuffleVariant
from .rounds import double_round

#  c  c  c  c
#  k  k  k  k
#  k  k  k  k
#  t  t  n  n
CHACHA20 = register_variant(SnuffleVariant(
    name="chacha20",
    constant_slots=(0, 1, 2, 3),
    key_slots=(4, 5, 6, 7, 8, 9, 10, 11),
    nonce_slots=(14, 15),
    counter_slots=(12, 13),
    double_round=double_round,
    description="ChaCha20 (original 64-bit nonce, 64-bit counter)",
))
