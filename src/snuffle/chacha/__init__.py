from .rounds import quarter_round, column_round, diagonal_round, double_round
from .variant import CHACHA20

__all__ = ['quarter_round', 'column_round', 'diagonal_round', 'double_round', 'CHACHA20']
