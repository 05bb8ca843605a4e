from .rounds import quarter_round, column_round, row_round, double_round
from .variant import SALSA20

__all__ = ['quarter_round', 'column_round', 'row_round', 'double_round', 'SALSA20']
