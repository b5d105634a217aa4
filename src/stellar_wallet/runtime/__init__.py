"""
Runtime support: error taxonomy and amount handling.
"""

from .errors import *
from .amount import MAX_INT64, STROOPS_PER_UNIT, from_stroops, parse_amount, to_stroops
