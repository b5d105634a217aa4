"""
Ledger node client.
"""

from .ledger import LedgerClient

__all__ = ["LedgerClient"]
