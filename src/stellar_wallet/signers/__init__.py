"""
Envelope signing.
"""

from .signer import Signer

__all__ = ["Signer"]
