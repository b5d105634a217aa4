"""
Key management: keypair variants and the KeyManager.
"""

from .keypair import AddressKeypair, FullKeypair, KeyManager, Keypair

__all__ = [
    "AddressKeypair",
    "FullKeypair",
    "KeyManager",
    "Keypair",
]
