"""
Key management for Stellar accounts.

A keypair is one of two variants. ``AddressKeypair`` knows only the public
address and can verify signatures. ``FullKeypair`` also holds the secret seed
and is the only variant with ``sign()``; code that needs to sign takes a
``FullKeypair`` and never checks capabilities at runtime.

Both variants wrap a ``stellar_sdk.Keypair``.
"""

from __future__ import annotations
import logging
from typing import Union

from stellar_sdk import Keypair as StellarKeypair
from stellar_sdk import StrKey
from stellar_sdk.exceptions import BadSignatureError

from ..runtime.errors import InvalidAddressError, InvalidKeyError, WalletError

logger = logging.getLogger(__name__)


class _PublicKeyMixin:
    """Address-level behavior shared by both keypair variants."""

    _keypair: StellarKeypair

    @property
    def address(self) -> str:
        """G... account address."""
        return self._keypair.public_key

    @property
    def public_key(self) -> bytes:
        """Raw 32-byte Ed25519 public key."""
        return self._keypair.raw_public_key()

    def signature_hint(self) -> bytes:
        """Last four bytes of the public key, used to match signatures to signers."""
        return self._keypair.signature_hint()

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self._keypair.verify(message, signature)
        except BadSignatureError:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, _PublicKeyMixin):
            return False
        return type(self) is type(other) and self.public_key == other.public_key

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.public_key))


class AddressKeypair(_PublicKeyMixin):
    """Public address only."""

    def __init__(self, keypair: StellarKeypair):
        # Drop any secret so this variant can never sign
        self._keypair = StellarKeypair.from_public_key(keypair.public_key)

    def __repr__(self) -> str:
        return f"AddressKeypair({self.address})"


class FullKeypair(_PublicKeyMixin):
    """
    Signing-capable keypair.

    The secret seed is exposed only through ``secret``; it never appears in
    ``repr`` or ``str``.
    """

    def __init__(self, keypair: StellarKeypair):
        if not keypair.can_sign():
            raise InvalidKeyError("Keypair has no secret seed")
        self._keypair = keypair

    @property
    def secret(self) -> str:
        """S... secret seed."""
        return self._keypair.secret

    @property
    def signing_keypair(self) -> StellarKeypair:
        """The underlying ``stellar_sdk.Keypair``, for envelope signing."""
        return self._keypair

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Bytes to sign (a transaction hash)

        Returns:
            64-byte Ed25519 signature
        """
        return self._keypair.sign(message)

    def to_address_keypair(self) -> AddressKeypair:
        return AddressKeypair(self._keypair)

    def __repr__(self) -> str:
        return f"FullKeypair({self.address})"


Keypair = Union[AddressKeypair, FullKeypair]


class KeyManager:
    """
    Generates and parses key material.

    Parsing validates format and checksum only; it never checks whether an
    account exists on the ledger.
    """

    @staticmethod
    def generate() -> FullKeypair:
        """
        Generate a fresh keypair from a cryptographically secure source.

        Raises:
            WalletError: If the entropy source fails
        """
        try:
            keypair = FullKeypair(StellarKeypair.random())
        except Exception as e:
            raise WalletError("Failed to generate keypair", cause=e)
        logger.debug(f"Generated keypair {keypair.address}")
        return keypair

    @staticmethod
    def parse_full(secret: str) -> FullKeypair:
        """
        Parse an S... secret seed.

        Every decoding failure (encoding, length, version byte, checksum) is
        reported as the same InvalidKeyError.

        Raises:
            InvalidKeyError: If the secret is not a well-formed seed
        """
        if not isinstance(secret, str) or not StrKey.is_valid_ed25519_secret_seed(secret):
            raise InvalidKeyError("Invalid secret key")
        return FullKeypair(StellarKeypair.from_secret(secret))

    @staticmethod
    def parse_address(address: str) -> AddressKeypair:
        """
        Parse a G... account address.

        Raises:
            InvalidAddressError: If the address is malformed
        """
        if not isinstance(address, str) or not StrKey.is_valid_ed25519_public_key(address):
            raise InvalidAddressError(details={"address": address if isinstance(address, str) else repr(address)})
        return AddressKeypair(StellarKeypair.from_public_key(address))

    @classmethod
    def parse(cls, value: str) -> Keypair:
        """
        Parse either a secret seed or an address, by prefix.

        Raises:
            InvalidKeyError: If the value is neither
        """
        if isinstance(value, str) and value.startswith("S"):
            return cls.parse_full(value)
        if isinstance(value, str) and value.startswith("G"):
            return cls.parse_address(value)
        raise InvalidKeyError("Key must be an S... secret or a G... address")

    @staticmethod
    def is_valid_address(address: str) -> bool:
        return isinstance(address, str) and StrKey.is_valid_ed25519_public_key(address)
