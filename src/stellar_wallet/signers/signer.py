"""
Envelope signing.

A signature covers the transaction hash computed under one network
passphrase. Signing with the wrong passphrase yields a well-formed signature
the node will refuse at submission (tx_bad_auth); it cannot be detected here.
"""

from __future__ import annotations
import logging

from stellar_sdk import TransactionEnvelope

from ..keys.keypair import FullKeypair, Keypair
from ..runtime.errors import BuildError, InvalidKeyError
from ..tx.envelope import MAX_SIGNATURES

logger = logging.getLogger(__name__)


class Signer:
    """
    Adds signatures to envelopes.

    Multi-party authorization (for example a funding account and a newly
    created account in one envelope) is expressed by passing several keys.
    """

    @staticmethod
    def sign(envelope: TransactionEnvelope, network_passphrase: str, *keys: FullKeypair) -> TransactionEnvelope:
        """
        Sign an envelope with each key.

        The input envelope is left untouched.

        Args:
            envelope: Envelope to sign
            network_passphrase: Passphrase of the target network
            *keys: Signing keys, one signature each

        Returns:
            New envelope with the signatures appended

        Raises:
            InvalidKeyError: If a key cannot sign
            BuildError: If no key is given, a key signs twice or the
                signature limit is exceeded
        """
        if not keys:
            raise BuildError("At least one signing key is required")
        for key in keys:
            if not isinstance(key, FullKeypair):
                raise InvalidKeyError(f"{type(key).__name__} cannot sign")
        if len(envelope.signatures) + len(keys) > MAX_SIGNATURES:
            raise BuildError(f"An envelope holds at most {MAX_SIGNATURES} signatures")

        signed = TransactionEnvelope(envelope.transaction, network_passphrase, list(envelope.signatures))
        for key in keys:
            try:
                signed.sign(key.signing_keypair)
            except ValueError as e:
                raise BuildError(f"Cannot sign with {key.address}: {e}", cause=e)
            logger.debug(f"Signed {signed.hash_hex()} with {key.address}")
        return signed

    @staticmethod
    def verify(envelope: TransactionEnvelope, network_passphrase: str, keypair: Keypair) -> bool:
        """
        Check whether ``keypair`` has a valid signature on the envelope.

        Args:
            envelope: Signed envelope
            network_passphrase: Passphrase the signature must be bound to
            keypair: Either keypair variant

        Returns:
            True if one of the envelope's signatures verifies under the key
        """
        digest = TransactionEnvelope(envelope.transaction, network_passphrase).hash()
        hint = keypair.signature_hint()
        return any(
            sig.signature_hint == hint and keypair.verify(digest, sig.signature)
            for sig in envelope.signatures
        )
