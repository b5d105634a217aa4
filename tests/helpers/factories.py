"""
Test factories for creating test data consistently.

Provides deterministic keypairs, account snapshots and signed envelopes.
"""

from __future__ import annotations
import hashlib
import secrets
from typing import Optional, Sequence, Union

from stellar_sdk import Asset, Keypair, Network, TransactionEnvelope

from stellar_wallet.keys import FullKeypair
from stellar_wallet.models import Account
from stellar_wallet.signers import Signer
from stellar_wallet.tx import build_transaction, payment

TEST_PASSPHRASE = Network.TESTNET_NETWORK_PASSPHRASE


def mk_keypair(seed: Union[int, bytes, None] = None) -> FullKeypair:
    """
    Create a deterministic keypair for testing.

    Args:
        seed: Optional seed for deterministic generation

    Returns:
        FullKeypair
    """
    if seed is None:
        seed_bytes = secrets.token_bytes(32)
    elif isinstance(seed, int):
        seed_bytes = seed.to_bytes(32, "big")
    elif len(seed) == 32:
        seed_bytes = seed
    else:
        seed_bytes = hashlib.sha256(seed).digest()

    return FullKeypair(Keypair.from_raw_ed25519_seed(seed_bytes))


def mk_asset(code: str = "USDC", issuer_seed: int = 0xA55E7) -> Asset:
    return Asset(code, mk_keypair(issuer_seed).address)


def mk_account(address: str, sequence: int = 100, balances: Optional[list] = None) -> Account:
    return Account(account_id=address, sequence=sequence, balances=balances or [])


def mk_signed_payment(
    sender: FullKeypair,
    destination: str,
    asset: Asset,
    amount: str = "10",
    sequence: int = 100,
    signers: Sequence[FullKeypair] = (),
    now: Optional[int] = None,
) -> TransactionEnvelope:
    """Build a single-payment envelope signed by ``signers`` (default: the sender)."""
    envelope = build_transaction(
        mk_account(sender.address, sequence),
        [payment(destination, asset, amount)],
        TEST_PASSPHRASE,
        now=now,
    )
    return Signer.sign(envelope, TEST_PASSPHRASE, *(signers or (sender,)))
