"""
Wallet service.

Orchestrates key handling, transaction construction, signing and submission
for the three wallet use cases: create a funded account, inspect an account,
transfer the designated asset between accounts.

Each call works from a fresh account snapshot and keeps no state between
calls. Nothing is retried; concurrent writes from the same account are
arbitrated by the ledger's sequence-number check.
"""

from __future__ import annotations
import logging
from typing import Optional

from .client.ledger import LedgerClient
from .config import NetworkContext, ServiceConfig
from .keys.keypair import FullKeypair, KeyManager
from .models import Account
from .responses import (
    BalanceEntry,
    TransferRequest,
    TransferResponse,
    WalletDetailsResponse,
    WalletResponse,
)
from .runtime.amount import parse_amount
from .runtime.errors import AccountNotFoundError, InvalidAddressError, InvalidKeyError
from .signers.signer import Signer
from .tx.builder import build_transaction
from .tx.operations import change_trust, create_account, payment

logger = logging.getLogger(__name__)


class WalletService:
    """
    Wallet use cases against one network and one designated asset.

    Args:
        config: Immutable service configuration
        client: Ledger client; defaults to one for the configured network
    """

    def __init__(self, config: ServiceConfig, client: Optional[LedgerClient] = None):
        self.config = config
        self.client = client or LedgerClient(config.network.horizon_url, timeout=config.request_timeout)
        self._funding_keypair = KeyManager.parse_full(config.funding_secret.get_secret_value())

    @property
    def funding_address(self) -> str:
        return self._funding_keypair.address

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> WalletService:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def create_wallet(self) -> WalletResponse:
        """
        Create, trust-enable and fund a new account in one atomic transaction.

        The envelope carries three operations: create the account with the
        starting balance, establish the new account's trustline to the
        designated asset, and pay it the funding amount. The funding key
        authorizes the debit and the new key authorizes the trustline.

        Returns:
            WalletResponse with the new address, its secret and the hash

        Raises:
            UnavailableError, RejectedError: On submission failure
            AccountNotFoundError: If the funding account does not exist
            BuildError: If the configuration yields an invalid transaction
        """
        new_keypair = KeyManager.generate()
        asset = self.config.asset

        funding_account = self.client.fetch_account(self.funding_address)
        envelope = build_transaction(
            funding_account,
            [
                create_account(new_keypair.address, self.config.starting_balance),
                change_trust(asset, source=new_keypair.address),
                payment(new_keypair.address, asset, self.config.funding_amount),
            ],
            self.config.network.passphrase,
            base_fee=self.config.base_fee,
            timeout=self.config.timeout,
        )
        envelope = Signer.sign(envelope, self.config.network.passphrase, self._funding_keypair, new_keypair)

        result = self.client.submit(envelope)
        logger.info(f"Created wallet {new_keypair.address} in transaction {result.hash}")

        return WalletResponse(
            public_key=new_keypair.address,
            secret_key=new_keypair.secret,
            message=f"Wallet created, trusted {asset.code}, and funded successfully. Hash: {result.hash}",
            transaction_hash=result.hash,
        )

    def get_wallet_details(self, address: str) -> WalletDetailsResponse:
        """
        Report an account's balances and sequence number.

        An account that has never been created is a normal result
        (exists=False, no balances, sequence 0), not an error.

        Raises:
            InvalidAddressError: If the address is malformed
            UnavailableError: If the node cannot be reached
        """
        KeyManager.parse_address(address)

        try:
            account = self.client.fetch_account(address)
        except AccountNotFoundError:
            logger.debug(f"Account {address} does not exist")
            return WalletDetailsResponse(public_key=address, exists=False, balances=[], sequence_number=0)

        return self._details_from_account(address, account)

    def transfer_funds(self, from_secret: str, to_address: str, amount: str) -> TransferResponse:
        """
        Pay ``amount`` of the designated asset from the sender to the recipient.

        All three inputs are validated before any network call.

        Args:
            from_secret: Sender's secret seed
            to_address: Recipient address
            amount: Positive decimal string

        Returns:
            TransferResponse with the transaction hash

        Raises:
            InvalidKeyError: If the sender secret is malformed
            InvalidAddressError: If the recipient address is malformed
            InvalidAmountError: If the amount is not a positive decimal
            AccountNotFoundError: If the sender account does not exist
            UnavailableError, RejectedError: On submission failure
        """
        try:
            sender = KeyManager.parse_full(from_secret)
        except InvalidKeyError as e:
            raise InvalidKeyError("Invalid sender secret key", cause=e)

        try:
            KeyManager.parse_address(to_address)
        except InvalidAddressError as e:
            raise InvalidAddressError("Invalid recipient public key", details=e.details, cause=e)

        parse_amount(amount)

        return self._submit_payment(sender, to_address, amount)

    def transfer(self, request: TransferRequest) -> TransferResponse:
        """Run ``transfer_funds`` for a request body."""
        return self.transfer_funds(request.from_secret_key, request.to_public_key, request.amount)

    def _submit_payment(self, sender: FullKeypair, to_address: str, amount: str) -> TransferResponse:
        asset = self.config.asset
        sender_account = self.client.fetch_account(sender.address)

        envelope = build_transaction(
            sender_account,
            [payment(to_address, asset, amount)],
            self.config.network.passphrase,
            base_fee=self.config.base_fee,
            timeout=self.config.timeout,
        )
        envelope = Signer.sign(envelope, self.config.network.passphrase, sender)

        result = self.client.submit(envelope)
        logger.info(f"Transferred {amount} {asset.code} from {sender.address} to {to_address}: {result.hash}")

        return TransferResponse(transaction_hash=result.hash, message=f"{asset.code} transferred successfully")

    @staticmethod
    def _details_from_account(address: str, account: Account) -> WalletDetailsResponse:
        balances = [
            BalanceEntry(
                asset_type=balance.asset_type,
                asset_code=balance.asset_code,
                issuer=balance.asset_issuer,
                balance=balance.balance,
            )
            for balance in account.balances
        ]
        return WalletDetailsResponse(
            public_key=address,
            exists=True,
            balances=balances,
            sequence_number=account.sequence,
        )


def wallet_service_from_env(**overrides) -> WalletService:
    """Build a service from environment configuration."""
    return WalletService(ServiceConfig.from_env(**overrides))


def wallet_service_for_testnet(funding_secret: str, **overrides) -> WalletService:
    """Build a testnet service funded by ``funding_secret``."""
    return WalletService(ServiceConfig(network=NetworkContext.testnet(), funding_secret=funding_secret, **overrides))
