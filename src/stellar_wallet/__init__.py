"""
Stellar Wallet Service

Wallet orchestration for the Stellar network: creates funded accounts,
reports account state, and transfers a designated asset between accounts
through a Horizon node.
"""

from .runtime.errors import *
from .keys import AddressKeypair, FullKeypair, KeyManager, Keypair
from .tx import (
    Asset,
    ChangeTrust,
    CreateAccount,
    Payment,
    TransactionBuilder,
    TransactionEnvelope,
    build_transaction,
    change_trust,
    create_account,
    make_asset,
    payment,
)
from .signers import Signer
from .models import Account, Balance, TransactionResult
from .client import LedgerClient
from .config import NetworkContext, ServiceConfig
from .responses import (
    BalanceEntry,
    TransferRequest,
    TransferResponse,
    WalletDetailsResponse,
    WalletResponse,
)
from .wallet import WalletService, wallet_service_for_testnet, wallet_service_from_env

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "RejectionReason",
    "WalletError",
    "InvalidKeyError",
    "InvalidAddressError",
    "InvalidAmountError",
    "AccountNotFoundError",
    "UnavailableError",
    "RejectedError",
    "BuildError",
    "ErrorHandler",

    # Keys
    "AddressKeypair",
    "FullKeypair",
    "KeyManager",
    "Keypair",

    # Transactions
    "Asset",
    "ChangeTrust",
    "CreateAccount",
    "Payment",
    "TransactionBuilder",
    "TransactionEnvelope",
    "build_transaction",
    "change_trust",
    "create_account",
    "make_asset",
    "payment",
    "Signer",

    # Ledger
    "Account",
    "Balance",
    "TransactionResult",
    "LedgerClient",

    # Service
    "NetworkContext",
    "ServiceConfig",
    "BalanceEntry",
    "TransferRequest",
    "TransferResponse",
    "WalletDetailsResponse",
    "WalletResponse",
    "WalletService",
    "wallet_service_for_testnet",
    "wallet_service_from_env",
]
