"""
Transaction construction: assets, operations, envelopes and the builder.
"""

from stellar_sdk import Asset, ChangeTrust, CreateAccount, Payment, TransactionEnvelope

from .operations import change_trust, create_account, make_asset, payment
from .envelope import MAX_OPERATIONS, MAX_SIGNATURES, decode_envelope, is_expired, time_bounds_of
from .builder import DEFAULT_TIMEOUT, MIN_BASE_FEE, TransactionBuilder, build_transaction

__all__ = [
    "Asset",
    "ChangeTrust",
    "CreateAccount",
    "Payment",
    "TransactionEnvelope",
    "change_trust",
    "create_account",
    "make_asset",
    "payment",
    "MAX_OPERATIONS",
    "MAX_SIGNATURES",
    "decode_envelope",
    "is_expired",
    "time_bounds_of",
    "DEFAULT_TIMEOUT",
    "MIN_BASE_FEE",
    "TransactionBuilder",
    "build_transaction",
]
