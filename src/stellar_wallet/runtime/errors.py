"""
Wallet Error Model

This module provides the error taxonomy for the wallet service. Every failure
surfaced to callers is a WalletError carrying a closed ErrorCode kind and an
optional details payload, so callers branch on kind and never on message text.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import Enum, IntEnum


class ErrorCode(IntEnum):
    """Wallet error kinds."""

    # Input validation (no network call attempted)
    INVALID_KEY = 100
    INVALID_ADDRESS = 101
    INVALID_AMOUNT = 102

    # Ledger outcomes
    NOT_FOUND = 200
    UNAVAILABLE = 201
    REJECTED = 202

    # Construction and internal faults
    BUILD_ERROR = 300
    INTERNAL = 301


class RejectionReason(str, Enum):
    """Classification of a ledger-level refusal."""

    SEQUENCE_CONFLICT = "sequence_conflict"
    EXPIRED = "expired"
    BAD_AUTH = "bad_auth"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    MISSING_TRUSTLINE = "missing_trustline"
    NO_DESTINATION = "no_destination"
    INSUFFICIENT_FEE = "insufficient_fee"
    MALFORMED = "malformed"
    OTHER = "other"


# Horizon result codes, checked transaction code first, then operation codes
_RESULT_CODE_REASONS = {
    "tx_bad_seq": RejectionReason.SEQUENCE_CONFLICT,
    "tx_too_late": RejectionReason.EXPIRED,
    "tx_too_early": RejectionReason.EXPIRED,
    "tx_bad_auth": RejectionReason.BAD_AUTH,
    "tx_bad_auth_extra": RejectionReason.BAD_AUTH,
    "tx_insufficient_balance": RejectionReason.INSUFFICIENT_BALANCE,
    "tx_insufficient_fee": RejectionReason.INSUFFICIENT_FEE,
    "op_bad_auth": RejectionReason.BAD_AUTH,
    "op_underfunded": RejectionReason.INSUFFICIENT_BALANCE,
    "op_low_reserve": RejectionReason.INSUFFICIENT_BALANCE,
    "op_no_trust": RejectionReason.MISSING_TRUSTLINE,
    "op_src_no_trust": RejectionReason.MISSING_TRUSTLINE,
    "op_no_destination": RejectionReason.NO_DESTINATION,
    "op_no_account": RejectionReason.NO_DESTINATION,
}


class WalletError(Exception):
    """
    Base class for all wallet errors.

    Provides structured error information: a kind, a human-readable message,
    optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a wallet error.

        Args:
            message: Error message
            code: Error kind
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.name.lower(),
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidKeyError(WalletError):
    """Malformed secret seed or key material."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class InvalidAddressError(InvalidKeyError):
    """Malformed public address."""

    def __init__(self, message: str = "Invalid public key format",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.INVALID_ADDRESS


class InvalidAmountError(WalletError):
    """Amount is not a positive decimal the ledger can represent."""

    def __init__(self, message: str = "Invalid amount: must be a positive number",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_AMOUNT, details, cause)


class AccountNotFoundError(WalletError):
    """Account has never been created on the ledger."""

    def __init__(self, message: str = "Account not found",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NOT_FOUND, details, cause)


class UnavailableError(WalletError):
    """Ledger node unreachable, overloaded or timed out."""

    def __init__(self, message: str = "Ledger node unavailable",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNAVAILABLE, details, cause)


class RejectedError(WalletError):
    """
    Ledger validated and refused the transaction.

    The detail text is the node's verbatim explanation; ``reason`` classifies
    the refusal from the node's result codes.
    """

    def __init__(self, message: str = "Transaction failed",
                 reason: RejectionReason = RejectionReason.OTHER,
                 result_codes: Optional[Dict[str, Any]] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.REJECTED, details, cause)
        self.reason = reason
        self.result_codes = result_codes or {}
        self.details.setdefault("reason", reason.value)
        if self.result_codes:
            self.details.setdefault("result_codes", self.result_codes)


class BuildError(WalletError):
    """Transaction could not be constructed from the given parameters."""

    def __init__(self, message: str = "Failed to build transaction",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BUILD_ERROR, details, cause)


def reason_from_result_codes(result_codes: Optional[Dict[str, Any]]) -> RejectionReason:
    """
    Classify Horizon result codes.

    Args:
        result_codes: The ``extras.result_codes`` object of a failed submission

    Returns:
        The matching rejection reason, or OTHER
    """
    if not result_codes:
        return RejectionReason.OTHER

    tx_code = result_codes.get("transaction")
    if isinstance(tx_code, str) and tx_code in _RESULT_CODE_REASONS:
        return _RESULT_CODE_REASONS[tx_code]

    operations = result_codes.get("operations")
    if not isinstance(operations, list):
        return RejectionReason.OTHER
    for op_code in operations:
        if isinstance(op_code, str) and op_code in _RESULT_CODE_REASONS:
            return _RESULT_CODE_REASONS[op_code]

    return RejectionReason.OTHER


class ErrorHandler:
    """
    Utility class for categorizing errors.
    """

    _CLIENT_ERRORS = (ErrorCode.INVALID_KEY, ErrorCode.INVALID_ADDRESS, ErrorCode.INVALID_AMOUNT)

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if the caller may retry after re-validating state.

        Only transient node failures qualify. Rejections must be rebuilt from a
        fresh account snapshot, never resubmitted.
        """
        return isinstance(error, WalletError) and error.code == ErrorCode.UNAVAILABLE

    @classmethod
    def http_status(cls, error: Exception) -> int:
        """
        HTTP status for an error response.

        Input validation failures are client errors; everything else,
        including a missing sender account, is a server error.
        """
        if isinstance(error, WalletError) and error.code in cls._CLIENT_ERRORS:
            return 400
        return 500


__all__ = [
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
    "reason_from_result_codes",
    "ErrorHandler",
]
