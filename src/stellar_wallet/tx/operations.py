"""
Assets and operations.

Thin constructors over the ``stellar_sdk`` operation classes. Each one checks
its parameters up front so a bad address or amount surfaces as a BuildError
naming the offending field, rather than as an SDK exception or a node
rejection.
"""

from __future__ import annotations
from typing import Optional, Union

from stellar_sdk import Asset, ChangeTrust, CreateAccount, Payment, StrKey
from stellar_sdk.operation.operation import Operation

from ..runtime.amount import parse_amount
from ..runtime.errors import BuildError, InvalidAmountError

OPERATION_TYPES = (CreateAccount, ChangeTrust, Payment)


def _check_address(address: Optional[str], field: str) -> Optional[str]:
    if address is None:
        return None
    if not isinstance(address, str) or not StrKey.is_valid_ed25519_public_key(address):
        raise BuildError(f"Invalid {field}: {address!r}", details={"field": field})
    return address


def _check_amount(value: Union[str, int], field: str) -> str:
    try:
        return format(parse_amount(value), "f")
    except InvalidAmountError as e:
        raise BuildError(f"Invalid {field}: {value!r}", details={"field": field}, cause=e)


def make_asset(code: str, issuer: Optional[str] = None) -> Asset:
    """
    Build an asset identity.

    ``Asset("XLM")`` with no issuer is the native asset; any other code
    requires a valid issuer address.

    Raises:
        BuildError: If the code or issuer is malformed
    """
    try:
        return Asset(code, issuer)
    except ValueError as e:
        raise BuildError(f"Invalid asset {code}:{issuer}", details={"field": "asset"}, cause=e)


def create_account(destination: str, starting_balance: Union[str, int], source: Optional[str] = None) -> CreateAccount:
    """Create ``destination`` with ``starting_balance`` lumens."""
    return CreateAccount(
        destination=_check_address(destination, "destination"),
        starting_balance=_check_amount(starting_balance, "starting_balance"),
        source=_check_address(source, "source"),
    )


def change_trust(asset: Asset, limit: Optional[Union[str, int]] = None, source: Optional[str] = None) -> ChangeTrust:
    """
    Establish a trustline from ``source`` to ``asset``.

    The limit defaults to the ledger maximum.
    """
    if not isinstance(asset, Asset) or asset.is_native():
        raise BuildError("Trustline asset must be a non-native asset", details={"field": "asset"})
    return ChangeTrust(
        asset=asset,
        limit=None if limit is None else _check_amount(limit, "limit"),
        source=_check_address(source, "source"),
    )


def payment(destination: str, asset: Asset, amount: Union[str, int], source: Optional[str] = None) -> Payment:
    """Pay ``amount`` of ``asset`` to ``destination``."""
    if not isinstance(asset, Asset):
        raise BuildError(f"Invalid asset: {asset!r}", details={"field": "asset"})
    return Payment(
        destination=_check_address(destination, "destination"),
        asset=asset,
        amount=_check_amount(amount, "amount"),
        source=_check_address(source, "source"),
    )


def operation_source(operation: Operation) -> Optional[str]:
    """Account id of an operation's explicit source, if any."""
    return operation.source.account_id if operation.source is not None else None


def operation_destination(operation: Operation) -> str:
    """Account id an operation credits or creates."""
    destination = operation.destination
    return destination if isinstance(destination, str) else destination.account_id
