"""
Transaction builder.

Turns an account snapshot and an ordered operation list into an unsigned
envelope using ``stellar_sdk.TransactionBuilder``. One envelope consumes
exactly one sequence number, however many operations it carries.
"""

from __future__ import annotations
import logging
import time
from typing import List, Optional, Sequence, TYPE_CHECKING

from stellar_sdk import Account as StellarAccount
from stellar_sdk import TransactionBuilder as StellarTransactionBuilder
from stellar_sdk import TransactionEnvelope
from stellar_sdk.operation.operation import Operation

from ..runtime.errors import BuildError
from .envelope import MAX_OPERATIONS
from .operations import OPERATION_TYPES

if TYPE_CHECKING:
    from ..models import Account

logger = logging.getLogger(__name__)

MIN_BASE_FEE = 100
DEFAULT_TIMEOUT = 300
MAX_UINT32 = 0xFFFFFFFF


def build_transaction(
    source_account: Account,
    operations: Sequence[Operation],
    network_passphrase: str,
    base_fee: int = MIN_BASE_FEE,
    timeout: int = DEFAULT_TIMEOUT,
    now: Optional[int] = None,
) -> TransactionEnvelope:
    """
    Build an unsigned envelope.

    Args:
        source_account: Snapshot of the paying account; its sequence number is
            incremented once
        operations: Operations, applied in the given order
        network_passphrase: Passphrase the envelope hash is bound to
        base_fee: Fee per operation in stroops
        timeout: Validity window in seconds from ``now``
        now: Unix time override

    Returns:
        Unsigned TransactionEnvelope

    Raises:
        BuildError: If any parameter or operation is invalid
    """
    if not operations:
        raise BuildError("Transaction requires at least one operation")
    if len(operations) > MAX_OPERATIONS:
        raise BuildError(f"Transaction holds at most {MAX_OPERATIONS} operations")
    if base_fee < MIN_BASE_FEE:
        raise BuildError(f"Base fee must be at least {MIN_BASE_FEE} stroops", details={"base_fee": base_fee})
    if timeout <= 0:
        raise BuildError("Timeout must be positive", details={"timeout": timeout})

    for index, op in enumerate(operations):
        if not isinstance(op, OPERATION_TYPES):
            raise BuildError(f"Unsupported operation: {op!r}", details={"operation_index": index})

    fee = base_fee * len(operations)
    if fee > MAX_UINT32:
        raise BuildError("Total fee exceeds the ledger maximum", details={"fee": fee})

    now = int(time.time()) if now is None else now
    stellar_account = StellarAccount(source_account.account_id, source_account.sequence)
    builder = StellarTransactionBuilder(stellar_account, network_passphrase, base_fee=base_fee)
    for op in operations:
        builder.append_operation(op)
    builder.add_time_bounds(0, now + timeout)

    try:
        envelope = builder.build()
    except ValueError as e:
        raise BuildError(f"Failed to build transaction: {e}", cause=e)

    source_account.increment_sequence_number()

    transaction = envelope.transaction
    logger.debug(
        f"Built transaction from {source_account.account_id} seq={transaction.sequence} "
        f"ops={len(transaction.operations)} fee={transaction.fee}"
    )
    return envelope


class TransactionBuilder:
    """
    Fluent builder over ``build_transaction``.

    Example:
        ```python
        envelope = (
            TransactionBuilder(account, network.passphrase, base_fee=100)
            .append_operation(payment(destination, asset, "10"))
            .set_timeout(300)
            .build()
        )
        ```
    """

    def __init__(self, source_account: Account, network_passphrase: str, base_fee: int = MIN_BASE_FEE):
        self.source_account = source_account
        self.network_passphrase = network_passphrase
        self.base_fee = base_fee
        self.timeout = DEFAULT_TIMEOUT
        self._operations: List[Operation] = []

    def append_operation(self, operation: Operation) -> TransactionBuilder:
        self._operations.append(operation)
        return self

    def set_timeout(self, timeout: int) -> TransactionBuilder:
        self.timeout = timeout
        return self

    def build(self, now: Optional[int] = None) -> TransactionEnvelope:
        return build_transaction(
            self.source_account,
            self._operations,
            self.network_passphrase,
            base_fee=self.base_fee,
            timeout=self.timeout,
            now=now,
        )
