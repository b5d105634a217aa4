"""
Ledger-side data models.

Account snapshots and submission results as reported by a Horizon node. An
Account is transient: fetched per request, used once and discarded.
"""

from __future__ import annotations
from typing import List, Optional, Any, Dict
from pydantic import BaseModel, ConfigDict, Field, field_validator

from stellar_sdk import Asset


class Balance(BaseModel):
    """
    One balance line of an account.

    ``balance`` keeps the node's fixed-precision decimal string.
    """

    model_config = ConfigDict(frozen=True)

    asset_type: str
    asset_code: Optional[str] = None
    asset_issuer: Optional[str] = None
    balance: str

    @property
    def asset(self) -> Optional[Asset]:
        """Asset of this line; None for liquidity pool shares."""
        if self.asset_type == "native":
            return Asset.native()
        if not self.asset_code or not self.asset_issuer:
            return None
        return Asset(self.asset_code, self.asset_issuer)

    def is_asset(self, asset: Asset) -> bool:
        if asset.is_native():
            return self.asset_type == "native"
        return self.asset_code == asset.code and self.asset_issuer == asset.issuer


class Account(BaseModel):
    """
    Snapshot of an account's state.

    ``sequence`` is the last consumed sequence number; the next envelope from
    this account must carry ``sequence + 1``.
    """

    account_id: str
    sequence: int
    balances: List[Balance] = Field(default_factory=list)

    @field_validator("sequence", mode="before")
    @classmethod
    def parse_sequence(cls, v: Any) -> int:
        """Horizon renders int64 sequence numbers as strings."""
        if isinstance(v, str):
            return int(v)
        return v

    @classmethod
    def from_horizon(cls, data: Dict[str, Any]) -> Account:
        """Build from a Horizon ``/accounts/{id}`` response body."""
        return cls(
            account_id=data.get("account_id") or data["id"],
            sequence=data["sequence"],
            balances=data.get("balances", []),
        )

    def next_sequence_number(self) -> int:
        return self.sequence + 1

    def increment_sequence_number(self) -> int:
        """Consume one sequence number and return it."""
        self.sequence += 1
        return self.sequence

    def balance_of(self, asset: Asset) -> Optional[str]:
        for balance in self.balances:
            if balance.is_asset(asset):
                return balance.balance
        return None


class TransactionResult(BaseModel):
    """Outcome of an accepted submission."""

    hash: str
    ledger: Optional[int] = None
    successful: bool = True
    envelope_xdr: Optional[str] = None
    result_xdr: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
