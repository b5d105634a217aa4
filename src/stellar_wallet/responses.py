"""
Request and response models exchanged with the HTTP layer.

Field names match the service's JSON contract.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class WalletResponse(BaseModel):
    """Result of wallet creation. The only place a secret key leaves the service."""

    public_key: str
    secret_key: str
    message: str
    transaction_hash: str = Field(exclude=True)


class BalanceEntry(BaseModel):
    asset_type: str
    asset_code: Optional[str] = None
    issuer: Optional[str] = None
    balance: str


class WalletDetailsResponse(BaseModel):
    public_key: str
    exists: bool
    balances: List[BalanceEntry] = Field(default_factory=list)
    sequence_number: int = 0

    def to_json_dict(self) -> dict:
        """JSON shape with empty asset_code/issuer omitted on each balance."""
        data = self.model_dump()
        data["balances"] = [entry.model_dump(exclude_none=True) for entry in self.balances]
        return data


class TransferRequest(BaseModel):
    from_secret_key: str
    to_public_key: str
    amount: str


class TransferResponse(BaseModel):
    transaction_hash: str
    message: str
