"""
Service configuration.

Configuration is an immutable value built once at startup and passed into the
service constructor. ``ServiceConfig.from_env`` builds one from the process
environment.
"""

from __future__ import annotations
import os
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

from stellar_sdk import Asset, Network, StrKey

from .runtime.amount import parse_amount
from .runtime.errors import InvalidAmountError
from .tx.builder import DEFAULT_TIMEOUT, MIN_BASE_FEE

TESTNET_PASSPHRASE = Network.TESTNET_NETWORK_PASSPHRASE
PUBLIC_PASSPHRASE = Network.PUBLIC_NETWORK_PASSPHRASE

TESTNET_HORIZON_URL = "https://horizon-testnet.stellar.org"
PUBLIC_HORIZON_URL = "https://horizon.stellar.org"

# Circle's USDC issuer on testnet
DEFAULT_ASSET_CODE = "USDC"
DEFAULT_ASSET_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34KPPVPQS"


class NetworkContext(BaseModel):
    """
    Network identity: which node to talk to and which passphrase signatures
    are bound to.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    horizon_url: str
    passphrase: str

    @field_validator("horizon_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def testnet(cls) -> NetworkContext:
        return cls(name="testnet", horizon_url=TESTNET_HORIZON_URL, passphrase=TESTNET_PASSPHRASE)

    @classmethod
    def public(cls) -> NetworkContext:
        return cls(name="public", horizon_url=PUBLIC_HORIZON_URL, passphrase=PUBLIC_PASSPHRASE)

    @classmethod
    def for_name(cls, name: Optional[str], horizon_url: Optional[str] = None) -> NetworkContext:
        """
        Resolve a network name.

        "testnet" selects the test network; any other value, including an
        unset one, selects the public network.
        """
        network = cls.testnet() if (name or "").strip().lower() == "testnet" else cls.public()
        if horizon_url:
            network = network.model_copy(update={"horizon_url": horizon_url.rstrip("/")})
        return network


class ServiceConfig(BaseModel):
    """
    Process-wide, read-only wallet service settings.

    The funding secret is a SecretStr and never appears in ``repr``, ``str``
    or serialized output.
    """

    model_config = ConfigDict(frozen=True)

    network: NetworkContext = Field(default_factory=NetworkContext.testnet)
    funding_secret: SecretStr
    asset_code: str = DEFAULT_ASSET_CODE
    asset_issuer: str = DEFAULT_ASSET_ISSUER
    starting_balance: str = "1.5"
    funding_amount: str = "100"
    base_fee: int = Field(default=MIN_BASE_FEE, ge=MIN_BASE_FEE)
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)

    @field_validator("starting_balance", "funding_amount")
    @classmethod
    def check_amount(cls, v: str) -> str:
        try:
            parse_amount(v)
        except InvalidAmountError as e:
            raise ValueError(e.message)
        return v

    @field_validator("funding_secret")
    @classmethod
    def check_secret(cls, v: SecretStr) -> SecretStr:
        if not StrKey.is_valid_ed25519_secret_seed(v.get_secret_value()):
            raise ValueError("funding secret is not a valid secret seed")
        return v

    @model_validator(mode="after")
    def check_asset(self) -> ServiceConfig:
        if not StrKey.is_valid_ed25519_public_key(self.asset_issuer):
            raise ValueError(f"invalid asset issuer: {self.asset_issuer!r}")
        try:
            asset = Asset(self.asset_code, self.asset_issuer)
        except ValueError as e:
            raise ValueError(f"invalid asset code: {self.asset_code!r}") from e
        if asset.is_native():
            raise ValueError("designated asset must be a non-native asset")
        return self

    @property
    def asset(self) -> Asset:
        """The designated asset every wallet trusts and transfers."""
        return Asset(self.asset_code, self.asset_issuer)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> ServiceConfig:
        """
        Build configuration from environment variables.

        Reads STELLAR_NETWORK, MASTER_SECRET_KEY, ASSET_CODE, ASSET_ISSUER and
        HORIZON_URL.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            "network": NetworkContext.for_name(env.get("STELLAR_NETWORK"), env.get("HORIZON_URL")),
            "funding_secret": env.get("MASTER_SECRET_KEY", ""),
            "asset_code": env.get("ASSET_CODE", DEFAULT_ASSET_CODE),
            "asset_issuer": env.get("ASSET_ISSUER", DEFAULT_ASSET_ISSUER),
        }
        values.update(overrides)
        return cls(**values)
