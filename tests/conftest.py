"""
Shared fixtures: deterministic keys, an in-memory Horizon node with a funded
funding account, and a wallet service wired to it.
"""

import pytest

from helpers import FakeHorizon, mk_asset, mk_keypair

from stellar_wallet.client import LedgerClient
from stellar_wallet.config import NetworkContext, ServiceConfig
from stellar_wallet.wallet import WalletService

HORIZON_URL = "https://horizon.test"


@pytest.fixture
def funding_keypair():
    return mk_keypair(1)


@pytest.fixture
def asset():
    return mk_asset("USDC")


@pytest.fixture
def issuer_address(asset):
    return asset.issuer


@pytest.fixture
def horizon(funding_keypair, asset):
    """Fake node where the funding account holds 100000 USDC and 10000 XLM."""
    node = FakeHorizon()
    node.add_account(asset.issuer)
    node.add_account(funding_keypair.address, native="10000")
    node.add_trustline(funding_keypair.address, asset, balance="100000")
    return node


@pytest.fixture
def ledger_client(horizon):
    return LedgerClient(HORIZON_URL, session=horizon)


@pytest.fixture
def service_config(funding_keypair, asset):
    return ServiceConfig(
        network=NetworkContext(name="testnet", horizon_url=HORIZON_URL, passphrase=NetworkContext.testnet().passphrase),
        funding_secret=funding_keypair.secret,
        asset_code=asset.code,
        asset_issuer=asset.issuer,
    )


@pytest.fixture
def wallet_service(service_config, ledger_client):
    with WalletService(service_config, client=ledger_client) as service:
        yield service
