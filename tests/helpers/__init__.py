from .factories import TEST_PASSPHRASE, mk_account, mk_asset, mk_keypair, mk_signed_payment
from .fake_horizon import FakeHorizon, FakeResponse

__all__ = [
    "TEST_PASSPHRASE",
    "mk_account",
    "mk_asset",
    "mk_keypair",
    "mk_signed_payment",
    "FakeHorizon",
    "FakeResponse",
]
