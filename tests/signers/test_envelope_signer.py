"""
Envelope signing tests.
"""

import pytest

from helpers import TEST_PASSPHRASE, mk_account, mk_asset, mk_keypair

from stellar_wallet.runtime.errors import BuildError, InvalidKeyError
from stellar_wallet.signers import Signer
from stellar_wallet.tx import build_transaction, payment

PUBLIC = "Public Global Stellar Network ; September 2015"


@pytest.fixture
def sender():
    return mk_keypair(31)


@pytest.fixture
def envelope(sender):
    return build_transaction(
        mk_account(sender.address),
        [payment(mk_keypair(32).address, mk_asset(), "5")],
        TEST_PASSPHRASE,
        now=1_700_000_000,
    )


class TestSigner:
    """Test signature creation and verification."""

    def test_single_signature(self, envelope, sender):
        signed = Signer.sign(envelope, TEST_PASSPHRASE, sender)

        assert len(signed.signatures) == 1
        assert signed.signatures[0].signature_hint == sender.signature_hint()
        assert Signer.verify(signed, TEST_PASSPHRASE, sender)
        assert Signer.verify(signed, TEST_PASSPHRASE, sender.to_address_keypair())

    def test_signing_does_not_mutate_envelope(self, envelope, sender):
        Signer.sign(envelope, TEST_PASSPHRASE, sender)
        assert len(envelope.signatures) == 0

    def test_multiple_signers(self, envelope, sender):
        cosigner = mk_keypair(33)
        signed = Signer.sign(envelope, TEST_PASSPHRASE, sender, cosigner)

        assert [sig.signature_hint for sig in signed.signatures] == [sender.signature_hint(), cosigner.signature_hint()]
        assert Signer.verify(signed, TEST_PASSPHRASE, cosigner)

    def test_signatures_accumulate(self, envelope, sender):
        cosigner = mk_keypair(33)
        signed = Signer.sign(Signer.sign(envelope, TEST_PASSPHRASE, sender), TEST_PASSPHRASE, cosigner)
        assert len(signed.signatures) == 2

    def test_signature_is_bound_to_network(self, envelope, sender):
        signed = Signer.sign(envelope, TEST_PASSPHRASE, sender)
        assert not Signer.verify(signed, PUBLIC, sender)

    def test_unrelated_key_does_not_verify(self, envelope, sender):
        signed = Signer.sign(envelope, TEST_PASSPHRASE, sender)
        assert not Signer.verify(signed, TEST_PASSPHRASE, mk_keypair(34))

    def test_address_only_key_cannot_sign(self, envelope, sender):
        with pytest.raises(InvalidKeyError):
            Signer.sign(envelope, TEST_PASSPHRASE, sender.to_address_keypair())

    def test_no_keys(self, envelope):
        with pytest.raises(BuildError):
            Signer.sign(envelope, TEST_PASSPHRASE)

    def test_signature_limit(self, envelope, sender):
        with pytest.raises(BuildError):
            Signer.sign(envelope, TEST_PASSPHRASE, *[mk_keypair(100 + i) for i in range(21)])

    def test_same_key_twice(self, envelope, sender):
        with pytest.raises(BuildError):
            Signer.sign(envelope, TEST_PASSPHRASE, sender, sender)

    def test_signed_envelope_is_a_copy_bound_to_passphrase(self, envelope, sender):
        signed = Signer.sign(envelope, PUBLIC, sender)
        assert signed is not envelope
        assert signed.network_passphrase == PUBLIC
        assert Signer.verify(signed, PUBLIC, sender)
