"""
Envelope helpers.

Envelopes are ``stellar_sdk.TransactionEnvelope`` values; these helpers read
the parts the wallet cares about (validity window, signature count) and
decode submitted XDR.
"""

from __future__ import annotations
import time
from typing import Optional

from stellar_sdk import TransactionEnvelope
from stellar_sdk.time_bounds import TimeBounds

from ..runtime.errors import BuildError

MAX_OPERATIONS = 100
MAX_SIGNATURES = 20


def time_bounds_of(envelope: TransactionEnvelope) -> Optional[TimeBounds]:
    preconditions = envelope.transaction.preconditions
    return preconditions.time_bounds if preconditions is not None else None


def is_expired(envelope: TransactionEnvelope, now: Optional[int] = None) -> bool:
    """True once the envelope's validity window has closed; max_time 0 never closes."""
    bounds = time_bounds_of(envelope)
    if bounds is None or bounds.max_time == 0:
        return False
    now = int(time.time()) if now is None else now
    return now > bounds.max_time


def decode_envelope(xdr: str, network_passphrase: str) -> TransactionEnvelope:
    """
    Decode a base64 envelope.

    Raises:
        BuildError: If the XDR is not a transaction envelope
    """
    try:
        return TransactionEnvelope.from_xdr(xdr, network_passphrase)
    except (ValueError, TypeError, EOFError) as e:
        raise BuildError("Malformed transaction envelope", cause=e)
