"""
Horizon ledger client.

Fetches account snapshots and submits signed envelopes over Horizon's REST
API, translating node responses into the wallet error taxonomy. The client
never retries: a rejected envelope must be rebuilt from a fresh snapshot, and
blind resubmission after a timeout risks a duplicate effect.
"""

from __future__ import annotations
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError
from stellar_sdk import TransactionEnvelope

from ..models import Account, TransactionResult
from ..runtime.errors import (
    AccountNotFoundError,
    RejectedError,
    RejectionReason,
    UnavailableError,
    WalletError,
    reason_from_result_codes,
)
from ..tx.envelope import is_expired, time_bounds_of

logger = logging.getLogger(__name__)

USER_AGENT = "stellar-wallet-python/0.1.0"


class LedgerClient:
    """
    Client for a single Horizon node.

    Example:
        ```python
        with LedgerClient("https://horizon-testnet.stellar.org") as client:
            account = client.fetch_account("GABC...")
            result = client.submit(signed_envelope)
        ```
    """

    def __init__(
        self,
        horizon_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            horizon_url: Base URL of the Horizon node
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests.Session for connection pooling
        """
        self._base_url = horizon_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def horizon_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> LedgerClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Accounts
    # =========================================================================

    def fetch_account(self, address: str) -> Account:
        """
        Fetch the current state of an account.

        Args:
            address: G... account address

        Returns:
            Account snapshot

        Raises:
            AccountNotFoundError: If the account has never been created
            UnavailableError: If the node cannot be reached or fails
        """
        url = f"{self._base_url}/accounts/{quote(address, safe='')}"
        logger.debug(f"GET {url}")
        response = self._send("GET", url)

        if response.status_code == 404:
            raise AccountNotFoundError(details={"address": address})
        if response.status_code != 200:
            raise self._error_from_response(response)

        body = self._json(response)
        try:
            return Account.from_horizon(body)
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            raise UnavailableError("Invalid response from ledger node", details={"url": url}, cause=e)

    # =========================================================================
    # Transactions
    # =========================================================================

    def submit(self, envelope: TransactionEnvelope) -> TransactionResult:
        """
        Submit a signed envelope and wait for the node's verdict.

        Args:
            envelope: Signed envelope

        Returns:
            TransactionResult with the transaction hash

        Raises:
            RejectedError: If the node refused the transaction, or its validity
                window has already closed
            UnavailableError: If the node cannot be reached, times out or fails
        """
        if is_expired(envelope):
            raise RejectedError(
                "Transaction validity window has elapsed",
                reason=RejectionReason.EXPIRED,
                details={"max_time": time_bounds_of(envelope).max_time},
            )

        url = f"{self._base_url}/transactions"
        logger.debug(f"POST {url} source={envelope.transaction.source.account_id} seq={envelope.transaction.sequence}")
        response = self._send("POST", url, data={"tx": envelope.to_xdr()})

        if response.status_code != 200:
            raise self._error_from_response(response)

        body = self._json(response)
        try:
            result = TransactionResult.model_validate(body)
        except ValidationError as e:
            raise UnavailableError("Invalid response from ledger node", details={"url": url}, cause=e)
        logger.info(f"Transaction {result.hash} accepted in ledger {result.ledger}")
        return result

    # =========================================================================
    # Transport
    # =========================================================================

    def _send(self, method: str, url: str, data: Optional[Dict[str, str]] = None) -> requests.Response:
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        started = time.monotonic()
        try:
            response = self._session.request(method, url, data=data, headers=headers, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise UnavailableError("Ledger node request timed out", details={"url": url}, cause=e)
        except requests.exceptions.RequestException as e:
            raise UnavailableError(f"Ledger node unreachable: {e}", details={"url": url}, cause=e)

        logger.debug(f"{method} {url} -> {response.status_code} in {time.monotonic() - started:.3f}s")
        return response

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise UnavailableError("Invalid JSON response from ledger node", cause=e)

    @staticmethod
    def _error_from_response(response: requests.Response) -> WalletError:
        """
        Map a Horizon problem response to a wallet error.

        4xx problems other than rate limiting are rejections carrying the
        node's detail text; 429 and 5xx (including the 504 submission timeout)
        are transient unavailability.
        """
        try:
            problem = response.json()
        except ValueError:
            problem = {}
        if not isinstance(problem, dict):
            problem = {}

        status = response.status_code
        detail = problem.get("detail") or problem.get("title") or f"HTTP {status}: {response.reason}"
        problem_type = (problem.get("type") or "").rsplit("/", 1)[-1]
        details = {"status": status}
        if problem_type:
            details["type"] = problem_type

        if status == 429 or status >= 500:
            logger.warning(f"Ledger node unavailable ({status}): {detail}")
            return UnavailableError(detail, details=details)

        extras = problem.get("extras")
        result_codes = extras.get("result_codes") if isinstance(extras, dict) else None
        if not isinstance(result_codes, dict):
            result_codes = {}
        if problem_type == "transaction_malformed":
            reason = RejectionReason.MALFORMED
        else:
            reason = reason_from_result_codes(result_codes)

        logger.warning(f"Transaction rejected ({reason.value}): {detail} {result_codes}")
        return RejectedError(detail, reason=reason, result_codes=result_codes, details=details)
