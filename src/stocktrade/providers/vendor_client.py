"""HTTP client for the stock vendor API with retry and error normalization."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from stocktrade.core.exceptions import VendorApiError, VendorError, VendorUnavailableError
from stocktrade.domain.models import BuyResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SEC = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_SEC = 1.0


class VendorClient:
    """
    Client for the vendor's stock listing and buy endpoints.

    Every failure surfaces as VendorUnavailableError (no response) or
    VendorApiError (error status or error body). Transient failures, meaning no
    response or a 5xx status, are retried up to ``max_retries`` times with a
    ``2**attempt * base_delay`` backoff. ``close()`` interrupts a pending backoff.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay_sec: float = DEFAULT_BASE_DELAY_SEC,
        session: Optional[requests.Session] = None,
        sleep: Optional[Callable[[float], Any]] = None,
    ) -> None:
        """
        Parameters
        ----------
        base_url:
            Vendor API root, e.g. ``https://vendor.example.com/api``.
        api_key:
            Sent as the ``x-api-key`` header.
        timeout_sec:
            Timeout of a single attempt; a timed out attempt counts as retryable.
        session:
            Optional ``requests.Session`` for connection reuse/testing.
        sleep:
            Optional backoff function (tests); defaults to an interruptible wait.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self.max_retries = max(0, max_retries)
        self.base_delay_sec = base_delay_sec
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "x-api-key": api_key,
                "Content-Type": "application/json",
            }
        )
        self._closed = threading.Event()
        self._sleep = sleep or self._closed.wait

    def get_stocks_page(self, next_token: Optional[str] = None) -> Dict[str, Any]:
        """GET /stocks. Returns the ``data`` payload of the vendor envelope."""
        params = {"nextToken": next_token} if next_token else {}

        def _fetch() -> Dict[str, Any]:
            body = self._request("GET", "/stocks", params=params)
            if body.get("status") == 200 and isinstance(body.get("data"), dict):
                return body["data"]
            raise VendorApiError(
                body.get("message") or "Invalid response format from vendor API",
                status=_envelope_status(body),
                code=body.get("code"),
                transient=False,
            )

        try:
            return self._with_retry(_fetch)
        except VendorError as exc:
            logger.error("Error fetching stocks: %s (%s)", exc.message, exc.code)
            raise

    def buy_stock(self, symbol: str, price: float, quantity: int) -> BuyResult:
        """POST /stocks/{symbol}/buy."""

        def _buy() -> BuyResult:
            body = self._request(
                "POST",
                f"/stocks/{symbol}/buy",
                json={"price": price, "quantity": quantity},
            )
            if body.get("status") == 200:
                data = body.get("data") if isinstance(body.get("data"), dict) else {}
                return BuyResult(transaction_id=data.get("transactionId"))
            raise VendorApiError(
                body.get("message") or "Purchase failed",
                status=_envelope_status(body),
                code=body.get("code"),
                transient=False,
            )

        try:
            return self._with_retry(_buy)
        except VendorError as exc:
            logger.error("Error buying stock %s: %s (%s)", symbol, exc.message, exc.code)
            raise

    def close(self) -> None:
        """Cancel pending backoffs and release the HTTP session."""
        self._closed.set()
        self.session.close()

    def _with_retry(self, fn: Callable[[], T]) -> T:
        attempt = 0
        while True:
            try:
                return fn()
            except VendorError as exc:
                if not exc.retryable or attempt >= self.max_retries:
                    raise
                delay = (2 ** attempt) * self.base_delay_sec
                attempt += 1
                logger.warning(
                    "Retrying vendor request in %.1fs. Retries left: %d",
                    delay,
                    self.max_retries - attempt + 1,
                )
                self._sleep(delay)
                if self._closed.is_set():
                    logger.warning("Vendor client closed; abandoning retries")
                    raise

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Single HTTP attempt. Returns the decoded JSON envelope of a 2xx response."""
        url = f"{self.base_url}{path}"
        logger.debug("Vendor API Request: %s %s", method, url)
        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout_sec
            )
        except requests.RequestException as exc:
            logger.error("Vendor API Network Error: %s", exc)
            raise VendorUnavailableError() from exc

        logger.debug("Vendor API Response: %s %s", response.status_code, url)
        body = _decode_json(response)

        if response.status_code >= 400:
            logger.error(
                "Vendor API Error Response: %s url=%s body=%s",
                response.status_code,
                url,
                str(body)[:300],
            )
            raise VendorApiError(
                body.get("message") or f"Vendor API returned HTTP {response.status_code}",
                status=response.status_code,
                code=body.get("code"),
            )
        return body


def _decode_json(response: requests.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:  # JSONDecodeError
        return {}
    return payload if isinstance(payload, dict) else {}


def _envelope_status(body: Dict[str, Any]) -> int:
    """Error status reported inside the envelope; 502 when it names none."""
    status = body.get("status")
    if isinstance(status, int) and not isinstance(status, bool) and status >= 400:
        return status
    return 502
