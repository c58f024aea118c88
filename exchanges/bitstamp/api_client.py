"""
Bitstamp REST API Client

This module provides a synchronous HTTP client for the Bitstamp REST API.
It handles:
- Public GET requests with retry logic
- Signed POST requests (key, nonce, signature)
- A strictly increasing nonce per client
- HTTP error handling and logging

The client returns decoded JSON exactly as Bitstamp sent it. Validation and
normalization into core.schemas types is the job of BitstampExchange.

API Documentation:
    https://www.bitstamp.net/api/

Authentication:
    signature = HMAC-SHA256(secret, nonce + customer_id + api_key), upper-case hex

Usage:
    with BitstampAPIClient(api_key, api_secret, customer_id) as client:
        raw = client.return_ticker(Pair.BTC_USD)
        raw = client.return_balances()
"""

import hashlib
import hmac
import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterator, Optional

import httpx

from core.config import settings
from core.errors import ExchangeRequestError, MissingCredentials, PairUnsupported
from core.logging import get_logger, log_api_request, log_api_response
from core.schemas import Pair, Price, Volume
from .utils import EXCHANGE_NAME, get_pair_string


def format_decimal(value: float) -> str:
    """
    Render an amount in plain decimal notation.

    Bitstamp rejects exponent notation, which str() produces for small
    floats (str(0.00001) == "1e-05").

    Example:
        >>> format_decimal(0.00001)
        '0.00001'
        >>> format_decimal(250.0)
        '250'
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class BitstampAPIClient:
    """
    Synchronous HTTP client for Bitstamp REST API

    Attributes:
        BASE_URL: Default Bitstamp API base URL
        session: httpx.Client for HTTP requests
        logger: Logger instance for debugging

    Example:
        >>> with BitstampAPIClient() as client:
        ...     raw = client.return_order_book(Pair.BTC_USD)
        ...     print(raw["asks"][0])

    Notes:
        - One client is one authenticated session; its nonce sequence is not
          safe to share between threads without external locking
        - Only public GETs are retried; a signed POST may have been executed
          even when the reply was lost
        - Inside `with` (or between open() and close()) all calls share one
          pooled session; otherwise each call opens and closes its own
    """

    BASE_URL = "https://www.bitstamp.net/api/v2"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        customer_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the Bitstamp API client.

        Args:
            api_key: API key (defaults to settings.bitstamp_api_key)
            api_secret: API secret (defaults to settings.bitstamp_api_secret)
            customer_id: Customer id (defaults to settings.bitstamp_customer_id)
            base_url: API base URL (defaults to settings.bitstamp_base_url)
            timeout: Request timeout in seconds
            max_retries: Attempts for public GET requests
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key if api_key is not None else settings.bitstamp_api_key
        self.api_secret = api_secret if api_secret is not None else settings.bitstamp_api_secret
        self.customer_id = customer_id if customer_id is not None else settings.bitstamp_customer_id
        self.base_url = (base_url or settings.bitstamp_base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.max_retries = max(1, max_retries if max_retries is not None else settings.max_retries)

        self._transport = transport
        self._last_nonce = 0

        self.logger = get_logger(__name__)
        self.session: Optional[httpx.Client] = None

    # ============================================
    # Context Manager for Session Management
    # ============================================

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self) -> None:
        """Create the HTTP session (idempotent)."""
        if self.session is None:
            self.session = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport
            )
            self.logger.debug("BitstampAPIClient session created")

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
            self.logger.debug("BitstampAPIClient session closed")

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        """
        Yield the open session, or a one-off session closed after the call
        when the client is used outside ``with``/``open()``.
        """
        if self.session is not None:
            yield self.session
            return

        with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as session:
            yield session

    # ============================================
    # Authentication
    # ============================================

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret and self.customer_id)

    def _next_nonce(self) -> int:
        """Millisecond clock, bumped when two calls land in the same millisecond."""
        nonce = max(int(time.time() * 1000), self._last_nonce + 1)
        self._last_nonce = nonce
        return nonce

    def _signature(self, nonce: int) -> str:
        message = f"{nonce}{self.customer_id}{self.api_key}".encode()
        return hmac.new(self.api_secret.encode(), message, hashlib.sha256).hexdigest().upper()

    def _auth_params(self) -> Dict[str, str]:
        if not self.has_credentials:
            raise MissingCredentials(EXCHANGE_NAME)

        nonce = self._next_nonce()
        return {
            "key": self.api_key,
            "signature": self._signature(nonce),
            "nonce": str(nonce),
        }

    # ============================================
    # HTTP Request Handlers
    # ============================================

    def _decode(self, endpoint: str, response: httpx.Response) -> Any:
        """
        Decode a reply.

        Bitstamp sends its error envelope with 4xx statuses too; those bodies
        are returned so parse_result can surface the exchange's reason.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 200 and data is not None:
            return data

        if isinstance(data, dict) and ("error" in data or data.get("status") == "error"):
            return data

        raise ExchangeRequestError(EXCHANGE_NAME, f"{endpoint}: {response.text[:200]}", response.status_code)

    def _get(self, endpoint: str, params: Dict[str, Any] = None) -> Any:
        """
        Make a public GET request with retry logic.

        Args:
            endpoint: API endpoint (e.g., "/ticker/btcusd/")
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            ExchangeRequestError: If all retry attempts fail
        """
        params = params or {}

        with self._session() as session:
            for attempt in range(self.max_retries):
                log_api_request(EXCHANGE_NAME, endpoint, params)
                started = time.monotonic()
                try:
                    response = session.get(endpoint, params=params)
                    log_api_response(EXCHANGE_NAME, endpoint, response.status_code, time.monotonic() - started)
                    if response.status_code >= 500:
                        raise ExchangeRequestError(EXCHANGE_NAME, f"{endpoint}: {response.text[:200]}", response.status_code)
                    return self._decode(endpoint, response)

                except (httpx.HTTPError, ExchangeRequestError) as e:
                    # 4xx replies won't change on retry
                    if isinstance(e, ExchangeRequestError) and e.status is not None and e.status < 500:
                        raise
                    if attempt == self.max_retries - 1:
                        self.logger.error(f"Bitstamp API request failed after {self.max_retries} attempts: {e}")
                        if isinstance(e, ExchangeRequestError):
                            raise
                        raise ExchangeRequestError(EXCHANGE_NAME, f"{endpoint}: {e}") from e

                    # Exponential backoff
                    wait_time = 2 ** attempt
                    self.logger.warning(f"Bitstamp API request failed (attempt {attempt + 1}), retrying in {wait_time}s: {e}")
                    time.sleep(wait_time)

    def _post(self, endpoint: str, data: Dict[str, Any] = None) -> Any:
        """
        Make a signed POST request. Never retried.

        Raises:
            MissingCredentials: If key, secret or customer id is not configured
            ExchangeRequestError: For network or HTTP failures
        """
        data = {k: v for k, v in (data or {}).items() if v is not None}

        log_api_request(EXCHANGE_NAME, endpoint, data)
        payload = {**data, **self._auth_params()}

        with self._session() as session:
            started = time.monotonic()
            try:
                response = session.post(endpoint, data=payload)
            except httpx.HTTPError as e:
                self.logger.error(f"Bitstamp API request to {endpoint} failed: {e}")
                raise ExchangeRequestError(EXCHANGE_NAME, f"{endpoint}: {e}") from e

            log_api_response(EXCHANGE_NAME, endpoint, response.status_code, time.monotonic() - started)
            return self._decode(endpoint, response)

    @staticmethod
    def _market(pair: Pair) -> str:
        name = get_pair_string(pair)
        if name is None:
            raise PairUnsupported(pair, EXCHANGE_NAME)
        return name

    # ============================================
    # Public Endpoints
    # ============================================

    def return_ticker(self, pair: Pair) -> Any:
        """
        Bitstamp Endpoint:
            GET /ticker/{pair}/

        Reply:
            {"last": "42000.00", "high": ..., "low": ..., "vwap": ...,
             "volume": "1234.5", "bid": "41999.50", "ask": "42001.00",
             "timestamp": "1704110400", "open": ...}
        """
        return self._get(f"/ticker/{self._market(pair)}/")

    def return_order_book(self, pair: Pair) -> Any:
        """
        Bitstamp Endpoint:
            GET /order_book/{pair}/

        Reply:
            {"timestamp": "...", "bids": [["price", "amount"], ...],
             "asks": [["price", "amount"], ...]}
        """
        return self._get(f"/order_book/{self._market(pair)}/")

    # ============================================
    # Private Endpoints
    # ============================================

    def buy_limit(
        self,
        pair: Pair,
        quantity: Volume,
        price: Price,
        limit_price: Optional[Price] = None,
        daily_order: Optional[bool] = None
    ) -> Any:
        """
        Place a limit buy order.

        Args:
            pair: Market
            quantity: Amount of base currency
            price: Limit price
            limit_price: Optional sell price placed once the buy executes
            daily_order: If True, the order is cancelled at midnight UTC

        Bitstamp Endpoint:
            POST /buy/{pair}/

        Reply:
            {"id": "1234", "datetime": "...", "type": "0", "price": "...", "amount": "..."}
        """
        return self._post(
            f"/buy/{self._market(pair)}/",
            self._limit_params(quantity, price, limit_price, daily_order)
        )

    def sell_limit(
        self,
        pair: Pair,
        quantity: Volume,
        price: Price,
        limit_price: Optional[Price] = None,
        daily_order: Optional[bool] = None
    ) -> Any:
        """
        Place a limit sell order.

        Bitstamp Endpoint:
            POST /sell/{pair}/
        """
        return self._post(
            f"/sell/{self._market(pair)}/",
            self._limit_params(quantity, price, limit_price, daily_order)
        )

    def buy_market(self, pair: Pair, quantity: Volume) -> Any:
        """
        Bitstamp Endpoint:
            POST /buy/market/{pair}/
        """
        return self._post(f"/buy/market/{self._market(pair)}/", {"amount": format_decimal(quantity)})

    def sell_market(self, pair: Pair, quantity: Volume) -> Any:
        """
        Bitstamp Endpoint:
            POST /sell/market/{pair}/
        """
        return self._post(f"/sell/market/{self._market(pair)}/", {"amount": format_decimal(quantity)})

    def return_balances(self) -> Any:
        """
        Bitstamp Endpoint:
            POST /balance/

        Reply:
            {"usd_balance": "10.50", "usd_available": "10.50", "usd_reserved": "0.00",
             "btc_balance": "0.1", ..., "fee": "0.5"}
        """
        return self._post("/balance/")

    # ============================================
    # Helper Methods
    # ============================================

    @staticmethod
    def _limit_params(
        quantity: Volume,
        price: Price,
        limit_price: Optional[Price],
        daily_order: Optional[bool]
    ) -> Dict[str, Any]:
        params = {
            "amount": format_decimal(quantity),
            "price": format_decimal(price),
        }
        if limit_price is not None:
            params["limit_price"] = format_decimal(limit_price)
        if daily_order is not None:
            params["daily_order"] = "True" if daily_order else "False"
        return params
