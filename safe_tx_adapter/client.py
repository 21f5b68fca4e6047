"""Safe Transaction Service API client."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

import httpx
from eth_utils import to_checksum_address
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .auth import SafeApiKeyAuth
from .config import TX_SERVICE_SHORT_NAMES, SafeTxServiceSettings
from .exceptions import (
    SafeTxServiceNetworkError,
    SafeTxServiceRateLimitError,
    SafeTxServiceServerError,
    UnsupportedChainError,
    error_for_status,
    parse_retry_after,
)
from .helpers import collect_all_pages
from .schemas import (
    MessageListResponse,
    MultisigTransaction,
    MultisigTransactionListResponse,
    SafeInfo,
    SafeMessage,
    SignatureRequest,
)


class SafeTransactionServiceClient:
    """Async client for the Safe Transaction Service of one chain.

    Usage:
        async with SafeTransactionServiceClient(1, settings) as client:
            pending = await client.list_pending_transactions(safe_address)
    """

    def __init__(
        self,
        chain_id: int,
        settings: SafeTxServiceSettings | None = None,
        short_name: str | None = None,
    ):
        """Initialize client.

        Args:
            chain_id: Chain the service instance tracks.
            settings: Adapter settings. If not provided, loads from environment.
            short_name: Network short name; looked up from the chain id if omitted.
        """
        self.chain_id = chain_id
        self.settings = settings or SafeTxServiceSettings()
        self.short_name = short_name or TX_SERVICE_SHORT_NAMES.get(chain_id)
        if not self.short_name:
            raise UnsupportedChainError(chain_id)
        self.auth = SafeApiKeyAuth(self.settings.api_key)
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Service root for this chain."""
        return f"{self.settings.base_url.rstrip('/')}/{self.short_name}/api"

    async def open(self) -> "SafeTransactionServiceClient":
        """Create the underlying HTTP client if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.settings.timeout_seconds),
            )
        return self

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SafeTransactionServiceClient":
        """Enter async context."""
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, ensuring it's initialized."""
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with SafeTransactionServiceClient(...)'"
            )
        return self._client

    def _build_endpoint(
        self, path: str, params: dict[str, Any] | None = None
    ) -> str:
        """Build endpoint path with query parameters.

        Args:
            path: API path (e.g., '/v1/safes/0x.../').
            params: Optional query parameters.

        Returns:
            Endpoint with query string if params provided.
        """
        if not params:
            return path
        filtered = {k: v for k, v in params.items() if v is not None}
        if not filtered:
            return path
        return f"{path}?{urlencode(filtered)}"

    def _handle_error(self, response: httpx.Response) -> None:
        """Raise the typed exception for an error response.

        Raises:
            SafeTxServiceAuthError: For 401/403 responses.
            SafeTxServiceNotFoundError: For 404 responses.
            SafeTxServiceValidationError: For 400/422 responses.
            SafeTxServiceRateLimitError: For 429 responses, with ``retry_after``.
            SafeTxServiceServerError: For 5xx responses.
            SafeTxServiceHTTPError: For other error responses.
        """
        if response.is_success:
            return

        try:
            details = response.json()
        except ValueError:
            details = response.text

        status = response.status_code
        error_class = error_for_status(status)
        if error_class is SafeTxServiceRateLimitError:
            raise SafeTxServiceRateLimitError(
                f"HTTP {status}",
                details,
                status_code=status,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
            )
        raise error_class(f"HTTP {status}", details, status_code=status)

    def _create_retry_decorator(self):
        """Create retry decorator with current settings."""
        return retry(
            retry=retry_if_exception_type(
                (SafeTxServiceServerError, SafeTxServiceNetworkError)
            ),
            stop=stop_after_attempt(self.settings.retry_attempts),
            wait=wait_exponential(
                min=self.settings.retry_min_wait_seconds,
                max=self.settings.retry_max_wait_seconds,
            ),
            reraise=True,
        )

    async def _send(
        self, method: str, endpoint: str, body: dict[str, Any] | None
    ) -> Any:
        headers = self.auth.get_headers(body)
        try:
            response = await self.client.request(
                method=method,
                url=endpoint,
                headers=headers,
                json=body if body else None,
            )
        except httpx.TimeoutException as e:
            raise SafeTxServiceNetworkError(f"Timeout: {e}")
        except httpx.TransportError as e:
            raise SafeTxServiceNetworkError(f"Network error: {e}")

        self._handle_error(response)
        if not response.content:
            return None
        return response.json()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request to the service.

        Reads are retried on server and network errors. Writes are sent
        exactly once so a rejected signature surfaces to the caller.

        Args:
            method: HTTP method.
            path: API path, or an absolute URL such as a pagination link.
            params: Query parameters.
            body: Request body.

        Returns:
            Response JSON data, or None for an empty body.
        """
        endpoint = self._build_endpoint(path, params)

        if method != "GET":
            return await self._send(method, endpoint, body)

        @self._create_retry_decorator()
        async def _do_request():
            return await self._send(method, endpoint, body)

        return await _do_request()

    # ==================== Safes API ====================

    async def get_safe_info(self, safe_address: str) -> SafeInfo:
        """Get Safe metadata (nonce, threshold, owners, modules).

        Args:
            safe_address: Safe address.

        Returns:
            Safe information.
        """
        address = to_checksum_address(safe_address)
        data = await self._request("GET", f"/v1/safes/{address}/")
        return SafeInfo(**data)

    # ==================== Transactions API ====================

    async def _get_transactions_page(self, url: str) -> MultisigTransactionListResponse:
        data = await self._request("GET", url)
        return MultisigTransactionListResponse(**data)

    async def list_pending_transactions(
        self, safe_address: str, current_nonce: int | None = None
    ) -> list[MultisigTransaction]:
        """List non-executed transactions at or above the Safe's nonce.

        Args:
            safe_address: Safe address.
            current_nonce: Safe nonce; fetched from the service when omitted.

        Returns:
            Pending transactions in service order (ascending nonce).
        """
        address = to_checksum_address(safe_address)
        if current_nonce is None:
            current_nonce = (await self.get_safe_info(address)).nonce

        data = await self._request(
            "GET",
            f"/v1/safes/{address}/multisig-transactions/",
            params={
                "executed": "false",
                "nonce__gte": current_nonce,
                "ordering": "nonce",
            },
        )
        first_page = MultisigTransactionListResponse(**data)
        return await collect_all_pages(
            first_page, self._get_transactions_page, self.settings.max_pages
        )

    async def confirm_transaction(self, safe_tx_hash: str, signature: str) -> None:
        """Submit an owner confirmation for a pending transaction.

        Args:
            safe_tx_hash: Safe transaction hash.
            signature: Owner signature over the hash.
        """
        await self._request(
            "POST",
            f"/v1/multisig-transactions/{safe_tx_hash}/confirmations/",
            body=SignatureRequest(signature=signature).model_dump(),
        )

    # ==================== Messages API ====================

    async def _get_messages_page(self, url: str) -> MessageListResponse:
        data = await self._request("GET", url)
        return MessageListResponse(**data)

    async def list_messages(self, safe_address: str) -> list[SafeMessage]:
        """List off-chain messages of a Safe.

        Args:
            safe_address: Safe address.

        Returns:
            Messages in service order.
        """
        address = to_checksum_address(safe_address)
        data = await self._request("GET", f"/v1/safes/{address}/messages/")
        first_page = MessageListResponse(**data)
        return await collect_all_pages(
            first_page, self._get_messages_page, self.settings.max_pages
        )

    async def add_message_signature(self, message_hash: str, signature: str) -> None:
        """Add an owner signature to a Safe message.

        Args:
            message_hash: Safe message hash.
            signature: Owner signature over the hash.
        """
        await self._request(
            "POST",
            f"/v1/messages/{message_hash}/signatures/",
            body=SignatureRequest(signature=signature).model_dump(),
        )
