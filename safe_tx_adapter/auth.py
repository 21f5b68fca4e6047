"""API key authentication for the Safe Transaction Service."""

from __future__ import annotations

from typing import Any


class SafeApiKeyAuth:
    """Builds request headers for the hosted transaction service.

    The gateway expects the key as a bearer token:
        Authorization: Bearer <api key>
    """

    def __init__(self, api_key: str):
        """Initialize authenticator.

        Args:
            api_key: The Safe API key.
        """
        self.api_key = api_key

    def get_headers(self, body: dict[str, Any] | None = None) -> dict[str, str]:
        """Generate headers for a request.

        Args:
            body: Optional request body; adds a JSON content type when present.

        Returns:
            Dictionary of request headers.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

        if body:
            headers["Content-Type"] = "application/json"

        return headers

    def __repr__(self) -> str:
        return f"SafeApiKeyAuth(api_key='{self.api_key[:4]}...')"
