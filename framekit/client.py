"""Synchronous HTTP client for the framekit API."""

from __future__ import annotations

import logging
import socket
from typing import Any, Iterable

import httpx

from ._http import build_headers, handle_response
from .auth.constants import AUTH_REQUEST_ENDPOINT, AUTH_REQUEST_POLL_ENDPOINT, CURRENT_USER_ENDPOINT
from .auth.types import ApiKey, AuthRequest, PollResult, User
from .config import DEFAULT_TIMEOUT_SECONDS, get_api_origin, sanitize_base_url
from .exceptions import NetworkError

logger = logging.getLogger(__name__)


class ApiClient:
    """Client for the framekit authentication API.

    Example:
        >>> from framekit import ApiClient
        >>> with ApiClient() as client:
        ...     request = client.post_auth_request(["projects:deploy"])
        ...     result = client.post_auth_request_poll(request.id)

    Unauthenticated calls (starting and polling an auth request) work
    without a key; ``get_current_user`` needs one.
    """

    def __init__(
        self,
        api_key: ApiKey | None = None,
        *,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Key used for authenticated calls. Can be set later
                with ``set_api_key``.
            base_url: API origin (default: resolved from FRAMEKIT_API_ORIGIN
                or FRAMEKIT_ORIGIN).
            timeout: Request timeout in seconds (default: 30).
        """
        self._api_key = api_key
        self._base_url = sanitize_base_url(base_url or get_api_origin())
        self._client = httpx.Client(timeout=timeout)

    def set_api_key(self, api_key: ApiKey | None) -> None:
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        return build_headers(self._api_key.key if self._api_key else None)

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.post(url, headers=self._headers(), json=payload)
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach {url}: {e}") from e
        return handle_response(response)

    def _get(self, path: str) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.get(url, headers=self._headers())
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach {url}: {e}") from e
        return handle_response(response)

    def post_auth_request(self, scopes: Iterable[str]) -> AuthRequest:
        """Start a device authorization request for ``scopes``.

        Returns:
            The request id and the confirmation code to show the user.
        """
        data = self._post(
            AUTH_REQUEST_ENDPOINT,
            {"scopes": sorted(scopes), "deviceDescription": socket.gethostname()},
        )
        request = AuthRequest.from_dict(data)
        logger.debug("Started auth request %s", request.id)
        return request

    def post_auth_request_poll(self, request_id: str) -> PollResult:
        """Check the status of an auth request once. Never waits or retries."""
        return PollResult.from_dict(self._post(AUTH_REQUEST_POLL_ENDPOINT, {"id": request_id}))

    def get_current_user(self) -> User:
        """Fetch the profile of the user owning the current key.

        Raises:
            AuthenticationError: If the key is invalid or revoked.
        """
        return User.from_dict(self._get(CURRENT_USER_ENDPOINT))

    def close(self) -> None:
        """Release the underlying HTTP client resources."""
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        self.close()
