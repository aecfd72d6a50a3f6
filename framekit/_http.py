"""Shared HTTP request utilities for the API client."""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import AuthenticationError, HttpError


def build_headers(api_key: str | None = None) -> dict[str, str]:
    """Build request headers, authenticating when a key is available."""
    headers = {"Content-Type": "application/json", "Accept": "application/json"}

    if api_key:
        headers["Authorization"] = f"apikey {api_key}"

    return headers


def handle_response(response: httpx.Response) -> dict[str, Any]:
    """Process HTTP response, raising appropriate errors for failures."""
    if response.status_code == 401:
        raise AuthenticationError("Invalid or missing API key", response=response)

    if response.status_code >= 400:
        raise HttpError(
            message=response.text or "framekit API call failed",
            status_code=response.status_code,
            response=response,
        )

    if response.content:
        return response.json()
    return {}
