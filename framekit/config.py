"""Configuration helpers for framekit."""

from __future__ import annotations

import os
from typing import Mapping
from urllib.parse import urlsplit, urlunsplit

DEFAULT_UI_ORIGIN = "https://framekit.dev"
DEFAULT_TIMEOUT_SECONDS = 30.0

UI_ORIGIN_ENV_VAR = "FRAMEKIT_ORIGIN"
API_ORIGIN_ENV_VAR = "FRAMEKIT_API_ORIGIN"


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")


def get_ui_origin(environ: Mapping[str, str] | None = None) -> str:
    environ = os.environ if environ is None else environ
    return sanitize_base_url(environ.get(UI_ORIGIN_ENV_VAR) or DEFAULT_UI_ORIGIN)


def get_api_origin(environ: Mapping[str, str] | None = None) -> str:
    """Resolve the API origin.

    An explicit FRAMEKIT_API_ORIGIN wins; otherwise the API lives on the
    ``api.`` subdomain of the UI origin.
    """
    environ = os.environ if environ is None else environ
    explicit = environ.get(API_ORIGIN_ENV_VAR)
    if explicit:
        return sanitize_base_url(explicit)

    parts = urlsplit(get_ui_origin(environ))
    return urlunsplit((parts.scheme, f"api.{parts.netloc}", "", "", ""))

