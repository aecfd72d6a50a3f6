"""framekit - log in to the framekit API and scaffold new projects."""

from importlib.metadata import PackageNotFoundError, version

from .client import ApiClient
from .exceptions import (
    AuthenticationError,
    FramekitError,
    HttpError,
    NetworkError,
    NotAuthenticated,
    UnresolvedPlaceholder,
)

__all__ = [
    "ApiClient",
    "FramekitError",
    "AuthenticationError",
    "HttpError",
    "NetworkError",
    "NotAuthenticated",
    "UnresolvedPlaceholder",
]

try:
    __version__ = version("framekit")
except PackageNotFoundError:
    __version__ = "0.1.0"
