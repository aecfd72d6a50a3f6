"""Authentication utilities for framekit.

Lightweight imports (credentials, types) are eager. The login flow pulls in
the HTTP client and the terminal UI, so it is imported lazily.
"""

from .credentials import CredentialStore, get_config_path
from .types import ApiKey, AuthRequest, PollResult, PollStatus, User, Workspace

_FLOW_EXPORTS = frozenset({"AuthEffects", "format_user", "login", "logout", "poll_for_api_key", "whoami"})


def __getattr__(name: str):
    if name in _FLOW_EXPORTS:
        from . import flow

        return getattr(flow, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "get_config_path",
    "format_user",
    "login",
    "logout",
    "poll_for_api_key",
    "whoami",
    "ApiKey",
    "AuthEffects",
    "AuthRequest",
    "CredentialStore",
    "PollResult",
    "PollStatus",
    "User",
    "Workspace",
]
