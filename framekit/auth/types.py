"""Typed records exchanged with the authentication API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ApiKey:
    """The single active API key and where it came from."""

    key: str
    id: str | None = None
    source: str = "login"  # "login", "env" or "file"
    env_var: str | None = None


@dataclass(frozen=True)
class AuthRequest:
    """A pending device authorization request."""

    id: str
    confirmation_code: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthRequest:
        return cls(id=data["id"], confirmation_code=data["confirmationCode"])


class PollStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CONSUMED = "consumed"


@dataclass(frozen=True)
class PollResult:
    """Outcome of a single poll. ``status`` keeps unrecognized values verbatim."""

    status: str
    api_key: ApiKey | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PollResult:
        status = str(data.get("status"))
        api_key = None
        raw_key = data.get("apiKey")
        if status == PollStatus.ACCEPTED and isinstance(raw_key, dict) and raw_key.get("key"):
            api_key = ApiKey(key=raw_key["key"], id=raw_key.get("id"), source="login")
        return cls(status=status, api_key=api_key)


@dataclass(frozen=True)
class Workspace:
    login: str
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Workspace:
        return cls(login=data["login"], name=data.get("name") or None)


@dataclass(frozen=True)
class User:
    """The authenticated user's profile."""

    login: str
    name: str | None = None
    workspaces: list[Workspace] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            login=data["login"],
            name=data.get("name") or None,
            workspaces=[Workspace.from_dict(w) for w in data.get("workspaces") or []],
        )
