"""Device authorization login flow for framekit.

Implements the confirmation-code flow: start auth request -> user approves the
code in the browser -> poll until the request resolves -> save the API key.
All user-facing output goes through the injected Interaction surface.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable
from urllib.parse import urlsplit

from rich.markup import escape

from ..client import ApiClient
from ..config import get_ui_origin
from ..exceptions import AuthConsumed, AuthError, AuthExpired, AuthUnknownStatus, HttpError
from ..ui import Interaction
from .constants import (
    ERROR_CODE_CONSUMED,
    ERROR_CODE_EXPIRED,
    ERROR_NO_KEY_RETURNED,
    LOGIN_SCOPES,
    POLL_INTERVAL_SECONDS,
    build_confirm_url,
    command_instruction,
)
from .credentials import CredentialStore
from .types import ApiKey, PollStatus, User, Workspace

logger = logging.getLogger(__name__)


@dataclass
class AuthEffects:
    """Everything the auth commands touch outside of plain computation."""

    ui: Interaction
    store: CredentialStore = field(default_factory=CredentialStore)
    client_factory: Callable[[ApiKey | None], ApiClient] = ApiClient
    sleep: Callable[[float], None] = time.sleep
    ui_origin: str = field(default_factory=get_ui_origin)

    @property
    def hostname(self) -> str:
        return urlsplit(self.ui_origin).hostname or self.ui_origin


def format_user(user: User | Workspace) -> str:
    return f"{user.name} (@{user.login})" if user.name else f"@{user.login}"


def poll_for_api_key(
    client: ApiClient,
    request_id: str,
    *,
    sleep: Callable[[float], None] = time.sleep,
    interval: float = POLL_INTERVAL_SECONDS,
) -> ApiKey:
    """Poll an auth request until it resolves.

    ``pending`` waits ``interval`` seconds and polls again with no upper bound;
    the server expiring the code is what ends an abandoned login. Any other
    status ends the loop.

    Raises:
        AuthExpired: The confirmation code expired.
        AuthConsumed: The confirmation code was already used.
        AuthUnknownStatus: The server returned a status we don't know.
    """
    while True:
        result = client.post_auth_request_poll(request_id)
        logger.debug("Auth request %s is %s", request_id, result.status)

        if result.status == PollStatus.PENDING:
            sleep(interval)
            continue
        if result.status == PollStatus.ACCEPTED:
            if result.api_key is None:
                raise AuthError(ERROR_NO_KEY_RETURNED)
            return result.api_key
        if result.status == PollStatus.EXPIRED:
            raise AuthExpired(ERROR_CODE_EXPIRED)
        if result.status == PollStatus.CONSUMED:
            raise AuthConsumed(ERROR_CODE_CONSUMED)
        raise AuthUnknownStatus(result.status)


def login(effects: AuthEffects) -> User:
    """Run the full device authorization login.

    The key is saved only once the poll response has delivered it; a failed
    or abandoned login leaves the stored credential untouched.
    """
    ui = effects.ui
    ui.intro("framekit login")

    with effects.client_factory(None) as client:
        request = client.post_auth_request(LOGIN_SCOPES)
        confirm_url = build_confirm_url(effects.ui_origin, request.confirmation_code)

        ui.step(
            f"Your confirmation code is [bold yellow]{escape(request.confirmation_code)}[/bold yellow]\n"
            f"Open [link={confirm_url}]{escape(confirm_url)}[/link]\n"
            "in your browser, and confirm the code matches."
        )
        spinner = ui.spinner()
        spinner.start("Waiting for confirmation...")

        failure = "Failed to confirm code."
        try:
            api_key = poll_for_api_key(client, request.id, sleep=effects.sleep)
            failure = "Could not complete login."
            effects.store.set(api_key)
            client.set_api_key(api_key)
            user = client.get_current_user()
        except Exception:
            spinner.stop(failure, failed=True)
            raise

    spinner.stop(f"You are logged into {effects.hostname} as {format_user(user)}.")
    if not user.workspaces:
        ui.warn("You don't have any workspaces to deploy to.")
    elif len(user.workspaces) > 1:
        ui.note(
            "\n".join(
                [
                    "You have access to the following workspaces:",
                    "",
                    *(f" * {format_user(workspace)}" for workspace in user.workspaces),
                ]
            )
        )

    ui.outro("🎉 Happy building!")
    return user


def logout(effects: AuthEffects) -> None:
    """Erase the stored API key. Safe to call when logged out."""
    effects.store.set(None)


def whoami(effects: AuthEffects) -> User | None:
    """Show who the active key belongs to.

    Returns None when the server rejects the key; the message explains how
    to fix it for the key's source.

    Raises:
        NotAuthenticated: If no key is configured.
    """
    ui = effects.ui
    api_key = effects.store.get()

    with effects.client_factory(api_key) as client:
        try:
            user = client.get_current_user()
        except HttpError as e:
            if e.status_code != 401:
                raise
            if api_key.source == "env":
                ui.log(f"Your API key is invalid. Check the value of the {api_key.env_var} environment variable.")
            elif api_key.source == "file":
                ui.log(f"Your API key is invalid. Run `{command_instruction('login')}` to log in again.")
            else:
                ui.log("Your API key is invalid.")
            return None

    ui.log()
    ui.log(f"You are logged into {effects.hostname} as {format_user(user)}.")
    ui.log()
    ui.log("You have access to the following workspaces:")
    for workspace in user.workspaces:
        ui.log(f" * {format_user(workspace)}")
    ui.log()
    return user
