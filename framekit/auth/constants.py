"""Constants for framekit authentication and credential storage."""

from __future__ import annotations

from urllib.parse import urlencode

# Scopes requested by `framekit login`
LOGIN_SCOPES = ("projects:deploy", "projects:create")

# Device authorization
AUTH_DEVICE_PATH = "/auth-device"
POLL_INTERVAL_SECONDS = 1.0

# Auth API endpoints, relative to the API origin
AUTH_REQUEST_ENDPOINT = "/cli/auth/request"
AUTH_REQUEST_POLL_ENDPOINT = "/cli/auth/request/poll"
CURRENT_USER_ENDPOINT = "/cli/user"

# Credential storage
CONFIG_DIR = ".framekit"
CONFIG_FILE = "config.json"
TOKEN_ENV_VAR = "FRAMEKIT_TOKEN"

# Error messages
ERROR_CODE_EXPIRED = "That confirmation code expired."
ERROR_CODE_CONSUMED = "That confirmation code has already been used."
ERROR_NO_KEY_RETURNED = "No API key returned from server."
ERROR_NOT_AUTHENTICATED = "You need to authenticate. Run `framekit login` to log in."


def command_instruction(command: str) -> str:
    """Render how to invoke a framekit subcommand."""
    return f"framekit {command}"


def build_confirm_url(ui_origin: str, confirmation_code: str) -> str:
    """Build the page URL where the user approves a confirmation code."""
    return f"{ui_origin}{AUTH_DEVICE_PATH}?{urlencode({'code': confirmation_code})}"
