"""Credential storage for framekit.

Stores the API key in ~/.framekit/config.json with restrictive permissions.
A key in the FRAMEKIT_TOKEN environment variable takes precedence.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

from ..exceptions import NotAuthenticated
from .constants import CONFIG_DIR, CONFIG_FILE, ERROR_NOT_AUTHENTICATED, TOKEN_ENV_VAR
from .types import ApiKey

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    return Path.home() / CONFIG_DIR / CONFIG_FILE


_PLACEHOLDER_KEYS = frozenset({"YOUR_API_KEY"})


def _is_real_key(key: object) -> bool:
    return isinstance(key, str) and bool(key.strip()) and key.strip() not in _PLACEHOLDER_KEYS


class CredentialStore:
    """Reads, writes and erases the single active API key."""

    def __init__(
        self,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.config_path = config_path if config_path is not None else get_config_path()
        self._environ = environ if environ is not None else os.environ

    def load_config(self) -> dict[str, Any] | None:
        """Load the config file.

        Returns None if file doesn't exist, is corrupt, or is not a dict.
        """
        if not self.config_path.exists():
            return None
        try:
            data = json.loads(self.config_path.read_text())
            if not isinstance(data, dict):
                return None
            return data
        except (json.JSONDecodeError, OSError):
            return None

    def save_config(self, config: dict[str, Any]) -> None:
        """Write the config file atomically with restrictive permissions.

        - Directory: 0700 (owner read/write/execute only)
        - File: 0600 (owner read/write only)
        - Atomic: writes to temp file in same dir, then os.replace()
        """
        config_dir = self.config_path.parent
        config_dir.mkdir(parents=True, exist_ok=True)
        os.chmod(config_dir, 0o700)

        content = json.dumps(config, indent=2)

        fd, tmp_path = tempfile.mkstemp(dir=config_dir, prefix=".config_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(content)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.config_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self) -> ApiKey:
        """Resolve the active API key.

        Order: FRAMEKIT_TOKEN env var > config file. Placeholder values like
        ``"YOUR_API_KEY"`` are treated as missing.

        Raises:
            NotAuthenticated: If neither source holds a key.
        """
        env_key = self._environ.get(TOKEN_ENV_VAR)
        if _is_real_key(env_key):
            return ApiKey(key=env_key.strip(), source="env", env_var=TOKEN_ENV_VAR)

        config = self.load_config()
        auth = config.get("auth") if config else None
        if isinstance(auth, dict) and _is_real_key(auth.get("key")):
            return ApiKey(key=auth["key"], id=auth.get("id"), source="file")

        raise NotAuthenticated(ERROR_NOT_AUTHENTICATED)

    def set(self, api_key: ApiKey | None) -> None:
        """Store ``api_key``, or erase the stored key when it is None.

        Other entries in the config file are left untouched.
        """
        config = self.load_config()
        if api_key is None:
            if not config or "auth" not in config:
                return
            del config["auth"]
            logger.debug("Removing stored API key from %s", self.config_path)
        else:
            config = config or {}
            config["auth"] = {"id": api_key.id, "key": api_key.key}
            logger.debug("Saving API key %s to %s", api_key.id, self.config_path)
        self.save_config(config)
