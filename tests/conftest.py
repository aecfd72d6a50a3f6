"""Test configuration for framekit tests."""

from __future__ import annotations

from typing import Any

import pytest

from framekit import ApiClient
from framekit.auth.credentials import CredentialStore
from framekit.exceptions import PromptCancelled


class FakeSpinner:
    def __init__(self, events: list[tuple[str, Any]]) -> None:
        self.events = events

    def start(self, message: str) -> None:
        self.events.append(("spinner.start", message))

    def message(self, message: str) -> None:
        self.events.append(("spinner.message", message))

    def stop(self, message: str, *, failed: bool = False) -> None:
        self.events.append(("spinner.stop_failed" if failed else "spinner.stop", message))


class FakeInteraction:
    """Scripted stand-in for RichInteraction.

    ``answers`` are consumed in order by text/select/confirm. An answer of
    ``PromptCancelled`` simulates the user cancelling that prompt. Text
    answers go through the validator like real input; ``""`` means "accept
    the default".
    """

    def __init__(self, answers: list[Any] | None = None) -> None:
        self.answers = list(answers or [])
        self.events: list[tuple[str, Any]] = []
        self.validation_errors: list[str] = []

    def _next(self) -> Any:
        answer = self.answers.pop(0)
        if answer is PromptCancelled:
            raise PromptCancelled("cancelled")
        return answer

    def intro(self, title: str) -> None:
        self.events.append(("intro", title))

    def outro(self, message: str) -> None:
        self.events.append(("outro", message))

    def cancel(self, message: str) -> None:
        self.events.append(("cancel", message))

    def log(self, message: str = "") -> None:
        self.events.append(("log", message))

    def step(self, message: str) -> None:
        self.events.append(("step", message))

    def warn(self, message: str) -> None:
        self.events.append(("warn", message))

    def note(self, message: str, title: str | None = None) -> None:
        self.events.append(("note", message))

    def text(self, message, *, default="", placeholder=None, validate=None):
        self.events.append(("text", message))
        while True:
            value = self._next()
            error = validate(value) if validate else None
            if not error:
                return value or default
            self.validation_errors.append(error)

    def select(self, message, options, *, initial_value=None):
        self.events.append(("select", (message, initial_value)))
        return self._next()

    def confirm(self, message, *, default=True):
        self.events.append(("confirm", message))
        return self._next()

    def spinner(self) -> FakeSpinner:
        return FakeSpinner(self.events)

    def logged(self, kind: str) -> list[Any]:
        return [payload for event, payload in self.events if event == kind]


@pytest.fixture
def ui() -> FakeInteraction:
    return FakeInteraction()


@pytest.fixture
def store(tmp_path) -> CredentialStore:
    """Credential store backed by a temp config file with no env override."""
    return CredentialStore(config_path=tmp_path / ".framekit" / "config.json", environ={})


@pytest.fixture
def client():
    """Shared ApiClient fixture pointed at a test origin."""
    client = ApiClient(base_url="https://api.framekit.test")
    yield client
    client.close()
