"""Test harness configuration.

This repo uses a `src/` layout. Ensure tests always import the in-repo code
even when an older `slashkit` is installed.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

DEFAULT_TEST_TIMEOUT_SECONDS = 30


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_path = str(repo_root / "src")
    if sys.path[:1] != [src_path] and src_path not in sys.path:
        sys.path.insert(0, src_path)


def pytest_collection_modifyitems(
    session: pytest.Session, config: pytest.Config, items: list[pytest.Item]
) -> None:
    """
    Apply a default per-test timeout.

    This relies on `pytest-timeout` when installed; if it isn't installed, the
    marker is inert but still documents the intent.
    """
    _ = session, config
    for item in items:
        item.add_marker(pytest.mark.timeout(DEFAULT_TEST_TIMEOUT_SECONDS))


class RecordingExecutor:
    """RequestExecutor double that records every submission."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[Any, dict[str, Any]]] = []
        self._error = error

    async def submit(self, route: Any, body: dict[str, Any]) -> None:
        self.calls.append((route, body))
        if self._error is not None:
            raise self._error


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def autocomplete_payload() -> dict[str, Any]:
    return {
        "id": "1100",
        "token": "tok-autocomplete",
        "type": 4,
        "application_id": "42",
        "channel_id": "555",
        "guild_id": "777",
        "member": {"user": {"id": "user-1"}},
        "data": {
            "id": "9001",
            "name": "fruit",
            "type": 1,
            "options": [
                {
                    "type": 2,
                    "name": "basket",
                    "options": [
                        {
                            "type": 1,
                            "name": "add",
                            "options": [
                                {"type": 3, "name": "kind", "value": "ap", "focused": True},
                                {"type": 4, "name": "count", "value": 3},
                            ],
                        }
                    ],
                }
            ],
        },
    }


@pytest.fixture()
def command_payload() -> dict[str, Any]:
    return {
        "id": "2200",
        "token": "tok-command",
        "type": 2,
        "application_id": "42",
        "channel": {"id": "556"},
        "user": {"id": "user-2"},
        "data": {
            "id": "9002",
            "name": "feedback",
            "type": 1,
            "options": [{"type": 3, "name": "topic", "value": "docs"}],
        },
    }


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """The library is built on asyncio; run anyio-marked tests on that backend."""
    return "asyncio"
