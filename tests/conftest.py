"""Shared pytest fixtures for mailctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from mailctl.config.settings import MailSettings
from mailctl.infrastructure.store import MailStore


@pytest.fixture(autouse=True)
def _no_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory so no stray mailctl.toml is found."""
    monkeypatch.delenv("MAILCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> MailSettings:
    """Default settings (two seeded accounts: user1 and user2)."""
    return MailSettings.from_cli()


@pytest.fixture
def store(settings: MailSettings) -> Iterator[MailStore]:
    """Seeded in-memory store, closed after the test."""
    s = MailStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def empty_store(settings: MailSettings) -> Iterator[MailStore]:
    """In-memory store with no accounts."""
    s = MailStore(settings, seed=False)
    try:
        yield s
    finally:
        s.close()

