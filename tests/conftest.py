"""Shared test fixtures for nuget-index-checker test suite."""

from __future__ import annotations

import os
from collections.abc import Iterable
from unittest.mock import AsyncMock

import httpx
import pytest

from nuget_index_checker.domain.entities import CheckRequest, ProbeOutcome

REGISTRY_URL = "https://www.nuget.org"

# ---------------------------------------------------------------------------
# Fake ports
# ---------------------------------------------------------------------------


class FakeProbe:
    """Scripted ``ResourceProbePort``.

    Each call consumes the next item; the last item repeats once the
    script runs out. Exceptions in the script are raised.
    """

    def __init__(self, script: Iterable[ProbeOutcome | Exception]) -> None:
        self._script = list(script)
        self.calls: list[str] = []

    async def probe(self, url: str) -> ProbeOutcome:
        self.calls.append(url)
        index = min(len(self.calls), len(self._script)) - 1
        item = self._script[index]
        if isinstance(item, Exception):
            raise item
        return item


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sleep() -> AsyncMock:
    """Injectable wait primitive; records delays without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture()
def check_request() -> CheckRequest:
    return CheckRequest(
        package="NuGetPackage",
        version="1.0.0",
        max_attempts=3,
        delay_ms=1_000,
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host INPUT_*/config env vars from leaking into tests."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "NUGET_INDEX_CHECKER_", "GITHUB_OUTPUT")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def make_probe() -> type[FakeProbe]:
    return FakeProbe


@pytest.fixture()
async def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking (closed on teardown)."""
    async with httpx.AsyncClient() as client:
        yield client
