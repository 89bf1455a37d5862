"""Composition root: wires config, HTTP client, probe and use cases."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from nuget_index_checker.application.use_cases import RunIndexCheckUseCase
from nuget_index_checker.infrastructure.config import CheckerConfig
from nuget_index_checker.infrastructure.registry import HttpxResourceProbe

log = structlog.get_logger(__name__)


def create_http_client(config: CheckerConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )


@asynccontextmanager
async def index_check_runner(
    config: CheckerConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[RunIndexCheckUseCase]:
    """Yield a ready ``RunIndexCheckUseCase``; closes the client it created.

    A caller-supplied *http_client* is used as-is and left open.
    """
    owns_client = http_client is None
    client = http_client if http_client is not None else create_http_client(config)
    log.debug("http_client_initialized", registry_url=config.registry_url)

    probe = HttpxResourceProbe(client, timeout=config.http_timeout_seconds)
    runner = RunIndexCheckUseCase(probe=probe, registry_url=config.registry_url)

    try:
        yield runner
    finally:
        if owns_client:
            await client.aclose()
            log.debug("http_client_closed")
