"""Poll the registry until a package version is indexed or attempts run out."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

import structlog

from nuget_index_checker.domain.entities import (
    DEFAULT_DELAY_MS,
    ProbeOutcome,
    ReportEvent,
    build_package_url,
)
from nuget_index_checker.domain.ports import ResourceProbePort, SleepFn

log = structlog.get_logger(__name__)


class CheckPackageIndexedUseCase:
    """Fixed-delay retry loop around a single ``ResourceProbePort``.

    - ``FOUND`` short-circuits with ``True``.
    - ``NOT_FOUND`` waits ``delay_ms`` and retries, except after the
      final attempt.
    - ``ProbeError`` is not retried and propagates to the caller.

    Exhaustion is a normal outcome (``False``), not an exception.

    Progress also goes to *on_event* as info ``ReportEvent``s when given.
    """

    def __init__(
        self,
        *,
        probe: ResourceProbePort,
        registry_url: str,
        delay_ms: int = DEFAULT_DELAY_MS,
        sleep: SleepFn = asyncio.sleep,
        on_event: Optional[Callable[[ReportEvent], None]] = None,
    ) -> None:
        self._probe = probe
        self._registry_url = registry_url
        self._delay_ms = delay_ms
        self._sleep = sleep
        self._on_event = on_event

    def _report(self, message: str) -> None:
        if self._on_event is not None:
            self._on_event(ReportEvent("info", message))

    async def execute(self, package: str, version: str, max_attempts: int) -> bool:
        url = build_package_url(self._registry_url, package, version)
        delay_seconds = self._delay_ms / 1000

        for attempt in range(1, max_attempts + 1):
            outcome = await self._probe.probe(url)

            if outcome == ProbeOutcome.FOUND:
                log.info(
                    "package_indexed",
                    package=package,
                    version=version,
                    attempt=attempt,
                )
                self._report(
                    f"Package {package} version {version} is indexed "
                    f"on {self._registry_url}."
                )
                return True

            if attempt < max_attempts:
                log.info(
                    "package_not_indexed_yet",
                    package=package,
                    version=version,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    retry_in_seconds=delay_seconds,
                )
                self._report(
                    f"Attempt {attempt} of {max_attempts}: Package not indexed yet. "
                    f"Retrying in {delay_seconds:g} seconds..."
                )
                await self._sleep(delay_seconds)

        log.info(
            "package_not_indexed",
            package=package,
            version=version,
            attempts=max_attempts,
        )
        return False
