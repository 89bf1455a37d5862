from __future__ import annotations

import asyncio
import math

import structlog

from nuget_index_checker.application.use_cases.check_package_indexed import (
    CheckPackageIndexedUseCase,
)
from nuget_index_checker.domain.entities import (
    CheckRequest,
    IndexCheckReport,
    ProbeError,
    ReportEvent,
    ValidationError,
)
from nuget_index_checker.domain.ports import ResourceProbePort, SleepFn
from nuget_index_checker.domain.validation import validate_check_request

log = structlog.get_logger(__name__)

_STARTED = "Starting NuGet Package Index Checker..."
_FINISHED = "NuGet Package Index Checker finished work..."


class RunIndexCheckUseCase:
    """Validate a request, poll the registry, and summarize the outcome.

    Host reporting is left to the caller: the returned report carries the
    ``indexed`` flag, the failure message and the events to emit.
    """

    def __init__(
        self,
        *,
        probe: ResourceProbePort,
        registry_url: str,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._probe = probe
        self._registry_url = registry_url
        self._sleep = sleep

    async def execute(self, request: CheckRequest) -> IndexCheckReport:
        events: list[ReportEvent] = [
            ReportEvent("debug", _STARTED),
            ReportEvent("debug", f"Package Name: {request.package}"),
            ReportEvent("debug", f"Package Version: {request.version}"),
            ReportEvent("debug", f"Attempts: {request.max_attempts}"),
        ]

        try:
            validate_check_request(request)
        except ValidationError as e:
            log.warning("validation_failed", field=e.field_name, value=e.value)
            events.append(
                ReportEvent("error", f"Validation Error: {e.detail}: {e.value}")
            )
            events.append(ReportEvent("debug", _FINISHED))
            return IndexCheckReport(
                indexed=False, failed=True, message=e.message, events=tuple(events)
            )

        poller = CheckPackageIndexedUseCase(
            probe=self._probe,
            registry_url=self._registry_url,
            delay_ms=request.delay_ms,
            sleep=self._sleep,
            on_event=events.append,
        )
        # Fractional budgets behave like the loop bound they are: 2.5 -> 2.
        max_attempts = math.floor(float(request.max_attempts))  # type: ignore[arg-type]

        try:
            indexed = await poller.execute(
                request.package, request.version, max_attempts
            )
        except ProbeError as e:
            log.error(
                "index_check_failed",
                url=e.url,
                status_code=e.status_code,
                error=str(e),
            )
            events.append(ReportEvent("error", f"Error during package check: {e}"))
            events.append(ReportEvent("debug", _FINISHED))
            return IndexCheckReport(
                indexed=False, failed=True, message=str(e), events=tuple(events)
            )

        events.append(
            ReportEvent("info", f"Package indexed status: {str(indexed).lower()}")
        )
        message = None
        if not indexed:
            message = (
                f"Package {request.package} version {request.version} is not indexed."
            )
        events.append(ReportEvent("debug", _FINISHED))
        return IndexCheckReport(
            indexed=indexed,
            failed=not indexed,
            message=message,
            events=tuple(events),
        )
