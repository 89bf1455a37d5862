"""Tests for CheckPackageIndexedUseCase (the retry loop)."""

from __future__ import annotations

from unittest.mock import AsyncMock, call

import pytest
from structlog.testing import capture_logs

from nuget_index_checker.application.use_cases.check_package_indexed import (
    CheckPackageIndexedUseCase,
)
from nuget_index_checker.domain.entities import ProbeError, ProbeOutcome, ReportEvent

_REGISTRY = "https://www.nuget.org"
_URL = "https://www.nuget.org/api/v2/package/SomePackage/1.0.0"

FOUND = ProbeOutcome.FOUND
NOT_FOUND = ProbeOutcome.NOT_FOUND


def _use_case(
    probe, sleep: AsyncMock, delay_ms: int = 30_000
) -> CheckPackageIndexedUseCase:
    return CheckPackageIndexedUseCase(
        probe=probe,
        registry_url=_REGISTRY,
        delay_ms=delay_ms,
        sleep=sleep,
    )


class TestCheckPackageIndexed:
    async def test_found_on_first_attempt(self, make_probe, sleep: AsyncMock) -> None:
        probe = make_probe([FOUND])
        result = await _use_case(probe, sleep).execute("SomePackage", "1.0.0", 1)

        assert result is True
        assert probe.calls == [_URL]
        sleep.assert_not_awaited()

    async def test_not_found_exhausts_all_attempts(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND])
        result = await _use_case(probe, sleep, delay_ms=1_500).execute(
            "SomePackage", "1.0.0", 3
        )

        assert result is False
        assert len(probe.calls) == 3
        assert sleep.await_args_list == [call(1.5), call(1.5)]

    async def test_single_attempt_not_found_never_sleeps(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND])
        result = await _use_case(probe, sleep).execute("SomePackage", "1.0.0", 1)

        assert result is False
        assert len(probe.calls) == 1
        sleep.assert_not_awaited()

    async def test_found_later_short_circuits(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND, NOT_FOUND, FOUND])
        result = await _use_case(probe, sleep).execute("SomePackage", "1.0.0", 10)

        assert result is True
        assert len(probe.calls) == 3
        assert sleep.await_count == 2

    async def test_default_delay_is_thirty_seconds(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND, FOUND])
        uc = CheckPackageIndexedUseCase(probe=probe, registry_url=_REGISTRY, sleep=sleep)
        await uc.execute("SomePackage", "1.0.0", 2)

        sleep.assert_awaited_once_with(30.0)

    async def test_probe_error_propagates_without_retry(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        error = ProbeError(
            "HTTP error: Request failed with status code 500",
            url=_URL,
            status_code=500,
        )
        probe = make_probe([error])

        with pytest.raises(ProbeError) as exc_info:
            await _use_case(probe, sleep).execute("SomePackage", "1.0.0", 5)

        assert exc_info.value is error
        assert len(probe.calls) == 1
        sleep.assert_not_awaited()

    async def test_probe_error_after_misses_stops_loop(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND, ProbeError("HTTP error: 503", url=_URL)])

        with pytest.raises(ProbeError):
            await _use_case(probe, sleep).execute("SomePackage", "1.0.0", 5)

        assert len(probe.calls) == 2
        assert sleep.await_count == 1

    async def test_url_is_built_once_per_run(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND])
        await _use_case(probe, sleep).execute("Other.Pkg", "2.0.0-beta", 2)

        expected = "https://www.nuget.org/api/v2/package/Other.Pkg/2.0.0-beta"
        assert probe.calls == [expected, expected]

    async def test_logs_retry_message_for_non_final_attempts(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        probe = make_probe([NOT_FOUND])
        with capture_logs() as logs:
            await _use_case(probe, sleep, delay_ms=2_000).execute("Pkg", "1.0", 3)

        retries = [e for e in logs if e["event"] == "package_not_indexed_yet"]
        assert [(e["attempt"], e["max_attempts"]) for e in retries] == [(1, 3), (2, 3)]
        assert all(e["retry_in_seconds"] == 2.0 for e in retries)
        assert [e["event"] for e in logs].count("package_not_indexed") == 1

    async def test_logs_success_once(self, make_probe, sleep: AsyncMock) -> None:
        probe = make_probe([FOUND])
        with capture_logs() as logs:
            await _use_case(probe, sleep).execute("Pkg", "1.0", 3)

        assert [e["event"] for e in logs] == ["package_indexed"]

    async def test_progress_events_go_to_callback(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        events: list[ReportEvent] = []
        uc = CheckPackageIndexedUseCase(
            probe=make_probe([NOT_FOUND, NOT_FOUND, FOUND]),
            registry_url=_REGISTRY,
            delay_ms=1_500,
            sleep=sleep,
            on_event=events.append,
        )
        await uc.execute("Pkg", "1.0", 5)

        assert events == [
            ReportEvent(
                "info",
                "Attempt 1 of 5: Package not indexed yet. Retrying in 1.5 seconds...",
            ),
            ReportEvent(
                "info",
                "Attempt 2 of 5: Package not indexed yet. Retrying in 1.5 seconds...",
            ),
            ReportEvent(
                "info", "Package Pkg version 1.0 is indexed on https://www.nuget.org."
            ),
        ]

    async def test_no_progress_event_after_final_miss(
        self, make_probe, sleep: AsyncMock
    ) -> None:
        events: list[ReportEvent] = []
        uc = CheckPackageIndexedUseCase(
            probe=make_probe([NOT_FOUND]),
            registry_url=_REGISTRY,
            sleep=sleep,
            on_event=events.append,
        )
        await uc.execute("Pkg", "1.0", 1)

        assert events == []
