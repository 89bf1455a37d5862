from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Literal

DEFAULT_DELAY_MS = 30_000

EventLevel = Literal["debug", "info", "error"]


class ProbeOutcome(enum.Enum):
    """Classification of a single registry probe."""

    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CheckRequest:
    package: str
    version: str
    max_attempts: object  # raw input, validated before use
    delay_ms: int = DEFAULT_DELAY_MS


@dataclass(frozen=True)
class ReportEvent:
    level: EventLevel
    message: str


@dataclass(frozen=True)
class IndexCheckReport:
    indexed: bool
    failed: bool
    message: str | None = None
    events: tuple[ReportEvent, ...] = field(default_factory=tuple)

    @property
    def output(self) -> str:
        """The ``indexed`` output value as reported to the host."""
        return "true" if self.indexed else "false"


def build_package_url(registry_url: str, package: str, version: str) -> str:
    return f"{registry_url.rstrip('/')}/api/v2/package/{package}/{version}"


class IndexCheckError(Exception):
    """Base error for index checks."""


class ValidationError(IndexCheckError):
    """Invocation input rejected before any network activity."""

    field_name: str = ""
    detail: str = ""
    message: str = ""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(self.message)


class InvalidPackageName(ValidationError):
    field_name = "package"
    detail = "Invalid package name"
    message = "Invalid package name."


class InvalidPackageVersion(ValidationError):
    field_name = "version"
    detail = "Invalid package version"
    message = "Invalid package version. Expected format: x.y.z or x.y.z-label."


class InvalidMaxAttempts(ValidationError):
    field_name = "attempts"
    detail = "Invalid number of attempts"
    message = "Invalid number of attempts. Must be a positive integer."


class ProbeError(IndexCheckError):
    """Probe failed with a transport error or an unexpected HTTP status."""

    def __init__(
        self, message: str, *, url: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ProbeNetworkError(ProbeError):
    """No response was received at all (DNS, connect, timeout)."""

    MESSAGE = "Network error or no response received"

    def __init__(self, *, url: str) -> None:
        super().__init__(self.MESSAGE, url=url)
