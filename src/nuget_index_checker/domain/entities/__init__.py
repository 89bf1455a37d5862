from .indexing import (
    DEFAULT_DELAY_MS,
    CheckRequest,
    IndexCheckError,
    IndexCheckReport,
    InvalidMaxAttempts,
    InvalidPackageName,
    InvalidPackageVersion,
    ProbeError,
    ProbeNetworkError,
    ProbeOutcome,
    ReportEvent,
    ValidationError,
    build_package_url,
)

__all__ = [
    "DEFAULT_DELAY_MS",
    "CheckRequest",
    "IndexCheckError",
    "IndexCheckReport",
    "InvalidMaxAttempts",
    "InvalidPackageName",
    "InvalidPackageVersion",
    "ProbeError",
    "ProbeNetworkError",
    "ProbeOutcome",
    "ReportEvent",
    "ValidationError",
    "build_package_url",
]
