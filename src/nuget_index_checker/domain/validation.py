"""Input validation for package index checks.

All predicates are pure and never raise; ``validate_check_request`` turns
the first failing predicate into a field-specific ``ValidationError``.
"""

from __future__ import annotations

import math
import re

from nuget_index_checker.domain.entities import (
    CheckRequest,
    InvalidMaxAttempts,
    InvalidPackageName,
    InvalidPackageVersion,
)

# Letters, digits, dots, underscores and hyphens. Rejects:
#   - two dots in a row
#   - a trailing dot or hyphen
#   - a leading dot, or any leading character that is not a letter/digit
_PACKAGE_NAME_RE = re.compile(
    r"(?!.*\.\.)(?!.*\.$)(?!\.)(?!.*-$)(?![^a-zA-Z0-9])[a-zA-Z0-9._-]+"
)

# 1 to 4 numeric segments plus an optional "-label" pre-release suffix.
_PACKAGE_VERSION_RE = re.compile(
    r"[0-9]+(\.[0-9]+)?(\.[0-9]+)?(\.[0-9]+)?(-[0-9A-Za-z.-]+)?"
)


def is_valid_input(text: object, pattern: re.Pattern[str] | None = None) -> bool:
    """True if *text* is a non-blank string that fully matches *pattern*.

    Without a pattern a non-blank string is sufficient. The pattern is
    matched against the original (untrimmed) text.
    """
    if not isinstance(text, str) or text.strip() == "":
        return False
    return pattern is None or pattern.fullmatch(text) is not None


def is_valid_package_name(name: object) -> bool:
    return is_valid_input(name, _PACKAGE_NAME_RE)


def is_valid_package_version(version: object) -> bool:
    """Accepts ``1``, ``1.2``, ``1.2.3``, ``1.2.3.4`` and ``1.2.3-beta`` forms."""
    return is_valid_input(version, _PACKAGE_VERSION_RE)


def is_valid_max_attempts(value: object) -> bool:
    """True if *value* is numeric (numeric strings included) and >= 1."""
    if isinstance(value, bool) or value is None:
        return False
    # float() also takes "1_0" and non-ASCII digits; plain decimal text only.
    if isinstance(value, str) and ("_" in value or not value.isascii()):
        return False
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return False
    return math.isfinite(number) and number >= 1


def validate_check_request(request: CheckRequest) -> None:
    """Raise the ``ValidationError`` for the first invalid field.

    Fields are checked in order: package, version, attempts.
    """
    if not is_valid_package_name(request.package):
        raise InvalidPackageName(request.package)
    if not is_valid_package_version(request.version):
        raise InvalidPackageVersion(request.version)
    if not is_valid_max_attempts(request.max_attempts):
        raise InvalidMaxAttempts(request.max_attempts)
