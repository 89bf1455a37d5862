from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from nuget_index_checker.domain.entities import CheckRequest, IndexCheckReport
from nuget_index_checker.infrastructure.composition import index_check_runner
from nuget_index_checker.infrastructure.config import (
    ActionInputs,
    CheckerConfig,
    load_config,
)
from nuget_index_checker.infrastructure.logging.setup import configure_logging
from nuget_index_checker.interfaces.github_actions import emit_report, parse_attempts

log = structlog.get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuget-index-checker",
        description="Wait until a package version is indexed on a NuGet registry.",
    )

    # Invocation inputs (fall back to INPUT_* env vars)
    parser.add_argument(
        "--package",
        default=None,
        help="Package identifier (overrides INPUT_PACKAGE env).",
    )
    parser.add_argument(
        "--version",
        default=None,
        help="Package version (overrides INPUT_VERSION env).",
    )
    parser.add_argument(
        "--attempts",
        default=None,
        help="Maximum probe attempts (overrides INPUT_ATTEMPTS env).",
    )

    # Config wiring flags
    parser.add_argument(
        "--delay-ms",
        default=None,
        type=int,
        help="Override wait between attempts in milliseconds.",
    )
    parser.add_argument(
        "--registry-url",
        default=None,
        help="Override registry base URL.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser


async def _run(config: CheckerConfig, request: CheckRequest) -> IndexCheckReport:
    async with index_check_runner(config) as runner:
        return await runner.execute(request)


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint. Returns the exit status (0 indexed, 1 failed).
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(list(argv))

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.delay_ms is not None:
        cli_overrides["delay_ms"] = args.delay_ms
    if args.registry_url:
        cli_overrides["registry_url"] = args.registry_url
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    # Read after load_config so a --dotenv file can supply INPUT_* too.
    inputs = ActionInputs()
    package = args.package if args.package is not None else inputs.package
    version = args.version if args.version is not None else inputs.version
    if not package:
        parser.error("Input required and not supplied: package")
    if not version:
        parser.error("Input required and not supplied: version")

    attempts_raw = args.attempts if args.attempts is not None else inputs.attempts
    request = CheckRequest(
        package=package,
        version=version,
        max_attempts=parse_attempts(attempts_raw or None, config.default_attempts),
        delay_ms=config.delay_ms,
    )

    report = asyncio.run(_run(config, request))

    output_file = os.getenv("GITHUB_OUTPUT")
    emit_report(report, sys.stdout, Path(output_file) if output_file else None)
    return 1 if report.failed else 0


if __name__ == "__main__":
    raise SystemExit(start())
