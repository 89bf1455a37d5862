"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class CheckerConfig(BaseModel):
    """
    Canonical checker configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (registry/polling/http/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Registry (YAML section: registry.*)
    registry_url: str = Field(
        default="https://www.nuget.org",
        validation_alias=AliasChoices(
            "registry_url",
            AliasPath("registry", "url"),
        ),
        description="Registry base URL; packages live under /api/v2/package/.",
    )

    # Polling (YAML section: polling.*)
    delay_ms: int = Field(
        default=30_000,
        validation_alias=AliasChoices(
            "delay_ms",
            AliasPath("polling", "delay_ms"),
        ),
        description="Wait between attempts in milliseconds.",
    )
    default_attempts: int = Field(
        default=1,
        validation_alias=AliasChoices(
            "default_attempts",
            AliasPath("polling", "default_attempts"),
        ),
        description="Attempt budget used when no usable attempts input is given.",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for a single probe.",
    )
    http_user_agent: str = Field(
        default="nuget-index-checker/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("registry_url")
    @classmethod
    def _validate_registry_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("registry_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("delay_ms")
    @classmethod
    def _validate_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("delay_ms must be >= 0")
        return v

    @field_validator("default_attempts")
    @classmethod
    def _validate_default_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("default_attempts must be >= 1")
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "CheckerConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml.
        """
        return {
            "environment": self.environment,
            "registry": {"url": self.registry_url},
            "polling": {
                "delay_ms": self.delay_ms,
                "default_attempts": self.default_attempts,
            },
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - NUGET_INDEX_CHECKER_REGISTRY_URL
    - NUGET_INDEX_CHECKER_DELAY_MS
    - NUGET_INDEX_CHECKER_HTTP_TIMEOUT_SECONDS
    - NUGET_INDEX_CHECKER_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="NUGET_INDEX_CHECKER_",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Optional[Environment] = None

    registry_url: Optional[str] = None

    delay_ms: Optional[int] = None
    default_attempts: Optional[int] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)


class ActionInputs(BaseSettings):
    """
    Invocation inputs as a GitHub Actions runner exposes them.

    Values stay raw strings: INPUT_PACKAGE, INPUT_VERSION, INPUT_ATTEMPTS.
    Validation happens in the domain, not here.
    """

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        extra="ignore",
        case_sensitive=False,
    )

    package: str = ""
    version: str = ""
    attempts: str = ""

    @field_validator("package", "version", "attempts", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        # Runners pass inputs verbatim; surrounding whitespace is not part of them.
        return v.strip() if isinstance(v, str) else v
