from __future__ import annotations

from .load import load_config
from .schema import ActionInputs, CheckerConfig, EnvOverrides

__all__ = ["ActionInputs", "CheckerConfig", "EnvOverrides", "load_config"]
