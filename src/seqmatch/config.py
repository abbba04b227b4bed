"""Shell configuration read from ``SEQMATCH_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from seqmatch.editor.metrics import ComparisonMetric

ENV_PREFIX = "SEQMATCH_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class ShellSettings:
    """Defaults applied by the command shell."""

    default_metric: ComparisonMetric = ComparisonMetric.SYMMETRIC
    default_context: int = 0
    echo_commands: bool = False
    log_preset: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ShellSettings":
        metric_name = _env("DEFAULT_METRIC")
        metric = ComparisonMetric.SYMMETRIC
        if metric_name:
            parsed = ComparisonMetric.from_name(metric_name)
            if parsed is None:
                raise ValueError(f"Unknown metric in {ENV_PREFIX}DEFAULT_METRIC: {metric_name!r}")
            metric = parsed
        context = _env_int("DEFAULT_CONTEXT", 0)
        if context < 0:
            raise ValueError(f"{ENV_PREFIX}DEFAULT_CONTEXT must be non-negative")
        return cls(
            default_metric=metric,
            default_context=context,
            echo_commands=_env_flag("ECHO_COMMANDS", False),
            log_preset=_env("LOG_PRESET") or None,
        )


__all__ = ["ShellSettings"]
