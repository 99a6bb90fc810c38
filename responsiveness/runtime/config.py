"""Pipeline configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from responsiveness.core.interaction_count import CountStrategy


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value == value else default


def _str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


@dataclass(frozen=True, slots=True)
class ResponsivenessConfig:
    """Immutable tuning for one reporter session."""

    top_k: int = 10
    every_n: int = 50
    cluster_window_ms: float = 8.0
    interaction_id_step: int = 7
    count_strategy: CountStrategy = CountStrategy.ID_SPREAD
    fps_window_ms: float = 1000.0
    expected_fps: float = 60.0
    diagnostics_enabled: bool = True
    diagnostics_buffer_cap: int = 1_000
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("RESPONSIVENESS_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_config() -> ResponsivenessConfig:
    """Load configuration from env vars, clamping out-of-range values."""
    strategy_raw = _str("RESPONSIVENESS_COUNT_STRATEGY", CountStrategy.ID_SPREAD.value).lower()
    try:
        strategy = CountStrategy(strategy_raw)
    except ValueError:
        strategy = CountStrategy.ID_SPREAD
    return ResponsivenessConfig(
        top_k=max(1, _int("RESPONSIVENESS_TOP_K", 10)),
        every_n=max(1, _int("RESPONSIVENESS_EVERY_N", 50)),
        cluster_window_ms=max(1.0, _float("RESPONSIVENESS_CLUSTER_WINDOW_MS", 8.0)),
        interaction_id_step=max(1, _int("RESPONSIVENESS_ID_STEP", 7)),
        count_strategy=strategy,
        fps_window_ms=max(1.0, _float("RESPONSIVENESS_FPS_WINDOW_MS", 1000.0)),
        expected_fps=max(1.0, _float("RESPONSIVENESS_EXPECTED_FPS", 60.0)),
        diagnostics_enabled=_flag("RESPONSIVENESS_DIAGNOSTICS_ENABLED", True),
        diagnostics_buffer_cap=max(10, _int("RESPONSIVENESS_DIAGNOSTICS_BUFFER_CAP", 1_000)),
        log_level=resolve_log_level_name(),
        log_format=_str("RESPONSIVENESS_LOG_FORMAT", "text").lower(),
        log_file=os.getenv("RESPONSIVENESS_LOG_FILE") or None,
    )
