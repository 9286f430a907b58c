"""Runtime settings.

Defaults can be overridden per process through environment variables:

  FLICKER_SYNC_NUM_RETRIES           poll budget for state synchronization
  FLICKER_SYNC_RETRY_INTERVAL_MS     sleep between polls
  FLICKER_COLLECT_METRICS_PER_TEST   keep results per test id (1/0)
  FLICKER_REPORT_ONLY_FOR_PASSING    skip metrics for failed host tests (1/0)
  FLICKER_SCENARIO_CONFIG            YAML/JSON scenario table to load
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_NUM_RETRIES = 5
DEFAULT_RETRY_INTERVAL_MS = 500

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


@dataclass(frozen=True)
class FlickerConfig:
    num_retries: int = DEFAULT_NUM_RETRIES
    retry_interval_ms: int = DEFAULT_RETRY_INTERVAL_MS
    collect_metrics_per_test: bool = True
    report_only_for_passing_tests: bool = True
    scenario_config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.num_retries < 1:
            raise ValueError(f"num_retries must be >= 1, got {self.num_retries}")
        if self.retry_interval_ms < 0:
            raise ValueError(f"retry_interval_ms must be >= 0, got {self.retry_interval_ms}")

    @classmethod
    def from_env(cls) -> "FlickerConfig":
        num_retries = _env_int("FLICKER_SYNC_NUM_RETRIES")
        interval = _env_int("FLICKER_SYNC_RETRY_INTERVAL_MS")
        per_test = _env_bool("FLICKER_COLLECT_METRICS_PER_TEST")
        only_passing = _env_bool("FLICKER_REPORT_ONLY_FOR_PASSING")
        scenario_config = os.environ.get("FLICKER_SCENARIO_CONFIG")

        return cls(
            num_retries=max(1, num_retries) if num_retries is not None else DEFAULT_NUM_RETRIES,
            retry_interval_ms=(
                max(0, interval) if interval is not None else DEFAULT_RETRY_INTERVAL_MS
            ),
            collect_metrics_per_test=per_test if per_test is not None else True,
            report_only_for_passing_tests=only_passing if only_passing is not None else True,
            scenario_config_path=Path(scenario_config) if scenario_config else None,
        )
