from __future__ import annotations

from pathlib import Path

import pytest

from flicker_harness.config import FlickerConfig

_ENV = (
    "FLICKER_SYNC_NUM_RETRIES",
    "FLICKER_SYNC_RETRY_INTERVAL_MS",
    "FLICKER_COLLECT_METRICS_PER_TEST",
    "FLICKER_REPORT_ONLY_FOR_PASSING",
    "FLICKER_SCENARIO_CONFIG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env() -> None:
    config = FlickerConfig.from_env()
    assert config == FlickerConfig()
    assert config.num_retries == 5
    assert config.retry_interval_ms == 500
    assert config.collect_metrics_per_test is True
    assert config.report_only_for_passing_tests is True
    assert config.scenario_config_path is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLICKER_SYNC_NUM_RETRIES", "12")
    monkeypatch.setenv("FLICKER_SYNC_RETRY_INTERVAL_MS", "50")
    monkeypatch.setenv("FLICKER_COLLECT_METRICS_PER_TEST", "off")
    monkeypatch.setenv("FLICKER_REPORT_ONLY_FOR_PASSING", "No")
    monkeypatch.setenv("FLICKER_SCENARIO_CONFIG", "/data/scenarios.yaml")

    config = FlickerConfig.from_env()
    assert config.num_retries == 12
    assert config.retry_interval_ms == 50
    assert config.collect_metrics_per_test is False
    assert config.report_only_for_passing_tests is False
    assert config.scenario_config_path == Path("/data/scenarios.yaml")


def test_unparseable_env_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLICKER_SYNC_NUM_RETRIES", "lots")
    monkeypatch.setenv("FLICKER_COLLECT_METRICS_PER_TEST", "maybe")
    monkeypatch.setenv("FLICKER_SCENARIO_CONFIG", "")

    config = FlickerConfig.from_env()
    assert config.num_retries == 5
    assert config.collect_metrics_per_test is True
    assert config.scenario_config_path is None


def test_out_of_range_env_values_are_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLICKER_SYNC_NUM_RETRIES", "0")
    monkeypatch.setenv("FLICKER_SYNC_RETRY_INTERVAL_MS", "-10")

    config = FlickerConfig.from_env()
    assert config.num_retries == 1
    assert config.retry_interval_ms == 0


@pytest.mark.parametrize(
    "kwargs",
    [{"num_retries": 0}, {"retry_interval_ms": -1}],
)
def test_invalid_explicit_values_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        FlickerConfig(**kwargs)
