import pytest

from vim_overlay.runtime import OverlayConfig
from vim_overlay.runtime.config import (
    DEFAULT_LINE_HEIGHT,
    DEFAULT_OPERATOR_TIMEOUT_MS,
    env_flag,
    env_number,
)


def test_defaults() -> None:
    config = OverlayConfig()

    assert config.operator_timeout_ms == DEFAULT_OPERATOR_TIMEOUT_MS == 500
    assert config.fallback_line_height == DEFAULT_LINE_HEIGHT == 20.0
    assert config.initial_mode == "insert"
    assert "x" in config.suppressed_characters
    assert " " not in config.suppressed_characters


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_OVERLAY_OPERATOR_TIMEOUT_MS", "750")
    monkeypatch.setenv("VIM_OVERLAY_LINE_HEIGHT", "18.5")
    monkeypatch.setenv("VIM_OVERLAY_INITIAL_MODE", "NORMAL")

    config = OverlayConfig.from_env()

    assert config.operator_timeout_ms == 750
    assert config.fallback_line_height == 18.5
    assert config.initial_mode == "normal"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_OVERLAY_OPERATOR_TIMEOUT_MS", "750")

    config = OverlayConfig.from_env(operator_timeout_ms=300)

    assert config.operator_timeout_ms == 300


def test_from_env_ignores_unparseable_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_OVERLAY_LINE_HEIGHT", "tall")

    assert OverlayConfig.from_env().fallback_line_height == DEFAULT_LINE_HEIGHT


@pytest.mark.parametrize(
    "kwargs",
    [
        {"operator_timeout_ms": 0},
        {"fallback_line_height": -1.0},
        {"initial_mode": "visual"},
    ],
)
def test_invalid_values_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        OverlayConfig(**kwargs)


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_OVERLAY_FLAG", "yes")
    monkeypatch.delenv("VIM_OVERLAY_MISSING", raising=False)

    assert env_flag("FLAG", False) is True
    assert env_flag("MISSING", True) is True
    assert env_number("MISSING", 3.0) == 3.0
