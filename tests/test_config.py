from __future__ import annotations

from pathlib import Path

import pytest

from population_pyramid.config import get_settings
from population_pyramid.models import ViewKind


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("PYRAMID_DATA_SOURCE", "https://example.org/census.csv")
    monkeypatch.setenv("PYRAMID_DEFAULT_VIEW", "Rural")
    monkeypatch.setenv("PYRAMID_HTTP_TIMEOUT", "12.5")
    monkeypatch.setenv("PYRAMID_LOG_PATH", "out/run.log")
    s = get_settings()
    assert s.data_source == "https://example.org/census.csv"
    assert s.default_view is ViewKind.RURAL
    assert s.http_timeout == 12.5
    assert s.log_path == Path("out/run.log")


def test_settings_defaults(monkeypatch) -> None:
    for name in ("PYRAMID_DATA_SOURCE", "PYRAMID_DEFAULT_VIEW", "PYRAMID_HTTP_TIMEOUT", "PYRAMID_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.default_view is ViewKind.TOTAL
    assert s.http_timeout == 60.0


@pytest.mark.parametrize(
    "name, value",
    [
        ("PYRAMID_DEFAULT_VIEW", "suburban"),
        ("PYRAMID_HTTP_TIMEOUT", "soon"),
        ("PYRAMID_HTTP_TIMEOUT", "0"),
    ],
)
def test_invalid_settings_raise(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        get_settings()
