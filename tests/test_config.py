"""Tests for environment-driven configuration and logging setup."""

from __future__ import annotations

import importlib
import logging

import pytest

import mapcluster
from mapcluster import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_builtin_defaults(reload_config, monkeypatch):
    for key in ("MAPCLUSTER_THROTTLE_MS", "MAPCLUSTER_CELL_SIZE", "MAPCLUSTER_VIEWPORT_EVENT"):
        monkeypatch.delenv(key, raising=False)
    cfg = reload_config()

    assert cfg.DEFAULT_THROTTLE_MS == 200
    assert cfg.DEFAULT_CELL_SIZE == 150
    assert cfg.DEFAULT_VIEWPORT_EVENT == "zoom"


def test_environment_overrides(reload_config):
    cfg = reload_config(
        MAPCLUSTER_THROTTLE_MS="50",
        MAPCLUSTER_CELL_SIZE="64",
        MAPCLUSTER_VIEWPORT_EVENT="moveend",
        MAPCLUSTER_LOG_LEVEL="debug",
    )

    assert cfg.DEFAULT_THROTTLE_MS == 50
    assert cfg.DEFAULT_CELL_SIZE == 64
    assert cfg.DEFAULT_VIEWPORT_EVENT == "moveend"
    assert cfg.LOG_LEVEL == "DEBUG"


def test_unparseable_numbers_fall_back(reload_config):
    cfg = reload_config(MAPCLUSTER_THROTTLE_MS="soon", MAPCLUSTER_CELL_SIZE="")

    assert cfg.DEFAULT_THROTTLE_MS == 200
    assert cfg.DEFAULT_CELL_SIZE == 150


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
def test_non_finite_numbers_fall_back(reload_config, raw):
    cfg = reload_config(MAPCLUSTER_THROTTLE_MS=raw, MAPCLUSTER_CELL_SIZE=raw)

    assert cfg.DEFAULT_THROTTLE_MS == 200
    assert cfg.DEFAULT_CELL_SIZE == 150


def test_configure_logging_adds_one_stream_handler():
    logger = logging.getLogger("mapcluster")
    before = list(logger.handlers)
    try:
        mapcluster.configure_logging("DEBUG")
        mapcluster.configure_logging("INFO")

        streams = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(streams) == 1
        assert logger.level == logging.INFO
    finally:
        logger.handlers = before
        logger.setLevel(logging.NOTSET)
