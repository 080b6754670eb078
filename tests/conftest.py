"""Shared test fixtures."""

from __future__ import annotations

import pytest

from hellocool.config import AppConfig, DisplayConfig, LoggingConfig, RunnerConfig


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration."""
    return AppConfig(
        runner=RunnerConfig(timeout=0, cwd=str(tmp_path), extra_paths=[]),
        display=DisplayConfig(fullscreen_delay=0.0),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "test.log")),
    )
