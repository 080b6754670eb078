"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

CONFIG_DIR = Path.home() / ".hellocool"
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_FILE = CONFIG_DIR / "hellocool.log"


@dataclass
class RunnerConfig:
    timeout: int = 0  # seconds, 0 disables the timeout
    cwd: str = ""
    extra_paths: list[str] = field(default_factory=list)


@dataclass
class DisplayConfig:
    fullscreen_delay: float = 0.5


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = str(LOG_FILE)


@dataclass
class AppConfig:
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def sections(self) -> dict[str, object]:
        return {"runner": self.runner, "display": self.display, "logging": self.logging}


def ensure_config_dir() -> None:
    """Create config directory with secure permissions."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)


def _split_paths(value: str) -> list[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


def load_config() -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()

    if CONFIG_FILE.exists():
        with open(CONFIG_FILE, "rb") as f:
            data = tomllib.load(f)

        runner = data.get("runner", {})
        config.runner.timeout = runner.get("timeout", config.runner.timeout)
        config.runner.cwd = runner.get("cwd", config.runner.cwd)
        config.runner.extra_paths = list(runner.get("extra_paths", config.runner.extra_paths))

        display = data.get("display", {})
        config.display.fullscreen_delay = float(
            display.get("fullscreen_delay", config.display.fullscreen_delay)
        )

        logging_cfg = data.get("logging", {})
        config.logging.level = logging_cfg.get("level", config.logging.level)
        config.logging.file = logging_cfg.get("file", config.logging.file)

    # Environment variable overrides
    if env_timeout := os.environ.get("HELLOCOOL_TIMEOUT"):
        config.runner.timeout = int(env_timeout)
    if env_cwd := os.environ.get("HELLOCOOL_CWD"):
        config.runner.cwd = env_cwd
    if env_paths := os.environ.get("HELLOCOOL_EXTRA_PATHS"):
        config.runner.extra_paths = _split_paths(env_paths)
    if env_delay := os.environ.get("HELLOCOOL_FULLSCREEN_DELAY"):
        config.display.fullscreen_delay = float(env_delay)
    if env_log_level := os.environ.get("HELLOCOOL_LOG_LEVEL"):
        config.logging.level = env_log_level

    return config


def save_config(config: AppConfig) -> None:
    """Save configuration to TOML file."""
    ensure_config_dir()

    data = {
        "runner": {
            "timeout": config.runner.timeout,
            "cwd": config.runner.cwd,
            "extra_paths": config.runner.extra_paths,
        },
        "display": {
            "fullscreen_delay": config.display.fullscreen_delay,
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
        },
    }

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(data, f)

    os.chmod(CONFIG_FILE, 0o600)



# Global singleton
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or load the global config singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
