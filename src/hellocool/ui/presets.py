"""Hardcoded commands offered by the command panel."""

from __future__ import annotations

from hellocool.models import Preset

PRESETS: list[Preset] = [
    Preset("ls", "List root directory", "/bin/ls", ["-la", "/"]),
    Preset("git-status", "Git status", "/usr/bin/git", ["status"]),
    Preset("env", "Show environment", "/usr/bin/env", []),
]


def get_preset(name: str) -> Preset | None:
    for preset in PRESETS:
        if preset.name == name:
            return preset
    return None
