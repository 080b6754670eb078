"""System utility checks and child-process environment."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

# Package-manager and system binary directories, searched after the inherited PATH
CONVENTIONAL_PATHS: tuple[str, ...] = (
    "/usr/local/bin",
    "/opt/homebrew/bin",
    "/opt/local/bin",
    "~/.local/bin",
    "/usr/bin",
    "/bin",
    "/usr/sbin",
    "/sbin",
)


def build_search_path(inherited: str, extra: Iterable[str] = ()) -> str:
    """Append conventional and extra directories to an inherited PATH value."""
    entries = [p for p in inherited.split(os.pathsep) if p]
    for candidate in (*CONVENTIONAL_PATHS, *extra):
        resolved = str(Path(candidate).expanduser())
        if resolved not in entries:
            entries.append(resolved)
    return os.pathsep.join(entries)


def build_environment(
    extra_paths: Iterable[str] = (),
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Copy the parent environment with an augmented PATH."""
    env = dict(os.environ if base is None else base)
    env["PATH"] = build_search_path(env.get("PATH", ""), extra_paths)
    return env


def check_executable(path: str) -> tuple[bool, str]:
    """Validate an executable path without launching it."""
    candidate = Path(path)
    if not candidate.is_absolute():
        return False, f"Not an absolute path: {path}"
    if not candidate.exists():
        return False, f"Not found: {path}"
    if not candidate.is_file() or not os.access(candidate, os.X_OK):
        return False, f"Not executable: {path}"
    return True, str(candidate)
