"""
Environment + project-root helpers.

Configured paths (settings `data.path`) are project-relative so the CLI default works from any
subdirectory of a checkout. Paths typed on the command line stay cwd-relative and never go
through here.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

_ROOT_MARKERS = (".env", ".git", "pyproject.toml")


@lru_cache
def get_project_root() -> Path:
    """Return the nearest ancestor of the cwd holding a root marker (cached)."""
    override = os.getenv("GEODATA_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return cwd


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the project `.env` once, without overriding existing env vars."""
    env_path = get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a possibly-relative configured path against the project root."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
