"""Locating the most recently generated rooms directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


class SessionError(Exception):
    """Raised when no rooms directory can be found."""


def find_session_directories(base: Path | str, prefix: str) -> List[Path]:
    base = Path(base)
    return [
        child
        for child in sorted(base.iterdir())
        if prefix in child.name and child.is_dir()
    ]


def select_directory(base: Path | str, prefix: str) -> Path:
    candidates = find_session_directories(base, prefix)
    if not candidates:
        raise SessionError(f"No directory matching '{prefix}' found in {Path(base).resolve()}.")
    # Ties keep the first candidate in name order.
    return max(candidates, key=lambda child: child.stat().st_mtime)


def enter_directory(path: Path | str) -> Path:
    path = Path(path).resolve()
    os.chdir(path)
    return path
