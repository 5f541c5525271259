"""Settings persistence for the room maze."""

from __future__ import annotations

import json
import os
import sys
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from .rooms import MAX_CONNECTIONS, MIN_CONNECTIONS, ROOM_NAMES, ROOMS_IN_GAME

SETTINGS_PATH = Path("maze_settings.json")

DEFAULT_DIRECTORY_PREFIX = "maze.rooms."
DEFAULT_TIME_FILENAME = "currentTime.txt"
DEFAULT_MAX_STEPS = 50


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def _plain_filename(value: Any, default: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text or "/" in text or os.sep in text or text in {".", ".."}:
        return default
    return text


@dataclass
class MazeSettings:
    """Knobs for generating and playing a maze."""

    rooms_in_game: int = ROOMS_IN_GAME
    min_connections: int = MIN_CONNECTIONS
    max_connections: int = MAX_CONNECTIONS
    max_steps: int = DEFAULT_MAX_STEPS
    directory_prefix: str = DEFAULT_DIRECTORY_PREFIX
    time_filename: str = DEFAULT_TIME_FILENAME
    enforce_min_connections: bool = False
    generation_attempts: int = 100

    def clamp(self) -> "MazeSettings":
        self.rooms_in_game = _clamp(int(self.rooms_in_game), 2, len(ROOM_NAMES))
        self.max_connections = _clamp(int(self.max_connections), 1, self.rooms_in_game - 1)
        self.min_connections = _clamp(int(self.min_connections), 1, self.max_connections)
        self.max_steps = max(int(self.max_steps), 1)
        self.directory_prefix = _plain_filename(self.directory_prefix, DEFAULT_DIRECTORY_PREFIX)
        self.time_filename = _plain_filename(self.time_filename, DEFAULT_TIME_FILENAME)
        self.enforce_min_connections = bool(self.enforce_min_connections)
        self.generation_attempts = max(int(self.generation_attempts), 1)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "MazeSettings":
        if not isinstance(data, dict):
            return cls()

        def _as_int(key: str, default: int) -> int:
            try:
                return int(data.get(key, default))
            except (TypeError, ValueError):
                return default

        def _as_bool(key: str, default: bool) -> bool:
            value = data.get(key, default)
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in {"true", "1", "yes", "on"}:
                    return True
                if lowered in {"false", "0", "no", "off"}:
                    return False
            return bool(value) if value is not None else default

        settings = cls(
            rooms_in_game=_as_int("rooms_in_game", ROOMS_IN_GAME),
            min_connections=_as_int("min_connections", MIN_CONNECTIONS),
            max_connections=_as_int("max_connections", MAX_CONNECTIONS),
            max_steps=_as_int("max_steps", DEFAULT_MAX_STEPS),
            directory_prefix=data.get("directory_prefix", DEFAULT_DIRECTORY_PREFIX),
            time_filename=data.get("time_filename", DEFAULT_TIME_FILENAME),
            enforce_min_connections=_as_bool("enforce_min_connections", False),
            generation_attempts=_as_int("generation_attempts", 100),
        )
        return settings.clamp()


def load_settings(path: Path | str = SETTINGS_PATH) -> MazeSettings:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return MazeSettings()
    except (OSError, json.JSONDecodeError, TypeError) as exc:
        print(f"[Settings] Ignoring unreadable {path}: {exc}", file=sys.stderr)
        return MazeSettings()
    return MazeSettings.from_dict(data)


def save_settings(settings: MazeSettings, path: Path | str = SETTINGS_PATH) -> MazeSettings:
    """Write the clamped settings as JSON, replacing ``path`` in one step.

    Errors propagate; callers decide whether a failed save is fatal.
    """
    path = Path(path)
    effective = MazeSettings.from_dict(settings.to_dict())
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=path.parent, prefix=path.name, suffix=".tmp", encoding="utf-8"
        ) as tmp_file:
            json.dump(effective.to_dict(), tmp_file, indent=2, sort_keys=True)
            tmp_file.write("\n")
            tmp_path = Path(tmp_file.name)
        os.replace(str(tmp_path), str(path))
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise
    return effective
