"""Reading and writing the one-file-per-room maze format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .rooms import Room, RoomGraph, RoomType
from .settings import MazeSettings

NAME_PATTERN = re.compile(r"^ROOM NAME:\s*(?P<name>\S+)\s*$")
CONNECTION_PATTERN = re.compile(r"^CONNECTION\s+(?P<index>\d+):\s*(?P<name>\S+)\s*$")
TYPE_PATTERN = re.compile(r"^ROOM TYPE:\s*(?P<type>\S+)\s*$")


class RoomFileError(Exception):
    """Raised when a room file cannot be read, written or parsed."""


@dataclass
class RoomRecord:
    name: str
    room_type: RoomType
    connections: List[str] = field(default_factory=list)


def format_room(room: Room) -> str:
    lines = [f"ROOM NAME: {room.name}"]
    for index, other in enumerate(room.connections, start=1):
        lines.append(f"CONNECTION {index}: {other.name}")
    lines.append(f"ROOM TYPE: {room.role.value}")
    return "\n".join(lines) + "\n"


def parse_room(text: str, source: str = "<room>") -> RoomRecord:
    name: Optional[str] = None
    room_type: Optional[RoomType] = None
    connections: List[str] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        match = NAME_PATTERN.match(line)
        if match:
            if name is not None:
                raise RoomFileError(f"{source}:{lineno}: duplicate 'ROOM NAME' line.")
            name = match.group("name")
            continue
        match = CONNECTION_PATTERN.match(line)
        if match:
            connections.append(match.group("name"))
            continue
        match = TYPE_PATTERN.match(line)
        if match:
            if room_type is not None:
                raise RoomFileError(f"{source}:{lineno}: duplicate 'ROOM TYPE' line.")
            try:
                room_type = RoomType.parse(match.group("type"))
            except ValueError as exc:
                raise RoomFileError(f"{source}:{lineno}: {exc}") from exc
            continue
        raise RoomFileError(f"{source}:{lineno}: unrecognized line {line!r}.")

    if name is None:
        raise RoomFileError(f"{source}: missing 'ROOM NAME' line.")
    if room_type is None:
        raise RoomFileError(f"{source}: missing 'ROOM TYPE' line.")
    return RoomRecord(name=name, room_type=room_type, connections=connections)


def write_room(directory: Path | str, room: Room) -> Path:
    path = Path(directory) / room.name
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(format_room(room))
    except OSError as exc:
        raise RoomFileError(f"Error opening room file {path}: {exc}") from exc
    return path


def write_maze(directory: Path | str, graph: RoomGraph) -> List[Path]:
    return [write_room(directory, room) for room in graph]


def read_room(path: Path | str) -> RoomRecord:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise RoomFileError(f"Could not open {path}: {exc}") from exc
    record = parse_room(text, source=str(path))
    # Rooms are stored under their own name.
    if record.name != path.name:
        raise RoomFileError(
            f"{path}: file is named '{path.name}' but holds room '{record.name}'."
        )
    return record


def iter_room_files(directory: Path | str, settings: MazeSettings) -> Iterable[Path]:
    for child in sorted(Path(directory).iterdir()):
        if child.name.startswith("."):
            continue
        if child.name == settings.time_filename or child.name.endswith(".tmp"):
            continue
        if not child.is_file():
            continue
        yield child


def build_graph(records: Iterable[RoomRecord], settings: MazeSettings) -> RoomGraph:
    records = list(records)
    graph = RoomGraph(max_degree=settings.max_connections)
    for record in records:
        try:
            graph.add(
                Room(
                    name=record.name,
                    role=record.room_type,
                    max_connections=len(record.connections),
                )
            )
        except ValueError as exc:
            raise RoomFileError(str(exc)) from exc

    # Each room keeps the order of its own CONNECTION lines.
    for record in records:
        room = graph[record.name]
        if len(record.connections) > graph.max_degree:
            raise RoomFileError(
                f"Room '{record.name}' lists {len(record.connections)} connections; "
                f"at most {graph.max_degree} are allowed."
            )
        for other_name in record.connections:
            other = graph.get(other_name)
            if other is None:
                raise RoomFileError(
                    f"Room '{record.name}' connects to unknown room '{other_name}'."
                )
            if other is room:
                raise RoomFileError(f"Room '{record.name}' connects to itself.")
            if room.is_connected_to(other):
                raise RoomFileError(
                    f"Room '{record.name}' lists '{other_name}' more than once."
                )
            room.connections.append(other)

    for room in graph:
        for other in room.connections:
            if not other.is_connected_to(room):
                raise RoomFileError(
                    f"Room '{room.name}' lists '{other.name}' but not the other way round."
                )
    return graph


def read_maze(directory: Path | str, settings: MazeSettings | None = None) -> RoomGraph:
    settings = settings or MazeSettings()
    try:
        paths = list(iter_room_files(directory, settings))
    except OSError as exc:
        raise RoomFileError(f"Could not open {directory}: {exc}") from exc
    return build_graph((read_room(path) for path in paths), settings)
