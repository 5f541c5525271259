"""Shape checks for a loaded room maze."""

from __future__ import annotations

from collections import Counter, deque
from typing import List, Optional, Set

from .rooms import RoomGraph, RoomType
from .settings import MazeSettings


def format_validation_message(room_name: str, context: str, message: str) -> str:
    if context:
        return f"{room_name}: {context}: {message}"
    return f"{room_name}: {message}"


class ValidationContext:
    """Utility container for accumulating validation errors."""

    def __init__(self) -> None:
        self.errors: List[str] = []

    def add(self, context: str, room_name: str, message: str) -> None:
        self.errors.append(format_validation_message(room_name, context, message))


def require(condition: bool, context: str, room_name: str, message: str, ctx: ValidationContext) -> None:
    if not condition:
        ctx.add(context, room_name, message)


def validate_roles(graph: RoomGraph, ctx: ValidationContext) -> None:
    counts = Counter(room.role for room in graph)
    for role in (RoomType.START, RoomType.END):
        require(
            counts[role] == 1,
            "Roles",
            "maze",
            f"expected exactly one {role.value}, found {counts[role]}.",
            ctx,
        )


def validate_connections(graph: RoomGraph, settings: MazeSettings, ctx: ValidationContext) -> None:
    for room in graph:
        context = "Connections"
        names = room.connection_names()
        require(room.name not in names, context, room.name, "connects to itself.", ctx)
        duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
        if duplicates:
            ctx.add(context, room.name, f"lists {', '.join(duplicates)} more than once.")
        for other in room.connections:
            if other.name not in graph:
                ctx.add(context, room.name, f"connects to unknown room '{other.name}'.")
            elif not other.is_connected_to(room):
                ctx.add(context, room.name, f"lists '{other.name}' but not the other way round.")
        require(
            room.degree <= room.max_connections,
            "Degree",
            room.name,
            f"has {room.degree} connections but a target of {room.max_connections}.",
            ctx,
        )
        require(
            room.degree <= settings.max_connections,
            "Degree",
            room.name,
            f"has {room.degree} connections; at most {settings.max_connections} are allowed.",
            ctx,
        )


def validate_maze(graph: RoomGraph, settings: Optional[MazeSettings] = None) -> List[str]:
    settings = settings or MazeSettings()
    ctx = ValidationContext()
    require(
        len(graph) == settings.rooms_in_game,
        "Maze",
        "maze",
        f"expected {settings.rooms_in_game} rooms, found {len(graph)}.",
        ctx,
    )
    validate_roles(graph, ctx)
    validate_connections(graph, settings, ctx)
    return ctx.errors


def degree_warnings(graph: RoomGraph, settings: Optional[MazeSettings] = None) -> List[str]:
    settings = settings or MazeSettings()
    return [
        format_validation_message(
            room.name,
            "Degree",
            f"has {room.degree} connections; the target minimum is {settings.min_connections}.",
        )
        for room in graph
        if room.degree < settings.min_connections
    ]


def reachable_from(graph: RoomGraph, name: str) -> Set[str]:
    if name not in graph:
        return set()
    visited: Set[str] = set()
    queue: deque[str] = deque([name])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        queue.extend(graph[current].connection_names())
    return visited
