#!/usr/bin/env python3
"""
Room maze builder.
- Picks 7 of the 10 named rooms, gives each a random connection budget (3..6).
- Wires them into an undirected graph in one greedy pass.
- First pick is the start room, last pick is the end room.
- Writes one file per room into a fresh directory named after the process id.
Usage: python3 buildrooms.py [--seed N] [--settings maze_settings.json] [--save-settings PATH]
"""

import argparse
import os
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    from maze.room_files import RoomFileError, write_maze
    from maze.rooms import ROOM_NAMES, Room, RoomGraph, RoomType
    from maze.settings import SETTINGS_PATH, MazeSettings, load_settings, save_settings
else:
    from .room_files import RoomFileError, write_maze
    from .rooms import ROOM_NAMES, Room, RoomGraph, RoomType
    from .settings import SETTINGS_PATH, MazeSettings, load_settings, save_settings

DIRECTORY_MODE = 0o755


class GenerationError(Exception):
    """Raised when no maze satisfying the settings could be built."""


def select_rooms(rng: random.Random, settings: MazeSettings) -> List[str]:
    chosen: List[int] = []
    while len(chosen) < settings.rooms_in_game:
        index = rng.randrange(len(ROOM_NAMES))
        if index not in chosen:
            chosen.append(index)
    return [ROOM_NAMES[index] for index in chosen]


def assign_connections(rng: random.Random, count: int, settings: MazeSettings) -> List[int]:
    return [
        rng.randint(settings.min_connections, settings.max_connections)
        for _ in range(count)
    ]


def create_rooms(names: Sequence[str], targets: Sequence[int], settings: MazeSettings) -> RoomGraph:
    graph = RoomGraph(max_degree=settings.max_connections)
    last = len(names) - 1
    for index, (name, target) in enumerate(zip(names, targets)):
        if index == 0:
            role = RoomType.START
        elif index == last:
            role = RoomType.END
        else:
            role = RoomType.MID
        graph.add(Room(name=name, role=role, max_connections=target))
    return graph


def create_connections(graph: RoomGraph) -> RoomGraph:
    rooms = graph.rooms
    everyone = len(rooms) - 1
    for i, room in enumerate(rooms):
        later = rooms[i + 1 :]
        # A room that needs every other room takes all later ones unconditionally.
        if room.max_connections >= everyone:
            for other in later:
                graph.connect(room, other)
                if other.degree > other.max_connections:
                    other.max_connections = other.degree
        elif room.has_room_for_more():
            for other in later:
                # Stop at its own target so degree never exceeds max_connections.
                if not room.has_room_for_more():
                    break
                if other.has_room_for_more():
                    graph.connect(room, other)
        if room.degree < room.max_connections:
            room.max_connections = room.degree
    return graph


def meets_minimum(graph: RoomGraph, settings: MazeSettings) -> bool:
    return all(room.degree >= settings.min_connections for room in graph)


def build_maze(rng: random.Random, settings: Optional[MazeSettings] = None) -> RoomGraph:
    settings = settings or MazeSettings()
    attempts = settings.generation_attempts if settings.enforce_min_connections else 1
    for _ in range(attempts):
        names = select_rooms(rng, settings)
        targets = assign_connections(rng, len(names), settings)
        graph = create_connections(create_rooms(names, targets, settings))
        if not settings.enforce_min_connections or meets_minimum(graph, settings):
            return graph
    raise GenerationError(
        f"No maze with {settings.min_connections}+ connections per room "
        f"after {attempts} attempts."
    )


def create_directory(
    base: Path | str, settings: MazeSettings, pid: Optional[int] = None
) -> Path:
    pid = os.getpid() if pid is None else pid
    path = Path(base) / f"{settings.directory_prefix}{pid}"
    path.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    os.chmod(path, DIRECTORY_MODE)
    return path


def describe(graph: RoomGraph) -> str:
    start = graph.start_room().name
    end = graph.end_room().name
    edges = sum(room.degree for room in graph) // 2
    return f"{len(graph)} rooms, {edges} connections, {start} -> {end}"


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a random room maze.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze.")
    parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="Path to a maze settings JSON file.",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory in which the rooms directory is created.",
    )
    parser.add_argument(
        "--save-settings",
        metavar="PATH",
        default=None,
        help="Also write the effective (clamped) settings to PATH as JSON.",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print a summary.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings(args.settings)
    rng = random.Random(args.seed)

    try:
        graph = build_maze(rng, settings)
    except GenerationError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    try:
        directory = create_directory(args.output_dir, settings)
        write_maze(directory, graph)
    except (OSError, RoomFileError) as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    if args.save_settings:
        try:
            save_settings(settings, args.save_settings)
        except OSError as exc:
            print(f"[!] Could not save settings to {args.save_settings}: {exc}", file=sys.stderr)
            return 1

    if not args.quiet:
        print(f"[Build] {describe(graph)} written to {directory}.")
        if args.save_settings:
            print(f"[Settings] Saved to {args.save_settings}.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
