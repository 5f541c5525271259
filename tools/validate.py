#!/usr/bin/env python3
"""Validate a generated rooms directory for malformed mazes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from maze.maze_schema import degree_warnings, validate_maze
from maze.room_files import RoomFileError, read_maze
from maze.session import SessionError, select_directory
from maze.settings import SETTINGS_PATH, load_settings


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a room maze directory.")
    parser.add_argument(
        "rooms_dir",
        nargs="?",
        default=None,
        help="Rooms directory to check (defaults to the most recent one).",
    )
    parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="Path to a maze settings JSON file.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str]) -> None:
    args = parse_args(argv[1:])
    settings = load_settings(args.settings)
    try:
        if args.rooms_dir is None:
            rooms_dir = select_directory(".", settings.directory_prefix)
        else:
            rooms_dir = Path(args.rooms_dir)
        graph = read_maze(rooms_dir, settings)
    except (SessionError, RoomFileError) as exc:
        print(f"Failed to load rooms: {exc}")
        sys.exit(1)

    errors = validate_maze(graph, settings)
    if errors:
        print("Validation failed (room: message):")
        for err in errors:
            print(f" - {err}")
        sys.exit(1)

    warnings = degree_warnings(graph, settings)
    if warnings:
        print("Degree warnings (room: message):")
        for warning in warnings:
            print(f" - {warning}")

    print(f"Validation passed for {rooms_dir.resolve()}.")


if __name__ == "__main__":
    main(sys.argv)
