#!/usr/bin/env python3
"""
Room maze adventure.
- Loads the most recently built rooms directory.
- Walk from the start room to the end room by typing adjacent room names.
- Type "time" to have a background clock task report the current time.
- 50 steps without finding the end room and the game is lost.
Usage: python3 adventure.py [--base-dir DIR] [--settings maze_settings.json]
"""

import argparse
import asyncio
import inspect
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    from maze.clock import ClockTask, tell_time
    from maze.room_files import RoomFileError, read_maze
    from maze.rooms import Room, RoomGraph, RoomType
    from maze.session import SessionError, enter_directory, select_directory
    from maze.settings import SETTINGS_PATH, MazeSettings, load_settings
else:
    from .clock import ClockTask, tell_time
    from .room_files import RoomFileError, read_maze
    from .rooms import Room, RoomGraph, RoomType
    from .session import SessionError, enter_directory, select_directory
    from .settings import SETTINGS_PATH, MazeSettings, load_settings

InputFunc = Callable[[str], str | Awaitable[str]]
PrintFunc = Callable[..., None]

TIME_COMMAND = "time"
PROMPT = "WHERE TO? >"
UNKNOWN_ROOM = "\nHUH? I DON'T UNDERSTAND THAT ROOM.  TRY AGAIN\n"


def emit_print(*args, **kwargs) -> None:
    print(*args, **kwargs)


async def read_input(prompt: str = "") -> str:
    return await asyncio.to_thread(input, prompt)


class Outcome(Enum):
    EXPLORING = "exploring"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


class PlayerState:
    def __init__(self, graph: RoomGraph, settings: Optional[MazeSettings] = None):
        self.graph = graph
        self.settings = settings or MazeSettings()
        self.current_room: Room = graph.start_room()
        self.steps = 0
        self.path: List[str] = []
        self.outcome = Outcome.EXPLORING

    def neighbor(self, name: str) -> Optional[Room]:
        for room in self.current_room.connections:
            if room.name == name:
                return room
        return None

    def move_to(self, room: Room) -> None:
        if self.outcome is not Outcome.EXPLORING:
            raise RuntimeError("The game is already over.")
        if not self.current_room.is_connected_to(room):
            raise ValueError(f"'{room.name}' is not next to '{self.current_room.name}'.")
        if len(self.path) >= self.settings.max_steps:
            raise RuntimeError(f"Path is already {self.settings.max_steps} steps long.")
        self.current_room = room
        self.steps += 1
        self.path.append(room.name)
        self.outcome = self._resolve_outcome()

    def _resolve_outcome(self) -> Outcome:
        if self.current_room.role is RoomType.END:
            return Outcome.SOLVED
        if self.steps >= self.settings.max_steps:
            return Outcome.EXHAUSTED
        return Outcome.EXPLORING

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.EXPLORING


def describe_location(room: Room) -> List[str]:
    return [
        f"CURRENT LOCATION: {room.name}",
        "POSSIBLE CONNECTIONS: " + ", ".join(room.connection_names()) + ".",
    ]


def report_outcome(state: PlayerState, print_func: PrintFunc = emit_print) -> None:
    if state.outcome is Outcome.SOLVED:
        print_func("YOU HAVE FOUND THE END ROOM. CONGRATULATIONS!")
        print_func(f"YOU TOOK {state.steps} STEPS.  YOUR PATH TO VICTORY WAS:")
        for name in state.path:
            print_func(name)
    elif state.outcome is Outcome.EXHAUSTED:
        print_func(
            f"IT TOOK YOU {state.steps} STEPS AND YOU STILL COULDN'T SOLVE IT... SAD!"
        )


async def _resolve_input(input_func: InputFunc, prompt: str) -> str:
    result = input_func(prompt)
    if inspect.isawaitable(result):
        return await result
    return result


async def play(
    graph: RoomGraph,
    settings: Optional[MazeSettings] = None,
    *,
    time_path: Path | str | None = None,
    input_func: InputFunc = read_input,
    print_func: PrintFunc = emit_print,
    now: Callable[[], datetime] = datetime.now,
) -> PlayerState:
    settings = settings or MazeSettings()
    state = PlayerState(graph, settings)

    # Held for the whole game except while a clock task writes the time file.
    lock = asyncio.Lock()
    clock = ClockTask(time_path or settings.time_filename, lock, now=now)
    await lock.acquire()
    try:
        while not state.finished:
            for line in describe_location(state.current_room):
                print_func(line)
            choice = (await _resolve_input(input_func, PROMPT)).rstrip("\r\n")

            target = state.neighbor(choice)
            if target is not None:
                print_func("")
                state.move_to(target)
                continue
            if choice == TIME_COMMAND:
                print_func("")
                print_func(await tell_time(clock), end="")
                continue
            print_func(UNKNOWN_ROOM)
    finally:
        await clock.cancel()
        if lock.locked():
            lock.release()

    report_outcome(state, print_func)
    return state


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play the most recently built room maze.")
    parser.add_argument(
        "--base-dir",
        default=".",
        help="Directory holding the generated rooms directories.",
    )
    parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="Path to a maze settings JSON file.",
    )
    return parser.parse_args(argv)


async def main(
    argv: Optional[Sequence[str]] = None,
    *,
    input_func: InputFunc = read_input,
    print_func: PrintFunc = emit_print,
) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings(args.settings)
    try:
        directory = select_directory(args.base_dir, settings.directory_prefix)
        enter_directory(directory)
        graph = read_maze(Path("."), settings)
        graph.start_room()
    except (SessionError, RoomFileError, LookupError) as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    try:
        await play(graph, settings, input_func=input_func, print_func=print_func)
    except OSError as exc:
        print(f"[!] Could not write {settings.time_filename}: {exc}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    try:
        code = asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        emit_print("\n[Interrupted] Bye.")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    run()
