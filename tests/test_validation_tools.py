import random
import subprocess
import sys
from pathlib import Path

from maze.buildrooms import build_maze
from maze.maze_schema import degree_warnings, reachable_from, validate_maze
from maze.room_files import write_maze
from maze.rooms import Room, RoomGraph, RoomType
from tools import list_unreachable


REPO_ROOT = Path(__file__).resolve().parents[1]


def write_rooms(directory: Path, rooms: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in rooms.items():
        (directory / name).write_text(text)
    return directory


def run_validate(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(REPO_ROOT / "tools" / "validate.py"), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_generated_mazes_pass_validation() -> None:
    for seed in range(50):
        graph = build_maze(random.Random(seed))
        assert validate_maze(graph) == []


def test_validate_maze_flags_role_counts_and_over_target_rooms() -> None:
    graph = RoomGraph()
    rooms = [graph.add(Room(f"Room{index}", RoomType.MID, 1)) for index in range(7)]
    rooms[0].role = RoomType.START
    rooms[1].role = RoomType.START
    graph.connect(rooms[0], rooms[1])
    graph.connect(rooms[0], rooms[2])

    errors = validate_maze(graph)

    assert any("exactly one START_ROOM, found 2" in error for error in errors)
    assert any("exactly one END_ROOM, found 0" in error for error in errors)
    assert any(error.startswith("Room0: Degree") for error in errors)


def test_degree_warnings_report_rooms_below_minimum() -> None:
    graph = RoomGraph([Room("DennyDen", RoomType.START, 3), Room("LeschiLake", RoomType.END, 3)])
    graph.connect(*graph.rooms)

    warnings = degree_warnings(graph)

    assert len(warnings) == 2
    assert "target minimum is 3" in warnings[0]


def test_validate_tool_accepts_generated_maze(tmp_path: Path) -> None:
    rooms_dir = tmp_path / "maze.rooms.1"
    rooms_dir.mkdir()
    write_maze(rooms_dir, build_maze(random.Random(11)))

    result = run_validate(str(rooms_dir), "--settings", str(tmp_path / "missing.json"))

    assert result.returncode == 0
    assert "Validation passed" in result.stdout


def test_validate_tool_flags_two_start_rooms(tmp_path: Path) -> None:
    rooms_dir = write_rooms(
        tmp_path / "maze.rooms.2",
        {
            "DennyDen": "ROOM NAME: DennyDen\nCONNECTION 1: LeschiLake\nROOM TYPE: START_ROOM\n",
            "LeschiLake": "ROOM NAME: LeschiLake\nCONNECTION 1: DennyDen\nROOM TYPE: START_ROOM\n",
        },
    )

    result = run_validate(str(rooms_dir), "--settings", str(tmp_path / "missing.json"))

    assert result.returncode == 1
    assert "exactly one START_ROOM, found 2" in result.stdout


def test_validate_tool_reports_unloadable_rooms(tmp_path: Path) -> None:
    rooms_dir = write_rooms(
        tmp_path / "maze.rooms.3",
        {"DennyDen": "ROOM NAME: DennyDen\nCONNECTION 1: Narnia\nROOM TYPE: START_ROOM\n"},
    )

    result = run_validate(str(rooms_dir), "--settings", str(tmp_path / "missing.json"))

    assert result.returncode == 1
    assert "Failed to load rooms" in result.stdout


def test_list_unreachable_finds_cut_off_end_room() -> None:
    graph = RoomGraph()
    den = graph.add(Room("DennyDen", RoomType.START, 1))
    burrow = graph.add(Room("BallardBurrow", RoomType.MID, 1))
    lake = graph.add(Room("LeschiLake", RoomType.END, 0))
    graph.connect(den, burrow)

    reached, unreachable = list_unreachable.find_unreachable(graph)

    assert reached == {"DennyDen", "BallardBurrow"}
    assert unreachable == ["LeschiLake"]
    assert reachable_from(graph, lake.name) == {"LeschiLake"}
