import os
from pathlib import Path

import pytest

from maze.session import SessionError, enter_directory, find_session_directories, select_directory


def make_dir(base: Path, name: str, mtime: int) -> Path:
    path = base / name
    path.mkdir()
    os.utime(path, (mtime, mtime))
    return path


def test_select_directory_prefers_latest_modification(tmp_path: Path) -> None:
    make_dir(tmp_path, "maze.rooms.100", 1_000)
    newest = make_dir(tmp_path, "maze.rooms.7", 3_000)
    make_dir(tmp_path, "maze.rooms.55", 2_000)
    make_dir(tmp_path, "other.9", 9_000)

    assert select_directory(tmp_path, "maze.rooms.") == newest


def test_find_session_directories_ignores_plain_files(tmp_path: Path) -> None:
    (tmp_path / "maze.rooms.1").write_text("not a directory")
    rooms = make_dir(tmp_path, "maze.rooms.2", 1_000)

    assert find_session_directories(tmp_path, "maze.rooms.") == [rooms]


def test_select_directory_without_candidates(tmp_path: Path) -> None:
    with pytest.raises(SessionError, match="maze.rooms."):
        select_directory(tmp_path, "maze.rooms.")


def test_enter_directory_changes_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    rooms = make_dir(tmp_path, "maze.rooms.3", 1_000)

    entered = enter_directory(rooms)

    assert entered == rooms.resolve()
    assert Path.cwd() == rooms.resolve()
