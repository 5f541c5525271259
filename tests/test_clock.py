import asyncio
from datetime import datetime
from pathlib import Path

import pytest

from maze.clock import ClockTask, format_time, read_time_file, tell_time, write_time_file


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2017, 2, 7, 13, 3), "1:03pm, Tuesday, February 7, 2017"),
        (datetime(2017, 2, 5, 0, 0), "12:00am, Sunday, February 5, 2017"),
        (datetime(2026, 10, 19, 12, 45), "12:45pm, Monday, October 19, 2026"),
        (datetime(1999, 12, 31, 9, 9), "9:09am, Friday, December 31, 1999"),
        (datetime(2024, 1, 6, 23, 59), "11:59pm, Saturday, January 6, 2024"),
    ],
)
def test_format_time(moment: datetime, expected: str) -> None:
    assert format_time(moment) == expected


def test_write_time_file_overwrites_with_line_and_blank_line(tmp_path: Path) -> None:
    path = tmp_path / "currentTime.txt"
    path.write_text("stale contents that are longer than the new line\n")

    line = write_time_file(path, datetime(2017, 2, 7, 13, 3))

    assert line == "1:03pm, Tuesday, February 7, 2017"
    assert read_time_file(path) == "1:03pm, Tuesday, February 7, 2017\n\n"
    assert [child.name for child in tmp_path.iterdir()] == ["currentTime.txt"]


def test_tell_time_hands_the_lock_over_and_back(tmp_path: Path) -> None:
    path = tmp_path / "currentTime.txt"

    async def scenario():
        lock = asyncio.Lock()
        clock = ClockTask(path, lock, now=lambda: datetime(2017, 2, 7, 13, 3))
        await lock.acquire()
        text = await tell_time(clock)
        return text, lock.locked(), clock.running

    text, locked, running = asyncio.run(scenario())

    assert text == "1:03pm, Tuesday, February 7, 2017\n\n"
    assert locked
    assert not running


def test_clock_task_waits_for_the_lock(tmp_path: Path) -> None:
    path = tmp_path / "currentTime.txt"

    async def scenario():
        lock = asyncio.Lock()
        clock = ClockTask(path, lock, now=lambda: datetime(2017, 2, 7, 13, 3))
        await lock.acquire()
        task = clock.spawn()
        await asyncio.sleep(0.05)
        written_while_locked = path.exists()
        with pytest.raises(RuntimeError, match="already running"):
            clock.spawn()
        await clock.cancel()
        lock.release()
        return written_while_locked, task.cancelled()

    written_while_locked, cancelled = asyncio.run(scenario())

    assert not written_while_locked
    assert cancelled
    assert not path.exists()
