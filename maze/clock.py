"""Clock task that writes the current time for the player loop."""

from __future__ import annotations

import asyncio
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def twelve_hour(hour: int) -> tuple[int, str]:
    suffix = "pm" if hour >= 12 else "am"
    hour = hour % 12
    return (hour or 12), suffix


def format_time(moment: datetime) -> str:
    """Render ``moment`` as ``1:03pm, Tuesday, February 7, 2017``."""
    hour, suffix = twelve_hour(moment.hour)
    weekday = WEEKDAYS[moment.weekday()]
    month = MONTHS[moment.month - 1]
    return f"{hour}:{moment.minute:02d}{suffix}, {weekday}, {month} {moment.day}, {moment.year}"


def write_time_file(path: Path | str, moment: Optional[datetime] = None) -> str:
    path = Path(path)
    line = format_time(moment or datetime.now())
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=path.parent, prefix=path.name, suffix=".tmp", encoding="utf-8"
        ) as tmp_file:
            tmp_file.write(f"{line}\n\n")
            tmp_path = Path(tmp_file.name)
        os.replace(str(tmp_path), str(path))
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise
    return line


def read_time_file(path: Path | str) -> str:
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


class ClockTask:
    """Write the time file on demand while holding the shared lock.

    The lock belongs to the caller, which must release it before ``spawn`` and
    take it back once the task is done. Only one task runs at a time.
    """

    def __init__(
        self,
        time_path: Path | str,
        lock: asyncio.Lock,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.time_path = Path(time_path)
        self.lock = lock
        self.now = now
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def spawn(self) -> asyncio.Task:
        if self.running:
            raise RuntimeError("A clock task is already running.")
        self._task = asyncio.create_task(self._run())
        return self._task

    async def _run(self) -> str:
        async with self.lock:
            return await asyncio.to_thread(write_time_file, self.time_path, self.now())

    async def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


async def tell_time(clock: ClockTask) -> str:
    """Hand the lock to a fresh clock task and read back what it wrote."""
    clock.lock.release()
    try:
        await clock.spawn()
    finally:
        await clock.lock.acquire()
    return read_time_file(clock.time_path)
