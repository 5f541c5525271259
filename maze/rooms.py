"""Room graph model for the maze."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

MIN_CONNECTIONS = 3
MAX_CONNECTIONS = 6
ROOMS_IN_GAME = 7

# Seattle neighborhoods and landscapes.
ROOM_NAMES = (
    "DennyDen",
    "BallardBurrow",
    "FremontForest",
    "MontlakeMountains",
    "PioneerPlains",
    "ColumbiaCaverns",
    "SodoSwamp",
    "LeschiLake",
    "RavennaRidge",
    "WallingfordWoods",
)


class ConnectionRejected(ValueError):
    """Raised when an edge would break the shape of the graph."""


class RoomType(Enum):
    START = "START_ROOM"
    MID = "MID_ROOM"
    END = "END_ROOM"

    @classmethod
    def parse(cls, label: str) -> "RoomType":
        try:
            return cls(label.strip())
        except ValueError:
            raise ValueError(f"Unknown room type '{label}'.") from None


@dataclass(eq=False)
class Room:
    name: str
    role: RoomType = RoomType.MID
    max_connections: int = MIN_CONNECTIONS
    connections: List["Room"] = field(default_factory=list)

    @property
    def degree(self) -> int:
        return len(self.connections)

    def has_room_for_more(self) -> bool:
        return self.degree < self.max_connections

    def connection_names(self) -> List[str]:
        return [room.name for room in self.connections]

    def is_connected_to(self, other: "Room") -> bool:
        return any(room is other for room in self.connections)

    def __repr__(self) -> str:
        return (
            f"Room({self.name!r}, {self.role.name}, "
            f"{self.degree}/{self.max_connections})"
        )


class RoomGraph:
    """Rooms in selection order plus the undirected edges between them."""

    def __init__(self, rooms: Optional[List[Room]] = None, *, max_degree: int = MAX_CONNECTIONS):
        self.max_degree = max_degree
        self._rooms: Dict[str, Room] = {}
        for room in rooms or []:
            self.add(room)

    def add(self, room: Room) -> Room:
        if room.name in self._rooms:
            raise ValueError(f"Duplicate room '{room.name}'.")
        self._rooms[room.name] = room
        return room

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms.values())

    def __contains__(self, name: object) -> bool:
        return name in self._rooms

    def __getitem__(self, name: str) -> Room:
        return self._rooms[name]

    def get(self, name: str) -> Optional[Room]:
        return self._rooms.get(name)

    @property
    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def names(self) -> List[str]:
        return list(self._rooms)

    def connect(self, first: Room, second: Room) -> None:
        if first is second:
            raise ConnectionRejected(f"Room '{first.name}' cannot connect to itself.")
        for room in (first, second):
            if self._rooms.get(room.name) is not room:
                raise ConnectionRejected(f"Room '{room.name}' is not part of this maze.")
        if first.is_connected_to(second):
            raise ConnectionRejected(
                f"Rooms '{first.name}' and '{second.name}' are already connected."
            )
        for room in (first, second):
            if room.degree >= self.max_degree:
                raise ConnectionRejected(
                    f"Room '{room.name}' already has {self.max_degree} connections."
                )
        first.connections.append(second)
        second.connections.append(first)

    def rooms_with_role(self, role: RoomType) -> List[Room]:
        return [room for room in self if room.role is role]

    def _single(self, role: RoomType) -> Room:
        matches = self.rooms_with_role(role)
        if len(matches) != 1:
            raise LookupError(f"Expected exactly one {role.value}, found {len(matches)}.")
        return matches[0]

    def start_room(self) -> Room:
        return self._single(RoomType.START)

    def end_room(self) -> Room:
        return self._single(RoomType.END)

    def adjacency(self) -> Dict[str, set]:
        return {room.name: set(room.connection_names()) for room in self}
