import pytest

from maze.rooms import ConnectionRejected, Room, RoomGraph, RoomType


def small_graph(count: int = 3) -> RoomGraph:
    names = ["DennyDen", "BallardBurrow", "FremontForest", "MontlakeMountains",
             "PioneerPlains", "ColumbiaCaverns", "SodoSwamp", "LeschiLake"]
    return RoomGraph([Room(name) for name in names[:count]])


def test_connect_is_symmetric() -> None:
    graph = small_graph()
    den, burrow, _ = graph.rooms

    graph.connect(den, burrow)

    assert den.connection_names() == ["BallardBurrow"]
    assert burrow.connection_names() == ["DennyDen"]
    assert graph.adjacency()["FremontForest"] == set()


def test_connect_rejects_self_loops_and_duplicates() -> None:
    graph = small_graph()
    den, burrow, _ = graph.rooms
    graph.connect(den, burrow)

    with pytest.raises(ConnectionRejected, match="itself"):
        graph.connect(den, den)
    with pytest.raises(ConnectionRejected, match="already connected"):
        graph.connect(burrow, den)


def test_connect_rejects_rooms_from_elsewhere() -> None:
    graph = small_graph()
    with pytest.raises(ConnectionRejected, match="not part of this maze"):
        graph.connect(graph.rooms[0], Room("LeschiLake"))


def test_connect_enforces_degree_cap() -> None:
    graph = small_graph(8)
    hub, *others = graph.rooms
    for other in others[:6]:
        graph.connect(hub, other)

    with pytest.raises(ConnectionRejected, match="already has 6 connections"):
        graph.connect(hub, others[6])


def test_role_lookup_requires_exactly_one_match() -> None:
    graph = small_graph()
    graph.rooms[0].role = RoomType.START
    assert graph.start_room().name == "DennyDen"
    with pytest.raises(LookupError, match="END_ROOM"):
        graph.end_room()


def test_duplicate_room_names_are_rejected() -> None:
    graph = small_graph()
    with pytest.raises(ValueError, match="Duplicate room"):
        graph.add(Room("DennyDen"))


def test_room_type_parse() -> None:
    assert RoomType.parse("START_ROOM ") is RoomType.START
    with pytest.raises(ValueError, match="Unknown room type"):
        RoomType.parse("BOSS_ROOM")
