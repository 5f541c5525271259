import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from maze.maze_schema import reachable_from
from maze.room_files import read_maze
from maze.rooms import RoomGraph
from maze.session import select_directory
from maze.settings import MazeSettings


def find_unreachable(graph: RoomGraph) -> tuple:
    start = graph.start_room()
    reached = reachable_from(graph, start.name)
    unreachable = sorted(set(graph.names()) - reached)
    return reached, unreachable


def main() -> None:
    settings = MazeSettings()
    if len(sys.argv) > 1:
        rooms_dir = Path(sys.argv[1])
    else:
        rooms_dir = select_directory(".", settings.directory_prefix)
    graph = read_maze(rooms_dir, settings)
    reached, unreachable = find_unreachable(graph)
    end = graph.end_room().name

    print(f"Rooms directory: {rooms_dir}")
    print(f"Total rooms: {len(graph)}")
    print(f"Reachable rooms: {len(reached)}")
    if unreachable:
        print("Unreachable rooms:")
        for name in unreachable:
            print(f"  - {name}")
    else:
        print("All rooms reachable from the start room.")
    if end in reached:
        print(f"End room {end} can be reached.")
    else:
        print(f"End room {end} cannot be reached; this maze is unsolvable.")


if __name__ == "__main__":
    main()
