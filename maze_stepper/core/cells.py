from enum import Enum, IntEnum
from typing import Iterator, NamedTuple, Optional, Tuple

Coord = Tuple[int, int]
Neighbor = Tuple["CellKind", Coord]


class CellKind(IntEnum):
    # Stored as one byte per cell, values must stay below 256
    EMPTY = 0
    WALL = 1
    START = 2
    GOAL = 3
    PATH = 4
    EXPLORED = 5
    CURSOR = 6


class Direction(IntEnum):
    """
    Cardinal directions on a grid whose row 0 is the bottom row.
    NORTH moves to row + 1, SOUTH to row - 1.
    SENTINEL only marks the end of a neighborhood walk.
    """
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    SENTINEL = 255

    def __neg__(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def successor(self) -> "Direction":
        return _SUCCESSOR[self]

    @property
    def delta(self) -> Coord:
        return _DELTA[self]

    @classmethod
    def from_unit(cls, value: float) -> "Direction":
        """Maps a uniform sample in [0, 1) onto one of the four cardinals."""
        return cls(int(value * 4))


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.SENTINEL: Direction.SENTINEL,
}

_SUCCESSOR = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.SENTINEL,
    Direction.SENTINEL: Direction.SENTINEL,
}

_DELTA = {
    Direction.NORTH: (1, 0),
    Direction.SOUTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


class Dimensions(NamedTuple):
    rows: int
    columns: int


class SolverKind(Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"


class GridVariant(Enum):
    BLOCK = "block"
    WALL = "wall"


class Neighborhood:
    """
    The (kind, coords) pairs around one cell. Missing entries are None.
    Iteration always walks NORTH, SOUTH, EAST, WEST and yields
    ((kind, coords), direction) for every neighbor that exists.
    """
    __slots__ = ('north', 'south', 'east', 'west')

    def __init__(self, north: Optional[Neighbor] = None, south: Optional[Neighbor] = None,
                 east: Optional[Neighbor] = None, west: Optional[Neighbor] = None):
        self.north = north
        self.south = south
        self.east = east
        self.west = west

    def get(self, direction: Direction) -> Optional[Neighbor]:
        if direction == Direction.NORTH:
            return self.north
        if direction == Direction.SOUTH:
            return self.south
        if direction == Direction.EAST:
            return self.east
        if direction == Direction.WEST:
            return self.west
        return None

    def __iter__(self) -> Iterator[Tuple[Neighbor, Direction]]:
        direction = Direction.NORTH
        while direction != Direction.SENTINEL:
            neighbor = self.get(direction)
            if neighbor is not None:
                yield neighbor, direction
            direction = direction.successor

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return (f"Neighborhood(north={self.north}, south={self.south}, "
                f"east={self.east}, west={self.west})")
