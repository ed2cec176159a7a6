# utils.py
import numpy as np
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, TypeVar

import constants as const

T = TypeVar("T")


# --- Scalar Index Types ---
class _Scalar(int):
    """Non-negative integer with checked arithmetic."""

    def __new__(cls, value=0):
        value = int(value)
        if value < 0:
            raise ValueError(f"{cls.__name__} cannot be negative (got {value}).")
        return super().__new__(cls, value)

    def plus(self, rhs: int):
        return type(self)(int(self) + int(rhs))

    def minus(self, rhs: int):
        """Subtracts `rhs`, raising ValueError instead of going below zero."""
        return type(self)(int(self) - int(rhs))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


class Index(_Scalar):
    """Position of a cell in a grid's storage order."""


class Capacity(_Scalar):
    """Total number of cells in a grid."""


class RowSize(_Scalar):
    """Number of cells along one side of a grid."""

    def squared(self) -> Capacity:
        return Capacity(int(self) * int(self))


ColSize = RowSize


class Visit(_Scalar):
    """Step counter of a traversal."""


class Coord(NamedTuple):
    """Column (x) and row (y) of a cell."""

    x: int
    y: int

    def id(self, row_size: int) -> Index:
        return Index(self.y * int(row_size) + self.x)

    def __str__(self) -> str:
        return f"(x={self.x},y={self.y})"


# --- Directions ---
class Cardinal(Enum):
    N = const.DIR_N
    E = const.DIR_E
    S = const.DIR_S
    W = const.DIR_W

    def clockwise(self) -> "Cardinal":
        return _CLOCKWISE[self]

    def counter_clockwise(self) -> "Cardinal":
        return _COUNTER_CLOCKWISE[self]

    def opposite(self) -> "Cardinal":
        """Returns the opposite direction on the same axis (N <-> S, E <-> W)."""
        return self.clockwise().clockwise()

    def __neg__(self) -> "Cardinal":
        return self.opposite()

    @property
    def char(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _CARDINAL_NAMES[self]

    @classmethod
    def iter_from(cls, start: Optional["Cardinal"] = None) -> List["Cardinal"]:
        """All four directions, clockwise, starting at `start` (default N)."""
        current = start or cls.N
        dirs = []
        for _ in range(4):
            dirs.append(current)
            current = current.clockwise()
        return dirs

    @classmethod
    def parse(cls, text: str) -> "Cardinal":
        key = text.strip().lower()
        for d in cls:
            if key in (d.value.lower(), _CARDINAL_NAMES[d].lower()):
                return d
        raise ValueError(f"Invalid string; cannot convert '{text}' to Cardinal")


_CLOCKWISE = {
    Cardinal.N: Cardinal.E,
    Cardinal.E: Cardinal.S,
    Cardinal.S: Cardinal.W,
    Cardinal.W: Cardinal.N,
}
_COUNTER_CLOCKWISE = {v: k for k, v in _CLOCKWISE.items()}
_CARDINAL_NAMES = {
    Cardinal.N: "North",
    Cardinal.E: "East",
    Cardinal.S: "South",
    Cardinal.W: "West",
}


class Major(Enum):
    """How a visit counter is split into column (x) and row (y) offsets."""

    ROW = "row"
    COL = "col"

    def offsets(self, visit: int, size: int):
        if self is Major.ROW:
            return visit % size, visit // size
        return visit // size, visit % size


class Horizontal(Enum):
    E = const.DIR_E
    W = const.DIR_W

    def x(self, offset: int, size: int) -> int:
        # Moving west starts from the far (east) edge
        if self is Horizontal.E:
            return offset
        return size - 1 - offset

    def to_cardinal(self) -> Cardinal:
        return Cardinal(self.value)


class Vertical(Enum):
    S = const.DIR_S
    N = const.DIR_N

    def y(self, offset: int, size: int) -> int:
        if self is Vertical.S:
            return offset
        return size - 1 - offset

    def to_cardinal(self) -> Cardinal:
        return Cardinal(self.value)


class Ordinal(Enum):
    NW = const.CORNER_NW
    NE = const.CORNER_NE
    SE = const.CORNER_SE
    SW = const.CORNER_SW

    def inc_cw(self) -> "Ordinal":
        order = list(Ordinal)
        return order[(order.index(self) + 1) % 4]

    def inc_ccw(self) -> "Ordinal":
        order = list(Ordinal)
        return order[(order.index(self) - 1) % 4]

    def side_x(self) -> Horizontal:
        """The vertical edge this corner touches."""
        return Horizontal.W if self in (Ordinal.NW, Ordinal.SW) else Horizontal.E

    def side_y(self) -> Vertical:
        """The horizontal edge this corner touches."""
        return Vertical.N if self in (Ordinal.NW, Ordinal.NE) else Vertical.S

    def direction_x(self) -> Horizontal:
        """Which way a scan starting in this corner moves horizontally."""
        return Horizontal.E if self in (Ordinal.NW, Ordinal.SW) else Horizontal.W

    def direction_y(self) -> Vertical:
        """Which way a scan starting in this corner moves vertically."""
        return Vertical.S if self in (Ordinal.NW, Ordinal.NE) else Vertical.N

    def major_order_coord(self, visit: int, size: int, major: Major = Major.ROW) -> Coord:
        """Coordinate of the `visit`-th cell of a scan starting in this corner."""
        size = int(size)
        off_x, off_y = major.offsets(int(visit), size)
        return Coord(self.direction_x().x(off_x, size), self.direction_y().y(off_y, size))

    def major_order_index(self, visit: int, size: int, major: Major = Major.ROW) -> Index:
        return self.major_order_coord(visit, size, major).id(size)

    @classmethod
    def parse(cls, text: str) -> "Ordinal":
        key = text.strip().lower()
        for o in cls:
            if key in (o.value.lower(), _ORDINAL_NAMES[o].lower()):
                return o
        raise ValueError(f"Invalid string; cannot convert '{text}' to Ordinal")


_ORDINAL_NAMES = {
    Ordinal.NW: "Northwest",
    Ordinal.NE: "Northeast",
    Ordinal.SE: "Southeast",
    Ordinal.SW: "Southwest",
}


# --- Randomness ---
def make_rng(seed: Optional[int] = const.DEFAULT_SEED) -> np.random.Generator:
    """Creates the random generator every algorithm draws from. Any integer seed is accepted."""
    if seed is not None:
        # numpy only seeds from non-negative integers; fold negatives into 64 bits
        seed = int(seed) % 2**64
    return np.random.default_rng(seed)


def random_index(rng: np.random.Generator, n: int) -> int:
    """Uniform integer in [0, n)."""
    if n <= 0:
        raise ValueError("Cannot draw from an empty range.")
    return int(rng.integers(0, n))


def random_choice(rng: np.random.Generator, items: Sequence[T]) -> T:
    """Picks one element of `items` uniformly."""
    return items[random_index(rng, len(items))]


def coin_flip(rng: np.random.Generator) -> bool:
    return random_index(rng, 2) == 1
