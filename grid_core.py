# grid_core.py
import copy
import numpy as np
from abc import ABC, abstractmethod
from typing import FrozenSet, Iterator, List, Optional, Sequence, Tuple

# Import from other project modules
import constants as const
from utils import (
    Capacity,
    Cardinal,
    ColSize,
    Coord,
    Index,
    Major,
    Ordinal,
    RowSize,
    random_choice,
    random_index,
)


# --- Errors ---
class OutOfBoundsError(IndexError):
    """Raised when an id does not address a cell of the grid."""

    def __init__(self, id: int):
        self.id = id
        super().__init__(f"Out of bounds error for id={id}")


class OutOfBoundsCoordError(IndexError):
    """Raised when a coordinate lies outside the grid extent."""

    def __init__(self, coord: Coord):
        self.coord = coord
        super().__init__(f"Out of bounds error for coord={coord}")


class CellLinkError(ValueError):
    """Raised when a link or unlink names a cell the grid cannot resolve."""

    def __init__(self, a: int, b: int, reason: str):
        self.a = a
        self.b = b
        self.reason = reason
        super().__init__(f"{reason} (a={a}, b={b})")


class NotNeighborsError(ValueError):
    """Raised when a cell has no geometric neighbour in the requested direction."""

    def __init__(self, id: int, direction: Cardinal, reason: str):
        self.id = id
        self.direction = direction
        self.reason = reason
        super().__init__(f"{reason} (id={id}, direction={direction.label})")


class Cell:
    """A single grid cell: fixed geometric neighbours plus the passages carved so far."""

    def __init__(self, id: int, neighbor_ids: Sequence[int]):
        self._id = Index(id)
        self._neighbor_ids: Tuple[Index, ...] = tuple(Index(n) for n in neighbor_ids)
        self._links: set = set()

    @property
    def id(self) -> Index:
        return self._id

    @property
    def neighbor_ids(self) -> Tuple[Index, ...]:
        """Cells next to this one, whether or not a passage exists."""
        return self._neighbor_ids

    @property
    def links(self) -> FrozenSet[Index]:
        """Ids of neighbours reachable through a carved passage."""
        return frozenset(self._links)

    def has_link(self, other: int) -> bool:
        return other in self._links

    def has_neighbor(self, other: int) -> bool:
        return other in self._neighbor_ids

    def is_linked(self) -> bool:
        return bool(self._links)

    def not_linked(self) -> bool:
        return not self._links

    # Only the owning grid calls these, always in symmetric pairs.
    def _add_link(self, other: Index):
        self._links.add(other)

    def _remove_link(self, other: Index):
        self._links.discard(other)

    def __repr__(self) -> str:
        return f"Cell({int(self._id)})"


class Grid(ABC):
    """
    Minimal grid capability: cell storage, lookup, and the paired link/unlink
    operations that are the only way maze passages are created or removed.
    """

    @classmethod
    @abstractmethod
    def setup(cls, size: int) -> "Grid":
        """Builds a fully populated grid with every cell unlinked."""

    @property
    @abstractmethod
    def cells(self) -> Sequence[Cell]:
        ...

    @property
    def capacity(self) -> Capacity:
        return Capacity(len(self.cells))

    # --- Lookup ---
    def lookup(self, id: int) -> Cell:
        """Unchecked lookup; `id` must already be known to be valid."""
        return self.cells[id]

    def try_lookup(self, id: int) -> Cell:
        if 0 <= id < self.capacity:
            return self.cells[id]
        raise OutOfBoundsError(id)

    def get(self, id: int) -> Optional[Cell]:
        if 0 <= id < self.capacity:
            return self.cells[id]
        return None

    def get_unchecked(self, id: int) -> Cell:
        return self.lookup(id)

    def first(self) -> Cell:
        return self.cells[0]

    def last(self) -> Cell:
        return self.cells[self.capacity.minus(1)]

    def nth(self, n: int) -> Cell:
        return self.cells[n]

    # --- Connectivity ---
    def link(self, a: int, b: int):
        """Opens a passage between `a` and `b` in both directions."""
        cell_a = self.get(a)
        if cell_a is None:
            raise CellLinkError(a, b, "Link failed - `a` could not be retrieved")
        cell_b = self.get(b)
        if cell_b is None:
            raise CellLinkError(a, b, "Link failed - `b` could not be retrieved")
        cell_a._add_link(cell_b.id)
        cell_b._add_link(cell_a.id)

    def unlink(self, a: int, b: int):
        """Closes the passage between `a` and `b`. Unlinking twice is a no-op."""
        cell_a = self.get(a)
        if cell_a is None:
            raise CellLinkError(a, b, "Unlink failed - `a` not found")
        cell_b = self.get(b)
        if cell_b is None:
            raise CellLinkError(a, b, "Unlink failed - `b` not found")
        cell_a._remove_link(cell_b.id)
        cell_b._remove_link(cell_a.id)

    def link_count(self) -> int:
        """Number of undirected passages in the grid."""
        return sum(len(cell.links) for cell in self.cells) // 2

    # --- Randomness ---
    def random_id(self, rng: np.random.Generator) -> Index:
        return Index(random_index(rng, self.capacity))

    def random_cell(self, rng: np.random.Generator) -> Cell:
        return self.lookup(self.random_id(rng))

    def random_neighbor_id(self, id: int, rng: np.random.Generator) -> Index:
        return random_choice(rng, self.lookup(id).neighbor_ids)

    def random_neighbor(self, id: int, rng: np.random.Generator) -> Cell:
        return self.lookup(self.random_neighbor_id(id, rng))

    # --- Traversal ---
    def iter(self):
        """Iterates cells in storage order."""
        from traversal import GridIter, identity

        return GridIter(self, identity)

    def reverse(self):
        from traversal import GridIter, reverse

        return GridIter(self, reverse)

    def rand(self, rng: np.random.Generator):
        """Iterates every cell once in a shuffled order."""
        from traversal import RandomIter

        return RandomIter(self, rng)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    # --- Analysis ---
    def distances(self, root: int):
        from distances import flood_fill

        return flood_fill(self, root)

    def shortest_path(self, start: int, end: int):
        from distances import shortest_path

        return shortest_path(self, start, end)

    def longest_path(self, start: int = 0):
        from distances import longest_path

        return longest_path(self, start)

    def clone(self) -> "Grid":
        """Full copy; the clone shares no cells with this grid."""
        return copy.deepcopy(self)


class CardinalGrid(Grid):
    """Grids laid out in rows and columns that can be navigated by N/E/S/W."""

    @property
    @abstractmethod
    def row_size(self) -> RowSize:
        ...

    @property
    def col_size(self) -> ColSize:
        return self.row_size

    def dimensions(self) -> Tuple[RowSize, ColSize]:
        return self.row_size, self.col_size

    # --- Boundaries ---
    def has_boundary(self, id: int, direction: Cardinal) -> bool:
        if direction is Cardinal.N:
            return self.has_boundary_north(id)
        if direction is Cardinal.E:
            return self.has_boundary_east(id)
        if direction is Cardinal.S:
            return self.has_boundary_south(id)
        return self.has_boundary_west(id)

    def has_boundary_north(self, id: int) -> bool:
        return id < self.row_size

    def has_boundary_east(self, id: int) -> bool:
        return id % self.row_size == self.row_size - 1

    def has_boundary_south(self, id: int) -> bool:
        return id // self.row_size == self.row_size - 1

    def has_boundary_west(self, id: int) -> bool:
        return id % self.row_size == 0

    def find_boundary(self, id: int) -> Optional[Cardinal]:
        """First boundary of the cell, checked clockwise from north."""
        for d in Cardinal.iter_from():
            if self.has_boundary(id, d):
                return d
        return None

    # --- Neighbours ---
    def calc_dir(self, id: int, direction: Cardinal) -> Optional[Index]:
        if direction is Cardinal.N:
            return self.calc_north(id)
        if direction is Cardinal.E:
            return self.calc_east(id)
        if direction is Cardinal.S:
            return self.calc_south(id)
        return self.calc_west(id)

    def calc_north(self, id: int) -> Optional[Index]:
        if self.has_boundary_north(id):
            return None
        return Index(id).minus(self.row_size)

    def calc_east(self, id: int) -> Optional[Index]:
        if self.has_boundary_east(id):
            return None
        return Index(id).plus(1)

    def calc_south(self, id: int) -> Optional[Index]:
        if self.has_boundary_south(id):
            return None
        return Index(id).plus(self.row_size)

    def calc_west(self, id: int) -> Optional[Index]:
        if self.has_boundary_west(id):
            return None
        return Index(id).minus(1)

    def neighbor(self, id: int, direction: Cardinal) -> Optional[Index]:
        return self.calc_dir(id, direction)

    def dir_from(self, from_id: int, to_id: int) -> Optional[Cardinal]:
        """Direction of `to_id` as seen from `from_id`, if they are neighbours."""
        for d in Cardinal.iter_from():
            if self.neighbor(from_id, d) == to_id:
                return d
        return None

    def has_dir_link(self, id: int, direction: Cardinal) -> bool:
        cell = self.get(id)
        if cell is None:
            return False
        n = self.neighbor(id, direction)
        return n is not None and cell.has_link(n)

    def link_neighbor(self, id: int, direction: Cardinal):
        n = self.neighbor(id, direction)
        if n is None:
            raise NotNeighborsError(
                id, direction, "Cell does not have a neighbor in specified direction"
            )
        self.link(id, n)

    def unlink_neighbor(self, id: int, direction: Cardinal):
        n = self.neighbor(id, direction)
        if n is None:
            raise NotNeighborsError(
                id, direction, "Cell does not have a neighbor in specified direction"
            )
        self.unlink(id, n)

    def corner_id(self, corner: Ordinal) -> Index:
        if corner is Ordinal.NW:
            return Index(0)
        if corner is Ordinal.NE:
            return Index(self.row_size.minus(1))
        if corner is Ordinal.SE:
            return Index(self.capacity.minus(1))
        return Index(self.capacity.minus(self.row_size))

    # --- Corner scans ---
    def nw(self, major: Major = Major.ROW):
        from traversal import GridIter, corner_scan

        return GridIter(self, corner_scan(Ordinal.NW, major))

    def ne(self, major: Major = Major.ROW):
        from traversal import GridIter, corner_scan

        return GridIter(self, corner_scan(Ordinal.NE, major))

    def se(self, major: Major = Major.ROW):
        from traversal import GridIter, corner_scan

        return GridIter(self, corner_scan(Ordinal.SE, major))

    def sw(self, major: Major = Major.ROW):
        from traversal import GridIter, corner_scan

        return GridIter(self, corner_scan(Ordinal.SW, major))


class CoordLookup(Grid):
    """Grids whose cells can be addressed by (x, y) coordinate."""

    @abstractmethod
    def get_id(self, coord: Coord) -> Index:
        ...

    @abstractmethod
    def try_get_id(self, coord: Coord) -> Index:
        ...

    @abstractmethod
    def get_coords(self, id: int) -> Coord:
        ...

    @abstractmethod
    def try_get_coords(self, id: int) -> Coord:
        ...


class SquareGrid(CardinalGrid, CoordLookup):
    """Square grid of size x size cells stored in row-major order."""

    def __init__(self, size: int = const.DEFAULT_GRID_SIZE):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise ValueError(f"Grid size must be an integer (got {size!r}).")
        if size < const.MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be positive (got {size}).")
        self._size = RowSize(size)
        self._cells: List[Cell] = []
        for id in range(self._size.squared()):
            neighbors = []
            for d in Cardinal.iter_from():
                n = self.calc_dir(id, d)
                if n is not None:
                    neighbors.append(n)
            self._cells.append(Cell(id, neighbors))

    @classmethod
    def setup(cls, size: int) -> "SquareGrid":
        return cls(size)

    @property
    def cells(self) -> Sequence[Cell]:
        return self._cells

    @property
    def size(self) -> RowSize:
        return self._size

    @property
    def row_size(self) -> RowSize:
        return self._size

    @property
    def capacity(self) -> Capacity:
        return self._size.squared()

    def get_id(self, coord: Coord) -> Index:
        return coord.id(self._size)

    def try_get_id(self, coord: Coord) -> Index:
        if 0 <= coord.x < self._size and 0 <= coord.y < self._size:
            return coord.id(self._size)
        raise OutOfBoundsCoordError(coord)

    def get_coords(self, id: int) -> Coord:
        return Coord(id % self._size, id // self._size)

    def try_get_coords(self, id: int) -> Coord:
        if 0 <= id < self.capacity:
            return self.get_coords(id)
        raise OutOfBoundsError(id)

    def __repr__(self) -> str:
        return f"SquareGrid(size={int(self._size)}, links={self.link_count()})"
