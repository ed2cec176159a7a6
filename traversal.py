# traversal.py
"""
Traversal orders over a grid.

A transform is a plain function ``(visit, grid) -> index`` mapping the k-th step of
a traversal to the cell visited at that step. Transforms nest by composition: the
output index of one transform is fed to the next as its visit counter, so
``grid.se().reverse()`` scans from the south-east corner and then reverses that scan.
"""

import numpy as np
from typing import Callable, Iterator, List, Sequence

from grid_core import CardinalGrid, Cell, Grid
from utils import Index, Major, Ordinal, Visit, random_choice, random_index

Transform = Callable[[int, Grid], int]


def identity(visit: int, grid: Grid) -> int:
    return visit


def reverse(visit: int, grid: Grid) -> int:
    return grid.capacity - 1 - visit


def corner_scan(corner: Ordinal, major: Major = Major.ROW) -> Transform:
    """Scan starting in `corner`, reading rows (or columns) away from it."""

    def transform(visit: int, grid: Grid) -> int:
        if not isinstance(grid, CardinalGrid):
            raise TypeError(
                f"{corner.name} scan needs a grid with row/column geometry, "
                f"got {type(grid).__name__}"
            )
        return corner.major_order_index(visit, grid.row_size, major)

    transform.__name__ = f"{corner.name.lower()}_{major.value}_major"
    return transform


nw = corner_scan(Ordinal.NW)
ne = corner_scan(Ordinal.NE)
se = corner_scan(Ordinal.SE)
sw = corner_scan(Ordinal.SW)


def compose(*transforms: Transform) -> Transform:
    """Applies `transforms` left to right."""

    def transform(visit: int, grid: Grid) -> int:
        for t in transforms:
            visit = t(visit, grid)
        return visit

    transform.__name__ = " -> ".join(t.__name__ for t in transforms)
    return transform


class GridIter:
    """Visits every cell of a grid exactly once in the order given by a transform."""

    def __init__(self, grid: Grid, transform: Transform = identity):
        self.grid = grid
        self.transform = transform

    def ids(self) -> Iterator[Index]:
        for count in range(self.grid.capacity):
            yield Index(self.transform(Visit(count), self.grid))

    def __iter__(self) -> Iterator[Cell]:
        for id in self.ids():
            yield self.grid.lookup(id)

    def __len__(self) -> int:
        return int(self.grid.capacity)

    def nest(self, transform: Transform) -> "GridIter":
        return GridIter(self.grid, compose(self.transform, transform))

    def iter(self) -> "GridIter":
        return self.nest(identity)

    def reverse(self) -> "GridIter":
        return self.nest(reverse)

    def nw(self, major: Major = Major.ROW) -> "GridIter":
        return self.nest(corner_scan(Ordinal.NW, major))

    def ne(self, major: Major = Major.ROW) -> "GridIter":
        return self.nest(corner_scan(Ordinal.NE, major))

    def se(self, major: Major = Major.ROW) -> "GridIter":
        return self.nest(corner_scan(Ordinal.SE, major))

    def sw(self, major: Major = Major.ROW) -> "GridIter":
        return self.nest(corner_scan(Ordinal.SW, major))

    def __repr__(self) -> str:
        return f"GridIter({self.transform.__name__})"


class RandomIter:
    """
    Visits every cell once in a shuffled order drawn up front.

    Running off the end resets the position to the start of the same shuffle;
    a new order needs a new RandomIter.
    """

    def __init__(self, grid: Grid, rng: np.random.Generator):
        self.grid = grid
        self.rng = rng
        self.shuffle: List[Index] = [Index(i) for i in rng.permutation(int(grid.capacity))]
        self.count = Visit(0)

    def __iter__(self) -> "RandomIter":
        return self

    def __next__(self) -> Cell:
        if self.count == self.grid.capacity:
            self.count = Visit(0)
            raise StopIteration
        id = self.shuffle[self.count]
        self.count = self.count.plus(1)
        return self.grid.lookup(id)

    def random_id(self) -> Index:
        return Index(random_index(self.rng, self.grid.capacity))

    def random_cell(self) -> Cell:
        return self.grid.lookup(self.random_id())

    def id_from_list(self, ids: Sequence[int]) -> Index:
        return Index(random_choice(self.rng, ids))

    def cell_from_list(self, ids: Sequence[int]) -> Cell:
        return self.grid.lookup(self.id_from_list(ids))

    def random_neighbor_id(self, cell: Cell) -> Index:
        return self.id_from_list(cell.neighbor_ids)
