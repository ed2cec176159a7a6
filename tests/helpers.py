"""Grid builders and checks shared by the test modules."""

from grid_core import Cell, Grid


class CorridorGrid(Grid):
    """A single row of cells with no row/column geometry (only the minimal grid capability)."""

    def __init__(self, size: int):
        self._cells = []
        for id in range(size):
            neighbors = [n for n in (id - 1, id + 1) if 0 <= n < size]
            self._cells.append(Cell(id, neighbors))

    @classmethod
    def setup(cls, size: int) -> "CorridorGrid":
        return cls(size)

    @property
    def cells(self):
        return self._cells


def open_all(grid):
    """Links every pair of neighbours (a maze with no inner walls)."""
    for cell in grid.iter():
        for n in cell.neighbor_ids:
            grid.link(cell.id, n)
    return grid


def reachable_from(grid, start=0):
    """Ids reachable from `start` by following links (independent of the analysis layer)."""
    seen = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for n in grid.lookup(current).links:
            if n not in seen:
                seen.add(n)
                stack.append(n)
    return seen


def links_are_symmetric(grid):
    return all(
        grid.lookup(other).has_link(cell.id) for cell in grid.iter() for other in cell.links
    )
