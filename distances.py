# distances.py
import numpy as np
from typing import Dict, Iterator, List, Optional, Tuple

# Import from other project modules
from grid_core import CardinalGrid, Grid
from utils import Cardinal, Index


class Distances:
    """
    Hop counts from a root cell through carved passages.

    Computed against the link state at the time of the flood fill; relinking
    the grid afterwards leaves this map stale.
    """

    def __init__(self, grid: Grid, root: int):
        self._grid = grid
        self._root = Index(root)
        self._map: Dict[Index, int] = {self._root: 0}

    @property
    def root(self) -> Index:
        return self._root

    @property
    def grid(self) -> Grid:
        return self._grid

    def has_entry(self, id: int) -> bool:
        return id in self._map

    def set(self, id: int, distance: int):
        """Records a distance; the first value recorded for a cell wins."""
        self._map.setdefault(Index(id), distance)

    def get(self, id: int) -> Optional[int]:
        return self._map.get(id)

    def items(self):
        return self._map.items()

    def max_dist(self) -> Tuple[Index, int]:
        """Farthest cell from the root and its distance (first found on ties)."""
        return max(self._map.items(), key=lambda item: item[1])

    def shortest_path(self, end: int) -> "Path":
        """Walks downhill from `end` to the root along linked neighbours."""
        self._grid.try_lookup(end)
        if end not in self._map:
            raise ValueError(f"Cell {end} is not reachable from root {self._root}.")
        path: List[Index] = [Index(end)]
        current = Index(end)
        while current != self._root:
            current_dist = self._map[current]
            for link in self._grid.lookup(current).links:
                link_dist = self._map.get(link)
                if link_dist is not None and link_dist < current_dist:
                    current = link
                    break
            else:
                raise ValueError(f"No downhill step from cell {current} towards root.")
            path.append(current)
        path.reverse()
        return Path(path, self._grid)

    def as_array(self) -> np.ndarray:
        """Distance per cell in storage order, -1 where the root cannot reach."""
        arr = np.full(int(self._grid.capacity), -1, dtype=np.int64)
        for id, distance in self._map.items():
            arr[id] = distance
        return arr

    def __getitem__(self, id: int) -> int:
        return self._map[id]

    def __contains__(self, id: int) -> bool:
        return id in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Index]:
        return iter(self._map)

    def __repr__(self) -> str:
        return f"Distances(root={self._root}, reached={len(self._map)})"


class Path:
    """Ordered cell ids where each step is linked to the next."""

    def __init__(self, ids: List[int], grid: Grid):
        self._ids: List[Index] = [Index(i) for i in ids]
        self._grid = grid

    @property
    def ids(self) -> List[Index]:
        return list(self._ids)

    @property
    def grid(self) -> Grid:
        return self._grid

    def first(self) -> Index:
        return self._ids[0]

    def last(self) -> Index:
        return self._ids[-1]

    def get(self, step: int) -> Optional[Index]:
        if 0 <= step < len(self._ids):
            return self._ids[step]
        return None

    def position(self, id: int) -> Optional[int]:
        try:
            return self._ids.index(id)
        except ValueError:
            return None

    def prev(self, id: int) -> Optional[Index]:
        pos = self.position(id)
        if pos is None or pos == 0:
            return None
        return self._ids[pos - 1]

    def next(self, id: int) -> Optional[Index]:
        pos = self.position(id)
        if pos is None or pos == len(self._ids) - 1:
            return None
        return self._ids[pos + 1]

    def prev_dir(self, id: int) -> Optional[Cardinal]:
        """Direction to the previous step, or to the cell's first boundary when there is none."""
        return self._dir_towards(id, self.prev(id))

    def next_dir(self, id: int) -> Optional[Cardinal]:
        """Direction to the next step, or to the cell's first boundary when there is none."""
        return self._dir_towards(id, self.next(id))

    def _dir_towards(self, id: int, other: Optional[Index]) -> Optional[Cardinal]:
        if not isinstance(self._grid, CardinalGrid):
            raise TypeError(
                f"Directional queries need a grid with row/column geometry, "
                f"got {type(self._grid).__name__}"
            )
        if other is not None:
            d = self._grid.dir_from(id, other)
            if d is not None:
                return d
        return self._grid.find_boundary(id)

    def reverse(self):
        self._ids.reverse()

    def as_map(self) -> Dict[Index, int]:
        return {id: step for step, id in enumerate(self._ids)}

    def is_valid(self) -> bool:
        """True when every consecutive pair is linked in both directions."""
        if not self._ids:
            return False
        for a, b in zip(self._ids, self._ids[1:]):
            cell_a, cell_b = self._grid.get(a), self._grid.get(b)
            if cell_a is None or cell_b is None:
                return False
            if not (cell_a.has_link(b) and cell_b.has_link(a)):
                return False
        return True

    def string(self) -> str:
        return " -> ".join(str(id) for id in self._ids)

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        return f"Path({self.string()})"

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[Index]:
        return iter(self._ids)

    def __getitem__(self, step: int) -> Index:
        return self._ids[step]


def flood_fill(grid: Grid, root: int) -> Distances:
    """Breadth-first distances from `root` over linked neighbours."""
    grid.try_lookup(root)
    dist = Distances(grid, root)
    frontier: List[Index] = [dist.root]
    while frontier:
        new_frontier: List[Index] = []
        for id in frontier:
            d = dist[id]
            for link in grid.lookup(id).links:
                if not dist.has_entry(link):
                    dist.set(link, d + 1)
                    new_frontier.append(link)
        frontier = new_frontier
    return dist


def shortest_path(grid: Grid, start: int, end: int) -> Path:
    return flood_fill(grid, start).shortest_path(end)


def longest_path(grid: Grid, start: int = 0) -> Path:
    """
    Two-pass diameter search: the farthest cell from `start` is one end of a
    longest path, and the farthest cell from that end is the other.
    Exact when the link graph is a tree.
    """
    far_end, _ = flood_fill(grid, start).max_dist()
    dist = flood_fill(grid, far_end)
    other_end, _ = dist.max_dist()
    return dist.shortest_path(other_end)


def is_perfect_maze(grid: Grid) -> bool:
    """Connected from cell 0 with exactly capacity - 1 links (a spanning tree)."""
    reached = len(flood_fill(grid, 0))
    return reached == grid.capacity and grid.link_count() == grid.capacity - 1
