# maze_gen.py
import numpy as np
from typing import Callable, Dict, List, Optional, Set, Type

# Import from other project modules
import constants as const
from grid_core import CardinalGrid, Grid, SquareGrid
from traversal import GridIter
from utils import Cardinal, Index, coin_flip, make_rng, random_choice


def _require_cardinal(grid: Grid, algorithm: str):
    if not isinstance(grid, CardinalGrid):
        raise TypeError(
            f"{algorithm} needs a grid with row/column geometry, got {type(grid).__name__}"
        )


def aldous_broder(grid: Grid, rng: np.random.Generator) -> Grid:
    """
    Carves a maze with an unbiased random walk (Aldous-Broder).
    Steps to a random neighbour each turn and links it if it has never been linked.
    """
    print("--- Starting Maze Generation (Aldous-Broder) ---")
    cell = grid.random_id(rng)
    unvisited = grid.capacity.minus(1)
    steps = 0
    while unvisited > 0:
        neighbor = grid.random_neighbor(cell, rng)
        if neighbor.not_linked():
            grid.link(cell, neighbor.id)
            unvisited -= 1
        cell = neighbor.id
        steps += 1
    print(f"--- Maze Generation Complete: {grid.link_count()} links in {steps} steps. ---")
    return grid


def _swap_remove(items: List[Index], slot: Dict[Index, int], id: Index):
    """Removes `id` in O(1) by moving the last item into its slot."""
    pos = slot.pop(id)
    last = items.pop()
    if last != id:
        items[pos] = last
        slot[last] = pos


def wilsons(grid: Grid, rng: np.random.Generator) -> Grid:
    """
    Carves a maze with loop-erased random walks (Wilson's algorithm).
    Each walk starts on an unvisited cell and runs until it hits the visited tree;
    any loop in the walk is erased as soon as it closes.
    """
    print("--- Starting Maze Generation (Wilson's) ---")
    unvisited: List[Index] = [Index(i) for i in range(grid.capacity)]
    slot: Dict[Index, int] = {id: pos for pos, id in enumerate(unvisited)}
    _swap_remove(unvisited, slot, random_choice(rng, unvisited))
    walks = 0
    while unvisited:
        cell = random_choice(rng, unvisited)
        path: List[Index] = [cell]
        while cell in slot:
            cell = grid.random_neighbor_id(cell, rng)
            if cell in path:
                path = path[: path.index(cell) + 1]
            else:
                path.append(cell)
        for a, b in zip(path, path[1:]):
            grid.link(a, b)
            _swap_remove(unvisited, slot, a)
        walks += 1
    print(f"--- Maze Generation Complete: {grid.link_count()} links from {walks} walks. ---")
    return grid


def binary_tree(
    grid: Grid, rng: np.random.Generator, order: Optional[GridIter] = None
) -> Grid:
    """
    Links every cell either east or south (Binary Tree).
    Cells on the south edge always go east and cells on the east edge always go
    south, which leaves one long corridor along each of those edges.
    """
    _require_cardinal(grid, "Binary Tree")
    print("--- Starting Maze Generation (Binary Tree) ---")
    cells = order if order is not None else grid.iter()
    for cell in cells:
        id = cell.id
        flip = coin_flip(rng)
        east = grid.has_boundary_east(id)
        south = grid.has_boundary_south(id)
        if not east and not south:
            grid.link_neighbor(id, Cardinal.E if flip else Cardinal.S)
        elif not east:
            grid.link_neighbor(id, Cardinal.E)
        elif not south:
            grid.link_neighbor(id, Cardinal.S)
    print(f"--- Maze Generation Complete: {grid.link_count()} links. ---")
    return grid


def sidewinder(grid: Grid, rng: np.random.Generator) -> Grid:
    """
    Carves rows of east-running corridors joined by one southward link per run
    (Sidewinder).
    """
    _require_cardinal(grid, "Sidewinder")
    print("--- Starting Maze Generation (Sidewinder) ---")
    run: List[Index] = []
    for cell in grid.iter():
        id = cell.id
        run.append(id)
        flip = coin_flip(rng)
        if grid.has_boundary_east(id) or (not grid.has_boundary_south(id) and not flip):
            # Close the run: one random member opens south
            run_id = random_choice(rng, run)
            south = grid.neighbor(run_id, Cardinal.S)
            if south is not None:
                grid.link(run_id, south)
                run = []
        else:
            grid.link_neighbor(id, Cardinal.E)
    print(f"--- Maze Generation Complete: {grid.link_count()} links. ---")
    return grid


def recursive_backtracker(grid: Grid, rng: np.random.Generator) -> Grid:
    """
    Generates maze passages using the Recursive Backtracking algorithm.
    Walks to random unvisited neighbours, backing up along the stack at dead ends.
    """
    print("--- Starting Maze Generation (Recursive Backtracking) ---")
    start = grid.random_id(rng)
    visited: Set[Index] = {start}
    stack: List[Index] = [start]

    while stack:
        current = stack[-1]
        unvisited_neighbours = [
            n for n in grid.lookup(current).neighbor_ids if n not in visited
        ]
        if unvisited_neighbours:
            next_id = random_choice(rng, unvisited_neighbours)
            grid.link(current, next_id)
            visited.add(next_id)
            stack.append(next_id)
        else:
            stack.pop()

    print(f"--- Maze Generation Complete: Linked {len(visited)}/{grid.capacity} cells. ---")
    return grid


Algorithm = Callable[[Grid, np.random.Generator], Grid]

ALGORITHMS: Dict[str, Algorithm] = {
    "aldous_broder": aldous_broder,
    "wilsons": wilsons,
    "binary_tree": binary_tree,
    "sidewinder": sidewinder,
    "recursive_backtracker": recursive_backtracker,
}


def generate_maze(
    algorithm: str = const.DEFAULT_ALGORITHM,
    size: int = const.DEFAULT_GRID_SIZE,
    seed: Optional[int] = const.DEFAULT_SEED,
    grid_cls: Type[Grid] = SquareGrid,
) -> Grid:
    """Builds a fresh grid of `size` and carves it with the named algorithm."""
    try:
        carve = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm '{algorithm}'. Choose from: {', '.join(ALGORITHMS)}"
        ) from None
    grid = grid_cls.setup(size)
    return carve(grid, make_rng(seed))


def aldous_broder_maze(size: int, seed: Optional[int] = None) -> Grid:
    return generate_maze("aldous_broder", size, seed)


def wilsons_maze(size: int, seed: Optional[int] = None) -> Grid:
    return generate_maze("wilsons", size, seed)


def binary_tree_maze(size: int, seed: Optional[int] = None) -> Grid:
    return generate_maze("binary_tree", size, seed)


def sidewinder_maze(size: int, seed: Optional[int] = None) -> Grid:
    return generate_maze("sidewinder", size, seed)


def recursive_backtracker_maze(size: int, seed: Optional[int] = None) -> Grid:
    return generate_maze("recursive_backtracker", size, seed)
