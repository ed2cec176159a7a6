# geometry.py
import numpy as np
from typing import Iterable, List, Optional, Set, Tuple

# Import from other project modules
import constants as const
from distances import Path
from grid_core import CardinalGrid, CoordLookup
from utils import Cardinal

Point = Tuple[float, float]
Segment = Tuple[Point, Point]
Quad = Tuple[Point, Point, Point, Point]
Opening = Tuple[int, Cardinal]


def _check_layout_grid(grid):
    if not (isinstance(grid, CardinalGrid) and isinstance(grid, CoordLookup)):
        raise TypeError(
            f"Layout needs a grid with cardinal and coordinate lookup, got {type(grid).__name__}"
        )


def cell_bounds(grid, id: int, cell_size: float = const.DEFAULT_CELL_SIZE):
    """Returns (x0, y0, x1, y1) of a cell, with north at the top (larger y)."""
    coord = grid.get_coords(id)
    rows = int(grid.row_size)
    x0 = coord.x * cell_size
    y0 = (rows - 1 - coord.y) * cell_size
    return x0, y0, x0 + cell_size, y0 + cell_size


def cell_center(grid, id: int, cell_size: float = const.DEFAULT_CELL_SIZE) -> Point:
    x0, y0, x1, y1 = cell_bounds(grid, id, cell_size)
    return (x0 + x1) / 2.0, (y0 + y1) / 2.0


def direction_vector(direction: Cardinal) -> Point:
    """Unit step for a direction in layout space."""
    return {
        Cardinal.N: (0.0, 1.0),
        Cardinal.E: (1.0, 0.0),
        Cardinal.S: (0.0, -1.0),
        Cardinal.W: (-1.0, 0.0),
    }[direction]


def _side_segment(bounds, direction: Cardinal) -> Segment:
    x0, y0, x1, y1 = bounds
    if direction is Cardinal.N:
        return (x0, y1), (x1, y1)
    if direction is Cardinal.E:
        return (x1, y0), (x1, y1)
    if direction is Cardinal.S:
        return (x0, y0), (x1, y0)
    return (x0, y0), (x0, y1)


def path_openings(path: Path) -> Set[Opening]:
    """Boundary walls to leave open at the two ends of a path."""
    grid = path.grid
    openings: Set[Opening] = set()
    if len(path) == 0:
        return openings
    start, end = path.first(), path.last()
    for id, direction in ((start, path.prev_dir(start)), (end, path.next_dir(end))):
        if direction is not None and grid.has_boundary(id, direction):
            openings.add((int(id), direction))
    return openings


def extract_wall_centerlines(
    grid,
    cell_size: float = const.DEFAULT_CELL_SIZE,
    openings: Optional[Iterable[Opening]] = None,
) -> List[Segment]:
    """
    Extracts 2D wall CENTERLINE segments from the grid's links.
    Every outer boundary side is a wall unless listed in `openings`; every pair of
    unlinked neighbours shares one wall, emitted once from its west/north cell.
    """
    _check_layout_grid(grid)
    open_sides = {(int(i), d) for i, d in (openings or ())}
    wall_segments: List[Segment] = []

    for cell in grid.iter():
        id = cell.id
        bounds = cell_bounds(grid, id, cell_size)
        for d in Cardinal.iter_from():
            if grid.has_boundary(id, d):
                if (int(id), d) not in open_sides:
                    wall_segments.append(_side_segment(bounds, d))
            elif d in (Cardinal.E, Cardinal.S) and not grid.has_dir_link(id, d):
                wall_segments.append(_side_segment(bounds, d))

    return wall_segments


def extract_wall_bases_2d(
    grid,
    wall_thickness: float = const.DEFAULT_WALL_THICKNESS_3D,
    cell_size: float = const.DEFAULT_CELL_SIZE,
    openings: Optional[Iterable[Opening]] = None,
) -> List[Quad]:
    """
    Extracts 2D wall base rectangles offset by thickness around each centerline.
    Each wall is extended by half the thickness at both ends so corners close up.
    """
    print(f"--- Extracting Wall Base Vertices (Thickness: {wall_thickness:.3f}) ---")
    if wall_thickness <= 0:
        raise ValueError("Wall thickness must be positive.")
    half_thick = wall_thickness / 2.0
    wall_bases: List[Quad] = []

    for p1, p2 in extract_wall_centerlines(grid, cell_size, openings):
        a = np.array(p1, dtype=float)
        b = np.array(p2, dtype=float)
        along = b - a
        length = np.linalg.norm(along)
        if length < const.GEOMETRY_TOLERANCE:
            continue
        along /= length
        normal = np.array([-along[1], along[0]])
        a = a - along * half_thick
        b = b + along * half_thick
        corners = (
            a - normal * half_thick,
            b - normal * half_thick,
            b + normal * half_thick,
            a + normal * half_thick,
        )
        wall_bases.append(tuple((float(c[0]), float(c[1])) for c in corners))

    print(f"--- Wall Base Extraction Complete: {len(wall_bases)} wall bases. ---")
    return wall_bases
