# visualization.py
import matplotlib

matplotlib.use("Agg")  # File output only

import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
from matplotlib.collections import LineCollection
from matplotlib.patches import Rectangle
import numpy as np
from typing import Iterable, Optional, Tuple

# Import from other project modules
import constants as const
from distances import Distances, Path
from geometry import (
    Opening,
    cell_bounds,
    cell_center,
    direction_vector,
    extract_wall_centerlines,
)


# --- Visualization Helpers ---
def _setup_plot(grid) -> Tuple[plt.Figure, plt.Axes]:
    """Creates a square axis framing the whole grid."""
    fig, ax = plt.subplots(figsize=const.VIS_FIGURE_SIZE)
    side = int(grid.row_size)
    margin = 0.05 * side
    ax.set_xlim(-margin, side + margin)
    ax.set_ylim(-margin, side + margin)
    ax.set_aspect("equal")
    ax.set_axis_off()
    return fig, ax


def _save(fig: plt.Figure, filename: str) -> str:
    fig.savefig(filename, dpi=const.VIS_DPI, bbox_inches="tight")
    plt.close(fig)
    return filename


def _draw_walls(ax: plt.Axes, grid, openings: Optional[Iterable[Opening]] = None) -> int:
    """Draws every wall segment; returns how many were drawn."""
    segments = extract_wall_centerlines(grid, openings=openings)
    ax.add_collection(
        LineCollection(segments, colors=const.VIS_WALL_COLOR, linewidths=const.VIS_WALL_LW)
    )
    return len(segments)


def _draw_cell_outlines(ax: plt.Axes, grid):
    for cell in grid.iter():
        x0, y0, x1, y1 = cell_bounds(grid, cell.id)
        ax.add_patch(
            Rectangle(
                (x0, y0),
                x1 - x0,
                y1 - y0,
                fill=False,
                edgecolor=const.VIS_CELL_OUTLINE_COLOR,
                lw=const.VIS_CELL_OUTLINE_LW,
            )
        )


def _draw_links(ax: plt.Axes, grid) -> int:
    """Draws lines connecting linked cell centers."""
    drawn_pairs = set()
    for cell in grid.iter():
        for linked_id in cell.links:
            pair = frozenset([cell.id, linked_id])
            if pair in drawn_pairs:
                continue
            (x1, y1), (x2, y2) = cell_center(grid, cell.id), cell_center(grid, linked_id)
            ax.plot(
                [x1, x2],
                [y1, y2],
                const.VIS_LINK_LINE_STYLE,
                lw=const.VIS_LINK_LINE_LW,
                alpha=const.VIS_LINK_LINE_ALPHA,
            )
            drawn_pairs.add(pair)
    return len(drawn_pairs)


def _draw_entry_exit(ax: plt.Axes, grid, start: int, end: int):
    sx, sy = cell_center(grid, start)
    ex, ey = cell_center(grid, end)
    ax.plot(
        sx,
        sy,
        const.VIS_ENTRY_MARKER,
        markersize=const.VIS_SOLUTION_ENTRY_MARKER_SIZE,
        mfc=const.VIS_SOLUTION_ENTRY_MFC,
        mec=const.VIS_SOLUTION_ENTRY_MEC,
        label="Entry",
    )
    ax.plot(
        ex,
        ey,
        const.VIS_EXIT_MARKER,
        markersize=const.VIS_SOLUTION_EXIT_MARKER_SIZE,
        mfc=const.VIS_SOLUTION_EXIT_MFC,
        mec=const.VIS_SOLUTION_EXIT_MEC,
        label="Exit",
    )


def _labels_fit(grid) -> bool:
    return int(grid.row_size) <= const.VIS_LABEL_MAX_GRID_SIZE


# --- Main Visualization Functions ---
def visualize_maze_walls(grid, filename: str = "maze_walls.png") -> str:
    """Renders the maze walls."""
    print(f"--- Generating Maze Walls Visualization: {filename} ---")
    fig, ax = _setup_plot(grid)
    wall_count = _draw_walls(ax, grid)
    ax.set_title(f"Maze Walls ({wall_count} Segments)")
    _save(fig, filename)
    print(f"  Walls visualization saved to {filename}")
    return filename


def visualize_maze_links(grid, filename: str = "maze_links.png") -> str:
    """Visualizes the generated maze links (passages) between cells."""
    print(f"--- Generating Maze Links Visualization: {filename} ---")
    fig, ax = _setup_plot(grid)
    _draw_cell_outlines(ax, grid)
    link_count = _draw_links(ax, grid)
    ax.set_title(f"Maze Links ({link_count} Passages)")
    _save(fig, filename)
    print(f"  Links visualization saved to {filename}")
    return filename


def visualize_distance_map(
    distances: Distances,
    filename: str = "maze_distances.png",
    show_labels: bool = True,
) -> str:
    """Colours each cell by its distance from the root cell."""
    grid = distances.grid
    print(f"--- Generating Distance Map Visualization: {filename} ---")
    values = distances.as_array()
    reached = int(np.count_nonzero(values >= 0))
    _, max_distance = distances.max_dist()
    if reached < grid.capacity:
        print(f"  WARNING: Only {reached}/{grid.capacity} cells are reachable from {distances.root}!")

    fig, ax = _setup_plot(grid)
    cmap = matplotlib.colormaps[const.VIS_DIST_COLORMAP]
    norm = mcolors.Normalize(vmin=0, vmax=max(1, max_distance))
    label_cells = show_labels and _labels_fit(grid)

    for cell in grid.iter():
        distance = int(values[cell.id])
        color = const.VIS_CONN_UNREACHABLE_COLOR if distance < 0 else cmap(norm(distance))
        x0, y0, x1, y1 = cell_bounds(grid, cell.id)
        ax.add_patch(Rectangle((x0, y0), x1 - x0, y1 - y0, color=color, lw=0))
        if label_cells and distance >= 0:
            cx, cy = cell_center(grid, cell.id)
            ax.text(
                cx, cy, str(distance), ha="center", va="center", fontsize=const.VIS_LABEL_FONT_SIZE
            )
    _draw_walls(ax, grid)

    sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
    sm.set_array([])
    cbar = fig.colorbar(sm, ax=ax, shrink=0.7, aspect=20, pad=0.04)
    cbar.set_label(f"Distance from Cell {distances.root}")
    ax.set_title(f"Distance Map ({reached}/{grid.capacity} Reachable, Max {max_distance})")
    _save(fig, filename)
    print(f"  Distance map saved to {filename}")
    return filename


def visualize_path(
    path: Path,
    filename: str = "maze_solution.png",
    show_arrows: bool = True,
    openings: Optional[Iterable[Opening]] = None,
) -> str:
    """Draws a path through the maze with direction arrows and entry/exit markers."""
    grid = path.grid
    print(f"--- Generating Path Visualization: {filename} ---")
    if len(path) == 0:
        raise ValueError("Cannot visualize an empty path.")

    fig, ax = _setup_plot(grid)
    _draw_walls(ax, grid, openings)

    print(f"  Visualizing path ({len(path)} cells)...")
    centers = np.array([cell_center(grid, id) for id in path])
    ax.plot(
        centers[:, 0],
        centers[:, 1],
        const.VIS_SOLUTION_LINE_STYLE,
        lw=const.VIS_SOLUTION_LINE_LW,
        alpha=const.VIS_SOLUTION_LINE_ALPHA,
    )

    if show_arrows:
        arrows = []
        for id, (cx, cy) in zip(path, centers):
            direction = path.next_dir(id)
            if direction is None:
                continue
            dx, dy = direction_vector(direction)
            arrows.append((cx, cy, dx * const.VIS_ARROW_SCALE, dy * const.VIS_ARROW_SCALE))
        if arrows:
            a = np.array(arrows)
            ax.quiver(
                a[:, 0],
                a[:, 1],
                a[:, 2],
                a[:, 3],
                angles="xy",
                scale_units="xy",
                scale=1,
                color=const.VIS_ARROW_COLOR,
                width=0.004,
            )

    _draw_entry_exit(ax, grid, path.first(), path.last())
    ax.set_title(f"Maze Path ({len(path)} Cells, {path.first()} to {path.last()})")
    _save(fig, filename)
    print(f"  Path visualization saved to {filename}")
    return filename
