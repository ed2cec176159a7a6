# mesh_builder.py

import numpy as np
import trimesh
from typing import Iterable, List, Optional

import trimesh.creation
import trimesh.transformations
import trimesh.util

import constants as const

# Import from other project modules
from geometry import Opening, Quad, extract_wall_bases_2d

# Sides, top cap, bottom cap (reversed) of a prism over a counter-clockwise quad
_PRISM_FACES = np.array(
    [
        [0, 1, 5],
        [0, 5, 4],
        [1, 2, 6],
        [1, 6, 5],
        [2, 3, 7],
        [2, 7, 6],
        [3, 0, 4],
        [3, 4, 7],
        [4, 5, 6],
        [4, 6, 7],
        [3, 2, 1],
        [3, 1, 0],
    ],
    dtype=np.int64,
)


def _create_extruded_prism(base_verts_2d: Quad, height: float) -> trimesh.Trimesh:
    """Extrudes a counter-clockwise quad straight up from z=0."""
    if len(base_verts_2d) != 4:
        raise ValueError(f"Expected a quad, got {len(base_verts_2d)} vertices.")
    base_verts = np.array([[x, y, 0.0] for x, y in base_verts_2d])
    top_verts = base_verts + np.array([0.0, 0.0, height])
    verts = np.vstack((base_verts, top_verts))  # 0-3 base, 4-7 top
    return trimesh.Trimesh(vertices=verts, faces=_PRISM_FACES, process=False)


def create_base_slab(
    grid,
    base_height: float,
    wall_thickness: float,
    cell_size: float = const.DEFAULT_CELL_SIZE,
) -> trimesh.Trimesh:
    """Solid slab under the whole maze, flush with the outer wall faces."""
    side = int(grid.row_size) * cell_size + wall_thickness
    center = np.array([side / 2.0 - wall_thickness / 2.0] * 2 + [-base_height / 2.0])
    return trimesh.creation.box(
        extents=[side, side, base_height],
        transform=trimesh.transformations.translation_matrix(center),
    )


def create_maze_mesh(
    grid,
    wall_thickness: float = const.DEFAULT_WALL_THICKNESS_3D,
    wall_height: float = const.DEFAULT_WALL_HEIGHT_3D,
    base_height: float = const.DEFAULT_BASE_HEIGHT_3D,
    cell_size: float = const.DEFAULT_CELL_SIZE,
    openings: Optional[Iterable[Opening]] = None,
) -> trimesh.Trimesh:
    """
    Builds a printable maze: extruded walls standing on a solid base slab.
    `openings` lists boundary walls to leave out (entrance and exit).
    """
    print("\n--- Generating Maze Mesh ---")
    print(
        f"    Wall H={wall_height:.2f}, Base H={base_height:.2f}, Total H={wall_height + base_height:.2f}"
    )
    if wall_height <= 0 or base_height <= 0:
        raise ValueError("Wall and base heights must be positive.")

    wall_bases = extract_wall_bases_2d(grid, wall_thickness, cell_size, openings)
    meshes: List[trimesh.Trimesh] = [
        _create_extruded_prism(base, wall_height) for base in wall_bases
    ]
    meshes.append(create_base_slab(grid, base_height, wall_thickness, cell_size))

    print(f"  Combining {len(meshes)} meshes ({len(wall_bases)} walls + base)...")
    mesh = trimesh.util.concatenate(meshes)
    mesh.merge_vertices()
    print(f"--- Maze Mesh Complete: {len(mesh.vertices)}V, {len(mesh.faces)}F ---")
    return mesh


def export_stl(mesh: trimesh.Trimesh, filename: str) -> str:
    """Exports the mesh as an STL file."""
    print(f"  Exporting mesh to {filename}...")
    mesh.export(filename)
    return filename
