# main.py
import argparse
import os
import sys
import time
import traceback
from typing import List, Optional

# Import project modules
import constants as const
from distances import is_perfect_maze
from geometry import path_openings
from maze_gen import ALGORITHMS, generate_maze


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number < const.MIN_GRID_SIZE:
        raise argparse.ArgumentTypeError(f"size must be at least {const.MIN_GRID_SIZE}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a perfect square maze and render it to images or a printable STL."
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        choices=sorted(ALGORITHMS),
        default=const.DEFAULT_ALGORITHM,
        help=f"Generation algorithm (default: {const.DEFAULT_ALGORITHM})",
    )
    parser.add_argument(
        "--size",
        "-s",
        type=_positive_int,
        default=const.DEFAULT_GRID_SIZE,
        help=f"Cells per side (default: {const.DEFAULT_GRID_SIZE})",
    )
    parser.add_argument(
        "--seed", type=int, default=const.DEFAULT_SEED, help="Random seed for reproducible mazes"
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        default=const.DEFAULT_OUTPUT_DIR,
        help=f"Directory for generated files (default: {const.DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--no-images", action="store_true", help="Skip PNG renders")
    parser.add_argument("--stl", action="store_true", help="Export a printable STL of the maze")
    return parser


def run(args: argparse.Namespace) -> int:
    start_time = time.time()
    os.makedirs(args.output_dir, exist_ok=True)

    print("\n--- Configuration ---")
    print(f"  Algorithm: {args.algorithm}, Size: {args.size}x{args.size}, Seed: {args.seed}")

    try:
        grid = generate_maze(args.algorithm, args.size, args.seed)
        perfect = is_perfect_maze(grid)
        print(f"  Links: {grid.link_count()}/{grid.capacity - 1}, Perfect maze: {perfect}")
        if not perfect:
            raise RuntimeError(f"{args.algorithm} did not produce a perfect maze.")

        longest = grid.longest_path()
        print(f"  Longest path: {len(longest) - 1} steps, {longest.first()} to {longest.last()}")
        openings = path_openings(longest)
    except Exception as e:
        print(f"ERROR during maze generation: {e}")
        traceback.print_exc()
        return 1

    if not args.no_images:
        print("\n--- Generating Visualizations ---")
        try:
            # Imported here so --no-images runs never load matplotlib
            from visualization import (
                visualize_distance_map,
                visualize_maze_links,
                visualize_maze_walls,
                visualize_path,
            )

            out = args.output_dir
            visualize_maze_walls(grid, filename=os.path.join(out, "maze_walls.png"))
            visualize_maze_links(grid, filename=os.path.join(out, "maze_links.png"))
            visualize_distance_map(
                grid.distances(longest.first()),
                filename=os.path.join(out, "maze_distances.png"),
            )
            visualize_path(
                longest, filename=os.path.join(out, "maze_solution.png"), openings=openings
            )
        except Exception as e:
            print(f"ERROR during visualization: {e}")
            traceback.print_exc()
            return 1

    if args.stl:
        print("\n--- Generating Printable STL ---")
        try:
            from mesh_builder import create_maze_mesh, export_stl

            mesh = create_maze_mesh(grid, openings=openings)
            export_stl(mesh, os.path.join(args.output_dir, "maze.stl"))
        except Exception as e:
            print(f"ERROR during STL generation: {e}")
            traceback.print_exc()
            return 1

    print(f"\n--- Total Execution Time: {time.time() - start_time:.2f} seconds ---")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
