import pytest

from geometry import (
    cell_bounds,
    cell_center,
    direction_vector,
    extract_wall_bases_2d,
    extract_wall_centerlines,
    path_openings,
)
from grid_core import SquareGrid
from helpers import CorridorGrid, open_all
from utils import Cardinal


class TestLayout:
    def test_north_is_up(self):
        grid = SquareGrid(2)
        assert cell_bounds(grid, 0) == (0.0, 1.0, 1.0, 2.0)
        assert cell_center(grid, 0) == (0.5, 1.5)
        assert cell_center(grid, 3) == (1.5, 0.5)

    def test_cell_size_scales(self):
        grid = SquareGrid(2)
        assert cell_center(grid, 1, cell_size=2.0) == (3.0, 3.0)

    def test_direction_vectors(self):
        assert direction_vector(Cardinal.N) == (0.0, 1.0)
        assert direction_vector(Cardinal.W) == (-1.0, 0.0)


class TestWallCenterlines:
    def test_unlinked_grid(self):
        # 8 outer sides plus 4 inner walls
        assert len(extract_wall_centerlines(SquareGrid(2))) == 12

    def test_open_grid_keeps_outline(self):
        assert len(extract_wall_centerlines(open_all(SquareGrid(2)))) == 8

    def test_openings_remove_outer_walls(self, chain2):
        openings = path_openings(chain2.longest_path())
        assert openings == {(2, Cardinal.S), (0, Cardinal.N)}
        # 8 outer sides minus 2 openings, plus the wall between 0 and 2
        assert len(extract_wall_centerlines(chain2, openings=openings)) == 7

    def test_needs_layout_grid(self):
        with pytest.raises(TypeError):
            extract_wall_centerlines(CorridorGrid(3))


class TestWallBases:
    def test_one_quad_per_wall(self, chain2):
        bases = extract_wall_bases_2d(chain2, wall_thickness=0.2)
        assert len(bases) == len(extract_wall_centerlines(chain2))
        assert all(len(q) == 4 for q in bases)

    def test_quads_extend_past_ends(self):
        bases = extract_wall_bases_2d(SquareGrid(1), wall_thickness=0.2)
        xs = [x for quad in bases for x, _ in quad]
        assert min(xs) == pytest.approx(-0.1)
        assert max(xs) == pytest.approx(1.1)

    @pytest.mark.parametrize("thickness", [0, -0.5])
    def test_bad_thickness(self, chain2, thickness):
        with pytest.raises(ValueError):
            extract_wall_bases_2d(chain2, wall_thickness=thickness)
