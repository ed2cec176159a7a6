"""Tests for cells, the grid contract, and square grid geometry."""

import pytest

from grid_core import (
    CellLinkError,
    NotNeighborsError,
    OutOfBoundsCoordError,
    OutOfBoundsError,
    SquareGrid,
)
from helpers import links_are_symmetric
from utils import Cardinal, Coord, Ordinal, make_rng


class TestSetup:
    def test_capacity(self, grid4):
        assert grid4.capacity == 16
        assert len(grid4.cells) == 16
        assert len(grid4) == 16
        assert [c.id for c in grid4] == list(range(16))

    def test_neighbor_lists(self, grid4):
        # Neighbours are listed N, E, S, W with missing sides skipped
        assert grid4.lookup(0).neighbor_ids == (1, 4)
        assert grid4.lookup(5).neighbor_ids == (1, 6, 9, 4)
        assert grid4.lookup(15).neighbor_ids == (11, 14)

    def test_every_neighbor_is_valid(self, grid4):
        for cell in grid4:
            for n in cell.neighbor_ids:
                assert 0 <= n < grid4.capacity
                assert grid4.lookup(n).has_neighbor(cell.id)

    def test_cells_start_unlinked(self, grid4):
        assert all(cell.not_linked() for cell in grid4)
        assert grid4.link_count() == 0

    @pytest.mark.parametrize("size", [0, -3, 2.5, "4", True])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            SquareGrid(size)

    def test_single_cell_grid(self):
        grid = SquareGrid(1)
        assert grid.capacity == 1
        assert grid.lookup(0).neighbor_ids == ()


class TestAccessors:
    def test_first_last_nth(self, grid4):
        assert grid4.first().id == 0
        assert grid4.last().id == 15
        assert grid4.nth(5).id == 5
        assert grid4.get_unchecked(7).id == 7

    def test_checked_lookup(self, grid4):
        assert grid4.try_lookup(3).id == 3
        with pytest.raises(OutOfBoundsError) as exc:
            grid4.try_lookup(16)
        assert exc.value.id == 16
        assert isinstance(exc.value, IndexError)

    def test_get(self, grid4):
        assert grid4.get(15).id == 15
        assert grid4.get(16) is None
        assert grid4.get(-1) is None


class TestLinks:
    def test_link_is_symmetric(self, grid4):
        grid4.link(5, 6)
        assert grid4.lookup(5).has_link(6)
        assert grid4.lookup(6).has_link(5)
        assert grid4.link_count() == 1

    def test_unlink_is_idempotent(self, grid4):
        grid4.link(5, 6)
        grid4.unlink(5, 6)
        grid4.unlink(5, 6)
        assert not grid4.lookup(5).has_link(6)
        assert not grid4.lookup(6).has_link(5)
        assert grid4.link_count() == 0

    def test_link_invalid_id(self, grid4):
        with pytest.raises(CellLinkError) as exc:
            grid4.link(3, 99)
        assert (exc.value.a, exc.value.b) == (3, 99)
        assert "`b`" in exc.value.reason
        with pytest.raises(CellLinkError):
            grid4.link(99, 3)

    def test_unlink_invalid_id(self, grid4):
        with pytest.raises(CellLinkError) as exc:
            grid4.unlink(-1, 0)
        assert "`a`" in exc.value.reason

    def test_failed_link_changes_nothing(self, grid4):
        with pytest.raises(CellLinkError):
            grid4.link(0, 16)
        assert grid4.lookup(0).not_linked()

    def test_links_view_is_read_only(self, grid4):
        grid4.link(0, 1)
        links = grid4.lookup(0).links
        assert links == {1}
        with pytest.raises(AttributeError):
            links.add(4)

    def test_symmetry_survives_random_edits(self):
        grid = SquareGrid(5)
        rng = make_rng(11)
        for _ in range(300):
            a = grid.random_id(rng)
            b = grid.random_neighbor_id(a, rng)
            if rng.integers(2):
                grid.link(a, b)
            else:
                grid.unlink(b, a)
            assert links_are_symmetric(grid)

    def test_clone_is_independent(self, grid4):
        grid4.link(0, 1)
        copy = grid4.clone()
        copy.link(1, 2)
        copy.unlink(0, 1)
        assert grid4.lookup(0).has_link(1)
        assert not grid4.lookup(1).has_link(2)
        assert copy.lookup(1).has_link(2)


class TestCardinalGeometry:
    def test_boundaries(self, grid4):
        assert grid4.has_boundary_north(3)
        assert not grid4.has_boundary_north(4)
        assert grid4.has_boundary_east(7)
        assert grid4.has_boundary_south(12)
        assert grid4.has_boundary_west(8)
        assert grid4.has_boundary(15, Cardinal.S)
        assert not grid4.has_boundary(5, Cardinal.W)

    def test_find_boundary(self, grid4):
        assert grid4.find_boundary(5) is None
        assert grid4.find_boundary(3) is Cardinal.N
        assert grid4.find_boundary(7) is Cardinal.E
        assert grid4.find_boundary(12) is Cardinal.S

    def test_calc_neighbors(self, grid4):
        assert grid4.calc_north(2) is None
        assert grid4.calc_north(6) == 2
        assert grid4.calc_east(3) is None
        assert grid4.calc_east(6) == 7
        assert grid4.calc_south(13) is None
        assert grid4.calc_south(6) == 10
        assert grid4.calc_west(4) is None
        assert grid4.calc_west(6) == 5

    def test_corner_ids(self, grid4):
        assert grid4.corner_id(Ordinal.NW) == 0
        assert grid4.corner_id(Ordinal.NE) == 3
        assert grid4.corner_id(Ordinal.SE) == 15
        assert grid4.corner_id(Ordinal.SW) == 12

    def test_dir_from(self, grid4):
        assert grid4.dir_from(5, 6) is Cardinal.E
        assert grid4.dir_from(5, 1) is Cardinal.N
        assert grid4.dir_from(5, 15) is None
        # Wrapping across a row edge is not adjacency
        assert grid4.dir_from(3, 4) is None

    def test_link_neighbor(self, grid4):
        grid4.link_neighbor(5, Cardinal.S)
        assert grid4.has_dir_link(5, Cardinal.S)
        assert grid4.has_dir_link(9, Cardinal.N)
        grid4.unlink_neighbor(9, Cardinal.N)
        assert not grid4.has_dir_link(5, Cardinal.S)

    def test_link_neighbor_off_edge(self, grid4):
        with pytest.raises(NotNeighborsError) as exc:
            grid4.link_neighbor(3, Cardinal.E)
        assert exc.value.id == 3
        assert exc.value.direction is Cardinal.E
        with pytest.raises(NotNeighborsError):
            grid4.unlink_neighbor(0, Cardinal.N)

    def test_has_dir_link_out_of_range(self, grid4):
        assert not grid4.has_dir_link(99, Cardinal.N)


class TestCoordLookup:
    def test_round_trip_examples(self, grid4):
        assert grid4.get_coords(6) == Coord(2, 1)
        assert grid4.get_id(Coord(2, 1)) == 6
        assert grid4.try_get_id(Coord(3, 3)) == 15

    def test_out_of_range_coord(self, grid4):
        with pytest.raises(OutOfBoundsCoordError) as exc:
            grid4.try_get_id(Coord(4, 0))
        assert exc.value.coord == Coord(4, 0)

    def test_out_of_range_id(self, grid4):
        with pytest.raises(OutOfBoundsError):
            grid4.try_get_coords(16)
