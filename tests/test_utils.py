"""Tests for scalar index types, directions and random helpers."""

import pytest

from utils import (
    Capacity,
    Cardinal,
    Coord,
    Index,
    Major,
    Ordinal,
    RowSize,
    Visit,
    coin_flip,
    make_rng,
    random_choice,
    random_index,
)


class TestScalarTypes:
    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            Index(-1)
        with pytest.raises(ValueError):
            Capacity(-5)

    def test_checked_minus_underflow(self):
        with pytest.raises(ValueError):
            Index(3).minus(4)
        assert Index(3).minus(3) == 0

    def test_arithmetic_keeps_type(self):
        result = Index(3).plus(2)
        assert result == 5
        assert isinstance(result, Index)
        assert isinstance(Visit(0).plus(1), Visit)

    def test_row_size_squared_is_capacity(self):
        cap = RowSize(4).squared()
        assert cap == 16
        assert isinstance(cap, Capacity)

    def test_behaves_like_int(self):
        assert {Index(2): "a"}[2] == "a"
        assert [10, 20, 30][Index(1)] == 20
        assert repr(Index(7)) == "Index(7)"
        assert str(Index(7)) == "7"

    def test_coord_id(self):
        assert Coord(2, 1).id(4) == 6
        assert str(Coord(2, 1)) == "(x=2,y=1)"


class TestCardinal:
    def test_rotation(self):
        assert Cardinal.N.clockwise() is Cardinal.E
        assert Cardinal.W.clockwise() is Cardinal.N
        assert Cardinal.N.counter_clockwise() is Cardinal.W

    def test_opposite(self):
        assert Cardinal.N.opposite() is Cardinal.S
        assert -Cardinal.E is Cardinal.W

    def test_iter_from(self):
        assert Cardinal.iter_from() == [Cardinal.N, Cardinal.E, Cardinal.S, Cardinal.W]
        assert Cardinal.iter_from(Cardinal.W) == [Cardinal.W, Cardinal.N, Cardinal.E, Cardinal.S]

    def test_parse(self):
        assert Cardinal.parse("south") is Cardinal.S
        assert Cardinal.parse("E") is Cardinal.E
        with pytest.raises(ValueError):
            Cardinal.parse("up")


class TestOrdinal:
    def test_rotation(self):
        assert Ordinal.NW.inc_cw() is Ordinal.NE
        assert Ordinal.SW.inc_cw() is Ordinal.NW
        assert Ordinal.NW.inc_ccw() is Ordinal.SW

    @pytest.mark.parametrize(
        "corner, expected",
        [
            (Ordinal.NW, Coord(0, 0)),
            (Ordinal.NE, Coord(3, 0)),
            (Ordinal.SE, Coord(3, 3)),
            (Ordinal.SW, Coord(0, 3)),
        ],
    )
    def test_first_coord_is_corner(self, corner, expected):
        assert corner.major_order_coord(0, 4, Major.ROW) == expected

    def test_column_major_moves_down_first(self):
        ids = [Ordinal.SW.major_order_index(v, 4, Major.COL) for v in range(5)]
        assert ids == [12, 8, 4, 0, 13]

    def test_parse(self):
        assert Ordinal.parse("Northeast") is Ordinal.NE
        with pytest.raises(ValueError):
            Ordinal.parse("middle")


class TestRandomHelpers:
    def test_seeded_generator_is_reproducible(self):
        a = [random_index(make_rng(42), 100) for _ in range(3)]
        b = [random_index(make_rng(42), 100) for _ in range(3)]
        assert a == b

    def test_random_index_range(self):
        rng = make_rng(1)
        draws = {random_index(rng, 3) for _ in range(200)}
        assert draws == {0, 1, 2}

    def test_empty_range_rejected(self):
        with pytest.raises(ValueError):
            random_index(make_rng(1), 0)

    def test_choice_and_flip(self):
        rng = make_rng(9)
        assert random_choice(rng, ["only"]) == "only"
        assert {coin_flip(rng) for _ in range(100)} == {True, False}

    def test_negative_seed_accepted(self):
        a = [random_index(make_rng(-1), 1000) for _ in range(3)]
        b = [random_index(make_rng(-1), 1000) for _ in range(3)]
        assert a == b
        assert random_index(make_rng(-7), 10) in range(10)
