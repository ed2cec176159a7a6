import pytest

from grid_core import SquareGrid


@pytest.fixture
def grid4():
    return SquareGrid(4)


@pytest.fixture
def chain2():
    """2x2 grid linked as the chain 0-1-3-2."""
    grid = SquareGrid(2)
    grid.link(0, 1)
    grid.link(1, 3)
    grid.link(3, 2)
    return grid
