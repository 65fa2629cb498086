import numpy as np
import pytest

from cost_surface import Grid
from tests import utils


@pytest.fixture
def uniform_5x5():
    return utils.uniform_grid(5, 5)


@pytest.fixture
def blocked_5x5():
    data = np.ones((5, 5))
    # Barrier directly north of the center cell
    data[1, 2] = np.nan
    return Grid(data)


@pytest.fixture
def esri_friction():
    return Grid(utils.ESRI_FRICTION)


@pytest.fixture
def random_grid():
    return Grid(utils.random_friction(20, 15))
