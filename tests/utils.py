import numpy as np

from cost_surface import Grid

SQRT2 = np.sqrt(2)

# Example taken from ESRI docs. Negative values are barriers.
ESRI_FRICTION = np.array(
    [
        [1, 3, 4, 4, 3, 2],
        [7, 3, 2, 6, 4, 6],
        [5, 8, 7, 5, 6, 6],
        [1, 4, 5, -1, 5, 1],
        [4, 7, 5, -1, 2, 6],
        [1, 2, 2, 1, 3, 4],
    ]
)
# (col, row) source cells
ESRI_SOURCES = [(1, 0), (2, 0), (2, 1), (0, 5)]
ESRI_TRUTH_SCALE_1 = np.array(
    [
        [2.0, 0.0, 0.0, 4.0, 7.5, 10.0],
        [6.0, 2.5, 0.0, 4.0, 9.0, 13.86396103],
        [8.0, 7.07106781, 4.5, 4.94974747, 10.44974747, 12.74264069],
        [5.0, 7.5, 10.5, np.nan, 10.62132034, 9.24264069],
        [2.5, 5.65685425, 6.44974747, np.nan, 7.12132034, 11.12132034],
        [0.0, 1.5, 3.5, 5.0, 7.0, 10.5],
    ]
)
ESRI_TRUTH_SCALE_5 = np.array(
    [
        [10.0, 0.0, 0.0, 20.0, 37.5, 50.0],
        [30.0, 12.5, 0.0, 20.0, 45.0, 69.31980515],
        [40.0, 35.35533906, 22.5, 24.74873734, 52.24873734, 63.71320344],
        [25.0, 37.5, 52.5, np.nan, 53.10660172, 46.21320344],
        [12.5, 28.28427125, 32.24873734, np.nan, 35.60660172, 55.60660172],
        [0.0, 7.5, 17.5, 25.0, 35.0, 52.5],
    ]
)


class RecordingGrid(Grid):
    """A grid that keeps a history of every value written to each cell."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.history = {}

    def set_value(self, col, row, value):
        self.history.setdefault((col, row), []).append(value)
        super().set_value(col, row, value)


def uniform_grid(cols, rows, value=1.0):
    return Grid(np.full((rows, cols), value, dtype=float))


def random_friction(cols, rows, barrier_fraction=0.1, seed=0):
    rng = np.random.default_rng(seed)
    data = rng.uniform(0.1, 10.0, size=(rows, cols))
    data[rng.random((rows, cols)) < barrier_fraction] = -1
    return data


def assert_grid_close(grid, truth):
    values = grid.to_numpy() if isinstance(grid, Grid) else np.asarray(grid)
    assert values.shape == truth.shape
    assert np.allclose(values, truth, equal_nan=True)
