import dask.array as da
import numpy as np
import pytest
import xarray as xr

from cost_surface import (
    DimensionsError,
    Grid,
    compute_cost_surface,
    cost_distance,
)
from cost_surface._core import (
    MOVES,
    cost_surface_numpy,
    get_frontier_capacity,
    get_move_lengths,
)
from tests.utils import (
    ESRI_FRICTION,
    ESRI_SOURCES,
    ESRI_TRUTH_SCALE_1,
    ESRI_TRUTH_SCALE_5,
    SQRT2,
    assert_grid_close,
    random_friction,
)


def test_moves():
    assert MOVES.shape == (8, 2)
    assert len({tuple(m) for m in MOVES.tolist()}) == 8
    assert (0, 0) not in {tuple(m) for m in MOVES.tolist()}


def test_get_move_lengths():
    lengths = get_move_lengths()
    assert np.allclose(lengths[:4], 1)
    assert np.allclose(lengths[4:], SQRT2)

    lengths = get_move_lengths(30)
    assert np.allclose(lengths[:4], 30)
    assert np.allclose(lengths[4:], 30 * SQRT2)

    lengths = get_move_lengths((2, 3))
    # Left/right move along x, up/down along y
    assert np.allclose(lengths[:4], [3, 3, 2, 2])
    assert np.allclose(lengths[4:], np.sqrt(13))


def test_get_frontier_capacity():
    assert get_frontier_capacity(10, 20) == 480


class TestCostSurfaceNumpy:
    def test_esri_example(self):
        cost = cost_surface_numpy(ESRI_FRICTION, ESRI_SOURCES)
        assert np.allclose(cost, ESRI_TRUTH_SCALE_1, equal_nan=True)
        cost = cost_surface_numpy(ESRI_FRICTION, ESRI_SOURCES, scaling=5)
        assert np.allclose(cost, ESRI_TRUTH_SCALE_5, equal_nan=True)

    @pytest.mark.parametrize("max_cost", [np.inf, 5.0, 20.0])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_matches_relax(self, max_cost, seed):
        data = random_friction(25, 18, barrier_fraction=0.15, seed=seed)
        sources = [(0, 0), (24, 17), (12, 9)]
        passable = [s for s in sources if data[s[1], s[0]] >= 0]
        expected = compute_cost_surface(
            Grid(data), passable, max_cost=max_cost
        ).to_numpy()
        result = cost_surface_numpy(data, passable, max_cost=max_cost)
        assert np.allclose(result, expected, equal_nan=True)

    def test_large_grid(self):
        data = np.ones((40, 40))
        cost = cost_surface_numpy(data, [(0, 0)])
        assert np.isclose(cost[39, 39], 39 * SQRT2)
        assert np.isclose(cost[0, 39], 39)

    def test_null_value(self):
        data = np.ones((3, 3))
        data[1, :2] = -9999
        cost = cost_surface_numpy(data, [(0, 0)], friction_null_value=-9999)
        assert np.isnan(cost[1, 0])
        assert np.isnan(cost[1, 1])
        assert np.isclose(cost[2, 0], 2 + 2 * SQRT2)

    def test_barrier_and_out_of_bounds_sources(self):
        data = np.ones((3, 3))
        data[0, 0] = -1
        cost = cost_surface_numpy(data, [(0, 0), (5, 5), (-1, 0)])
        assert np.isnan(cost).all()

    def test_zero_friction(self):
        cost = cost_surface_numpy(np.zeros((5, 5)), [(2, 2)])
        assert (cost == 0).all()

    def test_bad_input(self):
        with pytest.raises(ValueError):
            cost_surface_numpy(np.ones(5), [(0, 0)])


class TestCostDistance:
    def test_numpy(self):
        result = cost_distance(ESRI_FRICTION, ESRI_SOURCES)
        assert isinstance(result, xr.DataArray)
        assert result.dims == ("y", "x")
        assert np.isnan(result.attrs["_FillValue"])
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_1, equal_nan=True)

    def test_dask(self):
        data = da.from_array(ESRI_FRICTION, chunks=3)
        result = cost_distance(data, ESRI_SOURCES)
        assert isinstance(result.data, np.ndarray)
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_1, equal_nan=True)

    def test_xarray_coords_and_scaling(self):
        xdata = xr.DataArray(
            ESRI_FRICTION,
            dims=("y", "x"),
            coords={
                "y": np.arange(6)[::-1] * 5 + 100,
                "x": np.arange(6) * 5 + 2,
            },
        )
        result = cost_distance(xdata, ESRI_SOURCES)
        assert result.dims == xdata.dims
        assert np.array_equal(result.x, xdata.x)
        assert np.array_equal(result.y, xdata.y)
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_5, equal_nan=True)

        # Explicit scaling wins over the coordinates
        result = cost_distance(xdata, ESRI_SOURCES, scaling=1)
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_1, equal_nan=True)

    def test_xarray_single_band(self):
        xdata = xr.DataArray(
            ESRI_FRICTION[None],
            dims=("band", "y", "x"),
            coords={"band": [1], "y": np.arange(6), "x": np.arange(6)},
        )
        result = cost_distance(xdata, ESRI_SOURCES)
        assert result.dims == ("y", "x")
        assert "band" not in result.coords
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_1, equal_nan=True)

    def test_xarray_null_value(self):
        data = ESRI_FRICTION.astype(float)
        data[data < 0] = -9999
        xdata = xr.DataArray(
            data, dims=("y", "x"), attrs={"_FillValue": -9999}
        )
        result = cost_distance(xdata, ESRI_SOURCES)
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_1, equal_nan=True)

    def test_grid(self):
        result = cost_distance(Grid(ESRI_FRICTION), ESRI_SOURCES, scaling=5)
        assert np.allclose(result.values, ESRI_TRUTH_SCALE_5, equal_nan=True)

    def test_max_cost(self):
        result = cost_distance(ESRI_FRICTION, ESRI_SOURCES, max_cost=5)
        truth = ESRI_TRUTH_SCALE_1.copy()
        truth[truth > 5] = np.nan
        assert np.allclose(result.values, truth, equal_nan=True)

    def test_barrier_source_warns(self):
        with pytest.warns(UserWarning, match="barrier"):
            result = cost_distance(ESRI_FRICTION, [(3, 3)])
        assert np.isnan(result.values).all()

    def test_errors(self):
        with pytest.raises(ValueError):
            cost_distance(ESRI_FRICTION, [(6, 0)])
        with pytest.raises(ValueError):
            cost_distance(ESRI_FRICTION, [1, 2])
        with pytest.raises(DimensionsError):
            cost_distance(
                xr.DataArray(np.ones((2, 3, 3)), dims=("band", "y", "x")),
                [(0, 0)],
            )
        with pytest.raises(TypeError):
            cost_distance([[1, 2], [3, 4]], [(0, 0)])


@pytest.mark.parametrize("fixture", ["uniform_5x5", "blocked_5x5"])
@pytest.mark.parametrize("max_cost", [np.inf, 1.5, 2.5])
def test_cost_distance_matches_compute_cost_surface(
    request, fixture, max_cost
):
    friction = request.getfixturevalue(fixture)
    expected = compute_cost_surface(friction, [(2, 2)], max_cost=max_cost)
    result = cost_distance(friction, [(2, 2)], max_cost=max_cost)
    assert_grid_close(expected, result.values)
