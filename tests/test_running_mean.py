"""Tests for the direct, band-matrix and filter running means."""

import numpy as np
import pytest

from band_mean.band import band_matvec, build_band_index
from band_mean.errors import DimensionMismatch, InvalidArgument
from band_mean.running_mean import band_running_mean, direct_running_mean, filter_running_mean
from band_mean.weights import edge_weights


def _mask(a):
    return np.ma.getmaskarray(a)


def test_worked_example():
    x = [1, 2, 3, 4, 5, 6, 7, 8, 9]
    y = direct_running_mean(x, 2)
    assert y[4] == pytest.approx(5.0)
    np.testing.assert_array_equal(np.flatnonzero(_mask(y)), [0, 1, 7, 8])
    np.testing.assert_allclose(y.compressed(), [3, 4, 5, 6, 7])


@pytest.mark.parametrize("n,k", [(9, 2), (100, 1), (257, 5), (64, 31), (500, 20)])
def test_band_product_times_weights_matches_direct(n, k):
    x = np.random.default_rng(n + k).standard_normal(n)
    direct = direct_running_mean(x, k)
    via_band = band_matvec(build_band_index(n, k), x) * edge_weights(n, k)

    np.testing.assert_array_equal(_mask(via_band), _mask(direct))
    interior = slice(k, n - k)
    diff = np.abs(np.ma.getdata(via_band)[interior] - np.ma.getdata(direct)[interior])
    assert np.all(diff < 1e-9)


@pytest.mark.parametrize("method", [band_running_mean, filter_running_mean])
@pytest.mark.parametrize("n,k", [(1, 0), (10, 0), (11, 5), (50, 3), (333, 12)])
def test_methods_agree_with_direct(method, n, k):
    x = np.random.default_rng(3).uniform(-1, 1, n)
    expected = direct_running_mean(x, k)
    result = method(x, k)
    np.testing.assert_array_equal(_mask(result), _mask(expected))
    np.testing.assert_allclose(result.compressed(), expected.compressed(), atol=1e-9)


def test_zero_half_width_returns_input_unchanged():
    x = np.array([0.1, 0.2, 0.3, 1e300, -7.5])
    for method in (direct_running_mean, band_running_mean, filter_running_mean):
        y = method(x, 0)
        assert not _mask(y).any()
        np.testing.assert_array_equal(np.ma.getdata(y), x)


def test_exact_fit_window():
    k = 3
    x = np.arange(2 * k + 1, dtype=float)
    for method in (direct_running_mean, band_running_mean, filter_running_mean):
        y = method(x, k)
        assert _mask(y).sum() == 2 * k
        assert y[k] == pytest.approx(x.mean())


def test_window_wider_than_signal():
    x = [1.0, 2.0, 3.0]
    assert _mask(direct_running_mean(x, 2)).all()
    assert _mask(direct_running_mean(x, 10)).all()
    assert _mask(filter_running_mean(x, 10)).all()
    assert _mask(band_running_mean(x, 2)).all()
    with pytest.raises(InvalidArgument):
        band_running_mean(x, 3)


def test_empty_signal():
    assert direct_running_mean([], 2).shape == (0,)


def test_input_is_not_modified():
    x = np.linspace(0, 1, 20)
    original = x.copy()
    direct_running_mean(x, 3)
    band_running_mean(x, 3)
    filter_running_mean(x, 3)
    np.testing.assert_array_equal(x, original)


def test_filled_gives_nan_edges():
    y = direct_running_mean(np.ones(6), 1).filled(np.nan)
    assert np.isnan(y[0]) and np.isnan(y[-1])
    np.testing.assert_array_equal(y[1:-1], np.ones(4))


@pytest.mark.parametrize("method", [direct_running_mean, band_running_mean, filter_running_mean])
def test_invalid_inputs(method):
    with pytest.raises(InvalidArgument):
        method(np.ones(5), -1)
    with pytest.raises(InvalidArgument):
        method(np.ones(5), 1.5)
    with pytest.raises(InvalidArgument):
        method(np.ones((5, 2)), 1)


def test_band_running_mean_with_prebuilt_index():
    x = np.random.default_rng(0).standard_normal(40)
    index = build_band_index(40, 4)
    np.testing.assert_allclose(
        band_running_mean(x, 4, index=index).compressed(),
        direct_running_mean(x, 4).compressed(),
        atol=1e-12,
    )
    with pytest.raises(InvalidArgument):
        band_running_mean(x, 3, index=index)
    with pytest.raises(DimensionMismatch):
        band_running_mean(x[:30], 4, index=index)


def test_infinity_stays_inside_its_windows():
    x = np.ones(20)
    x[0] = np.inf
    direct = direct_running_mean(x, 1)
    via_band = band_running_mean(x, 1)

    assert np.isposinf(direct[1]) and np.isposinf(via_band[1])
    np.testing.assert_allclose(np.ma.getdata(direct)[2:19], 1.0)
    np.testing.assert_allclose(
        np.ma.getdata(direct)[1:19], np.ma.getdata(via_band)[1:19]
    )


def test_nan_stays_inside_its_windows():
    x = np.ones(30)
    x[10] = np.nan
    k = 1
    direct = direct_running_mean(x, k)
    via_band = band_running_mean(x, k)

    for y in (direct, via_band):
        data = np.ma.getdata(y)[k:30 - k]
        nan_at = np.flatnonzero(np.isnan(data)) + k
        np.testing.assert_array_equal(nan_at, [9, 10, 11])
    finite = np.isfinite(np.ma.getdata(direct))
    finite[:k] = finite[30 - k:] = False
    np.testing.assert_allclose(np.ma.getdata(direct)[finite], 1.0)
    np.testing.assert_array_equal(_mask(direct), _mask(via_band))


def test_large_value_does_not_degrade_later_windows():
    rng = np.random.default_rng(7)
    x = np.concatenate(([1e15], rng.uniform(0, 1, 200)))
    k = 2
    direct = np.ma.getdata(direct_running_mean(x, k))
    via_band = np.ma.getdata(band_running_mean(x, k))
    expected = np.array([x[i - k:i + k + 1].mean() for i in range(50, 150)])

    assert np.all(np.abs(direct[50:150] - via_band[50:150]) < 1e-9)
    assert np.all(np.abs(direct[50:150] - expected) < 1e-9)
