"""Shared fixtures for radar_tools tests."""

import numpy as np
import pytest
import xarray as xr


def expected_iwc(dbz, density, gdiv=1.0):
    """Closed-form IWC (g/m^3) for a single reflectivity/density pair."""
    z_linear = 10.0 ** (dbz / 10.0)
    return (
        1000.0 * np.pi * density
        * 4.0e6 ** (3.0 / 7.0)
        * (5.68e-18 / 720.0 * z_linear) ** (4.0 / 7.0)
        / gdiv
    )


@pytest.fixture
def column_fields():
    """A (2, 3, 4) field: two rows, three columns, four levels (last axis)."""
    dbz = np.array([20.0, 32.0, 37.0, 45.0])
    temperature = np.array([5.0, -5.0, -15.0, -30.0])
    shape = (2, 3, 4)
    return (
        np.broadcast_to(dbz, shape).copy(),
        np.broadcast_to(temperature, shape).copy(),
    )


@pytest.fixture
def labelled_fields():
    """Reflectivity and temperature on (time, lev, yc, xc) with layer depth on lev."""
    time = np.arange(2)
    lev = np.array([2000.0, 4000.0, 6000.0, 8000.0])
    yc = np.array([0.0, 1000.0, 2000.0])
    xc = np.array([0.0, 1000.0])
    shape = (time.size, lev.size, yc.size, xc.size)

    dbz = np.broadcast_to(np.array([15.0, 25.0, 33.0, 41.0])[None, :, None, None], shape)
    temp = np.broadcast_to(np.array([8.0, -4.0, -16.0, -28.0])[None, :, None, None], shape)
    coords = {'time': time, 'lev': lev, 'yc': yc, 'xc': xc}
    dims = ('time', 'lev', 'yc', 'xc')

    ds = xr.Dataset({
        'dbz': xr.DataArray(dbz.copy(), coords=coords, dims=dims),
        'T': xr.DataArray(temp.copy(), coords=coords, dims=dims),
        'dz': xr.DataArray(np.full(lev.size, 2000.0), coords={'lev': lev}, dims=('lev',)),
    })
    return ds
