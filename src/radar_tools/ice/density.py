"""
Ice density classification from radar reflectivity

Each cell is assigned a bulk ice density according to the reflectivity
interval it falls in. Denser particles (graupel, rimed aggregates) are
associated with stronger echoes:

    dBZ < 18         ->   0 kg/m^3 (no ice retrieved)
    18 <= dBZ < 30   -> 400 kg/m^3
    30 <= dBZ < 35   -> 600 kg/m^3
    35 <= dBZ < 40   -> 700 kg/m^3
    dBZ >= 40        -> 800 kg/m^3

Intervals are closed at the lower bound.
"""

from typing import Sequence, Tuple
import numpy as np
import numpy.typing as npt

from ..constants import DENSITY_BINS
from .threshold import VerticalThreshold


def classify_ice_density(
    reflectivity: npt.ArrayLike,
    bins: Sequence[Tuple[float, float]] = DENSITY_BINS
) -> npt.NDArray[np.float64]:
    """
    Assign an ice density to every reflectivity cell.

    Parameters
    ----------
    reflectivity : array-like
        Radar reflectivity (dBZ)
    bins : sequence of (lower_bound, density) pairs, optional
        Interval table sorted by lower bound (dBZ, kg/m^3).
        Default: DENSITY_BINS

    Returns
    -------
    density : ndarray
        Ice density (kg/m^3), same shape as reflectivity. Cells below the
        first lower bound get 0, and so do non-finite cells: NaN, -inf and
        +inf are all dropped as ice-free rather than assigned the top bin.

    Raises
    ------
    ValueError
        If bins is empty or its lower bounds are not strictly increasing

    Examples
    --------
    >>> classify_ice_density([17.999, 18.0, 29.999, 35.0, 39.999, 40.0])
    array([  0., 400., 400., 700., 700., 800.])
    """
    if len(bins) == 0:
        raise ValueError("bins must contain at least one (lower_bound, density) pair")

    bounds = np.array([lower for lower, _ in bins], dtype=np.float64)
    if np.any(np.diff(bounds) <= 0):
        raise ValueError(f"bin lower bounds must be strictly increasing, got {bounds.tolist()}")

    # Index 0 is reserved for "below the first bound"
    densities = np.concatenate(([0.0], [density for _, density in bins])).astype(np.float64)

    dbz = np.asarray(reflectivity, dtype=np.float64)
    idx = np.searchsorted(bounds, dbz, side='right')
    # searchsorted places NaN past the last bound
    density = np.where(np.isfinite(dbz), densities[idx], 0.0)

    return density


def apply_vertical_threshold(
    density: npt.ArrayLike,
    vertical_threshold: npt.ArrayLike,
    threshold: VerticalThreshold
) -> npt.NDArray[np.float64]:
    """
    Zero the density of cells that the threshold marks as ice-free.

    Parameters
    ----------
    density : array-like
        Ice density (kg/m^3)
    vertical_threshold : array-like
        Temperature (deg C) or altitude (m) per cell, same shape as density
    threshold : VerticalThreshold
        Which test to apply and its value

    Returns
    -------
    density : ndarray
        New array with excluded cells set to 0
    """
    density = np.asarray(density, dtype=np.float64)
    return np.where(threshold.excludes(vertical_threshold), 0.0, density)


__all__ = [
    'classify_ice_density',
    'apply_vertical_threshold',
]
