"""
Distance calculation utilities

This module provides great-circle distances between points on a sphere,
from a single origin to one or many destinations.
"""

from typing import Optional, Tuple, Union
import numpy as np
import numpy.typing as npt

from ..constants import EARTH_MEAN_RADIUS
from ..exceptions import ScalarRequired, SizeMismatch


def _central_angle(
    lat1: float,
    lon1: float,
    lat2: npt.NDArray[np.floating],
    lon2: npt.NDArray[np.floating]
) -> npt.NDArray[np.floating]:
    """
    Calculate the central angle between points (internal helper function).

    Uses the haversine formulation, which stays accurate for small
    separations. All inputs are in radians.

    Returns
    -------
    angle : ndarray
        Central angle in radians, in the range [0, π]
    """
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = np.sin(dlat / 2)**2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2)**2
    # Rounding can push a slightly outside [0, 1] for antipodal points
    a = np.clip(a, 0.0, 1.0)

    return 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def _validate_points(
    lat1: npt.ArrayLike,
    lon1: npt.ArrayLike,
    lat2: npt.ArrayLike,
    lon2: npt.ArrayLike
) -> Tuple[float, float, np.ndarray, np.ndarray]:
    """Check point sizes and return float arrays."""
    for name, value in (('lat1', lat1), ('lon1', lon1)):
        if np.size(value) != 1:
            raise ScalarRequired(name, int(np.size(value)))

    lat2 = np.asarray(lat2, dtype=np.float64)
    lon2 = np.asarray(lon2, dtype=np.float64)
    if lat2.size != lon2.size:
        raise SizeMismatch('lat2', lat2.size, 'lon2', lon2.size)

    lat1 = float(np.asarray(lat1, dtype=np.float64).ravel()[0])
    lon1 = float(np.asarray(lon1, dtype=np.float64).ravel()[0])

    return lat1, lon1, lat2, lon2.reshape(lat2.shape)


def great_circle_distance(
    lat1: float,
    lon1: float,
    lat2: Union[float, npt.ArrayLike],
    lon2: Union[float, npt.ArrayLike],
    radius: Optional[float] = None,
    degrees: bool = True
) -> Union[float, npt.NDArray[np.floating]]:
    """
    Calculate great-circle distance from one point to one or more points.

    Parameters
    ----------
    lat1, lon1 : float
        Latitude and longitude of the origin (single point)
    lat2, lon2 : float or array-like
        Latitude and longitude of the destination(s). Must have equal size.
    radius : float, optional
        Sphere radius. None or 0 uses the mean Earth radius (6371 km).
        Default: None
    degrees : bool, optional
        True if coordinates are in degrees, False for radians. Default: True

    Returns
    -------
    distance : float or ndarray
        Great-circle distance in the units of radius. A float for a single
        destination, otherwise an array shaped like lat2.

    Raises
    ------
    ScalarRequired
        If lat1 or lon1 holds more than one value
    SizeMismatch
        If lat2 and lon2 differ in size
    ValueError
        If radius is negative

    Examples
    --------
    >>> from radar_tools.utils import great_circle_distance
    >>>
    >>> # Point to point (km)
    >>> d = great_circle_distance(40.0, -105.0, 39.7, -104.9)
    >>> print(f"Distance: {d:.1f} km")
    >>>
    >>> # Point to many points, on the unit sphere, in radians
    >>> import numpy as np
    >>> lat = np.array([0.0, 0.0])
    >>> lon = np.array([np.pi / 2, np.pi])
    >>> great_circle_distance(0.0, 0.0, lat, lon, radius=1.0, degrees=False)
    array([1.57079633, 3.14159265])

    Notes
    -----
    - Haversine formula on a perfect sphere
    - Output units follow radius (km with the default radius)
    - Antipodal points are π * radius apart
    """
    if radius is None or radius == 0:
        radius = EARTH_MEAN_RADIUS
    if radius < 0:
        raise ValueError(f"radius must be positive, got {radius}")

    lat1, lon1, lat2, lon2 = _validate_points(lat1, lon1, lat2, lon2)

    if degrees:
        lat1, lon1 = np.radians(lat1), np.radians(lon1)
        lat2, lon2 = np.radians(lat2), np.radians(lon2)

    distance = radius * _central_angle(lat1, lon1, lat2, lon2)

    if distance.ndim == 0:
        return float(distance)
    return distance


__all__ = [
    'great_circle_distance',
]
