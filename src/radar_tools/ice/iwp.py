"""
Ice water path from radar reflectivity

This module estimates ice water path (IWP, g/m^2) by integrating ice water
content (IWC, g/m^3) retrieved from reflectivity over the vertical dimension.

Retrieval steps:
1. Validate shapes and broadcast the vertical spacing
2. Classify each cell into an ice density bin by reflectivity
3. Zero the density of cells that are too warm (or below the melting level)
4. Convert reflectivity and density to IWC
5. Multiply by layer depth and sum over the vertical axis (NaN-aware)

Z-IWC relation for an exponential size distribution of constant-density
spheres:

    Z   = 10^(dBZ/10)
    IWC = 1000 π (ρi/ρa) N0^(3/7) (c Z)^(4/7)

with ρa = 1 kg/m^3, N0 = 4e6 m^-4 and c = 5.68e-18 / 720.
"""

import warnings
from typing import Optional, Sequence, Tuple, Union
import numpy as np
import numpy.typing as npt
import xarray as xr

from ..constants import (
    AIR_DENSITY,
    DENSITY_BINS,
    ICE_INTERCEPT,
    REFLECTIVITY_FACTOR,
)
from ..exceptions import InvalidArgumentCount, ShapeMismatch
from .density import apply_vertical_threshold, classify_ice_density
from .threshold import VerticalThreshold, resolve_threshold

ArrayF = npt.NDArray[np.floating]
AreaNormalization = Union[float, Sequence[float], None]


def area_divisor(area_normalization: AreaNormalization = None, stacklevel: int = 2) -> float:
    """
    Divisor applied to IWC for area normalization.

    Parameters
    ----------
    area_normalization : float or (float, float), optional
        - single length L: divisor is L**2
        - pair of orthogonal lengths (Lx, Ly): divisor is Lx + Ly
        - None: divisor is 1.0
    stacklevel : int, optional
        Stack level of the two-length UserWarning. Default: 2

    Returns
    -------
    gdiv : float

    Raises
    ------
    ValueError
        If a length is not positive or more than two lengths are given

    Notes
    -----
    The two-length form divides by the sum of the lengths, not their
    product. A UserWarning is emitted whenever it is used.
    """
    if area_normalization is None:
        return 1.0

    lengths = np.atleast_1d(np.asarray(area_normalization, dtype=np.float64)).ravel()
    if lengths.size == 0 or lengths.size > 2:
        raise ValueError(
            f"area_normalization must be one length or a pair of lengths, got {lengths.size} values"
        )
    if np.any(~np.isfinite(lengths)) or np.any(lengths <= 0):
        raise ValueError(f"area_normalization lengths must be positive, got {lengths.tolist()}")

    if lengths.size == 1:
        return float(lengths[0] ** 2)

    warnings.warn(
        "Two-length area normalization divides by the sum of the lengths (Lx + Ly), "
        "not their product.",
        stacklevel=stacklevel
    )
    return float(lengths[0] + lengths[1])


def ice_water_content(
    reflectivity: npt.ArrayLike,
    density: npt.ArrayLike,
    gdiv: float = 1.0,
    *,
    air_density: float = AIR_DENSITY,
    intercept: float = ICE_INTERCEPT,
    factor: float = REFLECTIVITY_FACTOR,
) -> ArrayF:
    """
    Compute ice water content from reflectivity and ice density.

    Parameters
    ----------
    reflectivity : array-like
        Radar reflectivity (dBZ)
    density : array-like
        Ice density (kg/m^3), same shape as reflectivity
    gdiv : float, optional
        Area normalization divisor (see area_divisor). Default: 1.0
    air_density, intercept, factor : float, optional
        Constants of the Z-IWC relation

    Returns
    -------
    iwc : ndarray
        Ice water content (g/m^3). Zero wherever density is zero.

    Examples
    --------
    >>> iwc = ice_water_content([30.0, 10.0], [600.0, 0.0])
    >>> float(iwc[1])
    0.0
    """
    dbz = np.asarray(reflectivity, dtype=np.float64)
    density = np.asarray(density, dtype=np.float64)

    iwc = np.zeros(np.broadcast(dbz, density).shape, dtype=np.float64)
    dbz, density = np.broadcast_arrays(dbz, density)
    ice = density > 0

    z_linear = 10.0 ** (dbz[ice] / 10.0)
    iwc[ice] = (
        1000.0 * np.pi * (density[ice] / air_density)
        * intercept ** (3.0 / 7.0)
        * (factor * z_linear) ** (4.0 / 7.0)
    )

    return iwc / gdiv


def _normalize_axis(vertical_axis: Optional[int], ndim: int) -> int:
    """Resolve the vertical axis index, defaulting to the last dimension."""
    if vertical_axis is None:
        return ndim - 1
    axis = int(vertical_axis)
    if not -ndim <= axis < ndim:
        raise ValueError(f"vertical_axis {vertical_axis} is out of range for {ndim}-D reflectivity")
    return axis % ndim


def _broadcast_spacing(vertical_spacing: npt.ArrayLike, shape: tuple) -> ArrayF:
    """Return vertical spacing with the reflectivity shape."""
    spacing = np.asarray(vertical_spacing, dtype=np.float64)
    if spacing.shape == shape:
        return spacing
    if spacing.size == 1:
        return np.full(shape, spacing.item(), dtype=np.float64)
    raise ShapeMismatch('vertical_spacing', shape, spacing.shape)


class IceWaterPathEstimator:
    """
    Estimate ice water path from reflectivity.

    The estimator holds the retrieval options; estimate() applies them to a
    set of fields. Instances carry no state between calls.

    Parameters
    ----------
    vertical_axis : int, optional
        Axis of the vertical dimension. Default: last axis
    threshold : VerticalThreshold or float, optional
        Ice/no-ice test on the vertical-threshold field. A bare number is a
        temperature threshold (deg C).
    temperature_threshold : float, optional
        Shorthand for VerticalThreshold.temperature(value)
    melting_level : float, optional
        Shorthand for VerticalThreshold.altitude(value)
    area_normalization : float or (float, float), optional
        See area_divisor. Default: no normalization
    bins : sequence of (lower_bound, density) pairs, optional
        Density classification table. Default: DENSITY_BINS

    Only one of threshold, temperature_threshold and melting_level may be
    given. With none of them, cells warmer than -10 deg C are ice-free.
    Options passed to estimate() override these values for that call.

    Examples
    --------
    >>> import numpy as np
    >>> from radar_tools import IceWaterPathEstimator, VerticalThreshold
    >>>
    >>> dbz = np.full((10, 20, 40), 25.0)                  # (y, x, z)
    >>> height = np.broadcast_to(np.arange(40) * 250.0, dbz.shape)
    >>>
    >>> estimator = IceWaterPathEstimator(threshold=VerticalThreshold.altitude(4500.0))
    >>> iwp = estimator.estimate(dbz, height, 250.0)
    >>> iwp.shape
    (10, 20)
    """

    def __init__(
        self,
        vertical_axis: Optional[int] = None,
        threshold: Optional[Union[VerticalThreshold, float]] = None,
        temperature_threshold: Optional[float] = None,
        melting_level: Optional[float] = None,
        area_normalization: AreaNormalization = None,
        bins=DENSITY_BINS,
    ) -> None:
        self.vertical_axis = vertical_axis
        self.threshold = resolve_threshold(threshold, temperature_threshold, melting_level)
        self.gdiv = area_divisor(area_normalization, stacklevel=3)
        self.bins = tuple(bins)

    def __repr__(self) -> str:
        return (
            f"IceWaterPathEstimator(vertical_axis={self.vertical_axis!r}, "
            f"threshold={self.threshold!r}, gdiv={self.gdiv!r})"
        )

    def density(self, reflectivity: npt.ArrayLike, vertical_threshold: npt.ArrayLike) -> ArrayF:
        """Ice density per cell after the vertical-threshold test."""
        density = classify_ice_density(reflectivity, self.bins)
        return apply_vertical_threshold(density, vertical_threshold, self.threshold)

    def _options(
        self,
        vertical_axis: Optional[int],
        threshold: Optional[Union[VerticalThreshold, float]],
        temperature_threshold: Optional[float],
        melting_level: Optional[float],
        area_normalization: AreaNormalization,
    ) -> Tuple[Optional[int], VerticalThreshold, float]:
        """Merge per-call options with the constructor values."""
        if vertical_axis is None:
            vertical_axis = self.vertical_axis

        if threshold is None and temperature_threshold is None and melting_level is None:
            resolved = self.threshold
        else:
            resolved = resolve_threshold(threshold, temperature_threshold, melting_level)

        # Called from a public entry point, so the user frame is 4 levels up
        gdiv = self.gdiv if area_normalization is None else area_divisor(area_normalization, stacklevel=4)

        return vertical_axis, resolved, gdiv

    def _estimate(
        self,
        fields: tuple,
        vertical_axis: Optional[int],
        threshold: VerticalThreshold,
        gdiv: float
    ) -> ArrayF:
        reflectivity, vertical_threshold, vertical_spacing = fields

        dbz = np.asarray(reflectivity, dtype=np.float64)
        if dbz.ndim == 0:
            raise ValueError("reflectivity must have at least one dimension")

        axis = _normalize_axis(vertical_axis, dbz.ndim)

        field = np.asarray(vertical_threshold, dtype=np.float64)
        if field.shape != dbz.shape:
            raise ShapeMismatch('vertical_threshold', dbz.shape, field.shape)

        spacing = _broadcast_spacing(vertical_spacing, dbz.shape)

        # No cell reaches the lowest density bin: nothing to classify
        if not np.any(dbz >= self.bins[0][0]):
            iwc = np.zeros(dbz.shape, dtype=np.float64) / gdiv
            return np.nansum(iwc * spacing, axis=axis)

        if not np.isfinite(dbz).all():
            warnings.warn(
                "reflectivity contains NaN or infinite values; those cells are treated as ice-free.",
                RuntimeWarning,
                stacklevel=3
            )

        density = classify_ice_density(dbz, self.bins)
        density = apply_vertical_threshold(density, field, threshold)
        iwc = ice_water_content(dbz, density, gdiv)

        return np.nansum(iwc * spacing, axis=axis)

    def estimate(
        self,
        *fields: npt.ArrayLike,
        vertical_axis: Optional[int] = None,
        melting_level: Optional[float] = None,
        temperature_threshold: Optional[float] = None,
        area_normalization: AreaNormalization = None,
        threshold: Optional[Union[VerticalThreshold, float]] = None,
    ) -> ArrayF:
        """
        Integrate ice water content over the vertical axis.

        Parameters
        ----------
        *fields : array-like
            Exactly three inputs, in order:
            - reflectivity (dBZ), typically 2-D or 3-D
            - vertical-threshold field, temperature (deg C) or altitude (m),
              same shape as reflectivity
            - vertical spacing (m), scalar or same shape as reflectivity
        vertical_axis, melting_level, temperature_threshold, area_normalization, threshold : optional
            Override the constructor values for this call only. Giving any
            of the threshold options replaces the constructor's threshold.

        Returns
        -------
        iwp : ndarray
            Ice water path (g/m^2) with the vertical axis removed

        Raises
        ------
        InvalidArgumentCount
            If not exactly three fields are passed
        ShapeMismatch
            If vertical_threshold or vertical_spacing do not match reflectivity
        ValueError
            If reflectivity is a scalar, vertical_axis is out of range or
            more than one threshold option is given
        """
        if len(fields) != 3:
            raise InvalidArgumentCount(3, len(fields))

        axis, resolved, gdiv = self._options(
            vertical_axis, threshold, temperature_threshold, melting_level, area_normalization
        )
        return self._estimate(fields, axis, resolved, gdiv)


def calculate_iwp(
    *fields: npt.ArrayLike,
    vertical_axis: Optional[int] = None,
    melting_level: Optional[float] = None,
    temperature_threshold: Optional[float] = None,
    area_normalization: AreaNormalization = None,
    threshold: Optional[Union[VerticalThreshold, float]] = None,
) -> ArrayF:
    """
    Calculate ice water path from reflectivity.

    Parameters
    ----------
    *fields : array-like
        Exactly three inputs, in order:
        - reflectivity (dBZ)
        - vertical-threshold field, temperature (deg C) or altitude (m)
        - vertical spacing (m), scalar or same shape as reflectivity
    vertical_axis : int, optional
        Axis to integrate over. Default: last axis
    melting_level : float, optional
        Treat the vertical-threshold field as altitude; cells below this
        level are ice-free
    temperature_threshold : float, optional
        Treat the vertical-threshold field as temperature; cells warmer than
        this are ice-free. Default when no threshold is given: -10 deg C
    area_normalization : float or (float, float), optional
        Single length L (divide by L**2) or orthogonal lengths (Lx, Ly)
        (divide by Lx + Ly)
    threshold : VerticalThreshold, optional
        Explicit threshold; replaces melting_level/temperature_threshold

    Returns
    -------
    iwp : ndarray
        Ice water path (g/m^2) with the vertical axis removed

    Raises
    ------
    InvalidArgumentCount
        If not exactly three fields are passed
    ShapeMismatch
        If field shapes disagree
    ValueError
        If more than one threshold option is given

    Examples
    --------
    >>> import numpy as np
    >>> import radar_tools as rt
    >>>
    >>> dbz = np.array([[20.0, 35.0, 42.0]])        # (x, z)
    >>> temp = np.array([[-5.0, -15.0, -30.0]])
    >>> iwp = rt.calculate_iwp(dbz, temp, 500.0)
    >>> iwp.shape
    (1,)
    >>>
    >>> # Same column with a melting level at 4 km
    >>> height = np.array([[3000.0, 5000.0, 7000.0]])
    >>> iwp = rt.calculate_iwp(dbz, height, 500.0, melting_level=4000.0)

    Notes
    -----
    - Density bins: 18-30 dBZ 400, 30-35 dBZ 600, 35-40 dBZ 700, >=40 dBZ 800 kg/m^3
    - NaN and infinite reflectivity cells are ice-free and contribute
      nothing to the column sum; a RuntimeWarning is emitted
    - A field with no echo above 18 dBZ returns zeros of the output shape
    - temperature_threshold and melting_level are mutually exclusive. There
      is no precedence between them: passing both raises ValueError rather
      than silently applying the temperature test.
    """
    if len(fields) != 3:
        raise InvalidArgumentCount(3, len(fields))

    estimator = IceWaterPathEstimator()
    axis, resolved, gdiv = estimator._options(
        vertical_axis, threshold, temperature_threshold, melting_level, area_normalization
    )
    return estimator._estimate(fields, axis, resolved, gdiv)


def ice_water_path(
    reflectivity: xr.DataArray,
    vertical_threshold: xr.DataArray,
    vertical_spacing: Union[float, xr.DataArray],
    dim: str = 'lev',
    **kwargs
) -> xr.DataArray:
    """
    Calculate ice water path for labelled (xarray) fields.

    Parameters
    ----------
    reflectivity : xarray.DataArray
        Radar reflectivity (dBZ) with a vertical dimension
    vertical_threshold : xarray.DataArray
        Temperature (deg C) or altitude (m) with the same dimensions
    vertical_spacing : float or xarray.DataArray
        Layer depth (m). A DataArray may span a subset of the dimensions
        (e.g. only 'lev') and is broadcast against reflectivity.
    dim : str, optional
        Name of the vertical dimension. Default: 'lev'
    **kwargs
        Retrieval options: threshold, temperature_threshold, melting_level,
        area_normalization, bins. The vertical axis is taken from `dim`.

    Returns
    -------
    iwp : xarray.DataArray
        Ice water path (g/m^2) with `dim` removed; remaining coordinates kept

    Raises
    ------
    ValueError
        If `dim` is not a dimension of reflectivity, or vertical_axis is
        passed (use `dim` instead)

    Examples
    --------
    >>> import radar_tools as rt
    >>>
    >>> # ds has 'dbz' and 'T' on (time, lev, yc, xc) and layer depth 'dz' on (lev,)
    >>> iwp = rt.ice_water_path(ds['dbz'], ds['T'], ds['dz'], dim='lev')
    >>> iwp.isel(time=0).plot()
    """
    if 'vertical_axis' in kwargs:
        raise ValueError(
            "vertical_axis cannot be passed to ice_water_path; "
            "name the vertical dimension with dim instead."
        )

    if dim not in reflectivity.dims:
        raise ValueError(
            f"Dimension '{dim}' not found in reflectivity. "
            f"Available dimensions: {', '.join(map(str, reflectivity.dims))}"
        )

    if set(vertical_threshold.dims) == set(reflectivity.dims):
        vertical_threshold = vertical_threshold.transpose(*reflectivity.dims)

    if isinstance(vertical_spacing, xr.DataArray):
        vertical_spacing = vertical_spacing.broadcast_like(reflectivity).transpose(*reflectivity.dims).values

    estimator = IceWaterPathEstimator(bins=kwargs.pop('bins', DENSITY_BINS))
    axis, threshold, gdiv = estimator._options(
        reflectivity.get_axis_num(dim),
        kwargs.pop('threshold', None),
        kwargs.pop('temperature_threshold', None),
        kwargs.pop('melting_level', None),
        kwargs.pop('area_normalization', None),
    )
    if kwargs:
        raise TypeError(f"Unexpected keyword arguments: {', '.join(kwargs)}")

    fields = (reflectivity.values, vertical_threshold.values, vertical_spacing)
    iwp = estimator._estimate(fields, axis, threshold, gdiv)

    coords = {name: coord for name, coord in reflectivity.coords.items() if dim not in coord.dims}
    dims = [d for d in reflectivity.dims if d != dim]
    da_out = xr.DataArray(iwp, coords=coords, dims=dims, name='iwp')

    # Add metadata
    da_out.attrs = {
        'long_name': 'ice water path',
        'units': 'g m-2',
        'description': f'Reflectivity-derived ice water content integrated over {dim}',
        'threshold_kind': threshold.kind,
        'threshold_value': threshold.value,
    }

    return da_out


__all__ = [
    'IceWaterPathEstimator',
    'calculate_iwp',
    'ice_water_path',
    'ice_water_content',
    'area_divisor',
]
