"""
Vertical threshold for ice-bearing cells

The vertical-threshold field that accompanies reflectivity holds either
temperature or altitude. A VerticalThreshold states which one it is and the
value that separates ice-bearing cells from ice-free ones:

- temperature: cells warmer than the threshold are ice-free
- altitude: cells below the threshold (the melting level) are ice-free
"""

from dataclasses import dataclass
from typing import Literal, Optional, Union
import numpy as np
import numpy.typing as npt

from ..constants import DEFAULT_TEMPERATURE_THRESHOLD

ThresholdKind = Literal['temperature', 'altitude']


@dataclass(frozen=True)
class VerticalThreshold:
    """
    Threshold applied to the vertical-threshold field.

    Parameters
    ----------
    kind : {'temperature', 'altitude'}
        Meaning of the vertical-threshold field (deg C or meters)
    value : float
        Temperature threshold (deg C) or melting level (m)

    Examples
    --------
    >>> VerticalThreshold.temperature(-20.0)
    VerticalThreshold(kind='temperature', value=-20.0)
    >>> VerticalThreshold.altitude(4500.0).excludes(np.array([4000.0, 5000.0]))
    array([ True, False])
    """
    kind: ThresholdKind
    value: float

    def __post_init__(self) -> None:
        valid_kinds = ('temperature', 'altitude')
        if self.kind not in valid_kinds:
            raise ValueError(f"kind must be one of {valid_kinds}, got {self.kind!r}")
        object.__setattr__(self, 'value', float(self.value))

    @classmethod
    def temperature(cls, value: float = DEFAULT_TEMPERATURE_THRESHOLD) -> 'VerticalThreshold':
        """Temperature threshold in deg C; warmer cells hold no ice."""
        return cls('temperature', value)

    @classmethod
    def altitude(cls, value: float) -> 'VerticalThreshold':
        """Melting level in meters; lower cells hold no ice."""
        return cls('altitude', value)

    def excludes(self, field: npt.ArrayLike) -> npt.NDArray[np.bool_]:
        """Boolean mask, True where the cell is ice-free."""
        field = np.asarray(field, dtype=np.float64)
        if self.kind == 'temperature':
            return field > self.value
        return field < self.value


def resolve_threshold(
    threshold: Optional[Union[VerticalThreshold, float]] = None,
    temperature_threshold: Optional[float] = None,
    melting_level: Optional[float] = None,
) -> VerticalThreshold:
    """
    Build a VerticalThreshold from the keyword forms accepted by the IWP API.

    At most one of the three arguments may be given. A bare number passed as
    ``threshold`` is read as a temperature. With nothing given, the default
    temperature threshold applies.

    There is no precedence between the arguments: temperature_threshold
    together with melting_level is an error, not a temperature test.

    Raises
    ------
    ValueError
        If more than one threshold argument is supplied
    """
    supplied = [
        name for name, value in (
            ('threshold', threshold),
            ('temperature_threshold', temperature_threshold),
            ('melting_level', melting_level),
        )
        if value is not None
    ]
    if len(supplied) > 1:
        raise ValueError(
            f"Only one vertical threshold may be given, got {', '.join(supplied)}"
        )

    if isinstance(threshold, VerticalThreshold):
        return threshold
    if threshold is not None:
        return VerticalThreshold.temperature(threshold)
    if temperature_threshold is not None:
        return VerticalThreshold.temperature(temperature_threshold)
    if melting_level is not None:
        return VerticalThreshold.altitude(melting_level)
    return VerticalThreshold.temperature(DEFAULT_TEMPERATURE_THRESHOLD)


__all__ = [
    'VerticalThreshold',
    'resolve_threshold',
]
