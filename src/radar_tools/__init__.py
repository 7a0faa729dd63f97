"""
Radar Tools - Scientific Utilities for Radar Meteorology

A Python package of small, independent routines used when analyzing radar
reflectivity and related meteorological fields.

Main modules:
- ice: Ice water content and ice water path retrieval from reflectivity
- utils: Great-circle distance and month-name lookup
- constants: Physical constants and named defaults
- exceptions: Errors raised on invalid input

Typical workflow:
1. Load reflectivity and a co-located temperature (or height) field
2. Choose the ice/no-ice test (temperature threshold or melting level)
3. Compute ice water path with calculate_iwp (numpy) or ice_water_path (xarray)
4. Map or aggregate the resulting column values
"""

__version__ = "0.1.0"

# Import main functions for convenient access
from .ice import (
    VerticalThreshold,
    IceWaterPathEstimator,
    calculate_iwp,
    ice_water_path,
    ice_water_content,
    classify_ice_density,
)

from .utils import (
    great_circle_distance,
    month_to_number,
)

from .exceptions import (
    RadarToolsError,
    InvalidArgumentCount,
    ShapeMismatch,
    ScalarRequired,
    SizeMismatch,
    UnrecognizedMonth,
)

__all__ = [
    # Ice water path
    'VerticalThreshold',
    'IceWaterPathEstimator',
    'calculate_iwp',
    'ice_water_path',
    'ice_water_content',
    'classify_ice_density',

    # Utilities
    'great_circle_distance',
    'month_to_number',

    # Exceptions
    'RadarToolsError',
    'InvalidArgumentCount',
    'ShapeMismatch',
    'ScalarRequired',
    'SizeMismatch',
    'UnrecognizedMonth',
]
