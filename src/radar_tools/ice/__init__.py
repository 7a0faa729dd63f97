"""
Ice Water Path Module

This module retrieves ice water content from radar reflectivity and
integrates it over the vertical dimension to obtain ice water path.

Main functions:
- calculate_iwp: Ice water path from reflectivity, temperature/altitude and layer depth
- ice_water_path: Same retrieval for labelled xarray fields
- IceWaterPathEstimator: Reusable retrieval with fixed options
- VerticalThreshold: Temperature or melting-level test for ice-bearing cells
- classify_ice_density: Reflectivity to ice density lookup
- ice_water_content: Reflectivity and density to ice water content
"""

from .threshold import (
    VerticalThreshold,
    resolve_threshold,
)
from .density import (
    classify_ice_density,
    apply_vertical_threshold,
)
from .iwp import (
    IceWaterPathEstimator,
    calculate_iwp,
    ice_water_path,
    ice_water_content,
    area_divisor,
)

__all__ = [
    # Threshold
    'VerticalThreshold',
    'resolve_threshold',
    # Density classification
    'classify_ice_density',
    'apply_vertical_threshold',
    # Retrieval
    'IceWaterPathEstimator',
    'calculate_iwp',
    'ice_water_path',
    'ice_water_content',
    'area_divisor',
]
