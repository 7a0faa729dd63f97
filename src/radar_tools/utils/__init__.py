"""
Utility Functions Module

This module provides small helpers that accompany radar analysis:
distances between observation sites and month-name parsing.

Main functions:
- great_circle_distance: Compute distance on a sphere from one point to many
- month_to_number: Convert month names to two-digit month numbers
"""

from .distance import (
    great_circle_distance,
)
from .dates import (
    month_to_number,
)

__all__ = [
    'great_circle_distance',
    'month_to_number',
]
