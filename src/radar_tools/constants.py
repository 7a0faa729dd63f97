"""
Physical constants and named defaults

Every default used by radar_tools lives here so that callers can see (and
override through keyword arguments) the values a computation falls back to.
"""

# Mean Earth radius (km)
EARTH_MEAN_RADIUS = 6371.0

# Ice is assumed absent at temperatures warmer than this (deg C)
DEFAULT_TEMPERATURE_THRESHOLD = -10.0

# Air density (kg/m^3) used in the Z-IWC relation
AIR_DENSITY = 1.0

# Intercept parameter of the exponential ice size distribution (m^-4)
ICE_INTERCEPT = 4.0e6

# Scale applied to linear reflectivity before the 4/7 power
REFLECTIVITY_FACTOR = 5.68e-18 / 720.0

# (lower bound in dBZ, ice density in kg/m^3), sorted by lower bound.
# Reflectivity below the first bound is treated as ice-free.
DENSITY_BINS = (
    (18.0, 400.0),
    (30.0, 600.0),
    (35.0, 700.0),
    (40.0, 800.0),
)

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)


__all__ = [
    'EARTH_MEAN_RADIUS',
    'DEFAULT_TEMPERATURE_THRESHOLD',
    'AIR_DENSITY',
    'ICE_INTERCEPT',
    'REFLECTIVITY_FACTOR',
    'DENSITY_BINS',
    'MONTH_NAMES',
]
