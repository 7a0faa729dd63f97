"""
Ice Water Path Workflow Example

This script demonstrates how to retrieve ice water path from a gridded
reflectivity volume using radar_tools.

Workflow:
1. Build a synthetic convective cell (reflectivity, temperature, height)
2. Compute ice water path with a temperature threshold
3. Compute ice water path with a melting level instead
4. Repeat with labelled xarray fields
5. Measure distance from the radar to the IWP maximum
6. Plot the results
"""

import numpy as np
import xarray as xr
import matplotlib.pyplot as plt
import radar_tools as rt

# =============================================================================
# Configuration
# =============================================================================

NX, NY, NZ = 80, 60, 30
DX = 1000.0             # Horizontal grid spacing (m)
DZ = 500.0              # Vertical grid spacing (m)
MELTING_LEVEL = 4500.0  # Melting level (m)
RADAR_LAT, RADAR_LON = 35.33, -97.28
SCAN_DATE = 'Jun 21 2024'

# =============================================================================
# Step 1: Synthetic Reflectivity Volume
# =============================================================================

print("Building synthetic reflectivity volume...")
x = (np.arange(NX) - NX / 2) * DX
y = (np.arange(NY) - NY / 2) * DX
z = np.arange(NZ) * DZ

yy, xx, zz = np.meshgrid(y, x, z, indexing='ij')   # (y, x, z)
r = np.sqrt(xx**2 + yy**2)

# Gaussian cell peaking at 50 dBZ near 6 km
dbz = 50.0 * np.exp(-(r / 12000.0)**2) * np.exp(-((zz - 6000.0) / 4000.0)**2)
dbz[dbz < 5.0] = np.nan

# Standard lapse rate from 25 deg C at the surface
temperature = 25.0 - 6.5e-3 * zz

print(f"Reflectivity range: {np.nanmin(dbz):.1f} - {np.nanmax(dbz):.1f} dBZ")

# =============================================================================
# Step 2: IWP with a Temperature Threshold
# =============================================================================

print("Computing IWP (cells colder than -10 deg C)...")
iwp_temp = rt.calculate_iwp(dbz, temperature, DZ)
print(f"  Max IWP: {np.max(iwp_temp):.1f} g/m^2")

# =============================================================================
# Step 3: IWP with a Melting Level
# =============================================================================

print(f"Computing IWP (cells above {MELTING_LEVEL:.0f} m)...")
estimator = rt.IceWaterPathEstimator(threshold=rt.VerticalThreshold.altitude(MELTING_LEVEL))
iwp_ml = estimator.estimate(dbz, zz, DZ)
print(f"  Max IWP: {np.max(iwp_ml):.1f} g/m^2")

# =============================================================================
# Step 4: Labelled Fields
# =============================================================================

print("Computing IWP from xarray fields...")
coords = {'yc': y, 'xc': x, 'lev': z}
da_dbz = xr.DataArray(dbz, coords=coords, dims=('yc', 'xc', 'lev'))
da_temp = xr.DataArray(temperature, coords=coords, dims=('yc', 'xc', 'lev'))
dz = xr.DataArray(np.full(NZ, DZ), coords={'lev': z}, dims=('lev',))

iwp_da = rt.ice_water_path(da_dbz, da_temp, dz, dim='lev')
print(f"  Output dimensions: {iwp_da.dims}")

# =============================================================================
# Step 5: Distance from the Radar
# =============================================================================

# Rough lat/lon grid around the radar
lat = RADAR_LAT + y / 111195.0
lon = RADAR_LON + x / (111195.0 * np.cos(np.radians(RADAR_LAT)))
j, i = np.unravel_index(np.argmax(iwp_temp), iwp_temp.shape)

distance = rt.great_circle_distance(RADAR_LAT, RADAR_LON, lat[j], lon[i])
month = rt.month_to_number(SCAN_DATE.split()[0], length=3, ignore_case=True)
print(f"IWP maximum is {distance:.1f} km from the radar (scan month {month})")

# =============================================================================
# Step 6: Visualization
# =============================================================================

print("\nCreating visualizations...")

fig, axes = plt.subplots(1, 2, figsize=(12, 5))

ax = axes[0]
pcm = ax.pcolormesh(x / 1000, y / 1000, iwp_temp, cmap='Blues')
plt.colorbar(pcm, ax=ax, label='IWP (g/m$^2$)')
ax.set_xlabel('x (km)')
ax.set_ylabel('y (km)')
ax.set_title('IWP, T < -10$^\\circ$C')

ax = axes[1]
pcm = ax.pcolormesh(x / 1000, y / 1000, iwp_ml, cmap='Blues')
plt.colorbar(pcm, ax=ax, label='IWP (g/m$^2$)')
ax.set_xlabel('x (km)')
ax.set_ylabel('y (km)')
ax.set_title(f'IWP, z > {MELTING_LEVEL / 1000:.1f} km')

plt.tight_layout()
plt.savefig('iwp_analysis.png', dpi=150, bbox_inches='tight')
print("Saved figure: iwp_analysis.png")

plt.show()

print("\nAnalysis complete!")
