from __future__ import annotations

import math

# Minimum cos(zeta) used by the Perez gradation term (directions at or below the horizon).
MIN_COS_ZETA = 0.01

# The Perez model treats the sun as never closer than 3 degrees to the zenith.
MIN_SUN_ZENITH = math.radians(3.0)
MAX_SUN_ZENITH = math.pi / 2.0

# Limits applied by Radiance's gendaymtx to the Perez indices.
MIN_SKY_BRIGHTNESS = 0.01
MAX_SKY_CLEARNESS = 11.9

# Below this relative integral the sky is treated as black.
MIN_NORMALISATION_INTEGRAL = 1e-4

# DH + DN below this (W/m2) is night-time for sky vectors.
NIGHT_IRRADIANCE = 1e-4

# Dew point (C) assumed by Radiance when none is known.
DEFAULT_DEW_POINT = 11.0
