"""
Perez Coefficient Tables

Static data for the Perez all-weather sky model:

- Perez, R., Ineichen, P., Seals, R., Michalsky, J. and Stewart, R. (1990),
  "Modeling daylight availability and irradiance components from direct and
  global irradiance" (luminous efficacy, Table 4).
- Perez, R., Seals, R. and Michalsky, J. (1993), "All-weather model for sky
  luminance distribution" (parameters a..e), as tabulated in Radiance's
  gendaymtx.c.

Bins are 0-based here (bin 0 is the overcast category 1.000 <= eps < 1.065).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Tuple

import numpy as np


class SkyUnits(Enum):
    """Quantity produced by a sky: solar radiance or visible radiance."""
    SOLAR = "solar"
    VISIBLE = "visible"


N_BINS = 8

# Upper clearness limit of bins 0..6; bin 7 is open-ended.
CLEARNESS_BIN_LIMITS: Tuple[float, ...] = (1.065, 1.230, 1.500, 1.950, 2.800, 4.500, 6.200)

# lm/W used by Radiance to move between radiometric and photometric units.
WHITE_EFFICACY = 179.0

# PEREZ_COEFFICIENTS[bin][parameter][term]; parameters are a, b, c, d, e.
PEREZ_COEFFICIENTS: Tuple[Tuple[Tuple[float, float, float, float], ...], ...] = (
    # 1.000 <= eps < 1.065
    (
        (1.3525, -0.2576, -0.2690, -1.4366),
        (-0.7670, 0.0007, 1.2734, -0.1233),
        (2.8000, 0.6004, 1.2375, 1.0000),
        (1.8734, 0.6297, 0.9738, 0.2809),
        (0.0356, -0.1246, -0.5718, 0.9938),
    ),
    # 1.065 <= eps < 1.230
    (
        (-1.2219, -0.7730, 1.4148, 1.1016),
        (-0.2054, 0.0367, -3.9128, 0.9156),
        (6.9750, 0.1774, 6.4477, -0.1239),
        (-1.5798, -0.5081, -1.7812, 0.1080),
        (0.2624, 0.0672, -0.2190, -0.4285),
    ),
    # 1.230 <= eps < 1.500
    (
        (-1.1000, -0.2515, 0.8952, 0.0156),
        (0.2782, -0.1812, -4.5000, 1.1766),
        (24.7219, -13.0812, -37.7000, 34.8438),
        (-5.0000, 1.5218, 3.9229, -2.6204),
        (-0.0156, 0.1597, 0.4199, -0.5562),
    ),
    # 1.500 <= eps < 1.950
    (
        (-0.5484, -0.6654, -0.2672, 0.7117),
        (0.7234, -0.6219, -5.6812, 2.6297),
        (33.3389, -18.3000, -62.2500, 52.0781),
        (-3.5000, 0.0016, 1.1477, 0.1062),
        (0.4659, -0.3296, -0.0876, -0.0329),
    ),
    # 1.950 <= eps < 2.800
    (
        (-0.6000, -0.3566, -2.5000, 2.3250),
        (0.2937, 0.0496, -5.6812, 1.8415),
        (21.0000, -4.7656, -21.5906, 7.2492),
        (-3.5000, -0.1554, 1.4062, 0.3988),
        (0.0032, 0.0766, -0.0656, -0.1294),
    ),
    # 2.800 <= eps < 4.500
    (
        (-1.0156, -0.3670, 1.0078, 1.4051),
        (0.2875, -0.5328, -3.8500, 3.3750),
        (14.0000, -0.9999, -7.1406, 7.5469),
        (-3.4000, -0.1078, -1.0750, 1.5702),
        (-0.0672, 0.4016, 0.3017, -0.4844),
    ),
    # 4.500 <= eps < 6.200
    (
        (-1.0000, 0.0211, 0.5025, -0.5119),
        (-0.3000, 0.1922, 0.7023, -1.6317),
        (19.0000, -5.0000, 1.2438, -1.9094),
        (-4.0000, 0.0250, 0.3844, 0.2656),
        (1.0468, -0.3788, -2.4517, 1.4656),
    ),
    # 6.200 <= eps
    (
        (-1.0500, 0.0289, 0.4260, 0.3590),
        (-0.3250, 0.1156, 0.7781, 0.0025),
        (31.0625, -14.5000, -46.1148, 55.3750),
        (-7.2312, 0.4050, 13.3500, 0.6234),
        (1.5000, -0.6426, 1.8564, 0.5636),
    ),
)

# Diffuse luminous efficacy, Equation 7 / Table 4 (1990): a + b*W + c*cos(Z) + d*ln(delta)
DIFFUSE_EFFICACY: Tuple[Tuple[float, float, float, float], ...] = (
    (97.24, -0.46, 12.00, -8.91),
    (107.22, 1.15, 0.59, -3.95),
    (104.97, 2.96, -5.53, -8.77),
    (102.39, 5.59, -13.95, -13.90),
    (100.71, 5.94, -22.75, -23.74),
    (106.42, 3.83, -36.15, -28.83),
    (141.88, 1.90, -53.24, -14.03),
    (152.23, 0.35, -45.27, -7.98),
)

# Direct luminous efficacy, Equation 8 / Table 4 (1990): a + b*W + c*exp(5.73*Z - 5) + d*delta
DIRECT_EFFICACY: Tuple[Tuple[float, float, float, float], ...] = (
    (57.20, -4.55, -2.98, 117.12),
    (98.99, -3.46, -1.21, 12.38),
    (109.83, -4.90, -1.71, -8.81),
    (110.34, -5.84, -1.99, -4.56),
    (106.36, -3.97, -1.75, -6.16),
    (107.19, -1.25, -1.51, -26.73),
    (105.75, 0.77, -1.26, -34.44),
    (101.18, 1.58, -1.10, -8.29),
)

_LIMITS = np.asarray(CLEARNESS_BIN_LIMITS, dtype=float)


def clearness_bin(epsilon: float) -> int:
    """0-based clearness category; values outside the tabulated range fall in the first or last bin."""
    if math.isnan(epsilon):
        return 0
    return int(np.searchsorted(_LIMITS, epsilon, side="right"))


def _check_bin(index: int) -> None:
    if not 0 <= index < N_BINS:
        raise IndexError(f"Perez tables have {N_BINS} clearness bins (0-based), got {index}")


def diffuse_efficacy(
    units: SkyUnits,
    index: int,
    precipitable_water: float,
    cos_zenith: float,
    sky_brightness: float,
) -> float:
    """Diffuse-horizontal efficacy (lm/W) for the selected units."""
    if units is SkyUnits.SOLAR:
        return WHITE_EFFICACY
    _check_bin(index)
    a, b, c, d = DIFFUSE_EFFICACY[index]
    return a + b * precipitable_water + c * cos_zenith + d * math.log(sky_brightness)


def direct_efficacy(
    units: SkyUnits,
    index: int,
    precipitable_water: float,
    zenith: float,
    sky_brightness: float,
) -> float:
    """Direct-normal efficacy (lm/W) for the selected units. Never negative."""
    if units is SkyUnits.SOLAR:
        return WHITE_EFFICACY
    _check_bin(index)
    a, b, c, d = DIRECT_EFFICACY[index]
    v = a + b * precipitable_water + c * math.exp(5.73 * zenith - 5.0) + d * sky_brightness
    return max(0.0, v)
