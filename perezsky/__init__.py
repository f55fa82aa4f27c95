"""
Perezsky

Sun position, Perez all-weather sky distributions and Reinhart sky
subdivisions for daylight-coefficient simulation.
"""

from loguru import logger

from perezsky.calendar import SkyDate
from perezsky.errors import DomainError, DomainErrorCause
from perezsky.geometry import Vector3
from perezsky.perez import (
    PerezParameters,
    SkyFunction,
    build_sky_function,
    perez_parameters,
    precipitable_water_content,
    sky_brightness,
    sky_clearness,
)
from perezsky.perez_coefficients import SkyUnits
from perezsky.sky_vector import (
    SkyVectorOptions,
    build_sky_vector,
    gen_sky_vector,
    sky_vector_index,
    update_sky_vector,
)
from perezsky.solar import Location, Solar, SolarPosition, sun_position
from perezsky.subdivision import SkyPatch, SkySubdivision, build_subdivision, patch_count

logger.disable("perezsky")

__version__ = "0.1.0"

__all__ = [
    "DomainError",
    "DomainErrorCause",
    "Location",
    "PerezParameters",
    "SkyDate",
    "SkyFunction",
    "SkyPatch",
    "SkySubdivision",
    "SkyUnits",
    "SkyVectorOptions",
    "Solar",
    "SolarPosition",
    "Vector3",
    "build_sky_function",
    "build_sky_vector",
    "build_subdivision",
    "gen_sky_vector",
    "patch_count",
    "perez_parameters",
    "precipitable_water_content",
    "sky_brightness",
    "sky_clearness",
    "sky_vector_index",
    "sun_position",
    "update_sky_vector",
]
