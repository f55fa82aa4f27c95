"""
Direction vectors.

Local frame used across the package: X points East, Y points North and
Z points up.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """3D vector for directions in the local East/North/Up frame."""
    x: float
    y: float
    z: float

    def __truediv__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: 'Vector3') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> 'Vector3':
        """Return unit vector."""
        L = self.length()
        if L < 1e-10:
            return Vector3(0, 0, 1)
        return self / L

    def azimuth(self) -> float:
        """Clockwise angle from North (+Y) of the horizontal projection, in [0, 2*pi)."""
        a = math.atan2(self.x, self.y)
        if a < 0.0:
            a += 2.0 * math.pi
        return a

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y, self.z])

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_array(arr: np.ndarray) -> 'Vector3':
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def from_altitude_azimuth(altitude: float, azimuth: float) -> 'Vector3':
        """Unit vector from altitude above the horizon and azimuth clockwise from North."""
        cos_alt = math.cos(altitude)
        return Vector3(math.sin(azimuth) * cos_alt, math.cos(azimuth) * cos_alt, math.sin(altitude))

    @staticmethod
    def up() -> 'Vector3':
        return Vector3(0.0, 0.0, 1.0)

    @staticmethod
    def down() -> 'Vector3':
        return Vector3(0.0, 0.0, -1.0)
