from __future__ import annotations

from enum import Enum


class DomainErrorCause(Enum):
    NON_POSITIVE_DIFFUSE_HORIZONTAL = "non_positive_diffuse_horizontal"
    NEGATIVE_DIRECT_NORMAL = "negative_direct_normal"
    INVALID_LATITUDE = "invalid_latitude"
    INVALID_SUBDIVISION_FACTOR = "invalid_subdivision_factor"


class DomainError(ValueError):
    """Physically invalid input detected while building a sky or a subdivision."""

    def __init__(self, cause: DomainErrorCause, message: str):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.cause.value}] {self.args[0]}"
