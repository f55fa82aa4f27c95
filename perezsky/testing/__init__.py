"""Validation helpers shared by the test suite."""

from perezsky.testing.reference import (
    ReferenceCase,
    ReferenceReport,
    error_metrics,
    evaluate_case,
    load_reference_cases,
    run_reference,
)

__all__ = [
    "ReferenceCase",
    "ReferenceReport",
    "error_metrics",
    "evaluate_case",
    "load_reference_cases",
    "run_reference",
]
