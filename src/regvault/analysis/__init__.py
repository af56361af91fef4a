"""Supplementary analysis over projections."""

from .validation import ProjectionValidation, validate_projections
from .breakeven import BreakEvenResult, calculate_break_even

__all__ = [
    "ProjectionValidation",
    "validate_projections",
    "BreakEvenResult",
    "calculate_break_even",
]
