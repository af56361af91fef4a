"""Regulatory capital requirement calculation."""

from .requirement import CapitalRequirement, CapitalRequirementCalculator, OngoingCapital

__all__ = [
    "CapitalRequirement",
    "CapitalRequirementCalculator",
    "OngoingCapital",
]
