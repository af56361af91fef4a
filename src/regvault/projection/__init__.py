"""Revenue, cost and statement projection."""

from .revenue import RevenueProjector
from .costs import CostProjector
from .statements import StatementDeriver
from .volumes import VolumeEstimator

__all__ = [
    "RevenueProjector",
    "CostProjector",
    "StatementDeriver",
    "VolumeEstimator",
]
