"""Structural statistics of periodic cells.

This module computes, for a single static configuration:
- Radial distribution functions J(r) and g(r) per element pair
- Coordination number distributions per (center, neighbor) pair
- Bond-angle distributions per (neighbor, center, neighbor) triple
"""

from .analyzer import StructureAnalyzer
from .input_parameters import AnalysisParameters
from .properties import RDF, BondAngleDistribution, CoordinationNumber

__all__ = [
    "AnalysisParameters",
    "BondAngleDistribution",
    "CoordinationNumber",
    "RDF",
    "StructureAnalyzer",
]
