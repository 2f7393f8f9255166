"""Structural statistics (RDF, CN, BAD) of periodic atomic cells."""

__version__ = "0.1.0"
__author__ = "Structure Statistics Team"
__description__ = "Radial distribution, coordination and bond-angle statistics of periodic cells"

from . import analysis, core, io, utils
from .analysis import AnalysisParameters, StructureAnalyzer
from .core import Cell, Lattice, Position

__all__ = [
    "analysis",
    "core",
    "io",
    "utils",
    "AnalysisParameters",
    "Cell",
    "Lattice",
    "Position",
    "StructureAnalyzer",
    "__version__",
    "__author__",
    "__description__",
]
