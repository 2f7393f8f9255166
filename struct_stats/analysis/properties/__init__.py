"""Structural property calculators."""

from .bad import BondAngleDistribution
from .base import PropertyCalculator
from .bond_angles import AngleResult, compute_bond_angles
from .bonding import BondingResult, BondTable, build_bond_lengths, compute_bonding
from .cn import CoordinationNumber
from .coordination import CoordinationResult, compute_coordination
from .histograms import HistogramTable, bad_histogram, cn_histogram, rdf_histograms
from .rdf import RDF

__all__ = [
    "AngleResult",
    "BondAngleDistribution",
    "BondTable",
    "BondingResult",
    "CoordinationNumber",
    "CoordinationResult",
    "HistogramTable",
    "PropertyCalculator",
    "RDF",
    "bad_histogram",
    "build_bond_lengths",
    "cn_histogram",
    "compute_bond_angles",
    "compute_bonding",
    "compute_coordination",
    "rdf_histograms",
]
