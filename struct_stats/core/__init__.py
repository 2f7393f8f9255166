"""Geometric model of a periodic cell."""

from .atom import Atom, AtomImage, Frame, Position
from .cell import Cell
from .elements import ElementTable, UnknownElementError, covalent_radius
from .lattice import FOLD_TOLERANCE, InvalidLatticeError, Lattice, cell_index

__all__ = [
    "Atom",
    "AtomImage",
    "Cell",
    "ElementTable",
    "FOLD_TOLERANCE",
    "Frame",
    "InvalidLatticeError",
    "Lattice",
    "Position",
    "UnknownElementError",
    "cell_index",
    "covalent_radius",
]
