"""Atoms, positions with an explicit coordinate frame, and bonded-neighbor records."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .geometry import angle, as_vector, distance


class Frame(Enum):
    """Coordinate frame of a position."""

    FRACTIONAL = "fractional"
    CARTESIAN = "cartesian"


@dataclass(frozen=True, eq=False)
class Position:
    """A coordinate triple tagged with the frame it is expressed in."""

    coords: np.ndarray
    frame: Frame = Frame.CARTESIAN

    def __post_init__(self):
        coords = as_vector(self.coords).copy()
        coords.flags.writeable = False
        object.__setattr__(self, "coords", coords)

    @classmethod
    def cartesian(cls, coords) -> "Position":
        return cls(coords, Frame.CARTESIAN)

    @classmethod
    def fractional(cls, coords) -> "Position":
        return cls(coords, Frame.FRACTIONAL)

    @property
    def is_cartesian(self) -> bool:
        return self.frame is Frame.CARTESIAN

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.frame is other.frame and bool(np.array_equal(self.coords, other.coords))

    def __repr__(self) -> str:
        x, y, z = self.coords
        return f"Position(({x:.6g}, {y:.6g}, {z:.6g}), {self.frame.value})"


@dataclass(frozen=True)
class AtomImage:
    """
    Snapshot of a bonded neighbor.

    Records which atom was bonded, its element index, the periodic image
    (integer lattice-vector offsets) that produced the bond, and the
    Cartesian position of that image.
    """

    atom_id: int
    element_index: int
    image: tuple[int, int, int]
    position: tuple[float, float, float]


@dataclass
class Atom:
    """
    An atom of a cell.

    Args:
        symbol: Element symbol
        atom_id: Unique identifier within the cell
        position: Position with its coordinate frame
        element_index: Index in the cell's element table (None until resolved)
        bonded: Bonded-neighbor records filled by the bonding engine
    """

    symbol: str
    atom_id: int
    position: Position
    element_index: int | None = None
    bonded: list[AtomImage] = field(default_factory=list)

    def _cartesian_coords(self) -> np.ndarray:
        if not self.position.is_cartesian:
            raise ValueError(
                f"Atom {self.atom_id} ({self.symbol}) holds a fractional position; "
                "convert it to Cartesian first"
            )
        return self.position.coords

    def distance(self, point) -> float:
        """Distance from this atom to a Cartesian point."""
        return distance(self._cartesian_coords(), point)

    def angle(self, first: AtomImage, second: AtomImage) -> float:
        """Angle in radians at this atom between two bonded neighbors."""
        return angle(self._cartesian_coords(), first.position, second.position)

    @property
    def coordination(self) -> int:
        """Number of bonded-neighbor records."""
        return len(self.bonded)
