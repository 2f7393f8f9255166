"""Periodic cell: a lattice plus the atoms it contains."""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import numpy as np

from .atom import Atom, Frame, Position
from .elements import ElementTable
from .lattice import Lattice

if TYPE_CHECKING:
    from ase import Atoms


class Cell:
    """
    A single static configuration of atoms in a periodic lattice.

    Atom positions carry their own coordinate frame, so a cell may hold a
    mix of fractional and Cartesian positions until one of the conversion
    passes is run.

    Args:
        lattice: Lattice of the cell (defaults to a unit cube)
        atoms: Optional (symbol, position) pairs to add in order
    """

    def __init__(
        self,
        lattice: Lattice | None = None,
        atoms: Iterable[tuple[str, Position]] | None = None,
    ):
        self.lattice = lattice or Lattice()
        self.atoms: list[Atom] = []
        self._next_id = 0
        for symbol, position in atoms or ():
            self.add_atom(symbol, position)

    @classmethod
    def from_ase(cls, atoms: "Atoms") -> "Cell":
        """
        Build a cell from an ASE Atoms object.

        The lattice is rebuilt from the shape of ``atoms.cell`` in the
        standard orientation, so positions are passed as fractional
        coordinates of the original cell to keep them consistent with it.
        """
        lattice = Lattice.from_matrix(np.asarray(atoms.cell))
        scaled = atoms.get_scaled_positions(wrap=False)
        cell = cls(lattice)
        for symbol, coords in zip(atoms.get_chemical_symbols(), scaled, strict=True):
            cell.add_atom(symbol, coords, frame=Frame.FRACTIONAL)
        return cell

    def add_atom(
        self,
        symbol: str,
        position: Position | Iterable[float],
        frame: Frame = Frame.CARTESIAN,
    ) -> Atom:
        """
        Append an atom with the next free identifier.

        Args:
            symbol: Element symbol
            position: A Position, or a coordinate triple interpreted in ``frame``
            frame: Frame of a raw coordinate triple (ignored for Position)

        Returns:
            The new Atom
        """
        if not isinstance(position, Position):
            position = Position(position, frame)
        atom = Atom(symbol=symbol, atom_id=self._next_id, position=position)
        self._next_id += 1
        self.atoms.append(atom)
        return atom

    @property
    def element_table(self) -> ElementTable:
        """Element symbols in order of first appearance."""
        return ElementTable.from_symbols(atom.symbol for atom in self.atoms)

    def assign_element_indices(self, elements: ElementTable | None = None) -> ElementTable:
        """Resolve every atom's element index and return the table used."""
        elements = elements if elements is not None else self.element_table
        for atom in self.atoms:
            atom.element_index = elements.index(atom.symbol)
        return elements

    def fold_into_cell(self) -> "Cell":
        """Fold every atom into the primary cell (positions become Cartesian)."""
        for atom in self.atoms:
            atom.position = self.lattice.fold(atom.position)
        return self

    def fractional_to_cartesian(self) -> "Cell":
        """Convert every fractional position to Cartesian."""
        for atom in self.atoms:
            atom.position = self.lattice.to_cartesian(atom.position)
        return self

    def clear_bonds(self) -> None:
        """Drop every atom's bonded-neighbor records."""
        for atom in self.atoms:
            atom.bonded = []

    def cartesian_positions(self) -> np.ndarray:
        """Cartesian positions of all atoms as an (N, 3) array."""
        if not self.atoms:
            return np.zeros((0, 3))
        return np.array([self.lattice.to_cartesian(atom.position).coords for atom in self.atoms])

    @property
    def n_atoms(self) -> int:
        return len(self.atoms)

    @property
    def volume(self) -> float:
        return self.lattice.volume

    @property
    def number_density(self) -> float:
        """Atoms per cubic Angstrom (0.0 for an empty cell)."""
        if not self.atoms:
            return 0.0
        return self.n_atoms / self.lattice.volume

    def count_elements(self) -> dict[str, int]:
        """Number of atoms per element symbol."""
        counts: dict[str, int] = {}
        for atom in self.atoms:
            counts[atom.symbol] = counts.get(atom.symbol, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)

    def __repr__(self) -> str:
        return f"Cell({self.lattice!r}, n_atoms={self.n_atoms})"
