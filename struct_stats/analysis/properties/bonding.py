"""Bond-length table and the pairwise distance / bonding engine."""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from ...core.atom import AtomImage
from ...core.cell import Cell
from ...core.elements import ElementTable, covalent_radius


@dataclass
class BondTable:
    """Maximum bonded distance for every pair of elements."""

    elements: ElementTable
    lengths: np.ndarray  # (n, n), symmetric

    def length(self, first: str, second: str) -> float:
        return float(self.lengths[self.elements.index(first), self.elements.index(second)])


@dataclass
class BondingResult:
    """
    Output of one bonding pass over a cell.

    Attributes:
        elements: Element table the indices refer to
        bond_lengths: Bond-length matrix used for classification
        distances: n x n nested lists of raw distance samples; only the
            ``i <= j`` half is populated, the other half holds empty arrays
        neighbors: Bonded-neighbor records per atom, in cell order
        center_elements: Element index of every atom, in cell order
        positions: Folded Cartesian positions of every atom, in cell order
        cutoff: Cutoff radius the images were enumerated for
        replication: Number of images per axis (n_a, n_b, n_c)
        n_atoms: Number of atoms in the cell
        volume: Cell volume
    """

    elements: ElementTable
    bond_lengths: np.ndarray
    distances: list[list[np.ndarray]]
    neighbors: list[list[AtomImage]]
    center_elements: np.ndarray
    positions: np.ndarray
    cutoff: float
    replication: tuple[int, int, int]
    n_atoms: int
    volume: float
    bond_factor: float = 1.0

    def pair_distances(self, first: str, second: str) -> np.ndarray:
        """Raw distance samples of an element pair, in either order."""
        i, j = self.elements.index(first), self.elements.index(second)
        return self.distances[min(i, j)][max(i, j)]

    @property
    def n_bonds(self) -> int:
        """Total number of bonded-neighbor records (each bond counted from both ends)."""
        return sum(len(records) for records in self.neighbors)


def build_bond_lengths(
    cell: Cell,
    bond_factor: float,
    radii: Mapping[str, float] | None = None,
) -> BondTable:
    """
    Resolve element indices and compute the bond-length matrix.

    ``lengths[i][j] = (r_i + r_j) * bond_factor`` with ``r`` the covalent
    radius of each element.

    Args:
        cell: Cell whose atoms define the element table
        bond_factor: Scale applied to the summed covalent radii
        radii: Optional covalent radius overrides by symbol

    Returns:
        BondTable for the cell's elements

    Raises:
        UnknownElementError: If an element has no covalent radius
    """
    elements = cell.assign_element_indices()
    radius = np.array([covalent_radius(symbol, radii) for symbol in elements], dtype=float)
    lengths = (radius[:, None] + radius[None, :]) * bond_factor
    return BondTable(elements=elements, lengths=lengths)


def compute_bonding(
    cell: Cell,
    cutoff: float,
    bond_factor: float,
    radii: Mapping[str, float] | None = None,
) -> BondingResult:
    """
    Enumerate periodic images, record pair distances and detect bonds.

    Every ordered pair of distinct atoms (A, B) is visited, so each
    physical pair is seen twice. For each pair, every image of B within
    the replication range is measured from A. The distance goes into the
    ``[e_A][e_B]`` bucket when ``e_A <= e_B``, and the image is appended to
    A's bonded list when the distance does not exceed the bond length.
    Images of an atom with itself are never considered, and several images
    of the same neighbor may all be bonded.

    The cell is modified in place: positions are folded into the primary
    cell (and become Cartesian) and every atom's bonded list is rebuilt.

    Args:
        cell: Cell to analyse
        cutoff: Radius the image enumeration has to cover
        bond_factor: Scale applied to the summed covalent radii
        radii: Optional covalent radius overrides by symbol

    Returns:
        BondingResult with distances and bonded neighbors
    """
    if cutoff <= 0:
        raise ValueError(f"Cutoff radius ({cutoff}) must be positive")

    table = build_bond_lengths(cell, bond_factor, radii)
    n = len(table.elements)

    cell.clear_bonds()
    cell.fold_into_cell()

    replication = cell.lattice.replication_counts(cutoff)
    offsets, shifts = cell.lattice.image_offsets(replication)

    positions = cell.cartesian_positions()
    atom_ids = np.array([atom.atom_id for atom in cell.atoms], dtype=int)
    element_ids = np.array([atom.element_index for atom in cell.atoms], dtype=int)

    buckets: list[list[list[np.ndarray]]] = [[[] for _ in range(n)] for _ in range(n)]

    for row, atom in enumerate(cell.atoms):
        others = np.flatnonzero(atom_ids != atom.atom_id)
        if others.size == 0:
            continue

        # images[b, m] is atom others[b] shifted by image m
        images = positions[others, None, :] + shifts[None, :, :]
        dists = np.linalg.norm(images - positions[row], axis=2)

        e_a = atom.element_index
        other_elements = element_ids[others]
        for e_b in range(e_a, n):
            mask = other_elements == e_b
            if mask.any():
                buckets[e_a][e_b].append(dists[mask].ravel())

        thresholds = table.lengths[e_a, other_elements]
        # nonzero walks row-major: neighbor order first, then image order
        bonded_rows, bonded_images = np.nonzero(dists <= thresholds[:, None])
        for b, m in zip(bonded_rows, bonded_images, strict=True):
            other = cell.atoms[others[b]]
            atom.bonded.append(
                AtomImage(
                    atom_id=other.atom_id,
                    element_index=other.element_index,
                    image=tuple(int(x) for x in offsets[m]),
                    position=tuple(float(x) for x in images[b, m]),
                )
            )

    distances = [
        [np.concatenate(bucket) if bucket else np.zeros(0) for bucket in row] for row in buckets
    ]

    return BondingResult(
        elements=table.elements,
        bond_lengths=table.lengths,
        distances=distances,
        neighbors=[list(atom.bonded) for atom in cell.atoms],
        center_elements=element_ids,
        positions=positions,
        cutoff=float(cutoff),
        replication=replication,
        n_atoms=cell.n_atoms,
        volume=cell.volume,
        bond_factor=float(bond_factor),
    )
