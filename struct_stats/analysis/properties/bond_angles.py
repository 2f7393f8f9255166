"""Bond-angle aggregation over bonded-neighbor pairs."""

from dataclasses import dataclass

import numpy as np

from ...core.elements import ElementTable
from ...core.geometry import RAD2DEG
from .bonding import BondingResult

# Bond vectors at most this long (Angstroms) have no direction
ZERO_LENGTH = 1e-10


@dataclass
class AngleResult:
    """
    Raw bond angles.

    ``angles[x][c][y]`` holds the angles at a center of element ``c``
    between a first neighbor of element ``x`` and a second of element ``y``.
    ``n_skipped`` counts bonded images of multiply bonded centers that
    coincide with the center and so take part in no angle.
    """

    elements: ElementTable
    angles: list[list[list[np.ndarray]]]
    degrees: bool
    n_skipped: int = 0

    def triple(self, first: str, center: str, second: str) -> np.ndarray:
        index = self.elements.index
        return self.angles[index(first)][index(center)][index(second)]


def compute_bond_angles(bonding: BondingResult, degrees: bool = True) -> AngleResult:
    """
    Angles at every atom between each ordered pair of its bonded neighbors.

    Pairs are taken over distinct entries of the bonded list, so (X, Y) and
    (Y, X) are both recorded, and two images of the same neighbor atom
    still form an angle.

    Args:
        bonding: Result of a bonding pass
        degrees: Report angles in degrees instead of radians

    Returns:
        AngleResult with the (neighbor, center, neighbor) tensor
    """
    n = len(bonding.elements)
    factor = RAD2DEG if degrees else 1.0
    n_skipped = 0
    buckets: list[list[list[list[np.ndarray]]]] = [
        [[[] for _ in range(n)] for _ in range(n)] for _ in range(n)
    ]

    for row, records in enumerate(bonding.neighbors):
        if len(records) < 2:
            continue

        bonds = np.array([record.position for record in records]) - bonding.positions[row]
        norms = np.linalg.norm(bonds, axis=1)
        overlapping = norms <= ZERO_LENGTH
        if overlapping.any():
            n_skipped += int(overlapping.sum())
            records = [record for record, skip in zip(records, overlapping, strict=True) if not skip]
            bonds, norms = bonds[~overlapping], norms[~overlapping]
            if len(records) < 2:
                continue

        center = bonding.center_elements[row]
        units = bonds / norms[:, None]
        theta = np.arccos(np.clip(units @ units.T, -1.0, 1.0)) * factor

        neighbor_elements = np.array([record.element_index for record in records], dtype=int)
        off_diagonal = ~np.eye(len(records), dtype=bool)
        for x_element in np.unique(neighbor_elements):
            for y_element in np.unique(neighbor_elements):
                mask = (
                    (neighbor_elements[:, None] == x_element)
                    & (neighbor_elements[None, :] == y_element)
                    & off_diagonal
                )
                if mask.any():
                    buckets[x_element][center][y_element].append(theta[mask])

    angles = [
        [[np.concatenate(bucket) if bucket else np.zeros(0) for bucket in column] for column in plane]
        for plane in buckets
    ]
    return AngleResult(elements=bonding.elements, angles=angles, degrees=degrees, n_skipped=n_skipped)
