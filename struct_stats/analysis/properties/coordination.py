"""Coordination counting from bonded-neighbor records."""

from dataclasses import dataclass

import numpy as np

from ...core.elements import ElementTable
from .bonding import BondingResult


@dataclass
class CoordinationResult:
    """
    Coordination tallies.

    Attributes:
        elements: Element table the indices refer to
        counts: (n, n, m) integer tensor; ``counts[c][e][k]`` is the number of
            atoms of element ``c`` with exactly ``k`` bonded neighbors of element ``e``
        per_atom: (N, n) neighbor counts per atom and neighbor element
    """

    elements: ElementTable
    counts: np.ndarray
    per_atom: np.ndarray

    @property
    def max_count(self) -> int:
        """Highest coordination bucket index."""
        return self.counts.shape[2] - 1

    def distribution(self, center: str, neighbor: str) -> np.ndarray:
        """Counts per coordination value for a (center, neighbor) element pair."""
        return self.counts[self.elements.index(center), self.elements.index(neighbor)]


def compute_coordination(bonding: BondingResult) -> CoordinationResult:
    """
    Tally bonded neighbors per element for every atom.

    The last axis runs from 0 to (largest bonded-list length + 1), one
    bucket of headroom above the maximum.

    Args:
        bonding: Result of a bonding pass

    Returns:
        CoordinationResult with the (center, neighbor, count) tensor
    """
    n = len(bonding.elements)
    max_cn = max((len(records) for records in bonding.neighbors), default=0)
    m = max_cn + 2

    counts = np.zeros((n, n, m), dtype=int)
    per_atom = np.zeros((bonding.n_atoms, n), dtype=int)

    for row, records in enumerate(bonding.neighbors):
        for record in records:
            per_atom[row, record.element_index] += 1
        center = bonding.center_elements[row]
        for element in range(n):
            counts[center, element, per_atom[row, element]] += 1

    return CoordinationResult(elements=bonding.elements, counts=counts, per_atom=per_atom)
