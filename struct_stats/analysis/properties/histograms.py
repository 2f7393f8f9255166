"""Binning of raw distance, coordination and angle samples into tables."""

import math
from dataclasses import dataclass

import numpy as np

from .bond_angles import AngleResult
from .bonding import BondingResult
from .coordination import CoordinationResult

# Angle histograms always span 0..180 bins
BAD_ROWS = 181


@dataclass
class HistogramTable:
    """
    Dense histogram with a leading axis column.

    Attributes:
        axis_label: Name of the axis column ("r", "#", "theta")
        axis: Axis value of every row
        labels: Column names, e.g. "Si-O" or "O-Si-O"
        values: (n_rows, n_columns) array of bin values
    """

    axis_label: str
    axis: np.ndarray
    labels: list[str]
    values: np.ndarray

    def column(self, label: str) -> np.ndarray:
        try:
            return self.values[:, self.labels.index(label)]
        except ValueError:
            raise KeyError(f"No column '{label}', available: {self.labels}") from None

    @property
    def n_rows(self) -> int:
        return len(self.axis)

    def to_dict(self) -> dict:
        return {
            "axis_label": self.axis_label,
            "axis": self.axis.tolist(),
            "columns": {label: self.values[:, i].tolist() for i, label in enumerate(self.labels)},
        }


def _bin_samples(samples: np.ndarray, bin_width: float, n_rows: int) -> np.ndarray:
    """Count samples per bin ``floor(x / bin_width)``; samples past the last bin are dropped."""
    samples = samples[np.isfinite(samples)]
    rows = np.floor(samples / bin_width).astype(int)
    rows = rows[(rows >= 0) & (rows < n_rows)]
    return np.bincount(rows, minlength=n_rows).astype(float)


def rdf_histograms(bonding: BondingResult, bin_width: float) -> tuple[HistogramTable, HistogramTable]:
    """
    Pair-distance histograms J(r) and g(r).

    One column per unordered element pair (i <= j). Off-diagonal pairs
    count every sample twice, standing in for the unpopulated (j, i)
    bucket. J(r) is the count divided by ``N * bin_width`` and g(r) is
    J(r) / (4 pi rho0 r^2) with rho0 = N / V. The r = 0 row is left
    out of the g(r) rescale and keeps its J(r) value.

    Args:
        bonding: Result of a bonding pass
        bin_width: Width of a distance bin in Angstroms

    Returns:
        Tuple of (J table, g table)
    """
    if bin_width <= 0:
        raise ValueError(f"RDF bin width ({bin_width}) must be positive")

    elements = bonding.elements
    n = len(elements)
    n_rows = math.ceil(bonding.cutoff / bin_width) + 1
    axis = np.arange(n_rows) * bin_width

    labels: list[str] = []
    columns: list[np.ndarray] = []
    for i in range(n):
        for j in range(i, n):
            labels.append(f"{elements.symbol(i)}-{elements.symbol(j)}")
            counts = _bin_samples(bonding.distances[i][j], bin_width, n_rows)
            columns.append(counts if i == j else 2.0 * counts)

    counts = np.column_stack(columns) if columns else np.zeros((n_rows, 0))

    if bonding.n_atoms == 0:
        j_values = np.zeros_like(counts)
        g_values = np.zeros_like(counts)
    else:
        j_values = counts / (bonding.n_atoms * bin_width)
        rho_0 = bonding.n_atoms / bonding.volume
        g_values = j_values.copy()
        g_values[1:] /= (4 * np.pi * rho_0 * axis[1:] ** 2)[:, None]

    j_table = HistogramTable("r", axis, list(labels), j_values)
    g_table = HistogramTable("r", axis.copy(), list(labels), g_values)
    return j_table, g_table


def cn_histogram(coordination: CoordinationResult) -> HistogramTable:
    """
    Coordination histogram: one row per count, one column per ordered element pair.

    Column "A-B" holds, for every count k, how many atoms of element A have
    exactly k bonded neighbors of element B.
    """
    elements = coordination.elements
    n = len(elements)
    n_rows = coordination.counts.shape[2]

    labels = [f"{elements.symbol(i)}-{elements.symbol(j)}" for i in range(n) for j in range(n)]
    values = coordination.counts.reshape(n * n, n_rows).T.copy()
    return HistogramTable("#", np.arange(n_rows), labels, values)


def bad_histogram(angles: AngleResult, bin_width: float) -> HistogramTable:
    """
    Bond-angle histogram with 181 rows starting at 0.

    Columns run over center element i, then first neighbor j and second
    neighbor k >= j, labelled "Ej-Ei-Ek" and reading ``angles[j][i][k]``.
    The column where all three elements are the same is halved, because
    both orderings of each neighbor pair land in it.

    Args:
        angles: Result of the angle pass
        bin_width: Width of an angle bin, in the unit of the angles

    Returns:
        HistogramTable with axis label "theta"
    """
    if bin_width <= 0:
        raise ValueError(f"BAD bin width ({bin_width}) must be positive")

    elements = angles.elements
    n = len(elements)
    axis = np.arange(BAD_ROWS) * bin_width

    labels: list[str] = []
    columns: list[np.ndarray] = []
    for i in range(n):
        for j in range(n):
            for k in range(j, n):
                labels.append(f"{elements.symbol(j)}-{elements.symbol(i)}-{elements.symbol(k)}")
                counts = _bin_samples(angles.angles[j][i][k], bin_width, BAD_ROWS)
                if i == j == k:
                    counts /= 2.0
                columns.append(counts)

    values = np.column_stack(columns) if columns else np.zeros((BAD_ROWS, 0))
    return HistogramTable("theta", axis, labels, values)
