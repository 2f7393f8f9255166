"""Bond-angle distribution (BAD) calculator."""

from typing import Any

import numpy as np

from ...core.cell import Cell
from ...utils.logger import StatsLogger, get_logger
from .base import PropertyCalculator
from .bond_angles import AngleResult, compute_bond_angles
from .bonding import BondingResult
from .histograms import HistogramTable, bad_histogram


class BondAngleDistribution(PropertyCalculator):
    """
    Bond-angle histogram per (neighbor, center, neighbor) element triple.

    Needs the bonding result of an RDF computation on the same cell.
    """

    title = "Bond Angle Distribution"
    ylabel = "Angles"

    def __init__(self, cell: Cell, bonding: BondingResult, logger: StatsLogger | None = None):
        super().__init__(cell, logger)
        if bonding is None:
            raise RuntimeError("Bond angles need a bonding result. Run RDF.compute() first.")
        self.bonding = bonding
        self.angles: AngleResult | None = None
        self._settings: dict[str, Any] = {}

    def compute(self, bin_width: float = 1.0, degrees: bool = True) -> dict[str, HistogramTable]:
        """
        Compute the bond-angle histogram.

        Args:
            bin_width: Angle bin width, in degrees or radians following ``degrees``
            degrees: Measure angles in degrees instead of radians

        Returns:
            Dictionary with the "BAD" table
        """
        self.angles = compute_bond_angles(self.bonding, degrees=degrees)
        n_angles = sum(
            bucket.size for plane in self.angles.angles for column in plane for bucket in column
        )
        self._log(f"Collected {n_angles} bond angles")
        if self.angles.n_skipped:
            (self.logger or get_logger()).warning(
                f"Skipped {self.angles.n_skipped} bond(s) of zero length (overlapping atoms); "
                "they are missing from the bond-angle distribution"
            )

        self.xlabel = "θ (deg)" if degrees else "θ (rad)"
        self._settings = {"bin_width": bin_width, "degrees": degrees}
        self._results = {"BAD": bad_histogram(self.angles, bin_width)}
        return self._results

    def metadata(self) -> dict[str, Any]:
        return {**super().metadata(), **self._settings}

    def get_peak_angle(self, triple: str) -> float:
        """
        Angle of the most populated bin of a triple.

        Args:
            triple: Triple name "Neighbor-Center-Neighbor" (e.g., "O-Si-O")

        Returns:
            Axis value of the highest bin
        """
        results = self._require_results("inspect")
        table = results["BAD"]
        if triple not in table.labels:
            raise RuntimeError(f"No results for triple {triple}")

        return float(table.axis[int(np.argmax(table.column(triple)))])
