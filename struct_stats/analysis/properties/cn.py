"""Coordination number (CN) calculator."""

from typing import TYPE_CHECKING, Any

import numpy as np

from ...core.cell import Cell
from .base import PropertyCalculator
from .bonding import BondingResult
from .coordination import CoordinationResult, compute_coordination
from .histograms import HistogramTable, cn_histogram

if TYPE_CHECKING:
    from ...utils.logger import StatsLogger


class CoordinationNumber(PropertyCalculator):
    """
    Coordination number histogram per (center, neighbor) element pair.

    Needs the bonding result of an RDF computation on the same cell.
    """

    title = "Coordination Number Distribution"
    xlabel = "Coordination number"
    ylabel = "Atoms"

    def __init__(self, cell: Cell, bonding: BondingResult, logger: "StatsLogger | None" = None):
        super().__init__(cell, logger)
        if bonding is None:
            raise RuntimeError("Coordination numbers need a bonding result. Run RDF.compute() first.")
        self.bonding = bonding
        self.coordination: CoordinationResult | None = None

    def compute(self) -> dict[str, HistogramTable]:
        """
        Tally coordination numbers.

        Returns:
            Dictionary with the "CN" table
        """
        self.coordination = compute_coordination(self.bonding)
        self._log(f"Coordination counted, maximum bucket {self.coordination.max_count}")
        self._results = {"CN": cn_histogram(self.coordination)}
        return self._results

    def plot(self, backend: str = "matplotlib", **kwargs: Any) -> Any:
        kwargs.setdefault("step", True)
        return super().plot(backend, **kwargs)

    def get_mean_coordination(self, pair: str) -> float:
        """
        Mean number of neighbors of the second element around the first.

        Args:
            pair: Pair name "Center-Neighbor" (e.g., "Si-O")

        Returns:
            Average coordination (0.0 when the center element has no atoms)
        """
        results = self._require_results("inspect")
        table = results["CN"]
        if pair not in table.labels:
            raise RuntimeError(f"No results for pair {pair}")

        counts = table.column(pair)
        total = counts.sum()
        if total == 0:
            return 0.0
        return float(np.dot(table.axis, counts) / total)
