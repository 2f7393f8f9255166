"""Radial Distribution Function (RDF) calculator."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import numpy as np

from ...core.cell import Cell
from .base import PropertyCalculator
from .bonding import BondingResult, compute_bonding
from .histograms import HistogramTable, rdf_histograms

if TYPE_CHECKING:
    from ...utils.logger import StatsLogger


class RDF(PropertyCalculator):
    """
    Radial Distribution Function calculator.

    Runs the pairwise distance and bonding pass over the cell and bins the
    distances into J(r) and g(r) per element pair. The bonding result is
    kept for the coordination and bond-angle calculators.
    """

    title = "Radial Distribution Function"
    xlabel = "r (Å)"
    ylabel = "g(r)"

    def __init__(self, cell: Cell, logger: "StatsLogger | None" = None):
        super().__init__(cell, logger)
        self.bonding: BondingResult | None = None
        self._settings: dict[str, float] = {}

    def compute(
        self,
        cutoff: float = 6.0,
        bond_factor: float = 1.2,
        bin_width: float = 0.05,
        radii: Mapping[str, float] | None = None,
    ) -> dict[str, HistogramTable]:
        """
        Compute J(r) and g(r) for every element pair.

        Args:
            cutoff: Largest distance to histogram (Angstroms)
            bond_factor: Scale applied to summed covalent radii for bonding
            bin_width: Distance bin width (Angstroms)
            radii: Optional covalent radius overrides by symbol

        Returns:
            Dictionary with the "J" and "g" tables
        """
        self._log(
            f"Bonding pass: cutoff={cutoff} Å, bond factor={bond_factor}, {self.cell.n_atoms} atoms"
        )
        self.bonding = compute_bonding(self.cell, cutoff, bond_factor, radii)
        self._log(
            f"Images per axis: {self.bonding.replication}, "
            f"bonded records: {self.bonding.n_bonds}"
        )

        j_table, g_table = rdf_histograms(self.bonding, bin_width)
        self._settings = {"cutoff": cutoff, "bond_factor": bond_factor, "bin_width": bin_width}
        self._results = {"J": j_table, "g": g_table}
        return self._results

    def metadata(self) -> dict[str, Any]:
        return {**super().metadata(), **self._settings}

    def plot(self, backend: str = "matplotlib", **kwargs: Any) -> Any:
        # g(r) is undefined at r = 0
        kwargs.setdefault("skip_first_row", True)
        if kwargs.get("table") == "J":
            kwargs.setdefault("ylabel", "J(r)")
        return super().plot(backend, **kwargs)

    def get_first_peak(self, pair: str) -> tuple[float, float]:
        """
        Get position and height of the highest g(r) value of a pair.

        Args:
            pair: Pair name (e.g., "Si-O")

        Returns:
            Tuple of (r_peak, gr_peak)
        """
        results = self._require_results("inspect")
        table = results["g"]
        if pair not in table.labels:
            raise RuntimeError(f"No results for pair {pair}")

        # Row 0 holds J(0), not g(0)
        values = table.column(pair)[1:]
        idx = int(np.argmax(values)) + 1
        return float(table.axis[idx]), float(table.column(pair)[idx])

    def get_coordination_number(self, pair: str, r_cutoff: float) -> float:
        """
        Running coordination number of a pair at ``r_cutoff``.

        This is the integral of J(r) over the bins lying wholly below
        ``r_cutoff``: the number of pair distances per atom of the cell
        (both orderings for unlike pairs). A bin straddling ``r_cutoff`` is
        left out, so no distance beyond the limit is counted.

        Args:
            pair: Pair name (e.g., "Si-O")
            r_cutoff: Integration limit (Angstroms)

        Returns:
            Integrated neighbor count
        """
        results = self._require_results("inspect")
        table = results["J"]
        if pair not in table.labels:
            raise RuntimeError(f"No results for pair {pair}")

        bin_width = self._settings["bin_width"]
        n_bins = int(np.sum(table.axis + bin_width <= r_cutoff + 1e-9))
        return float(np.sum(table.column(pair)[:n_bins]) * bin_width)
