"""Base class for structural property calculations."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from ...core.cell import Cell
from ...io.export import export_tables
from .histograms import HistogramTable

if TYPE_CHECKING:
    from ...utils.logger import StatsLogger

SAVE_FORMATS = ("csv", "json", "npz")
PLOT_BACKENDS = ("matplotlib", "plotly")


class PropertyCalculator(ABC):
    """
    Abstract base class for all property calculators.

    A calculator analyses one Cell and keeps its results as histogram
    tables keyed by a short name ("J", "g", "CN", "BAD").
    """

    #: Plot titles and axis labels, set by subclasses
    title: str = ""
    xlabel: str = ""
    ylabel: str = ""

    def __init__(self, cell: Cell, logger: "StatsLogger | None" = None):
        """
        Initialize the property calculator.

        Args:
            cell: Cell to analyse
            logger: Optional logger for progress messages
        """
        if not isinstance(cell, Cell):
            raise TypeError(f"Expected a Cell, got {type(cell).__name__}")

        self.cell = cell
        self.logger = logger
        self._results: dict[str, HistogramTable] | None = None

    @abstractmethod
    def compute(self, **kwargs: Any) -> dict[str, HistogramTable]:
        """
        Compute the property.

        Args:
            **kwargs: Property-specific parameters

        Returns:
            Dictionary of histogram tables
        """
        pass

    def _require_results(self, action: str) -> dict[str, HistogramTable]:
        if self._results is None:
            raise RuntimeError(f"No results to {action}. Run compute() first.")
        return self._results

    def plot(
        self,
        backend: str = "matplotlib",
        table: str | None = None,
        columns: list[str] | None = None,
        output: str | Path | None = None,
        **kwargs: Any,
    ) -> Any:
        """
        Plot one of the result tables.

        Args:
            backend: Plotting backend ("matplotlib" or "plotly")
            table: Table name to plot (None = last table computed)
            columns: Columns to plot (None = all columns)
            output: Output file path (None = display only)
            **kwargs: Additional plotting parameters

        Returns:
            Plot object (depends on backend)
        """
        results = self._require_results("plot")
        name = table if table is not None else list(results)[-1]
        if name not in results:
            raise ValueError(f"Unknown table '{name}', available: {list(results)}")

        kwargs.setdefault("title", self.title)
        kwargs.setdefault("xlabel", self.xlabel)
        kwargs.setdefault("ylabel", self.ylabel)

        if backend == "matplotlib":
            from ..plotting.matplotlib_backend import plot_histogram_matplotlib

            return plot_histogram_matplotlib(results[name], columns, output, **kwargs)
        elif backend == "plotly":
            from ..plotting.plotly_backend import plot_histogram_plotly

            return plot_histogram_plotly(results[name], columns, output, **kwargs)
        else:
            raise ValueError(f"Unsupported backend: {backend}")

    def save(self, output_file: str | Path, format: str = "csv") -> list[Path]:
        """
        Save results to file.

        CSV writes one file per table, named ``<stem>_<table>.csv`` next to
        ``output_file``; JSON and NPZ write ``output_file`` itself.

        Args:
            output_file: Output file path
            format: Output format ("csv", "json", "npz")

        Returns:
            Paths of the written files
        """
        self._require_results("save")

        output_path = Path(output_file)

        if format == "csv":
            return self._save_csv(output_path)
        elif format == "json":
            return self._save_json(output_path)
        elif format == "npz":
            return self._save_npz(output_path)
        else:
            raise ValueError(f"Unsupported format: {format}")

    def _save_csv(self, output_path: Path) -> list[Path]:
        """Save every table as its own CSV file."""
        prefix = output_path.parent / output_path.stem
        return list(export_tables(self._results, prefix).values())

    def _save_json(self, output_path: Path) -> list[Path]:
        """Save all tables in one JSON document."""
        json_data = {name: table.to_dict() for name, table in self._results.items()}
        json_data["metadata"] = self.metadata()

        with open(output_path, "w") as f:
            json.dump(json_data, f, indent=2)
        return [output_path]

    def _save_npz(self, output_path: Path) -> list[Path]:
        """Save all tables as compressed numpy arrays."""
        save_dict = {}
        for name, table in self._results.items():
            save_dict[f"{name}_axis"] = table.axis
            save_dict[f"{name}_values"] = table.values
            save_dict[f"{name}_labels"] = np.array(table.labels, dtype=str)

        np.savez_compressed(output_path, **save_dict)
        # numpy appends .npz when the name lacks it
        if output_path.suffix != ".npz":
            output_path = output_path.with_name(output_path.name + ".npz")
        return [output_path]

    def metadata(self) -> dict[str, Any]:
        """Scalar settings of the last computation, stored alongside saved data."""
        return {"n_atoms": self.cell.n_atoms, "volume": self.cell.volume}

    def _log(self, message: str) -> None:
        if self.logger:
            self.logger.info(message)

    @property
    def results(self) -> dict[str, HistogramTable] | None:
        """Get computed results."""
        return self._results
