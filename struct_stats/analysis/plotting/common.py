"""Helpers shared by the plotting backends."""

from pathlib import Path

from ...utils.logger import get_logger
from ..properties.histograms import HistogramTable


def select_columns(table: HistogramTable, columns: list[str] | None) -> list[str]:
    """Requested column labels present in the table; unknown labels are skipped with a warning."""
    if columns is None:
        return list(table.labels)

    selected = []
    for label in columns:
        if label in table.labels:
            selected.append(label)
        else:
            get_logger().warning(f"No column {label} in table (available: {', '.join(table.labels)})")
    return selected


def report_saved(path: Path) -> None:
    get_logger().info(f"Plot saved to {path}")
