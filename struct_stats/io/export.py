"""CSV export of histogram tables."""

import csv
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..analysis.properties.histograms import HistogramTable


def _format_value(value) -> str:
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return f"{float(value):.6g}"


def write_histogram_csv(table: "HistogramTable", path: str | Path) -> Path:
    """
    Write a histogram table as CSV.

    The header names the axis column and then every element pair or
    triple. Every row, header included, ends with a trailing comma.

    Args:
        table: Table to write
        path: Output file path

    Returns:
        Path of the written file
    """
    path = Path(path)
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow([table.axis_label, *table.labels, ""])
        for axis_value, row in zip(table.axis, table.values, strict=True):
            writer.writerow([_format_value(axis_value), *(_format_value(v) for v in row), ""])
    return path


def read_histogram_csv(path: str | Path) -> "HistogramTable":
    """Read a table written by :func:`write_histogram_csv`."""
    from ..analysis.properties.histograms import HistogramTable

    with open(path, newline="") as f:
        rows = [row[:-1] if row and row[-1] == "" else row for row in csv.reader(f)]

    header, body = rows[0], rows[1:]
    data = np.array([[float(value) for value in row] for row in body], dtype=float)
    if data.size == 0:
        data = np.zeros((0, len(header)))
    return HistogramTable(
        axis_label=header[0],
        axis=data[:, 0],
        labels=header[1:],
        values=data[:, 1:],
    )


def export_tables(tables: dict[str, "HistogramTable"], prefix: str | Path) -> dict[str, Path]:
    """
    Write several tables as ``<prefix>_<name>.csv``.

    Args:
        tables: Tables keyed by name (e.g. "J", "g", "CN", "BAD")
        prefix: Path prefix shared by all files

    Returns:
        Written paths keyed by table name
    """
    prefix = Path(prefix)
    return {
        name: write_histogram_csv(table, prefix.parent / f"{prefix.name}_{name}.csv")
        for name, table in tables.items()
    }
