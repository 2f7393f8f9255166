"""Matplotlib plotting backend for histogram tables."""

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt

from ..properties.histograms import HistogramTable
from .common import report_saved, select_columns


def plot_histogram_matplotlib(
    table: HistogramTable,
    columns: list[str] | None = None,
    output: str | Path | None = None,
    figsize: tuple[int, int] = (10, 6),
    dpi: int = 150,
    title: str = "",
    xlabel: str = "",
    ylabel: str = "",
    step: bool = False,
    skip_first_row: bool = False,
    **kwargs: Any,
) -> tuple[plt.Figure, plt.Axes]:
    """
    Draw histogram columns as lines (or steps) on one set of axes.

    Args:
        table: Histogram table to plot
        columns: Column labels to draw (None = every column)
        output: Image path; the figure is shown instead when None
        figsize: Figure size in inches
        dpi: Resolution of the saved image
        title: Axes title
        xlabel: X axis label (defaults to the table's axis label)
        ylabel: Y axis label
        step: Draw steps centred on the bins (integer-valued axes)
        skip_first_row: Leave out row 0 (the r = 0 row of g(r))
        **kwargs: Passed to ``Axes.plot`` / ``Axes.step``

    Returns:
        The figure and its axes
    """
    labels = select_columns(table, columns)
    first = 1 if skip_first_row else 0
    x = table.axis[first:]

    fig, ax = plt.subplots(figsize=figsize)
    draw = ax.step if step else ax.plot
    line_options = {"where": "mid"} if step else {}
    for label in labels:
        draw(x, table.column(label)[first:], label=label, linewidth=2, **line_options, **kwargs)

    ax.set_xlabel(xlabel or table.axis_label, fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    ax.set_xlim(left=0)
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(title, fontsize=14, fontweight="bold")
    if labels:
        ax.legend(fontsize=10)
    fig.tight_layout()

    if output is None:
        plt.show()
    else:
        path = Path(output)
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
        report_saved(path)

    return fig, ax
