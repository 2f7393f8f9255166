"""Plotly plotting backend for histogram tables."""

from pathlib import Path
from typing import Any

from ..properties.histograms import HistogramTable
from .common import report_saved, select_columns

try:
    import plotly.graph_objects as go
except ImportError:
    raise ImportError("Interactive plots need plotly: pip install 'struct-stats[interactive]'") from None

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".pdf", ".svg")


def plot_histogram_plotly(
    table: HistogramTable,
    columns: list[str] | None = None,
    output: str | Path | None = None,
    title: str = "",
    xlabel: str = "",
    ylabel: str = "",
    step: bool = False,
    skip_first_row: bool = False,
    **kwargs: Any,
) -> go.Figure:
    """
    Interactive version of :func:`plot_histogram_matplotlib`.

    ``output`` ending in an image suffix is written with ``write_image``
    (needs kaleido); any other suffix is replaced by ``.html``. ``height``
    and ``width`` may be given in ``kwargs``.
    """
    first = 1 if skip_first_row else 0
    x = table.axis[first:]

    fig = go.Figure()
    for label in select_columns(table, columns):
        fig.add_trace(
            go.Scatter(
                x=x,
                y=table.column(label)[first:],
                mode="lines",
                name=label,
                line={"width": 2, "shape": "hvh" if step else "linear"},
                hovertemplate="%{x:.3f}<br>%{y:.3f}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title=xlabel or table.axis_label,
        yaxis_title=ylabel,
        hovermode="x unified",
        template="plotly_white",
        height=kwargs.get("height", 500),
        width=kwargs.get("width", 800),
    )

    if output is None:
        fig.show()
        return fig

    path = Path(output)
    if path.suffix.lower() in IMAGE_SUFFIXES:
        fig.write_image(str(path))
    else:
        path = path.with_suffix(".html")
        fig.write_html(str(path))
    report_saved(path)
    return fig
