"""Plotting backends for histogram tables."""

from .matplotlib_backend import plot_histogram_matplotlib

try:
    from .plotly_backend import plot_histogram_plotly

    __all__ = ["plot_histogram_matplotlib", "plot_histogram_plotly"]
except ImportError:
    # Plotly not available
    __all__ = ["plot_histogram_matplotlib"]
