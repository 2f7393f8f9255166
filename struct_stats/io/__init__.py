"""Structure input and histogram output."""

from .export import export_tables, read_histogram_csv, write_histogram_csv
from .structure_reader import read_structure

__all__ = ["export_tables", "read_histogram_csv", "read_structure", "write_histogram_csv"]
