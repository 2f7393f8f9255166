"""Validation for structure analysis parameters."""

from pathlib import Path

from .input_parameters import AnalysisParameters
from .properties.base import PLOT_BACKENDS, SAVE_FORMATS


def validate_parameters(params: AnalysisParameters) -> None:
    """
    Validate structure analysis parameters.

    Args:
        params: Parameters to validate

    Raises:
        ValueError: If any parameter is invalid
    """
    # Validate input structure
    if not params.structure_file:
        raise ValueError("Structure file path is required")

    if not Path(params.structure_file).exists():
        raise ValueError(f"Structure file not found: {params.structure_file}")

    # Validate numeric settings
    if params.cutoff <= 0:
        raise ValueError(f"Cutoff ({params.cutoff} Å) must be positive")

    if params.rdf_bin_width <= 0:
        raise ValueError(f"RDF bin width ({params.rdf_bin_width} Å) must be positive")

    if params.rdf_bin_width > params.cutoff:
        raise ValueError(
            f"RDF bin width ({params.rdf_bin_width} Å) must not exceed the cutoff ({params.cutoff} Å)"
        )

    if params.bond_factor <= 0:
        raise ValueError(f"Bond factor ({params.bond_factor}) must be positive")

    if params.bad_bin_width <= 0:
        raise ValueError(f"BAD bin width ({params.bad_bin_width}) must be positive")

    if params.degrees and params.bad_bin_width > 180:
        raise ValueError(f"BAD bin width ({params.bad_bin_width}°) should not exceed 180°")

    # Validate radius overrides
    for symbol, radius in (params.radii or {}).items():
        if radius <= 0:
            raise ValueError(f"Covalent radius override for {symbol} ({radius} Å) must be positive")

    # Validate output
    if not params.output_prefix:
        raise ValueError("Output prefix is required")

    parent_dir = Path(params.output_prefix).parent
    if parent_dir != Path(".") and not parent_dir.exists():
        raise ValueError(f"Output directory does not exist: {parent_dir}")

    if params.save_format not in SAVE_FORMATS:
        raise ValueError(
            f"Invalid save format '{params.save_format}'. "
            f"Supported formats: {', '.join(SAVE_FORMATS)}"
        )

    if params.plot_backend is not None and params.plot_backend not in PLOT_BACKENDS:
        raise ValueError(
            f"Invalid plot backend '{params.plot_backend}'. "
            f"Supported backends: {', '.join(PLOT_BACKENDS)}"
        )
