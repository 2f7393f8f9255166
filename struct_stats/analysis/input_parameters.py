"""Input parameters for a structure analysis run."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..utils.logger import StatsLogger


@dataclass
class AnalysisParameters:
    """
    Parameters for RDF, coordination and bond-angle analysis of one structure.

    Args:
        structure_file: Path to the structure file. Anything ASE can read
            with a 3D periodic cell: POSCAR/CONTCAR, CIF, extended XYZ,
            LAMMPS data, etc.

        output_prefix: Prefix of the output files. CSV output writes
            "<prefix>_J.csv", "<prefix>_g.csv", "<prefix>_CN.csv" and
            "<prefix>_BAD.csv".

        cutoff: RDF cutoff radius in Angstroms. Distances beyond it are not
            histogrammed. Default: 6.0 Å.

        rdf_bin_width: Distance bin width in Angstroms. Default: 0.05 Å.

        bond_factor: Scale applied to the sum of covalent radii to get the
            largest bonded distance of an element pair.
            Typical range: 1.1-1.3. Default: 1.2.

        bad_bin_width: Angle bin width (degrees, or radians when
            degrees=False). The histogram always has 181 rows.
            Default: 1.0.

        degrees: Measure bond angles in degrees. Default: True.

        file_format: ASE format name overriding detection from the file name.

        index: Frame to analyse in multi-frame files. Default: -1 (last).

        radii: Covalent radius overrides by element symbol, in Angstroms.
            Elements not listed use ASE's covalent radii.

        save_format: Output format: "csv", "json" or "npz". Default: "csv".

        plot_backend: "matplotlib" or "plotly" to also write plots, or None.

        log: Enable logging output during the analysis.
            If True and logger is None, creates a new StatsLogger instance.

        logger: Custom StatsLogger instance for logging.

    Examples:
        Amorphous silica with default settings:
        >>> params = AnalysisParameters(
        ...     structure_file="sio2.cif",
        ...     output_prefix="results/sio2",
        ... )

        Larger bonding tolerance and radians:
        >>> params = AnalysisParameters(
        ...     structure_file="POSCAR",
        ...     output_prefix="gese",
        ...     cutoff=8.0,
        ...     bond_factor=1.3,
        ...     bad_bin_width=0.02,
        ...     degrees=False,
        ... )
    """

    structure_file: str
    output_prefix: str
    cutoff: float = 6.0
    rdf_bin_width: float = 0.05
    bond_factor: float = 1.2
    bad_bin_width: float = 1.0
    degrees: bool = True
    file_format: str | None = None
    index: int = -1
    radii: dict[str, float] | None = None
    save_format: str = "csv"
    plot_backend: str | None = None
    log: bool = False
    logger: Optional["StatsLogger"] = None
