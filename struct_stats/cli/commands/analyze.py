"""Analyze command: RDF, coordination numbers and bond angles of one structure."""

import argparse
from pathlib import Path

from ...analysis import AnalysisParameters, StructureAnalyzer
from ...utils.json_utils import load_parameters_from_json, save_parameters_to_json
from ...utils.logger import get_logger


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the analyze command parser."""
    parser = subparsers.add_parser(
        "analyze",
        help="Compute RDF, coordination and bond-angle histograms of a structure",
        description="Compute radial distribution functions, coordination numbers and "
        "bond-angle distributions of a periodic structure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Default settings (cutoff 6 Å, bond factor 1.2):
    struct-stats analyze sio2.cif --output-prefix sio2

  Larger cutoff and finer RDF bins:
    struct-stats analyze POSCAR --cutoff 10 --rdf-bin-width 0.02 --output-prefix run1/gese

  Override a covalent radius and plot with plotly:
    struct-stats analyze glass.extxyz --radius Ge=1.25 --plot-backend plotly

  Angles in radians, saved as JSON:
    struct-stats analyze POSCAR --radians --bad-bin-width 0.02 --save-format json

  Repeat a saved run on another structure:
    struct-stats analyze POSCAR_2 --input-params input_params.json

Output files (CSV):
  <prefix>_J.csv    J(r) per element pair
  <prefix>_g.csv    g(r) per element pair
  <prefix>_CN.csv   coordination counts per (center, neighbor) pair
  <prefix>_BAD.csv  bond angles per (neighbor, center, neighbor) triple
        """,
    )

    parser.add_argument(
        "structure",
        type=str,
        nargs="?",
        default=None,
        metavar="STRUCTURE",
        help="Structure file readable by ASE with a 3D periodic cell (POSCAR, CIF, extxyz, ...)",
    )

    parser.add_argument(
        "--output-prefix",
        "-o",
        type=str,
        default=None,
        metavar="PREFIX",
        help="Prefix for output files (default: structure file name without extension)",
    )

    parser.add_argument(
        "--cutoff",
        "-r",
        type=float,
        default=6.0,
        metavar="DIST",
        help="RDF cutoff radius in Angstroms (default: 6.0)",
    )

    parser.add_argument(
        "--rdf-bin-width",
        type=float,
        default=0.05,
        metavar="DIST",
        help="RDF bin width in Angstroms (default: 0.05)",
    )

    parser.add_argument(
        "--bond-factor",
        "-b",
        type=float,
        default=1.2,
        metavar="FACTOR",
        help="Scale applied to summed covalent radii to detect bonds (default: 1.2)",
    )

    parser.add_argument(
        "--bad-bin-width",
        type=float,
        default=1.0,
        metavar="WIDTH",
        help="Bond-angle bin width, in degrees or radians with --radians (default: 1.0)",
    )

    parser.add_argument(
        "--radians",
        action="store_false",
        dest="degrees",
        help="Measure bond angles in radians instead of degrees",
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        default=None,
        dest="file_format",
        metavar="FORMAT",
        help="ASE file format of the structure (default: inferred from file name)",
    )

    parser.add_argument(
        "--index",
        type=int,
        default=-1,
        metavar="N",
        help="Frame to analyse in multi-frame files (default: -1, the last frame)",
    )

    parser.add_argument(
        "--radius",
        type=str,
        nargs="+",
        metavar="ELEM=RADIUS",
        help="Covalent radius overrides in Angstroms (e.g., Si=1.11 O=0.66)",
    )

    parser.add_argument(
        "--save-format",
        choices=["csv", "json", "npz"],
        default="csv",
        help="Output data format (default: csv)",
    )

    parser.add_argument(
        "--plot-backend",
        choices=["matplotlib", "plotly"],
        default=None,
        help="Also write plots with this backend",
    )

    parser.add_argument(
        "--log",
        "-l",
        action="store_true",
        help="Enable detailed logging",
    )

    parser.add_argument(
        "--save-input",
        action="store_true",
        help="Save input parameters to input_params.json",
    )

    parser.add_argument(
        "--input-params",
        type=str,
        default=None,
        metavar="FILE",
        help="Run with parameters saved by --save-input; STRUCTURE and --output-prefix still override them",
    )

    parser.set_defaults(handler=handle_command)


def parse_radii(entries: list[str] | None) -> dict[str, float] | None:
    """
    Parse "ELEM=RADIUS" entries.

    Args:
        entries: Raw command line values

    Returns:
        Radius overrides by element symbol, or None if none were given

    Raises:
        ValueError: If an entry is malformed
    """
    if not entries:
        return None

    radii = {}
    for entry in entries:
        symbol, sep, value = entry.partition("=")
        if not sep or not symbol.strip():
            raise ValueError(f'Invalid radius "{entry}". Expected format: ELEM=RADIUS (e.g., Si=1.11)')
        try:
            radii[symbol.strip()] = float(value)
        except ValueError:
            raise ValueError(f'Invalid radius value in "{entry}"') from None
    return radii


def build_parameters(args: argparse.Namespace) -> AnalysisParameters:
    """
    Analysis parameters from the command line, or from a saved JSON file.

    With ``--input-params`` every setting comes from the file except the
    structure and the output prefix, which the command line may override.

    Raises:
        ValueError: If no structure file is given either way
    """
    logger = get_logger()

    if args.input_params:
        params = load_parameters_from_json(args.input_params)
        logger.info(f"Loaded input parameters from {args.input_params}")
        if args.structure:
            params.structure_file = args.structure
            if not args.output_prefix:
                params.output_prefix = str(Path(args.structure).with_suffix(""))
        if args.output_prefix:
            params.output_prefix = args.output_prefix
        params.log = params.log or args.log
        params.logger = logger if params.log else None
        return params

    if not args.structure:
        raise ValueError("No structure file given (pass STRUCTURE or --input-params)")

    return AnalysisParameters(
        structure_file=args.structure,
        output_prefix=args.output_prefix or str(Path(args.structure).with_suffix("")),
        cutoff=args.cutoff,
        rdf_bin_width=args.rdf_bin_width,
        bond_factor=args.bond_factor,
        bad_bin_width=args.bad_bin_width,
        degrees=args.degrees,
        file_format=args.file_format,
        index=args.index,
        radii=parse_radii(args.radius),
        save_format=args.save_format,
        plot_backend=args.plot_backend,
        log=args.log,
        logger=logger if args.log else None,
    )


def handle_command(args: argparse.Namespace) -> int:
    """
    Handle the analyze command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logger = get_logger()

    try:
        params = build_parameters(args)

        if getattr(args, "save_input", False):
            save_parameters_to_json(params)

        analyzer = StructureAnalyzer(params)

        logger.step(f"Analyzing {Path(params.structure_file).name}")
        analyzer.load()
        written = analyzer.run()

        logger.table("Mean coordination", ["Center-Neighbor", "<CN>"], analyzer.summary().items())

        n_files = sum(len(paths) for paths in written.values())
        logger.success(f"Wrote {n_files} file(s) with prefix {params.output_prefix}")
        return 0

    except Exception as e:
        logger.error(f"Error during analysis: {e}")
        if getattr(args, "verbose", False):
            import traceback

            traceback.print_exc()
        return 1
