"""Bonds command: show the bond-length table a run would use."""

import argparse

from ...analysis.properties.bonding import build_bond_lengths
from ...core.elements import covalent_radius
from ...io.structure_reader import read_structure
from ...utils.logger import get_logger
from .analyze import parse_radii


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the bonds command parser."""
    parser = subparsers.add_parser(
        "bonds",
        help="Print the lattice, composition and bond-length table of a structure",
        description="Print the largest bonded distance of every element pair "
        "((r_i + r_j) * bond factor) without running the analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  struct-stats bonds POSCAR
  struct-stats bonds glass.extxyz --bond-factor 1.3 --radius Ge=1.25
        """,
    )
    parser.add_argument("structure", metavar="STRUCTURE", help="Structure file readable by ASE")
    parser.add_argument(
        "--bond-factor",
        "-b",
        type=float,
        default=1.2,
        metavar="FACTOR",
        help="Scale applied to summed covalent radii (default: 1.2)",
    )
    parser.add_argument(
        "--radius",
        type=str,
        nargs="+",
        metavar="ELEM=RADIUS",
        help="Covalent radius overrides in Angstroms (e.g., Si=1.11 O=0.66)",
    )
    parser.add_argument("--format", "-f", dest="file_format", default=None, help="ASE file format")
    parser.add_argument("--index", type=int, default=-1, help="Frame of a multi-frame file (default: -1)")
    parser.set_defaults(handler=handle_command)


def handle_command(args: argparse.Namespace) -> int:
    """
    Handle the bonds command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    logger = get_logger()

    try:
        if args.bond_factor <= 0:
            raise ValueError(f"Bond factor ({args.bond_factor}) must be positive")
        radii = parse_radii(args.radius)

        cell = read_structure(args.structure, file_format=args.file_format, index=args.index)
        table = build_bond_lengths(cell, args.bond_factor, radii)

        logger.info(
            "Lattice: a={:.4f} b={:.4f} c={:.4f} Å, α={:.2f} β={:.2f} γ={:.2f}°".format(
                *cell.lattice.parameters
            )
        )
        logger.info(f"Volume: {cell.volume:.3f} Å³, density: {cell.number_density:.5f} atoms/Å³")

        counts = cell.count_elements()
        logger.table(
            "Elements",
            ["Element", "Atoms", "Radius (Å)"],
            [(symbol, counts[symbol], covalent_radius(symbol, radii)) for symbol in table.elements],
        )

        symbols = table.elements.symbols
        logger.table(
            f"Bond lengths (factor {args.bond_factor})",
            ["Pair", "Max distance (Å)"],
            [
                (f"{first}-{second}", table.length(first, second))
                for n, first in enumerate(symbols)
                for second in symbols[n:]
            ],
        )
        return 0

    except Exception as e:
        logger.error(f"Error reading bonds: {e}")
        return 1
