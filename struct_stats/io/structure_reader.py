"""Load structure files into a Cell using ASE."""

from pathlib import Path

from ..core.cell import Cell
from ..core.lattice import InvalidLatticeError

try:
    from ase.io import read
except ImportError as e:
    raise ImportError(
        "ASE (Atomic Simulation Environment) is required to read structure files. "
        "Install with: pip install ase"
    ) from e


def read_structure(
    structure_file: str | Path,
    file_format: str | None = None,
    index: int = -1,
) -> Cell:
    """
    Read one frame of a structure file.

    Args:
        structure_file: Any file ASE can read (POSCAR, CIF, extxyz, LAMMPS data, ...)
        file_format: ASE format name; inferred from the file name if None
        index: Frame to read from multi-frame files (default: last)

    Returns:
        Cell with the frame's lattice and atoms

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidLatticeError: If the frame has no 3D periodic cell
    """
    path = Path(structure_file)
    if not path.exists():
        raise FileNotFoundError(f"Structure file not found: {structure_file}")

    atoms = read(str(path), index=index, format=file_format)

    try:
        return Cell.from_ase(atoms)
    except InvalidLatticeError as e:
        raise InvalidLatticeError(f"{path.name} does not define a 3D periodic cell: {e}") from e
