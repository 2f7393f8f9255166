import itertools

import matplotlib
import numpy as np
import pytest
from ase.build import bulk
from ase.io import write

from struct_stats.core import Cell, Frame, Lattice

matplotlib.use("Agg")


@pytest.fixture
def simple_cubic() -> Cell:
    """2x2x2 supercell of simple cubic Po with a 4.0 Å nearest-neighbor spacing."""
    cell = Cell(Lattice(8.0, 8.0, 8.0, 90.0, 90.0, 90.0))
    for i, j, k in itertools.product((0.0, 4.0), repeat=3):
        cell.add_atom("Po", (i, j, k))
    return cell


@pytest.fixture
def rock_salt() -> Cell:
    """Conventional NaCl cell (a = 5.64 Å, nearest Na-Cl distance 2.82 Å)."""
    cell = Cell(Lattice(5.64, 5.64, 5.64, 90.0, 90.0, 90.0))
    fcc = [(0.0, 0.0, 0.0), (0.0, 0.5, 0.5), (0.5, 0.0, 0.5), (0.5, 0.5, 0.0)]
    for site in fcc:
        cell.add_atom("Na", site, frame=Frame.FRACTIONAL)
    for x, y, z in fcc:
        cell.add_atom("Cl", ((x + 0.5) % 1.0, y, z), frame=Frame.FRACTIONAL)
    return cell


@pytest.fixture
def triclinic() -> Cell:
    """Two-element triclinic cell with positions scattered in and around the cell."""
    rng = np.random.default_rng(7)
    cell = Cell(Lattice(5.1, 6.3, 7.2, 78.0, 95.0, 112.0))
    for n, frac in enumerate(rng.uniform(-1.5, 2.5, size=(10, 3))):
        cell.add_atom("Si" if n % 3 else "O", frac, frame=Frame.FRACTIONAL)
    return cell.fractional_to_cartesian()


@pytest.fixture
def nacl_poscar(tmp_path):
    """Conventional rock-salt cell written as a VASP POSCAR."""
    path = tmp_path / "POSCAR"
    write(path, bulk("NaCl", "rocksalt", a=5.64, cubic=True), format="vasp")
    return path
