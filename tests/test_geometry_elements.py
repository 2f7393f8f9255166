import numpy as np
import pytest
from ase.data import atomic_numbers, covalent_radii

from struct_stats.core import (
    Atom,
    AtomImage,
    Cell,
    ElementTable,
    Frame,
    Position,
    UnknownElementError,
    covalent_radius,
)
from struct_stats.core.geometry import angle, as_vector, distance, norm, vector_angle


def test_vector_helpers() -> None:
    assert norm(np.array([3.0, 4.0, 0.0])) == 5.0
    assert distance([1.0, 1.0, 1.0], [1.0, 1.0, 3.0]) == 2.0
    with pytest.raises(ValueError):
        as_vector([1.0, 2.0])


def test_angle_at_vertex() -> None:
    vertex = np.zeros(3)
    assert np.isclose(angle(vertex, [1.0, 0.0, 0.0], [0.0, 2.0, 0.0]), np.pi / 2)
    assert np.isclose(angle(vertex, [1.0, 0.0, 0.0], [-3.0, 0.0, 0.0]), np.pi)


def test_vector_angle_never_nan_for_parallel_vectors() -> None:
    u = np.array([0.1, 0.2, 0.3])
    assert np.isclose(vector_angle(u, 7.0 * u), 0.0, atol=1e-7)
    assert np.isclose(vector_angle(u, -u), np.pi)


def test_covalent_radius_from_ase_table() -> None:
    assert covalent_radius("Si") == float(covalent_radii[atomic_numbers["Si"]])


def test_covalent_radius_override_takes_precedence() -> None:
    assert covalent_radius("Si", {"Si": 1.5}) == 1.5
    assert covalent_radius("O", {"Si": 1.5}) == float(covalent_radii[atomic_numbers["O"]])


@pytest.mark.parametrize("symbol", ["Xx", "si", "X", ""])
def test_unknown_element_is_rejected(symbol) -> None:
    with pytest.raises(UnknownElementError) as excinfo:
        covalent_radius(symbol)
    assert f"'{symbol}'" in str(excinfo.value)


def test_unknown_element_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        covalent_radius("Qq")


def test_element_table_is_bidirectional() -> None:
    table = ElementTable.from_symbols(["O", "Si", "O", "Ge", "Si"])
    assert table.symbols == ("O", "Si", "Ge")
    assert len(table) == 3
    for index, symbol in enumerate(table):
        assert table.index(symbol) == index
        assert table.symbol(index) == symbol
    assert "Ge" in table
    assert "Na" not in table


def test_element_table_add_is_idempotent() -> None:
    table = ElementTable()
    assert table.add("Na") == 0
    assert table.add("Cl") == 1
    assert table.add("Na") == 0
    assert table == ElementTable(["Na", "Cl"])


def test_element_table_missing_symbol() -> None:
    with pytest.raises(KeyError):
        ElementTable(["Na"]).index("Cl")


def test_position_is_frame_tagged_and_read_only() -> None:
    position = Position.fractional([0.1, 0.2, 0.3])
    assert position.frame is Frame.FRACTIONAL
    assert not position.is_cartesian
    with pytest.raises(ValueError):
        position.coords[0] = 1.0
    assert position == Position.fractional((0.1, 0.2, 0.3))
    assert position != Position.cartesian((0.1, 0.2, 0.3))


def test_atom_measurements_require_cartesian_position() -> None:
    atom = Atom("Si", 0, Position.fractional((0.0, 0.0, 0.0)))
    with pytest.raises(ValueError):
        atom.distance((1.0, 0.0, 0.0))

    atom.position = Position.cartesian((0.0, 0.0, 0.0))
    assert atom.distance((1.0, 0.0, 0.0)) == 1.0

    first = AtomImage(1, 0, (0, 0, 0), (1.0, 0.0, 0.0))
    second = AtomImage(2, 0, (0, 0, 0), (0.0, 0.0, 1.0))
    assert np.isclose(atom.angle(first, second), np.pi / 2)


def test_cell_assigns_sequential_ids_and_counts(rock_salt: Cell) -> None:
    assert [atom.atom_id for atom in rock_salt] == list(range(8))
    assert rock_salt.count_elements() == {"Na": 4, "Cl": 4}
    assert rock_salt.element_table.symbols == ("Na", "Cl")
    assert np.isclose(rock_salt.number_density, 8 / 5.64**3)


def test_assign_element_indices(rock_salt: Cell) -> None:
    table = rock_salt.assign_element_indices(ElementTable(["Cl", "Na"]))
    assert table.symbols == ("Cl", "Na")
    assert [atom.element_index for atom in rock_salt] == [1, 1, 1, 1, 0, 0, 0, 0]


def test_fractional_to_cartesian_converts_every_atom(rock_salt: Cell) -> None:
    rock_salt.fractional_to_cartesian()
    assert all(atom.position.is_cartesian for atom in rock_salt)
    assert np.allclose(rock_salt.atoms[1].position.coords, [0.0, 2.82, 2.82])


def test_empty_cell() -> None:
    cell = Cell()
    assert cell.n_atoms == 0
    assert cell.number_density == 0.0
    assert cell.cartesian_positions().shape == (0, 3)
