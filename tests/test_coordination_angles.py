import warnings

import numpy as np

from struct_stats.analysis.properties import (
    compute_bond_angles,
    compute_bonding,
    compute_coordination,
)
from struct_stats.core import Cell, Lattice


def test_simple_cubic_coordination(simple_cubic: Cell) -> None:
    coordination = compute_coordination(compute_bonding(simple_cubic, 4.1, 1.0, {"Po": 2.1}))
    assert coordination.counts.shape == (1, 1, 8)
    assert coordination.max_count == 7
    distribution = coordination.distribution("Po", "Po")
    assert distribution[6] == 8
    assert distribution.sum() == 8
    assert np.all(coordination.per_atom == 6)


def test_rock_salt_coordination_is_conserved(rock_salt: Cell) -> None:
    bonding = compute_bonding(rock_salt, 3.0, 1.5, {"Na": 1.0, "Cl": 1.0})
    coordination = compute_coordination(bonding)

    assert coordination.distribution("Na", "Cl")[6] == 4
    assert coordination.distribution("Cl", "Na")[6] == 4
    assert coordination.distribution("Na", "Na")[0] == 4
    assert coordination.distribution("Cl", "Cl")[0] == 4

    # Every bond is counted once from each end
    na, cl = bonding.elements.index("Na"), bonding.elements.index("Cl")
    k = np.arange(coordination.counts.shape[2])
    assert np.dot(k, coordination.counts[na, cl]) == np.dot(k, coordination.counts[cl, na])


def test_every_atom_lands_in_one_bucket_per_neighbor_element(triclinic: Cell) -> None:
    bonding = compute_bonding(triclinic, 6.0, 2.0)
    coordination = compute_coordination(bonding)
    per_element = triclinic.count_elements()
    for center in bonding.elements:
        for neighbor in bonding.elements:
            assert coordination.distribution(center, neighbor).sum() == per_element[center]
    assert coordination.per_atom.sum() == bonding.n_bonds


def test_isolated_atom_has_zero_coordination() -> None:
    cell = Cell(Lattice(3.0, 3.0, 3.0, 90.0, 90.0, 90.0))
    cell.add_atom("Si", (1.0, 1.0, 1.0))
    coordination = compute_coordination(compute_bonding(cell, 5.0, 1.2))
    assert coordination.counts.shape == (1, 1, 2)
    assert coordination.distribution("Si", "Si").tolist() == [1, 0]


def test_simple_cubic_angles(simple_cubic: Cell) -> None:
    bonding = compute_bonding(simple_cubic, 4.1, 1.0, {"Po": 2.1})
    angles = compute_bond_angles(bonding)
    samples = angles.triple("Po", "Po", "Po")

    # 6 neighbors give 30 ordered pairs per atom
    assert samples.size == 8 * 30
    right = np.isclose(samples, 90.0)
    straight = np.isclose(samples, 180.0)
    assert right.sum() == 8 * 24
    assert straight.sum() == 8 * 6
    assert np.all(right | straight)


def test_two_images_of_the_same_atom_form_an_angle(simple_cubic: Cell) -> None:
    bonding = compute_bonding(simple_cubic, 4.1, 1.0, {"Po": 2.1})
    records = bonding.neighbors[0]
    # Both images of atom 1 sit on opposite sides of atom 0
    assert records[0].atom_id == records[1].atom_id
    samples = compute_bond_angles(bonding).triple("Po", "Po", "Po")
    assert np.isclose(samples, 180.0).any()


def test_angles_in_radians(simple_cubic: Cell) -> None:
    bonding = compute_bonding(simple_cubic, 4.1, 1.0, {"Po": 2.1})
    angles = compute_bond_angles(bonding, degrees=False)
    assert not angles.degrees
    samples = angles.triple("Po", "Po", "Po")
    assert np.all(np.isclose(samples, np.pi / 2) | np.isclose(samples, np.pi))


def test_rock_salt_angles_are_bucketed_by_center(rock_salt: Cell) -> None:
    bonding = compute_bonding(rock_salt, 3.0, 1.5, {"Na": 1.0, "Cl": 1.0})
    angles = compute_bond_angles(bonding)
    assert angles.triple("Cl", "Na", "Cl").size == 4 * 30
    assert angles.triple("Na", "Cl", "Na").size == 4 * 30
    assert angles.triple("Na", "Na", "Na").size == 0
    assert angles.triple("Na", "Na", "Cl").size == 0


def test_atoms_with_fewer_than_two_bonds_give_no_angles() -> None:
    cell = Cell(Lattice(3.0, 10.0, 10.0, 90.0, 90.0, 90.0))
    cell.add_atom("C", (0.0, 0.0, 0.0))
    cell.add_atom("C", (1.4, 0.0, 0.0))
    # Only the direct neighbor is close enough
    bonding = compute_bonding(cell, 2.0, 1.0, {"C": 0.75})
    assert [len(records) for records in bonding.neighbors] == [1, 1]
    assert compute_bond_angles(bonding).triple("C", "C", "C").size == 0


def overlapping_cell() -> Cell:
    cell = Cell(Lattice(10.0, 10.0, 10.0, 90.0, 90.0, 90.0))
    cell.add_atom("C", (1.0, 1.0, 1.0))
    cell.add_atom("C", (1.0, 1.0, 1.0))
    cell.add_atom("C", (2.4, 1.0, 1.0))
    cell.add_atom("C", (1.0, 2.4, 1.0))
    return cell


def test_zero_length_bonds_are_skipped_without_nan() -> None:
    bonding = compute_bonding(overlapping_cell(), 2.0, 1.0, {"C": 0.75})
    assert [len(records) for records in bonding.neighbors] == [3, 3, 2, 2]

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        angles = compute_bond_angles(bonding)

    assert angles.n_skipped == 2
    values = np.sort(angles.triple("C", "C", "C"))
    assert not np.isnan(values).any()
    assert values.size == 8
    assert np.allclose(values[:4], 0.0, atol=1e-4)
    assert np.allclose(values[4:], 90.0)
