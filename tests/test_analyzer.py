import io

import pytest
from ase import Atoms
from ase.io import write
from rich.console import Console

from struct_stats.analysis import AnalysisParameters, StructureAnalyzer
from struct_stats.analysis.validation import validate_parameters
from struct_stats.io import read_histogram_csv, read_structure
from struct_stats.utils import StatsLogger

NACL_SETTINGS = {
    "cutoff": 3.0,
    "rdf_bin_width": 0.25,
    "bond_factor": 1.5,
    "radii": {"Na": 1.0, "Cl": 1.0},
}


def _params(structure, prefix, **overrides) -> AnalysisParameters:
    settings = {**NACL_SETTINGS, **overrides}
    return AnalysisParameters(structure_file=str(structure), output_prefix=str(prefix), **settings)


def test_read_structure(nacl_poscar) -> None:
    cell = read_structure(nacl_poscar)
    assert cell.count_elements() == {"Na": 4, "Cl": 4}
    assert cell.lattice.parameters == pytest.approx((5.64, 5.64, 5.64, 90.0, 90.0, 90.0))
    assert cell.volume == pytest.approx(5.64**3)


def test_read_structure_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        read_structure(tmp_path / "missing.cif")


def test_analyzer_writes_csv_tables(tmp_path, nacl_poscar) -> None:
    analyzer = StructureAnalyzer(_params(nacl_poscar, tmp_path / "nacl"))
    written = analyzer.run()

    assert set(written) == {"rdf", "cn", "bad"}
    for name in ("J", "g", "CN", "BAD"):
        assert (tmp_path / f"nacl_{name}.csv").exists()

    cn = read_histogram_csv(tmp_path / "nacl_CN.csv")
    assert cn.labels == ["Na-Na", "Na-Cl", "Cl-Na", "Cl-Cl"]
    bad = read_histogram_csv(tmp_path / "nacl_BAD.csv")
    assert bad.n_rows == 181

    summary = analyzer.summary()
    assert summary["Na-Cl"] == pytest.approx(6.0)
    assert summary["Cl-Na"] == pytest.approx(6.0)
    assert summary["Na-Na"] == 0.0


def test_analyzer_json_and_plots(tmp_path, nacl_poscar) -> None:
    params = _params(nacl_poscar, tmp_path / "nacl", save_format="json", plot_backend="matplotlib")
    written = StructureAnalyzer(params).run()

    assert written["rdf"] == [tmp_path / "nacl_rdf.json"]
    assert written["cn"] == [tmp_path / "nacl_cn.json"]
    assert written["bad"] == [tmp_path / "nacl_bad.json"]
    assert all(path.exists() for path in written["plots"])
    assert [path.suffix for path in written["plots"]] == [".png"] * 3


def test_analyzer_logs_through_custom_logger(tmp_path, nacl_poscar) -> None:
    buffer = io.StringIO()
    logger = StatsLogger(console=Console(file=buffer, width=200))
    StructureAnalyzer(_params(nacl_poscar, tmp_path / "nacl", log=True, logger=logger)).run()

    output = buffer.getvalue()
    assert "Initializing StructureAnalyzer" in output
    assert "Read 8 atoms" in output
    assert "Analysis complete" in output


def test_analyzer_wraps_stage_failures(tmp_path) -> None:
    molecule = tmp_path / "water.xyz"
    write(molecule, Atoms("H2O", positions=[(0, 0, 0), (0.96, 0, 0), (-0.24, 0.93, 0)]))

    analyzer = StructureAnalyzer(_params(molecule, tmp_path / "water"))
    with pytest.raises(RuntimeError, match="Load failed for .*water.xyz"):
        analyzer.run()


def test_analyzer_reports_unknown_elements(tmp_path) -> None:
    structure = tmp_path / "dummy.extxyz"
    write(structure, Atoms("X2", positions=[(0, 0, 0), (1, 1, 1)], cell=[4, 4, 4], pbc=True))

    analyzer = StructureAnalyzer(_params(structure, tmp_path / "dummy", radii=None))
    with pytest.raises(RuntimeError, match="Bonding failed") as excinfo:
        analyzer.run()
    assert "'X'" in str(excinfo.value)


def test_summary_before_run_fails(tmp_path, nacl_poscar) -> None:
    with pytest.raises(RuntimeError):
        StructureAnalyzer(_params(nacl_poscar, tmp_path / "nacl")).summary()


@pytest.mark.parametrize(
    "overrides",
    [
        {"cutoff": 0.0},
        {"rdf_bin_width": -0.1},
        {"rdf_bin_width": 5.0},
        {"bond_factor": 0.0},
        {"bad_bin_width": 0.0},
        {"bad_bin_width": 200.0},
        {"radii": {"Na": -1.0}},
        {"save_format": "xlsx"},
        {"plot_backend": "bokeh"},
    ],
)
def test_invalid_parameters_are_rejected(tmp_path, nacl_poscar, overrides) -> None:
    with pytest.raises(ValueError):
        validate_parameters(_params(nacl_poscar, tmp_path / "nacl", **overrides))


def test_radian_bin_width_is_not_capped(tmp_path, nacl_poscar) -> None:
    validate_parameters(_params(nacl_poscar, tmp_path / "nacl", bad_bin_width=200.0, degrees=False))


def test_missing_inputs_are_rejected(tmp_path, nacl_poscar) -> None:
    with pytest.raises(ValueError, match="not found"):
        StructureAnalyzer(_params(tmp_path / "missing", tmp_path / "out"))
    with pytest.raises(ValueError, match="Output directory"):
        StructureAnalyzer(_params(nacl_poscar, tmp_path / "nowhere" / "out"))
    with pytest.raises(ValueError, match="prefix"):
        StructureAnalyzer(_params(nacl_poscar, ""))
