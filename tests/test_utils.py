import io
import json

import pytest
from rich.console import Console

from struct_stats.analysis import AnalysisParameters
from struct_stats.utils import (
    StatsLogger,
    get_logger,
    load_parameters_from_json,
    parameters_to_dict,
    save_parameters_to_json,
    set_logger,
)


def _logger(**kwargs) -> tuple[StatsLogger, io.StringIO]:
    buffer = io.StringIO()
    return StatsLogger(console=Console(file=buffer, width=200), **kwargs), buffer


def test_logger_levels() -> None:
    logger, buffer = _logger()
    logger.info("plain info")
    logger.debug("hidden debug")
    logger.success("all good")
    output = buffer.getvalue()
    assert "INFO: plain info" in output
    assert "hidden debug" not in output
    assert "SUCCESS: all good" in output
    assert "test_utils.py" in output


def test_verbose_logger_shows_debug() -> None:
    logger, buffer = _logger(verbose=True)
    logger.debug("details")
    assert "DEBUG: details" in buffer.getvalue()


def test_quiet_logger_shows_only_errors() -> None:
    logger, buffer = _logger(quiet=True)
    logger.info("chatter")
    logger.warning("careful")
    logger.error("broken")
    output = buffer.getvalue()
    assert "chatter" not in output
    assert "careful" not in output
    assert "ERROR: broken" in output


def test_global_logger_can_be_replaced() -> None:
    previous = get_logger()
    logger, _ = _logger()
    set_logger(logger)
    try:
        assert get_logger() is logger
    finally:
        set_logger(previous)


def test_parameters_json_round_trip(tmp_path) -> None:
    logger, _ = _logger()
    params = AnalysisParameters(
        structure_file="POSCAR",
        output_prefix="out/nacl",
        cutoff=8.0,
        radii={"Na": 1.0},
        log=True,
        logger=logger,
    )
    path = save_parameters_to_json(params, tmp_path / "params.json")
    loaded = load_parameters_from_json(path, AnalysisParameters)

    assert loaded.logger is None
    assert loaded.cutoff == 8.0
    assert loaded.radii == {"Na": 1.0}
    assert loaded.output_prefix == "out/nacl"


def test_logger_table() -> None:
    logger, buffer = _logger()
    logger.table("Mean coordination", ["Center-Neighbor", "<CN>"], [("Na-Cl", 6.0), ("Cl-Na", 5.5)])
    output = buffer.getvalue()
    assert "Mean coordination" in output
    assert "6.000" in output
    assert "5.500" in output


def test_quiet_logger_hides_tables() -> None:
    logger, buffer = _logger(quiet=True)
    logger.table("Hidden", ["a"], [("x",)])
    assert buffer.getvalue() == ""


def test_parameters_to_dict_drops_logger() -> None:
    logger, _ = _logger()
    data = parameters_to_dict(AnalysisParameters(structure_file="POSCAR", output_prefix="nacl", logger=logger))
    assert data["logger"] is None
    assert data["structure_file"] == "POSCAR"


def test_parameters_to_dict_rejects_plain_objects() -> None:
    with pytest.raises(TypeError):
        parameters_to_dict({"cutoff": 6.0})


def test_load_parameters_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"structure_file": "POSCAR", "output_prefix": "nacl", "smearing": 0.1}))
    with pytest.raises(ValueError, match="smearing"):
        load_parameters_from_json(path)
