"""JSON persistence of analysis parameters."""

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from .logger import get_logger

# Live objects that are written as null and never read back
RUNTIME_FIELDS = ("logger",)


def parameters_to_dict(parameters: Any) -> dict[str, Any]:
    """
    Plain JSON-ready dictionary of a parameter dataclass.

    Runtime-only fields are written as None and paths as strings.
    """
    if not is_dataclass(parameters) or isinstance(parameters, type):
        raise TypeError("Parameters must be a dataclass instance")

    data: dict[str, Any] = {}
    for field in fields(parameters):
        value = None if field.name in RUNTIME_FIELDS else getattr(parameters, field.name)
        data[field.name] = str(value) if isinstance(value, Path) else value
    return data


def save_parameters_to_json(parameters: Any, filepath: str | Path = "input_params.json") -> Path:
    """
    Save analysis parameters to a JSON file.

    Args:
        parameters: Dataclass instance, usually an AnalysisParameters
        filepath: Output path (default: input_params.json)

    Returns:
        Path of the written file
    """
    output_path = Path(filepath)
    output_path.write_text(json.dumps(parameters_to_dict(parameters), indent=2))
    get_logger().info(f"Input parameters saved to: {output_path}")
    return output_path


def load_parameters_from_json(filepath: str | Path, parameter_class: type | None = None) -> Any:
    """
    Rebuild parameters saved by :func:`save_parameters_to_json`.

    Args:
        filepath: JSON file to read
        parameter_class: Dataclass to build (default: AnalysisParameters)

    Returns:
        Instance of ``parameter_class``

    Raises:
        ValueError: If the file holds keys the dataclass does not define
    """
    if parameter_class is None:
        from ..analysis.input_parameters import AnalysisParameters

        parameter_class = AnalysisParameters

    data = json.loads(Path(filepath).read_text())
    for name in RUNTIME_FIELDS:
        data.pop(name, None)

    unknown = set(data) - {field.name for field in fields(parameter_class)}
    if unknown:
        raise ValueError(f"Unknown parameter(s) in {filepath}: {', '.join(sorted(unknown))}")
    return parameter_class(**data)
