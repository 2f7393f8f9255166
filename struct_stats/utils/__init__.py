"""Logging and parameter persistence helpers."""

from .json_utils import load_parameters_from_json, parameters_to_dict, save_parameters_to_json
from .logger import StatsLogger, format_duration, get_logger, set_logger

__all__ = [
    "StatsLogger",
    "format_duration",
    "get_logger",
    "set_logger",
    "load_parameters_from_json",
    "parameters_to_dict",
    "save_parameters_to_json",
]
