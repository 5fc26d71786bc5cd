"""Data layer utilities for loading JSON definitions."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_definitions_path

__all__ = [
    "DataLoadError",
    "DataError",
    "DataValidationError",
    "get_definitions_path",
]
