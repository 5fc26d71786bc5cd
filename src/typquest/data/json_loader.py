"""Reads definition files from disk."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import DataLoadError

logger = logging.getLogger(__name__)


def load_json(path: Path) -> object:
    """Parse one definition file, wrapping every I/O or decode failure in DataLoadError."""
    logger.debug("Loading definitions from %s", path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Unable to read definition file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path} (line {exc.lineno}): {exc.msg}") from exc
