import json
import logging

from .constants import APP_VERSION
from .models import to_dict, from_dict
from .utils import UNITS, UNIT_INCH

logger = logging.getLogger(__name__)


class ProjectError(Exception):
    """Raised when a project file cannot be read or written."""


def save_project(path, config, unit):
    data = {
        "version": APP_VERSION,
        "unit": unit,
        "config": to_dict(config),
    }
    try:
        with open(path, 'w') as f: json.dump(data, f, indent=2)
    except OSError as e:
        raise ProjectError(f"Could not write {path}: {e}") from e
    logger.info("Saved project to %s", path)


def load_project(path):
    """Returns (config, unit) stored in a project file."""
    try:
        with open(path, 'r') as f: data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ProjectError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("config"), dict):
        raise ProjectError(f"{path} is not a mount project")

    unit = data.get("unit")
    if unit not in UNITS:
        logger.warning("Unknown unit %r in %s, using inches", unit, path)
        unit = UNIT_INCH
    try:
        config = from_dict(data["config"])
    except (TypeError, ValueError) as e:
        raise ProjectError(f"Invalid values in {path}: {e}") from e

    logger.info("Loaded project %s (version %s)", path, data.get("version", "?"))
    return config, unit
