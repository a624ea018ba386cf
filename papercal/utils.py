import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .config import CalendarConfig
from .errors import ConfigError, SourceDecodeError
from .models import SpecialDaysSource
from .special_days import SpecialDayStore, build_store

logger = logging.getLogger(__name__)

CONFIG_DIR = Path("config")
DEFAULT_CONFIG_PATH = CONFIG_DIR / "calendar.yaml"

PathLike = Union[str, Path]


def _read_document(path: Path) -> Dict[str, Any]:
    """Reads a YAML or TOML file into a dict, chosen by extension."""
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            data = tomllib.load(f)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    return data or {}


def load_config(path: Optional[PathLike] = None) -> CalendarConfig:
    """
    Loads the calendar configuration from YAML.
    Without a path, config/calendar.yaml is used when present and the
    defaults otherwise.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            logger.debug("no %s, using default configuration", path)
            return CalendarConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at {path}")

    try:
        data = _read_document(path)
        return CalendarConfig(**data)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, ValidationError, TypeError) as e:
        raise ConfigError(f"can't load config file {str(path)!r}: {e}") from e


def load_special_days(path: Optional[PathLike]) -> Optional[SpecialDaysSource]:
    """Loads special days from a YAML or TOML file. No path, no special days."""
    if not path:
        return None
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Special days file not found at {path}")

    try:
        data = _read_document(path)
        source = SpecialDaysSource(**data)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, ValidationError, TypeError) as e:
        raise SourceDecodeError(f"can't decode special days file {str(path)!r}: {e}") from e

    logger.debug("read %d special day records from %s", len(source.day), path)
    return source


def load_store(path: Optional[PathLike], year: int, month: int) -> SpecialDayStore:
    source = load_special_days(path)
    if source is None:
        return SpecialDayStore.empty(year)
    return build_store(source, year, month)
