"""Persisted driver selection.

The store is a YAML document; driverctl owns only its top-level ``driver``
key and leaves any other keys as they were.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from driverctl.errors import ConfigIOError, ConfigParseError
from driverctl.options import DriverConfig

logger = structlog.get_logger()

DRIVER_KEY = "driver"


def _load_document(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigIOError(
            f"cannot read {path}: {exc.strerror or exc}",
            details={"path": str(path)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigParseError(
            f"{path} is not valid UTF-8: {exc.reason} at byte {exc.start}",
            details={"path": str(path)},
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigParseError(
            f"invalid YAML in {path}: {exc}",
            details={"path": str(path)},
        ) from exc

    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ConfigParseError(
            f"{path}: top level is not a mapping",
            details={"path": str(path)},
        )
    return doc


def store_driver(driver: DriverConfig, path: str | Path) -> None:
    """Write ``driver`` under the ``driver`` key of the store at ``path``.

    Parent directories are created as needed.

    Raises:
        ConfigIOError: If the store cannot be read or written
        ConfigParseError: If the existing store is not a YAML mapping
    """
    path = Path(path)
    doc = _load_document(path)
    doc[DRIVER_KEY] = driver.model_dump()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(doc, f, sort_keys=False)
    except OSError as exc:
        raise ConfigIOError(
            f"cannot write {path}: {exc.strerror or exc}",
            details={"path": str(path)},
        ) from exc

    logger.info("store.driver.saved", path=str(path), driver_type=driver.type)


def load_driver(path: str | Path) -> DriverConfig | None:
    """Read the stored driver selection, if any."""
    path = Path(path)
    raw = _load_document(path).get(DRIVER_KEY)
    if raw is None:
        return None
    try:
        return DriverConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigParseError(
            f"{path}: invalid driver section: {exc}",
            details={"path": str(path)},
        ) from exc
