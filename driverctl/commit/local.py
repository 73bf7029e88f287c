"""Commit the driver type into a local falco.yaml.

The file is patched textually rather than re-serialized, so comments,
ordering and formatting survive. The cost is that only the exact text
``kind: <current>`` is recognised; any other spelling of it (quotes,
extra or missing spaces after the colon) results in zero replacements.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from driverctl.commit.outcome import PatchOutcome
from driverctl.commit.validator import check_runs_with_driver
from driverctl.drivers.types import DriverType
from driverctl.errors import ConfigParseError, EngineKindNotDriverError
from driverctl.utils.files import read_text, replace_text, write_text_preserving_mode

logger = structlog.get_logger()

CONFIG_KIND_KEY = "kind: "


def extract_engine_kind(content: str, *, source: str = "<string>") -> str:
    """Return ``engine.kind`` from falco.yaml content.

    A missing key yields an empty string.

    Raises:
        ConfigParseError: If the YAML is invalid or not shaped like falco.yaml
    """
    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigParseError(
            f"invalid YAML in {source}: {exc}",
            details={"path": source},
        ) from exc

    if doc is None:
        return ""
    if not isinstance(doc, dict):
        raise ConfigParseError(
            f"{source}: top level is not a mapping",
            details={"path": source},
        )

    engine = doc.get("engine")
    if engine is None:
        return ""
    if not isinstance(engine, dict):
        raise ConfigParseError(
            f"{source}: engine is not a mapping",
            details={"path": source},
        )

    kind = engine.get("kind")
    if kind is None:
        return ""
    return str(kind)


class LocalConfigPatcher:
    """Replaces engine.kind in a single falco.yaml on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._log = logger.bind(patcher="local", path=str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    def apply(self, driver_type: DriverType) -> PatchOutcome:
        """Write ``driver_type`` into engine.kind if Falco runs with a driver.

        Raises:
            ConfigIOError: If the file cannot be read or written
            ConfigParseError: If the file is not valid falco.yaml
        """
        target = str(self._path)
        content = read_text(self._path)
        engine_kind = extract_engine_kind(content, source=target)

        try:
            check_runs_with_driver(engine_kind)
        except EngineKindNotDriverError as exc:
            self._log.warning("commit.local.skipped", reason=str(exc))
            return PatchOutcome.skipped(target, str(exc))

        patched, replacements = replace_text(
            content,
            CONFIG_KIND_KEY + engine_kind,
            CONFIG_KIND_KEY + driver_type.value,
            1,
        )
        if replacements == 0:
            self._log.warning(
                "commit.local.no_match",
                expected=CONFIG_KIND_KEY + engine_kind,
            )
            return PatchOutcome.applied(target, replacements=0)

        write_text_preserving_mode(self._path, patched)
        self._log.info(
            "commit.local.applied",
            old=engine_kind,
            new=driver_type.value,
        )
        return PatchOutcome.applied(target, replacements=replacements)
