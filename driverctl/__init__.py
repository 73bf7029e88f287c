"""driverctl - commit a Falco driver selection into Falco configuration."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from driverctl.commit import (
    ClusterConfigPatcher,
    CommitResult,
    LocalConfigPatcher,
    PatchOutcome,
    commit,
)
from driverctl.drivers import DriverType
from driverctl.errors import (
    ClusterConnectionError,
    ConfigIOError,
    ConfigParseError,
    DriverCtlError,
    EngineKindNotDriverError,
    InvalidDriverTypeError,
    NotFoundError,
    PatchApplyError,
)

__all__ = [
    # Commit
    "ClusterConfigPatcher",
    "CommitResult",
    "DriverType",
    "LocalConfigPatcher",
    "PatchOutcome",
    "commit",
    # Errors
    "ClusterConnectionError",
    "ConfigIOError",
    "ConfigParseError",
    "DriverCtlError",
    "EngineKindNotDriverError",
    "InvalidDriverTypeError",
    "NotFoundError",
    "PatchApplyError",
]

try:
    __version__ = _pkg_version("driverctl")
except PackageNotFoundError:
    __version__ = "unknown"
