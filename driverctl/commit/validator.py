"""Precondition shared by both patchers."""

from __future__ import annotations

from driverctl.drivers.types import DriverType
from driverctl.errors import EngineKindNotDriverError, InvalidDriverTypeError


def check_runs_with_driver(engine_kind: str) -> DriverType:
    """Return the DriverType named by ``engine_kind``.

    Falco configuration is only touched when engine.kind is a known driver
    type, so that deployments running plugins or gVisor are left alone.
    A cluster may run several Falco instances side by side, some with a
    driver and some without; only the former must be modified.

    Raises:
        EngineKindNotDriverError: If engine_kind is not a driver type
    """
    try:
        return DriverType.parse(engine_kind)
    except InvalidDriverTypeError as exc:
        raise EngineKindNotDriverError(engine_kind) from exc
