"""Driver options shared by driver subcommands."""

from __future__ import annotations

from pydantic import BaseModel, Field

from driverctl.drivers.types import DriverType


class DriverConfig(BaseModel):
    """Driver selection as persisted in the store.

    ``type`` is a list so the store stays readable by tools that accept
    several candidate types; driverctl always writes exactly one.
    """

    type: list[str] = Field(default_factory=list)
    name: str = "falco"
    version: str = ""
    hostroot: str = "/"
    repos: list[str] = Field(default_factory=list)


class DriverOptions(BaseModel):
    """Driver chosen by the operator."""

    type: DriverType
    name: str = "falco"
    version: str = ""
    host_root: str = "/"
    repos: list[str] = Field(
        default_factory=lambda: ["https://download.falco.org/driver"]
    )

    def to_driver_config(self) -> DriverConfig:
        return DriverConfig(
            type=[self.type.value],
            name=self.name,
            version=self.version,
            hostroot=self.host_root,
            repos=list(self.repos),
        )
