"""Driver type definitions."""

from driverctl.drivers.types import DriverType

__all__ = ["DriverType"]
