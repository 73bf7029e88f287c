"""Command implementations, independent of the CLI layer."""

from driverctl.commands.driver_config import DriverConfigOptions, run_driver_config

__all__ = ["DriverConfigOptions", "run_driver_config"]
