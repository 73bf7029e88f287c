"""Driver types understood by Falco's engine.kind setting."""

from __future__ import annotations

from enum import Enum

from driverctl.errors import InvalidDriverTypeError


class DriverType(str, Enum):
    """Kernel instrumentation technique.

    The value is the exact token Falco expects in ``engine.kind``.
    """

    KMOD = "kmod"  # kernel module
    EBPF = "ebpf"
    MODERN_EBPF = "modern_ebpf"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "DriverType":
        """Parse a driver type token (exact, case-sensitive).

        Raises:
            InvalidDriverTypeError: If ``value`` is not a known token
        """
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidDriverTypeError(value) from exc

    @classmethod
    def names(cls) -> list[str]:
        """All valid tokens, in declaration order."""
        return [member.value for member in cls]
