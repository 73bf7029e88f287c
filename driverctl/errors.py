"""driverctl error types.

Error codes are stable strings for programmatic handling. Everything except
EngineKindNotDriverError propagates to the caller and aborts the commit;
EngineKindNotDriverError is turned into a Skipped outcome by the patchers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from driverctl.commit.outcome import CommitResult


class DriverCtlError(Exception):
    """Base error for all driverctl exceptions."""

    code: str = "internal_error"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)


class EngineKindNotDriverError(DriverCtlError):
    """engine.kind does not name a driver-based engine.

    Not a failure for the commit: patchers log it and skip the target.
    """

    code = "engine_kind_not_driver"
    message = "engine.kind is not driver driven"

    def __init__(self, engine_kind: str, message: str | None = None) -> None:
        self.engine_kind = engine_kind
        super().__init__(
            message or f"engine.kind is not driver driven: {engine_kind}",
            details={"engine_kind": engine_kind},
        )


class InvalidDriverTypeError(DriverCtlError):
    """String does not name a known driver type."""

    code = "invalid_driver_type"
    message = "Invalid driver type"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"invalid driver type: {value!r}",
            details={"value": value},
        )


class ConfigIOError(DriverCtlError):
    """Local file could not be read or written.

    Note: Named to avoid shadowing Python's builtin IOError.
    """

    code = "io_error"
    message = "Config file I/O failed"


class ConfigParseError(DriverCtlError):
    """Structured content is malformed."""

    code = "parse_error"
    message = "Malformed configuration"


class ClusterConnectionError(DriverCtlError):
    """Credentials could not be resolved or the API server is unreachable.

    Note: Named to avoid shadowing Python's builtin ConnectionError.
    """

    code = "connection_error"
    message = "Cannot reach the Kubernetes API"


class NotFoundError(DriverCtlError):
    """No ConfigMap matched the discovery label selector."""

    code = "not_found"
    message = "No matching configmaps found"


class PatchApplyError(DriverCtlError):
    """A ConfigMap patch was rejected or failed.

    Aborts the remaining ConfigMaps of the batch. ``result`` holds the
    outcomes gathered up to and including the failed one.
    """

    code = "patch_failed"
    message = "Failed to patch configmap"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        *,
        result: "CommitResult | None" = None,
    ) -> None:
        super().__init__(message, details)
        self.result = result
