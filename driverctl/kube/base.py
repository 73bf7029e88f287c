"""Cluster client abstraction.

The Cluster Config Patcher only needs to list ConfigMaps by label and send a
JSON-Patch to one of them. Keeping that surface behind an interface lets the
tests substitute an in-memory fake for the Kubernetes API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator


@dataclass
class ConfigMapInfo:
    """The parts of a ConfigMap the patcher looks at."""

    name: str
    namespace: str
    data: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    @property
    def ref(self) -> str:
        """``namespace/name``, used in logs and outcomes."""
        return f"{self.namespace}/{self.name}"


class ClusterClient(ABC):
    """Minimal ConfigMap API.

    Implementations translate their transport errors into driverctl errors:
    listing failures raise ClusterConnectionError, patch failures raise
    PatchApplyError. Cancellation of the calling task must not be caught.
    """

    @abstractmethod
    async def list_config_maps(
        self, namespace: str, *, label_selector: str
    ) -> list[ConfigMapInfo]:
        """List ConfigMaps in ``namespace`` matching ``label_selector``.

        Order is whatever the API server returns.
        """
        ...

    @abstractmethod
    async def patch_config_map(
        self, name: str, namespace: str, patch: list[dict[str, Any]]
    ) -> None:
        """Apply a JSON-Patch (RFC 6902) to one ConfigMap."""
        ...


class ClusterClientFactory(ABC):
    """Produces a connected ClusterClient for the duration of a commit."""

    @abstractmethod
    @asynccontextmanager
    async def connect(self) -> AsyncIterator[ClusterClient]:
        """Resolve credentials and yield a client.

        Usage:
            async with factory.connect() as client:
                await client.list_config_maps(...)

        Raises:
            ClusterConnectionError: If credentials cannot be resolved
        """
        ...
