"""Fake implementations for testing.

These fakes allow unit tests to run without a Kubernetes cluster.
"""

from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from driverctl.errors import ClusterConnectionError, PatchApplyError
from driverctl.kube.base import ClusterClient, ClusterClientFactory, ConfigMapInfo


class FakeClusterClient(ClusterClient):
    """In-memory ConfigMap store.

    Records all calls for assertion. ConfigMaps are listed in insertion
    order. JSON-Patch ``replace`` operations on ``/data/<key>`` are applied
    to the stored data.
    """

    def __init__(self, config_maps: list[ConfigMapInfo] | None = None) -> None:
        self._config_maps: list[ConfigMapInfo] = [copy.deepcopy(cm) for cm in config_maps or []]

        self.list_calls: list[dict[str, Any]] = []
        self.patch_calls: list[dict[str, Any]] = []

        self._list_exception: Exception | None = None
        self._patch_failures: dict[str, Exception] = {}

    def add_config_map(
        self,
        name: str,
        *,
        namespace: str = "falco",
        engine_kind: str | None = None,
        labels: dict[str, str] | None = None,
    ) -> ConfigMapInfo:
        data = {} if engine_kind is None else {"engine.kind": engine_kind}
        cm = ConfigMapInfo(
            name=name,
            namespace=namespace,
            data=data,
            labels=labels if labels is not None else {"app.kubernetes.io/instance": "falco"},
        )
        self._config_maps.append(cm)
        return cm

    def get(self, name: str, namespace: str = "falco") -> ConfigMapInfo:
        for cm in self._config_maps:
            if cm.name == name and cm.namespace == namespace:
                return cm
        raise KeyError(f"{namespace}/{name}")

    def set_list_exception(self, exception: Exception | None) -> None:
        """Raise ``exception`` on every list call (simulate API unreachable)."""
        self._list_exception = exception

    def fail_patch(self, name: str, exception: Exception | None = None) -> None:
        """Make patching ConfigMap ``name`` fail."""
        self._patch_failures[name] = exception or PatchApplyError(
            f"patching configmap {name} failed: 422 Unprocessable Entity",
            details={"name": name, "status": 422},
        )

    @property
    def patched_names(self) -> list[str]:
        return [call["name"] for call in self.patch_calls]

    async def list_config_maps(
        self, namespace: str, *, label_selector: str
    ) -> list[ConfigMapInfo]:
        self.list_calls.append({"namespace": namespace, "label_selector": label_selector})

        if self._list_exception is not None:
            raise self._list_exception

        # Single equality-based "key=value" term, as the API server parses it
        key, sep, value = label_selector.partition("=")
        if not sep or ":" in key:
            raise ClusterConnectionError(
                f"listing configmaps in {namespace} failed: 400 invalid label selector",
                details={"namespace": namespace, "status": 400},
            )
        return [
            copy.deepcopy(cm)
            for cm in self._config_maps
            if cm.namespace == namespace and cm.labels.get(key) == value
        ]

    async def patch_config_map(
        self, name: str, namespace: str, patch: list[dict[str, Any]]
    ) -> None:
        self.patch_calls.append({"name": name, "namespace": namespace, "patch": patch})

        if name in self._patch_failures:
            raise self._patch_failures[name]

        cm = self.get(name, namespace)
        for op in patch:
            assert op["op"] == "replace"
            assert op["path"].startswith("/data/")
            cm.data[op["path"][len("/data/"):]] = op["value"]


class FakeClientFactory(ClusterClientFactory):
    """Hands out a single FakeClusterClient."""

    def __init__(
        self,
        client: FakeClusterClient | None = None,
        *,
        connect_exception: Exception | None = None,
    ) -> None:
        self.client = client or FakeClusterClient()
        self.connect_calls = 0
        self.closed = False
        self._connect_exception = connect_exception

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[ClusterClient]:
        self.connect_calls += 1
        if self._connect_exception is not None:
            raise self._connect_exception
        try:
            yield self.client
        finally:
            self.closed = True


def unreachable_factory() -> FakeClientFactory:
    """Factory whose credentials cannot be resolved."""
    return FakeClientFactory(
        connect_exception=ClusterConnectionError("cannot load kubernetes credentials from in-cluster")
    )
