"""ConfigMap client backed by kubernetes-asyncio.

Credentials come from an explicit kubeconfig when one is given, otherwise
from the in-cluster service account.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import aiohttp
import structlog
from kubernetes_asyncio import client, config
from kubernetes_asyncio.client import ApiClient, ApiException, Configuration
from kubernetes_asyncio.config import ConfigException

from driverctl.errors import ClusterConnectionError, PatchApplyError
from driverctl.kube.base import ClusterClient, ClusterClientFactory, ConfigMapInfo

logger = structlog.get_logger()

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"


def _api_error_details(exc: ApiException) -> dict[str, Any]:
    return {"status": exc.status, "reason": exc.reason, "body": exc.body}


class KubernetesClusterClient(ClusterClient):
    """ClusterClient talking to a real API server."""

    def __init__(self, api_client: ApiClient) -> None:
        self._v1 = client.CoreV1Api(api_client)
        self._log = logger.bind(client="k8s")

    async def list_config_maps(
        self, namespace: str, *, label_selector: str
    ) -> list[ConfigMapInfo]:
        self._log.debug(
            "k8s.list_config_maps",
            namespace=namespace,
            label_selector=label_selector,
        )
        try:
            cm_list = await self._v1.list_namespaced_config_map(
                namespace=namespace,
                label_selector=label_selector,
            )
        except ApiException as e:
            raise ClusterConnectionError(
                f"listing configmaps in {namespace!r} failed: {e.status} {e.reason}",
                details={"namespace": namespace, **_api_error_details(e)},
            ) from e
        except aiohttp.ClientError as e:
            raise ClusterConnectionError(
                f"listing configmaps in {namespace!r} failed: {e}",
                details={"namespace": namespace},
            ) from e

        items = []
        for cm in cm_list.items:
            items.append(
                ConfigMapInfo(
                    name=cm.metadata.name,
                    namespace=cm.metadata.namespace or namespace,
                    data=dict(cm.data or {}),
                    labels=dict(cm.metadata.labels or {}),
                )
            )

        self._log.debug("k8s.list_config_maps.result", count=len(items))
        return items

    async def patch_config_map(
        self, name: str, namespace: str, patch: list[dict[str, Any]]
    ) -> None:
        self._log.info("k8s.patch_config_map", name=name, namespace=namespace)
        try:
            await self._v1.patch_namespaced_config_map(
                name=name,
                namespace=namespace,
                body=patch,
                _content_type=JSON_PATCH_CONTENT_TYPE,
            )
        except ApiException as e:
            raise PatchApplyError(
                f"patching configmap {namespace}/{name} failed: {e.status} {e.reason}",
                details={"name": name, "namespace": namespace, **_api_error_details(e)},
            ) from e
        except aiohttp.ClientError as e:
            raise PatchApplyError(
                f"patching configmap {namespace}/{name} failed: {e}",
                details={"name": name, "namespace": namespace},
            ) from e


class KubernetesClientFactory(ClusterClientFactory):
    """Builds a KubernetesClusterClient from kubeconfig or in-cluster config."""

    def __init__(self, kubeconfig: str | None = None) -> None:
        self._kubeconfig = kubeconfig
        self._log = logger.bind(client="k8s")

    async def _load_configuration(self) -> Configuration:
        configuration = Configuration()
        try:
            if self._kubeconfig:
                await config.load_kube_config(
                    config_file=self._kubeconfig,
                    client_configuration=configuration,
                )
                self._log.info("k8s.config.loaded", source="kubeconfig", path=self._kubeconfig)
            else:
                config.load_incluster_config(client_configuration=configuration)
                self._log.info("k8s.config.loaded", source="incluster")
        except (ConfigException, OSError) as e:
            source = self._kubeconfig or "in-cluster"
            raise ClusterConnectionError(
                f"cannot load kubernetes credentials from {source}: {e}",
                details={"kubeconfig": self._kubeconfig},
            ) from e
        return configuration

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[ClusterClient]:
        configuration = await self._load_configuration()
        api_client = ApiClient(configuration=configuration)
        try:
            yield KubernetesClusterClient(api_client)
        finally:
            await api_client.close()
