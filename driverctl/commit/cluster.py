"""Commit the driver type into Falco ConfigMaps.

ConfigMaps are processed one at a time, in the order the API server lists
them:

- a ConfigMap whose engine.kind is not a driver type is skipped and the
  batch continues;
- a failed patch aborts the batch, leaving later ConfigMaps untouched.

A failure can therefore leave the batch partially patched. The outcomes
collected so far travel with the PatchApplyError.
"""

from __future__ import annotations

from typing import Any

import structlog

from driverctl.commit.outcome import CommitResult, PatchOutcome
from driverctl.commit.validator import check_runs_with_driver
from driverctl.drivers.types import DriverType
from driverctl.errors import EngineKindNotDriverError, NotFoundError, PatchApplyError
from driverctl.kube.base import ClusterClient

logger = structlog.get_logger()

DEFAULT_LABEL_SELECTOR = "app.kubernetes.io/instance=falco"
DEFAULT_ENGINE_KIND_KEY = "engine.kind"


def build_engine_kind_patch(
    driver_type: DriverType, engine_kind_key: str = DEFAULT_ENGINE_KIND_KEY
) -> list[dict[str, Any]]:
    """JSON-Patch replacing the engine kind data key with ``driver_type``."""
    return [
        {
            "op": "replace",
            "path": f"/data/{engine_kind_key}",
            "value": driver_type.value,
        }
    ]


class ClusterConfigPatcher:
    """Replaces engine.kind in every Falco ConfigMap of a namespace."""

    def __init__(
        self,
        client: ClusterClient,
        namespace: str,
        *,
        label_selector: str = DEFAULT_LABEL_SELECTOR,
        engine_kind_key: str = DEFAULT_ENGINE_KIND_KEY,
    ) -> None:
        self._client = client
        self._namespace = namespace
        self._label_selector = label_selector
        self._engine_kind_key = engine_kind_key
        self._log = logger.bind(patcher="cluster", namespace=namespace)

    async def apply(self, driver_type: DriverType) -> CommitResult:
        """Patch every eligible ConfigMap.

        Raises:
            ClusterConnectionError: If the ConfigMaps cannot be listed
            NotFoundError: If no ConfigMap matches the label selector
            PatchApplyError: On the first rejected patch
        """
        config_maps = await self._client.list_config_maps(
            self._namespace, label_selector=self._label_selector
        )
        if not config_maps:
            raise NotFoundError(
                f"no configmaps matching {self._label_selector!r} label were found "
                f"in namespace {self._namespace!r}",
                details={
                    "namespace": self._namespace,
                    "label_selector": self._label_selector,
                },
            )

        patch = build_engine_kind_patch(driver_type, self._engine_kind_key)
        result = CommitResult()

        for cm in config_maps:
            engine_kind = cm.data.get(self._engine_kind_key, "")
            try:
                check_runs_with_driver(engine_kind)
            except EngineKindNotDriverError as exc:
                self._log.warning(
                    "commit.cluster.skipped",
                    config_map=cm.name,
                    reason=str(exc),
                )
                result.add(PatchOutcome.skipped(cm.ref, str(exc)))
                continue

            try:
                await self._client.patch_config_map(cm.name, cm.namespace, patch)
            except PatchApplyError as exc:
                self._log.error(
                    "commit.cluster.failed",
                    config_map=cm.name,
                    error=str(exc),
                )
                result.add(PatchOutcome.failed(cm.ref, exc))
                exc.result = result
                raise

            self._log.info(
                "commit.cluster.applied",
                config_map=cm.name,
                old=engine_kind,
                new=driver_type.value,
            )
            result.add(PatchOutcome.applied(cm.ref))

        return result
