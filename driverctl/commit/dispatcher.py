"""Route a commit to the local file or to the cluster ConfigMaps."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from driverctl.commit.cluster import (
    DEFAULT_ENGINE_KIND_KEY,
    DEFAULT_LABEL_SELECTOR,
    ClusterConfigPatcher,
)
from driverctl.commit.local import LocalConfigPatcher
from driverctl.commit.outcome import CommitResult
from driverctl.drivers.types import DriverType
from driverctl.kube.base import ClusterClientFactory

logger = structlog.get_logger()


@dataclass(frozen=True)
class LocalFile:
    """falco.yaml on the local filesystem."""

    path: str


@dataclass(frozen=True)
class ClusterResourceSet:
    """Falco ConfigMaps selected by label within a namespace."""

    namespace: str
    label_selector: str = DEFAULT_LABEL_SELECTOR
    engine_kind_key: str = DEFAULT_ENGINE_KIND_KEY


ConfigTarget = LocalFile | ClusterResourceSet


def resolve_target(
    *,
    namespace: str | None,
    falco_config_file: str,
    label_selector: str = DEFAULT_LABEL_SELECTOR,
    engine_kind_key: str = DEFAULT_ENGINE_KIND_KEY,
) -> ConfigTarget:
    """A non-empty namespace means Falco runs on Kubernetes."""
    if namespace:
        return ClusterResourceSet(
            namespace=namespace,
            label_selector=label_selector,
            engine_kind_key=engine_kind_key,
        )
    return LocalFile(path=falco_config_file)


async def commit(
    driver_type: DriverType,
    target: ConfigTarget,
    *,
    client_factory: ClusterClientFactory | None = None,
) -> CommitResult:
    """Propagate ``driver_type`` into ``target``.

    No retries and no fallback from one kind of target to the other; errors
    from the patchers propagate unchanged.
    """
    if isinstance(target, ClusterResourceSet):
        if client_factory is None:
            raise ValueError("client_factory is required for cluster targets")
        logger.info(
            "commit.dispatch",
            target="cluster",
            namespace=target.namespace,
            driver_type=driver_type.value,
        )
        async with client_factory.connect() as client:
            patcher = ClusterConfigPatcher(
                client,
                target.namespace,
                label_selector=target.label_selector,
                engine_kind_key=target.engine_kind_key,
            )
            return await patcher.apply(driver_type)

    logger.info(
        "commit.dispatch",
        target="local",
        path=target.path,
        driver_type=driver_type.value,
    )
    outcome = LocalConfigPatcher(target.path).apply(driver_type)
    return CommitResult(outcomes=[outcome])
