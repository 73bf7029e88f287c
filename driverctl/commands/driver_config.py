"""``driver config``: remember a driver and point Falco at it.

Updates the local falco.yaml or the Falco ConfigMaps, depending on whether a
Kubernetes namespace is given. Only Falco deployments using a driver engine
(kmod, ebpf or modern_ebpf) are modified; if engine.kind names anything else
the configuration is left alone.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from driverctl.commit.dispatcher import commit, resolve_target
from driverctl.commit.outcome import CommitResult
from driverctl.config import Settings
from driverctl.kube.base import ClusterClientFactory
from driverctl.kube.client import KubernetesClientFactory
from driverctl.options import DriverOptions
from driverctl.store import store_driver

logger = structlog.get_logger()


@dataclass
class DriverConfigOptions:
    """Options of the ``driver config`` command."""

    driver: DriverOptions
    update_falco: bool = True
    namespace: str | None = None
    kubeconfig: str | None = None
    falco_config_file: str | None = None
    store_path: str | None = None


async def run_driver_config(
    options: DriverConfigOptions,
    settings: Settings,
    *,
    client_factory: ClusterClientFactory | None = None,
) -> CommitResult | None:
    """Commit the driver to Falco configuration, then persist it.

    The store is written only if the commit succeeded (skipped targets
    count as success). Returns None when Falco configuration updates are
    disabled.
    """
    driver = options.driver
    logger.info(
        "driver.config.start",
        name=driver.name,
        version=driver.version,
        type=driver.type.value,
        host_root=driver.host_root,
        repos=",".join(driver.repos),
    )

    result = None
    if options.update_falco:
        namespace = options.namespace or settings.k8s.namespace
        target = resolve_target(
            namespace=namespace,
            falco_config_file=options.falco_config_file or settings.falco.config_file,
            label_selector=settings.k8s.label_selector,
            engine_kind_key=settings.k8s.engine_kind_key,
        )
        if client_factory is None and namespace:
            client_factory = KubernetesClientFactory(
                options.kubeconfig or settings.k8s.kubeconfig
            )
        result = await commit(driver.type, target, client_factory=client_factory)
        logger.info(
            "driver.config.committed",
            applied=len(result.applied),
            skipped=len(result.skipped),
        )

    store_driver(driver.to_driver_config(), options.store_path or settings.store.path)
    return result
