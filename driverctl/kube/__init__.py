"""Kubernetes access layer."""

from driverctl.kube.base import ClusterClient, ClusterClientFactory, ConfigMapInfo
from driverctl.kube.client import KubernetesClientFactory, KubernetesClusterClient

__all__ = [
    "ClusterClient",
    "ClusterClientFactory",
    "ConfigMapInfo",
    "KubernetesClientFactory",
    "KubernetesClusterClient",
]
