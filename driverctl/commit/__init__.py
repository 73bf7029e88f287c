"""Commit a driver selection into Falco configuration."""

from driverctl.commit.cluster import ClusterConfigPatcher, build_engine_kind_patch
from driverctl.commit.dispatcher import (
    ClusterResourceSet,
    ConfigTarget,
    LocalFile,
    commit,
    resolve_target,
)
from driverctl.commit.local import LocalConfigPatcher, extract_engine_kind
from driverctl.commit.outcome import CommitResult, OutcomeStatus, PatchOutcome
from driverctl.commit.validator import check_runs_with_driver

__all__ = [
    "ClusterConfigPatcher",
    "ClusterResourceSet",
    "CommitResult",
    "ConfigTarget",
    "LocalConfigPatcher",
    "LocalFile",
    "OutcomeStatus",
    "PatchOutcome",
    "build_engine_kind_patch",
    "check_runs_with_driver",
    "commit",
    "extract_engine_kind",
    "resolve_target",
]
