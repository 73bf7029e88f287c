"""driverctl configuration management.

Configuration sources (in priority order):
1. Environment variables (DRIVERCTL_ prefix)
2. Config file (driverctl.yaml)
3. Defaults
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FalcoConfig(BaseModel):
    """Local Falco installation."""

    # Read by Falco when it runs directly on the host
    config_file: str = "/etc/falco/falco.yaml"


class K8sConfig(BaseModel):
    """Kubernetes deployment of Falco.

    Only used when a namespace is given, either here or on the command line.
    """

    namespace: str | None = None
    kubeconfig: str | None = None  # None = in-cluster config

    # Passed verbatim to the list call
    label_selector: str = "app.kubernetes.io/instance=falco"

    # ConfigMap data key holding Falco's engine.kind
    engine_kind_key: str = "engine.kind"


class StoreConfig(BaseModel):
    """Where the chosen driver is persisted for other driver subcommands."""

    path: str = "/etc/falcoctl/falcoctl.yaml"


class LogConfig(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = "info"
    format: Literal["console", "json"] = "console"


class Settings(BaseSettings):
    """driverctl settings."""

    model_config = SettingsConfigDict(
        env_prefix="DRIVERCTL_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    falco: FalcoConfig = Field(default_factory=FalcoConfig)
    k8s: K8sConfig = Field(default_factory=K8sConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # File values arrive as init kwargs; environment must win over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def _load_config_file() -> dict:
    """Load configuration from YAML file if exists.

    Looks for config file in order:
    1. DRIVERCTL_CONFIG_FILE environment variable
    2. ./driverctl.yaml
    3. /etc/driverctl/config.yaml
    """
    config_paths = [
        os.environ.get("DRIVERCTL_CONFIG_FILE"),
        Path("driverctl.yaml"),
        Path("/etc/driverctl/config.yaml"),
    ]

    for path in config_paths:
        if path is None:
            continue
        path = Path(path)
        if path.exists():
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Configuration is loaded from:
    1. YAML config file (if exists)
    2. Environment variables (override)
    3. Defaults
    """
    file_config = _load_config_file()

    # Environment variables override file values via pydantic-settings
    return Settings(**file_config)
