"""Unit tests for the driver config command."""

from __future__ import annotations

import pytest
import yaml
from structlog.testing import capture_logs

from driverctl.commands.driver_config import DriverConfigOptions, run_driver_config
from driverctl.config import FalcoConfig, K8sConfig, Settings, StoreConfig
from driverctl.drivers.types import DriverType
from driverctl.errors import ConfigIOError, NotFoundError, PatchApplyError
from driverctl.options import DriverOptions
from tests.fakes import FakeClientFactory, FakeClusterClient


@pytest.fixture
def paths(tmp_path):
    falco_yaml = tmp_path / "falco.yaml"
    falco_yaml.write_text("engine:\n  kind: kmod\n")
    return {"falco": falco_yaml, "store": tmp_path / "falcoctl.yaml"}


@pytest.fixture
def settings(paths):
    return Settings(
        falco=FalcoConfig(config_file=str(paths["falco"])),
        store=StoreConfig(path=str(paths["store"])),
    )


def _options(driver_type=DriverType.EBPF, **kwargs):
    return DriverConfigOptions(
        driver=DriverOptions(type=driver_type, version="7.0.0", host_root="/host"),
        **kwargs,
    )


class TestLocalCommit:
    @pytest.mark.asyncio
    async def test_updates_falco_yaml_and_stores(self, settings, paths):
        result = await run_driver_config(_options(), settings)

        assert result is not None and result.success
        assert paths["falco"].read_text() == "engine:\n  kind: ebpf\n"
        stored = yaml.safe_load(paths["store"].read_text())["driver"]
        assert stored["type"] == ["ebpf"]
        assert stored["version"] == "7.0.0"
        assert stored["hostroot"] == "/host"

    @pytest.mark.asyncio
    async def test_skip_still_stores(self, settings, paths):
        paths["falco"].write_text("engine:\n  kind: gvisor\n")

        result = await run_driver_config(_options(), settings)

        assert result.success and len(result.skipped) == 1
        assert paths["falco"].read_text() == "engine:\n  kind: gvisor\n"
        assert paths["store"].exists()

    @pytest.mark.asyncio
    async def test_failure_does_not_store(self, settings, paths):
        paths["falco"].unlink()

        with pytest.raises(ConfigIOError):
            await run_driver_config(_options(), settings)

        assert not paths["store"].exists()

    @pytest.mark.asyncio
    async def test_option_paths_override_settings(self, settings, paths, tmp_path):
        other = tmp_path / "other.yaml"
        other.write_text("engine:\n  kind: modern_ebpf\n")
        store = tmp_path / "store" / "driver.yaml"

        await run_driver_config(
            _options(DriverType.KMOD, falco_config_file=str(other), store_path=str(store)),
            settings,
        )

        assert other.read_text() == "engine:\n  kind: kmod\n"
        assert paths["falco"].read_text() == "engine:\n  kind: kmod\n"
        assert store.exists() and not paths["store"].exists()

    @pytest.mark.asyncio
    async def test_update_disabled(self, settings, paths):
        with capture_logs() as logs:
            result = await run_driver_config(_options(update_falco=False), settings)

        assert result is None
        assert paths["falco"].read_text() == "engine:\n  kind: kmod\n"
        assert yaml.safe_load(paths["store"].read_text())["driver"]["type"] == ["ebpf"]

        start = next(e for e in logs if e["event"] == "driver.config.start")
        assert start["type"] == "ebpf"
        assert start["host_root"] == "/host"
        assert start["repos"] == "https://download.falco.org/driver"


class TestClusterCommit:
    @pytest.mark.asyncio
    async def test_namespace_routes_to_cluster(self, settings, paths):
        client = FakeClusterClient()
        client.add_config_map("falco", namespace="security", engine_kind="kmod")

        result = await run_driver_config(
            _options(DriverType.MODERN_EBPF, namespace="security"),
            settings,
            client_factory=FakeClientFactory(client),
        )

        assert result.success
        assert client.get("falco", "security").data["engine.kind"] == "modern_ebpf"
        # local file untouched when targeting the cluster
        assert paths["falco"].read_text() == "engine:\n  kind: kmod\n"
        assert paths["store"].exists()

    @pytest.mark.asyncio
    async def test_namespace_from_settings(self, paths):
        settings = Settings(
            falco=FalcoConfig(config_file=str(paths["falco"])),
            k8s=K8sConfig(namespace="falco", label_selector="app=falco"),
            store=StoreConfig(path=str(paths["store"])),
        )
        client = FakeClusterClient()
        client.add_config_map("falco", engine_kind="ebpf", labels={"app": "falco"})

        await run_driver_config(
            _options(DriverType.KMOD),
            settings,
            client_factory=FakeClientFactory(client),
        )

        assert client.list_calls[0] == {"namespace": "falco", "label_selector": "app=falco"}
        assert client.get("falco").data["engine.kind"] == "kmod"

    @pytest.mark.asyncio
    async def test_not_found_does_not_store(self, settings, paths):
        with pytest.raises(NotFoundError):
            await run_driver_config(
                _options(namespace="falco"),
                settings,
                client_factory=FakeClientFactory(FakeClusterClient()),
            )

        assert not paths["store"].exists()

    @pytest.mark.asyncio
    async def test_patch_failure_does_not_store(self, settings, paths):
        client = FakeClusterClient()
        client.add_config_map("falco-a", engine_kind="kmod")
        client.add_config_map("falco-b", engine_kind="kmod")
        client.fail_patch("falco-a")

        with pytest.raises(PatchApplyError):
            await run_driver_config(
                _options(namespace="falco"),
                settings,
                client_factory=FakeClientFactory(client),
            )

        assert client.patched_names == ["falco-a"]
        assert not paths["store"].exists()
