"""driverctl command line."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from driverctl.commands.driver_config import DriverConfigOptions, run_driver_config
from driverctl.config import get_settings
from driverctl.drivers.types import DriverType
from driverctl.errors import DriverCtlError
from driverctl.log import configure_logging
from driverctl.options import DriverOptions

app = typer.Typer(
    help="driverctl: manage the Falco driver selection",
    no_args_is_help=True,
)
driver_app = typer.Typer(help="Driver related commands", no_args_is_help=True)
app.add_typer(driver_app, name="driver")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = get_settings()
    log_config = settings.log
    if verbose:
        log_config = log_config.model_copy(update={"level": "debug"})
    configure_logging(log_config)


@driver_app.command(
    "config",
    help=(
        "Configure a driver for future usages with other driver subcommands. "
        "Also updates the local Falco configuration, or the Falco configmaps "
        "when a namespace is given, so that Falco uses the chosen driver. "
        f"Only deployments whose engine.kind is one of {', '.join(DriverType.names())} are touched."
    ),
)
def config_cmd(
    driver_type: DriverType = typer.Option(
        ..., "--type", help=f"Driver type ({', '.join(DriverType.names())})."
    ),
    name: str = typer.Option("falco", "--name", help="Driver name."),
    driver_version: str = typer.Option("", "--version", help="Driver version."),
    host_root: str = typer.Option("/", "--host-root", help="Host root directory."),
    repos: Optional[List[str]] = typer.Option(
        None, "--repo", help="Driver repository, may be repeated."
    ),
    update_falco: bool = typer.Option(
        True, "--update-falco/--no-update-falco", help="Whether to update Falco config/configmap."
    ),
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Kubernetes namespace."),
    kubeconfig: Optional[Path] = typer.Option(None, "--kubeconfig", help="Kubernetes config."),
    falco_config: Optional[Path] = typer.Option(
        None, "--falco-config", help="Local Falco configuration file."
    ),
    store: Optional[Path] = typer.Option(
        None, "--config", help="File where the driver selection is stored."
    ),
) -> None:
    driver_kwargs = {}
    if repos:
        driver_kwargs["repos"] = repos
    driver = DriverOptions(
        type=driver_type,
        name=name,
        version=driver_version,
        host_root=host_root,
        **driver_kwargs,
    )
    options = DriverConfigOptions(
        driver=driver,
        update_falco=update_falco,
        namespace=namespace,
        kubeconfig=str(kubeconfig) if kubeconfig else None,
        falco_config_file=str(falco_config) if falco_config else None,
        store_path=str(store) if store else None,
    )

    try:
        result = asyncio.run(run_driver_config(options, get_settings()))
    except DriverCtlError as exc:
        typer.echo(f"ERROR: {exc.message}", err=True)
        raise typer.Exit(1)

    if result is not None:
        for outcome in result.outcomes:
            line = f"{outcome.status.value}: {outcome.target}"
            if outcome.reason:
                line += f" ({outcome.reason})"
            typer.echo(line)


if __name__ == "__main__":
    app()
