"""CLI for SASM Launcher - dependency check, installation and hand-off.

Usage:
    sasm-launcher check
    sasm-launcher install docker
    sasm-launcher configure
    sasm-launcher setup
    sasm-launcher launch [--force]
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import typer
from loguru import logger

from sasm_launcher import __version__
from sasm_launcher.core.config import Config
from sasm_launcher.core.errors import LaunchError
from sasm_launcher.core.logger import configure_logging
from sasm_launcher.core.types import DependencySet
from sasm_launcher.services.dependency_prober import DependencyProber
from sasm_launcher.services.launcher_service import LauncherService
from sasm_launcher.ui.dependency_view import DependencyView
from sasm_launcher.ui.handlers.installer_handler import Action, ActionResult, InstallerHandler
from sasm_launcher.utils.platform_utils import PlatformUtils

app = typer.Typer(
    name="sasm-launcher",
    help="Check and install the dependencies of the SASM Docker launcher, then start it",
    add_completion=False,
)

NOTE = "Note: Installation may take several minutes and will require admin privileges."


class Component(str, Enum):
    homebrew = "homebrew"
    docker = "docker"
    xquartz = "xquartz"


_INSTALL_ACTION = {
    Component.homebrew: Action.INSTALL_HOMEBREW,
    Component.docker: Action.INSTALL_DOCKER,
    Component.xquartz: Action.INSTALL_XQUARTZ,
}

ConfigOption = typer.Option(None, "--config", "-c", help="Path to configuration file (.json or .yaml)")


def _init_core(config_path: Optional[Path]) -> Tuple[Config, DependencyProber]:
    """Load configuration and set up logging."""
    config = Config(config_path)
    configure_logging(str(config.get("log_level", "info")))
    return config, DependencyProber()


def _render(deps: DependencySet) -> DependencyView:
    view = DependencyView.from_dependencies(deps, PlatformUtils.get_platform())
    typer.echo(view.os_line)
    typer.echo()
    typer.echo("Dependencies Status:")
    for row in view.rows:
        typer.echo(f"  {row}")
        if row.level != "OK":
            typer.echo(f"      {row.detail}")
    if view.actions:
        typer.echo()
        typer.echo("Available actions: " + ", ".join(action.label for action in view.actions))
    return view


def _report(result: ActionResult) -> None:
    if result.success:
        typer.echo(f"✅ {result.message}")
    else:
        typer.echo(f"❌ {result.message}", err=True)


def _run_action(handler: InstallerHandler, action: Action) -> ActionResult:
    typer.echo(f"🔄 {action.label}...")
    typer.echo(NOTE)
    result = handler.run(action)
    _report(result)
    return result


def _launch(config: Config) -> None:
    try:
        pid = LauncherService(config).launch()
    except LaunchError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"🚀 Launcher started (PID {pid})")


@app.command()
def check(config_path: Optional[Path] = ConfigOption):
    """Show the status of Homebrew, Docker and XQuartz."""
    _, prober = _init_core(config_path)
    view = _render(prober.probe_all())
    if not view.ready:
        raise typer.Exit(1)


@app.command()
def install(
    component: Component = typer.Argument(..., help="Dependency to install"),
    config_path: Optional[Path] = ConfigOption,
):
    """Install one dependency."""
    _, prober = _init_core(config_path)
    handler = InstallerHandler()
    try:
        result = _run_action(handler, _INSTALL_ACTION[component])
    finally:
        handler.shutdown()

    typer.echo()
    _render(prober.probe_all())
    if not result.success:
        raise typer.Exit(1)


@app.command()
def configure(config_path: Optional[Path] = ConfigOption):
    """Allow XQuartz to accept X11 connections over TCP and restart it."""
    _, prober = _init_core(config_path)
    handler = InstallerHandler()
    try:
        result = _run_action(handler, Action.CONFIGURE_XQUARTZ)
    finally:
        handler.shutdown()

    typer.echo()
    _render(prober.probe_all())
    if not result.success:
        raise typer.Exit(1)


@app.command()
def setup(config_path: Optional[Path] = ConfigOption):
    """Interactively install whatever is missing, then start the launcher."""
    config, prober = _init_core(config_path)
    view = _render(prober.probe_all())

    handler = InstallerHandler()
    try:
        for action in Action:
            # Re-checked after every step; installing XQuartz adds the configure step
            if action not in view.actions:
                continue
            typer.echo()
            if not typer.confirm(f"{action.label}?", default=True):
                continue
            _run_action(handler, action)
            typer.echo()
            view = _render(prober.probe_all())
    finally:
        handler.shutdown()

    typer.echo()
    if typer.confirm(f"{view.continue_label}?", default=view.ready):
        _launch(config)


@app.command()
def launch(
    force: bool = typer.Option(False, "--force", "-f", help="Continue anyway when dependencies are missing"),
    config_path: Optional[Path] = ConfigOption,
):
    """Start the SASM Docker launcher."""
    config, prober = _init_core(config_path)
    deps = prober.probe_all()
    if not deps.all_satisfied and not force:
        _render(deps)
        typer.echo()
        typer.echo("⚠️  Dependencies are not satisfied. Use --force to continue anyway (may not work).", err=True)
        raise typer.Exit(1)
    _launch(config)


@app.command()
def version():
    """Show version."""
    typer.echo(f"SASM Launcher v{__version__}")


def main():
    """Entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\n⚠️  Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error")
        typer.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
