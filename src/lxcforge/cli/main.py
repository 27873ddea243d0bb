"""Main CLI implementation using Typer."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from ruamel.yaml.error import YAMLError

from lxcforge.errors import FatalStartupError
from lxcforge.lxc.template import LxcTemplateEngine
from lxcforge.models.state import ResolvedState
from lxcforge.runtime.bootstrap import bootstrap
from lxcforge.runtime.config import ConfigManager
from lxcforge.utils.logging import setup_logging


logger = logging.getLogger(__name__)


# Create Typer app
app = typer.Typer(
    name="lxcforge",
    help="lxcforge - LXC configuration generation for containers",
    add_completion=False,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)


def _fail(message: str):
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _fatal(error: FatalStartupError):
    """Log a startup failure and halt."""
    logger.error(f"Fatal startup error: {error}")
    _fail(str(error))


def _load_engine(config_dir: Optional[Path], resolv_conf: Optional[str]) -> LxcTemplateEngine:
    """Build a template engine, reconciling resolv.conf unless a path is given."""
    manager = ConfigManager(config_dir)
    try:
        config = manager.load()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")
    setup_logging(config.logging.level)

    try:
        if resolv_conf:
            return LxcTemplateEngine.compile(
                resolved=ResolvedState(resolv_conf_path=resolv_conf),
                network=config.network,
            )
        runtime = bootstrap(config=config)
    except FatalStartupError as e:
        _fatal(e)

    if runtime is None:
        _fail("Running as container init, nothing to render")
    return runtime.engine


def _load_descriptor(descriptor: Path):
    try:
        return ConfigManager().load_descriptor(descriptor)
    except (OSError, ValueError, YAMLError) as e:
        _fail(f"Cannot load descriptor {descriptor}: {e}")


config_dir_option = typer.Option(
    None, "--config-dir", "-c", help="Configuration directory", envvar="LXCFORGE_CONFIG_DIR"
)
resolv_conf_option = typer.Option(
    None, "--resolv-conf", help="Resolver file to mount instead of reconciling the host one"
)


@app.command("render")
def render_command(
    descriptor: Path = typer.Argument(..., help="Container descriptor (JSON or YAML)"),
    config_dir: Optional[Path] = config_dir_option,
    resolv_conf: Optional[str] = resolv_conf_option,
):
    """Render the LXC configuration of a container."""
    container = _load_descriptor(descriptor)
    engine = _load_engine(config_dir, resolv_conf)
    typer.echo(engine.render(container), nl=False)


@app.command("directives")
def directives_command(
    descriptor: Path = typer.Argument(..., help="Container descriptor (JSON or YAML)"),
    config_dir: Optional[Path] = config_dir_option,
    resolv_conf: Optional[str] = resolv_conf_option,
):
    """Show the LXC configuration of a container as a table."""
    container = _load_descriptor(descriptor)
    engine = _load_engine(config_dir, resolv_conf)

    table = Table(title=f"LXC configuration for {container.id}")
    table.add_column("Kind", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Value")
    for directive in engine.render_directives(container):
        table.add_row(directive.kind.value, directive.key, directive.value)
    console.print(table)


@app.command("resolv")
def resolv_command(
    config_dir: Optional[Path] = config_dir_option,
):
    """Reconcile the host resolver file and show the result."""
    manager = ConfigManager(config_dir)
    try:
        config = manager.load()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")
    setup_logging(config.logging.level)

    try:
        runtime = bootstrap(config=config)
    except FatalStartupError as e:
        _fatal(e)
    if runtime is None:
        _fail("Running as container init, nothing to reconcile")

    table = Table(title="Resolver file")
    table.add_column("Path", style="cyan")
    table.add_column("Rewritten", style="green")
    table.add_row(runtime.resolved.resolv_conf_path, "yes" if runtime.resolved.rewritten else "no")
    console.print(table)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
