"""dockcheck CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

app = typer.Typer(
    name="dockcheck",
    help="dockcheck: status of Docker apps on remote servers",
    no_args_is_help=True,
)
console = Console()


@app.command()
def status(
    app_name: str = typer.Argument(help="Name of the app to check"),
    server: str | None = typer.Option(None, "--server", "-s", help="Only check this server"),
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .dockcheck.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe details"),
) -> None:
    """Show container status and reachability of an app on its servers."""
    from dockcheck.config.loader import load_config
    from dockcheck.remote import RemoteExecutionError
    from dockcheck.status.checker import StatusChecker

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config(path=path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    checker = StatusChecker(config)
    try:
        reports = checker.check_app_sync(app_name, server)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    except RemoteExecutionError as exc:
        console.print(f"[red]{exc.host}: {exc}[/red]")
        raise typer.Exit(1)

    console.print(checker.render(app_name, reports).to_tree())


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    """Start the dockcheck API server."""
    import uvicorn

    console.print(f"[bold]dockcheck[/bold] starting on http://{host}:{port}")
    uvicorn.run("dockcheck.api.app:app", host=host, port=port, reload=False)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .dockcheck.yaml"),
) -> None:
    """Validate configuration file."""
    import yaml

    from dockcheck.config.loader import load_config

    try:
        config = load_config(path=path)
    except FileNotFoundError as exc:
        console.print(f"[red]✗ {exc}[/red]")
        raise typer.Exit(1)
    except yaml.YAMLError as exc:
        console.print(f"[red]✗ YAML parsing failed: {exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print("[green]✓[/green] YAML parses correctly")
        console.print(f"[red]✗ Validation failed: {exc}[/red]")
        raise typer.Exit(1)

    console.print("[green]✓[/green] YAML parses correctly")
    console.print("[green]✓[/green] Pydantic validation passes")
    console.print("[green]✓[/green] All app servers exist")

    warnings: list[str] = []
    for key, entry in config.apps.items():
        if not entry.servers:
            warnings.append(f"App '{key}' is not deployed to any server")
        if "PORT" not in entry.env:
            warnings.append(f"App '{key}' has no env.PORT, assuming {entry.port}")
    for w in warnings:
        console.print(f"[yellow]! {w}[/yellow]")
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .dockcheck.yaml"),
) -> None:
    """Print resolved configuration."""
    from dockcheck.config.loader import load_config

    try:
        config = load_config(path=path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    console.print("[bold]Servers:[/bold]")
    for key, entry in config.servers.items():
        console.print(f"  {key}: {entry.username}@{entry.host}:{entry.port}")

    console.print("\n[bold]Apps:[/bold]")
    for key, entry in config.apps.items():
        console.print(f"  {key}: {entry.name} on {', '.join(entry.servers) or 'no servers'}")
        console.print(f"    Port: {entry.port}, image port: {entry.docker.image_port}")

    console.print(f"\n[bold]SSH:[/bold] timeout {config.ssh.timeout}s")


def main() -> None:
    app()
