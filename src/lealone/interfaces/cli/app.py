"""Command line interface for the Lealone configuration loader."""

from __future__ import annotations

from typing import Any, Iterable

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lealone.config_loader import (
    ENGINE_KINDS,
    Config,
    ConfigError,
    ConfigResource,
    ResourceLocator,
    YamlConfigurationLoader,
)
from lealone.logging import init_logging

app = typer.Typer(help="Locate, validate and inspect Lealone server configuration.")
console = Console()


def _config_option() -> Any:
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration URL or bundled resource name. Defaults to $LEALONE_CONFIG or lealone.yaml.",
    )


def _log_level_option() -> Any:
    return typer.Option("WARNING", "--log-level", help="Log level for loader diagnostics.")


def _handle_config_error(exc: ConfigError) -> None:
    console.print(f"[bold red]Config error[/bold red]: {escape(str(exc))}")
    raise typer.Exit(code=1) from exc


def _load(identifier: str | None, log_level: str) -> tuple[ConfigResource, Config]:
    try:
        init_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    loader = YamlConfigurationLoader(locator=ResourceLocator())
    try:
        resource = loader.locator.resolve(identifier)
        return resource, loader.load_config_from(resource)
    except ConfigError as exc:
        _handle_config_error(exc)
        raise  # pragma: no cover


@app.command()
def validate(
    config: str | None = _config_option(),
    log_level: str = _log_level_option(),
) -> None:
    """Validate the configuration document."""

    resource, _ = _load(config, log_level)
    console.print(f"[green]Config OK[/green] ({escape(resource.origin)})")


@app.command()
def show(
    config: str | None = _config_option(),
    log_level: str = _log_level_option(),
) -> None:
    """Display the effective configuration."""

    resource, cfg = _load(config, log_level)
    console.print(f"[bold]Settings from:[/bold] {escape(resource.origin)}")
    console.print("")

    table = Table(title="Server")
    table.add_column("Field", justify="left")
    table.add_column("Value", justify="left")
    table.add_row("Base Dir", escape(cfg.base_dir))
    table.add_row("Listen Address", escape(cfg.listen_address))
    server_tls = cfg.server_encryption_options
    table.add_row("Internode Encryption", server_tls.internode_encryption if server_tls else "-")
    client_tls = cfg.client_encryption_options
    table.add_row("Client Encryption", "enabled" if client_tls and client_tls.enabled else "disabled")
    console.print(table)

    for kind in ENGINE_KINDS:
        _print_engines(kind, cfg)


def _print_engines(kind: str, cfg: Config) -> None:
    engines = cfg.engines(kind)
    if not engines:
        return
    table = Table(title=f"{kind.replace('_', ' ').title()} Engines")
    table.add_column("Name", justify="left")
    table.add_column("Enabled", justify="center")
    table.add_column("Parameters", justify="left")
    for engine in engines:
        parameters = ", ".join(f"{key}={value}" for key, value in sorted(engine.parameters.items()))
        table.add_row(escape(engine.name), "yes" if engine.enabled else "no", escape(parameters) or "-")
    console.print(table)


def main(argv: Iterable[str] | None = None) -> None:
    """Invoke the Typer application."""
    app(args=list(argv) if argv is not None else None)


if __name__ == "__main__":
    main()
