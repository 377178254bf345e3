# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line interface for inspecting flake outputs."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Annotated, Final

import typer
from rich.console import Console
from rich.table import Table

from .command import FlakeShowOptions, LogFormat, run_and_parse
from .config import NixSettings
from .errors import FlakeOutputError, FlakeShowError
from .logging import configure_logging, detect_tty, fail, get_console, warn
from .models import Derivation, PlatformView
from .normalize import view
from .system import current_nix_system

EXIT_NO_RESULT: Final[int] = 1
EXIT_ERROR: Final[int] = 2

app = typer.Typer(help="Inspect the dev shells and packages a flake provides.", no_args_is_help=True)


@app.callback()
def main_callback(
    log_debug: Annotated[bool, typer.Option("--log-debug", help="Stream flakeshow debug logs to stderr.")] = False,
) -> None:
    """Inspect the dev shells and packages a flake provides."""

    if log_debug:
        configure_logging(verbose=True)


def build_category_table(title: str, entries: tuple[Derivation, ...]) -> Table:
    """Return a table listing ``entries`` sorted by invocation name."""

    table = Table(title=title, show_lines=False)
    table.add_column("Invocation", style="bold cyan")
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    table.add_column("Description", style="dim")
    for entry in sorted(entries, key=lambda item: item.invocation):
        table.add_row(entry.invocation, entry.name, entry.kind, entry.description or "")
    return table


def render_view(console: Console, system: str, platform_view: PlatformView) -> None:
    """Print both categories of ``platform_view`` to ``console``."""

    if platform_view.is_empty():
        console.print(f"No dev shells or packages for [bold]{system}[/bold].")
        return
    if platform_view.dev_shells:
        console.print(build_category_table(f"devShells ({system})", platform_view.dev_shells))
    if platform_view.packages:
        console.print(build_category_table(f"packages ({system})", platform_view.packages))


def view_payload(system: str, platform_view: PlatformView) -> dict[str, object]:
    """Return a JSON-serialisable mapping describing ``platform_view``."""

    return {
        "system": system,
        "devShells": [asdict(entry) for entry in platform_view.dev_shells],
        "packages": [asdict(entry) for entry in platform_view.packages],
    }


@app.command("show")
def show(
    target: Annotated[str | None, typer.Argument(help="Flake reference, defaults to the current directory.")] = None,
    system: Annotated[str | None, typer.Option("--system", help="System to display, defaults to the current one.")] = None,
    all_systems: Annotated[
        bool,
        typer.Option(
            "--all-systems/--no-all-systems",
            help="Evaluate outputs for every system; without it nix leaves other systems' outputs unevaluated.",
        ),
    ] = True,
    legacy: Annotated[bool, typer.Option("--legacy", help="Include legacyPackages.")] = False,
    impure: Annotated[bool, typer.Option("--impure", help="Allow impure evaluation.")] = False,
    recreate_lock_file: Annotated[
        bool,
        typer.Option("--recreate-lock-file", help="Regenerate flake.lock before evaluating."),
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Enable nix debug output.")] = False,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Raise nix verbosity.")] = 0,
    log_format: Annotated[LogFormat | None, typer.Option("--log-format", help="nix log format.")] = None,
    json_output: Annotated[bool, typer.Option("--json-output", help="Print the result as JSON.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
) -> None:
    """List the dev shells and packages a flake provides for one system."""

    use_emoji = not no_emoji
    options = FlakeShowOptions(
        all_systems=all_systems,
        json=True,
        legacy=legacy,
        impure=impure,
        recreate_lock_file=recreate_lock_file,
        debug=debug,
        verbosity_level=verbose,
        log_format=log_format,
        target=target,
    )
    settings = NixSettings.from_environment()
    try:
        info = run_and_parse(options, settings)
        if info is None:
            warn("nix flake show failed; no outputs to report", use_emoji=use_emoji)
            raise typer.Exit(code=EXIT_NO_RESULT)
        resolved_system = system or current_nix_system(settings)
    except FlakeOutputError as exc:
        fail(str(exc), use_emoji=use_emoji)
        for detail in exc.errors:
            fail(f"  {detail}", use_emoji=False)
        raise typer.Exit(code=EXIT_ERROR) from exc
    except FlakeShowError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=EXIT_ERROR) from exc

    platform_view = view(info, resolved_system)
    if json_output:
        typer.echo(json.dumps(view_payload(resolved_system, platform_view), indent=2))
        return
    render_view(get_console(color=detect_tty(), emoji=use_emoji), resolved_system, platform_view)


@app.command("system")
def system_command(
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
) -> None:
    """Print the system nix reports as current."""

    try:
        current = current_nix_system()
    except FlakeShowError as exc:
        fail(str(exc), use_emoji=not no_emoji)
        raise typer.Exit(code=EXIT_ERROR) from exc
    typer.echo(current)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "build_category_table", "main", "render_view", "view_payload"]
