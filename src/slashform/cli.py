"""
slashform command line.

A file-backed host for the sync controller: each command opens a
document, applies edits through the controller and writes the emitted
document back.
"""

import logging
from pathlib import Path

import typer

from slashform._version import get_version
from slashform.core.config import SlashFormConfig, load_config
from slashform.core.errors import ConfigError, SlashFormError
from slashform.host import FileHost
from slashform.render import render_error, render_plan
from slashform.schemas import get_schema

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Edit structured command configuration files field by field.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"slashform version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (default: ./slashform.toml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """slashform CLI main callback for global options."""
    try:
        settings = load_config(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    level = "DEBUG" if verbose else settings.logging.level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = settings


def _open_host(ctx: typer.Context, path: Path) -> FileHost:
    settings: SlashFormConfig = ctx.obj
    try:
        registry = get_schema(settings.editor.schema)
    except SlashFormError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    host = FileHost(path, registry, codec=settings.codec.build(), autosave=False)
    status = host.open()
    logger.debug(f"Opened {path} with schema '{registry.name}': {status.value}")
    return host


def _exit_on_decode_error(host: FileHost) -> None:
    report = host.controller.error_report()
    if report is None:
        return
    for line in render_error(report):
        typer.echo(line, err=True)
    typer.echo(f"Run 'slashform reset {host.path}' to replace it with default values.", err=True)
    raise typer.Exit(code=1)


def _split_assignment(assignment: str) -> tuple[str, str]:
    name, sep, value = assignment.partition("=")
    if not sep or not name:
        raise typer.BadParameter(f"Expected NAME=VALUE, got '{assignment}'")
    return name, value


@app.command("fields")
def fields_command(ctx: typer.Context) -> None:
    """List the fields of the configured schema."""
    settings: SlashFormConfig = ctx.obj
    try:
        registry = get_schema(settings.editor.schema)
    except SlashFormError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    for definition in registry.fields_in_order():
        line = f"{definition.name:<16} {definition.kind.value}"
        if definition.options:
            line += f"  [{', '.join(definition.options)}]"
        typer.echo(line)


@app.command("show")
def show_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Document file"),
) -> None:
    """Show the visible fields of a document."""
    host = _open_host(ctx, path)
    _exit_on_decode_error(host)

    for line in render_plan(host.controller.render_plan()):
        typer.echo(line)


@app.command("set")
def set_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Document file"),
    assignments: list[str] | None = typer.Argument(
        None, help="NAME=VALUE pairs; multi-select values are comma separated"
    ),
    toggles: list[str] | None = typer.Option(
        None, "--toggle", "-t", help="NAME=OPTION to flip on a multi-select field"
    ),
) -> None:
    """Edit fields of a document and write it back."""
    host = _open_host(ctx, path)
    _exit_on_decode_error(host)
    controller = host.controller

    try:
        for assignment in assignments or []:
            name, value = _split_assignment(assignment)
            if controller.registry.get(name).is_multi_select:
                controller.edit(name, [v.strip() for v in value.split(",") if v.strip()])
            else:
                controller.edit(name, value)
        for toggle in toggles or []:
            name, option = _split_assignment(toggle)
            controller.toggle(name, option)
    except SlashFormError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    if host.save():
        typer.echo(f"Updated {path}")
    else:
        typer.echo(f"No changes to {path}")

    # Advisory only: the document is written either way
    for issue in controller.render_plan().issues:
        typer.echo(f"Warning: {issue.field}: {issue.message}", err=True)


@app.command("reset")
def reset_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Document file"),
) -> None:
    """Replace a document with the schema's default values."""
    host = _open_host(ctx, path)
    host.controller.reset()
    host.save()
    typer.echo(f"Reset {path} to default values")


@app.command("check")
def check_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Document file"),
) -> None:
    """Fail if a document does not decode or any visible field is invalid."""
    host = _open_host(ctx, path)
    _exit_on_decode_error(host)

    plan = host.controller.render_plan()
    if plan.is_valid:
        typer.echo(f"{path}: OK")
        return

    for issue in plan.issues:
        typer.echo(f"{path}: {issue.field}: {issue.message}", err=True)
    raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
