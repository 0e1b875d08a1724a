from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

import click
import typer

from woger import __version__
from woger.core.config import CONFIG_FILE, load_config_or_default
from woger.core.errors import ErrorCode
from woger.core.result import Err
from woger.output.console import ConsoleProtocol, RichConsole
from woger.platform.process import DryRunRunner, ProcessRunner, SubprocessRunner
from woger.release.dispatcher import Dispatcher
from woger.release.errors import ReleaseError
from woger.release.registry import default_registry
from woger.release.variables import VARIABLES, VariableStore


def _epilog() -> str:
    methods = ", ".join(m.spec.name for m in default_registry())
    variables = ", ".join(VARIABLES)
    return f"Methods: {methods}.\n\nVariables: {variables}."


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode=None,
)


def _fail(console: ConsoleProtocol, error: ReleaseError) -> NoReturn:
    console.error(error.pretty())
    raise typer.Exit(code=int(ErrorCode.FAILURE))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"woger {__version__}")
        raise typer.Exit(code=int(ErrorCode.OK))


def make_console() -> ConsoleProtocol:
    return RichConsole()


def make_runner(*, dry_run: bool, cwd: Path, console: ConsoleProtocol) -> ProcessRunner:
    if dry_run:
        return DryRunRunner(console)
    return SubprocessRunner(cwd)


@app.command(epilog=_epilog())
def release(
    ctx: typer.Context,
    methods: str | None = typer.Argument(
        None,
        metavar="METHODS",
        help="Comma-separated release methods, run in the order given.",
        show_default=False,
    ),
    assignments: list[str] | None = typer.Argument(
        None,
        metavar="[NAME=VALUE]...",
        help="Release variables.",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print what would be done instead of doing it."
    ),
    list_vars: bool = typer.Option(
        False, "--vars", help="List the variables the methods need and exit."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Release a package to several places at once."""
    del version
    if methods is None:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    console = make_console()
    cwd = Path.cwd()

    store = VariableStore.from_assignments(assignments or [])
    if isinstance(store, Err):
        _fail(console, store.error)

    config = load_config_or_default(cwd / CONFIG_FILE)
    if isinstance(config, Err):
        _fail(console, ReleaseError(kind="config", message=config.error.message))

    store.value.apply_defaults(config.value.variables)
    store.value.apply_vocabulary_defaults()

    dispatcher = Dispatcher(
        registry=default_registry(),
        store=store.value,
        runner=make_runner(dry_run=dry_run, cwd=cwd, console=console),
        console=console,
        cwd=cwd,
        config=config.value,
    )
    result = dispatcher.run(methods, list_vars=list_vars)
    if isinstance(result, Err):
        _fail(console, result.error)

    report = result.value
    if report.listed:
        return
    if dry_run:
        console.success(f"dry run of {', '.join(report.executed)} complete")
    else:
        console.success(f"released to {', '.join(report.executed)}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the exit code.

    Click reports usage errors with exit status 2; woger uses 1 for every
    failure, so the app runs in non-standalone mode and maps them here.
    """
    try:
        code = app(
            args=list(argv) if argv is not None else None,
            prog_name="woger",
            standalone_mode=False,
        )
    except click.ClickException as e:
        e.show()
        return int(ErrorCode.FAILURE)
    except click.exceptions.Abort:
        typer.echo("Aborted!", err=True)
        return int(ErrorCode.FAILURE)
    return int(code or ErrorCode.OK)


def cli() -> None:
    raise SystemExit(main())
