"""osh command-line entry point (Typer).

The interactive read-loop lives here: prompt, read one line, hand it to the
`Interpreter` together with the session context, print what the hooks
report. Everything below the loop is the core and never prints.
"""

from __future__ import annotations

import json
import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.ui_components import (
    build_plan_table,
    error_text,
    job_done_text,
    job_started_text,
    print_banner,
    warning_text,
)
from core.config import AppSettings
from core.domain.errors import ShellError
from core.services.interpreter import Interpreter, InterpreterHooks, SessionContext

app = typer.Typer(help="osh: a small line-oriented command interpreter.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
    )


def _console_hooks() -> InterpreterHooks:
    return InterpreterHooks(
        warning=lambda exc: _err_console.print(warning_text(exc)),
        error=lambda exc: _err_console.print(error_text(exc)),
        echo=lambda line: _console.print(line, style="dim", markup=False, highlight=False),
        job_started=lambda job: _console.print(job_started_text(job)),
        job_done=lambda job: _console.print(job_done_text(job)),
    )


def repl(settings: AppSettings, *, banner: bool = True) -> int:
    """Read-evaluate loop. Returns the process exit code."""

    interpreter = Interpreter(settings=settings, hooks=_console_hooks())
    context = SessionContext()

    if banner and settings.show_banner and sys.stdin.isatty():
        print_banner(_console)

    while True:
        interpreter.reap()
        try:
            line = _console.input(settings.prompt, markup=False)
        except EOFError:
            _console.print()
            break
        except KeyboardInterrupt:
            _console.print()
            continue

        try:
            result = interpreter.execute_line(line, context)
        except KeyboardInterrupt:
            _console.print()
            continue
        if result.exit:
            break

    return 0


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Start the interactive shell when no subcommand is given."""

    settings = AppSettings()
    _configure_logging(settings, verbose)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=repl(settings))


@app.command()
def shell(
    ctx: typer.Context,
    command: str | None = typer.Option(
        None,
        "--command",
        "-c",
        help="Run a single line and exit with its status.",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the welcome banner."),
) -> None:
    """Interactive shell, or a single line with -c."""

    settings: AppSettings = ctx.obj or AppSettings()

    if command is None:
        raise typer.Exit(code=repl(settings, banner=not no_banner))

    interpreter = Interpreter(settings=settings, hooks=_console_hooks())
    result = interpreter.execute_line(command, SessionContext())
    if not result.ok:
        raise typer.Exit(code=1)
    raise typer.Exit(code=result.status or 0)


@app.command()
def plan(
    ctx: typer.Context,
    line: str = typer.Argument(..., help="Command line to analyse (quote it)."),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON."),
) -> None:
    """Show the execution plan of a line without running it."""

    settings: AppSettings = ctx.obj or AppSettings()
    interpreter = Interpreter(settings=settings, hooks=_console_hooks())

    _tokens, warnings = interpreter.tokenize(line)
    for warning in warnings:
        _err_console.print(warning_text(warning))

    try:
        execution_plan = interpreter.plan(line)
    except ShellError as exc:
        _err_console.print(error_text(exc))
        raise typer.Exit(code=1) from exc

    if as_json:
        payload = execution_plan.model_dump(mode="json")
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
        return
    _console.print(build_plan_table(execution_plan))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
