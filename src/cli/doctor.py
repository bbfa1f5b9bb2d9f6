"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.process_spawner import SubprocessSpawner
from core.config import AppSettings, get_user_env_file
from core.domain.errors import ShellError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_descriptors() -> tuple[bool, str]:
    """Duplicate and release stdout, the same dance every redirect performs."""

    try:
        saved = os.dup(1)
    except OSError as exc:
        return False, str(exc)
    os.close(saved)
    return True, "dup/dup2 available"


def _check_spawn() -> tuple[bool, str]:
    try:
        code = SubprocessSpawner().spawn(["true"]).wait()
    except ShellError as exc:
        return False, exc.message
    return code == 0, f"exit {code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="osh Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    posix = os.name == "posix"
    table.add_row("POSIX", "OK" if posix else "FAIL", os.name)

    ok_fds, detail_fds = _check_descriptors()
    table.add_row("Descriptors", "OK" if ok_fds else "FAIL", detail_fds)

    path_entries = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    table.add_row("PATH", "OK" if path_entries else "FAIL", f"{len(path_entries)} entries")

    sh = shutil.which("sh")
    table.add_row("sh", "OK" if sh else "OPTIONAL", sh or "not found (only needed by scripts you run)")

    ok_spawn, detail_spawn = _check_spawn()
    table.add_row("Spawn `true`", "OK" if ok_spawn else "FAIL", detail_spawn)

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Token limit", "OK", str(settings.max_tokens))

    _console.print(table)

    if not (posix and ok_fds and ok_spawn):
        _console.print(
            "\n[yellow]Note:[/yellow] osh needs POSIX descriptors and a working `true` on PATH."
        )


@app.command(name="config")
def show_config() -> None:
    """Show the effective settings (env vars OSH_* and .env files)."""

    settings = AppSettings()

    table = Table(title="osh Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in settings.model_dump().items():
        if key == "redirect_file_mode":
            value = oct(value)
        table.add_row(key, str(value))
    _console.print(table)
