"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar el loop y los comandos con detalles visuales.
- Permite reutilizar mensajes/tablas en el REPL, `shell -c` y `plan`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ShellError
from core.domain.models import ExecutionPlan
from core.services.orchestrator import BackgroundJob, FinishedJob


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Permite desactivar banner en modos no interactivos (`-c`, pipelines).
    """

    title = Text("osh", style="bold cyan")
    subtitle = Text("< > | & !! • exit to quit", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def error_text(exc: ShellError) -> Text:
    return Text.assemble(("error", "bold red"), ": ", exc.message)


def warning_text(exc: ShellError) -> Text:
    return Text.assemble(("warning", "bold yellow"), ": ", exc.message)


def job_started_text(job: BackgroundJob) -> Text:
    return Text(f"[{job.job_id}] {job.pid}", style="dim")


def job_done_text(job: FinishedJob) -> Text:
    label = "Done" if job.returncode == 0 else f"Exit {job.returncode}"
    return Text(f"[{job.job_id}]+ {label}  {' '.join(job.argv)}", style="dim")


def build_plan_table(plan: ExecutionPlan) -> Table:
    """Tabla Rich con el plan de ejecución de una línea."""

    table = Table(title="Execution Plan", show_header=True)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("exec_args", " ".join(plan.exec_args) or "-")
    if plan.redirect is None:
        table.add_row("redirect", "-")
    else:
        path = plan.redirect.path if plan.redirect.path is not None else "(missing)"
        table.add_row("redirect", f"{plan.redirect.direction.symbol()} {path}")
    if plan.piped:
        target = " ".join(plan.reader_args()) or "(missing)"
        table.add_row("pipe", target)
    else:
        table.add_row("pipe", "-")
    table.add_row("background", "yes" if plan.background else "no")
    return table
