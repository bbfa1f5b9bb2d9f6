"""Line-level interpretation: history replay, tokenizing, planning, running.

The read-loop lives in the CLI; this module handles one line at a time so the
same flow serves the interactive prompt, ``osh shell -c`` and tests. The
one-slot history is an explicit `SessionContext` passed in by the caller, and
every operator-facing message goes out through `InterpreterHooks` so printing
stays out of the core.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from core.config import AppSettings
from core.domain.errors import EmptyCommand, NoHistory, ShellError, TokenLimitExceeded
from core.domain.models import ExecutionPlan
from core.services import plan_builder, tokenizer
from core.services.orchestrator import BackgroundJob, FinishedJob, ProcessOrchestrator

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "exit()"})
HISTORY_COMMAND = "!!"


@dataclass
class SessionContext:
    """State carried across lines: the last command line, if any."""

    last_line: str | None = None


@dataclass
class InterpreterHooks:
    """Optional callbacks for UI layers (messages, job notifications)."""

    warning: Callable[[ShellError], None] | None = None
    error: Callable[[ShellError], None] | None = None
    echo: Callable[[str], None] | None = None
    job_started: Callable[[BackgroundJob], None] | None = None
    job_done: Callable[[FinishedJob], None] | None = None


@dataclass
class LineResult:
    """Outcome of one line."""

    exit: bool = False
    plan: ExecutionPlan | None = None
    status: int | None = None
    error: ShellError | None = None
    warnings: list[ShellError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class Interpreter:
    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        orchestrator: ProcessOrchestrator | None = None,
        hooks: InterpreterHooks | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._orchestrator = orchestrator or ProcessOrchestrator(
            file_mode=self._settings.redirect_file_mode
        )
        self._hooks = hooks or InterpreterHooks()

    @property
    def orchestrator(self) -> ProcessOrchestrator:
        return self._orchestrator

    def tokenize(self, line: str) -> tuple[list[str], list[ShellError]]:
        """Tokenize with the configured limit; an overflow is a warning."""

        try:
            tokens, _count = tokenizer.split(line, limit=self._settings.max_tokens)
        except TokenLimitExceeded as exc:
            return exc.tokens, [exc]
        return tokens, []

    def plan(self, line: str) -> ExecutionPlan:
        """Build the plan for ``line`` without running it."""

        tokens, _warnings = self.tokenize(line.rstrip("\n"))
        if not tokens:
            raise EmptyCommand()
        return plan_builder.build(tokens)

    def execute_line(self, line: str, context: SessionContext) -> LineResult:
        result = LineResult()
        line = line.rstrip("\n")

        try:
            tokens, result.warnings = self.tokenize(line)
            self._warn(result.warnings)

            if not tokens:
                raise EmptyCommand()

            if tokens[0] in EXIT_COMMANDS:
                result.exit = True
                return result

            if tokens == [HISTORY_COMMAND]:
                if not context.last_line:
                    raise NoHistory()
                line = context.last_line
                if self._settings.echo_history and self._hooks.echo:
                    self._hooks.echo(line)
                tokens, replay_warnings = self.tokenize(line)
                self._warn(replay_warnings)
                result.warnings.extend(replay_warnings)
            else:
                context.last_line = line

            result.plan = plan_builder.build(tokens)
            outcome = self._orchestrator.run(result.plan)
            result.status = outcome.status
            for job in outcome.jobs:
                if self._hooks.job_started:
                    self._hooks.job_started(job)
        except ShellError as exc:
            logger.debug("command failed: %s (%s)", exc.code, exc.message)
            result.error = exc
            if self._hooks.error:
                self._hooks.error(exc)

        return result

    def reap(self) -> list[FinishedJob]:
        """Best-effort reap of background jobs, announced through ``job_done``."""

        finished = self._orchestrator.reap_background()
        if self._settings.reap_background and self._hooks.job_done:
            for job in finished:
                self._hooks.job_done(job)
        return finished

    def _warn(self, warnings: list[ShellError]) -> None:
        if self._hooks.warning:
            for warning in warnings:
                self._hooks.warning(warning)
