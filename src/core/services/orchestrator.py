"""Realization of an `ExecutionPlan` as one or two OS processes.

The orchestrator owns every `ProcessHandle` it creates: a foreground handle is
waited for before the redirection guard restores the interpreter's
descriptors, a background handle is moved into the job table and reaped later
with a non-blocking poll.

A piped plan spawns the writer and the reader back to back, before any wait,
so both programs run concurrently and the kernel pipe buffer carries the
handoff. The parent closes both pipe ends as soon as the two children exist,
otherwise the reader would never observe end-of-stream.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from adapters.process_spawner import SubprocessSpawner
from adapters.redirection import DEFAULT_FILE_MODE, RedirectionGuard
from core.domain.errors import EmptyCommand, ProgramNotFound, ShellError, SpawnFailure
from core.domain.models import ExecutionPlan
from core.interfaces.spawner import ProcessHandle, ProcessSpawner

logger = logging.getLogger(__name__)


class OrchestratorState(str, Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    WAITING = "waiting"
    DETACHED = "detached"


@dataclass
class BackgroundJob:
    """A process left running after its command returned."""

    job_id: int
    handle: ProcessHandle

    @property
    def pid(self) -> int:
        return self.handle.pid


@dataclass
class FinishedJob:
    job_id: int
    pid: int
    argv: list[str]
    returncode: int


@dataclass
class RunResult:
    """Outcome of one plan.

    ``status`` is the exit status of the last foreground process, None when
    the plan was sent to the background.
    """

    status: int | None = None
    jobs: list[BackgroundJob] = field(default_factory=list)


class ProcessOrchestrator:
    """Spawns, wires, waits for or detaches the processes of a plan."""

    def __init__(
        self,
        spawner: ProcessSpawner | None = None,
        *,
        file_mode: int = DEFAULT_FILE_MODE,
    ) -> None:
        self._spawner = spawner or SubprocessSpawner()
        self._file_mode = file_mode
        self._state = OrchestratorState.IDLE
        self._jobs: list[BackgroundJob] = []
        self._next_job_id = 1

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def jobs(self) -> list[BackgroundJob]:
        return list(self._jobs)

    def run(self, plan: ExecutionPlan) -> RunResult:
        if not plan.exec_args:
            raise EmptyCommand()
        try:
            if plan.piped:
                return self.run_piped(plan)
            return self.run_simple(plan)
        finally:
            self._state = OrchestratorState.IDLE

    def run_simple(self, plan: ExecutionPlan) -> RunResult:
        if not plan.exec_args:
            raise EmptyCommand()

        with RedirectionGuard(plan.redirect, mode=self._file_mode):
            self._state = OrchestratorState.LAUNCHING
            handle = self._spawner.spawn(plan.exec_args)
            return self._settle([handle], background=plan.background)

    def run_piped(self, plan: ExecutionPlan) -> RunResult:
        if not plan.exec_args:
            raise EmptyCommand()
        if plan.pipe_target is None:
            raise ProgramNotFound(None)

        with RedirectionGuard(plan.redirect, mode=self._file_mode):
            self._state = OrchestratorState.LAUNCHING
            try:
                read_fd, write_fd = os.pipe()
            except OSError as exc:
                raise SpawnFailure(plan.exec_args[0], f"could not create pipe: {exc}") from exc

            handles: list[ProcessHandle] = []
            try:
                try:
                    handles.append(self._spawner.spawn(plan.exec_args, stdout=write_fd))
                    handles.append(self._spawner.spawn(plan.reader_args(), stdin=read_fd))
                finally:
                    os.close(read_fd)
                    os.close(write_fd)
            except ShellError:
                # The writer may already be running: reap or detach it anyway.
                self._settle(handles, background=plan.background)
                raise

            return self._settle(handles, background=plan.background)

    def reap_background(self) -> list[FinishedJob]:
        """Non-blocking poll of the job table; returns the jobs that ended."""

        finished: list[FinishedJob] = []
        still_running: list[BackgroundJob] = []
        for job in self._jobs:
            code = job.handle.poll()
            if code is None:
                still_running.append(job)
                continue
            logger.debug("reaped job %d (pid %d): %d", job.job_id, job.pid, code)
            finished.append(
                FinishedJob(
                    job_id=job.job_id,
                    pid=job.pid,
                    argv=list(job.handle.argv),
                    returncode=code,
                )
            )
        self._jobs = still_running
        return finished

    def _settle(self, handles: Sequence[ProcessHandle], *, background: bool) -> RunResult:
        if background:
            self._state = OrchestratorState.DETACHED
            return RunResult(status=None, jobs=[self._detach(handle) for handle in handles])

        self._state = OrchestratorState.WAITING
        status: int | None = None
        pending = list(handles)
        try:
            while pending:
                status = pending[0].wait()
                pending.pop(0)
        except KeyboardInterrupt:
            # No cancellation: whatever is still running is reaped later.
            for handle in pending:
                self._detach(handle)
            raise
        return RunResult(status=status)

    def _detach(self, handle: ProcessHandle) -> BackgroundJob:
        job = BackgroundJob(job_id=self._next_job_id, handle=handle)
        self._next_job_id += 1
        self._jobs.append(job)
        logger.debug("detached job %d (pid %d)", job.job_id, job.pid)
        return job
