from __future__ import annotations

from typing import Sequence

import pytest

from core.config import AppSettings
from core.domain.errors import ProgramNotFound
from core.services.interpreter import Interpreter, SessionContext
from core.services.orchestrator import ProcessOrchestrator


class FakeHandle:
    """Handle that never touches the OS; records waits on the spawner log."""

    def __init__(self, spawner: "RecordingSpawner", pid: int, argv: Sequence[str], returncode: int) -> None:
        self._spawner = spawner
        self.pid = pid
        self.argv = list(argv)
        self.returncode = returncode
        self.running = True

    def wait(self) -> int:
        self._spawner.events.append(("wait", self.argv[0]))
        self.running = False
        return self.returncode

    def poll(self) -> int | None:
        return None if self.running else self.returncode


class RecordingSpawner:
    """Spawner double: logs every spawn and wait in order."""

    def __init__(self, *, missing: Sequence[str] = (), returncode: int = 0) -> None:
        self.events: list[tuple] = []
        self.handles: list[FakeHandle] = []
        self._missing = set(missing)
        self._returncode = returncode
        self._next_pid = 1000

    def spawn(self, argv: Sequence[str], *, stdin: int | None = None, stdout: int | None = None) -> FakeHandle:
        if argv[0] in self._missing:
            raise ProgramNotFound(argv[0])
        self.events.append(("spawn", list(argv), stdin is not None, stdout is not None))
        handle = FakeHandle(self, self._next_pid, argv, self._returncode)
        self._next_pid += 1
        self.handles.append(handle)
        return handle

    @property
    def spawned(self) -> list[list[str]]:
        return [event[1] for event in self.events if event[0] == "spawn"]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def spawner() -> RecordingSpawner:
    return RecordingSpawner()


@pytest.fixture
def fake_interpreter(settings: AppSettings, spawner: RecordingSpawner) -> Interpreter:
    return Interpreter(settings=settings, orchestrator=ProcessOrchestrator(spawner))


@pytest.fixture
def interpreter(settings: AppSettings) -> Interpreter:
    return Interpreter(settings=settings)


@pytest.fixture
def context() -> SessionContext:
    return SessionContext()
