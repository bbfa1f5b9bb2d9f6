"""Spawner basado en `subprocess`.

Por qué subprocess y no fork/exec a mano:
- `Popen` ya resuelve argv[0] en PATH, cierra en el hijo todos los
  descriptores que no sean 0/1/2 (`close_fds=True`) y convierte un programa
  inexistente en `FileNotFoundError` en el padre.
- El handle (`PopenHandle`) es el dueño de la decisión esperar/desacoplar.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Sequence

from core.domain.errors import ProgramNotFound, SpawnFailure

logger = logging.getLogger(__name__)


class PopenHandle:
    """Proceso lanzado con `subprocess.Popen`."""

    def __init__(self, process: subprocess.Popen, argv: Sequence[str]) -> None:
        self._process = process
        self.pid = process.pid
        self.argv = list(argv)

    def wait(self) -> int:
        code = self._process.wait()
        logger.debug("pid %d exited with %d", self.pid, code)
        return code

    def poll(self) -> int | None:
        return self._process.poll()

    def __repr__(self) -> str:
        return f"PopenHandle(pid={self.pid}, argv={self.argv!r})"


class SubprocessSpawner:
    """Implementación de `core.interfaces.spawner.ProcessSpawner`."""

    def spawn(
        self,
        argv: Sequence[str],
        *,
        stdin: int | None = None,
        stdout: int | None = None,
    ) -> PopenHandle:
        if not argv:
            raise ProgramNotFound(None)
        program = argv[0]

        # El hijo escribe directamente en el descriptor; vaciar antes lo nuestro.
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            process = subprocess.Popen(list(argv), stdin=stdin, stdout=stdout, close_fds=True)
        except FileNotFoundError as exc:
            raise ProgramNotFound(program) from exc
        except (OSError, ValueError) as exc:
            raise SpawnFailure(program, str(exc)) from exc

        logger.debug("spawned pid %d: %s", process.pid, list(argv))
        return PopenHandle(process, argv)
