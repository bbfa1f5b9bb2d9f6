"""Contratos para lanzar procesos del sistema operativo.

Por qué Protocol:
- El orquestador decide *cuándo* lanzar, esperar o desacoplar; el adaptador
  decide *cómo* (subprocess, fork/exec...).
- Permite testear el orden de lanzamiento con un spawner falso sin crear
  procesos reales.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class ProcessHandle(Protocol):
    """Proceso lanzado; el dueño decide si esperarlo o desacoplarlo."""

    pid: int
    argv: list[str]

    def wait(self) -> int:
        """Bloquea hasta que el proceso termina y devuelve su código de salida."""

        ...

    def poll(self) -> int | None:
        """Consulta no bloqueante: código de salida o None si sigue vivo."""

        ...


@runtime_checkable
class ProcessSpawner(Protocol):
    """Lanza un programa con su vector de argumentos y sus descriptores.

    Reglas de diseño:
    - `stdin`/`stdout` en None significa heredar los del intérprete (que
      pueden estar redirigidos en ese momento).
    - Ningún otro descriptor del intérprete llega al hijo.
    - Programa inexistente -> `ProgramNotFound`; otro fallo -> `SpawnFailure`.
    """

    def spawn(
        self,
        argv: Sequence[str],
        *,
        stdin: int | None = None,
        stdout: int | None = None,
    ) -> ProcessHandle:
        ...
