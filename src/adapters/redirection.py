"""Sustitución de descriptores con restauración garantizada.

Por qué un adaptador:
- Es el único punto que toca los descriptores 0/1 del propio intérprete.
- `RedirectionGuard` encapsula el par dup/restore como adquisición con
  ámbito (`with`): se restaura en éxito, en fallo de spawn y en error.
"""

from __future__ import annotations

import logging
import os
import sys
from types import TracebackType

from core.domain.errors import FileOpenFailure, MissingPath, RedirectFailure
from core.domain.models import Redirect, RedirectDirection

logger = logging.getLogger(__name__)

STDIN_FILENO = 0
STDOUT_FILENO = 1

DEFAULT_FILE_MODE = 0o600


def _flush_std_streams() -> None:
    # Lo que Python tenga en buffer pertenece al destino anterior del descriptor.
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()


def dest_fd_for(direction: RedirectDirection) -> int:
    return STDIN_FILENO if direction is RedirectDirection.IN else STDOUT_FILENO


def redirect_descriptor(source_fd: int, dest_fd: int) -> int:
    """Hace que `dest_fd` apunte a `source_fd`; devuelve una copia del destino previo."""

    try:
        saved_fd = os.dup(dest_fd)
    except OSError as exc:
        raise RedirectFailure(exc.strerror or str(exc)) from exc

    try:
        os.dup2(source_fd, dest_fd)
    except OSError as exc:
        os.close(saved_fd)
        raise RedirectFailure(exc.strerror or str(exc)) from exc

    logger.debug("fd %d -> fd %d (saved as %d)", dest_fd, source_fd, saved_fd)
    return saved_fd


def redirect_to_file(
    path: str | None,
    dest_fd: int,
    direction: RedirectDirection,
    *,
    mode: int = DEFAULT_FILE_MODE,
) -> int:
    """Redirige `dest_fd` al fichero `path`.

    - IN: solo lectura.
    - OUT: crea/trunca, con permisos de lectura/escritura del propietario.

    Devuelve el descriptor guardado para `restore`.
    """

    if path is None:
        raise MissingPath()

    if direction is RedirectDirection.IN:
        flags = os.O_RDONLY
    else:
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC

    try:
        fd = os.open(path, flags, mode)
    except OSError as exc:
        raise FileOpenFailure(path, exc.strerror or str(exc)) from exc

    try:
        return redirect_descriptor(fd, dest_fd)
    finally:
        # El descriptor destino ya es el canal vivo.
        os.close(fd)


def restore(saved_fd: int, dest_fd: int) -> None:
    """Devuelve `dest_fd` a su destino guardado y libera la copia."""

    try:
        os.dup2(saved_fd, dest_fd)
    finally:
        os.close(saved_fd)
    logger.debug("fd %d restored", dest_fd)


class RedirectionGuard:
    """Aplica una `Redirect` durante un bloque `with`.

    Sin redirección (`None`) es un no-op, para que el orquestador use el mismo
    camino con y sin `<`/`>`.
    """

    def __init__(self, redirect: Redirect | None, *, mode: int = DEFAULT_FILE_MODE) -> None:
        self._redirect = redirect
        self._mode = mode
        self._saved_fd: int | None = None
        self._dest_fd: int | None = None

    @property
    def active(self) -> bool:
        return self._saved_fd is not None

    def __enter__(self) -> "RedirectionGuard":
        if self._redirect is None:
            return self

        _flush_std_streams()
        dest_fd = dest_fd_for(self._redirect.direction)
        self._saved_fd = redirect_to_file(
            self._redirect.path,
            dest_fd,
            self._redirect.direction,
            mode=self._mode,
        )
        self._dest_fd = dest_fd
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._saved_fd is None or self._dest_fd is None:
            return
        _flush_std_streams()
        saved_fd, dest_fd = self._saved_fd, self._dest_fd
        self._saved_fd = None
        self._dest_fd = None
        restore(saved_fd, dest_fd)
