"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El plan de ejecución es un valor derivado y transitorio, pero validarlo en
  un único sitio evita planes "a medias" (p.ej. una redirección sin dirección).
- `model_dump` nos da gratis la salida JSON de `osh plan --json`.

Nota:
- Estos modelos describen *qué* se va a ejecutar, no *cómo* se lanza.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RedirectDirection(str, Enum):
    """Sentido de la redirección respecto al programa lanzado."""

    IN = "in"
    OUT = "out"

    @classmethod
    def from_symbol(cls, symbol: str) -> "RedirectDirection":
        return cls.IN if symbol.startswith("<") else cls.OUT

    def symbol(self) -> str:
        return "<" if self is RedirectDirection.IN else ">"


class Redirect(BaseModel):
    """Una redirección de stdin/stdout hacia un fichero.

    `path` puede faltar (`ls >` sin fichero): el plan sigue siendo válido y el
    fallo (`MissingPath`) se reporta al ejecutar.
    """

    direction: RedirectDirection = Field(
        ...,
        description="IN para '<', OUT para '>'.",
    )
    path: str | None = Field(
        default=None,
        description="Ruta del fichero; None si el token no tenía ruta.",
    )


class ExecutionPlan(BaseModel):
    """Qué ejecutar y cómo cablear sus descriptores.

    Invariante:
    - Como máximo una redirección y un pipe. El builder nunca produce un plan
      que lo viole (falla antes con `DuplicateRedirect`/`DuplicatePipe`).
    """

    exec_args: list[str] = Field(
        default_factory=list,
        description="Programa principal + argumentos, sin tokens de control.",
    )
    redirect: Redirect | None = Field(
        default=None,
        description="Redirección única (opcional).",
    )
    piped: bool = Field(
        default=False,
        description="Se vio un '|' en la línea.",
    )
    pipe_target: str | None = Field(
        default=None,
        description="Programa que recibe la salida de `exec_args`.",
    )
    pipe_args: list[str] = Field(
        default_factory=list,
        description="Argumentos que siguen al programa destino del pipe.",
    )
    background: bool = Field(
        default=False,
        description="No esperar a que termine el/los proceso(s).",
    )

    @property
    def program(self) -> str | None:
        return self.exec_args[0] if self.exec_args else None

    def reader_args(self) -> list[str]:
        """argv del proceso lector del pipe."""

        if self.pipe_target is None:
            return []
        return [self.pipe_target, *self.pipe_args]
