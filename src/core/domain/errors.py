"""Taxonomía de errores del intérprete.

Por qué una jerarquía propia:
- Todos los errores son recuperables a nivel de *un* comando: el loop los
  reporta y vuelve a pedir la siguiente línea.
- `code` es estable (nombre del error) para que CLI y tests no dependan del
  texto del mensaje.
"""

from __future__ import annotations


class ShellError(Exception):
    """Error recuperable al interpretar o ejecutar una línea."""

    code = "ShellError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TokenLimitExceeded(ShellError):
    """La línea excede el límite de tokens.

    Lleva la secuencia truncada para que el llamador pueda continuar con ella.
    """

    code = "TokenLimitExceeded"

    def __init__(self, *, tokens: list[str], discarded: int, limit: int) -> None:
        super().__init__(
            f"Command exceeds the argument limit ({limit}); "
            f"discarded {discarded} token(s). Cannot fully interpret."
        )
        self.tokens = tokens
        self.discarded = discarded
        self.limit = limit


class DuplicateRedirect(ShellError):
    code = "DuplicateRedirect"

    def __init__(self) -> None:
        super().__init__("Multiple redirects in a single command unsupported!")


class DuplicatePipe(ShellError):
    code = "DuplicatePipe"

    def __init__(self) -> None:
        super().__init__("Multiple pipes in a single command unsupported!")


class MissingPath(ShellError):
    code = "MissingPath"

    def __init__(self) -> None:
        super().__init__("Please specify a file to redirect into!")


class FileOpenFailure(ShellError):
    code = "FileOpenFailure"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to open file {path}: {reason}")
        self.path = path


class RedirectFailure(ShellError):
    code = "RedirectFailure"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to redirect input/output: {reason}")


class SpawnFailure(ShellError):
    code = "SpawnFailure"

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"Failed to start {program}: {reason}")
        self.program = program


class ProgramNotFound(ShellError):
    code = "ProgramNotFound"

    def __init__(self, program: str | None) -> None:
        if program:
            message = f"Could not find a program named {program}"
        else:
            message = "No program named after '|'"
        super().__init__(message)
        self.program = program


class EmptyCommand(ShellError):
    code = "EmptyCommand"

    def __init__(self) -> None:
        super().__init__("Please enter a command!")


class NoHistory(ShellError):
    code = "NoHistory"

    def __init__(self) -> None:
        super().__init__("No commands in history")
