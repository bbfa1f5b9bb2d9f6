"""Classification of tokens into a single `ExecutionPlan`.

The builder is all-or-nothing: the first structural error (a second redirect
or a second pipe) raises and every token seen so far is discarded. Execution
problems (missing path, unknown program) are left to the orchestrator.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.domain.errors import DuplicatePipe, DuplicateRedirect
from core.domain.models import ExecutionPlan, Redirect, RedirectDirection

logger = logging.getLogger(__name__)

_REDIRECT_PREFIXES = ("<", ">")
_PIPE_PREFIX = "|"
_BACKGROUND = "&"


def _operand(tokens: Sequence[str], cursor: int) -> tuple[str | None, int]:
    """Read the operand of the control token at ``cursor``.

    ``>out.txt`` carries its operand inline; a bare ``>`` consumes the next
    token. Returns the operand (None when absent) and the new cursor.
    """

    token = tokens[cursor]
    if len(token) > 1:
        return token[1:], cursor
    if cursor + 1 < len(tokens):
        return tokens[cursor + 1], cursor + 1
    return None, cursor


def build(tokens: Sequence[str]) -> ExecutionPlan:
    """Scan ``tokens`` left to right and return the plan they describe."""

    exec_args: list[str] = []
    pipe_args: list[str] = []
    redirect: Redirect | None = None
    piped = False
    pipe_target: str | None = None
    background = False

    cursor = 0
    while cursor < len(tokens):
        token = tokens[cursor]

        if token.startswith(_REDIRECT_PREFIXES):
            if redirect is not None:
                raise DuplicateRedirect()
            path, cursor = _operand(tokens, cursor)
            redirect = Redirect(direction=RedirectDirection.from_symbol(token), path=path)

        elif token.startswith(_PIPE_PREFIX):
            if piped:
                raise DuplicatePipe()
            piped = True
            pipe_target, cursor = _operand(tokens, cursor)

        elif token == _BACKGROUND:
            background = True

        elif pipe_target is not None:
            pipe_args.append(token)

        else:
            exec_args.append(token)

        cursor += 1

    plan = ExecutionPlan(
        exec_args=exec_args,
        redirect=redirect,
        piped=piped,
        pipe_target=pipe_target,
        pipe_args=pipe_args,
        background=background,
    )
    logger.debug("built plan %s", plan.model_dump(mode="json"))
    return plan
