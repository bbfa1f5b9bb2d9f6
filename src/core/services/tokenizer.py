"""Splitting of raw command lines into argument tokens.

Only the space character separates tokens; runs of spaces collapse and tabs
stay inside a token. The caller's line is never modified, so the same raw
line can later be replayed from history.
"""

from __future__ import annotations

import logging

from core.domain.errors import TokenLimitExceeded

logger = logging.getLogger(__name__)

MAX_TOKENS = 39

_DELIMITER = " "


def split(line: str, *, limit: int = MAX_TOKENS) -> tuple[list[str], int]:
    """Split ``line`` into ``(tokens, count)``.

    Raises `TokenLimitExceeded` when more than ``limit`` tokens are found. The
    exception carries the first ``limit`` tokens so the caller can report the
    overflow and still run the truncated command.
    """

    tokens = [token for token in line.split(_DELIMITER) if token]
    if len(tokens) > limit:
        kept = tokens[:limit]
        discarded = len(tokens) - limit
        logger.debug("line truncated at %d tokens (%d discarded)", limit, discarded)
        raise TokenLimitExceeded(tokens=kept, discarded=discarded, limit=limit)
    return tokens, len(tokens)
