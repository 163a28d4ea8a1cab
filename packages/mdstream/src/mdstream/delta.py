"""Append-only deltas between successive rendered snapshots."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def normalize_stream_output(s: str) -> str:
    """Strip trailing spaces/tabs from every line and trailing blank lines."""
    if not s:
        return s
    lines = [line.rstrip(" \t") for line in s.split("\n")]
    return "\n".join(lines).rstrip("\n")


def stream_delta(prev: str, next: str) -> str:
    """
    Text to append so that output advances from `prev` to `next`.

    When `next` extends `prev` this is the exact suffix. Otherwise output
    restarts at the start of the line holding the first difference; earlier
    output is never erased, so this path is only a fallback.
    """
    if not prev:
        return next
    if next.startswith(prev):
        return next[len(prev):]

    i = 0
    limit = min(len(prev), len(next))
    while i < limit and prev[i] == next[i]:
        i += 1

    # Keep append-only chunks aligned to full lines
    i = next.rfind("\n", 0, i) + 1
    return next[i:]


class DeltaEmitter:
    """Tracks the last emitted snapshot and hands out deltas against it."""

    def __init__(self) -> None:
        self._last_emitted = ""
        self._wrote = False

    @property
    def last_emitted(self) -> str:
        return self._last_emitted

    @property
    def emitted(self) -> bool:
        """Whether any non-empty delta has ever been handed out."""
        return self._wrote

    def advance(self, next: str) -> str:
        """Record `next` (already normalized) and return the text to write."""
        if next == self._last_emitted:
            return ""

        delta = stream_delta(self._last_emitted, next)
        if self._last_emitted and not next.startswith(self._last_emitted):
            logger.debug(
                "Snapshot diverged from emitted output; re-emitting %d chars from line boundary",
                len(delta),
            )
        self._last_emitted = next
        if delta:
            self._wrote = True
        return delta
