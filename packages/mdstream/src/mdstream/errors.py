"""Stream pipeline errors. Every stage failure is fatal; none is retried."""
from __future__ import annotations


class StreamError(Exception):
    """Base class for failures that abort a stream."""

    stage: str = "stream"


class StreamReadError(StreamError):
    """Reading from the input source failed."""

    stage = "read"


class RendererError(StreamError):
    """The markdown renderer could not be constructed."""

    stage = "render"


class RenderError(StreamError):
    """The markdown renderer failed on a snapshot."""

    stage = "render"


class StreamWriteError(StreamError):
    """Writing to the output sink failed."""

    stage = "write"
