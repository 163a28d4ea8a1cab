"""
Stream mode: render markdown as it arrives, append-only.

One reader thread performs blocking reads and pushes chunks into a bounded
queue. The consumer coroutine owns the input buffer, the table layouts and the
last emitted snapshot; it handles one event at a time, either the next chunk
or a render tick, so none of that state needs locking.

State machine:
    IDLE -> STREAMING -> DRAINING -> CLOSED
    any  -> CLOSED (read, render or write failure)
"""
from __future__ import annotations

import asyncio
import codecs
import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, NoReturn

from .config import RenderConfig, StreamConfig
from .delta import DeltaEmitter, normalize_stream_output
from .errors import StreamError, StreamReadError, StreamWriteError
from .render import MarkdownRenderer, render_stream_snapshot
from .table_layout import TableLayoutRegistry
from .terminal import Terminal

logger = logging.getLogger(__name__)


class StreamState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    DRAINING = "draining"
    CLOSED = "closed"


@dataclass(frozen=True)
class StreamChunk:
    """Exactly one of: data, end of stream, or a read error."""
    data: bytes = b""
    eof: bool = False
    error: Exception | None = None


class InputBuffer:
    """Append-only text buffer fed with raw bytes (UTF-8, split-safe)."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._parts: list[str] = []

    def append(self, data: bytes) -> None:
        text = self._decoder.decode(data)
        if text:
            self._parts.append(text)

    def close(self) -> None:
        """Flush a trailing incomplete character, if any."""
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._parts.append(tail)

    @property
    def text(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""


class StreamSession:
    """
    Single-consumer state for one stream.

    feed() / tick() / finish() / fail() are the only mutators and must be
    called from one task. run_stream() drives them from a reader and a timer.
    """

    def __init__(
        self,
        terminal: Terminal,
        renderer: MarkdownRenderer,
        config: StreamConfig | None = None,
    ) -> None:
        self._terminal = terminal
        self._renderer = renderer
        self._config = config or StreamConfig()
        self._input = InputBuffer()
        self._layouts = TableLayoutRegistry(self._config.min_col_width)
        self._emitter = DeltaEmitter()
        self._dirty = False
        self._state = StreamState.IDLE

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def text(self) -> str:
        return self._input.text

    @property
    def layouts(self) -> TableLayoutRegistry:
        return self._layouts

    @property
    def last_emitted(self) -> str:
        return self._emitter.last_emitted

    def feed(self, data: bytes) -> None:
        self._ensure_accepting()
        if self._state is StreamState.IDLE:
            self._transition(StreamState.STREAMING)
        if data:
            self._input.append(data)
            self._dirty = True

    def tick(self) -> None:
        """Timer tick: re-render only if input arrived since the last render."""
        if not self._dirty or self._state is not StreamState.STREAMING:
            return
        self._emit(final=False)
        self._dirty = False

    def finish(self, data: bytes = b"") -> None:
        """End of stream: flush everything with a final render, then close."""
        self._ensure_accepting()
        if data:
            self._input.append(data)
        self._input.close()
        self._transition(StreamState.DRAINING)
        self._emit(final=True)
        if self._emitter.emitted:
            self._write("\n\n")
        self._transition(StreamState.CLOSED)

    def fail(self, error: Exception) -> NoReturn:
        self._transition(StreamState.CLOSED)
        raise StreamReadError(f"unable to read from reader: {error}") from error

    def _emit(self, final: bool) -> None:
        try:
            rendered = render_stream_snapshot(self._input.text, self._layouts, final, self._renderer)
            if rendered is None:
                return
            delta = self._emitter.advance(normalize_stream_output(rendered))
            if delta:
                self._write(delta)
        except StreamError:
            self._transition(StreamState.CLOSED)
            raise

    def _write(self, data: str) -> None:
        try:
            self._terminal.write(data)
        except OSError as err:
            raise StreamWriteError(f"unable to write stream output: {err}") from err

    def _ensure_accepting(self) -> None:
        if self._state in (StreamState.DRAINING, StreamState.CLOSED):
            raise RuntimeError(f"stream is {self._state.value}; no more input accepted")

    def _transition(self, state: StreamState) -> None:
        logger.debug("Stream %s -> %s", self._state.value, state.value)
        self._state = state


# ─────────────────────────────────────────────────────────────────────────────
# Producer
# ─────────────────────────────────────────────────────────────────────────────

def _read_chunks(
    reader: BinaryIO,
    queue: asyncio.Queue[StreamChunk],
    loop: asyncio.AbstractEventLoop,
    read_size: int,
) -> None:
    """Blocking read loop; runs on its own thread. Blocks while the queue is full."""
    # read1 returns whatever is available instead of waiting for a full buffer
    read = getattr(reader, "read1", None) or reader.read

    def put(chunk: StreamChunk) -> None:
        asyncio.run_coroutine_threadsafe(queue.put(chunk), loop).result()

    try:
        while True:
            try:
                data = read(read_size)
            except Exception as err:
                put(StreamChunk(error=err))
                return
            if not data:
                put(StreamChunk(eof=True))
                return
            if isinstance(data, str):
                data = data.encode("utf-8")
            put(StreamChunk(data=bytes(data)))
    except (RuntimeError, concurrent.futures.CancelledError):
        logger.debug("Consumer went away; reader thread exiting")


# ─────────────────────────────────────────────────────────────────────────────
# Consumer
# ─────────────────────────────────────────────────────────────────────────────

async def run_stream(
    reader: BinaryIO,
    terminal: Terminal,
    render_config: RenderConfig,
    config: StreamConfig | None = None,
) -> None:
    """
    Render `reader` to `terminal` incrementally until end of stream.

    Raises StreamReadError, RendererError, RenderError or StreamWriteError.
    Cancelling the awaiting task stops the stream even while the reader
    thread is blocked in a read.
    """
    config = config or StreamConfig()
    session = StreamSession(terminal, MarkdownRenderer(render_config), config)

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[StreamChunk] = asyncio.Queue(maxsize=config.queue_size)
    producer = threading.Thread(
        target=_read_chunks,
        args=(reader, queue, loop, config.read_size),
        name="mdstream-reader",
        daemon=True,
    )
    producer.start()

    next_tick = loop.time() + config.render_interval
    while True:
        timeout = max(0.0, next_tick - loop.time())
        try:
            chunk = await asyncio.wait_for(queue.get(), timeout)
        except asyncio.TimeoutError:
            session.tick()
            next_tick += config.render_interval
            if next_tick <= loop.time():
                # Missed ticks are dropped, not replayed
                next_tick = loop.time() + config.render_interval
            continue

        if chunk.error is not None:
            session.fail(chunk.error)
        if chunk.eof:
            session.finish()
            return
        session.feed(chunk.data)


def execute_stream(
    reader: BinaryIO,
    terminal: Terminal,
    render_config: RenderConfig,
    config: StreamConfig | None = None,
) -> None:
    """Blocking wrapper around run_stream()."""
    asyncio.run(run_stream(reader, terminal, render_config, config))
