"""
mdstream: stable terminal rendering of markdown that arrives incrementally.

Output is append-only: committed lines are rendered once and never rewritten,
tables are laid out on fixed-width grids, and every render emits only the
delta against what is already on screen.
"""
from .config import (
    STREAM_MIN_COL_WIDTH,
    STREAM_QUEUE_SIZE,
    STREAM_READ_SIZE,
    STREAM_RENDER_INTERVAL,
    VERSION,
    RenderConfig,
    StreamConfig,
    resolve_render_config,
)
from .delta import DeltaEmitter, normalize_stream_output, stream_delta
from .errors import (
    RenderError,
    RendererError,
    StreamError,
    StreamReadError,
    StreamWriteError,
)
from .preprocess import preprocess_stream_markdown
from .render import MarkdownRenderer, render_document, render_stream_snapshot
from .stream import (
    InputBuffer,
    StreamChunk,
    StreamSession,
    StreamState,
    execute_stream,
    run_stream,
)
from .table_format import format_fixed_width_table, wrap_cell
from .table_layout import TableLayoutRegistry
from .terminal import BufferTerminal, ProcessTerminal, Terminal
from .utils import visible_width

__version__ = VERSION

__all__ = [
    "BufferTerminal",
    "DeltaEmitter",
    "InputBuffer",
    "MarkdownRenderer",
    "ProcessTerminal",
    "RenderConfig",
    "RenderError",
    "RendererError",
    "STREAM_MIN_COL_WIDTH",
    "STREAM_QUEUE_SIZE",
    "STREAM_READ_SIZE",
    "STREAM_RENDER_INTERVAL",
    "StreamChunk",
    "StreamConfig",
    "StreamError",
    "StreamReadError",
    "StreamSession",
    "StreamState",
    "StreamWriteError",
    "TableLayoutRegistry",
    "Terminal",
    "execute_stream",
    "format_fixed_width_table",
    "normalize_stream_output",
    "preprocess_stream_markdown",
    "render_document",
    "render_stream_snapshot",
    "resolve_render_config",
    "run_stream",
    "stream_delta",
    "visible_width",
    "wrap_cell",
]
