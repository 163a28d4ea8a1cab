"""
Configuration: constants, environment overrides and render settings.

Everything the pipeline needs about style and width travels in a RenderConfig
value passed to the entry point; nothing here is mutable module state.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


APP_NAME: str = "mdstream"
CONFIG_DIR_NAME: str = ".mdstream"
VERSION: str = "0.1.0"

ENV_STYLE: str = f"{APP_NAME.upper()}_STYLE"
ENV_WIDTH: str = f"{APP_NAME.upper()}_WIDTH"
ENV_DIR: str = f"{APP_NAME.upper()}_DIR"
ENV_WRITE_LOG: str = f"{APP_NAME.upper()}_WRITE_LOG"

# ============================================================================
# Stream constants (part of the observable contract)
# ============================================================================

STREAM_RENDER_INTERVAL: float = 0.2  # seconds between re-renders
STREAM_MIN_COL_WIDTH: int = 12       # display columns
STREAM_QUEUE_SIZE: int = 16          # chunks buffered between reader and renderer
STREAM_READ_SIZE: int = 4096         # bytes per read

DEFAULT_STYLE: str = "auto"
MAX_AUTO_WIDTH: int = 120

BUILTIN_STYLES: tuple[str, ...] = ("auto", "dark", "light", "notty")


# ============================================================================
# Paths
# ============================================================================


def get_config_dir() -> str:
    """Get the config directory (e.g., ~/.mdstream/)."""
    env_dir = os.environ.get(ENV_DIR)
    if env_dir:
        return os.path.expanduser(env_dir)
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)


def get_debug_log_path() -> str:
    """Get path to debug log file."""
    return os.path.join(get_config_dir(), f"{APP_NAME}-debug.log")


def get_write_log_path() -> str:
    """Path that mirrors every terminal write, or "" when disabled."""
    return os.environ.get(ENV_WRITE_LOG, "")


# ============================================================================
# Settings
# ============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """How the markdown renderer styles and wraps output."""
    style: str = "dark"  # builtin style name or path to a rich theme .ini file
    width: int = 80
    preserve_newlines: bool = False


@dataclass(frozen=True)
class StreamConfig:
    """Timing and buffering knobs of the stream loop."""
    render_interval: float = STREAM_RENDER_INTERVAL
    queue_size: int = STREAM_QUEUE_SIZE
    read_size: int = STREAM_READ_SIZE
    min_col_width: int = STREAM_MIN_COL_WIDTH


def _env_width() -> int | None:
    raw = os.environ.get(ENV_WIDTH, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_WIDTH} must be an integer, got {raw!r}") from None
    return value


def resolve_render_config(
    style: str | None = None,
    width: int | None = None,
    columns: int = 80,
    is_tty: bool = False,
    preserve_newlines: bool = False,
) -> RenderConfig:
    """
    Build a RenderConfig from explicit values, then environment, then defaults.

    A width of 0 (or none given) means "fit the terminal", capped at
    MAX_AUTO_WIDTH. The "auto" style picks "dark" on a TTY and "notty" otherwise.
    """
    resolved_style = style or os.environ.get(ENV_STYLE) or DEFAULT_STYLE
    if resolved_style == "auto":
        resolved_style = "dark" if is_tty else "notty"

    resolved_width = width if width is not None else _env_width()
    if resolved_width is None or resolved_width <= 0:
        resolved_width = min(columns, MAX_AUTO_WIDTH) if columns > 0 else 80

    return RenderConfig(
        style=resolved_style,
        width=resolved_width,
        preserve_newlines=preserve_newlines,
    )
