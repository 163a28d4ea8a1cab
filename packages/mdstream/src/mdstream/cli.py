"""
CLI entry point.

    mdstream README.md
    some-process | mdstream --stream
"""
from __future__ import annotations

import logging
import os
import sys
from typing import BinaryIO, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import APP_NAME, get_debug_log_path, resolve_render_config
from .errors import StreamError, StreamWriteError
from .render import MarkdownRenderer, render_document
from .stream import execute_stream
from .terminal import ProcessTerminal

app = typer.Typer(
    name=APP_NAME,
    help="Render markdown in the terminal, optionally as it streams in.",
    add_completion=False,
)

err_console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    """Debug logs go to a file; the terminal is busy showing the document."""
    if not debug:
        return
    path = get_debug_log_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _open_input(path: str | None) -> BinaryIO:
    if path is None or path == "-":
        return sys.stdin.buffer
    if not os.path.isfile(path):
        raise typer.BadParameter(f"no such file: {path}", param_hint="PATH")
    return open(path, "rb")


@app.command()
def render(
    path: Optional[str] = typer.Argument(None, help="Markdown file; omit or use '-' for stdin"),
    stream: bool = typer.Option(False, "--stream", "-s", help="Render incrementally as input arrives"),
    style: Optional[str] = typer.Option(None, "--style", "-S", help="auto, dark, light, notty, or a rich theme file"),
    width: Optional[int] = typer.Option(None, "--width", "-w", help="Word-wrap width (0 = fit terminal)"),
    preserve_new_lines: bool = typer.Option(False, "--preserve-new-lines", "-n", help="Keep line breaks inside paragraphs"),
    debug: bool = typer.Option(False, "--debug", help="Write debug logs to the debug log file"),
) -> None:
    """Render markdown from PATH or stdin."""
    _configure_logging(debug)
    terminal = ProcessTerminal()
    try:
        render_config = resolve_render_config(
            style=style,
            width=width,
            columns=terminal.columns,
            is_tty=terminal.is_tty,
            preserve_newlines=preserve_new_lines,
        )
    except ValueError as err:
        raise typer.BadParameter(str(err)) from err

    reader = _open_input(path)
    try:
        if stream:
            execute_stream(reader, terminal, render_config)
        else:
            text = reader.read().decode("utf-8", errors="replace")
            output = render_document(text, MarkdownRenderer(render_config))
            try:
                terminal.write(output)
            except OSError as err:
                raise StreamWriteError(f"unable to write output: {err}") from err
    except StreamError as err:
        err_console.print(f"[red]Error ({err.stage}):[/red] {escape(str(err))}")
        raise typer.Exit(1)
    finally:
        if reader is not sys.stdin.buffer:
            reader.close()


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
