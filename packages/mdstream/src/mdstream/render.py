"""
Bridge to the markdown renderer (rich).

The renderer is treated as a pure function from markdown text to styled text
for a fixed style and width; no incremental state is kept between calls.
"""
from __future__ import annotations

import configparser
import io
import logging
import os
from dataclasses import dataclass

from rich.console import Console, ConsoleOptions, RenderResult
from rich.errors import StyleError, StyleSyntaxError
from rich.markdown import CodeBlock, Markdown
from rich.syntax import Syntax
from rich.theme import Theme

from .config import RenderConfig
from .errors import RenderError, RendererError
from .preprocess import preprocess_stream_markdown
from .table_layout import TableLayoutRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleProfile:
    code_theme: str
    colors: bool
    theme: Theme | None = None


_LIGHT_THEME = Theme({
    "markdown.code": "bold blue",
    "markdown.block_quote": "magenta",
    "markdown.link": "blue",
    "markdown.link_url": "underline blue",
    "markdown.item.bullet": "bold blue",
    "markdown.item.number": "bold blue",
    "markdown.hr": "grey50",
})

STYLES: dict[str, StyleProfile] = {
    "dark": StyleProfile(code_theme="monokai", colors=True),
    "light": StyleProfile(code_theme="default", colors=True, theme=_LIGHT_THEME),
    "notty": StyleProfile(code_theme="default", colors=False),
}


def load_style(style: str) -> StyleProfile:
    """Resolve a builtin style name or a rich theme .ini file path."""
    profile = STYLES.get(style)
    if profile is not None:
        return profile

    path = os.path.expanduser(style)
    if not os.path.isfile(path):
        raise RendererError(f"unable to create renderer: unknown style {style!r}")
    try:
        theme = Theme.read(path)
    except (OSError, configparser.Error, StyleError, StyleSyntaxError) as err:
        raise RendererError(f"unable to create renderer: bad style file {path}: {err}") from err
    return StyleProfile(code_theme="monokai", colors=True, theme=theme)


class _CodeBlock(CodeBlock):
    """
    Code block with no padding row below the code.

    A growing block then only ever adds lines at its end, even in styles that
    paint the padding with a background colour. An empty block renders nothing.
    """

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        code = str(self.text).rstrip()
        if not code:
            return
        yield Syntax(code, self.lexer_name, theme=self.theme, word_wrap=True, padding=(1, 1, 0, 1))


class _Markdown(Markdown):
    """rich Markdown that can render soft line breaks as hard breaks."""

    elements = {**Markdown.elements, "fence": _CodeBlock, "code_block": _CodeBlock}

    def __init__(self, markup: str, preserve_newlines: bool = False, **kwargs) -> None:
        super().__init__(markup, **kwargs)
        if preserve_newlines:
            for token in self.parsed:
                for child in token.children or ():
                    if child.type == "softbreak":
                        child.type = "hardbreak"


class MarkdownRenderer:
    """Renders markdown to styled text at a fixed style and wrap width."""

    def __init__(self, config: RenderConfig) -> None:
        if config.width <= 0:
            raise RendererError(f"unable to create renderer: invalid width {config.width}")
        self._config = config
        self._profile = load_style(config.style)

    @property
    def config(self) -> RenderConfig:
        return self._config

    def render(self, text: str, preserve_newlines: bool | None = None) -> str:
        if preserve_newlines is None:
            preserve_newlines = self._config.preserve_newlines

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=self._config.width,
            force_terminal=self._profile.colors,
            color_system="auto" if self._profile.colors else None,
            no_color=not self._profile.colors,
            theme=self._profile.theme,
            highlight=False,
            legacy_windows=False,
        )
        try:
            # Hyperlink escapes carry a random id per render, which would
            # break prefix comparison between snapshots.
            markdown = _Markdown(
                text,
                preserve_newlines=preserve_newlines,
                code_theme=self._profile.code_theme,
                hyperlinks=False,
            )
            console.print(markdown)
        except Exception as err:
            raise RenderError(f"unable to render markdown: {err}") from err
        return buffer.getvalue()


def render_stream_snapshot(
    content: str,
    layouts: TableLayoutRegistry,
    final: bool,
    renderer: MarkdownRenderer,
) -> str | None:
    """
    Render the committed part of `content`.

    Returns None when there is nothing to show yet: a non-final snapshot with
    no complete line, or with no committed text.
    """
    if not final and "\n" not in content:
        return None

    prepared = preprocess_stream_markdown(content, layouts, final)
    if not prepared and not final:
        return None

    logger.debug("Rendering %d committed chars (final=%s)", len(prepared), final)
    return renderer.render(prepared, preserve_newlines=True)


def render_document(content: str, renderer: MarkdownRenderer) -> str:
    """Render a complete document in one pass."""
    return renderer.render(content)
