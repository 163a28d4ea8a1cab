"""
Terminal text width utilities.

Provides:
- visible_width(): terminal column width of a string (ANSI-aware, wide chars)
- split_at_width(): split a string at a display-column boundary
- strip_ansi(): remove escape sequences
"""
from __future__ import annotations

import re
import unicodedata

from wcwidth import wcwidth

# ─────────────────────────────────────────────────────────────────────────────
# Width cache (bounded, insertion ordered)
# ─────────────────────────────────────────────────────────────────────────────
_WIDTH_CACHE_SIZE = 512
_width_cache: dict[str, int] = {}

_ANSI_SGR_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJA-Z]")
_ANSI_OSC_RE = re.compile(r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")
_ANSI_APC_RE = re.compile(r"\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)")


def strip_ansi(s: str) -> str:
    """Remove SGR, OSC and APC escape sequences."""
    if "\x1b" not in s:
        return s
    s = _ANSI_SGR_RE.sub("", s)
    s = _ANSI_OSC_RE.sub("", s)
    return _ANSI_APC_RE.sub("", s)


def _could_be_emoji(cp: int, segment: str) -> bool:
    return (
        (0x1f000 <= cp <= 0x1fbff) or
        (0x2300 <= cp <= 0x23ff) or
        (0x2600 <= cp <= 0x27bf) or
        (0x2b50 <= cp <= 0x2b55) or
        "\ufe0f" in segment
    )


def _grapheme_width(segment: str) -> int:
    """Terminal width of a single grapheme cluster."""
    if not segment:
        return 0

    cp = ord(segment[0])
    if _could_be_emoji(cp, segment):
        # ZWJ sequences, flags and presentation selectors occupy two cells
        if len(segment) > 1 or wcwidth(segment[0]) == 2 or 0x1f000 <= cp <= 0x1fbff:
            return 2

    w = wcwidth(segment[0])
    if w < 0:
        return 0
    return w


def _segment_graphemes(text: str) -> list[str]:
    """Group combining marks, ZWJ and variation selectors with their base character."""
    clusters: list[str] = []
    for ch in text:
        if clusters and (
            unicodedata.category(ch) in ("Mn", "Me", "Cf")
            or ord(ch) in (0x200D, 0xFE0F, 0x20E3)
            or (clusters[-1].endswith("\u200d"))
        ):
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return clusters


def visible_width(s: str) -> int:
    """
    Calculate the visible terminal column width of a string.
    Escape sequences are ignored; CJK and emoji count as two columns.
    """
    if not s:
        return 0

    # Fast path: pure ASCII printable
    if all(0x20 <= ord(c) <= 0x7e for c in s):
        return len(s)

    cached = _width_cache.get(s)
    if cached is not None:
        return cached

    clean = s.replace("\t", "   ") if "\t" in s else s
    clean = strip_ansi(clean)
    width = sum(_grapheme_width(g) for g in _segment_graphemes(clean))

    if len(_width_cache) >= _WIDTH_CACHE_SIZE:
        _width_cache.pop(next(iter(_width_cache)))
    _width_cache[s] = width
    return width


def split_at_width(text: str, max_width: int) -> tuple[str, str]:
    """
    Split plain text into (head, rest) where head is the longest prefix whose
    display width is <= max_width. Graphemes are never split. When the first
    grapheme alone is wider than max_width it becomes the head anyway, so
    repeated splitting always makes progress.
    """
    head: list[str] = []
    width = 0
    graphemes = _segment_graphemes(text)
    for i, g in enumerate(graphemes):
        gw = _grapheme_width(g)
        if width + gw > max_width:
            if not head:
                return g, "".join(graphemes[i + 1:])
            return "".join(head), "".join(graphemes[i:])
        head.append(g)
        width += gw
    return "".join(head), ""
