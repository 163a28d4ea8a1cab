"""
Fixed-width table grid.

Renders a markdown table as a monospace grid whose column widths never depend
on the rows, so the grid can grow row by row without re-laying out earlier
lines.
"""
from __future__ import annotations

from .utils import split_at_width, visible_width


def format_fixed_width_table(
    headers: list[str],
    widths: list[int],
    rows: list[list[str]],
) -> str:
    """Header line, separator line, then each row (possibly several lines tall)."""
    col_count = len(widths)
    if col_count == 0:
        return ""

    parts = [
        format_table_row(normalize_cells(headers, col_count), widths),
        format_table_separator(widths),
    ]
    for row in rows:
        parts.append(format_table_row(normalize_cells(row, col_count), widths))
    return "".join(parts)


def format_table_separator(widths: list[int]) -> str:
    return "|" + "".join("-" * max(1, w) + "|" for w in widths) + "\n"


def format_table_row(cells: list[str], widths: list[int]) -> str:
    content_widths = [max(1, w - 2) for w in widths]
    wrapped = [wrap_cell(cell, cw) for cell, cw in zip(cells, content_widths)]
    height = max([1, *(len(w) for w in wrapped)])

    lines: list[str] = []
    for line_idx in range(height):
        line = "|"
        for col_lines, content_width in zip(wrapped, content_widths):
            segment = col_lines[line_idx] if line_idx < len(col_lines) else ""
            padding = max(0, content_width - visible_width(segment))
            line += " " + segment + " " * padding + " |"
        lines.append(line + "\n")
    return "".join(lines)


def wrap_cell(s: str, width: int) -> list[str]:
    """
    Greedy word wrap into lines of at most `width` display columns.
    Words wider than the limit are hard-broken. Always returns at least one line.
    """
    if width <= 0:
        return [s]

    words = s.replace("\n", " ").split()
    if not words:
        return [""]

    lines: list[str] = []
    cur = ""
    for word in words:
        if visible_width(word) > width:
            if cur:
                lines.append(cur)
                cur = ""
            lines.extend(break_word(word, width))
            continue

        candidate = f"{cur} {word}" if cur else word
        if visible_width(candidate) <= width:
            cur = candidate
            continue
        lines.append(cur)
        cur = word

    if cur:
        lines.append(cur)
    return lines


def break_word(word: str, width: int) -> list[str]:
    """Split a single word into fragments no wider than `width`."""
    if width <= 0 or not word:
        return [word]

    parts: list[str] = []
    remaining = word
    while visible_width(remaining) > width:
        part, remaining = split_at_width(remaining, width)
        parts.append(part)
    if remaining:
        parts.append(remaining)
    return parts or [""]


def normalize_cells(cells: list[str], cols: int) -> list[str]:
    """Trim each cell and truncate or blank-pad to exactly `cols` cells."""
    out = [c.strip() for c in cells[:cols]]
    out.extend("" for _ in range(cols - len(out)))
    return out
