"""
Snapshot preprocessing for stream mode.

Given the whole buffered input, decide which lines are committed (safe to
render because no later input can restyle them), rewrite committed markdown
tables into fixed-width grids, and close a dangling code fence so the renderer
never treats held-back text as code.

The commit policy is a heuristic tuned for paragraph-oriented output. It does
not guard against every construct that can restyle earlier lines (nested
lists, reference-style links defined later); those rare cases fall through to
the line-boundary rewind in mdstream.delta.
"""
from __future__ import annotations

import logging

from .table_format import format_fixed_width_table
from .table_layout import TableLayoutRegistry

logger = logging.getLogger(__name__)

FENCE = "```"


def preprocess_stream_markdown(
    content: str,
    layouts: TableLayoutRegistry,
    final: bool,
) -> str:
    """Return the committed, rewritten markdown for `content` ("" if nothing is committed)."""
    processable = content
    if not final:
        # A trailing partial line may still be extended
        last_newline = processable.rfind("\n")
        if last_newline < 0:
            return ""
        processable = processable[:last_newline + 1]

    lines = processable.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not final and lines:
        lines = lines[:commit_count(lines)]

    out = "".join(_rewrite_tables(lines, layouts))
    if has_unclosed_code_fence(out):
        out += "\n" + FENCE + "\n"
    return out


def commit_count(lines: list[str]) -> int:
    """
    Number of leading lines that are safe to emit.

    Everything through the last blank line is committed. Without any blank
    line, all but the last line is committed, and one more line is held back
    when the new last line could be a setext underline for the line above it.
    """
    for i in range(len(lines) - 1, -1, -1):
        if not lines[i].strip():
            return i + 1

    count = len(lines) - 1
    if count > 0 and is_setext_underline_line(lines[count - 1]):
        count -= 1
    return max(count, 0)


def _rewrite_tables(lines: list[str], layouts: TableLayoutRegistry) -> list[str]:
    # Ordinals restart at 0 on every call; the committed prefix only grows, so a
    # rescan assigns each table the same ordinal it had before.
    out: list[str] = []
    table_idx = 0
    i = 0
    while i < len(lines):
        line = lines[i]
        if i + 1 < len(lines) and is_table_header_line(line) and is_table_separator_line(lines[i + 1]):
            headers = parse_table_cells(line)
            if not headers:
                out.append(line + "\n")
                i += 1
                continue

            widths = layouts.layout(table_idx, headers)
            table_idx += 1

            rows: list[list[str]] = []
            j = i + 2
            while j < len(lines) and is_table_row_line(lines[j]):
                rows.append(parse_table_cells(lines[j]))
                j += 1

            # Header and separator alone are held until a row commits
            if rows:
                out.append(FENCE + "text\n")
                out.append(format_fixed_width_table(headers, widths, rows))
                out.append(FENCE + "\n")

            i = j
            continue

        out.append(line + "\n")
        i += 1
    return out


def is_table_header_line(s: str) -> bool:
    trimmed = s.strip()
    return trimmed != "" and "|" in trimmed


def is_table_row_line(s: str) -> bool:
    trimmed = s.strip()
    return trimmed != "" and "|" in trimmed


def is_table_separator_line(s: str) -> bool:
    """Every field is 3+ dashes, optionally wrapped in alignment colons."""
    cells = parse_table_cells(s)
    if not cells:
        return False
    for cell in cells:
        v = cell.strip(":").strip()
        if len(v) < 3 or v.strip("-"):
            return False
    return True


def is_setext_underline_line(s: str) -> bool:
    trimmed = s.strip()
    if len(trimmed) < 3 or trimmed[0] not in "=-":
        return False
    return trimmed == trimmed[0] * len(trimmed)


def parse_table_cells(line: str) -> list[str]:
    """
    Split a pipe-delimited row into trimmed cells.

    One optional leading and trailing pipe is dropped; `\\|` is a literal pipe
    inside a cell. A blank line has no cells.
    """
    trimmed = line.strip()
    if not trimmed:
        return []
    if trimmed.startswith("|"):
        trimmed = trimmed[1:]
    if trimmed.endswith("|"):
        trimmed = trimmed[:-1]

    parts: list[str] = []
    cur: list[str] = []
    escaped = False
    for ch in trimmed:
        if escaped:
            cur.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "|":
            parts.append("".join(cur).strip())
            cur = []
        else:
            cur.append(ch)
    parts.append("".join(cur).strip())
    return parts


def has_unclosed_code_fence(s: str) -> bool:
    is_open = False
    for line in s.split("\n"):
        if line.strip().startswith(FENCE):
            is_open = not is_open
    return is_open
