"""Frozen column widths for tables seen during one stream."""
from __future__ import annotations

import logging

from .config import STREAM_MIN_COL_WIDTH
from .utils import visible_width

logger = logging.getLogger(__name__)


class TableLayoutRegistry:
    """
    Write-once store of column widths keyed by table ordinal.

    The first call for an ordinal computes widths from the header row; every
    later call returns those widths untouched, whatever the headers say. This
    keeps a table's grid identical across re-renders as rows keep arriving.
    """

    def __init__(self, min_col_width: int = STREAM_MIN_COL_WIDTH) -> None:
        self._min_col_width = min_col_width
        self._widths_by_table: dict[int, tuple[int, ...]] = {}

    def layout(self, table_idx: int, headers: list[str]) -> list[int]:
        widths = self._widths_by_table.get(table_idx)
        if widths is None:
            widths = tuple(
                max(self._min_col_width, visible_width(h.strip()) + 2)
                for h in headers
            )
            self._widths_by_table[table_idx] = widths
            logger.debug("Froze table %d widths %s", table_idx, widths)
        return list(widths)

    def __len__(self) -> int:
        return len(self._widths_by_table)

    def __contains__(self, table_idx: object) -> bool:
        return table_idx in self._widths_by_table
