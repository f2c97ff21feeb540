"""Column width allocation — fit variable-length columns into a surface width.

Two allocators live here:

* ``fixed_widths`` splits the surface evenly and ignores the data.
* ``fit_widths`` sizes every column from its header and longest value,
  then grows the last column or shrinks columns until the line is exactly
  as wide as the surface.

Every rendered line is ``sum(widths) + (len(widths) - 1)`` characters wide:
one separator sits between each pair of columns.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tabfit.exceptions import TooManyColumnsError

logger = logging.getLogger(__name__)


class ColumnWidth:
    """Header and data width of one output column.

    ``width`` is the effective width, ``max(header_width, data_width)``.
    It is cached and refreshed by every setter.
    """

    __slots__ = ("_header_width", "_data_width", "_width")

    def __init__(self, header_width: int = 0, data_width: int = 0) -> None:
        self._header_width = header_width
        self._data_width = data_width
        self._width = max(header_width, data_width)

    def __repr__(self) -> str:
        return (
            f"ColumnWidth(header_width={self._header_width}, "
            f"data_width={self._data_width})"
        )

    @property
    def header_width(self) -> int:
        return self._header_width

    @header_width.setter
    def header_width(self, value: int) -> None:
        self._header_width = value
        self._update()

    @property
    def data_width(self) -> int:
        return self._data_width

    @data_width.setter
    def data_width(self, value: int) -> None:
        self._data_width = value
        self._update()

    @property
    def width(self) -> int:
        return self._width

    @property
    def header_longer(self) -> bool:
        return self._header_width > self._data_width

    def cap_header_width(self, value: int) -> None:
        """Lower the header width to ``value`` if it is wider."""
        if self._header_width > value:
            self.header_width = value

    def grow(self, delta: int) -> None:
        """Grow the effective width; header and data both take the new width."""
        self._width += delta
        self._header_width = self._width
        self._data_width = self._width

    def _update(self) -> None:
        self._width = max(self._header_width, self._data_width)


def line_width(columns: Sequence[ColumnWidth]) -> int:
    """Total characters of one line: effective widths plus separators."""
    if not columns:
        return 0
    return sum(c.width for c in columns) + len(columns) - 1


def check_fits(mode: str, num_columns: int, surface_width: int) -> None:
    """Raise TooManyColumnsError unless each column can get one character."""
    if num_columns * 2 - 1 > surface_width:
        raise TooManyColumnsError(mode, num_columns, surface_width)


# ---------------------------------------------------------------------------
# FIXED
# ---------------------------------------------------------------------------


def fixed_widths(num_columns: int, surface_width: int) -> list[int]:
    """Split the surface evenly; the last column takes the remainder.

    At the minimum surface (``2n - 1``) all columns but the last are 0 wide.
    """
    if num_columns == 0:
        return []
    check_fits("FIXED", num_columns, surface_width)

    base = surface_width // num_columns - 1
    widths = [base] * num_columns
    widths[-1] += surface_width - num_columns * (base + 1) + 1
    return widths


# ---------------------------------------------------------------------------
# COLUMNS
# ---------------------------------------------------------------------------


def fit_widths(
    header_lengths: Sequence[int],
    data_lengths: Sequence[int],
    surface_width: int,
) -> list[int]:
    """Compute content-fitted widths for COLUMNS mode.

    ``header_lengths`` and ``data_lengths`` hold, per column, the label
    length and the longest display value. Under budget the last column
    grows; over budget ``shrink_columns`` runs.
    At the minimum surface the single-column ceiling is 0, so all but the
    last column can end up 0 wide.
    """
    num_columns = len(header_lengths)
    if num_columns == 0:
        return []
    check_fits("COLUMNS", num_columns, surface_width)

    columns = [ColumnWidth(h, d) for h, d in zip(header_lengths, data_lengths)]
    total = line_width(columns)

    if total < surface_width:
        columns[-1].grow(surface_width - total)
    elif total > surface_width:
        total = shrink_columns(columns, surface_width)
        if total < surface_width:
            # A one-step clamp can land under the budget.
            columns[-1].grow(surface_width - total)

    widths = [c.width for c in columns]
    logger.debug("COLUMNS widths for surface %d: %s", surface_width, widths)
    return widths


def shrink_columns(columns: list[ColumnWidth], surface_width: int) -> int:
    """Shrink ``columns`` in place until the line fits; return the line width.

    Each pass changes one column. While any header is longer than its data,
    headers shrink; after that, data shrinks (and drags the header with it).
    Columns are scanned from the last to the first. A header or data width
    larger than the single-column ceiling is clamped in one step, otherwise
    it loses one character.

    Stops when the line fits or a pass changes nothing. The second case is
    logged and the widths reached so far are kept.
    """
    num_columns = len(columns)
    max_single = surface_width - (num_columns - 1) * 2 - 1
    total = line_width(columns)
    previous = -1
    passes = 0

    while total > surface_width and total != previous:
        previous = total
        passes += 1

        # Index-stable ``columns`` is mutated; the sorted view only decides policy.
        by_width = sorted(columns, key=lambda c: c.width)
        shrink_data = not any(c.header_longer for c in by_width)

        for col in reversed(columns):
            if shrink_data:
                if col.data_width > max_single:
                    col.data_width = max_single
                    col.cap_header_width(col.data_width)
                    break
                if col.data_width > 1:
                    col.data_width -= 1
                    col.cap_header_width(col.data_width)
                    break
            else:
                if not col.header_longer:
                    continue
                if col.header_width > max_single:
                    col.header_width = max_single
                    break
                if col.header_width > 1:
                    col.header_width -= 1
                    break

        total = line_width(columns)

    logger.debug("shrink finished after %d passes, line width %d", passes, total)
    if total > surface_width:
        logger.warning(
            "Could not shrink %d columns into %d characters (stuck at %d).",
            num_columns,
            surface_width,
            total,
        )
    return total


# ---------------------------------------------------------------------------
# ROW
# ---------------------------------------------------------------------------


def label_width(labels: Sequence[str]) -> int:
    """Width of the label column in ROW mode: the longest label."""
    return max((len(label) for label in labels), default=0)
