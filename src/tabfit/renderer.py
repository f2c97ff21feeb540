"""Table renderer — turns a ResultSet into text lines for one display mode.

FIXED, ROW and CLASSIC stream rows one at a time. COLUMNS reads every row
first because its widths depend on the data. Lines go to a text sink and
the sink is flushed once, after the last line.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from tabfit.config import DisplayMode, RenderConfig
from tabfit.results import ResultSet
from tabfit.values import format_value
from tabfit.widths import check_fits, fit_widths, fixed_widths, label_width

logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = "|"
RULE_FILL = "-"
RULE_JUNCTION = "+"
CLASSIC_DELIMITER = "|"
ROW_BANNER = " Row {} "


def fit(text: str, width: int) -> str:
    """Cut or pad ``text`` to exactly ``width`` characters."""
    return text[:width].ljust(width)


def center(text: str, width: int, fill: str) -> str:
    """Centre ``text`` in ``width``; odd slack puts the extra fill on the left."""
    if len(text) >= width:
        return text
    slack = width - len(text)
    right = slack // 2
    return fill * (slack - right) + text + fill * right


class TableRenderer:
    """Render result sets according to a RenderConfig.

    The surface width is read from the config on every ``render`` call, so
    a terminal resize between calls is picked up.
    """

    def __init__(self, config: RenderConfig, sink: TextIO | None = None) -> None:
        self.config = config
        self.sink = sink if sink is not None else sys.stdout

    def render(self, result: ResultSet) -> int:
        """Render ``result`` and return the number of data rows written.

        Raises TooManyColumnsError (FIXED and COLUMNS) before any output.
        """
        if not result.columns:
            return 0

        mode = self.config.mode
        if mode is DisplayMode.FIXED:
            count = self._render_fixed(result)
        elif mode is DisplayMode.COLUMNS:
            count = self._render_columns(result)
        elif mode is DisplayMode.ROW:
            count = self._render_rows(result)
        else:
            count = self._render_classic(result)

        self.sink.flush()
        logger.debug("rendered %d rows in %s mode", count, mode.name)
        return count

    # -- line builders ------------------------------------------------------

    def render_header(self, widths: Sequence[int], labels: Sequence[str]) -> list[str]:
        """Header line plus the rule line under it."""
        header = COLUMN_SEPARATOR.join(fit(label, w) for label, w in zip(labels, widths))
        rule = RULE_JUNCTION.join(RULE_FILL * w for w in widths)
        return [header, rule]

    def render_row(
        self, widths: Sequence[int], values: Sequence[Any], skip: int = 0
    ) -> str:
        """One data line; the first ``skip`` values are row-id columns."""
        null_value = self.config.null_value
        cells = [
            fit(format_value(value, null_value), w)
            for value, w in zip(values[skip:], widths)
        ]
        return COLUMN_SEPARATOR.join(cells)

    # -- modes --------------------------------------------------------------

    def _render_fixed(self, result: ResultSet) -> int:
        widths = fixed_widths(len(result.columns), self.config.surface_width())
        self._write_lines(self.render_header(widths, result.labels))

        count = 0
        for row in result:
            self._write(self.render_row(widths, row, result.row_id_columns))
            count += 1
        return count

    def _render_columns(self, result: ResultSet) -> int:
        labels = result.labels
        skip = result.row_id_columns
        null_value = self.config.null_value
        surface = self.config.surface_width()
        check_fits("COLUMNS", len(labels), surface)

        rows = result.get_all()
        data_lengths = [0] * len(labels)
        for row in rows:
            for i, value in enumerate(row[skip:skip + len(labels)]):
                length = len(format_value(value, null_value))
                if length > data_lengths[i]:
                    data_lengths[i] = length

        widths = fit_widths([len(label) for label in labels], data_lengths, surface)
        self._write_lines(self.render_header(widths, labels))
        for row in rows:
            self._write(self.render_row(widths, row, skip))
        return len(rows)

    def _render_rows(self, result: ResultSet) -> int:
        labels = result.labels
        pad = label_width(labels)
        padded = [label.ljust(pad) for label in labels]
        null_value = self.config.null_value
        surface = self.config.surface_width()

        count = 0
        for row in result:
            count += 1
            self._write(center(ROW_BANNER.format(count), surface, RULE_FILL))
            for label, value in zip(padded, row[result.row_id_columns:]):
                self._write(f"{label}: {format_value(value, null_value)}")
        return count

    def _render_classic(self, result: ResultSet) -> int:
        null_value = self.config.null_value
        self._write(CLASSIC_DELIMITER.join(result.labels))

        count = 0
        for row in result:
            values = row[result.row_id_columns:]
            self._write(CLASSIC_DELIMITER.join(format_value(v, null_value) for v in values))
            count += 1
        return count

    # -- sink ---------------------------------------------------------------

    def _write(self, line: str) -> None:
        self.sink.write(line + "\n")

    def _write_lines(self, lines: Sequence[str]) -> None:
        for line in lines:
            self._write(line)
