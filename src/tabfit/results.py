"""Result sets handed to the renderer, and loaders that build them from files.

A ResultSet is an already-executed query result: ordered columns plus a
cursor over rows. Rows may carry leading row-id values that are not
described by ``columns``; ``row_id_columns`` says how many.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from tabfit.exceptions import ResultLoadError

Row = Sequence[Any]


@dataclass(frozen=True)
class ResultColumn:
    display_name: str


class ResultSet:
    """Ordered columns plus a one-way cursor over rows.

    Rows are pulled lazily from ``rows``. ``get_all`` drains whatever is
    left into a list; a row is never produced twice.
    """

    def __init__(
        self,
        columns: Sequence[ResultColumn],
        rows: Iterable[Row],
        row_id_columns: int = 0,
    ) -> None:
        self.columns: tuple[ResultColumn, ...] = tuple(columns)
        self.row_id_columns = row_id_columns
        self._rows = iter(rows)
        self._pending: Row | None = None
        self._has_pending = False

    def __iter__(self) -> Iterator[Row]:
        while self.has_next():
            yield self.next_row()

    @property
    def labels(self) -> list[str]:
        return [c.display_name for c in self.columns]

    def has_next(self) -> bool:
        if not self._has_pending:
            try:
                self._pending = next(self._rows)
            except StopIteration:
                return False
            self._has_pending = True
        return True

    def next_row(self) -> Row:
        if not self.has_next():
            raise StopIteration
        row = self._pending
        self._pending = None
        self._has_pending = False
        return row  # type: ignore[return-value]

    def get_all(self) -> list[Row]:
        return list(self)


# ---------------------------------------------------------------------------
# loaders
# ---------------------------------------------------------------------------


def load_result(source: str | Path | TextIO, fmt: str | None = None) -> ResultSet:
    """Load a ResultSet from a JSON or CSV file, a path, or an open stream.

    ``fmt`` is ``"json"`` or ``"csv"``; when omitted it is taken from the
    file extension, falling back to JSON.
    """
    if fmt is None:
        name = source if isinstance(source, (str, Path)) else getattr(source, "name", "")
        fmt = "csv" if Path(str(name)).suffix.lower() == ".csv" else "json"
    if fmt not in ("json", "csv"):
        raise ResultLoadError(f"Unknown input format '{fmt}'.")

    if isinstance(source, (str, Path)):
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise ResultLoadError(f"Cannot read {source}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise ResultLoadError(f"Cannot read {source}: not valid UTF-8 text") from e
    else:
        try:
            text = source.read()
        except UnicodeDecodeError as e:
            raise ResultLoadError("Cannot read input: not valid UTF-8 text") from e

    if fmt == "csv":
        return parse_csv(text)
    return parse_json(text)


def parse_json(text: str) -> ResultSet:
    """Build a ResultSet from ``{"columns": [...], "rows": [[...]]}``."""
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResultLoadError(f"Invalid JSON at line {e.lineno}: {e.msg}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("columns"), list):
        raise ResultLoadError("JSON result must be an object with a 'columns' list.")

    columns = [_json_column(c) for c in doc["columns"]]
    row_id_columns = doc.get("row_id_columns", 0)
    if (
        isinstance(row_id_columns, bool)
        or not isinstance(row_id_columns, int)
        or row_id_columns < 0
    ):
        raise ResultLoadError("'row_id_columns' must be a non-negative integer.")

    rows = doc.get("rows", [])
    if not isinstance(rows, list):
        raise ResultLoadError("'rows' must be a list.")
    arity = len(columns) + row_id_columns
    for i, row in enumerate(rows, 1):
        if not isinstance(row, list) or len(row) != arity:
            raise ResultLoadError(f"Row {i} does not have {arity} values.")
        for value in row:
            if isinstance(value, (list, dict)):
                raise ResultLoadError(f"Row {i} holds a nested value; cells must be scalars.")

    return ResultSet(columns, rows, row_id_columns)


def _json_column(entry: Any) -> ResultColumn:
    if isinstance(entry, str):
        return ResultColumn(entry)
    if isinstance(entry, dict) and isinstance(entry.get("name"), str):
        return ResultColumn(entry["name"])
    raise ResultLoadError(f"Invalid column entry: {entry!r}")


def parse_csv(text: str) -> ResultSet:
    """Build a ResultSet from CSV text; the first record is the header."""
    reader = csv.reader(io.StringIO(text))
    try:
        header = next(reader)
    except StopIteration:
        raise ResultLoadError("CSV input is empty.") from None
    except csv.Error as e:
        raise ResultLoadError(f"Invalid CSV: {e}") from e

    columns = [ResultColumn(name) for name in header]
    rows = []
    try:
        for row in reader:
            if not row:
                continue
            if len(row) != len(columns):
                raise ResultLoadError(
                    f"CSV line {reader.line_num} has {len(row)} values, expected {len(columns)}."
                )
            rows.append(row)
    except csv.Error as e:
        raise ResultLoadError(f"Invalid CSV: {e}") from e

    return ResultSet(columns, rows)
