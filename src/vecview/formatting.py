"""Readable string renderings of arrays, slices, matrices and column tables.

Every function only reads its sources through ``get`` and ``length``, so
arrays, tuples and views all format alike::

    format_array([1, 2, 3])                  # "1, 2, 3"
    format_array([1, 2, 3], fmt="%.2f")      # "1.00, 2.00, 3.00"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tabulate import tabulate

from .errors import bad_argument
from .protocol import IndexedRead, check_window, get, get_values, length


def _cell(value: Any, fmt: str | None) -> str:
    return str(value) if fmt is None else fmt % value


def format_slice(
    src: IndexedRead, src_index: int, src_count: int, separator: str = ", ", fmt: str | None = None
) -> str:
    check_window("src", src, src_index, src_count)
    return separator.join(_cell(get(src, i), fmt) for i in range(src_index, src_index + src_count))


def format_array(src: IndexedRead, separator: str = ", ", fmt: str | None = None) -> str:
    """Values of ``src`` joined by ``separator``; ``fmt`` is a ``%``-style format."""
    return format_slice(src, 1, length(src), separator, fmt)


def format_matrix(
    src: IndexedRead,
    src_index: int,
    num_cols: int,
    num_rows: int,
    fmt: str | None = None,
    row_major_order: bool = False,
) -> str:
    """One comma-separated line per row of a ``num_cols x num_rows`` matrix.

    The data is read column-major unless ``row_major_order`` is set.
    """
    check_window("src", src, src_index, num_cols * num_rows)
    lines = []
    for row in range(num_rows):
        cells = []
        for col in range(num_cols):
            if row_major_order:
                offset = row * num_cols + col
            else:
                offset = col * num_rows + row
            cells.append(_cell(get(src, src_index + offset), fmt))
        lines.append(", ".join(cells))
    return "\n".join(lines)


@dataclass(frozen=True)
class Column:
    """One column of :func:`tabulated`: row ``r`` shows ``group_size`` values of ``data``.

    ``fmt`` receives the whole group, e.g. ``Column(pos, "pos", group_size=3,
    fmt="%d,%d,%d")``.
    """

    data: IndexedRead
    label: str | None = None
    index: int = 1
    count: int | None = None
    group_size: int = 1
    fmt: str | None = None

    def __post_init__(self) -> None:
        if self.data is None:
            raise bad_argument("column.data", "expected array or sequence, got None")
        if self.group_size < 1:
            raise bad_argument("column.group_size", f"must be >= 1, got {self.group_size}")

    def last_index(self) -> int:
        if self.count is None:
            return length(self.data)
        return self.index - 1 + self.count

    def cell(self, row: int) -> str:
        start = self.index + (row - 1) * self.group_size
        if start > self.last_index():
            return "-"
        values = get_values(self.data, start, self.group_size)
        if self.fmt is not None:
            return self.fmt % values
        return " ".join(str(v) for v in values)


def tabulated(num_rows: int, *columns: Column, tablefmt: str = "simple") -> str:
    """Render ``num_rows`` rows of side-by-side columns, numbered from 1.

    Rows past the end of a column's data render as ``-``.
    """
    if not columns:
        raise bad_argument("columns", "expected at least one column")
    rows = [[column.cell(row) for column in columns] for row in range(1, num_rows + 1)]
    return tabulate(
        rows,
        headers=[column.label or "-" for column in columns],
        showindex=range(1, num_rows + 1),
        tablefmt=tablefmt,
        disable_numparse=True,
    )
