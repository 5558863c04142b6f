"""Iteration over fixed-size groups of consecutive elements.

Flat arrays of 2D points read naturally as groups of two::

    for i, x, y in group([1, 2, 3, 4, 5, 6], 2):
        ...  # (1, 1, 2), (2, 3, 4), (3, 5, 6)

The yielded index is the 1-based index of the group, not of an element.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from .errors import bad_argument
from .protocol import IndexedRead, check_window, get_values, length
from .view import SliceView


def _check_size(size: int) -> None:
    if size < 1:
        raise bad_argument("size", f"must be >= 1, got {size}")


def group_ex(src: IndexedRead, src_index: int, src_count: int, size: int) -> Iterator[tuple[Any, ...]]:
    """Yield ``(i, v1, ..., v_size)`` over ``ceil(src_count / size)`` groups of a slice.

    A partial final group still reads ``size`` elements, so it raises
    :class:`~vecview.errors.RangeError` once it runs past the end of ``src``.
    """
    _check_size(size)
    check_window("src", src, src_index, src_count)
    for i in range(math.ceil(src_count / size)):
        yield (i + 1, *get_values(src, src_index + i * size, size))


def group(src: IndexedRead, size: int) -> Iterator[tuple[Any, ...]]:
    return group_ex(src, 1, length(src), size)


def group_views(src: IndexedRead, size: int) -> Iterator[tuple[int, SliceView]]:
    """Yield ``(i, view)`` where ``view`` is a writable slice over group ``i``."""
    _check_size(size)
    for i in range(math.ceil(length(src) / size)):
        yield i + 1, SliceView(src, i * size + 1, size)


def zip_groups_ex(
    a: IndexedRead, a_index: int, a_count: int, b: IndexedRead, b_index: int, size: int
) -> Iterator[tuple[Any, ...]]:
    """Yield ``(i, a values..., b values...)`` over matching groups of two slices."""
    _check_size(size)
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    for i in range(math.ceil(a_count / size)):
        offset = i * size
        yield (i + 1, *get_values(a, a_index + offset, size), *get_values(b, b_index + offset, size))


def zip_groups(a: IndexedRead, b: IndexedRead, size: int) -> Iterator[tuple[Any, ...]]:
    """Like :func:`zip_groups_ex` over whole arrays, stopping at the shorter one.

    Mirrored 2D point data::

        all(ax == -bx and ay == -by for _, ax, ay, bx, by in zip_groups(a, b, 2))
    """
    return zip_groups_ex(a, 1, min(length(a), length(b)), b, 1, size)
