"""Conversion between nested sequences and flat arrays.

Examples::

    reshape([1, 2, 3, 4, 5, 6], [3, 2])   # [[1, 2], [3, 4], [5, 6]]
    reshape([[1, 2, 3], [4, 5, 6]], [6])  # [1, 2, 3, 4, 5, 6]
    flatten([[[1, 2], [3, 4]], [[5, 6]]]) # [1, 2, 3, 4, 5, 6]

Strings and scalars are leaves. Rows are carved in row-major order.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Any

from .errors import ShapeError, bad_argument
from .protocol import DEFAULT_STORE, BackingStore, IndexedRead, is_sequence, length
from .protocol import set as set_at


def _leaves(src: Any) -> Iterator[Any]:
    if not is_sequence(src):
        yield src
        return
    for item in src:
        yield from _leaves(item)


def shape_of(nested: Any) -> tuple[int, ...]:
    """Extents of a rectangular nesting, found by descending first elements."""
    shape = []
    node = nested
    while is_sequence(node):
        n = length(node)
        shape.append(n)
        if n == 0:
            break
        node = node[0]
    return tuple(shape)


def _check_shape(dest_shape: Sequence[int]) -> tuple[int, ...]:
    if not is_sequence(dest_shape):
        raise bad_argument("dest_shape", f"expected sequence of extents, got {type(dest_shape).__name__}")
    shape = tuple(dest_shape)
    if not shape:
        raise bad_argument("dest_shape", "must have at least one extent")
    for extent in shape:
        if extent < 0:
            raise bad_argument("dest_shape", f"extents must be >= 0, got {extent}")
    return shape


def _carve(values: list[Any], shape: tuple[int, ...]) -> list[Any]:
    if len(shape) == 1:
        return values
    step = math.prod(shape[1:])
    return [_carve(values[k * step : (k + 1) * step], shape[1:]) for k in range(shape[0])]


def _write_rows(rows: list[Any], dest: Any, dest_index: int, store: BackingStore) -> None:
    store.grow_array(dest, dest_index, len(rows))
    for k, row in enumerate(rows):
        set_at(dest, dest_index + k, row)


def flatten(nested: IndexedRead) -> list[Any]:
    """Depth-first concatenation of the leaves of ``nested``."""
    if nested is None:
        raise bad_argument("src", "expected array or sequence, got None")
    return list(_leaves(nested))


def flatten_into(nested: IndexedRead, dest: Any, dest_index: int = 1, *, store: BackingStore = DEFAULT_STORE) -> None:
    if dest is None:
        raise bad_argument("dest", "expected array or sequence, got None")
    _write_rows(flatten(nested), dest, dest_index, store)


def reshape(src: IndexedRead, dest_shape: Sequence[int]) -> list[Any]:
    """Rearrange the leaves of ``src`` into nested lists of extents ``dest_shape``.

    Raises :class:`~vecview.errors.ShapeError` when ``dest_shape`` does not
    hold exactly as many elements as ``src`` has leaves.
    """
    shape = _check_shape(dest_shape)
    values = flatten(src)
    expected = math.prod(shape)
    if expected != len(values):
        raise ShapeError(f"cannot reshape {len(values)} elements into shape {list(shape)} ({expected} elements)")
    return _carve(values, shape)


def reshape_into(
    src: IndexedRead,
    dest_shape: Sequence[int],
    dest: Any,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> None:
    """Like :func:`reshape`, writing the top-level entries into ``dest`` from ``dest_index``."""
    if dest is None:
        raise bad_argument("dest", "expected array or sequence, got None")
    _write_rows(reshape(src, dest_shape), dest, dest_index, store)
