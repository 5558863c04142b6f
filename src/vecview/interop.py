"""Conversion between vecview sequences and JAX arrays."""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp

from .protocol import DEFAULT_STORE, BackingStore, IndexedRead, check_window, get_values, length, set_values


def as_jax_array(seq: IndexedRead, index: int = 1, count: int | None = None, dtype: Any = None) -> jnp.ndarray:
    """Copy ``seq[index .. index+count-1]`` into a 1-D ``jax.numpy`` array.

    Views are read through their transforms, so ``as_jax_array(stride(a, 1, 2, n))``
    gathers every other element.
    """
    if count is None:
        count = length(seq) - index + 1
    check_window("seq", seq, index, count)
    return jnp.asarray(get_values(seq, index, count), dtype=dtype)


def as_jax_matrix(seq: IndexedRead, index: int, cols: int, rows: int, dtype: Any = None) -> jnp.ndarray:
    """Column-major ``cols x rows`` slice as a ``(rows, cols)`` JAX matrix."""
    return as_jax_array(seq, index, cols * rows, dtype).reshape(cols, rows).T


def from_jax(
    value: Any,
    dest: Any = None,
    dest_index: int = 1,
    *,
    column_major: bool = False,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Flatten a JAX array into a new array, or into ``dest`` from ``dest_index``.

    With ``column_major`` a 2-D ``(rows, cols)`` matrix is written column after
    column, matching the layout :mod:`vecview.linalg` expects.
    """
    arr = jnp.asarray(value)
    if column_major:
        arr = arr.T
    values = [v.item() for v in arr.reshape(-1)]
    if dest is None:
        dest = store.new_array(values[0] if values else None, len(values))
        set_values(dest, 1, *values)
        return dest
    store.grow_array(dest, dest_index, len(values))
    set_values(dest, dest_index, *values)
    return None
