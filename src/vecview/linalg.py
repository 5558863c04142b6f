"""Vector and matrix operations over flat slices, generic over dimension.

Matrices are column-major: an ``N x M`` matrix has N columns and M rows and
is stored as ``N * M`` consecutive elements, column after column. Element
``(col, row)`` of a matrix starting at ``index`` lives at
``index + (col - 1) * rows + row - 1``.

Products, transposes and cross products read their sources out of order, so
their ``dest`` must not overlap any source (checked only with
``VECVIEW_CHECK_ALIASING=1``).
"""

from __future__ import annotations

import math
from typing import Any

from . import arrays
from .errors import ShapeError, bad_argument
from .ex import positional_ex, run_ex, window_reader
from .protocol import DEFAULT_STORE, BackingStore, IndexedRead, check_window, get
from .protocol import length as _length
from .protocol import set as set_at


def _square_size(name: str, src: IndexedRead) -> int:
    count = _length(src)
    n = math.isqrt(count)
    if n * n != count:
        raise ShapeError(f"'{name}' has {count} elements, which is not a square matrix")
    return n


def _hint(src: IndexedRead, index: int) -> Any:
    return get(src, index)


# ---------------------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------------------


def inner_product_ex(a: IndexedRead, a_index: int, a_count: int, b: IndexedRead, b_index: int) -> Any:
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    total = 0
    for k in range(a_count):
        total += get(a, a_index + k) * get(b, b_index + k)
    return total


def length_squared_ex(a: IndexedRead, a_index: int, a_count: int) -> Any:
    return inner_product_ex(a, a_index, a_count, a, a_index)


def length_ex(a: IndexedRead, a_index: int, a_count: int) -> float:
    return math.sqrt(length_squared_ex(a, a_index, a_count))


def normalise_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Scale a slice to unit length. A zero vector stays zero."""
    norm = length_ex(a, a_index, a_count)
    scale = 1 / norm if norm > 0 else 0
    return positional_ex(
        lambda x: x * scale, a_count, (window_reader(a, a_index),), dest, dest_index, store=store, hint=float
    )


def negate_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    check_window("a", a, a_index, a_count)
    hint = _hint(a, a_index) if a_count > 0 else None
    return positional_ex(lambda x: -x, a_count, (window_reader(a, a_index),), dest, dest_index, store=store, hint=hint)


def equals_ex(
    a: IndexedRead, a_index: int, a_count: int, b: IndexedRead, b_index: int, tolerance: float | None = None
) -> bool:
    """True when the slices differ by ``tolerance`` (default ``EPSILON``) or less everywhere."""
    return arrays.all_almost_equals_ex(a, a_index, a_count, b, b_index, tolerance)


def cross_product_ex(
    a: IndexedRead,
    a_index: int,
    b: IndexedRead,
    b_index: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Cross product of two 3-vectors."""
    check_window("a", a, a_index, 3)
    check_window("b", b, b_index, 3)
    ax, ay, az = (get(a, a_index + k) for k in range(3))
    bx, by, bz = (get(b, b_index + k) for k in range(3))

    def write(out: Any, out_index: int) -> None:
        set_at(out, out_index, ay * bz - az * by)
        set_at(out, out_index + 1, az * bx - ax * bz)
        set_at(out, out_index + 2, ax * by - ay * bx)

    return run_ex(
        write, 3, dest, dest_index, store=store, hint=ax, disjoint_from=((a, a_index, 3), (b, b_index, 3))
    )


# ---------------------------------------------------------------------------
# Matrices
# ---------------------------------------------------------------------------


def matmul_ex(
    a: IndexedRead,
    a_index: int,
    a_cols: int,
    a_rows: int,
    b: IndexedRead,
    b_index: int,
    b_cols: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    b_rows: int | None = None,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Product of an ``a_cols x a_rows`` and a ``b_cols x a_cols`` matrix.

    The result is ``b_cols x a_rows``. Passing ``b_rows`` checks it against
    ``a_cols``.
    """
    if b_rows is not None and b_rows != a_cols:
        raise ShapeError(f"cannot multiply {a_cols}x{a_rows} by {b_cols}x{b_rows}: b_rows must equal a_cols")
    if a_cols < 1 or a_rows < 1 or b_cols < 1:
        raise bad_argument("shape", f"matrix extents must be >= 1, got {a_cols}x{a_rows} and {b_cols}x{a_cols}")
    a_count = a_cols * a_rows
    b_count = b_cols * a_cols
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, b_count)

    def write(out: Any, out_index: int) -> None:
        for col in range(b_cols):
            for row in range(a_rows):
                total = 0
                for k in range(a_cols):
                    total += get(a, a_index + k * a_rows + row) * get(b, b_index + col * a_cols + k)
                set_at(out, out_index + col * a_rows + row, total)

    return run_ex(
        write,
        b_cols * a_rows,
        dest,
        dest_index,
        store=store,
        hint=_hint(a, a_index),
        disjoint_from=((a, a_index, a_count), (b, b_index, b_count)),
    )


def matmul_mat_vec_ex(
    a: IndexedRead,
    a_index: int,
    n: int,
    v: IndexedRead,
    v_index: int,
    v_count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Square ``n x n`` matrix times vector.

    A vector of length ``n - 1`` is treated as homogeneous with ``w = 1`` and
    the result is truncated back to ``n - 1`` elements.
    """
    if v_count not in (n, n - 1):
        raise ShapeError(f"cannot multiply {n}x{n} matrix by vector of length {v_count}")
    check_window("a", a, a_index, n * n)
    check_window("v", v, v_index, v_count)
    components = [get(v, v_index + k) for k in range(v_count)]
    if v_count < n:
        components.append(1)

    def write(out: Any, out_index: int) -> None:
        for row in range(v_count):
            total = 0
            for k in range(n):
                total += get(a, a_index + k * n + row) * components[k]
            set_at(out, out_index + row, total)

    return run_ex(
        write,
        v_count,
        dest,
        dest_index,
        store=store,
        hint=_hint(a, a_index),
        disjoint_from=((a, a_index, n * n), (v, v_index, v_count)),
    )


def transpose_ex(
    src: IndexedRead,
    src_index: int,
    cols: int,
    rows: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Transpose a ``cols x rows`` matrix into a ``rows x cols`` one."""
    count = cols * rows
    check_window("src", src, src_index, count)

    def write(out: Any, out_index: int) -> None:
        for col in range(cols):
            for row in range(rows):
                set_at(out, out_index + row * cols + col, get(src, src_index + col * rows + row))

    return run_ex(
        write,
        count,
        dest,
        dest_index,
        store=store,
        hint=_hint(src, src_index) if count else None,
        disjoint_from=((src, src_index, count),),
    )


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def zero(n: int) -> list[float]:
    return [0.0] * (n * n)


def identity(n: int) -> list[float]:
    out = zero(n)
    for k in range(n):
        out[k * n + k] = 1.0
    return out


def translate(*offsets: float) -> list[float]:
    """Homogeneous translation: 2 offsets give a 3x3 matrix, 3 give a 4x4."""
    n = len(offsets) + 1
    if n < 2:
        raise bad_argument("offsets", "expected at least one offset")
    out = identity(n)
    for row, offset in enumerate(offsets):
        out[(n - 1) * n + row] = offset
    return out


def scale(*factors: float, n: int | None = None) -> list[float]:
    """Diagonal scale matrix; the diagonal is padded with ones up to ``n``.

    ``scale(2, 3, 1)`` is a 3x3 matrix, ``scale(2, 3, 4, n=4)`` a homogeneous
    4x4 one.
    """
    size = len(factors) if n is None else n
    if size < len(factors) or size < 1:
        raise bad_argument("n", f"must be >= {max(len(factors), 1)}, got {size}")
    out = identity(size)
    for k, factor in enumerate(factors):
        out[k * size + k] = factor
    return out


def rotate_around_axis(radians: float, x: float, y: float, z: float, n: int = 4) -> list[float]:
    """Rotation by ``radians`` around the axis ``(x, y, z)`` as a 3x3 or 4x4 matrix."""
    if n not in (3, 4):
        raise bad_argument("n", f"must be 3 or 4, got {n}")
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0:
        raise bad_argument("axis", "must be non-zero")
    x, y, z = x / norm, y / norm, z / norm
    c = math.cos(radians)
    s = math.sin(radians)
    t = 1 - c
    columns = (
        (t * x * x + c, t * x * y + s * z, t * x * z - s * y),
        (t * x * y - s * z, t * y * y + c, t * y * z + s * x),
        (t * x * z + s * y, t * y * z - s * x, t * z * z + c),
    )
    out = identity(n)
    for col, column in enumerate(columns):
        for row, value in enumerate(column):
            out[col * n + row] = value
    return out


# ---------------------------------------------------------------------------
# Whole-array forms
# ---------------------------------------------------------------------------


def inner_product(a: IndexedRead, b: IndexedRead) -> Any:
    return inner_product_ex(a, 1, _length(a), b, 1)


def length(a: IndexedRead) -> float:
    """Euclidean length of the vector ``a``."""
    return length_ex(a, 1, _length(a))


def normalise(a: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    return normalise_ex(a, 1, _length(a), store=store)


def cross_product(a: IndexedRead, b: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    for name, v in (("a", a), ("b", b)):
        if _length(v) != 3:
            raise ShapeError(f"'{name}' must have 3 elements, got {_length(v)}")
    return cross_product_ex(a, 1, b, 1, store=store)


def matmul(a: IndexedRead, b: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    """Product of a square matrix with a square matrix or a vector.

    ``b`` is taken as a matrix when it has ``n * n`` elements and as a
    (possibly homogeneous) vector otherwise.
    """
    n = _square_size("a", a)
    count = _length(b)
    if count == n * n and n > 1:
        return matmul_ex(a, 1, n, n, b, 1, n, store=store)
    return matmul_mat_vec_ex(a, 1, n, b, 1, count, store=store)


def transpose(src: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    n = _square_size("src", src)
    return transpose_ex(src, 1, n, n, store=store)
