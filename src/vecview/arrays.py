"""Array kernels: creation, copying, comparison, generation and element-wise math.

Functions come in whole-array form (``add(a, b)``) and ex form over slices
(``add_ex(a, a_index, a_count, b, b_index, dest=None, dest_index=1)``); see
:mod:`vecview.ex` for the ex calling convention. Binary operations also take
a constant, either a scalar or a pattern cycled across ``a``::

    add_constant([1, 2, 3, 4], [10, 20])  # [11, 22, 13, 24]

Sources may be any sequence or view; only ``dest`` arguments must be writable.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable
from typing import Any

from . import config
from .errors import bad_argument, index_out_of_range
from .ex import constant_reader, elementwise_family, positional_ex, run_ex, window_reader
from .protocol import (
    DEFAULT_STORE,
    BackingStore,
    IndexedRead,
    check_present,
    check_window,
    get,
    get_values,
    length,
    set_values,
)
from .protocol import set as set_at

_range = range
_min = min
_max = max

__all__ = [
    "zeros", "fill", "fill_into", "range", "range_into",
    "copy", "copy_ex", "reverse", "reverse_ex",
    "set_values", "get_values", "push", "pop",
    "append", "extend", "join", "join_ex",
    "all_equals", "all_equals_ex", "all_almost_equals", "all_almost_equals_ex",
    "all_almost_equals_with_nan", "all_equals_constant", "all_equals_constant_ex",
    "all_almost_equals_constant", "all_almost_equals_constant_ex",
    "generate", "generate_into", "map", "map_ex",
    "mul_add", "mul_add_ex", "mul_add_constant", "mul_add_constant_ex", "lerp", "lerp_ex",
    "almost_equal_with_nan", "almost_equal_with_nan_ex",
]  # fmt: skip


def _first(src: IndexedRead, index: int, count: int) -> Any:
    return get(src, index) if count > 0 else None


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def fill(constant: Any, count: int, *, store: BackingStore = DEFAULT_STORE) -> Any:
    dest = store.new_array(constant, count)
    for i in _range(1, count + 1):
        set_at(dest, i, constant)
    return dest


def zeros(count: int, *, store: BackingStore = DEFAULT_STORE) -> Any:
    return fill(0.0, count, store=store)


def fill_into(constant: Any, count: int, dest: Any, dest_index: int = 1, *, store: BackingStore = DEFAULT_STORE) -> None:
    check_present("dest", dest)
    store.grow_array(dest, dest_index, count)
    for k in _range(count):
        set_at(dest, dest_index + k, constant)


def _range_count(start: float, stop: float, step_size: float | None) -> tuple[float, int]:
    if step_size is None:
        step_size = 1 if start <= stop else -1
    if step_size == 0:
        raise bad_argument("step_size", "must be non-zero")
    if step_size > 0 and start > stop:
        raise bad_argument("start", "must be <= 'stop' when step_size > 0")
    if step_size < 0 and start < stop:
        raise bad_argument("start", "must be >= 'stop' when step_size < 0")
    # tolerate rounding so that range(0, 1, 0.1) still reaches 1
    return step_size, math.floor((stop - start) / step_size + 1e-9) + 1


def range(start: float, stop: float, step_size: float | None = None, *, store: BackingStore = DEFAULT_STORE) -> Any:
    """Values ``start, start + step_size, ...`` up to and including ``stop``.

    ``stop`` is included only when a step lands on it; ``range(0, .9, 1/3)``
    is ``[0, 1/3, 2/3]``. ``step_size`` defaults to ``1`` or ``-1`` towards
    ``stop``.
    """
    step_size, n = _range_count(start, stop, step_size)
    dest = store.new_array(start + step_size * 0, n)
    for k in _range(n):
        set_at(dest, k + 1, start + k * step_size)
    return dest


def range_into(
    start: float,
    stop: float,
    step_size: float | None,
    dest: Any,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> None:
    check_present("dest", dest)
    step_size, n = _range_count(start, stop, step_size)
    store.grow_array(dest, dest_index, n)
    for k in _range(n):
        set_at(dest, dest_index + k, start + k * step_size)


# ---------------------------------------------------------------------------
# Copying and reversing
# ---------------------------------------------------------------------------


def copy(src: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    check_present("src", src)
    return store.copy_array(src, 1, length(src, store=store))


def copy_ex(
    src: IndexedRead,
    src_index: int,
    src_count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Copy a slice into a new array, or into ``dest``.

    Overlap within one buffer is safe, including when ``src`` or ``dest`` is a
    view over that buffer.
    """
    check_window("src", src, src_index, src_count)
    if dest is None:
        return store.copy_array(src, src_index, src_count)
    store.copy_array_into(src, src_index, src_count, dest, dest_index)
    return None


def reverse_ex(
    src: IndexedRead,
    src_index: int,
    src_count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """Copy a slice in reverse order. ``dest`` must not overlap the slice."""
    check_window("src", src, src_index, src_count)
    last = src_index + src_count - 1

    def write(out: Any, out_index: int) -> None:
        for k in _range(src_count):
            set_at(out, out_index + k, get(src, last - k))

    return run_ex(
        write,
        src_count,
        dest,
        dest_index,
        store=store,
        hint=_first(src, src_index, src_count),
        disjoint_from=((src, src_index, src_count),),
    )


def reverse(src: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    """A reversed copy of ``src``. See :func:`vecview.view.reverse` for the zero-copy form."""
    check_present("src", src)
    return reverse_ex(src, 1, length(src, store=store), store=store)


# ---------------------------------------------------------------------------
# Push, pop, append, join
# ---------------------------------------------------------------------------


def push(dest: Any, *values: Any, store: BackingStore = DEFAULT_STORE) -> None:
    """Append ``values`` to the end of the array ``dest``."""
    check_present("dest", dest)
    n = length(dest, store=store)
    store.grow_array(dest, n + 1, len(values))
    set_values(dest, n + 1, *values)


def pop(src: Any, n: int = 1, *, store: BackingStore = DEFAULT_STORE) -> Any:
    """Remove the last ``n`` values of ``src``.

    Returns the single value for ``n == 1``, otherwise a tuple in array order.
    """
    check_present("src", src)
    size = length(src, store=store)
    if n < 1:
        raise bad_argument("n", f"must be >= 1, got {n}")
    if n > size:
        raise index_out_of_range("n", n, size)
    values = get_values(src, size - n + 1, n)
    del src[size - n :]
    return values[0] if n == 1 else values


def append(src: IndexedRead, dest: Any, *, store: BackingStore = DEFAULT_STORE) -> None:
    """Append the elements of ``src`` onto ``dest``. ``append(a, a)`` doubles ``a``."""
    check_present("src", src)
    check_present("dest", dest)
    src_len = length(src, store=store)
    dest_len = src_len if src is dest else length(dest, store=store)
    if src_len > 0:
        store.copy_array_into(src, 1, src_len, dest, dest_len + 1)


def extend(dest: Any, src: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> None:
    append(src, dest, store=store)


def join_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    b: IndexedRead,
    b_index: int,
    b_count: int,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """A new array holding the ``a`` slice followed by the ``b`` slice."""
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, b_count)
    dest = store.new_array(_first(a, a_index, a_count), a_count + b_count)
    store.copy_array_into(a, a_index, a_count, dest, 1)
    store.copy_array_into(b, b_index, b_count, dest, a_count + 1)
    return dest


def join(a: IndexedRead, b: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    check_present("a", a)
    check_present("b", b)
    return join_ex(a, 1, length(a, store=store), b, 1, length(b, store=store), store=store)


# ---------------------------------------------------------------------------
# Whole-array comparison
# ---------------------------------------------------------------------------


def _epsilon(epsilon: float | None) -> float:
    return config.EPSILON if epsilon is None else epsilon


def all_equals_ex(a: IndexedRead, a_index: int, a_count: int, b: IndexedRead, b_index: int) -> bool:
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    return all(get(a, a_index + k) == get(b, b_index + k) for k in _range(a_count))


def all_equals(a: IndexedRead, b: IndexedRead) -> bool:
    """True when ``a`` and ``b`` have the same length and equal elements."""
    check_present("a", a)
    check_present("b", b)
    n = length(a)
    return n == length(b) and all_equals_ex(a, 1, n, b, 1)


def all_almost_equals_ex(
    a: IndexedRead, a_index: int, a_count: int, b: IndexedRead, b_index: int, epsilon: float | None = None
) -> bool:
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    eps = _epsilon(epsilon)
    return all(abs(get(a, a_index + k) - get(b, b_index + k)) <= eps for k in _range(a_count))


def all_almost_equals(a: IndexedRead, b: IndexedRead, epsilon: float | None = None) -> bool:
    """True when the arrays have the same length and differ by ``epsilon`` or less everywhere."""
    check_present("a", a)
    check_present("b", b)
    n = length(a)
    return n == length(b) and all_almost_equals_ex(a, 1, n, b, 1, epsilon)


def _nan_aware_close(x: Any, y: Any, eps: float) -> bool:
    if x != x and y != y:
        return True
    return abs(x - y) <= eps


def all_almost_equals_with_nan(a: IndexedRead, b: IndexedRead, epsilon: float | None = None) -> bool:
    """Like :func:`all_almost_equals`, with NaN equal to NaN."""
    check_present("a", a)
    check_present("b", b)
    n = length(a)
    if n != length(b):
        return False
    eps = _epsilon(epsilon)
    return all(_nan_aware_close(get(a, i), get(b, i), eps) for i in _range(1, n + 1))


def all_equals_constant_ex(a: IndexedRead, a_index: int, a_count: int, constant: Any) -> bool:
    check_window("a", a, a_index, a_count)
    read = constant_reader(constant)
    return all(get(a, a_index + k) == read(k + 1) for k in _range(a_count))


def all_equals_constant(a: IndexedRead, constant: Any) -> bool:
    check_present("a", a)
    return all_equals_constant_ex(a, 1, length(a), constant)


def all_almost_equals_constant_ex(
    a: IndexedRead, a_index: int, a_count: int, constant: Any, epsilon: float | None = None
) -> bool:
    check_window("a", a, a_index, a_count)
    eps = _epsilon(epsilon)
    read = constant_reader(constant)
    return all(abs(get(a, a_index + k) - read(k + 1)) <= eps for k in _range(a_count))


def all_almost_equals_constant(a: IndexedRead, constant: Any, epsilon: float | None = None) -> bool:
    check_present("a", a)
    return all_almost_equals_constant_ex(a, 1, length(a), constant, epsilon)


# ---------------------------------------------------------------------------
# Generation and map
# ---------------------------------------------------------------------------


def generate_into(
    count: int, f: Callable[[int], Any], dest: Any, dest_index: int = 1, *, store: BackingStore = DEFAULT_STORE
) -> None:
    """Write ``f(i)`` for ``i`` in ``[1, count]`` into ``dest`` from ``dest_index``."""
    check_present("dest", dest)
    store.grow_array(dest, dest_index, count)
    for i in _range(1, count + 1):
        set_at(dest, dest_index + i - 1, f(i))


def generate(count: int, f: Callable[[int], Any], *, store: BackingStore = DEFAULT_STORE) -> Any:
    if count <= 0:
        return store.new_array(None, count)
    first = f(1)
    dest = store.new_array(first, count)
    set_at(dest, 1, first)
    generate_into(count - 1, lambda i: f(i + 1), dest, 2, store=store)
    return dest


def map_ex(
    f: Callable[..., Any],
    a: IndexedRead,
    a_index: int,
    a_count: int,
    *others: Any,
    dest: Any = None,
    dest_index: int = 1,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """``f(a[i], b[i], ...)`` over slices; ``others`` alternate ``seq, index``.

    ``map_ex(f, a, 1, 3, b, 2)`` pairs ``a[1..3]`` with ``b[2..4]``.
    """
    check_window("a", a, a_index, a_count)
    if len(others) % 2:
        raise bad_argument("others", "expected alternating sequence and index arguments")
    readers = [window_reader(a, a_index)]
    for position in _range(0, len(others), 2):
        seq, index = others[position], others[position + 1]
        check_window(f"a{position // 2 + 2}", seq, index, a_count)
        readers.append(window_reader(seq, index))
    if dest is not None or a_count == 0:
        return positional_ex(f, a_count, tuple(readers), dest, dest_index, store=store)
    # the first result doubles as the allocation hint, so f still runs once per element
    first = f(*[read(1) for read in readers])
    out = store.new_array(first, a_count)
    set_at(out, 1, first)
    rest = tuple((lambda k, read=read: read(k + 1)) for read in readers)
    positional_ex(f, a_count - 1, rest, out, 2, store=store)
    return out


def map(f: Callable[..., Any], a: IndexedRead, *others: IndexedRead, store: BackingStore = DEFAULT_STORE) -> Any:
    """``f(a[i], b[i], ...)`` for every ``i`` in ``[1, length(a)]``."""
    check_present("a", a)
    pairs = []
    for seq in others:
        check_present("b", seq)
        pairs += [seq, 1]
    return map_ex(f, a, 1, length(a), *pairs, store=store)


# ---------------------------------------------------------------------------
# Element-wise operations
# ---------------------------------------------------------------------------


def _almost_equal(x: Any, y: Any) -> bool:
    return abs(x - y) <= config.EPSILON


add, add_constant, add_ex, add_constant_ex = elementwise_family(operator.add, "add", "{a} + {b}")
sub, sub_constant, sub_ex, sub_constant_ex = elementwise_family(operator.sub, "sub", "{a} - {b}")
mul, mul_constant, mul_ex, mul_constant_ex = elementwise_family(operator.mul, "mul", "{a} * {b}")
div, div_constant, div_ex, div_constant_ex = elementwise_family(operator.truediv, "div", "{a} / {b}")
mod, mod_constant, mod_ex, mod_constant_ex = elementwise_family(operator.mod, "mod", "{a} % {b}")
pow, pow_constant, pow_ex, pow_constant_ex = elementwise_family(operator.pow, "pow", "{a} ** {b}")
equal, equal_constant, equal_ex, equal_constant_ex = elementwise_family(
    operator.eq, "equal", "{a} == {b}", hint=bool
)
not_equal, not_equal_constant, not_equal_ex, not_equal_constant_ex = elementwise_family(
    operator.ne, "not_equal", "{a} != {b}", hint=bool
)
less_than, less_than_constant, less_than_ex, less_than_constant_ex = elementwise_family(
    operator.lt, "less_than", "{a} < {b}", hint=bool
)
less_than_or_equal, less_than_or_equal_constant, less_than_or_equal_ex, less_than_or_equal_constant_ex = (
    elementwise_family(operator.le, "less_than_or_equal", "{a} <= {b}", hint=bool)
)
greater_than, greater_than_constant, greater_than_ex, greater_than_constant_ex = elementwise_family(
    operator.gt, "greater_than", "{a} > {b}", hint=bool
)
greater_than_or_equal, greater_than_or_equal_constant, greater_than_or_equal_ex, greater_than_or_equal_constant_ex = (
    elementwise_family(operator.ge, "greater_than_or_equal", "{a} >= {b}", hint=bool)
)
min, min_constant, min_ex, min_constant_ex = elementwise_family(_min, "min", "min({a}, {b})")
max, max_constant, max_ex, max_constant_ex = elementwise_family(_max, "max", "max({a}, {b})")
almost_equal, almost_equal_constant, almost_equal_ex, almost_equal_constant_ex = elementwise_family(
    _almost_equal, "almost_equal", "abs({a} - {b}) <= EPSILON", hint=bool
)

for _family in (
    "add", "sub", "mul", "div", "mod", "pow", "equal", "not_equal", "less_than", "less_than_or_equal",
    "greater_than", "greater_than_or_equal", "min", "max", "almost_equal",
):  # fmt: skip
    __all__ += [_family, f"{_family}_constant", f"{_family}_ex", f"{_family}_constant_ex"]
del _family


def almost_equal_with_nan_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    b: IndexedRead,
    b_index: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    eps = config.EPSILON
    readers = (window_reader(a, a_index), window_reader(b, b_index))
    return positional_ex(
        lambda x, y: _nan_aware_close(x, y, eps), a_count, readers, dest, dest_index, store=store, hint=bool
    )


def almost_equal_with_nan(a: IndexedRead, b: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    """``abs(a[i] - b[i]) <= EPSILON`` element-wise, with NaN equal to NaN."""
    check_present("a", a)
    return almost_equal_with_nan_ex(a, 1, length(a), b, 1, store=store)


def mul_add_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    b: IndexedRead,
    b_index: int,
    c: IndexedRead,
    c_index: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """``a[i] + b[i] * c[i]`` over three slices."""
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    check_window("c", c, c_index, a_count)
    readers = (window_reader(a, a_index), window_reader(b, b_index), window_reader(c, c_index))
    return positional_ex(
        lambda x, y, z: x + y * z, a_count, readers, dest, dest_index, store=store, hint=_first(a, a_index, a_count)
    )


def mul_add(a: IndexedRead, b: IndexedRead, c: IndexedRead, *, store: BackingStore = DEFAULT_STORE) -> Any:
    check_present("a", a)
    return mul_add_ex(a, 1, length(a), b, 1, c, 1, store=store)


def mul_add_constant_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    b: IndexedRead,
    b_index: int,
    c: Any,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """``a[i] + b[i] * c`` over two slices; ``c`` is a scalar or a cycled pattern.

    Integrating positions with a fixed timestep::

        mul_add_constant_ex(p, 1, len(p), v, 1, dt, p)
    """
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    check_present("c", c)
    readers = (window_reader(a, a_index), window_reader(b, b_index), constant_reader(c))
    return positional_ex(
        lambda x, y, z: x + y * z, a_count, readers, dest, dest_index, store=store, hint=_first(a, a_index, a_count)
    )


def mul_add_constant(a: IndexedRead, b: IndexedRead, c: Any, *, store: BackingStore = DEFAULT_STORE) -> Any:
    check_present("a", a)
    return mul_add_constant_ex(a, 1, length(a), b, 1, c, store=store)


def lerp_ex(
    a: IndexedRead,
    a_index: int,
    a_count: int,
    b: IndexedRead,
    b_index: int,
    t: float,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
) -> Any:
    """``a[i] * (1 - t) + b[i] * t`` over two slices."""
    check_window("a", a, a_index, a_count)
    check_window("b", b, b_index, a_count)
    check_present("t", t)
    readers = (window_reader(a, a_index), window_reader(b, b_index))
    return positional_ex(
        lambda x, y: x * (1 - t) + y * t, a_count, readers, dest, dest_index, store=store, hint=float
    )


def lerp(a: IndexedRead, b: IndexedRead, t: float, *, store: BackingStore = DEFAULT_STORE) -> Any:
    check_present("a", a)
    return lerp_ex(a, 1, length(a), b, 1, t, store=store)
