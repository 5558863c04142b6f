"""Extended-op ("ex") calling convention shared by every numeric operation.

Each operation has two shapes:

* allocating: ``op_ex(a, a_index, a_count, ...)`` returns a new array holding
  the operation's output, allocated through the backing store;
* in-place: ``op_ex(a, a_index, a_count, ..., dest, dest_index=1)`` writes the
  output into ``dest`` from ``dest_index`` on, growing ``dest`` first, and
  returns ``None``.

The allocating shape is always the in-place writer applied to a freshly
allocated array (see :func:`run_ex`).

Aliasing: an element-wise operation may write into one of its sources at the
same offset. Operations that read sources out of order (matrix products,
transposes, cross products) require ``dest`` to be disjoint from every
source; overlap is undefined behaviour. With ``VECVIEW_CHECK_ALIASING=1``
such operations verify disjointness and raise
:class:`~vecview.errors.AliasingError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, NamedTuple

from . import config
from .broadcast import ConstantOperand
from .errors import AliasingError
from .protocol import DEFAULT_STORE, BackingStore, IndexedRead, check_present, check_window, get, length
from .protocol import set as set_at
from .view import View

Reader = Callable[[int], Any]
Writer = Callable[[Any, int], None]
Window = tuple[IndexedRead, int, int]


def run_ex(
    write: Writer,
    count: int,
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
    hint: object = None,
    disjoint_from: Iterable[Window] = (),
) -> Any:
    """Dispatch between the allocating and in-place shapes of an operation.

    ``write(out, out_index)`` must write ``count`` elements of output into
    ``out`` starting at ``out_index``.
    """
    if dest is None:
        out = store.new_array(hint, count)
        write(out, 1)
        return out
    store.grow_array(dest, dest_index, count)
    if config.CHECK_ALIASING:
        check_disjoint(dest, dest_index, count, disjoint_from)
    write(dest, dest_index)
    return None


def footprint(seq: IndexedRead, index: int, count: int) -> set[tuple[int, int]]:
    """Owning-buffer cells addressed by a window, seen through any views."""
    cells = set()
    for i in range(index, index + count):
        if isinstance(seq, View):
            root, j = seq.resolve(i)
        else:
            root, j = seq, i
        cells.add((id(root), j))
    return cells


def check_disjoint(dest: Any, dest_index: int, dest_count: int, sources: Iterable[Window]) -> None:
    dest_cells = footprint(dest, dest_index, dest_count)
    for position, (src, src_index, src_count) in enumerate(sources, start=1):
        if dest_cells & footprint(src, src_index, src_count):
            raise AliasingError(f"destination overlaps source {position} of an out-of-order operation")


def window_reader(seq: IndexedRead, index: int) -> Reader:
    offset = index - 1
    return lambda k: get(seq, offset + k)


def constant_reader(c: Any) -> Reader:
    return ConstantOperand.of(c).at


def positional_ex(
    f: Callable[..., Any],
    count: int,
    readers: tuple[Reader, ...],
    dest: Any = None,
    dest_index: int = 1,
    *,
    store: BackingStore = DEFAULT_STORE,
    hint: object = None,
) -> Any:
    """Element-wise operation: output ``k`` depends only on input position ``k``."""

    def write(out: Any, out_index: int) -> None:
        offset = out_index - 1
        for k in range(1, count + 1):
            set_at(out, offset + k, f(*[read(k) for read in readers]))

    return run_ex(write, count, dest, dest_index, store=store, hint=hint)


class ElementwiseFamily(NamedTuple):
    op: Callable[..., Any]
    constant: Callable[..., Any]
    ex: Callable[..., Any]
    constant_ex: Callable[..., Any]


def _named(fn: Callable[..., Any], name: str, doc: str) -> Callable[..., Any]:
    fn.__name__ = name
    fn.__qualname__ = name
    fn.__doc__ = doc
    return fn


def elementwise_family(kernel: Callable[[Any, Any], Any], name: str, formula: str, *, hint: object = None) -> ElementwiseFamily:
    """Build ``name``, ``name_constant``, ``name_ex`` and ``name_constant_ex``.

    ``formula`` is the per-element expression used in the docstrings, written
    with ``{a}`` and ``{b}`` placeholders.
    """

    def op_ex(a, a_index, a_count, b, b_index, dest=None, dest_index=1, *, store=DEFAULT_STORE):
        check_window("a", a, a_index, a_count)
        check_window("b", b, b_index, a_count)
        readers = (window_reader(a, a_index), window_reader(b, b_index))
        return positional_ex(kernel, a_count, readers, dest, dest_index, store=store, hint=hint)

    def op_constant_ex(a, a_index, a_count, c, dest=None, dest_index=1, *, store=DEFAULT_STORE):
        check_window("a", a, a_index, a_count)
        check_present("c", c)
        readers = (window_reader(a, a_index), constant_reader(c))
        return positional_ex(kernel, a_count, readers, dest, dest_index, store=store, hint=hint)

    def op(a, b, *, store=DEFAULT_STORE):
        check_present("a", a)
        return op_ex(a, 1, length(a), b, 1, store=store)

    def op_constant(a, c, *, store=DEFAULT_STORE):
        check_present("a", a)
        return op_constant_ex(a, 1, length(a), c, store=store)

    each = formula.format(a="a[i]", b="b[i]")
    with_c = formula.format(a="a[i]", b="c")
    return ElementwiseFamily(
        op=_named(op, name, f"``{each}`` for every ``i`` in ``[1, length(a)]``, as a new array."),
        constant=_named(
            op_constant,
            f"{name}_constant",
            f"``{with_c}`` for every ``i``; ``c`` is a scalar or a cycled pattern.",
        ),
        ex=_named(op_ex, f"{name}_ex", f"``{each}`` over two slices, allocating or written into ``dest``."),
        constant_ex=_named(
            op_constant_ex,
            f"{name}_constant_ex",
            f"``{with_c}`` over a slice, allocating or written into ``dest``.",
        ),
    )
