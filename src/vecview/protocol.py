"""Backing-store protocol: element access, capability tests and storage hooks.

Every sequence is addressed with 1-based logical indices through :func:`get`,
:func:`set` and :func:`length`. Raw Python sequences are translated to their
native 0-based indexing; views (see :mod:`vecview.view`) implement the same
native protocol, so both read identically here.

Allocation, bulk copy and growth go through a :class:`BackingStore` strategy.
Entry points that allocate take it as a keyword-only ``store`` argument and
default to :data:`DEFAULT_STORE`.
"""

from __future__ import annotations

import array as _pyarray
import logging
import numbers
from collections.abc import Mapping
from typing import Any, Final, Protocol, TypeVar, runtime_checkable

from . import config
from .errors import AllocationError, RangeError, WindowRangeError, bad_argument, index_out_of_range

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class IndexedRead(Protocol):
    def __getitem__(self, index: int) -> Any: ...


@runtime_checkable
class IndexedWrite(IndexedRead, Protocol):
    def __setitem__(self, index: int, value: Any) -> None: ...


@runtime_checkable
class Growable(Protocol):
    """Marker for sequences whose storage can be extended in place."""

    def __len__(self) -> int: ...

    def extend(self, values: Any) -> None: ...


def is_sequence(value: object) -> bool:
    """True for anything addressable by index that is not a scalar or text."""
    if value is None or isinstance(value, (numbers.Number, str, bytes, Mapping)):
        return False
    return isinstance(value, IndexedRead)


def get(seq: IndexedRead, i: int) -> Any:
    """Read element ``i`` (1-based)."""
    if i < 1:
        raise index_out_of_range("index", i)
    try:
        return seq[i - 1]
    except RangeError:
        raise
    except IndexError as exc:
        raise index_out_of_range("index", i) from exc


def set(seq: IndexedWrite, i: int, value: Any) -> None:
    """Write element ``i`` (1-based). Never grows ``seq``."""
    if i < 1:
        raise index_out_of_range("index", i)
    try:
        seq[i - 1] = value
    except RangeError:
        raise
    except IndexError as exc:
        raise index_out_of_range("index", i) from exc


def get_values(src: IndexedRead, src_index: int, count: int) -> tuple[Any, ...]:
    return tuple(get(src, src_index + k) for k in range(count))


def get_into(src: IndexedRead, src_index: int, out: list[Any]) -> None:
    """Fill ``out`` with ``len(out)`` consecutive elements of ``src``."""
    for k in range(len(out)):
        out[k] = get(src, src_index + k)


def set_values(dest: IndexedWrite, dest_index: int, *values: Any) -> None:
    for k, value in enumerate(values):
        set(dest, dest_index + k, value)


def _root(seq: object) -> object:
    """Owning buffer behind a chain of views (anything exposing ``source``)."""
    inner = getattr(seq, "source", None)
    while inner is not None:
        seq = inner
        inner = getattr(seq, "source", None)
    return seq


def _zero_for(element_hint: object) -> Any:
    kind = element_hint if isinstance(element_hint, type) else type(element_hint)
    if kind is bool:
        return False
    if kind is float:
        return 0.0
    return 0


def _is_numeric_hint(element_hint: object) -> bool:
    if element_hint is None:
        return True
    kind = element_hint if isinstance(element_hint, type) else type(element_hint)
    return issubclass(kind, numbers.Real) and kind is not bool


class BackingStore:
    """Default storage strategy over Python lists.

    Subclass and override any of ``length``, ``is_array``, ``new_array``,
    ``copy_array``, ``copy_array_into`` or ``grow_array`` to adapt other
    buffer types. The defaults only assume native indexing, ``len`` and, for
    growth, ``extend``.
    """

    def length(self, seq: object) -> int:
        try:
            return len(seq)  # type: ignore[arg-type]
        except TypeError as exc:
            raise bad_argument("src", f"{type(seq).__name__} has no length") from exc

    def is_array(self, value: object) -> bool:
        return isinstance(value, Growable) and isinstance(value, IndexedWrite)

    def new_array(self, element_hint: object, length: int) -> Any:
        if length < 0:
            raise AllocationError(f"bad argument 'length' (must be >= 0, got {length})")
        try:
            return [_zero_for(element_hint)] * length
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate array of {length} elements") from exc

    def check_source_window(self, src: object, src_index: int, src_count: int) -> None:
        if src_count < 0:
            raise bad_argument("src_count", f"must be >= 0, got {src_count}")
        if src_index < 1:
            raise WindowRangeError("src", src_index, src_count)
        if self.is_array(src):
            limit = self.length(src)
            if src_index + src_count - 1 > limit:
                raise WindowRangeError("src", src_index, src_count, limit)

    def copy_array(self, src: IndexedRead, src_index: int, src_count: int) -> Any:
        self.check_source_window(src, src_index, src_count)
        hint = get(src, src_index) if src_count > 0 else None
        dest = self.new_array(hint, src_count)
        self.copy_array_into(src, src_index, src_count, dest, 1)
        return dest

    def copy_array_into(self, src: IndexedRead, src_index: int, src_count: int, dest: IndexedWrite, dest_index: int) -> None:
        self.check_source_window(src, src_index, src_count)
        self.grow_array(dest, dest_index, src_count)
        if src is not dest and _root(src) is _root(dest):
            # views over one buffer: read the whole window before writing
            set_values(dest, dest_index, *get_values(src, src_index, src_count))
            return
        # walk backwards when shifting right inside one buffer
        if src is dest and dest_index > src_index:
            offsets = range(src_count - 1, -1, -1)
        else:
            offsets = range(src_count)
        for k in offsets:
            set(dest, dest_index + k, get(src, src_index + k))

    def padding(self, dest: object, count: int) -> Any:
        return [0] * count

    def grow_array(self, dest: object, dest_index: int, dest_count: int) -> None:
        if dest_index < 1:
            raise WindowRangeError("dest", dest_index, dest_count)
        if dest_count <= 0:
            return
        needed = dest_index + dest_count - 1
        if not self.is_array(dest):
            try:
                limit = len(dest)  # type: ignore[arg-type]
            except TypeError:
                return
            if needed > limit:
                raise WindowRangeError("dest", dest_index, dest_count, limit)
            return
        current = self.length(dest)
        if needed > current:
            try:
                dest.extend(self.padding(dest, needed - current))  # type: ignore[attr-defined]
            except MemoryError as exc:
                raise AllocationError(f"cannot grow destination to {needed} elements") from exc


class BufferStore(BackingStore):
    """Strategy for contiguous ``array.array`` buffers of one typecode.

    Numeric allocations produce ``array.array(typecode)``; copies between
    buffers of the same typecode use slice assignment instead of an index loop.
    Non-numeric element hints fall back to list storage.
    """

    def __init__(self, typecode: str = "d") -> None:
        self.typecode = typecode
        self._zero = _pyarray.array(typecode, [0])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.typecode!r})"

    def _is_buffer(self, value: object) -> bool:
        return isinstance(value, _pyarray.array) and value.typecode == self.typecode

    def new_array(self, element_hint: object, length: int) -> Any:
        if not _is_numeric_hint(element_hint):
            _LOG.debug("%r: %r is not numeric, allocating a list", self, element_hint)
            return super().new_array(element_hint, length)
        if length < 0:
            raise AllocationError(f"bad argument 'length' (must be >= 0, got {length})")
        try:
            return self._zero * length
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate buffer of {length} elements") from exc

    def padding(self, dest: object, count: int) -> Any:
        if isinstance(dest, _pyarray.array):
            return _pyarray.array(dest.typecode, [0]) * count
        return super().padding(dest, count)

    def copy_array(self, src: IndexedRead, src_index: int, src_count: int) -> Any:
        if not self._is_buffer(src):
            return super().copy_array(src, src_index, src_count)
        self.check_source_window(src, src_index, src_count)
        return src[src_index - 1 : src_index - 1 + src_count]

    def copy_array_into(self, src: IndexedRead, src_index: int, src_count: int, dest: IndexedWrite, dest_index: int) -> None:
        if not (self._is_buffer(src) and self._is_buffer(dest)):
            super().copy_array_into(src, src_index, src_count, dest, dest_index)
            return
        self.check_source_window(src, src_index, src_count)
        self.grow_array(dest, dest_index, src_count)
        start = dest_index - 1
        dest[start : start + src_count] = src[src_index - 1 : src_index - 1 + src_count]  # type: ignore[index]


DEFAULT_STORE: Final[BackingStore] = BackingStore()


def length(seq: object, *, store: BackingStore = DEFAULT_STORE) -> int:
    return store.length(seq)


def is_array(value: object, *, store: BackingStore = DEFAULT_STORE) -> bool:
    return store.is_array(value)


def check_window(name: str, src: object, index: int, count: int) -> None:
    """Argument validation for ex entry points, active under ``CHECK_PARAMS``."""
    if not config.CHECK_PARAMS:
        return
    if src is None:
        raise bad_argument(name, "expected array or sequence, got None")
    if not isinstance(index, numbers.Integral):
        raise bad_argument(f"{name}_index", f"expected integer, got {type(index).__name__}")
    if not isinstance(count, numbers.Integral):
        raise bad_argument(f"{name}_count", f"expected integer, got {type(count).__name__}")
    if count < 0:
        raise bad_argument(f"{name}_count", f"must be >= 0, got {count}")
    if index < 1:
        raise WindowRangeError(name, index, count)


def check_present(name: str, value: object) -> None:
    if config.CHECK_PARAMS and value is None:
        raise bad_argument(name, "expected value, got None")
