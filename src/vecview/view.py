"""Zero-copy views over arrays and sequences.

A view maps its own logical positions ``1 .. count`` onto positions of a
backing sequence through an index transform. Reads and writes are forwarded
to the backing sequence; nothing is copied and nothing is validated against
the backing sequence until an element is touched.

Views can be passed wherever an array or sequence is accepted, including as
the source of another view::

    data = [1, 2, 3, 4, 5, 6]
    odds = stride(data, 1, 2, 3)           # [1, 3, 5]
    backwards = stride(reverse(data), 1, 2, 3)  # [6, 4, 2]

Like any Python sequence a view is natively 0-based (``odds[0] == 1``);
the library functions address it 1-based (``get(odds, 1) == 1``).
"""

from __future__ import annotations

import builtins
from collections.abc import Iterator, Sequence
from typing import Any, ClassVar

from .errors import bad_argument, index_out_of_range
from .protocol import IndexedRead, get, is_sequence, length
from .protocol import set as set_at


class View(Sequence):
    """Base class of the index-transform views."""

    __slots__ = ("_src", "_index", "_count")

    kind: ClassVar[str] = "view"

    def __init__(self, src: IndexedRead, index: int, count: int) -> None:
        if src is None:
            raise bad_argument("src", "expected array or sequence, got None")
        if count < 0:
            raise bad_argument("count", f"must be >= 0, got {count}")
        self._src = src
        self._index = index
        self._count = count

    @property
    def source(self) -> IndexedRead:
        return self._src

    def backing_index(self, i: int) -> int:
        """Backing position (1-based) of logical position ``i``."""
        raise NotImplementedError

    def _logical(self, k: int) -> int:
        n = self._count
        if k < 0:
            k += n
        if not 0 <= k < n:
            raise index_out_of_range(self.kind, k + 1, n)
        return k + 1

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, k):
        if isinstance(k, builtins.slice):
            return [self[j] for j in range(*k.indices(self._count))]
        return get(self._src, self.backing_index(self._logical(k)))

    def __setitem__(self, k, value: Any) -> None:
        if isinstance(k, builtins.slice):
            positions = range(*k.indices(self._count))
            values = list(value)
            if len(values) != len(positions):
                raise bad_argument("value", f"expected {len(positions)} values, got {len(values)}")
            for j, v in zip(positions, values):
                self[j] = v
            return
        set_at(self._src, self.backing_index(self._logical(k)), value)

    def __iter__(self) -> Iterator[Any]:
        # explicit range so backing-store range errors are not taken as end of iteration
        for k in range(self._count):
            yield self[k]

    def __eq__(self, other: object) -> bool:
        if not is_sequence(other):
            return NotImplemented
        try:
            n = len(other)  # type: ignore[arg-type]
        except TypeError:
            return NotImplemented
        if n != self._count:
            return False
        return all(a == b for a, b in zip(self, other))  # type: ignore[call-overload]

    __hash__ = None  # type: ignore[assignment]

    def resolve(self, i: int) -> tuple[IndexedRead, int]:
        """Owning buffer and 1-based position behind logical position ``i``."""
        if not 1 <= i <= self._count:
            raise index_out_of_range(self.kind, i, self._count)
        j = self.backing_index(i)
        if isinstance(self._src, View):
            return self._src.resolve(j)
        return self._src, j

    def tolist(self) -> list[Any]:
        return list(self)

    def _params(self) -> str:
        return f"index={self._index}, count={self._count}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params()})"


class SliceView(View):
    __slots__ = ()
    kind = "slice"

    def backing_index(self, i: int) -> int:
        return self._index + i - 1


class StrideView(View):
    __slots__ = ("_stride",)
    kind = "stride"

    def __init__(self, src: IndexedRead, index: int, stride: int, count: int) -> None:
        if stride == 0:
            raise bad_argument("stride", "must be non-zero")
        super().__init__(src, index, count)
        self._stride = stride

    def backing_index(self, i: int) -> int:
        return self._index + (i - 1) * self._stride

    def _params(self) -> str:
        return f"index={self._index}, stride={self._stride}, count={self._count}"


class InterleaveView(View):
    __slots__ = ("_group_size", "_stride")
    kind = "interleave"

    def __init__(self, src: IndexedRead, index: int, group_size: int, stride: int, count: int) -> None:
        if group_size < 1:
            raise bad_argument("group_size", "must be greater than 0")
        if stride == 0:
            raise bad_argument("stride", "must be non-zero")
        super().__init__(src, index, count)
        self._group_size = group_size
        self._stride = stride

    def backing_index(self, i: int) -> int:
        group, offset = divmod(i - 1, self._group_size)
        return self._index + group * self._stride + offset

    def _params(self) -> str:
        return f"index={self._index}, group_size={self._group_size}, stride={self._stride}, count={self._count}"


class ReverseView(View):
    __slots__ = ()
    kind = "reverse"

    def backing_index(self, i: int) -> int:
        return self._index + self._count - i


def slice(src: IndexedRead, index: int, count: int) -> SliceView:
    """View of ``count`` elements of ``src`` starting at ``index``.

    ``slice([1, 2, 3, 4, 5], 2, 3)`` reads ``2, 3, 4``.
    """
    return SliceView(src, index, count)


def stride(src: IndexedRead, index: int, stride: int, count: int) -> StrideView:
    """View of every ``stride``'th element of ``src`` starting at ``index``.

    Negative strides walk backward from ``index``.
    """
    return StrideView(src, index, stride, count)


def interleave(src: IndexedRead, index: int, group_size: int, stride: int, count: int) -> InterleaveView:
    """View collecting ``group_size`` consecutive elements every ``stride`` elements.

    ``stride`` is the distance between the starts of consecutive groups, so
    ``interleave([1, 2, x, x, 5, 6, x, x], 1, 2, 4, 4)`` reads ``1, 2, 5, 6``.
    ``count`` need not be a multiple of ``group_size``; the last group is then
    partial.
    """
    return InterleaveView(src, index, group_size, stride, count)


def reverse(src: IndexedRead, index: int | None = None, count: int | None = None) -> ReverseView:
    """View of ``src[index .. index+count-1]`` in reverse order.

    Without ``count`` the view runs to the end of ``src``; without ``index``
    it starts at the first element.

    ``index`` is the lowest backing position, not the first one read, so the
    equivalent negative stride starts at the top of the window:
    ``stride(src, index + count - 1, -1, count) == reverse(src, index, count)``.
    """
    if index is None:
        index = 1
    if count is None:
        count = length(src) - index + 1
    return ReverseView(src, index, count)
