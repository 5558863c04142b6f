"""Fixed-size vector and matrix value types built on the array kernels."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any, ClassVar

from . import arrays, linalg
from .errors import bad_argument
from .protocol import DEFAULT_STORE, BackingStore, IndexedRead, get_values, is_sequence, length, set_values
from .view import SliceView

# (ex form, constant ex form) per arithmetic operator
_OPERATORS: dict[str, tuple[Callable[..., Any], Callable[..., Any]]] = {
    "add": (arrays.add_ex, arrays.add_constant_ex),
    "sub": (arrays.sub_ex, arrays.sub_constant_ex),
    "mul": (arrays.mul_ex, arrays.mul_constant_ex),
    "div": (arrays.div_ex, arrays.div_constant_ex),
}


class FixedArray(Sequence):
    """A fixed number of numeric components in its own list or in a slice of another array.

    ``Vector3(1, 2, 3)`` owns its storage; ``Vector3.view(positions, 4)``
    reads and writes ``positions[4..6]`` in place.
    """

    __slots__ = ("_data",)

    size: ClassVar[int] = 0
    components: ClassVar[str] = ""

    def __init__(self, *values: Any) -> None:
        if not values:
            values = (0,) * self.size
        self._check_count(len(values))
        self._data: IndexedRead = list(values)

    @classmethod
    def _check_count(cls, count: int) -> None:
        if count != cls.size:
            raise bad_argument("values", f"{cls.__name__} expects {cls.size} components, got {count}")

    @classmethod
    def _wrap(cls, data: IndexedRead) -> FixedArray:
        out = cls.__new__(cls)
        out._data = data
        return out

    @classmethod
    def view(cls, src: IndexedRead, index: int = 1) -> FixedArray:
        """Value backed by ``src[index .. index+size-1]``; writes go through to ``src``."""
        return cls._wrap(SliceView(src, index, cls.size))

    @property
    def data(self) -> IndexedRead:
        return self._data

    def get(self) -> tuple[Any, ...]:
        return get_values(self._data, 1, self.size)

    def set(self, *values: Any) -> None:
        self._check_count(len(values))
        set_values(self._data, 1, *values)

    def copy(self) -> FixedArray:
        return type(self)(*self.get())

    def copy_into(self, dest: Any, dest_index: int = 1, *, store: BackingStore = DEFAULT_STORE) -> None:
        arrays.copy_ex(self._data, 1, self.size, dest, dest_index, store=store)

    def tolist(self) -> list[Any]:
        return list(self.get())

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, k):
        return self._data[k]

    def __setitem__(self, k, value: Any) -> None:
        self._data[k] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self.get())

    def __eq__(self, other: object) -> bool:
        if not is_sequence(other):
            return NotImplemented
        return length(other) == self.size and arrays.all_equals_ex(self._data, 1, self.size, other, 1)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self.get())})"

    # -- swizzles -----------------------------------------------------------

    def _swizzle_offsets(self, pattern: str) -> list[int] | None:
        if not self.components or not 1 <= len(pattern) <= 4:
            return None
        offsets = [self.components.find(letter) for letter in pattern]
        if -1 in offsets:
            return None
        return offsets

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.startswith("set_"):
            offsets = self._swizzle_offsets(name[4:])
            if offsets is not None:
                return lambda *values: self._set_swizzle(offsets, values)
        else:
            offsets = self._swizzle_offsets(name)
            if offsets is not None:
                values = tuple(self._data[k] for k in offsets)
                return values[0] if len(values) == 1 else values
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _set_swizzle(self, offsets: list[int], values: tuple[Any, ...]) -> None:
        if len(values) != len(offsets):
            raise bad_argument("values", f"expected {len(offsets)} components, got {len(values)}")
        for k, value in zip(offsets, values):
            self._data[k] = value

    # -- arithmetic ---------------------------------------------------------

    def _apply(self, op: str, other: Any, dest: Any, dest_index: int) -> Any:
        ex, constant_ex = _OPERATORS[op]
        if is_sequence(other):
            if length(other) != self.size:
                raise bad_argument("other", f"expected {self.size} components, got {length(other)}")
            return ex(self._data, 1, self.size, other, 1, dest, dest_index)
        return constant_ex(self._data, 1, self.size, other, dest, dest_index)

    def _result(self, op: str, other: Any) -> FixedArray:
        return type(self)._wrap(self._apply(op, other, None, 1))

    def add_into(self, other: Any, dest: Any, dest_index: int = 1) -> None:
        self._apply("add", other, dest, dest_index)

    def sub_into(self, other: Any, dest: Any, dest_index: int = 1) -> None:
        self._apply("sub", other, dest, dest_index)

    def mul_into(self, other: Any, dest: Any, dest_index: int = 1) -> None:
        self._apply("mul", other, dest, dest_index)

    def div_into(self, other: Any, dest: Any, dest_index: int = 1) -> None:
        self._apply("div", other, dest, dest_index)

    def __add__(self, other: Any) -> FixedArray:
        return self._result("add", other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> FixedArray:
        return self._result("sub", other)

    def __mul__(self, other: Any) -> FixedArray:
        return self._result("mul", other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> FixedArray:
        return self._result("div", other)

    def __neg__(self) -> FixedArray:
        return type(self)._wrap(linalg.negate_ex(self._data, 1, self.size))


class Vector(FixedArray):
    __slots__ = ()

    def dot(self, other: IndexedRead) -> Any:
        return linalg.inner_product_ex(self._data, 1, self.size, other, 1)

    def length(self) -> float:
        return linalg.length_ex(self._data, 1, self.size)

    def normalise(self) -> Vector:
        return type(self)._wrap(linalg.normalise_ex(self._data, 1, self.size))


class Vector2(Vector):
    __slots__ = ()
    size = 2
    components = "xy"


class Vector3(Vector):
    __slots__ = ()
    size = 3
    components = "xyz"

    def cross(self, other: IndexedRead) -> Vector3:
        return Vector3._wrap(linalg.cross_product_ex(self._data, 1, other, 1))


class Vector4(Vector):
    __slots__ = ()
    size = 4
    components = "xyzw"


_VECTORS: dict[int, type[Vector]] = {2: Vector2, 3: Vector3, 4: Vector4}


class Matrix(FixedArray):
    """Square column-major matrix."""

    __slots__ = ()

    dim: ClassVar[int] = 0

    @classmethod
    def identity(cls) -> Matrix:
        return cls(*linalg.identity(cls.dim))

    def _is_matrix_operand(self, other: IndexedRead) -> bool:
        if isinstance(other, Matrix) or (not isinstance(other, Vector) and length(other) == self.size):
            if length(other) != self.size:
                raise bad_argument("other", f"expected {self.size} components, got {length(other)}")
            return True
        return False

    def matmul(self, other: IndexedRead) -> FixedArray:
        """Matrix product with a same-size matrix, or transform of a (homogeneous) vector."""
        if self._is_matrix_operand(other):
            return type(self)._wrap(linalg.matmul_ex(self._data, 1, self.dim, self.dim, other, 1, self.dim))
        count = length(other)
        result = linalg.matmul_mat_vec_ex(self._data, 1, self.dim, other, 1, count)
        vector_type = _VECTORS.get(count)
        return vector_type._wrap(result) if vector_type is not None else result

    __matmul__ = matmul

    def matmul_into(self, other: IndexedRead, dest: Any, dest_index: int = 1) -> None:
        if self._is_matrix_operand(other):
            linalg.matmul_ex(self._data, 1, self.dim, self.dim, other, 1, self.dim, dest, dest_index)
        else:
            linalg.matmul_mat_vec_ex(self._data, 1, self.dim, other, 1, length(other), dest, dest_index)

    def transpose(self) -> Matrix:
        return type(self)._wrap(linalg.transpose_ex(self._data, 1, self.dim, self.dim))


class Matrix2(Matrix):
    __slots__ = ()
    dim = 2
    size = 4


class Matrix3(Matrix):
    __slots__ = ()
    dim = 3
    size = 9


class Matrix4(Matrix):
    __slots__ = ()
    dim = 4
    size = 16


def as_vector(values: Sequence[Any]) -> Vector:
    """Copy ``values`` into the vector type of matching length."""
    vector_type = _VECTORS.get(len(values))
    if vector_type is None:
        raise bad_argument("values", f"no vector type with {len(values)} components")
    return vector_type(*values)
