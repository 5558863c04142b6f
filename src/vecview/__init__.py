"""vecview public API."""

import logging

from . import arrays, config, formatting, iterator, linalg
from .broadcast import ConstantOperand, resolve_constant
from .errors import (
    AliasingError,
    AllocationError,
    InvalidArgument,
    RangeError,
    ShapeError,
    VecViewError,
    WindowRangeError,
)
from .ex import elementwise_family
from .formatting import Column, format_array, format_matrix, format_slice, tabulated
from .protocol import (
    DEFAULT_STORE,
    BackingStore,
    BufferStore,
    get,
    get_into,
    get_values,
    is_array,
    is_sequence,
    length,
    set,
    set_values,
)
from .reshape import flatten, flatten_into, reshape, reshape_into, shape_of
from .values import Matrix2, Matrix3, Matrix4, Vector2, Vector3, Vector4, as_vector
from .view import InterleaveView, ReverseView, SliceView, StrideView, View, interleave, reverse, slice, stride

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    from .interop import as_jax_array, as_jax_matrix, from_jax
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc

        def as_jax_array(*_args, **_kwargs):
            raise ModuleNotFoundError("jax is required for as_jax_array(). Install runtime deps first.") from _jax_import_error

        def as_jax_matrix(*_args, **_kwargs):
            raise ModuleNotFoundError("jax is required for as_jax_matrix(). Install runtime deps first.") from _jax_import_error

        def from_jax(*_args, **_kwargs):
            raise ModuleNotFoundError("jax is required for from_jax(). Install runtime deps first.") from _jax_import_error

    else:
        raise

__all__ = [
    "AliasingError",
    "AllocationError",
    "BackingStore",
    "BufferStore",
    "Column",
    "ConstantOperand",
    "DEFAULT_STORE",
    "InterleaveView",
    "InvalidArgument",
    "Matrix2",
    "Matrix3",
    "Matrix4",
    "RangeError",
    "ReverseView",
    "ShapeError",
    "SliceView",
    "StrideView",
    "VecViewError",
    "Vector2",
    "Vector3",
    "Vector4",
    "View",
    "WindowRangeError",
    "arrays",
    "as_jax_array",
    "as_jax_matrix",
    "as_vector",
    "config",
    "elementwise_family",
    "flatten",
    "flatten_into",
    "format_array",
    "format_matrix",
    "format_slice",
    "formatting",
    "from_jax",
    "get",
    "get_into",
    "get_values",
    "interleave",
    "is_array",
    "is_sequence",
    "iterator",
    "length",
    "linalg",
    "reshape",
    "reshape_into",
    "resolve_constant",
    "reverse",
    "set",
    "set_values",
    "shape_of",
    "slice",
    "stride",
    "tabulated",
]
