"""Structured error types for sequence, view and kernel failures."""

from __future__ import annotations

from dataclasses import dataclass


class VecViewError(Exception):
    """Base class for structured vecview errors."""


class RangeError(VecViewError, IndexError):
    """Index or count outside the addressable window of a sequence."""


class InvalidArgument(VecViewError, ValueError):
    """Argument is well-typed but unusable (empty pattern, zero stride, ...)."""


class AllocationError(InvalidArgument):
    """Backing-store allocation or growth failed."""


class ShapeError(VecViewError, ValueError):
    """Element-count or dimension mismatch between operands."""


class AliasingError(InvalidArgument):
    """Destination overlaps a source of an out-of-order operation."""


@dataclass(frozen=True)
class WindowRangeError(RangeError):
    """Range failure with the offending window attached."""

    name: str
    index: int
    count: int
    limit: int | None = None

    def __str__(self) -> str:
        last = self.index + self.count - 1
        limit = ""
        if self.limit is not None:
            limit = f"; addressable range is [1, {self.limit}]"
        return f"bad argument '{self.name}' (window [{self.index}, {last}] out of range{limit})"


def bad_argument(name: str, reason: str) -> InvalidArgument:
    return InvalidArgument(f"bad argument '{name}' ({reason})")


def index_out_of_range(name: str, index: int, limit: int | None = None) -> RangeError:
    if limit is None:
        return RangeError(f"bad argument '{name}' (index {index} out of range)")
    return RangeError(f"bad argument '{name}' (index {index} out of range [1, {limit}])")
