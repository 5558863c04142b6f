"""Resolution of constant operands for broadcasting operations.

A constant operand is either a scalar, combined with every element, or a
pattern sequence whose values are cycled across the larger operand::

    add_constant([1, 2, 3, 4], [10, 20])  # [11, 22, 13, 24]

The pattern length need not divide the larger length.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import bad_argument
from .protocol import get, is_sequence, length


@dataclass(frozen=True)
class ConstantOperand:
    """A constant argument with its pattern length resolved once."""

    value: Any
    group_size: int | None = None

    @classmethod
    def of(cls, c: Any) -> "ConstantOperand":
        if isinstance(c, cls):
            return c
        if not is_sequence(c):
            return cls(c)
        g = length(c)
        if g == 0:
            raise bad_argument("c", "constant pattern must not be empty")
        return cls(c, g)

    @property
    def is_scalar(self) -> bool:
        return self.group_size is None

    def at(self, i: int) -> Any:
        """Value combined with element ``i`` (1-based) of the larger operand."""
        if self.group_size is None:
            return self.value
        return get(self.value, (i - 1) % self.group_size + 1)


def is_constant_pattern(c: Any) -> bool:
    return is_sequence(c)


def resolve_constant(c: Any, i: int) -> Any:
    return ConstantOperand.of(c).at(i)
