"""
Immutable named attribute values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional

from stat_engine.errors import StatEngineError

if TYPE_CHECKING:
    from stat_engine.attributes.combination_rules import CombinationRule


class AttributeNameMismatchError(StatEngineError, ValueError):
    """Raised when two attributes with different names are combined."""

    def __init__(self, left_name: str, right_name: str, operation: str = "combine"):
        self.left_name = left_name
        self.right_name = right_name
        self.operation = operation
        super().__init__(
            f"Cannot {operation} attribute '{left_name}' with attribute '{right_name}': names differ"
        )


@dataclass(frozen=True)
class Attribute:
    """
    A named floating point value.

    Attributes compare and hash by ``(name, value)``. The optional
    ``combination_rule`` is policy carried alongside the value and is used by
    :meth:`combine` when this attribute is merged into another one.

    Arithmetic is only defined between attributes with the same name; the
    result keeps the left operand's name and rule.
    """
    name: str
    value: float
    combination_rule: Optional["CombinationRule"] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"

    def _check_name(self, other: "Attribute", operation: str) -> None:
        if self.name != other.name:
            raise AttributeNameMismatchError(self.name, other.name, operation)

    def with_value(self, value: float) -> "Attribute":
        """Return a copy of this attribute holding ``value``."""
        return replace(self, value=value)

    def __add__(self, other: "Attribute") -> "Attribute":
        if not isinstance(other, Attribute):
            return NotImplemented
        self._check_name(other, "add")
        return self.with_value(self.value + other.value)

    def __sub__(self, other: "Attribute") -> "Attribute":
        if not isinstance(other, Attribute):
            return NotImplemented
        self._check_name(other, "subtract")
        return self.with_value(self.value - other.value)

    def __mul__(self, other: "Attribute") -> "Attribute":
        if not isinstance(other, Attribute):
            return NotImplemented
        self._check_name(other, "multiply")
        return self.with_value(self.value * other.value)

    def __truediv__(self, other: "Attribute") -> "Attribute":
        if not isinstance(other, Attribute):
            return NotImplemented
        self._check_name(other, "divide")
        return self.with_value(self.value / other.value)

    def combine(self, incoming: "Attribute") -> "Attribute":
        """
        Combine ``incoming`` into this attribute.

        Uses the incoming attribute's rule when it carries one, otherwise the
        configured default rule (addition unless configured otherwise).

        Raises:
            AttributeNameMismatchError: If the names differ.
        """
        # Imported here, combination_rules imports this module
        from stat_engine.attributes.combination_rules import get_default_rule

        self._check_name(incoming, "combine")
        rule = incoming.combination_rule or get_default_rule()
        return rule.combine(self, incoming)
