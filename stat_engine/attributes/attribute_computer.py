"""
Derived attribute values computed from attribute data.

Computations are registered per attribute name and receive the computer
itself, so one derived value can be built on top of others:

    computer.register_computation(
        "max_health",
        lambda c, data: data.get_value("constitution") * 10 + c.compute_attribute("level_bonus", data),
    )
"""

from __future__ import annotations

from typing import Callable, Dict, List

from stat_engine.attributes.attribute import Attribute
from stat_engine.attributes.attribute_data import AttributeData
from stat_engine.errors import StatEngineError
from stat_engine.utils.logging_config import get_logger

logger = get_logger("ATTRIBUTES")

AttributeComputation = Callable[["AttributeComputer", AttributeData], float]


class ComputationNotRegisteredError(StatEngineError, ValueError):
    """Raised when computing an attribute that has no registered computation."""

    def __init__(self, attribute_name: str):
        self.attribute_name = attribute_name
        super().__init__(f"{attribute_name} does not have a computation registered for it.")


class CircularComputationError(StatEngineError, RuntimeError):
    """Raised when a computation depends on itself."""

    def __init__(self, chain: List[str]):
        self.chain = chain
        super().__init__(f"Circular attribute computation: {' -> '.join(chain)}")


class AttributeComputer:
    """Compute attributes based on other attributes."""

    def __init__(self):
        self._computations: Dict[str, AttributeComputation] = {}
        # Names currently being computed, in call order
        self._in_progress: List[str] = []

    def register_computation(self, computed_attribute: str, computation: AttributeComputation) -> bool:
        """
        Register a computation for the given attribute. There can only be one
        computation for a given attribute.

        Returns:
            True if the computation was registered, False if it was None or one
            already exists.
        """
        if computation is None:
            return False
        if computed_attribute in self._computations:
            logger.warning(f"Computation for '{computed_attribute}' already registered")
            return False
        self._computations[computed_attribute] = computation
        return True

    def unregister_computation(self, computed_attribute: str) -> bool:
        """Unregister a computation. Returns True if one was removed."""
        if computed_attribute not in self._computations:
            return False
        del self._computations[computed_attribute]
        return True

    def has_computation(self, computed_attribute: str) -> bool:
        return computed_attribute in self._computations

    def computed_attributes(self) -> List[str]:
        return list(self._computations)

    def compute_attribute(self, computed_attribute: str, data: AttributeData) -> float:
        """
        Compute ``computed_attribute`` from ``data`` using its registered computation.

        Raises:
            ComputationNotRegisteredError: If no computation is registered.
            CircularComputationError: If the computation ends up requiring itself.
        """
        if computed_attribute not in self._computations:
            raise ComputationNotRegisteredError(computed_attribute)
        computation = self._computations[computed_attribute]

        if computed_attribute in self._in_progress:
            chain = self._in_progress[self._in_progress.index(computed_attribute):] + [computed_attribute]
            raise CircularComputationError(chain)

        self._in_progress.append(computed_attribute)
        try:
            return float(computation(self, data))
        finally:
            self._in_progress.pop()

    def compute_all(self, data: AttributeData) -> AttributeData:
        """Compute every registered attribute, returned as a new AttributeData."""
        return AttributeData(
            Attribute(name, self.compute_attribute(name, data))
            for name in self._computations
        )
