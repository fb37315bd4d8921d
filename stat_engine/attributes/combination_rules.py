"""
Policies for combining two attributes that share a name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from stat_engine.attributes.attribute import Attribute, AttributeNameMismatchError
from stat_engine.base.config import get_config
from stat_engine.utils.logging_config import get_logger

logger = get_logger("ATTRIBUTES")


class CombinationRule(ABC):
    """
    Combines a base attribute with an incoming attribute of the same name.

    Implementations must be pure and raise AttributeNameMismatchError when the
    names differ.
    """

    #: Registry key for the rule
    name: str = ""

    @abstractmethod
    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        """Return a new attribute combining ``incoming`` into ``base``."""

    def __call__(self, base: Attribute, incoming: Attribute) -> Attribute:
        return self.combine(base, incoming)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @staticmethod
    def _require_same_name(base: Attribute, incoming: Attribute) -> None:
        if base.name != incoming.name:
            raise AttributeNameMismatchError(base.name, incoming.name)


class AdditiveRule(CombinationRule):
    name = "add"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base + incoming


class SubtractiveRule(CombinationRule):
    name = "subtract"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base - incoming


class MultiplicativeRule(CombinationRule):
    name = "multiply"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base * incoming


class MaxRule(CombinationRule):
    """Keeps the larger of the two values."""
    name = "max"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base.with_value(max(base.value, incoming.value))


class MinRule(CombinationRule):
    """Keeps the smaller of the two values."""
    name = "min"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base.with_value(min(base.value, incoming.value))


class OverrideRule(CombinationRule):
    """The incoming value replaces the base value."""
    name = "override"

    def combine(self, base: Attribute, incoming: Attribute) -> Attribute:
        self._require_same_name(base, incoming)
        return base.with_value(incoming.value)


_RULES: Dict[str, CombinationRule] = {
    rule.name: rule
    for rule in (AdditiveRule(), SubtractiveRule(), MultiplicativeRule(),
                 MaxRule(), MinRule(), OverrideRule())
}

ADD = _RULES["add"]
SUBTRACT = _RULES["subtract"]
MULTIPLY = _RULES["multiply"]
MAX = _RULES["max"]
MIN = _RULES["min"]
OVERRIDE = _RULES["override"]


def available_rules() -> List[str]:
    """Names accepted by get_combination_rule()."""
    return sorted(_RULES)


def get_combination_rule(rule_name: str) -> CombinationRule:
    """
    Resolve a stock combination rule by name (case-insensitive).

    Raises:
        ValueError: If no rule is registered under ``rule_name``.
    """
    rule = _RULES.get(str(rule_name).strip().lower())
    if rule is None:
        raise ValueError(f"Unknown combination rule: {rule_name!r} (available: {', '.join(available_rules())})")
    return rule


def get_default_rule() -> CombinationRule:
    """Rule used when an incoming attribute carries none (``attributes.default_combination_rule``)."""

    rule_name = get_config().get("attributes.default_combination_rule", ADD.name)
    try:
        return get_combination_rule(rule_name)
    except ValueError as e:
        logger.warning(f"{e}; falling back to '{ADD.name}'")
        return ADD
