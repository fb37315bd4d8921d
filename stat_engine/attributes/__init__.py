"""
Attributes: named values merged through combination rules.
"""

from stat_engine.attributes.attribute import Attribute, AttributeNameMismatchError
from stat_engine.attributes.combination_rules import (
    CombinationRule, AdditiveRule, SubtractiveRule, MultiplicativeRule,
    MaxRule, MinRule, OverrideRule, available_rules, get_combination_rule,
)
from stat_engine.attributes.attribute_data import AttributeData, combine_attribute_data
from stat_engine.attributes.attribute_computer import (
    AttributeComputer, ComputationNotRegisteredError, CircularComputationError,
)
