"""
Stat aggregation engine.

Combines named numeric values from multiple sources into single totals using
pluggable combination rules, and folds tagged, prioritized stats into totals.
"""

from stat_engine.errors import StatEngineError
from stat_engine.attributes import (
    Attribute, AttributeNameMismatchError, AttributeData, combine_attribute_data,
    CombinationRule, get_combination_rule, AttributeComputer,
)
from stat_engine.stats import Stat, StatBlock, total_stats

__version__ = "0.1.0"
