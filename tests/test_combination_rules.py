#!/usr/bin/env python3
import logging

import pytest

from stat_engine.attributes import Attribute, AttributeNameMismatchError, CombinationRule
from stat_engine.attributes.combination_rules import (
    ADD, MAX, MIN, MULTIPLY, OVERRIDE, SUBTRACT, available_rules, get_combination_rule, get_default_rule,
)


@pytest.mark.parametrize("rule, expected", [
    (ADD, 7.0),
    (SUBTRACT, 3.0),
    (MULTIPLY, 10.0),
    (MAX, 5.0),
    (MIN, 2.0),
    (OVERRIDE, 2.0),
])
def test_stock_rules(rule, expected):
    result = rule.combine(Attribute("mana", 5.0), Attribute("mana", 2.0))
    assert result == Attribute("mana", expected)


@pytest.mark.parametrize("rule", [ADD, SUBTRACT, MULTIPLY, MAX, MIN, OVERRIDE])
def test_stock_rules_reject_mismatched_names(rule):
    with pytest.raises(AttributeNameMismatchError):
        rule(Attribute("mana", 5.0), Attribute("health", 2.0))


def test_selecting_rules_keep_base_rule():
    base = Attribute("mana", 5.0, MIN)
    assert OVERRIDE.combine(base, Attribute("mana", 1.0, OVERRIDE)).combination_rule is MIN


def test_rule_lookup_by_name():
    assert get_combination_rule("add") is ADD
    assert get_combination_rule(" Override ") is OVERRIDE
    assert available_rules() == ["add", "max", "min", "multiply", "override", "subtract"]


def test_unknown_rule_name():
    with pytest.raises(ValueError, match="Unknown combination rule"):
        get_combination_rule("average")


def test_custom_rule():
    class AverageRule(CombinationRule):
        name = "average"

        def combine(self, base, incoming):
            self._require_same_name(base, incoming)
            return base.with_value((base.value + incoming.value) / 2)

    assert Attribute("mana", 4.0).combine(Attribute("mana", 8.0, AverageRule())).value == 6.0


def test_default_rule_falls_back_to_addition(engine_config, caplog):
    engine_config.set("attributes.default_combination_rule", "nonsense")
    with caplog.at_level(logging.WARNING, logger="ATTRIBUTES"):
        assert get_default_rule() is ADD
    assert any("falling back" in rec.message for rec in caplog.records)
