#!/usr/bin/env python3
import pytest

from stat_engine.attributes import Attribute, AttributeData, AttributeNameMismatchError, combine_attribute_data
from stat_engine.attributes.combination_rules import MAX, MULTIPLY, OVERRIDE


def test_seeding_keeps_first_seen_duplicate():
    data = AttributeData([Attribute("str", 1.0), Attribute("dex", 2.0), Attribute("str", 9.0)])
    assert len(data) == 2
    assert data.get("str").value == 1.0


def test_add_is_insert_if_absent():
    data = AttributeData()
    assert data.add(Attribute("str", 3.0)) is True
    assert data.add(Attribute("str", 7.0)) is False
    assert data.get("str").value == 3.0
    assert data.add(None) is False


def test_combine_only_when_present():
    data = AttributeData([Attribute("str", 3.0)])
    assert data.combine(Attribute("str", 2.0)) is True
    assert data.get("str").value == 5.0
    assert data.combine(Attribute("dex", 2.0)) is False
    assert "dex" not in data
    assert data.combine(None) is False


def test_combine_uses_incoming_rule():
    data = AttributeData([Attribute("str", 3.0)])
    data.combine(Attribute("str", 4.0, MULTIPLY))
    assert data.get("str").value == 12.0


def test_remove_and_get():
    data = AttributeData([Attribute("str", 3.0)])
    assert data.remove("str") is True
    assert data.remove("str") is False
    assert data.remove(None) is False
    assert data.get("str") is None
    assert data.get(None) is None
    assert data.get_value("str", default=-1.0) == -1.0


def test_keys_match_attribute_names():
    data = AttributeData([Attribute("a", 1.0), Attribute("b", 2.0)])
    data.combine(Attribute("a", 1.0, OVERRIDE))
    for name in data.names():
        assert data.get(name).name == name


def test_combine_attribute_data_merges_and_inserts():
    base = AttributeData([Attribute("str", 10.0), Attribute("dex", 4.0)])
    incoming = AttributeData([Attribute("str", 2.0), Attribute("int", 7.0)])

    result = combine_attribute_data(base, incoming)

    assert result.get("str") == Attribute("str", 12.0)
    assert result.get("dex") == Attribute("dex", 4.0)
    assert result.get("int") == Attribute("int", 7.0)
    assert len(result) == 3


def test_combine_attribute_data_leaves_inputs_untouched():
    base = AttributeData([Attribute("str", 10.0)])
    incoming = AttributeData([Attribute("str", 2.0), Attribute("int", 7.0)])
    combine_attribute_data(base, incoming)
    assert base == AttributeData([Attribute("str", 10.0)])
    assert incoming == AttributeData([Attribute("str", 2.0), Attribute("int", 7.0)])


def test_combine_attribute_data_with_rules():
    base = AttributeData([Attribute("armor", 5.0), Attribute("speed", 3.0)])
    incoming = AttributeData([Attribute("armor", 8.0, MAX), Attribute("speed", 1.0, OVERRIDE)])
    result = combine_attribute_data(base, incoming)
    assert result.get_value("armor") == 8.0
    assert result.get_value("speed") == 1.0


def test_combine_attribute_data_null_inputs():
    base = AttributeData([Attribute("str", 1.0)])
    assert combine_attribute_data(None, base) is None
    assert combine_attribute_data(base, None) is None
    assert combine_attribute_data(base, []) is None
    assert combine_attribute_data(None, [base]) is None


def test_combine_attribute_data_folds_sequence_left_to_right():
    base = AttributeData([Attribute("str", 1.0)])
    sources = [
        AttributeData([Attribute("str", 2.0)]),
        AttributeData([Attribute("str", 3.0), Attribute("dex", 1.0)]),
        AttributeData([Attribute("dex", 10.0, MULTIPLY)]),
    ]
    result = AttributeData.combine_all(base, sources)
    # every element is applied exactly once
    assert result.get_value("str") == 6.0
    assert result.get_value("dex") == 10.0


def test_fold_order_matters_for_order_sensitive_rules():
    base = AttributeData([Attribute("hp", 1.0)])
    first = AttributeData([Attribute("hp", 5.0, OVERRIDE)])
    second = AttributeData([Attribute("hp", 2.0, MULTIPLY)])
    assert combine_attribute_data(base, [first, second]).get_value("hp") == 10.0
    assert combine_attribute_data(base, [second, first]).get_value("hp") == 5.0


def test_container_protocol():
    data = AttributeData([Attribute("a", 1.0), Attribute("b", 2.0)])
    assert "a" in data
    assert [a.name for a in data] == ["a", "b"]
    copied = data.copy()
    copied.remove("a")
    assert "a" in data


def test_combine_rejects_attribute_stored_under_other_name():
    data = AttributeData([Attribute("a", 1.0)])
    with pytest.raises(AttributeNameMismatchError):
        data.get("a").combine(Attribute("b", 1.0))


def test_missing_container_in_sequence_gives_no_result():
    base = AttributeData([Attribute("str", 1.0)])
    assert combine_attribute_data(base, [AttributeData([Attribute("str", 2.0)]), None]) is None
    assert AttributeData.combine_all(base, None) is None
