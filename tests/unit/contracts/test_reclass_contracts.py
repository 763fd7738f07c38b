import sys

import pytest
from pydantic import ValidationError

from rasterreclass.contracts.reclass import (
    ClassificationRule, RangeTable, PixelType, MAX_BOUND, MIN_BOUND, DOUBLE_COMPARE_TOLERANCE,
)

def _rule(lo, hi, key):
    return ClassificationRule(class_value=key, minimum=lo, maximum=hi)

def test_rule_defaults_are_widest_bounds():
    r = ClassificationRule(class_value=1)
    assert r.minimum == -sys.float_info.max == MIN_BOUND
    assert r.maximum == sys.float_info.max == MAX_BOUND
    assert r.open_ended

def test_rule_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        _rule(10, 5, 1)

def test_rule_rejects_nan():
    with pytest.raises(ValidationError):
        _rule(float("nan"), 5, 1)

def test_rule_is_frozen():
    r = _rule(0, 1, 1)
    with pytest.raises(ValidationError):
        r.minimum = 3

def test_table_orders_by_class_value_not_bounds():
    t = RangeTable.from_rules([_rule(0, 10, 5), _rule(10, 20, 1), _rule(20, 30, 3)])
    assert t.class_values == (1.0, 3.0, 5.0)
    assert t.max_class_value == 5.0
    assert t.min_class_value == 1.0
    assert len(t) == 3

def test_table_duplicate_key_last_wins():
    t = RangeTable.from_rules([_rule(0, 10, 1), _rule(100, 200, 1)])
    assert len(t) == 1
    assert t.rules[0].minimum == 100

def test_table_rejects_unsorted_direct_construction():
    with pytest.raises(ValueError):
        RangeTable((_rule(0, 1, 2), _rule(0, 1, 1)))

def test_match_half_open_then_upper_tolerance():
    t = RangeTable.from_rules([_rule(0, 30, 1), _rule(30, 270, 2), _rule(270, 365, 3)])
    assert t.match(29.999).class_value == 1
    assert t.match(30.0).class_value == 2
    assert t.match(365.0).class_value == 3
    assert t.match(365.0 + DOUBLE_COMPARE_TOLERANCE / 2).class_value == 3
    assert t.match(400.0) is None
    assert t.match(-0.5) is None

def test_match_overlap_smaller_class_value_wins():
    t = RangeTable.from_rules([_rule(50, 150, 2), _rule(0, 100, 1)])
    assert t.match(75).class_value == 1
    assert t.match(120).class_value == 2

def test_empty_table_has_no_max():
    with pytest.raises(ValueError):
        RangeTable(()).max_class_value

@pytest.mark.parametrize("pt,nodata", [
    (PixelType.INT16, -32768.0),
    (PixelType.INT32, -2147483648.0),
])
def test_integer_nodata_is_type_minimum(pt, nodata):
    assert pt.nodata == nodata
    assert pt.min_value == nodata

def test_float_nodata_is_smallest_positive_float32():
    nd = PixelType.FLOAT32.nodata
    assert 0.0 < nd < 1e-44
    assert PixelType.FLOAT32.dtype == "float32"
