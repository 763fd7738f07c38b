import logging
import sys

import pytest

from rasterreclass.exceptions import InvalidRangeSpecError
from rasterreclass.services.range_parser import parse_ranges, format_ranges
from tests.factories import ASPECT_RANGES


def test_parse_three_token_rules():
    t = parse_ranges(ASPECT_RANGES)
    assert t.class_values == (1.0, 2.0, 3.0)
    r2 = t.rules[1]
    assert (r2.minimum, r2.maximum, r2.class_value) == (30.0, 270.0, 2.0)


def test_parse_collapses_whitespace_and_tabs():
    t = parse_ranges("  0.00    30.00\t1 ;\n30   270  2  ")
    assert t.class_values == (1.0, 2.0)
    assert t.rules[0].maximum == 30.0


def test_two_token_rule_equals_open_ended_three_token_rule():
    two = parse_ranges("10 5")
    three = parse_ranges(f"10 {sys.float_info.max!r} 5")
    assert two == three
    assert two.rules[0].open_ended


@pytest.mark.parametrize("spec", ["1; 0 10 2", "0 10 2; 1 2 3 4", "0 10 2;;", "0 10 2; ;"])
def test_other_token_counts_are_skipped(spec):
    t = parse_ranges(spec)
    assert t.class_values == (2.0,)


@pytest.mark.parametrize("spec,bad", [("0 abc 1", "abc"), ("0 10 1; x 2", "x"), ("0 10 one", "one")])
def test_non_numeric_token_fails_whole_parse(spec, bad):
    with pytest.raises(InvalidRangeSpecError) as ei:
        parse_ranges(spec)
    assert ei.value.argument == bad
    assert bad in str(ei.value)


@pytest.mark.parametrize("spec", ["", "   ", ";", "1; 2", "a b c d"])
def test_empty_or_ruleless_spec_fails(spec):
    with pytest.raises(InvalidRangeSpecError):
        parse_ranges(spec)


@pytest.mark.parametrize("spec", ["0 nan 1", "0 inf 1", "-inf 5"])
def test_non_finite_tokens_fail(spec):
    with pytest.raises(InvalidRangeSpecError):
        parse_ranges(spec)


def test_inverted_bounds_fail():
    with pytest.raises(InvalidRangeSpecError) as ei:
        parse_ranges("10 0 1")
    assert isinstance(ei.value, ValueError)


def test_duplicate_class_value_overwrites_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="rasterreclass.services.range_parser"):
        t = parse_ranges("0 10 1; 20 30 1")
    assert len(t) == 1
    assert (t.rules[0].minimum, t.rules[0].maximum) == (20.0, 30.0)
    assert "repetido" in caplog.text


def test_ordering_is_by_class_value():
    t = parse_ranges("0 10 9; 10 20 3; 20 30 -1")
    assert t.class_values == (-1.0, 3.0, 9.0)


def test_format_roundtrip_is_stable():
    t = parse_ranges("0 30 1; 30 2; 270 365 3")
    assert parse_ranges(format_ranges(t)) == t
    assert "30.0 2.0" in format_ranges(t)


def test_parse_is_deterministic_and_independent():
    a = parse_ranges(ASPECT_RANGES)
    b = parse_ranges(ASPECT_RANGES)
    assert a == b and a is not b
