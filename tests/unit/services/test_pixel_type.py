import pytest

from rasterreclass.contracts.reclass import PixelType
from rasterreclass.exceptions import InvalidRangeSpecError
from rasterreclass.services.pixel_type import select_pixel_type, select_output
from rasterreclass.services.range_parser import parse_ranges


@pytest.mark.parametrize("key,expected", [
    ("100", PixelType.INT16),
    ("32767", PixelType.INT16),
    ("32768", PixelType.INT32),
    ("50000", PixelType.INT32),
    ("2147483647", PixelType.INT32),
    ("3000000000", PixelType.FLOAT32),
])
def test_type_from_largest_class_value(key, expected):
    t = parse_ranges(f"0 10 1; 10 20 {key}")
    assert select_pixel_type(t) is expected


def test_fractional_class_value_promotes_to_float():
    assert select_pixel_type(parse_ranges("0 10 1.5; 10 20 2")) is PixelType.FLOAT32


def test_class_value_colliding_with_nodata_moves_up():
    # -32768 es el NoData de int16
    assert select_pixel_type(parse_ranges("0 10 -32768; 10 20 5")) is PixelType.INT32


def test_beyond_float32_is_rejected():
    with pytest.raises(InvalidRangeSpecError):
        select_pixel_type(parse_ranges("0 10 1e39"))


def test_select_output_couples_nodata_to_type():
    for spec, nd in [("0 1 100", -32768.0), ("0 1 50000", -2147483648.0)]:
        pt, nodata = select_output(parse_ranges(spec))
        assert nodata == pt.nodata == nd


def test_selection_is_deterministic():
    spec = "0 30 1; 30 270 70000; 270 365 3"
    assert {select_pixel_type(parse_ranges(spec)) for _ in range(5)} == {PixelType.INT32}
