import pytest

from jobquote.services.quantities import extract_quantity, first_number


@pytest.mark.parametrize(
    "description, keywords, expected",
    [
        ("install 6 downlights", ["downlight"], 6),
        ("install 6downlights", ["downlight"], 6),
        ("3 x outlets in the garage", ["outlet"], 3),
        ("3x outlets in the garage", ["outlet"], 3),
        ("add 2powerpoints", ["power point"], 2),
        ("install 4 double power points", ["power point", "outlet"], 4),
        ("replace 5 old taps", ["tap"], 5),
        ("3 rooms to paint", ["paint"], 3),
    ],
)
def test_extracts_count(description, keywords, expected):
    assert extract_quantity(description, keywords) == expected


def test_first_keyword_with_a_count_wins():
    assert extract_quantity("2 outlets and 8 downlights", ["downlight", "outlet"]) == 8
    assert extract_quantity("2 outlets and 8 downlights", ["outlet", "downlight"]) == 2


def test_clamped_to_twenty():
    assert extract_quantity("install 9999 power points", ["power point"]) == 20


def test_very_long_digit_run_clamps_without_converting():
    huge = "9" * 5000
    assert extract_quantity(f"install {huge} power points", ["power point"]) == 20
    assert extract_quantity(f"{huge} rooms", ["tap"]) == 20
    assert first_number(f"unit {huge}") == 20


def test_leading_zeros_are_ignored():
    assert extract_quantity("install 0004 power points", ["power point"]) == 4
    assert extract_quantity("install 000 power points", ["power point"]) == 1


def test_clamped_to_one():
    assert extract_quantity("0 power points", ["power point"]) == 1


def test_none_without_a_count():
    assert extract_quantity("fix the tap", ["tap"]) is None
    assert extract_quantity("", ["tap"]) is None


def test_number_not_attached_to_keyword_is_ignored():
    # "unit 12" is not a tap count and the text does not start with a number
    assert extract_quantity("replace tap in unit 12", ["tap"]) is None


def test_first_number():
    assert first_number("paint 3 bedrooms and 2 hallways") == 3
    assert first_number("replace tap in unit 40") == 20
    assert first_number("no numbers here") is None
