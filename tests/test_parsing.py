from datetime import date
from decimal import Decimal

import pytest

from gamescout_core.parsing import compute_savings, flatten_names, parse_date, parse_int, parse_price, strip_html


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("19.99", Decimal("19.99")),
        (" 5.00 ", Decimal("5.00")),
        ("0", Decimal("0")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        ("NaN", Decimal("0")),
        (None, Decimal("0")),
        (3, Decimal("3")),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


def test_parse_price_is_exact():
    assert parse_price("0.1") + parse_price("0.2") == Decimal("0.3")


def test_parse_date():
    assert parse_date("2007-09-25") == date(2007, 9, 25)
    assert parse_date("not a date") is None
    assert parse_date("2020-13-40") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_parse_int():
    assert parse_int(92) == 92
    assert parse_int("88") == 88
    assert parse_int(None) is None
    assert parse_int("x") is None
    assert parse_int(float("inf")) is None
    assert parse_int(float("nan")) is None


def test_savings_half_price():
    savings = compute_savings(Decimal("19.99"), Decimal("39.99"))
    assert abs(savings - Decimal(50)) < Decimal("0.1")


def test_savings_zero_when_normal_not_positive():
    assert compute_savings(Decimal("5"), Decimal("0")) == 0
    assert compute_savings(Decimal("5"), Decimal("-1")) == 0


def test_savings_zero_on_out_of_range_prices():
    huge = parse_price("1e1000000")
    assert compute_savings(Decimal(0), huge) == 0
    assert compute_savings(Decimal("-1e999999"), huge) == 0


def test_savings_clamped_to_range():
    # Sale above normal price would be negative
    assert compute_savings(Decimal("50"), Decimal("40")) == 0
    assert compute_savings(Decimal("-10"), Decimal("40")) == 100
    assert compute_savings(Decimal("0"), Decimal("40")) == 100


def test_strip_html_keeps_paragraph_structure():
    assert strip_html("<p>Line1<br>Line2</p><p>Next</p>") == "Line1\nLine2\n\nNext"


def test_strip_html_decodes_entities_and_drops_tags():
    html = '<p class="intro">Tom &amp; Jerry<br /><strong>Bold</strong> &quot;quoted&quot;</p>'
    assert strip_html(html) == 'Tom & Jerry\nBold "quoted"'


def test_strip_html_blank():
    assert strip_html(None) == ""
    assert strip_html("   ") == ""


def test_flatten_names_with_wrapper():
    raw = [
        {"platform": {"name": "PC"}},
        {"platform": {"name": ""}},
        {"platform": None},
        {"platform": {"name": "PC"}},
        {"platform": {"name": "Xbox"}},
    ]
    assert flatten_names(raw, wrapper="platform") == ("PC", "PC", "Xbox")


def test_flatten_names_plain():
    assert flatten_names([{"name": "Action"}, {"slug": "rpg"}, {"name": "RPG"}]) == ("Action", "RPG")
    assert flatten_names(None) == ()
