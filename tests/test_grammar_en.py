"""
Tests for the English example grammar, one class per dimension.
"""

import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from valex import Context, Locale, Options, parse_en, rules_for
from valex.grammars import dependency_closure
from valex.vx_types import DimensionKind

REFERENCE = Context(reference_time=datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc))


def values(text, dim, **kwargs):
    return [(e.body, e.value) for e in parse_en(text, [dim], **kwargs)]


def only_value(text, dim, **kwargs):
    found = values(text, dim, **kwargs)
    assert len(found) == 1, found
    return found[0][1]


def number(value):
    return {"type": "value", "value": value}


class TestRegistry:
    def test_dependencies_are_loaded(self):
        assert dependency_closure([DimensionKind.TIME]) >= {
            DimensionKind.NUMERAL,
            DimensionKind.DURATION,
            DimensionKind.TIME_GRAIN,
        }

    def test_rule_sets_are_cached(self):
        assert rules_for("en", ["distance"]) is rules_for(Locale("en", "GB"), ["distance"])

    def test_all_dimensions_by_default(self):
        assert len(rules_for("en")) > len(rules_for("en", ["numeral"]))

    def test_unknown_language(self):
        with pytest.raises(ValueError, match="No grammar"):
            rules_for("xx")

    def test_unknown_dimension(self):
        with pytest.raises(ValueError):
            rules_for("en", ["colour"])


class TestNumeral:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", 42.0),
            ("forty two", 42.0),
            ("forty-two", 42.0),
            ("seventeen", 17.0),
            ("three hundred", 300.0),
            ("three hundred twenty one", 321.0),
            ("two thousand and five", 2005.0),
            ("1,000,000", 1000000.0),
            ("2.5", 2.5),
            ("3/4", 0.75),
            ("5k", 5000.0),
            ("-7", -7.0),
            ("minus 3", -3.0),
            ("a dozen", 12.0),
            ("one point five", 1.5),
        ],
    )
    def test_numbers(self, text, expected):
        assert only_value(text, "numeral") == number(expected)
        assert parse_en(text, ["numeral"])[0].body == text

    def test_not_inside_words(self):
        assert values("someone", "numeral") == []


class TestOrdinal:
    @pytest.mark.parametrize(
        "text,expected",
        [("first", 1), ("3rd", 3), ("twelfth", 12), ("twenty first", 21), ("42nd", 42)],
    )
    def test_ordinals(self, text, expected):
        assert only_value(text, "ordinal") == number(expected)


class TestTemperature:
    def test_degrees(self):
        assert only_value("70 degrees", "temperature") == {
            "type": "value",
            "value": 70.0,
            "unit": "degree",
        }

    def test_fahrenheit(self):
        assert only_value("80 degrees fahrenheit", "temperature") == {
            "type": "value",
            "value": 80.0,
            "unit": "fahrenheit",
        }

    def test_celsius_symbol(self):
        assert only_value("25°C", "temperature")["unit"] == "celsius"

    def test_below_zero(self):
        assert only_value("5 degrees below zero", "temperature") == {
            "type": "value",
            "value": -5.0,
            "unit": "degree",
        }

    def test_bare_number_is_not_a_temperature(self):
        assert values("25", "temperature") == []


class TestDistance:
    def test_kilometres(self):
        assert only_value("2 km", "distance") == {"type": "value", "value": 2.0, "unit": "kilometre"}

    def test_between(self):
        assert only_value("between 3 and 5 km", "distance") == {
            "type": "interval",
            "from": {"value": 3.0, "unit": "kilometre"},
            "to": {"value": 5.0, "unit": "kilometre"},
        }

    def test_composite(self):
        value = only_value("6 feet 2 inches", "distance")
        assert value["unit"] == "inch"
        assert value["value"] == pytest.approx(74.0)

    def test_invalid_interval_is_dropped(self):
        # "5000 to 10" is not an interval, but both distances survive
        bodies = [body for body, _ in values("5000 km to 10 km", "distance")]
        assert bodies == ["5000 km", "10 km"]


class TestVolume:
    def test_litres(self):
        assert only_value("2 litres", "volume") == {"type": "value", "value": 2.0, "unit": "litre"}

    def test_half_a_gallon(self):
        assert only_value("half a gallon", "volume") == {
            "type": "value",
            "value": 0.5,
            "unit": "gallon",
        }

    def test_unit_alone_is_not_a_volume(self):
        assert values("gallons", "volume") == []


class TestQuantity:
    def test_cups_of_product(self):
        assert only_value("2 cups of sugar", "quantity") == {
            "type": "value",
            "value": 2.0,
            "unit": "cup",
            "product": "sugar",
        }

    def test_kilograms_are_grams(self):
        assert only_value("3 kg", "quantity") == {"type": "value", "value": 3000.0, "unit": "gram"}

    def test_a_pound(self):
        assert only_value("a pound", "quantity") == {"type": "value", "value": 1.0, "unit": "pound"}

    def test_at_least(self):
        assert only_value("at least 4 oz", "quantity") == {
            "type": "interval",
            "from": {"value": 4.0, "unit": "ounce"},
        }


class TestAmountOfMoney:
    def test_dollars_and_cents(self):
        assert only_value("10 dollars and 50 cents", "amount-of-money") == {
            "type": "value",
            "value": 10.5,
            "unit": "USD",
        }

    def test_grand(self):
        assert only_value("3 grand", "amount-of-money") == {
            "type": "value",
            "value": 3000.0,
            "unit": "USD",
        }

    def test_about(self):
        assert only_value("about $5", "amount-of-money") == {
            "type": "value",
            "value": 5.0,
            "unit": "USD",
            "precision": "approximate",
        }

    def test_range(self):
        assert only_value("$5 - $10", "amount-of-money") == {
            "type": "interval",
            "from": {"value": 5.0, "unit": "USD"},
            "to": {"value": 10.0, "unit": "USD"},
        }

    def test_between(self):
        assert only_value("between 10 and 20 dollars", "amount-of-money") == {
            "type": "interval",
            "from": {"value": 10.0, "unit": "USD"},
            "to": {"value": 20.0, "unit": "USD"},
        }

    @pytest.mark.parametrize(
        "text,unit",
        [("£7", "GBP"), ("7 pounds sterling", "GBP"), ("¥300", "JPY"), ("15 rupees", "INR")],
    )
    def test_currencies(self, text, unit):
        assert only_value(text, "amount-of-money")["unit"] == unit

    def test_pounds_alone_are_not_money(self):
        assert values("6 pounds", "amount-of-money") == []


class TestEmail:
    def test_plain(self):
        assert values("contact john.doe@example.com today", "email") == [
            ("john.doe@example.com", {"type": "value", "value": "john.doe@example.com"})
        ]

    def test_spelled_out(self):
        assert only_value("john dot doe at gmail dot com", "email") == {
            "type": "value",
            "value": "john.doe@gmail.com",
        }


class TestUrl:
    def test_full_url(self):
        assert only_value("visit https://www.Example.com/path now", "url") == {
            "type": "value",
            "value": "https://www.Example.com/path",
            "domain": "example.com",
        }

    def test_bare_domain(self):
        assert only_value("cnn.com/info", "url")["domain"] == "cnn.com"

    def test_localhost(self):
        assert only_value("localhost:8080/api", "url")["domain"] == "localhost"


class TestPhoneNumber:
    def test_with_country_code(self):
        assert only_value("call +1 (650) 123-4567 now", "phone-number") == {
            "type": "value",
            "value": "(+1) 6501234567",
        }

    def test_with_extension(self):
        assert only_value("555-123-4567 ext 89", "phone-number")["value"] == "5551234567 ext 89"

    def test_too_short(self):
        assert values("12-34", "phone-number") == []


class TestCreditCardNumber:
    def test_visa(self):
        assert only_value("4111111111111111", "credit-card-number") == {
            "type": "value",
            "value": "4111111111111111",
            "issuer": "visa",
        }

    def test_dashed_amex(self):
        assert only_value("3782-822463-10005", "credit-card-number") == {
            "type": "value",
            "value": "378282246310005",
            "issuer": "amex",
        }

    def test_luhn_failure(self):
        assert values("4111111111111112", "credit-card-number") == []


class TestTimeGrain:
    @pytest.mark.parametrize("text,grain", [("hours", "hour"), ("qtr", "quarter"), ("yrs", "year")])
    def test_grains(self, text, grain):
        assert only_value(text, "time-grain") == {"type": "value", "value": grain}


class TestDuration:
    def test_days(self):
        assert only_value("3 days", "duration") == {
            "type": "value",
            "value": 3,
            "unit": "day",
            "day": 3,
            "normalized": {"value": 259200, "unit": "second"},
        }

    def test_half_an_hour(self):
        value = only_value("half an hour", "duration")
        assert (value["value"], value["unit"]) == (30, "minute")

    def test_composite(self):
        value = only_value("2 hours and 30 minutes", "duration")
        assert (value["value"], value["unit"]) == (150, "minute")

    def test_an_hour(self):
        assert only_value("an hour", "duration")["normalized"]["value"] == 3600


class TestTime:
    def test_now(self):
        assert only_value("now", "time", context=REFERENCE) == {
            "type": "value",
            "value": "2024-03-15T10:30:00+00:00",
            "grain": "second",
        }

    def test_tomorrow(self):
        assert only_value("tomorrow", "time", context=REFERENCE) == {
            "type": "value",
            "value": "2024-03-16T00:00:00+00:00",
            "grain": "day",
        }

    def test_day_before_yesterday(self):
        assert only_value("the day before yesterday", "time", context=REFERENCE)["value"] == (
            "2024-03-13T00:00:00+00:00"
        )

    def test_in_three_days(self):
        assert only_value("in 3 days", "time", context=REFERENCE) == {
            "type": "value",
            "value": "2024-03-18T10:00:00+00:00",
            "grain": "hour",
        }

    def test_hours_ago(self):
        assert only_value("2 hours ago", "time", context=REFERENCE) == {
            "type": "value",
            "value": "2024-03-15T08:30:00+00:00",
            "grain": "minute",
        }

    def test_months_from_now_clamps_the_day(self):
        context = Context(reference_time=datetime(2024, 1, 31, 9, 0, tzinfo=timezone.utc))
        value = only_value("1 month from now", "time", context=context)
        assert value == {"type": "value", "value": "2024-02-29T00:00:00+00:00", "grain": "day"}

    def test_tomorrow_evening(self):
        assert only_value("tomorrow evening", "time", context=REFERENCE) == {
            "type": "interval",
            "from": {"value": "2024-03-16T18:00:00+00:00", "grain": "hour"},
            "to": {"value": "2024-03-17T00:00:00+00:00", "grain": "hour"},
        }

    def test_tonight_is_not_latent(self):
        (entity,) = parse_en("tonight", ["time"], context=REFERENCE)
        assert not entity.latent
        assert entity.value["from"]["value"] == "2024-03-15T18:00:00+00:00"

    def test_part_of_day_needs_latent(self):
        assert values("evening", "time", context=REFERENCE) == []
        found = values("evening", "time", context=REFERENCE, options=Options(with_latent=True))
        assert len(found) == 1


class TestExtremeInputs:
    """Values outside what datetime or float can hold drop the entity, never the parse."""

    @pytest.mark.parametrize(
        "text",
        [
            "in 999999999 months",
            "in 9999999999999999 days",
            "9999999999 years from now",
            "in 10000 years",
            "10000 years ago",
        ],
    )
    def test_unrepresentable_shift_is_dropped(self, text):
        assert parse_en(text, ["time"], context=REFERENCE) == []

    def test_duration_survives_when_time_is_dropped(self):
        assert [e.dim for e in parse_en("in 9999999999999999 days", ["duration"])] == [
            DimensionKind.DURATION
        ]

    def test_in_range_shift_still_resolves(self):
        assert only_value("in 9999 days", "time", context=REFERENCE)["value"] == (
            "2051-07-31T10:00:00+00:00"
        )

    def test_overlong_decimals(self):
        text = "1." + "9" * 400
        assert all(e.dim is DimensionKind.NUMERAL for e in parse_en(text, ["number"]))

    @pytest.mark.parametrize(
        "text",
        [
            "9999999999",
            "-9999999999",
            "temperature is 9999999999 c",
            "temperature is -9999999999 f",
            "999999999999999999999999999999999999999",
            "-999999999999999999999999999999999999999",
            "temperature is 1e309 c",
            "pay 999999999999999999999 dollars",
            "(999) 999-999999999999999999",
            "https://example.com/999999999999999999999999999",
            "in 9999999999999999 days",
            "9999999999 years from now",
            "9" * 300 + " years and 1 day",
            "Tuesday, March 11, 2025 at 8:15 PM\n(773) 348-8886\n"
            "location: 2300 N. Lincoln Park West  Chicago, IL United States 60614",
        ],
    )
    def test_all_dimensions_do_not_raise(self, text):
        entities = parse_en(text, context=REFERENCE)
        assert all(e.start < e.end <= len(text.encode("utf-8")) for e in entities)
