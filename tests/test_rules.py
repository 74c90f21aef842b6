"""
Rule Model Tests

Tests for date expressions, HolidayRule activation and evaluation,
SubstitutePolicy and the Holiday record.
"""
from __future__ import annotations

from datetime import date, datetime

import pytest

from holidayengine.exceptions import (
    InternalConsistencyError,
    InvalidArgumentError,
    UnknownLocaleError,
)
from holidayengine.models import (
    EasterOffset,
    FixedDate,
    Holiday,
    HolidayRule,
    HolidayType,
    LastWeekday,
    NthWeekday,
    ShiftDirection,
    ShiftToWeekday,
    SubstitutePolicy,
    Weekday,
    YearSwitch,
    expression_to_dict,
    locale_fallbacks,
    make_substitute,
    normalize_locale,
)
from holidayengine.packs import DictTranslations
from tests.conftest import make_rule


# =============================================================================
# Date Expressions
# =============================================================================

class TestExpressions:
    """Date expressions resolve to civil dates."""

    def test_fixed_date(self) -> None:
        assert FixedDate(12, 25).resolve(2024) == date(2024, 12, 25)

    def test_fixed_date_rejects_impossible_day(self) -> None:
        with pytest.raises(InvalidArgumentError):
            FixedDate(4, 31)

    def test_february_29_rejected(self) -> None:
        # Would fail every non-leap year
        with pytest.raises(InvalidArgumentError):
            FixedDate(2, 29)

    @pytest.mark.parametrize(
        "base, direction",
        [
            (FixedDate(12, 31), ShiftDirection.FORWARD),
            (FixedDate(12, 26), ShiftDirection.FORWARD),
            (FixedDate(1, 1), ShiftDirection.BACKWARD),
            (YearSwitch(2000, FixedDate(5, 1), FixedDate(12, 30)), ShiftDirection.FORWARD),
        ],
    )
    def test_shift_that_can_leave_year_rejected(self, base, direction) -> None:
        with pytest.raises(InvalidArgumentError):
            ShiftToWeekday(base, Weekday.MONDAY, direction)

    def test_shift_near_year_end_allowed(self) -> None:
        assert ShiftToWeekday(FixedDate(12, 25), Weekday.MONDAY).resolve(2024) == date(2024, 12, 30)
        assert ShiftToWeekday(
            FixedDate(1, 7), Weekday.MONDAY, ShiftDirection.BACKWARD
        ).resolve(2024) == date(2024, 1, 1)

    def test_nth_weekday(self) -> None:
        assert NthWeekday(6, Weekday.MONDAY, 2).resolve(2024) == date(2024, 6, 10)

    def test_last_weekday(self) -> None:
        assert LastWeekday(5, Weekday.MONDAY).resolve(2024) == date(2024, 5, 27)

    @pytest.mark.parametrize(
        "days, expected",
        [
            (0, date(2024, 3, 31)),
            (-1, date(2024, 3, 30)),
            (-2, date(2024, 3, 29)),
            (1, date(2024, 4, 1)),
            (39, date(2024, 5, 9)),
        ],
    )
    def test_easter_offset(self, days: int, expected: date) -> None:
        assert EasterOffset(days).resolve(2024) == expected

    def test_shift_to_weekday(self) -> None:
        expression = ShiftToWeekday(FixedDate(5, 27), Weekday.MONDAY)
        assert expression.resolve(2018) == date(2018, 5, 28)
        assert expression.resolve(2024) == date(2024, 5, 27)

    def test_shift_backward(self) -> None:
        expression = ShiftToWeekday(FixedDate(5, 24), Weekday.MONDAY, ShiftDirection.BACKWARD)
        # 24 May 2024 was a Friday
        assert expression.resolve(2024) == date(2024, 5, 20)

    def test_year_switch(self) -> None:
        expression = YearSwitch(
            year=2007,
            before=NthWeekday(3, Weekday.MONDAY, 3),
            after=NthWeekday(3, Weekday.MONDAY, 2),
        )
        assert expression.resolve(2006) == date(2006, 3, 20)
        assert expression.resolve(2007) == date(2007, 3, 12)

    def test_describe(self) -> None:
        assert FixedDate(1, 26).describe() == "26 January"
        assert EasterOffset(-1).describe() == "Easter - 1 days"
        assert "Monday on or after 27 May" == ShiftToWeekday(FixedDate(5, 27), Weekday.MONDAY).describe()

    def test_expression_to_dict(self) -> None:
        expression = YearSwitch(2007, NthWeekday(3, Weekday.MONDAY, 3), FixedDate(3, 12))
        assert expression_to_dict(expression) == {
            "kind": "switch",
            "year": 2007,
            "before": {"kind": "nth_weekday", "month": 3, "weekday": "monday", "n": 3},
            "after": {"kind": "fixed", "month": 3, "day": 12},
        }


# =============================================================================
# Holiday Rules
# =============================================================================

class TestRuleActivation:
    """since/until bounds are inclusive."""

    def test_unbounded(self) -> None:
        rule = make_rule("always")
        assert rule.is_active(1583)
        assert rule.is_active(9999)

    def test_since(self) -> None:
        rule = make_rule("later", since=2018)
        assert not rule.is_active(2017)
        assert rule.is_active(2018)

    def test_until(self) -> None:
        rule = make_rule("earlier", until=2006)
        assert rule.is_active(2006)
        assert not rule.is_active(2007)

    def test_since_after_until_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            make_rule("broken", since=2020, until=2019)

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            HolidayRule(key="", expression=FixedDate(1, 1))


class TestRuleEvaluation:
    """HolidayRule.evaluate produces zero or one Holiday."""

    def test_evaluate_active(self) -> None:
        rule = make_rule("newYearsDay", 1, 1, names={"en": "New Year's Day"})
        holiday = rule.evaluate(2024, "Australia/Sydney")
        assert holiday is not None
        assert holiday.key == "newYearsDay"
        assert holiday.civil_date == date(2024, 1, 1)
        assert holiday.timezone == "Australia/Sydney"
        assert holiday.name == "New Year's Day"

    def test_evaluate_inactive(self) -> None:
        rule = make_rule("reconciliationDay", 5, 27, since=2018)
        assert rule.evaluate(2017, "Australia/Sydney") is None

    def test_date_is_local_midnight(self) -> None:
        holiday = make_rule("christmasDay", 12, 25).evaluate(2024, "Australia/Sydney")
        assert holiday.date.tzinfo is not None
        assert (holiday.date.hour, holiday.date.minute, holiday.date.second) == (0, 0, 0)

    def test_rule_names_win_over_translations(self) -> None:
        translations = DictTranslations({"anzacDay": {"en": "Anzac Day", "fr": "Jour de l'Anzac"}})
        rule = make_rule("anzacDay", 4, 25, names={"en": "ANZAC Day"})
        holiday = rule.evaluate(2024, "Australia/Sydney", "fr", translations)
        assert holiday.names["en"] == "ANZAC Day"
        assert holiday.name == "Jour de l'Anzac"

    def test_result_outside_year_is_consistency_error(self) -> None:
        rule = make_rule(
            "spill", expression=ShiftToWeekday(LastWeekday(12, Weekday.SUNDAY), Weekday.SATURDAY)
        )
        # Last Sunday of 2024 is 29 December; the next Saturday is in 2025
        with pytest.raises(InternalConsistencyError):
            rule.evaluate(2024, "Australia/Sydney")

    def test_evaluation_is_repeatable(self) -> None:
        rule = make_rule("easter", expression=EasterOffset(0))
        first = rule.evaluate(2024, "Australia/Sydney")
        second = rule.evaluate(2024, "Australia/Sydney")
        assert first == second
        assert hash(first) == hash(second)


# =============================================================================
# Substitute Policy
# =============================================================================

class TestSubstitutePolicy:
    """Weekend holidays move to the next free weekday."""

    def test_applies_to_weekend(self) -> None:
        policy = SubstitutePolicy()
        assert policy.applies_to(date(2022, 12, 25))      # Sunday
        assert policy.applies_to(date(2021, 12, 25))      # Saturday
        assert not policy.applies_to(date(2024, 12, 25))  # Wednesday

    def test_next_monday(self) -> None:
        assert SubstitutePolicy().substitute_date(date(2021, 12, 25), set()) == date(2021, 12, 27)

    def test_occupied_days_are_skipped(self) -> None:
        occupied = {date(2021, 12, 25), date(2021, 12, 26), date(2021, 12, 27)}
        assert SubstitutePolicy().substitute_date(date(2021, 12, 26), occupied) == date(2021, 12, 28)

    def test_custom_target(self) -> None:
        policy = SubstitutePolicy(on=frozenset({Weekday.SUNDAY}), to=Weekday.TUESDAY)
        assert not policy.applies_to(date(2021, 12, 25))
        assert policy.substitute_date(date(2022, 12, 25), set()) == date(2022, 12, 27)

    def test_make_substitute_names(self) -> None:
        translations = DictTranslations({"substituteHoliday": {"de": "{0} (Ersatzfeiertag)"}})
        original = Holiday(
            key="christmasDay",
            names={"en": "Christmas", "de": "1. Weihnachtsfeiertag"},
            date=make_rule("christmasDay", 12, 25).evaluate(2022, "Europe/Berlin").date,
        )
        substitute = make_substitute(original, date(2022, 12, 27), translations)
        assert substitute.key == "substituteHoliday:christmasDay"
        assert substitute.substitute_for == "christmasDay"
        assert substitute.is_substitute
        assert substitute.names["de"] == "1. Weihnachtsfeiertag (Ersatzfeiertag)"
        assert substitute.names["en"] == "Christmas observed"
        assert substitute.timezone == "Europe/Berlin"

    def test_malformed_template_raises_invalid_argument(self) -> None:
        class RawTable:
            def get_translations(self, key):
                return {"en": "{name} observed"} if key == "substituteHoliday" else {}

        original = make_rule("christmasDay", 12, 25, names={"en": "Christmas"}).evaluate(
            2022, "Australia/Sydney"
        )
        with pytest.raises(InvalidArgumentError):
            make_substitute(original, date(2022, 12, 27), RawTable())

    @pytest.mark.parametrize(
        "template", ["{name} observed", "{0} {1}", "{0:d}", "{0.missing}", "{0[x]}", "{0"]
    )
    def test_translation_table_rejects_malformed_template(self, template: str) -> None:
        with pytest.raises(InvalidArgumentError):
            DictTranslations({"substituteHoliday": {"en": template}})


# =============================================================================
# Holiday Record and Locales
# =============================================================================

class TestHoliday:
    """Holiday value semantics and name fallback."""

    def _holiday(self, **overrides) -> Holiday:
        fields = {
            "key": "labourDay",
            "names": {"en": "Labour Day", "en_US": "Labor Day"},
            "date": make_rule("x", 10, 7).evaluate(2024, "Australia/Sydney").date,
        }
        fields.update(overrides)
        return Holiday(**fields)

    def test_naive_datetime_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            self._holiday(date=datetime(2024, 10, 7))

    def test_names_are_read_only(self) -> None:
        holiday = self._holiday()
        with pytest.raises(TypeError):
            holiday.names["fr"] = "Fête du Travail"

    def test_locale_fallback(self) -> None:
        assert self._holiday(locale="en_US").name == "Labor Day"
        assert self._holiday(locale="en_AU").name == "Labour Day"
        assert self._holiday(locale="fr").name == "Labour Day"

    def test_falls_back_to_key(self) -> None:
        assert self._holiday(names={}).name == "labourDay"

    def test_get_name_explicit_locales(self) -> None:
        assert self._holiday().get_name(["de", "en_US"]) == "Labor Day"

    def test_to_dict(self) -> None:
        data = self._holiday().to_dict()
        assert data["key"] == "labourDay"
        assert data["date"] == "2024-10-07"
        assert data["type"] == HolidayType.OFFICIAL.value
        assert "substitute_for" not in data


class TestLocales:
    """Locale normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("en", "en"), ("en-AU", "en_AU"), ("en_AU", "en_AU"), ("zh_Hant_TW", "zh_Hant_TW")],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_locale(raw) == expected

    @pytest.mark.parametrize("raw", ["", "english", "EN", "en_au", "e"])
    def test_malformed(self, raw: str) -> None:
        with pytest.raises(UnknownLocaleError):
            normalize_locale(raw)

    def test_fallbacks(self) -> None:
        assert locale_fallbacks("en_AU") == ["en_AU", "en"]
        assert locale_fallbacks("de_CH") == ["de_CH", "de", "en"]
        assert locale_fallbacks("en") == ["en"]
