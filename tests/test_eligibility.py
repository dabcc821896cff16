"""Tests for the ordering eligibility evaluator."""

from datetime import date, datetime, timezone

import pytest

from storefront.schemas.business_rules import SpecialClosing, TimeRange
from storefront.services.business import ReasonCode, evaluate, format_business_hours, next_open_time

from conftest import paris

# 2026-10-19 is a Monday, 2026-10-21 a Wednesday, 2026-10-25 a Sunday
WEDNESDAY = (2026, 10, 21)
MONDAY = (2026, 10, 19)
SUNDAY = (2026, 10, 25)


class TestWeekdayScenarios:
    def test_open_during_lunch_preorder_window(self, rules):
        result = evaluate(rules, paris(*WEDNESDAY, 11, 35))
        assert result.is_open is True
        assert result.reason == ReasonCode.OPEN
        assert "lunch" in result.message

    def test_between_services(self, rules):
        result = evaluate(rules, paris(*WEDNESDAY, 13, 45))
        assert result.is_open is False
        assert result.reason == ReasonCode.BETWEEN_SERVICES
        assert "18:30" in result.message

    def test_before_service(self, rules):
        result = evaluate(rules, paris(*WEDNESDAY, 9, 0))
        assert result.is_open is False
        assert result.reason == ReasonCode.BEFORE_SERVICE

    def test_after_service(self, rules):
        result = evaluate(rules, paris(*WEDNESDAY, 20, 45))
        assert result.is_open is False
        assert result.reason == ReasonCode.AFTER_SERVICE

    def test_dinner_window(self, rules):
        result = evaluate(rules, paris(*WEDNESDAY, 19, 15))
        assert result.is_open is True
        assert "dinner" in result.message

    @pytest.mark.parametrize("hour,minute", [(11, 30), (13, 30), (18, 30), (20, 30)])
    def test_effective_bounds_are_inclusive(self, rules, hour, minute):
        assert evaluate(rules, paris(*WEDNESDAY, hour, minute)).is_open is True

    @pytest.mark.parametrize("hour,minute", [(11, 29), (13, 31), (18, 29), (20, 31)])
    def test_just_outside_bounds_is_closed(self, rules, hour, minute):
        assert evaluate(rules, paris(*WEDNESDAY, hour, minute)).is_open is False


class TestDayLevelOverrides:
    @pytest.mark.parametrize("hour", [0, 8, 12, 13, 19, 23])
    def test_monday_closed_regardless_of_hour(self, rules, hour):
        result = evaluate(rules, paris(*MONDAY, hour, 0))
        assert result.is_open is False
        assert result.reason == ReasonCode.WEEKLY_CLOSED_DAY
        assert "Monday" in result.message

    @pytest.mark.parametrize("day", [MONDAY, WEDNESDAY, SUNDAY])
    @pytest.mark.parametrize("hour", [0, 12, 19])
    def test_force_close_wins_everywhere(self, rules, day, hour):
        rules = rules.model_copy(update={"force_close": True})
        result = evaluate(rules, paris(*day, hour, 0))
        assert result.is_open is False
        assert result.reason == ReasonCode.MANUAL_OVERRIDE
        assert result.next_open_time is None

    def test_force_close_uses_operator_message(self, rules):
        rules = rules.model_copy(update={"force_close": True, "closed_message": "Back on Friday!"})
        result = evaluate(rules, paris(*WEDNESDAY, 12, 0))
        assert result.message.startswith("Back on Friday!")

    @pytest.mark.parametrize("hour", [0, 12, 19, 23])
    def test_special_closing(self, rules, hour):
        rules = rules.model_copy(update={
            "special_closings": [SpecialClosing(date=date(*WEDNESDAY), reason="Staff holiday")],
        })
        result = evaluate(rules, paris(*WEDNESDAY, hour, 10))
        assert result.is_open is False
        assert result.reason == ReasonCode.SPECIAL_CLOSING
        assert "Staff holiday" in result.message

    def test_special_closing_beats_weekly_closed_day(self, rules):
        rules = rules.model_copy(update={"special_closings": [SpecialClosing(date=date(*MONDAY))]})
        assert evaluate(rules, paris(*MONDAY, 12, 0)).reason == ReasonCode.SPECIAL_CLOSING

    def test_closed_messages_carry_business_hours(self, rules):
        result = evaluate(rules, paris(*MONDAY, 12, 0))
        assert format_business_hours(rules) in result.message


class TestSunday:
    def test_continuous_service(self, rules):
        assert evaluate(rules, paris(*SUNDAY, 16, 0)).is_open is True

    def test_sunday_closed_when_listed(self, rules):
        rules = rules.model_copy(update={"closed_weekdays": [0, 1]})
        result = evaluate(rules, paris(*SUNDAY, 16, 0))
        assert result.reason == ReasonCode.WEEKLY_CLOSED_DAY


class TestEdgeCases:
    def test_inverted_window_never_opens(self, rules):
        # 30 minute lunch with a 20 minute last order buffer and no preorder
        schedule = rules.weekday_schedule.model_copy(update={"lunch": TimeRange(opening=12, closing=12.5)})
        rules = rules.model_copy(update={
            "weekday_schedule": schedule,
            "preorder_minutes": 0,
            "last_order_minutes": 45,
        })
        for minute in (0, 5, 10, 15, 30):
            assert evaluate(rules, paris(*WEDNESDAY, 12, minute)).is_open is False
        # dinner still works
        assert evaluate(rules, paris(*WEDNESDAY, 19, 0)).is_open is True

    def test_utc_input_is_converted_across_dst(self, rules):
        # Saturday 10:00 UTC is 12:00 summer time in Paris
        assert evaluate(rules, datetime(2026, 10, 24, 10, 0, tzinfo=timezone.utc)).is_open is True
        # Sunday after the switch back, 10:00 UTC is 11:00 Paris: pre-order not yet open
        result = evaluate(rules, datetime(2026, 10, 25, 10, 0, tzinfo=timezone.utc))
        assert result.reason == ReasonCode.BEFORE_SERVICE
        assert evaluate(rules, datetime(2026, 10, 25, 10, 45, tzinfo=timezone.utc)).is_open is True

    def test_naive_datetime_is_local(self, rules):
        assert evaluate(rules, datetime(*WEDNESDAY, 11, 35)).is_open is True

    def test_rejects_non_datetime(self, rules):
        with pytest.raises(ValueError):
            evaluate(rules, "2026-10-21T12:00")


class TestNextOpenTime:
    def test_same_day_between_services(self, rules):
        assert next_open_time(rules, paris(*WEDNESDAY, 14, 0)) == paris(*WEDNESDAY, 18, 30)

    def test_skips_closed_monday(self, rules):
        # Sunday night -> Tuesday lunch pre-order
        assert next_open_time(rules, paris(*SUNDAY, 22, 0)) == paris(2026, 10, 27, 11, 30)

    def test_skips_special_closing(self, rules):
        rules = rules.model_copy(update={"special_closings": [SpecialClosing(date=date(2026, 10, 20))]})
        assert next_open_time(rules, paris(*MONDAY, 10, 0)) == paris(*WEDNESDAY, 11, 30)

    def test_reported_on_closed_status(self, rules):
        result = evaluate(rules, paris(*MONDAY, 10, 0))
        assert result.next_open_time == paris(2026, 10, 20, 11, 30)
        assert "20/10/2026 at 11:30" in result.message


class TestBusinessHoursText:
    def test_default_text(self, rules):
        assert format_business_hours(rules) == (
            "Tuesday-Saturday: 12h-14h / 19h-21h | Sunday: 12h-21h | Closed: Monday"
        )

    def test_half_hours_and_split_days(self, rules):
        schedule = rules.weekday_schedule.model_copy(update={"lunch": TimeRange(opening=11.5, closing=14.25)})
        rules = rules.model_copy(update={"weekday_schedule": schedule, "closed_weekdays": [1, 3]})
        assert format_business_hours(rules) == (
            "Tuesday, Thursday-Saturday: 11h30-14h15 / 19h-21h | Sunday: 12h-21h | Closed: Monday, Wednesday"
        )
