from datetime import date, time

import pytest

from storefront.schemas.business_rules import SpecialClosing, TimeRange
from storefront.services.business import generate_slots

from conftest import paris


class TestSlotGrid:
    def test_sunday_morning_respects_preparation_time(self, rules):
        slots = generate_slots(rules, date(2026, 10, 25), paris(2026, 10, 25, 11, 50))
        assert slots[0] == time(12, 30)
        assert slots[-1] == time(21, 0)

    def test_future_weekday_lists_both_services(self, rules):
        slots = generate_slots(rules, date(2026, 10, 21), paris(2026, 10, 20, 18, 0))
        assert len(slots) == 18
        assert slots[:2] == [time(12, 0), time(12, 15)]
        assert time(14, 0) in slots
        assert time(14, 15) not in slots
        assert time(19, 0) in slots
        assert slots[-1] == time(21, 0)

    def test_slots_are_sorted_and_unique(self, rules):
        slots = generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 20, 9, 0), step_minutes=10)
        assert slots == sorted(set(slots))

    def test_same_inputs_same_slots(self, rules):
        now = paris(2026, 10, 21, 12, 7)
        first = generate_slots(rules, date(2026, 10, 21), now)
        assert generate_slots(rules, date(2026, 10, 21), now) == first

    def test_grid_is_anchored_at_midnight(self, rules):
        schedule = rules.weekday_schedule.model_copy(update={"lunch": TimeRange(opening=11.75, closing=14.25)})
        rules = rules.model_copy(update={"weekday_schedule": schedule})
        slots = generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 20, 9, 0), step_minutes=30)
        assert slots[0] == time(12, 0)
        assert time(14, 0) in slots
        assert time(14, 30) not in slots

    def test_started_minute_counts_as_gone(self, rules):
        day = date(2026, 10, 25)
        on_the_minute = generate_slots(rules, day, paris(2026, 10, 25, 11, 45), step_minutes=5)
        with_seconds = generate_slots(rules, day, paris(2026, 10, 25, 11, 45, 30), step_minutes=5)
        assert on_the_minute[0] == time(12, 15)
        assert with_seconds[0] == time(12, 20)

    def test_window_inverted_by_buffers_offers_nothing(self, rules):
        # 12:00-13:00 lunch with a 90 minute last order buffer never opens
        schedule = rules.weekday_schedule.model_copy(update={"lunch": TimeRange(opening=12, closing=13)})
        rules = rules.model_copy(update={
            "weekday_schedule": schedule,
            "preorder_minutes": 0,
            "last_order_minutes": 90,
        })
        slots = generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 10, 0))
        assert all(s >= time(19, 0) for s in slots)
        assert slots[0] == time(19, 0)

    def test_late_today_has_no_slots_left(self, rules):
        assert generate_slots(rules, date(2026, 10, 21), paris(2026, 10, 21, 20, 45)) == []

    def test_prep_time_only_applies_to_today(self, rules):
        slots = generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 23, 55), min_prep_minutes=120)
        assert slots[0] == time(12, 0)


class TestClosedDays:
    def test_weekly_closed_day(self, rules):
        assert generate_slots(rules, date(2026, 10, 26), paris(2026, 10, 21, 10, 0)) == []

    def test_special_closing(self, rules):
        rules = rules.model_copy(update={"special_closings": [SpecialClosing(date=date(2026, 10, 22))]})
        assert generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 10, 0)) == []

    def test_force_close(self, rules):
        rules = rules.model_copy(update={"force_close": True})
        assert generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 10, 0)) == []

    def test_past_date(self, rules):
        assert generate_slots(rules, date(2026, 10, 20), paris(2026, 10, 21, 10, 0)) == []


class TestArguments:
    @pytest.mark.parametrize("step", [0, -15])
    def test_step_must_be_positive(self, rules, step):
        with pytest.raises(ValueError):
            generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 10, 0), step_minutes=step)

    def test_negative_prep_rejected(self, rules):
        with pytest.raises(ValueError):
            generate_slots(rules, date(2026, 10, 22), paris(2026, 10, 21, 10, 0), min_prep_minutes=-1)
