from storefront.schemas.business_rules import BusinessRules, TimeRange, WeekdaySchedule


def default_rules() -> BusinessRules:
    """hard-coded first boot configuration: Tue-Sat lunch and dinner, Sunday all day, closed Monday."""
    return BusinessRules(
        force_close=False,
        closed_message="",
        special_closings=[],
        weekday_schedule=WeekdaySchedule(
            lunch=TimeRange(opening=12, closing=14),
            dinner=TimeRange(opening=19, closing=21),
        ),
        sunday_schedule=TimeRange(opening=12, closing=21),
        closed_weekdays=[1],
        preorder_minutes=30,
        last_order_minutes=30,
        last_updated=None,
        updated_by="system",
    )
