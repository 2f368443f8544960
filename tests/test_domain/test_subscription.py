"""
Tests for subscription domain helpers
"""
import uuid
from datetime import date, datetime, timezone

from subs_tracker.domain.subscription import (
    Period, Subscription, add_months, month_start, months_inclusive,
)


def test_month_start_truncates_date():
    assert month_start(date(2025, 8, 17)) == date(2025, 8, 1)


def test_month_start_truncates_datetime():
    value = datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc)
    assert month_start(value) == date(2025, 12, 1)


def test_month_start_passes_none():
    assert month_start(None) is None


def test_add_months_crosses_year():
    assert add_months(date(2025, 11, 1), 3) == date(2026, 2, 1)


def test_add_months_negative():
    assert add_months(date(2025, 1, 1), -1) == date(2024, 12, 1)


def test_months_inclusive_same_month():
    assert months_inclusive(date(2025, 7, 1), date(2025, 7, 1)) == 1


def test_months_inclusive_across_years():
    # 11.2024 .. 02.2025 = 4 месяца
    assert months_inclusive(date(2024, 11, 1), date(2025, 2, 1)) == 4


def test_subscription_open_ended():
    sub = Subscription(
        id=1, user_id=uuid.uuid4(), service_name="Netflix", cost=499,
        date_from=date(2025, 7, 1),
    )
    assert sub.is_open_ended


def test_period_is_bounded():
    assert Period(date(2025, 1, 1), date(2025, 2, 1)).is_bounded
    assert not Period(date(2025, 1, 1)).is_bounded
    assert not Period(None, date(2025, 2, 1)).is_bounded
