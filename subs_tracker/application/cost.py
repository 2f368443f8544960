"""
Cost aggregation over a bounded period.

Каждая подписка вносит cost за каждый календарный месяц пересечения
своего срока действия с запрошенным периодом (обе границы включительно).
Подписка без date_to считается активной до конца периода.
"""
from collections.abc import Iterable, Iterator
from datetime import date

from subs_tracker.application.errors import InvalidPeriodError
from subs_tracker.domain.subscription import Period, Subscription, add_months, months_inclusive


def require_bounded(period: Period | None) -> Period:
    if period is None or not period.is_bounded:
        raise InvalidPeriodError("cost query requires both period bounds")
    return period


def overlaps(sub: Subscription, period: Period) -> bool:
    """Same predicate the store uses to pre-filter records."""
    if sub.date_from > period.date_to:
        return False
    return sub.is_open_ended or sub.date_to >= period.date_from


def overlap_window(sub: Subscription, period: Period) -> tuple[date, date] | None:
    """Inclusive (from, to) months billed for sub inside period, or None."""
    if not overlaps(sub, period):
        return None
    effective_from = max(sub.date_from, period.date_from)
    end = period.date_to if sub.is_open_ended else sub.date_to
    effective_to = min(end, period.date_to)
    if effective_from > effective_to:
        return None
    return effective_from, effective_to


def subscription_cost(sub: Subscription, period: Period) -> int:
    window = overlap_window(sub, period)
    if window is None:
        return 0
    return sub.cost * months_inclusive(*window)


def iter_billed_months(sub: Subscription, period: Period) -> Iterator[date]:
    """Step month by month through the overlap window (1st of each month)."""
    window = overlap_window(sub, period)
    if window is None:
        return
    current, last = window
    while current <= last:
        yield current
        current = add_months(current, 1)


def aggregate_cost(subscriptions: Iterable[Subscription], period: Period | None) -> int:
    """
    Total cost of subscriptions billed within period

    Args:
        subscriptions: records already matching the non-temporal filter
        period: month-truncated window, both bounds required

    Raises:
        InvalidPeriodError: period missing or unbounded
    """
    period = require_bounded(period)
    return sum(subscription_cost(sub, period) for sub in subscriptions)
