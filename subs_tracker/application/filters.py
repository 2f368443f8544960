"""
Filter normalization for subscription listing and cost queries.
"""
from dataclasses import replace

from subs_tracker.application.errors import InvalidPaginationError, InvalidPeriodError
from subs_tracker.domain.subscription import Period, SubFilter, month_start

# Page size used when the caller gives no (or a non-positive) limit
DEFAULT_LIST_LIMIT = 50
# Hard ceiling: larger limits are clamped, never rejected
MAX_LIST_LIMIT = 200


def normalize_period(period: Period) -> Period:
    """Truncate both bounds to month start and check their order."""
    date_from = month_start(period.date_from)
    date_to = month_start(period.date_to)
    if date_from is None:
        raise InvalidPeriodError("empty period bound")
    if date_to is not None and date_to < date_from:
        raise InvalidPeriodError("to < from")
    return Period(date_from=date_from, date_to=date_to)


def normalize_limit(limit: int) -> int:
    if limit <= 0:
        return DEFAULT_LIST_LIMIT
    if limit > MAX_LIST_LIMIT:
        return MAX_LIST_LIMIT
    return limit


def normalize_filter(flt: SubFilter) -> SubFilter:
    """
    Validate and canonicalize a filter

    Returns a new SubFilter; the input is left untouched.

    Raises:
        InvalidPeriodError: period without start or with end before start
        InvalidPaginationError: negative offset
    """
    period = normalize_period(flt.period) if flt.period is not None else None

    if flt.offset < 0:
        raise InvalidPaginationError("offset must be >= 0")

    return replace(flt, period=period, limit=normalize_limit(flt.limit))
