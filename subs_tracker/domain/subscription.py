"""
Subscription domain entities: subscription record, query period and filter.

Все даты: календарные месяцы, представленные первым числом месяца.
"""
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Subscription:
    """
    Подписка пользователя на сервис

    - cost списывается один раз за каждый активный календарный месяц
    - date_from / date_to включительные, date_to=None означает подписку без окончания
    """
    id: int
    user_id: UUID
    service_name: str
    cost: int
    date_from: date
    date_to: date | None = None

    @property
    def is_open_ended(self) -> bool:
        return self.date_to is None


@dataclass(frozen=True)
class Period:
    """Query window, both bounds inclusive. date_to=None means unbounded."""
    date_from: date | None
    date_to: date | None = None

    @property
    def is_bounded(self) -> bool:
        return self.date_from is not None and self.date_to is not None


@dataclass(frozen=True)
class SubFilter:
    """Common filter for listing and cost aggregation."""
    user_id: UUID | None = None
    service_name: str | None = None
    period: Period | None = None
    limit: int = 0
    offset: int = 0


def month_start(value: date | datetime | None) -> date | None:
    """Truncate a date/datetime to the first day of its month."""
    if value is None:
        return None
    return date(value.year, value.month, 1)


def add_months(d: date, n: int) -> date:
    """Add n months to a date (result is always the 1st of the month)."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    return date(year, month, 1)


def months_inclusive(start: date, end: date) -> int:
    """Number of calendar months in [start, end], both ends inclusive."""
    return (end.year - start.year) * 12 + (end.month - start.month) + 1
