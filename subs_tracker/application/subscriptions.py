"""
Subscription use cases: CRUD подписок, выборка по фильтру и расчёт стоимости.

Use cases работают через SubscriptionRepository; реализация хранилища
(SqlSubscriptionRepository) живёт в infrastructure/db.
"""
import logging
from dataclasses import replace
from typing import Protocol

from subs_tracker.application.cost import aggregate_cost, require_bounded
from subs_tracker.application.errors import (
    InvalidIDError, InvalidPeriodError, InvalidSubscriptionError,
)
from subs_tracker.application.filters import normalize_filter
from subs_tracker.domain.subscription import SubFilter, Subscription, month_start

logger = logging.getLogger(__name__)


class SubscriptionRepository(Protocol):
    """CRUD по подпискам + выборки по фильтру."""

    def save(self, sub: Subscription) -> Subscription: ...

    def update(self, sub: Subscription) -> None: ...

    def delete(self, sub_id: int) -> None: ...

    def get_by_id(self, sub_id: int) -> Subscription: ...

    def list_by_filter(self, flt: SubFilter) -> list[Subscription]:
        """Ordered by (date_from, service_name, id), paginated."""
        ...

    def fetch_matching(self, flt: SubFilter) -> list[Subscription]:
        """Every matching record, pagination ignored."""
        ...


def validate_and_normalize(sub: Subscription) -> Subscription:
    """
    Проверить бизнес-правила и выровнять даты по началу месяца

    Raises:
        InvalidSubscriptionError: пустое название, cost <= 0, нет user_id / date_from
        InvalidPeriodError: date_to раньше date_from
    """
    service_name = (sub.service_name or "").strip()
    if not service_name:
        raise InvalidSubscriptionError("empty service_name")
    if sub.cost is None or sub.cost <= 0:
        raise InvalidSubscriptionError("cost must be > 0")
    if sub.user_id is None:
        raise InvalidSubscriptionError("empty user_id")
    if sub.date_from is None:
        raise InvalidSubscriptionError("empty start_date")

    date_from = month_start(sub.date_from)
    date_to = month_start(sub.date_to)
    if date_to is not None and date_to < date_from:
        raise InvalidPeriodError("end_date before start_date")

    return replace(sub, service_name=service_name, date_from=date_from, date_to=date_to)


def _check_id(sub_id: int | None) -> None:
    if sub_id is None or sub_id <= 0:
        raise InvalidIDError("invalid id")


# ============================================================================
# Subscriptions CRUD
# ============================================================================


class RegisterSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub: Subscription) -> Subscription:
        sub = validate_and_normalize(sub)
        created = self.repo.save(sub)
        logger.info(
            "Subscription registered: id=%s service=%s user=%s",
            created.id, created.service_name, created.user_id,
        )
        return created


class UpdateSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub: Subscription) -> Subscription:
        _check_id(sub.id)
        sub = validate_and_normalize(sub)
        self.repo.update(sub)
        logger.info("Subscription updated: id=%s", sub.id)
        return self.repo.get_by_id(sub.id)


class DeleteSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub_id: int) -> Subscription:
        """Удалить подписку и вернуть её последнее сохранённое состояние."""
        _check_id(sub_id)
        existing = self.repo.get_by_id(sub_id)
        self.repo.delete(sub_id)
        logger.info("Subscription deleted: id=%s", sub_id)
        return existing


class GetSubscriptionUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, sub_id: int) -> Subscription:
        _check_id(sub_id)
        return self.repo.get_by_id(sub_id)


# ============================================================================
# Queries
# ============================================================================


class ListSubscriptionsUseCase:
    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, flt: SubFilter) -> list[Subscription]:
        return self.repo.list_by_filter(normalize_filter(flt))


class SubscriptionsCostUseCase:
    """
    Суммарная стоимость подписок за период

    Пагинация фильтра игнорируется: сумма считается по всему набору
    подходящих подписок.
    """

    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo

    def execute(self, flt: SubFilter) -> int:
        flt = normalize_filter(flt)
        period = require_bounded(flt.period)
        subs = self.repo.fetch_matching(flt)
        total = aggregate_cost(subs, period)
        logger.debug(
            "Cost computed: %d subscriptions, period=%s..%s, total=%d",
            len(subs), period.date_from, period.date_to, total,
        )
        return total
