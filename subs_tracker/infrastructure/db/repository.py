"""
SQLAlchemy implementation of SubscriptionRepository
"""
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from subs_tracker.application.errors import StorageError, SubscriptionNotFoundError
from subs_tracker.domain.subscription import SubFilter, Subscription
from subs_tracker.infrastructure.db.models import SubscriptionModel


def _to_entity(m: SubscriptionModel) -> Subscription:
    return Subscription(
        id=m.id,
        user_id=m.user_id,
        service_name=m.service_name,
        cost=m.cost,
        date_from=m.start_date,
        date_to=m.end_date,
    )


class SqlSubscriptionRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def save(self, sub: Subscription) -> Subscription:
        m = SubscriptionModel(
            user_id=sub.user_id,
            service_name=sub.service_name,
            cost=sub.cost,
            start_date=sub.date_from,
            end_date=sub.date_to,
        )
        try:
            self.db.add(m)
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"save subscription: {exc}") from exc
        return _to_entity(m)

    def update(self, sub: Subscription) -> None:
        m = self._get_model(sub.id)
        m.user_id = sub.user_id
        m.service_name = sub.service_name
        m.cost = sub.cost
        m.start_date = sub.date_from
        m.end_date = sub.date_to
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"update subscription id={sub.id}: {exc}") from exc

    def delete(self, sub_id: int) -> None:
        m = self._get_model(sub_id)
        try:
            self.db.delete(m)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"delete subscription id={sub_id}: {exc}") from exc

    def get_by_id(self, sub_id: int) -> Subscription:
        return _to_entity(self._get_model(sub_id))

    def _get_model(self, sub_id: int) -> SubscriptionModel:
        try:
            m = self.db.query(SubscriptionModel).filter(
                SubscriptionModel.id == sub_id,
            ).first()
        except SQLAlchemyError as exc:
            raise StorageError(f"get subscription id={sub_id}: {exc}") from exc
        if not m:
            raise SubscriptionNotFoundError(f"subscription {sub_id} not found")
        return m

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_by_filter(self, flt: SubFilter) -> list[Subscription]:
        try:
            rows = self._filtered(flt).order_by(
                SubscriptionModel.start_date,
                SubscriptionModel.service_name,
                SubscriptionModel.id,
            ).offset(flt.offset).limit(flt.limit).all()
        except SQLAlchemyError as exc:
            raise StorageError(f"list subscriptions by filter: {exc}") from exc
        return [_to_entity(m) for m in rows]

    def fetch_matching(self, flt: SubFilter) -> list[Subscription]:
        try:
            rows = self._filtered(flt).all()
        except SQLAlchemyError as exc:
            raise StorageError(f"fetch matching subscriptions: {exc}") from exc
        return [_to_entity(m) for m in rows]

    def _filtered(self, flt: SubFilter) -> Query:
        q = self.db.query(SubscriptionModel)

        period = flt.period
        if period is not None and period.date_from is not None:
            # Overlap: start <= to AND (end IS NULL OR end >= from)
            q = q.filter(or_(
                SubscriptionModel.end_date.is_(None),
                SubscriptionModel.end_date >= period.date_from,
            ))
            if period.date_to is not None:
                q = q.filter(SubscriptionModel.start_date <= period.date_to)

        if flt.user_id is not None:
            q = q.filter(SubscriptionModel.user_id == flt.user_id)
        if flt.service_name is not None:
            q = q.filter(SubscriptionModel.service_name == flt.service_name)
        return q
