"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type

from sqlalchemy import BigInteger, CheckConstraint, Date, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from subs_tracker.infrastructure.db.session import Base


class SubscriptionModel(Base):
    """Subscription of a user to a paid service, billed monthly"""
    __tablename__ = "subscriptions"

    # SQLite autoincrements only INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    service_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    cost: Mapped[int] = mapped_column(Integer, nullable=False)  # per month

    start_date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)  # 1st of month
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True, index=True)  # inclusive, NULL = open

    __table_args__ = (
        CheckConstraint("cost >= 0", name="ck_subscriptions_cost"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date", name="ck_subscriptions_period",
        ),
    )
