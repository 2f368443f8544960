"""
Subscription API endpoints
"""
import logging
from datetime import date, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field, field_validator

from subs_tracker.api.deps import (
    get_subscription_repository, require_accept_json, require_json_content,
)
from subs_tracker.application.errors import (
    StorageError, SubscriptionError, SubscriptionNotFoundError,
)
from subs_tracker.application.subscriptions import (
    DeleteSubscriptionUseCase, GetSubscriptionUseCase, ListSubscriptionsUseCase,
    RegisterSubscriptionUseCase, SubscriptionRepository, SubscriptionsCostUseCase,
    UpdateSubscriptionUseCase,
)
from subs_tracker.domain.subscription import Period, SubFilter, Subscription

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/subscriptions",
    tags=["subscriptions"],
    dependencies=[Depends(require_accept_json)],
)

# MM-YYYY: основной формат, остальные принимаются для совместимости
MONTH_YEAR_FORMATS = ("%m-%Y", "%Y-%m-%d", "%Y-%m")


def parse_month_year(value: str) -> date:
    """
    Разобрать дату в одном из форматов MONTH_YEAR_FORMATS и выровнять
    по первому числу месяца

    Raises:
        ValueError: строка не подходит ни под один формат
    """
    value = value.strip()
    if not value:
        raise ValueError("empty date value")
    for fmt in MONTH_YEAR_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return date(parsed.year, parsed.month, 1)
    raise ValueError(f"invalid date {value!r}, expected MM-YYYY")


def format_month_year(value: date | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%m-%Y")


# === Request/Response models ===

class SubscriptionInput(BaseModel):
    service_name: str = Field(min_length=1, max_length=100)
    cost: int = Field(gt=0)  # в месяц
    user_id: UUID
    start_date: date
    end_date: date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        """Даты приходят строкой MM-YYYY (или YYYY-MM / YYYY-MM-DD)"""
        if v is None or isinstance(v, date):
            return v
        if isinstance(v, str):
            if not v.strip():
                return None
            return parse_month_year(v)
        raise ValueError("date must be a string")

    def to_entity(self, sub_id: int = 0) -> Subscription:
        return Subscription(
            id=sub_id,
            user_id=self.user_id,
            service_name=self.service_name,
            cost=self.cost,
            date_from=self.start_date,
            date_to=self.end_date,
        )


class SubscriptionResponse(BaseModel):
    id: int
    service_name: str
    cost: int
    user_id: UUID
    start_date: str  # MM-YYYY
    end_date: str | None = None

    @classmethod
    def from_entity(cls, sub: Subscription) -> "SubscriptionResponse":
        return cls(
            id=sub.id,
            service_name=sub.service_name,
            cost=sub.cost,
            user_id=sub.user_id,
            start_date=format_month_year(sub.date_from),
            end_date=format_month_year(sub.date_to),
        )


class SubscriptionsCostResponse(BaseModel):
    total: int


# === Helper functions ===

def _http_error(exc: SubscriptionError) -> HTTPException:
    """Translate use-case errors to HTTP statuses"""
    if isinstance(exc, SubscriptionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    if isinstance(exc, StorageError):
        logger.error("Storage failure: %s", exc, exc_info=exc)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error")
    return HTTPException(status_code=422, detail=str(exc))


def subscription_filter(
    user_id: str | None = Query(None),
    service_name: str | None = Query(None),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
    limit: int | None = Query(None, ge=0),
    offset: int | None = Query(None, ge=0),
) -> SubFilter:
    """Собрать SubFilter из query-параметров"""
    uid = None
    if user_id and user_id.strip():
        try:
            uid = UUID(user_id.strip())
        except ValueError:
            raise HTTPException(status_code=422, detail="uuid invalid")

    svc = service_name.strip() if service_name else None

    period = None
    start_raw = (start_date or "").strip()
    end_raw = (end_date or "").strip()
    if start_raw or end_raw:
        try:
            date_from = parse_month_year(start_raw) if start_raw else None
        except ValueError:
            raise HTTPException(status_code=422, detail="invalid period: from")
        try:
            date_to = parse_month_year(end_raw) if end_raw else None
        except ValueError:
            raise HTTPException(status_code=422, detail="invalid period: to")
        period = Period(date_from=date_from, date_to=date_to)

    return SubFilter(
        user_id=uid,
        service_name=svc or None,
        period=period,
        limit=limit or 0,
        offset=offset or 0,
    )


# === Endpoints ===

@router.get("", response_model=list[SubscriptionResponse])
def list_subscriptions(
    flt: SubFilter = Depends(subscription_filter),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Список подписок по фильтру (с пагинацией)"""
    try:
        subs = ListSubscriptionsUseCase(repo).execute(flt)
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return [SubscriptionResponse.from_entity(s) for s in subs]


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_content)],
)
def create_subscription(
    req: SubscriptionInput,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Создать подписку"""
    try:
        created = RegisterSubscriptionUseCase(repo).execute(req.to_entity())
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return SubscriptionResponse.from_entity(created)


@router.options("", status_code=status.HTTP_204_NO_CONTENT)
def subscriptions_options():
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Allow": "POST,OPTIONS,GET"})


# Declared before /{subscription_id} so "cost" is not taken for an id
@router.get("/cost", response_model=SubscriptionsCostResponse)
def subscriptions_cost(
    start_date: str = Query(...),
    end_date: str = Query(...),
    flt: SubFilter = Depends(subscription_filter),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Суммарная стоимость подписок за период (обе границы включительно)"""
    if not start_date.strip():
        raise HTTPException(status_code=422, detail="invalid start_date")
    if not end_date.strip():
        raise HTTPException(status_code=422, detail="invalid end_date")

    try:
        total = SubscriptionsCostUseCase(repo).execute(flt)
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return SubscriptionsCostResponse(total=total)


@router.options("/cost", status_code=status.HTTP_204_NO_CONTENT)
def subscriptions_cost_options():
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Allow": "GET,OPTIONS"})


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: int,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    try:
        sub = GetSubscriptionUseCase(repo).execute(subscription_id)
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return SubscriptionResponse.from_entity(sub)


@router.put(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    dependencies=[Depends(require_json_content)],
)
def update_subscription(
    subscription_id: int,
    req: SubscriptionInput,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Полностью заменить данные подписки"""
    try:
        updated = UpdateSubscriptionUseCase(repo).execute(req.to_entity(subscription_id))
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return SubscriptionResponse.from_entity(updated)


@router.delete("/{subscription_id}", response_model=SubscriptionResponse)
def delete_subscription(
    subscription_id: int,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
):
    """Удалить подписку, вернуть удалённую запись"""
    try:
        deleted = DeleteSubscriptionUseCase(repo).execute(subscription_id)
    except SubscriptionError as exc:
        raise _http_error(exc) from exc
    return SubscriptionResponse.from_entity(deleted)
