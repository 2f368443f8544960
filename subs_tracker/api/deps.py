"""
FastAPI dependencies (DB session, repository, content negotiation)
"""
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from subs_tracker.infrastructure.db.repository import SqlSubscriptionRepository
from subs_tracker.infrastructure.db.session import get_db as _get_db


# Re-export get_db для удобства
get_db = _get_db


def get_subscription_repository(db: Session = Depends(get_db)) -> SqlSubscriptionRepository:
    """Repository bound to the request's DB session"""
    return SqlSubscriptionRepository(db)


def accepts_json(header: str | None) -> bool:
    """True if the Accept header allows application/json"""
    if not header or header.strip() == "*/*":
        return True
    for part in header.split(","):
        media_type = part.split(";", 1)[0].strip()
        if media_type in ("application/json", "*/*", "application/*"):
            return True
    return False


def require_accept_json(request: Request) -> None:
    """
    Отклонить запрос, если клиент не принимает JSON

    Raises:
        HTTPException(406)
    """
    if not accepts_json(request.headers.get("accept")):
        raise HTTPException(
            status_code=status.HTTP_406_NOT_ACCEPTABLE,
            detail="Accept application/json only",
        )


def require_json_content(request: Request) -> None:
    """
    Отклонить тело запроса не в JSON (пустой Content-Type допускается)

    Raises:
        HTTPException(415)
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type and media_type != "application/json":
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Use application/json",
        )
