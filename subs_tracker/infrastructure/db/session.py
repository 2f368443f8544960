"""
Engine and session wiring for the subscriptions store

PostgreSQL (psycopg 3) в проде; SQLite-URL допускается для локального запуска.
"""
import logging

import psycopg
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from subs_tracker.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the subscriptions ORM models"""
    pass


_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def build_engine(settings: Settings) -> Engine:
    """
    Создать engine по настройкам

    - postgres: pool_pre_ping, чтобы переживать рестарты БД
    - sqlite: один общий коннект (in-memory база живёт, пока жив engine)
    """
    url = settings.get_sqlalchemy_url()
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=settings.DEBUG, pool_pre_ping=True)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings)
        logger.info("DB engine created: dialect=%s", _engine.dialect.name)
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def dispose_engine() -> None:
    """Закрыть пул и сбросить синглтоны (shutdown, смена настроек в тестах)"""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def get_db() -> Session:
    """FastAPI dependency: one session per request, closed afterwards"""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    Readiness check

    Для PostgreSQL ходим напрямую через psycopg, мимо пула SQLAlchemy,
    чтобы проверка не зависела от состояния пула.

    Raises:
        psycopg.OperationalError / sqlalchemy.exc.OperationalError: БД недоступна
    """
    settings = get_settings()
    if settings.get_sqlalchemy_url().startswith("sqlite"):
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return
    with psycopg.connect(settings.get_psycopg_dsn(), connect_timeout=3) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
