"""
Alembic environment: DATABASE_URL from Settings, metadata from the ORM models
"""
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

from subs_tracker.config import get_settings
from subs_tracker.infrastructure.db.session import Base
from subs_tracker.infrastructure.db import models  # noqa: F401  (registers tables)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    return get_settings().get_sqlalchemy_url()


def run_migrations_offline() -> None:
    """Generate SQL without a database connection."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
