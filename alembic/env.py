"""Alembic environment for the drafts and suggested-topics tables."""
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

from post_studio.config import settings
from post_studio.models.db_models import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata


def _database_url() -> str:
    """Sync driver URL derived from DATABASE_URL (asyncpg is for the app only)."""
    url = settings.database_url_sync
    if not (url or "").strip():
        raise ValueError(
            "DATABASE_URL is not set. Add the Supabase pooler connection string to .env, then run alembic again."
        )
    return url


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL to stdout; useful for pasting into the Supabase SQL editor."""
    _configure(url=_database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})


def run_migrations_online() -> None:
    connection: Connection | None = config.attributes.get("connection")
    if connection is not None:
        _configure(connection=connection)
        return
    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    with engine.connect() as conn:
        _configure(connection=conn)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
