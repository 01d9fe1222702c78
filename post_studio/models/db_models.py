"""SQLAlchemy models for the Supabase tables the workflow writes. Run migrations to create tables."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from post_studio.config import settings


class Base(DeclarativeBase):
    pass


class LinkedInDraftRecord(Base):
    """Row written by the generation workflow: text first, image_url when the image is ready."""

    __tablename__ = settings.drafts_table

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flow_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)


class SuggestedTopic(Base):
    """Topic/audience pair offered in the form dropdown."""

    __tablename__ = "suggested_topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    audience: Mapped[str] = mapped_column(Text, nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, default=False)


# Async engine and session factory
_engine = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_db() -> async_sessionmaker[AsyncSession]:
    """Create async engine and session factory. Call once at app startup."""
    global _engine, _session_factory
    if _session_factory is not None:
        return _session_factory
    if not (settings.database_url or "").strip():
        raise ValueError(
            "DATABASE_URL is not set. Add your Supabase connection string to .env. "
            "Supabase Dashboard → Settings → Database → Connection string (URI); use postgresql+asyncpg://..."
        )
    _engine = create_async_engine(
        settings.database_url,
        echo=settings.log_level.upper() == "DEBUG",
    )
    _session_factory = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def create_tables() -> None:
    """Create missing tables at startup. Alembic owns the schema in production (Realtime publication included)."""
    init_db()
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    """Close pooled connections. Call at app shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
