from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import ORMExecuteState, Session, declarative_base, with_loader_criteria
from sitecms.config import settings
import logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def utcnow() -> datetime:
    """Naive UTC timestamp; audit columns are TIMESTAMP WITHOUT TIME ZONE."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Environment-based configurations
if DATABASE_URL.startswith("sqlite"):
    # SQLite picks its own pool class; pool sizing arguments are rejected
    engine = create_async_engine(DATABASE_URL, echo=settings.debug)
elif settings.environment == "production":
    engine = create_async_engine(
        DATABASE_URL,
        pool_size=20,
        max_overflow=50,
        pool_timeout=60,
        pool_recycle=1800,
    )
else:
    engine = create_async_engine(
        DATABASE_URL,
        echo=settings.debug,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
    )

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


class AuditMixin:
    """Audit columns shared by every persisted entity."""

    created_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(String(255), nullable=True)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow)
    updated_by = Column(String(255), nullable=True)


class SoftDeleteMixin:
    """
    Rows are flagged instead of removed.

    Every ORM SELECT issued through a Session hides flagged rows (see
    `_exclude_soft_deleted`). Pass ``execution_options(include_deleted=True)``
    to see them, e.g. for cleanup jobs.
    """

    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    def mark_deleted(self, actor: str | None = None) -> None:
        self.is_deleted = True
        self.updated_at = utcnow()
        self.updated_by = actor


@event.listens_for(Session, "do_orm_execute")
def _exclude_soft_deleted(execute_state: ORMExecuteState) -> None:
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.execution_options.get("include_deleted", False)
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                SoftDeleteMixin,
                lambda cls: cls.is_deleted.is_(False),
                include_aliases=True,
            )
        )


async def get_db():
    logger.debug("Opening database session...")
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error("Database session error: %s", e)
            await db.rollback()
            raise
