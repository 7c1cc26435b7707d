from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from wecare.core.config import settings

SNAPSHOT_ISOLATION_LEVEL = "REPEATABLE READ"


def configure_sqlite(engine: AsyncEngine) -> AsyncEngine:
    """Make SQLite behave transactionally for this app.

    The driver's implicit transaction handling is disabled and BEGIN is
    emitted when SQLAlchemy starts a transaction, so reads inside one
    transaction share one snapshot. Foreign keys are enforced, and WAL
    journaling lets writers commit while a read snapshot is open.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# Check if using SQLite
is_sqlite = "sqlite" in settings.DATABASE_URL.lower()

if is_sqlite:
    engine = configure_sqlite(create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False}
    ))
else:
    engine = create_async_engine(
        settings.DATABASE_URL,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG
    )

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Base model
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session"""
    async with AsyncSessionLocal() as db:
        yield db


@asynccontextmanager
async def snapshot(db: AsyncSession):
    """Run a group of reads against one consistent snapshot.

    Outside SQLite the transaction runs at REPEATABLE READ, since the default
    READ COMMITTED takes a new snapshot per statement. Joins the session's
    transaction when one is already open; its isolation is then the caller's.
    """
    if db.in_transaction():
        yield db
        return

    async with db.begin():
        if db.get_bind().dialect.name != "sqlite":
            # Must run before the first statement of the transaction
            await db.connection(execution_options={"isolation_level": SNAPSHOT_ISOLATION_LEVEL})
        yield db


async def init_db():
    """Initialize database tables"""
    # Register models on Base.metadata
    import wecare.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections"""
    await engine.dispose()
