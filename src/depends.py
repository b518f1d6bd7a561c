from typing import Optional
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.posting_locks import PostingLockRegistry
from src.app.services.region_gate import RegionGate


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores REFERENCES ... ON DELETE CASCADE unless asked per connection"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# One registry per process: every posting for a project funnels through it
posting_locks = PostingLockRegistry()
region_gate = RegionGate()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_posting_locks() -> PostingLockRegistry:
    return posting_locks


def get_region_gate() -> RegionGate:
    return region_gate


def get_caller_region(request: Request) -> Optional[str]:
    return request.headers.get(ApplicationConfig.REGION_HEADER)


def get_caller_actor(request: Request) -> Optional[str]:
    return request.headers.get(ApplicationConfig.ACTOR_HEADER)


def get_client_origin(request: Request) -> Optional[str]:
    return request.client.host if request.client else None
