"""Database connection and session management.

The database layer owns the SQLAlchemy async engine and hands out SQLModel
async sessions. Repositories receive the manager and open one session or one
transaction per operation.

Architecture:
- DatabaseManager: Engine lifecycle, session and transaction scopes, schema setup
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from gatehouse.core.config import DatabaseConfig
from gatehouse.core.errors import InfrastructureError
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)

HEALTH_CHECK_QUERY = "SELECT 1"


class DatabaseManager:
    """
    Database manager with engine lifecycle management.

    Usage Example:
        manager = DatabaseManager(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
        await manager.create_all()

        async with manager.transaction() as session:
            session.add(model)

        await manager.dispose()
    """

    def __init__(self, config: DatabaseConfig, engine: AsyncEngine | None = None):
        """
        Initialize database manager.

        Args:
            config: Database configuration
            engine: Pre-built engine, mostly for tests
        """
        self.config = config
        self.engine = engine or self._create_engine(config)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("DatabaseManager initialized", config=config.to_dict())

    @staticmethod
    def _create_engine(config: DatabaseConfig) -> AsyncEngine:
        if config.is_sqlite:
            # In-memory SQLite needs a single shared connection.
            return create_async_engine(
                config.url,
                echo=config.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_async_engine(
            config.url,
            echo=config.echo,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=config.pool_pre_ping,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session; roll back if the block raises."""
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session inside a transaction committed on exit."""
        async with self._session_factory() as session, session.begin():
            yield session

    async def create_all(self) -> None:
        """Create all tables registered on the SQLModel metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database schema created")

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text(HEALTH_CHECK_QUERY))
        except SQLAlchemyError as e:
            logger.exception("Database health check failed", error=str(e))
            return False
        return True

    async def dispose(self) -> None:
        """Dispose the engine and its connection pool."""
        try:
            await self.engine.dispose()
        except SQLAlchemyError as e:
            raise InfrastructureError(message="Failed to dispose database engine", cause=e) from e
        logger.info("Database engine disposed")
