import structlog

from borne_api.core.db import engine
from borne_api.models import Base

logger = structlog.get_logger(__name__)


async def init_db() -> None:
    """
    Initialize the database schema.

    Creates the station, reservation and tariff tables if they do not
    already exist. Production deployments should manage the schema with
    migrations instead.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_initialized", tables=sorted(Base.metadata.tables))
