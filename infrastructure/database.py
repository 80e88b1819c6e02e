"""
数据库配置和连接管理 (MongoDB / motor)
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from core.config import settings
from core.logging_config import get_logger


logger = get_logger(__name__)

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the process-wide Mongo client, creating it on first use.

    motor connects lazily, so this never blocks on the network.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongo.url,
            serverSelectionTimeoutMS=settings.mongo.server_selection_timeout_ms,
            uuidRepresentation="standard",
            tz_aware=True,
        )
        logger.info("mongo_client_created", database=settings.mongo.database)
    return _client


def get_database() -> AsyncIOMotorDatabase:
    return get_client()[settings.mongo.database]


async def ensure_indexes() -> None:
    """创建查询所需的索引（幂等）"""
    db = get_database()
    await db[settings.mongo.comment_collection].create_index([("video_id", 1), ("created_at", -1)])


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("mongo_client_closed")
