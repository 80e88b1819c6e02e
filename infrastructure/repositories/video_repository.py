"""
视频仓储实现 - 使用 MongoDB (motor) 实现数据访问
"""
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING

from domain.video.entity import Video
from domain.video.repository import VideoNotFoundError, VideoRepository
from core.logging_config import get_logger


logger = get_logger(__name__)


class MongoVideoRepository(VideoRepository):
    """视频仓储的 MongoDB 实现"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def get(self, video_id: ObjectId) -> Video:
        doc = await self.collection.find_one({"_id": video_id})
        if doc is None:
            logger.warning("video_not_found", video_id=str(video_id), op="get")
            raise VideoNotFoundError(str(video_id))
        return Video.from_document(doc)

    async def list(self, limit: int = 0, skip: int = 0) -> List[Video]:
        cursor = (
            self.collection.find({})
            .sort("_id", ASCENDING)
            .skip(max(0, skip))
            .limit(max(0, limit))
        )
        docs = await cursor.to_list(length=None)
        return [Video.from_document(doc) for doc in docs]

    async def create(self, video: Video) -> ObjectId:
        now = datetime.now(timezone.utc)
        video.id = video.id or ObjectId()
        video.created_at = now
        video.updated_at = now
        result = await self.collection.insert_one(video.to_document())
        logger.info("video_created", video_id=str(result.inserted_id))
        return result.inserted_id

    async def update(self, video: Video) -> None:
        video.updated_at = datetime.now(timezone.utc)
        doc = video.to_document()
        doc.pop("_id", None)
        doc.pop("created_at", None)
        result = await self.collection.update_one({"_id": video.id}, {"$set": doc})
        if result.matched_count == 0:
            logger.warning("video_not_found", video_id=str(video.id), op="update")
            raise VideoNotFoundError(str(video.id))
        logger.info("video_updated", video_id=str(video.id))

    async def delete(self, video_id: ObjectId) -> None:
        result = await self.collection.delete_one({"_id": video_id})
        if result.deleted_count == 0:
            logger.warning("video_not_found", video_id=str(video_id), op="delete")
            raise VideoNotFoundError(str(video_id))
        logger.info("video_deleted", video_id=str(video_id))
