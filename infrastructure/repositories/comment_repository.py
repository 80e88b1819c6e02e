"""
评论仓储实现 - 使用 MongoDB (motor) 实现数据访问
"""
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from domain.comment.entity import Comment
from domain.comment.repository import CommentNotFoundError, CommentRepository
from core.logging_config import get_logger


logger = get_logger(__name__)


class MongoCommentRepository(CommentRepository):
    """评论仓储的 MongoDB 实现"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def list_by_video_id(self, video_id: str, limit: int = 0, offset: int = 0) -> List[Comment]:
        cursor = (
            self.collection.find({"video_id": video_id})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .skip(max(0, offset))
            .limit(max(0, limit))
        )
        docs = await cursor.to_list(length=None)
        return [Comment.from_document(doc) for doc in docs]

    async def create(self, comment: Comment) -> UUID:
        """创建评论"""
        comment_id = comment.assign_identity()
        await self.collection.insert_one(comment.to_document())
        logger.info("comment_created", comment_id=str(comment_id), video_id=comment.video_id)
        return comment_id

    async def update(self, comment: Comment) -> None:
        """更新评论内容"""
        doc = await self.collection.find_one_and_update(
            {"_id": str(comment.id)},
            {"$set": {"content": comment.content, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            logger.warning("comment_not_found", comment_id=str(comment.id), op="update")
            raise CommentNotFoundError(str(comment.id))

        stored = Comment.from_document(doc)
        comment.video_id = stored.video_id
        comment.content = stored.content
        comment.created_at = stored.created_at
        comment.updated_at = stored.updated_at
        logger.info("comment_updated", comment_id=str(comment.id))

    async def delete(self, comment_id: UUID) -> None:
        """删除评论"""
        result = await self.collection.delete_one({"_id": str(comment_id)})
        if result.deleted_count == 0:
            logger.warning("comment_not_found", comment_id=str(comment_id), op="delete")
            raise CommentNotFoundError(str(comment_id))
        logger.info("comment_deleted", comment_id=str(comment_id))

    async def delete_by_video_id(self, video_id: str) -> None:
        result = await self.collection.delete_many({"video_id": video_id})
        logger.info("comments_deleted_by_video", video_id=video_id, deleted=result.deleted_count)
