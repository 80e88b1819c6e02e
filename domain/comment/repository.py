"""
评论仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from .entity import Comment


class CommentNotFoundError(LookupError):
    """Raised by a comment repository when no stored comment matches."""


class CommentRepository(ABC):
    """评论仓储抽象接口"""

    @abstractmethod
    async def list_by_video_id(self, video_id: str, limit: int = 0, offset: int = 0) -> List[Comment]:
        """Comments of one video, newest first. ``limit=0`` means no limit."""

    @abstractmethod
    async def create(self, comment: Comment) -> UUID:
        """Persist a new comment and return the id storage assigned to it."""

    @abstractmethod
    async def update(self, comment: Comment) -> None:
        """Replace the content of an existing comment.

        ``comment`` is refreshed in place from the stored document.
        Raises ``CommentNotFoundError`` when ``comment.id`` is unknown.
        """

    @abstractmethod
    async def delete(self, comment_id: UUID) -> None:
        """Raises ``CommentNotFoundError`` when ``comment_id`` is unknown."""

    @abstractmethod
    async def delete_by_video_id(self, video_id: str) -> None:
        """Remove every comment of a video; removing none is not an error."""
