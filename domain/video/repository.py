"""
视频仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import List

from bson import ObjectId

from .entity import Video


class VideoNotFoundError(LookupError):
    """Raised by a video repository when no stored video matches."""


class VideoRepository(ABC):
    """视频仓储抽象接口"""

    @abstractmethod
    async def get(self, video_id: ObjectId) -> Video:
        """Raises ``VideoNotFoundError`` when ``video_id`` is unknown."""

    @abstractmethod
    async def list(self, limit: int = 0, skip: int = 0) -> List[Video]:
        """Videos ordered by id. ``limit=0`` means no limit."""

    @abstractmethod
    async def create(self, video: Video) -> ObjectId:
        """Persist a new video and return its id."""

    @abstractmethod
    async def update(self, video: Video) -> None:
        """Raises ``VideoNotFoundError`` when ``video.id`` is unknown."""

    @abstractmethod
    async def delete(self, video_id: ObjectId) -> None:
        """Raises ``VideoNotFoundError`` when ``video_id`` is unknown."""
