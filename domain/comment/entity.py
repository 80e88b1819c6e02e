"""
评论领域实体
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class Comment:
    """A comment attached to a video.

    ``video_id`` is the hex ObjectID of the owning video. Only ``content`` is
    mutable after creation.
    """

    id: Optional[UUID] = None
    video_id: str = ""
    content: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)

    def assign_identity(self) -> UUID:
        """Give a new comment its id and timestamps before it is persisted."""
        now = datetime.now(timezone.utc)
        self.id = uuid4()
        self.created_at = now
        self.updated_at = now
        return self.id

    def edit(self, content: str) -> None:
        self.content = content
        self.updated_at = datetime.now(timezone.utc)

    def to_document(self) -> dict:
        return {
            "_id": str(self.id),
            "video_id": self.video_id,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Comment":
        return cls(
            id=UUID(str(doc["_id"])),
            video_id=doc.get("video_id", ""),
            content=doc.get("content", ""),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

