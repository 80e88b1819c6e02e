"""Domain entity describing a stored video."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class Video:
    id: Optional[ObjectId] = None
    width: int = 0
    height: int = 0
    size: int = 0
    duration: float = 0.0
    url: str = ""
    status: str = ""
    variants: dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)
        self.updated_at = _ensure_utc(self.updated_at)

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "size": self.size,
            "duration": self.duration,
            "url": self.url,
            "status": self.status,
            "variants": dict(self.variants),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Video":
        return cls(
            id=doc.get("_id"),
            width=int(doc.get("width", 0)),
            height=int(doc.get("height", 0)),
            size=int(doc.get("size", 0)),
            duration=float(doc.get("duration", 0.0)),
            url=doc.get("url", ""),
            status=doc.get("status", ""),
            variants=dict(doc.get("variants") or {}),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )
