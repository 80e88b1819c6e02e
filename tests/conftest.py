"""Pytest bootstrap configuration.

Environment defaults are set before application settings are imported.
Shared in-memory repositories and in-process gRPC servers live here.
"""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timezone
from typing import Dict, List, Tuple
from uuid import UUID

import grpc
import pytest
from bson import ObjectId

from domain.comment.entity import Comment
from domain.comment.repository import CommentNotFoundError, CommentRepository
from domain.video.entity import Video
from domain.video.repository import VideoNotFoundError, VideoRepository


class InMemoryCommentRepository(CommentRepository):
    def __init__(self) -> None:
        self.store: Dict[UUID, Comment] = {}

    async def list_by_video_id(self, video_id: str, limit: int = 0, offset: int = 0) -> List[Comment]:
        items = [c for c in self.store.values() if c.video_id == video_id]
        items.sort(key=lambda c: c.created_at, reverse=True)
        items = items[offset:]
        return items[:limit] if limit else items

    async def create(self, comment: Comment) -> UUID:
        comment_id = comment.assign_identity()
        self.store[comment_id] = Comment(**vars(comment))
        return comment_id

    async def update(self, comment: Comment) -> None:
        stored = self.store.get(comment.id)
        if stored is None:
            raise CommentNotFoundError(str(comment.id))
        stored.edit(comment.content)
        comment.video_id = stored.video_id
        comment.created_at = stored.created_at
        comment.updated_at = stored.updated_at

    async def delete(self, comment_id: UUID) -> None:
        if self.store.pop(comment_id, None) is None:
            raise CommentNotFoundError(str(comment_id))

    async def delete_by_video_id(self, video_id: str) -> None:
        for key in [k for k, c in self.store.items() if c.video_id == video_id]:
            del self.store[key]


class InMemoryVideoRepository(VideoRepository):
    def __init__(self) -> None:
        self.store: Dict[ObjectId, Video] = {}

    async def get(self, video_id: ObjectId) -> Video:
        try:
            return self.store[video_id]
        except KeyError:
            raise VideoNotFoundError(str(video_id)) from None

    async def list(self, limit: int = 0, skip: int = 0) -> List[Video]:
        items = sorted(self.store.values(), key=lambda v: v.id)[skip:]
        return items[:limit] if limit else items

    async def create(self, video: Video) -> ObjectId:
        now = datetime.now(timezone.utc)
        video.id = video.id or ObjectId()
        video.created_at = now
        video.updated_at = now
        self.store[video.id] = video
        return video.id

    async def update(self, video: Video) -> None:
        if video.id not in self.store:
            raise VideoNotFoundError(str(video.id))
        self.store[video.id] = video

    async def delete(self, video_id: ObjectId) -> None:
        if self.store.pop(video_id, None) is None:
            raise VideoNotFoundError(str(video_id))


def make_video(**overrides) -> Video:
    fields = dict(
        id=ObjectId(),
        width=1920,
        height=1080,
        size=4096,
        duration=12.5,
        url="https://cdn.example.com/videos/original.mp4",
        status="ready",
        variants={"720p": "https://cdn.example.com/videos/720.mp4"},
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Video(**fields)


@pytest.fixture
def video_factory():
    return make_video


@pytest.fixture
def comment_repo() -> InMemoryCommentRepository:
    return InMemoryCommentRepository()


@pytest.fixture
def video_repo() -> InMemoryVideoRepository:
    return InMemoryVideoRepository()


@pytest.fixture
async def video_server(video_repo) -> Tuple[str, InMemoryVideoRepository]:
    """In-process video service on an ephemeral port (port 0)."""
    from grpc_app.generated import video_pb2_grpc
    from grpc_app.server import default_interceptors
    from grpc_app.services.video_service import VideoService

    server = grpc.aio.server(interceptors=default_interceptors())
    video_pb2_grpc.add_VideoServiceServicer_to_server(VideoService(video_repo), server)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}", video_repo
    finally:
        await server.stop(grace=None)


@pytest.fixture
async def comment_server(video_server, comment_repo) -> Tuple[str, InMemoryCommentRepository]:
    """In-process comment service wired to the in-process video service."""
    from grpc_app.clients.video_client import VideoClient
    from grpc_app.generated import comment_pb2_grpc
    from grpc_app.server import default_interceptors
    from grpc_app.services.comment_service import CommentService

    video_target, _ = video_server
    video_client = VideoClient(grpc.aio.insecure_channel(video_target), timeout=5)

    server = grpc.aio.server(interceptors=default_interceptors())
    comment_pb2_grpc.add_CommentServiceServicer_to_server(
        CommentService(comment_repo, video_client), server
    )
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}", comment_repo
    finally:
        await server.stop(grace=None)
        await video_client.close()
