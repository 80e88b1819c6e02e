from __future__ import annotations

from typing import Protocol
from uuid import UUID

import grpc

from domain.comment.entity import Comment
from domain.comment.repository import CommentNotFoundError, CommentRepository
from domain.common.exceptions import CommentNotFoundException, InvalidUUIDException
from grpc_app.generated import comment_pb2, comment_pb2_grpc
from grpc_app.mappers.comment import comment_to_proto


class VideoLookup(Protocol):
    async def get_video(self, video_id: str, context: grpc.aio.ServicerContext | None = None): ...


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise InvalidUUIDException(value) from None


class CommentService(comment_pb2_grpc.CommentServiceServicer):
    def __init__(self, comment_repository: CommentRepository, video_client: VideoLookup) -> None:
        self._comments = comment_repository
        self._videos = video_client

    async def Healthz(self, request: comment_pb2.HealthzRequest, context: grpc.aio.ServicerContext) -> comment_pb2.HealthzResponse:  # type: ignore[override]
        return comment_pb2.HealthzResponse(status="ok")

    async def ListComment(self, request: comment_pb2.ListCommentRequest, context: grpc.aio.ServicerContext) -> comment_pb2.ListCommentResponse:  # type: ignore[override]
        comments = await self._comments.list_by_video_id(
            request.video_id, limit=int(request.limit), offset=int(request.offset)
        )
        return comment_pb2.ListCommentResponse(comments=[comment_to_proto(c) for c in comments])

    async def CreateComment(self, request: comment_pb2.CreateCommentRequest, context: grpc.aio.ServicerContext) -> comment_pb2.CreateCommentResponse:  # type: ignore[override]
        # The referenced video must exist; a failed lookup aborts before anything is stored.
        # The caller's deadline is carried to the peer call.
        await self._videos.get_video(request.video_id, context)

        comment = Comment(video_id=request.video_id, content=request.content)
        comment_id = await self._comments.create(comment)
        return comment_pb2.CreateCommentResponse(id=str(comment_id))

    async def UpdateComment(self, request: comment_pb2.UpdateCommentRequest, context: grpc.aio.ServicerContext) -> comment_pb2.UpdateCommentResponse:  # type: ignore[override]
        comment_id = _parse_uuid(request.id)
        comment = Comment(id=comment_id, content=request.content)
        try:
            await self._comments.update(comment)
        except CommentNotFoundError:
            raise CommentNotFoundException(str(comment_id)) from None
        return comment_pb2.UpdateCommentResponse(comment=comment_to_proto(comment))

    async def DeleteComment(self, request: comment_pb2.DeleteCommentRequest, context: grpc.aio.ServicerContext) -> comment_pb2.DeleteCommentResponse:  # type: ignore[override]
        comment_id = _parse_uuid(request.id)
        try:
            await self._comments.delete(comment_id)
        except CommentNotFoundError:
            raise CommentNotFoundException(str(comment_id)) from None
        return comment_pb2.DeleteCommentResponse()

    async def DeleteCommentByVideoID(self, request: comment_pb2.DeleteCommentByVideoIDRequest, context: grpc.aio.ServicerContext) -> comment_pb2.DeleteCommentByVideoIDResponse:  # type: ignore[override]
        await self._comments.delete_by_video_id(request.video_id)
        return comment_pb2.DeleteCommentByVideoIDResponse()
