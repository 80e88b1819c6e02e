from __future__ import annotations

from domain.comment.entity import Comment
from grpc_app.generated import comment_pb2
from grpc_app.mappers._time import to_timestamp


def comment_to_proto(comment: Comment) -> comment_pb2.CommentInfo:
    msg = comment_pb2.CommentInfo(
        id=str(comment.id) if comment.id else "",
        video_id=comment.video_id or "",
        content=comment.content or "",
    )
    created_at = to_timestamp(comment.created_at)
    if created_at:
        msg.created_at.CopyFrom(created_at)
    updated_at = to_timestamp(comment.updated_at)
    if updated_at:
        msg.updated_at.CopyFrom(updated_at)
    return msg
