from __future__ import annotations

from domain.video.entity import Video
from grpc_app.generated import video_pb2
from grpc_app.mappers._time import to_timestamp


def video_to_proto(video: Video) -> video_pb2.VideoInfo:
    msg = video_pb2.VideoInfo(
        id=str(video.id) if video.id else "",
        width=int(video.width),
        height=int(video.height),
        size=int(video.size),
        duration=float(video.duration),
        url=video.url or "",
        status=video.status or "",
        variants=dict(video.variants),
    )
    created_at = to_timestamp(video.created_at)
    if created_at:
        msg.created_at.CopyFrom(created_at)
    updated_at = to_timestamp(video.updated_at)
    if updated_at:
        msg.updated_at.CopyFrom(updated_at)
    return msg
