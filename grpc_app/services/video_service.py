from __future__ import annotations

import grpc
from bson import ObjectId
from bson.errors import InvalidId

from domain.common.exceptions import InvalidObjectIDException, VideoNotFoundException
from domain.video.repository import VideoNotFoundError, VideoRepository
from grpc_app.generated import video_pb2, video_pb2_grpc
from grpc_app.mappers.video import video_to_proto


def _parse_object_id(value: str) -> ObjectId:
    # ObjectId() also accepts 12-byte strings; only 24-char hex is valid on the wire
    if not isinstance(value, str) or len(value) != 24:
        raise InvalidObjectIDException(value)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidObjectIDException(value) from None


class VideoService(video_pb2_grpc.VideoServiceServicer):
    def __init__(self, video_repository: VideoRepository) -> None:
        self._videos = video_repository

    async def Healthz(self, request: video_pb2.HealthzRequest, context: grpc.aio.ServicerContext) -> video_pb2.HealthzResponse:  # type: ignore[override]
        return video_pb2.HealthzResponse(status="ok")

    async def GetVideo(self, request: video_pb2.GetVideoRequest, context: grpc.aio.ServicerContext) -> video_pb2.GetVideoResponse:  # type: ignore[override]
        video_id = _parse_object_id(request.id)
        try:
            video = await self._videos.get(video_id)
        except VideoNotFoundError:
            raise VideoNotFoundException(str(video_id)) from None
        return video_pb2.GetVideoResponse(video=video_to_proto(video))

    async def ListVideo(self, request: video_pb2.ListVideoRequest, context: grpc.aio.ServicerContext) -> video_pb2.ListVideoResponse:  # type: ignore[override]
        videos = await self._videos.list(limit=int(request.limit), skip=int(request.skip))
        return video_pb2.ListVideoResponse(videos=[video_to_proto(v) for v in videos])

    async def DeleteVideo(self, request: video_pb2.DeleteVideoRequest, context: grpc.aio.ServicerContext) -> video_pb2.DeleteVideoResponse:  # type: ignore[override]
        video_id = _parse_object_id(request.id)
        try:
            await self._videos.delete(video_id)
        except VideoNotFoundError:
            raise VideoNotFoundException(str(video_id)) from None
        return video_pb2.DeleteVideoResponse()
