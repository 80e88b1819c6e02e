"""
视频服务 gRPC 客户端

Thin wrapper over the generated ``VideoServiceStub`` used by the comment
service to check that a video exists. One attempt per call: errors raised by
the peer (``grpc.aio.AioRpcError``) reach the caller unchanged.
"""
from __future__ import annotations

from typing import Optional

import grpc

from core.config import VideoClientSettings, settings
from core.logging_config import get_logger
from grpc_app.generated import video_pb2, video_pb2_grpc
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id


logger = get_logger(__name__)


def _create_channel(cfg: VideoClientSettings) -> grpc.aio.Channel:
    if not cfg.tls:
        return grpc.aio.insecure_channel(cfg.target)
    root_certificates = None
    if cfg.ca:
        with open(cfg.ca, "rb") as f:
            root_certificates = f.read()
    return grpc.aio.secure_channel(cfg.target, grpc.ssl_channel_credentials(root_certificates))


class VideoClient:
    def __init__(
        self,
        channel: Optional[grpc.aio.Channel] = None,
        *,
        timeout: Optional[float] = None,
        cfg: Optional[VideoClientSettings] = None,
    ) -> None:
        cfg = cfg or settings.video_client
        self._channel = channel or _create_channel(cfg)
        self._stub = video_pb2_grpc.VideoServiceStub(self._channel)
        timeout = cfg.timeout if timeout is None else timeout
        self._timeout = timeout if timeout and timeout > 0 else None

    def _metadata(self) -> tuple:
        request_id = get_request_id()
        if not request_id:
            return ()
        return ((REQUEST_ID_META_KEY, request_id),)

    def deadline_for(self, context: Optional[grpc.aio.ServicerContext] = None) -> Optional[float]:
        """Timeout for a peer call made while serving ``context``.

        The caller's remaining time is carried through, capped by the
        configured timeout when one is set.
        """
        remaining = context.time_remaining() if context is not None else None
        if remaining is None:
            return self._timeout
        if self._timeout is None:
            return max(0.0, remaining)
        return max(0.0, min(remaining, self._timeout))

    async def get_video(
        self, video_id: str, context: Optional[grpc.aio.ServicerContext] = None
    ) -> video_pb2.GetVideoResponse:
        try:
            return await self._stub.GetVideo(
                video_pb2.GetVideoRequest(id=video_id),
                timeout=self.deadline_for(context),
                metadata=self._metadata(),
            )
        except grpc.aio.AioRpcError as exc:
            logger.warning(
                "video_lookup_failed",
                video_id=video_id,
                status=str(exc.code()),
                details=exc.details(),
                request_id=get_request_id(),
            )
            raise

    async def close(self) -> None:
        await self._channel.close()
