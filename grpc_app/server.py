from __future__ import annotations

from typing import Optional, Sequence

import grpc
from grpc_health.v1 import health, health_pb2, health_pb2_grpc

from core.config import GrpcSettings, settings
from core.logging_config import get_logger
from domain.comment.repository import CommentRepository
from domain.video.repository import VideoRepository
from grpc_app.generated import (
    COMMENT_SERVICE_NAME,
    VIDEO_SERVICE_NAME,
    comment_pb2_grpc,
    video_pb2_grpc,
)
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.services.comment_service import CommentService, VideoLookup
from grpc_app.services.video_service import VideoService


logger = get_logger(__name__)


def default_interceptors() -> Sequence[grpc.aio.ServerInterceptor]:
    # Outermost first
    return (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
    )


def _new_server(cfg: GrpcSettings) -> grpc.aio.Server:
    options = [
        ("grpc.max_concurrent_streams", max(1, cfg.max_concurrent_streams)),
    ]
    return grpc.aio.server(interceptors=default_interceptors(), options=options)


async def _add_health(server: grpc.aio.Server, service_name: str) -> None:
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(service_name, health_pb2.HealthCheckResponse.SERVING)


def bind(server: grpc.aio.Server, cfg: GrpcSettings) -> int:
    """Bind the listening port (TLS when configured) and return the port number."""
    address = f"{cfg.host}:{cfg.port}"

    if not cfg.tls.enabled:
        return server.add_insecure_port(address)

    if not (cfg.tls.cert and cfg.tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    with open(cfg.tls.cert, "rb") as f:
        cert_chain = f.read()
    with open(cfg.tls.key, "rb") as f:
        private_key = f.read()
    root_certificates = None
    if cfg.tls.ca:
        with open(cfg.tls.ca, "rb") as f:
            root_certificates = f.read()
    creds = grpc.ssl_server_credentials(
        [(private_key, cert_chain)],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )
    return server.add_secure_port(address, creds)


async def create_comment_server(
    video_client: VideoLookup,
    comment_repository: Optional[CommentRepository] = None,
    cfg: Optional[GrpcSettings] = None,
) -> grpc.aio.Server:
    """Build the comment server. The caller owns ``video_client`` and closes it."""
    cfg = cfg or settings.grpc
    if comment_repository is None:
        from infrastructure.database import get_database
        from infrastructure.repositories.comment_repository import MongoCommentRepository

        comment_repository = MongoCommentRepository(get_database()[settings.mongo.comment_collection])

    server = _new_server(cfg)
    comment_pb2_grpc.add_CommentServiceServicer_to_server(
        CommentService(comment_repository, video_client), server
    )
    await _add_health(server, COMMENT_SERVICE_NAME)
    port = bind(server, cfg)
    logger.info("grpc_server_created", service=COMMENT_SERVICE_NAME, port=port)
    return server


async def create_video_server(
    video_repository: Optional[VideoRepository] = None,
    cfg: Optional[GrpcSettings] = None,
) -> grpc.aio.Server:
    cfg = cfg or settings.video_grpc
    if video_repository is None:
        from infrastructure.database import get_database
        from infrastructure.repositories.video_repository import MongoVideoRepository

        video_repository = MongoVideoRepository(get_database()[settings.mongo.video_collection])

    server = _new_server(cfg)
    video_pb2_grpc.add_VideoServiceServicer_to_server(VideoService(video_repository), server)
    await _add_health(server, VIDEO_SERVICE_NAME)
    port = bind(server, cfg)
    logger.info("grpc_server_created", service=VIDEO_SERVICE_NAME, port=port)
    return server
