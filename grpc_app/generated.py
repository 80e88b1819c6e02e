"""Protobuf messages and gRPC stubs for the comment and video services.

Compiled from the ``.proto`` files under ``grpc_app/protos`` when this module
is first imported (grpcio-tools), so there is no generated code to keep in
sync. The repository root must be on ``sys.path``.
"""
import os

import grpc


def _proto(*parts: str) -> str:
    return os.path.join("grpc_app", "protos", *parts)


comment_pb2, comment_pb2_grpc = grpc.protos_and_services(_proto("comment", "v1", "comment.proto"))
video_pb2, video_pb2_grpc = grpc.protos_and_services(_proto("video", "v1", "video.proto"))

COMMENT_SERVICE_NAME = comment_pb2.DESCRIPTOR.services_by_name["CommentService"].full_name
VIDEO_SERVICE_NAME = video_pb2.DESCRIPTOR.services_by_name["VideoService"].full_name

__all__ = [
    "comment_pb2",
    "comment_pb2_grpc",
    "video_pb2",
    "video_pb2_grpc",
    "COMMENT_SERVICE_NAME",
    "VIDEO_SERVICE_NAME",
]
