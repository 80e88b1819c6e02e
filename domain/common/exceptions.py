"""领域层业务异常定义，供领域与 gRPC 传输层使用。

These are the service-level errors returned to callers. Data-access errors
live next to each repository interface and are translated into these by the
servicers.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidUUIDException(BusinessException):
    def __init__(self, value: Optional[str] = None, *, field: str = "id"):
        details = {"value": value} if value is not None else None
        super().__init__(
            code=BusinessCode.INVALID_IDENTIFIER,
            message="invalid UUID",
            error_type="InvalidUUID",
            details=details,
            field=field,
        )


class InvalidObjectIDException(BusinessException):
    def __init__(self, value: Optional[str] = None, *, field: str = "id"):
        details = {"value": value} if value is not None else None
        super().__init__(
            code=BusinessCode.INVALID_IDENTIFIER,
            message="invalid ObjectID",
            error_type="InvalidObjectID",
            details=details,
            field=field,
        )


class CommentNotFoundException(BusinessException):
    def __init__(self, comment_id: Optional[str] = None):
        details = {"comment_id": comment_id} if comment_id else None
        super().__init__(
            code=BusinessCode.COMMENT_NOT_FOUND,
            message="comment not found",
            error_type="CommentNotFound",
            details=details,
        )


class VideoNotFoundException(BusinessException):
    def __init__(self, video_id: Optional[str] = None):
        details = {"video_id": video_id} if video_id else None
        super().__init__(
            code=BusinessCode.VIDEO_NOT_FOUND,
            message="video not found",
            error_type="VideoNotFound",
            details=details,
        )
