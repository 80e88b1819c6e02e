"""
Shared business codes used across layers (Domain/gRPC).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """业务状态码定义（单一来源）"""

    # 成功
    SUCCESS = 0

    # 参数错误 (1xxxx)
    PARAM_ERROR = 10000
    PARAM_VALIDATION_ERROR = 10003
    INVALID_IDENTIFIER = 10004  # 标识符格式错误（UUID / ObjectID）

    # 业务错误 (2xxxx)
    BUSINESS_ERROR = 20000
    NOT_FOUND = 20006  # 资源未找到（通用）
    COMMENT_NOT_FOUND = 20101
    VIDEO_NOT_FOUND = 20201

    # 系统错误 (4xxxx)
    SYSTEM_ERROR = 40000
    DATABASE_ERROR = 40001
    NETWORK_ERROR = 40002
    SERVICE_UNAVAILABLE = 40003


__all__ = ["BusinessCode"]
