from __future__ import annotations

from typing import Callable, Awaitable

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id
from domain.common.exceptions import BusinessException
from shared.codes import BusinessCode


logger = get_logger(__name__)


_STATUS_BY_CODE = {
    BusinessCode.PARAM_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.INVALID_IDENTIFIER: grpc.StatusCode.INVALID_ARGUMENT,

    BusinessCode.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.COMMENT_NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    BusinessCode.VIDEO_NOT_FOUND: grpc.StatusCode.NOT_FOUND,

    BusinessCode.SERVICE_UNAVAILABLE: grpc.StatusCode.UNAVAILABLE,
    BusinessCode.NETWORK_ERROR: grpc.StatusCode.UNAVAILABLE,
    BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
    BusinessCode.DATABASE_ERROR: grpc.StatusCode.INTERNAL,
}


def business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    try:
        bc = BusinessCode(code)
    except ValueError:
        return grpc.StatusCode.FAILED_PRECONDITION
    return _STATUS_BY_CODE.get(bc, grpc.StatusCode.FAILED_PRECONDITION)


def _trailing(code: int | str, error_type: str) -> tuple:
    md = [("x-biz-code", str(code)), ("x-error-type", error_type)]
    request_id = get_request_id()
    if request_id:
        md.append((REQUEST_ID_META_KEY, request_id))
    return tuple(md)


def _upstream_trailing(exc: grpc.aio.AioRpcError) -> tuple:
    # keep the peer's business code when it sent one
    peer = dict(exc.trailing_metadata() or ())
    code = peer.get("x-biz-code")
    if not code:
        return _trailing(BusinessCode.SERVICE_UNAVAILABLE.value, "UpstreamError")
    return _trailing(code, peer.get("x-error-type") or "UpstreamError")


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    """Turns exceptions escaping a servicer into gRPC statuses.

    - ``BusinessException``: status from its business code.
    - ``grpc.aio.AioRpcError`` from a peer service: the peer's status and
      details are passed through as-is, along with its ``x-biz-code``
      and ``x-error-type`` trailers when it sent them.
    - anything else: ``INTERNAL``.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        method = handler_call_details.method

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except grpc.aio.AbortError:
                # servicer aborted on its own
                raise
            except BusinessException as exc:
                status = business_code_to_grpc_status(exc.code)
                context.set_trailing_metadata(_trailing(exc.code, exc.error_type or "BusinessError"))
                # Concise business error log (no stack)
                logger.warning(
                    "grpc_mapped_error",
                    method=method,
                    code=str(exc.code),
                    status=str(status),
                    message=exc.message,
                )
                await context.abort(status, exc.message)
            except grpc.aio.AioRpcError as exc:
                context.set_trailing_metadata(_upstream_trailing(exc))
                logger.warning(
                    "grpc_upstream_error",
                    method=method,
                    status=str(exc.code()),
                    message=exc.details(),
                )
                await context.abort(exc.code(), exc.details() or "")
            except Exception as exc:
                context.set_trailing_metadata(_trailing(BusinessCode.SYSTEM_ERROR.value, "SystemError"))
                logger.error(
                    "grpc_unhandled_error",
                    method=method,
                    error=str(exc),
                    exc_info=True,
                )
                await context.abort(grpc.StatusCode.INTERNAL, "internal error")

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
