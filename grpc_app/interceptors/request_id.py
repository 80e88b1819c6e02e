from __future__ import annotations

import uuid
import contextvars
from typing import Callable, Awaitable

import grpc
from structlog.contextvars import bound_contextvars


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("grpc_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


class RequestIdInterceptor(grpc.aio.ServerInterceptor):
    """Reads ``x-request-id`` from metadata (or mints one) and echoes it back.

    The id is kept in a contextvar for the servicer and outgoing peer calls,
    and bound into structlog's context for every log line of the request.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        md = dict(handler_call_details.invocation_metadata or [])
        incoming = md.get(REQUEST_ID_META_KEY)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            request_id = incoming or str(uuid.uuid4())
            context.set_trailing_metadata(((REQUEST_ID_META_KEY, request_id),))
            token = _request_id_var.set(request_id)
            try:
                with bound_contextvars(request_id=request_id):
                    return await handler.unary_unary(request, context)
            finally:
                _request_id_var.reset(token)

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
