"""FastAPI telescope middleware.

Echoes a ``batch-id`` header on every response and records each
request/response pair through the capture pipeline. The capture itself is
scheduled as a background task, so it only starts once the response has
been sent and never delays it.

Usage::

    from telescope.capture import TelescopeMiddleware

    app.add_middleware(TelescopeMiddleware, pipeline=pipeline)
"""

import logging
from typing import Optional

from fastapi import Request, Response
from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response as StarletteResponse
from starlette.types import ASGIApp

from application.ports import HandlerResolver
from infrastructure.handler_resolver import RouteHandlerResolver
from telescope.capture.context import BATCH_HEADER, TelescopeContext, telescope_context
from telescope.capture.facts import RequestFacts, ResponseFacts
from telescope.capture.pipeline import CapturePipeline

logger = logging.getLogger(__name__)

# Responses that are streamed to the client indefinitely; the body is not buffered.
STREAMING_CONTENT_TYPES = ("text/event-stream",)


class TelescopeMiddleware(BaseHTTPMiddleware):
    """Middleware that captures API traffic for later inspection."""

    def __init__(
        self,
        app: ASGIApp,
        pipeline: CapturePipeline,
        resolver: Optional[HandlerResolver] = None,
    ) -> None:
        super().__init__(app)
        self.pipeline = pipeline
        self.resolver = resolver or RouteHandlerResolver()

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.pipeline.enabled:
            return await call_next(request)

        start_time = self.pipeline.clock.monotonic()
        batch_id = self.pipeline.begin(request.headers)

        with telescope_context(batch_id) as context:
            request_body = await request.body()

            response: Response = await call_next(request)

            content_type = response.headers.get("content-type", "")
            streaming = content_type.lower().startswith(STREAMING_CONTENT_TYPES)

            response_body = b""
            if not streaming:
                # BaseHTTPMiddleware returns a StreamingResponse; consume the body
                async for chunk in response.body_iterator:
                    response_body += chunk

                # Reconstruct the response with the consumed body, keeping repeated
                # headers such as set-cookie intact
                rebuilt = StarletteResponse(content=response_body, status_code=response.status_code)
                rebuilt.raw_headers = list(response.raw_headers)
                response = rebuilt

            response.headers[BATCH_HEADER] = batch_id

            try:
                request_facts = self._request_facts(request, request_body, start_time, context)
                response_facts = ResponseFacts(
                    status_code=response.status_code,
                    body=response_body,
                    content_type=content_type,
                    grpc_payload=context.grpc_response_payload,
                )
            except Exception:
                logger.exception("Failed to snapshot %s %s for capture", request.method, request.url.path)
                return response

        response.background = BackgroundTask(
            self.pipeline.schedule, batch_id, request_facts, response_facts
        )
        return response

    def _request_facts(
        self,
        request: Request,
        body: bytes,
        start_time: float,
        context: TelescopeContext,
    ) -> RequestFacts:
        headers: dict[str, list[str]] = {}
        for name, value in request.headers.items():
            headers.setdefault(name, []).append(value)

        return RequestFacts(
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            headers=headers,
            query_params=dict(request.query_params),
            body=body,
            content_type=request.headers.get("content-type", ""),
            remote_addr=request.client.host if request.client else None,
            start_time=start_time,
            handler=self.resolver.resolve(request),
            middleware=self.resolver.middleware(request) + tuple(context.middlewares),
            grpc_payload=context.grpc_request_payload,
        )
