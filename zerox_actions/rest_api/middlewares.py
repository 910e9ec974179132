import logging
import time
from typing import Callable, List, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from zerox_actions.utils.logger import get_logger, set_correlation_id, set_session_id


class RouteLoggerMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id to every request and logs one line per handled request."""

    CORRELATION_HEADER = 'x-request-id'
    SESSION_HEADER = 'x-session-id'

    def __init__(
            self,
            app: FastAPI,
            *,
            logger: Optional[logging.Logger] = None,
            skip_routes: Optional[List[str]] = None,
    ):
        super().__init__(app)
        self.logger = logger or get_logger(__name__)
        self.skip_routes = tuple(skip_routes or ())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.CORRELATION_HEADER) or uuid4().hex
        set_correlation_id(request_id)
        if self.SESSION_HEADER in request.headers:
            set_session_id(request.headers[self.SESSION_HEADER])

        if request.url.path.startswith(self.skip_routes):
            return await call_next(request)

        log_extra = {
            'request_method': request.method,
            'request_path': request.url.path,
            'request_query': str(request.query_params),
        }
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                'Request failed with exception', extra={**log_extra, 'response_status': 500}
            )
            raise

        log_extra['request_duration'] = round(time.perf_counter() - start_time, 4)
        log_extra['response_status'] = response.status_code
        response.headers[self.CORRELATION_HEADER] = request_id
        self.logger.info(
            'Request %s', 'successful' if response.status_code < 500 else 'failed',
            extra=log_extra,
        )
        return response
