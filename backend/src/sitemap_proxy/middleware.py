"""Request logging for the relay."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method and path of every request, and its query at DEBUG."""

    async def dispatch(self, request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        if request.query_params:
            logger.debug("Query params: %s", dict(request.query_params))
        response = await call_next(request)
        logger.debug(
            "%s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response
