"""
Request ID middleware - correlate logs and responses with X-Request-ID.

A client-supplied X-Request-ID is reused when it looks sane (short,
no whitespace); otherwise a fresh UUID is generated.
"""

import re
import uuid
from typing import Optional
from flask import Flask, request, g


REQUEST_ID_HEADER = 'X-Request-ID'

_VALID_REQUEST_ID = re.compile(r'^[A-Za-z0-9._:-]{1,128}$')


def _incoming_request_id() -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER, '')
    if _VALID_REQUEST_ID.match(candidate):
        return candidate
    return str(uuid.uuid4())


def setup_request_id_middleware(app: Flask) -> None:
    """
    Set up request ID middleware on Flask app.

    Injects the request ID into g.request_id and the X-Request-ID
    response header.
    """

    @app.before_request
    def inject_request_id():
        g.request_id = _incoming_request_id()

    @app.after_request
    def add_request_id_header(response):
        if hasattr(g, 'request_id'):
            response.headers[REQUEST_ID_HEADER] = g.request_id
        return response


def get_request_id() -> Optional[str]:
    """
    Get current request ID from Flask context.

    Returns:
        Request ID string, or None if the middleware has not run
    """
    return getattr(g, 'request_id', None)
