"""
Global middleware for API requests.

Provides:
- Request ID injection (X-Request-ID)
- Sampled request logging
- Problem Details error envelope for escaped exceptions
"""

from .request_id import setup_request_id_middleware
from .request_logging import setup_request_logging_middleware
from .error_envelope import setup_error_handlers

__all__ = [
    'setup_request_id_middleware',
    'setup_request_logging_middleware',
    'setup_error_handlers',
]
