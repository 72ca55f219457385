"""
API package - request pipeline and middle-stack plumbing.

This package provides:
- create_route_handler() for validated, authorized route handlers
- Problem Details envelope for client errors
- Request models for the sample endpoints
- Global middleware (request_id, request_logging, error_envelope)
"""

from .pipeline import create_route_handler, RequestContext, ProblemDetails

__all__ = ['create_route_handler', 'RequestContext', 'ProblemDetails']
