"""
Request pipeline package.

Provides the chainable route builder, the schema engine boundary and the
problem-details envelope used for guard-stage failures.
"""

from .builder import (
    AuthenticationService,
    RequestContext,
    RouteHandler,
    create_route_handler,
)
from .problem_details import ProblemDetails, problem_response
from .schema import PydanticSchema, Schema, SchemaError, SchemaIssue, as_schema

__all__ = [
    'AuthenticationService',
    'RequestContext',
    'RouteHandler',
    'create_route_handler',
    'ProblemDetails',
    'problem_response',
    'PydanticSchema',
    'Schema',
    'SchemaError',
    'SchemaIssue',
    'as_schema',
]
