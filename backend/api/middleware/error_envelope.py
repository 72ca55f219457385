"""
Error envelope middleware - render escaped exceptions as Problem Details.

Route pipelines answer client errors (400/401/422) themselves. Everything
they do not handle ends up here:
- HTTP exceptions (404, 405, ...) keep their status code
- Any other exception becomes a 500 and is logged with its traceback

Response format:
{
    "type": "about:blank",
    "title": "Not Found",
    "status": 404,
    "detail": "The requested URL was not found on the server.",
    "requestId": "uuid"
}
"""

import logging
from flask import Flask
from werkzeug.exceptions import HTTPException

from api.pipeline.problem_details import ProblemDetails, problem_response

from .request_id import get_request_id


logger = logging.getLogger('api.middleware.error')


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions."""
        return make_problem_response(
            title=error.name,
            status=error.code,
            detail=error.description,
        )

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        request_id = get_request_id()

        logger.exception(
            f"Unhandled error: {error}",
            extra={
                "event": "unhandled_error",
                "request_id": request_id,
                "error_type": type(error).__name__,
            }
        )

        return make_problem_response(
            title="Internal Server Error",
            status=500,
            detail="An unexpected error occurred",
        )


def make_problem_response(
    title: str,
    status: int,
    detail: str = None,
    problem_type: str = "about:blank",
    **extensions,
):
    """
    Create a Problem Details response tagged with the current request id.

    Args:
        title: Short, human-readable summary
        status: HTTP status code
        detail: Optional explanation specific to this occurrence
        problem_type: URI reference identifying the problem type
        **extensions: Extra members merged into the body

    Returns:
        Flask response with matching status code
    """
    request_id = get_request_id()
    if request_id:
        extensions.setdefault("requestId", request_id)

    response = problem_response(ProblemDetails(
        type=problem_type,
        title=title,
        status=status,
        detail=detail,
        extensions=extensions,
    ))
    if request_id:
        response.headers['X-Request-ID'] = request_id
    return response
