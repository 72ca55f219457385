"""
Problem Details envelope for guard-stage failures.

Every error the request pipeline answers on its own is rendered as:
{
    "type": "/problems/invalid-body",
    "title": "Your request body is not valid.",
    "status": 422,
    "invalid-body": [{"property": "age", "message": "..."}]
}

`type`, `title` and `status` are always present. `detail` and `instance`
are only emitted when set; stage-specific keys travel in `extensions`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask import Response, jsonify


PROBLEM_MIMETYPE = "application/problem+json"

UNAUTHORIZED_DETAIL = "You must be logged in to access this resource."
BODY_REQUIRED_DETAIL = "Request body is required"


@dataclass(frozen=True)
class ProblemDetails:
    """A single problem response. Immutable once built."""
    title: str
    status: int
    type: str = "about:blank"
    detail: Optional[str] = None
    instance: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        result: Dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
        }
        if self.detail is not None:
            result["detail"] = self.detail
        if self.instance is not None:
            result["instance"] = self.instance
        for key, value in self.extensions.items():
            if key not in result:
                result[key] = value
        return result


def body_required() -> ProblemDetails:
    return ProblemDetails(
        type="/problems/validation-error",
        title="Validation Error",
        status=422,
        detail=BODY_REQUIRED_DETAIL,
    )


def invalid_body(failures: List[Dict[str, str]]) -> ProblemDetails:
    return ProblemDetails(
        type="/problems/invalid-body",
        title="Your request body is not valid.",
        status=422,
        extensions={"invalid-body": failures},
    )


def invalid_queries(failures: List[Dict[str, str]]) -> ProblemDetails:
    return ProblemDetails(
        type="/problems/invalid-queries",
        title="Your request query is not valid.",
        status=400,
        extensions={"invalid-queries": failures},
    )


def invalid_params(failures: List[Dict[str, str]]) -> ProblemDetails:
    return ProblemDetails(
        type="/problems/invalid-params",
        title="Your request parameters are not valid.",
        status=400,
        extensions={"invalid-params": failures},
    )


def unauthorized() -> ProblemDetails:
    return ProblemDetails(
        type="/problems/unauthorized",
        title="Unauthorized",
        status=401,
        detail=UNAUTHORIZED_DETAIL,
    )


def problem_response(problem: ProblemDetails) -> Response:
    """Build a Flask response whose status matches the problem's status."""
    response = jsonify(problem.to_dict())
    response.status_code = problem.status
    response.mimetype = PROBLEM_MIMETYPE
    return response
