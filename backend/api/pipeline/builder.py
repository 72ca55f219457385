"""
Route pipeline builder - validated, authorized Flask views from one chain.

Usage:
    get_item = (
        create_route_handler()
        .validate_params(ItemParams)
        .authorize(auth_service)
        .handle(_get_item)
    )
    items_bp.add_url_rule("/<item_id>", view_func=get_item, methods=["GET"])

Each chaining call returns a new builder; the receiver is never mutated, so
a partially configured builder can be shared between routes.

The compiled view runs a fixed sequence of guards:
1. Body   - 422 when missing/empty, 422 with `invalid-body` when invalid
2. Query  - 400 with `invalid-queries`
3. Params - 400 with `invalid-params`
4. Auth   - 401 when the auth service yields no user
5. Call the handler with a RequestContext

Anything raised that is not a SchemaError (including errors from the
handler itself) leaves the view untouched and is handled by the app's
error handlers.
"""

import functools
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, Generic, List, Mapping, Optional, Protocol, TypeVar, Union

from flask import Request, current_app, request

from .problem_details import (
    ProblemDetails,
    body_required,
    invalid_body,
    invalid_params,
    invalid_queries,
    problem_response,
    unauthorized,
)
from .schema import Schema, SchemaError, as_schema, format_issues


logger = logging.getLogger("api.pipeline")

B = TypeVar("B")
Q = TypeVar("Q")
P = TypeVar("P")
U = TypeVar("U")
NewU = TypeVar("NewU")


class AuthenticationService(Protocol[U]):
    """Resolves the caller of a request, or None when there is none."""

    def get_user(self, req: Request) -> Union[Optional[U], Awaitable[Optional[U]]]:
        ...


@dataclass(frozen=True)
class RequestContext(Generic[B, Q, P, U]):
    """
    Everything a handler needs for one request.

    Facets without a configured schema are `{}`. `user` is only set when
    the route was built with `authorize()`.
    """
    request: Request
    body: B
    query: Q
    params: P
    user: Optional[U] = None


HandlerFunction = Callable[[RequestContext], Any]


def _is_missing_body(raw: Any) -> bool:
    if raw is None:
        return True
    return isinstance(raw, (dict, list)) and len(raw) == 0


def _collect_query() -> Dict[str, Any]:
    """Query string as a dict; repeated keys become lists."""
    return {
        key: values[0] if len(values) == 1 else values
        for key, values in request.args.lists()
    }


@dataclass(frozen=True)
class RouteHandler(Generic[B, Q, P, U]):
    """Immutable pipeline configuration. Build with `create_route_handler()`."""
    body_schema: Optional[Schema] = None
    query_schema: Optional[Schema] = None
    params_schema: Optional[Schema] = None
    auth_service: Optional[AuthenticationService] = None

    def validate_body(self, schema: Any) -> "RouteHandler[Any, Q, P, U]":
        return replace(self, body_schema=as_schema(schema))

    def validate_query(self, schema: Any) -> "RouteHandler[B, Any, P, U]":
        return replace(self, query_schema=as_schema(schema))

    def validate_params(self, schema: Any) -> "RouteHandler[B, Q, Any, U]":
        return replace(self, params_schema=as_schema(schema))

    def authorize(self, auth_service: AuthenticationService[NewU]) -> "RouteHandler[B, Q, P, NewU]":
        return replace(self, auth_service=auth_service)

    def handle(self, fn: HandlerFunction) -> Callable[..., Any]:
        """
        Compile the configured stages and `fn` into a Flask view function.

        Route params arrive as the view's keyword arguments. The view returns
        either a problem response (guard failure) or whatever `fn` returns.
        """
        config = self

        def view(**route_params: Any) -> Any:
            body: Any = {}
            query: Any = {}
            params: Any = {}
            user = None

            if config.body_schema is not None:
                raw_body = request.get_json(silent=True)
                if _is_missing_body(raw_body):
                    return _reject(body_required())
                try:
                    body = config.body_schema.parse(raw_body)
                except SchemaError as e:
                    return _reject(invalid_body(format_issues(e.issues)))

            if config.query_schema is not None:
                try:
                    query = config.query_schema.parse(_collect_query())
                except SchemaError as e:
                    return _reject(invalid_queries(format_issues(e.issues)))

            if config.params_schema is not None:
                try:
                    params = config.params_schema.parse(dict(route_params))
                except SchemaError as e:
                    return _reject(invalid_params(format_issues(e.issues)))

            if config.auth_service is not None:
                get_user = current_app.ensure_sync(config.auth_service.get_user)
                user = get_user(request._get_current_object())
                if user is None:
                    return _reject(unauthorized())

            ctx = RequestContext(
                request=request._get_current_object(),
                body=body,
                query=query,
                params=params,
                user=user,
            )
            return current_app.ensure_sync(fn)(ctx)

        functools.update_wrapper(view, fn, updated=())
        return view


def _reject(problem: ProblemDetails):
    failures: List[Any] = next(
        (v for v in problem.extensions.values() if isinstance(v, list)), []
    )
    logger.info(
        "pipeline_rejected path=%s method=%s status=%s type=%s failures=%s",
        request.path,
        request.method,
        problem.status,
        problem.type,
        len(failures),
    )
    return problem_response(problem)


def create_route_handler() -> RouteHandler[Mapping[str, Any], Mapping[str, Any], Mapping[str, Any], Any]:
    """Start an empty pipeline: no schemas, no authorization."""
    return RouteHandler()
