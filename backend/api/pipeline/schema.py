"""
Schema engine boundary for the request pipeline.

The pipeline only knows the `Schema` protocol: `parse(value)` returns the
parsed value or raises `SchemaError` carrying an ordered list of issues.
Pydantic is the default engine; any object exposing `parse` can be used
instead.
"""

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Dict, Generic, List, Optional, Protocol, Sequence, Tuple, TypeVar, Union

from pydantic import TypeAdapter, ValidationError


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

PathSegment = Union[str, int]


@dataclass(frozen=True)
class SchemaIssue:
    """One failing field: where it is and why."""
    path: Tuple[PathSegment, ...]
    message: str

    @property
    def property(self) -> str:
        return ".".join(str(segment) for segment in self.path)


class SchemaError(Exception):
    """Raised by a schema when a value does not match it."""

    def __init__(self, issues: Sequence[SchemaIssue]):
        self.issues: List[SchemaIssue] = list(issues)
        super().__init__(f"{len(self.issues)} validation issue(s)")


class Schema(Protocol[T_co]):
    def parse(self, value: Any) -> T_co:
        ...


class PydanticSchema(Generic[T]):
    """
    Adapts a pydantic model (or any type pydantic understands) to `Schema`.

    Args:
        target: BaseModel subclass, TypedDict, dataclass, Annotated type, ...
        strict: Force strict/lax mode; None keeps the model's own config.
    """

    def __init__(self, target: Any, strict: Optional[bool] = None):
        self.target = target
        self.strict = strict
        self._adapter: TypeAdapter = TypeAdapter(target)

    def parse(self, value: Any) -> T:
        try:
            return self._adapter.validate_python(value, strict=self.strict)
        except ValidationError as e:
            raise SchemaError([
                SchemaIssue(
                    path=_value_path(value, error["loc"], error["type"] in _KEY_ERRORS),
                    message=error["msg"],
                )
                for error in e.errors()
            ]) from e

    def __repr__(self) -> str:
        return f"PydanticSchema({self.target!r})"


_KEY_ERRORS = frozenset({"missing", "extra_forbidden"})


def _value_path(
    value: Any, loc: Sequence[PathSegment], keep_missing_key: bool = False
) -> Tuple[PathSegment, ...]:
    """
    Keep only the `loc` segments that address something inside `value`.

    Pydantic also puts union member and validator labels in `loc`
    (`int`, `constrained-str`, `function-after[...]`); those are dropped.
    With `keep_missing_key`, a trailing key absent from its mapping is kept
    so required fields still point at their name.
    """
    path: List[PathSegment] = []
    current = value
    last = len(loc) - 1
    for i, segment in enumerate(loc):
        if isinstance(current, Mapping) and isinstance(segment, str):
            if segment in current:
                path.append(segment)
                current = current[segment]
            elif keep_missing_key and i == last:
                path.append(segment)
            continue
        if (
            isinstance(current, (list, tuple))
            and isinstance(segment, int)
            and not isinstance(segment, bool)
            and -len(current) <= segment < len(current)
        ):
            path.append(segment)
            current = current[segment]
    return tuple(path)


def as_schema(obj: Any) -> Schema:
    """Return `obj` if it already speaks `Schema`, else wrap it with pydantic."""
    if callable(getattr(obj, "parse", None)):
        return obj
    return PydanticSchema(obj)


def format_issues(issues: Sequence[SchemaIssue]) -> List[Dict[str, str]]:
    """Render issues as the `{property, message}` list used in responses."""
    return [{"property": issue.property, "message": issue.message} for issue in issues]
