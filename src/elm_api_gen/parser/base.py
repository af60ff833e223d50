"""Data models for API description documents.

The loader converts YAML/JSON input into these models; the generator
works from them and never looks at the raw document again.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_TYPE_TOKEN_RE = re.compile(r"\(\)|[()]|[^\s()]+")
_CAPTURE_RE = re.compile(r"^\{([^:{}]+)(?::(.+))?\}$")
_IDENTIFIER_RE = re.compile(r"^[a-z][A-Za-z0-9_]*$")
_FUNC_NAME_RE = re.compile(r"^[a-z][A-Za-z0-9_.\- ]*$")

ELM_RESERVED = {
    "if", "then", "else", "case", "of", "let", "in", "type",
    "module", "where", "import", "exposing", "as", "port",
}


class TypeRef(BaseModel):
    """A type constructor applied to zero or more type arguments.

    Accepts an Elm-style expression string wherever a model is expected,
    e.g. ``"List (Maybe Int)"``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple["TypeRef", ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _from_expression(cls, data):
        if isinstance(data, str):
            return parse_type_expr(data).model_dump()
        return data

    def __str__(self) -> str:
        if not self.args:
            return self.name
        parts = [self.name]
        for arg in self.args:
            parts.append(f"({arg})" if arg.args else str(arg))
        return " ".join(parts)


TypeRef.model_rebuild()

BOOL = TypeRef(name="Bool")
STRING = TypeRef(name="String")


def parse_type_expr(text: str) -> TypeRef:
    """Parse a type expression like ``List (Maybe Int)`` into a TypeRef."""
    tokens = _TYPE_TOKEN_RE.findall(text)
    if not tokens:
        raise ValueError(f"empty type expression: {text!r}")
    ref, pos = _parse_application(tokens, 0, text)
    if pos != len(tokens):
        raise ValueError(f"unexpected {tokens[pos]!r} in type expression {text!r}")
    return ref


def _parse_application(tokens: list[str], pos: int, text: str) -> tuple[TypeRef, int]:
    head, pos = _parse_atom(tokens, pos, text)
    args = []
    while pos < len(tokens) and tokens[pos] != ")":
        arg, pos = _parse_atom(tokens, pos, text)
        args.append(arg)
    if args:
        if head.args:
            raise ValueError(f"cannot apply a parenthesised type in {text!r}")
        head = TypeRef(name=head.name, args=tuple(args))
    return head, pos


def _parse_atom(tokens: list[str], pos: int, text: str) -> tuple[TypeRef, int]:
    if pos >= len(tokens):
        raise ValueError(f"unexpected end of type expression {text!r}")
    token = tokens[pos]
    if token == "()":
        return TypeRef(name="()"), pos + 1
    if token == "(":
        ref, pos = _parse_application(tokens, pos + 1, text)
        if pos >= len(tokens) or tokens[pos] != ")":
            raise ValueError(f"unbalanced parentheses in type expression {text!r}")
        return ref, pos + 1
    if token == ")":
        raise ValueError(f"unexpected ')' in type expression {text!r}")
    return TypeRef(name=token), pos + 1


class PathSegment(BaseModel):
    """One piece of a URL template: a literal or a typed capture."""

    model_config = ConfigDict(frozen=True)

    literal: str | None = None
    capture: str | None = None
    capture_type: TypeRef | None = None

    @property
    def is_capture(self) -> bool:
        return self.capture is not None


def check_identifier(name: str, what: str) -> str:
    """Raise unless name can be used as an Elm argument name."""
    if not _IDENTIFIER_RE.match(name) or name in ELM_RESERVED:
        raise ValueError(f"{what} {name!r} is not a valid Elm identifier")
    return name


def parse_path(template: str) -> list[PathSegment]:
    """Split ``/users/{id:Int}/posts`` into literal and capture segments.

    Captures without a declared type are Strings.
    """
    segments = []
    for piece in template.split("/"):
        if not piece:
            continue
        match = _CAPTURE_RE.match(piece)
        if match:
            name, type_expr = match.groups()
            check_identifier(name, "capture")
            capture_type = parse_type_expr(type_expr) if type_expr else STRING
            segments.append(PathSegment(capture=name, capture_type=capture_type))
        elif "{" in piece or "}" in piece:
            raise ValueError(f"malformed capture {piece!r} in path {template!r}")
        else:
            segments.append(PathSegment(literal=piece))
    return segments


class QueryKind(str, Enum):
    """How a query parameter is passed and rendered."""

    NORMAL = "normal"  # optional single value
    FLAG = "flag"  # boolean presence switch
    LIST = "list"  # zero or more values under name[]


class QueryParam(BaseModel):
    """A single query-string parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: QueryKind = QueryKind.NORMAL
    param_type: TypeRef | None = Field(default=None, alias="type")  # element type for lists

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return check_identifier(value, "query parameter")

    @model_validator(mode="before")
    @classmethod
    def _default_flag_type(cls, data):
        if not isinstance(data, dict) or data.get("kind") not in (QueryKind.FLAG, "flag"):
            return data
        if data.get("type") is None and data.get("param_type") is None:
            data = {k: v for k, v in data.items() if k not in ("type", "param_type")}
            data["type"] = BOOL
        return data

    @model_validator(mode="after")
    def _check_type(self):
        if self.param_type is None:
            raise ValueError(f"query parameter {self.name!r} needs a type")
        if self.kind is QueryKind.FLAG and self.param_type != BOOL:
            raise ValueError(f"flag parameter {self.name!r} must have type Bool, got {self.param_type}")
        return self


class EndpointDef(BaseModel):
    """A single API endpoint as declared in the description document."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str  # /users/{id:Int}
    name: str | None = None
    query: list[QueryParam] = []
    body: TypeRef | None = None
    returns: TypeRef | None = None

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        parse_path(value)
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str | None) -> str | None:
        if value is not None and not _FUNC_NAME_RE.match(value):
            raise ValueError(f"endpoint name {value!r} must start with a lower-case letter")
        return value

    @model_validator(mode="after")
    def _check_argument_names(self):
        names = [s.capture for s in self.segments if s.is_capture]
        names += [q.name for q in self.query]
        if self.body is not None:
            names.append("body")
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"{self.method} {self.path}: duplicate argument name(s) {', '.join(duplicates)}")
        return self

    @property
    def segments(self) -> list[PathSegment]:
        return parse_path(self.path)


class ApiDescription(BaseModel):
    """A whole API: record types, endpoints and an optional URL prefix."""

    url_prefix: str | None = None
    types: dict[str, dict[str, TypeRef]] = {}  # record name -> {field: type}
    endpoints: list[EndpointDef] = []
