"""Endpoint extraction — turns an ApiDescription into resolved Request records."""

import re

from pydantic import BaseModel, ConfigDict

from elm_api_gen.gen_logging import get_logger
from elm_api_gen.generator.elm_types import ElmTypeRegistry, GeneratedElm
from elm_api_gen.parser.base import ApiDescription, EndpointDef, PathSegment, QueryKind

logger = get_logger(__name__)

_WORD_SEPARATOR_RE = re.compile(r"[-_.\s]+")


class Arg(BaseModel):
    """A named function argument with its resolved type."""

    model_config = ConfigDict(frozen=True)

    name: str
    arg_type: GeneratedElm


class Segment(BaseModel):
    """A URL path segment: a static literal or a capture argument."""

    model_config = ConfigDict(frozen=True)

    static: str | None = None
    capture: Arg | None = None

    @property
    def is_capture(self) -> bool:
        return self.capture is not None


class QueryArg(BaseModel):
    model_config = ConfigDict(frozen=True)

    arg: Arg
    kind: QueryKind


class Request(BaseModel):
    """One endpoint, fully resolved and ready for emission."""

    model_config = ConfigDict(frozen=True)

    method: str  # GET / POST / PUT / DELETE / PATCH
    func_name: tuple[str, ...]
    path: tuple[Segment, ...] = ()
    query: tuple[QueryArg, ...] = ()
    body: GeneratedElm | None = None
    return_type: GeneratedElm | None = None

    @property
    def captures(self) -> list[Arg]:
        return [s.capture for s in self.path if s.is_capture]


def camel_case(words: list[str] | tuple[str, ...]) -> str:
    """Join words into a camelCase identifier.

    The first word is kept as-is; later words are capitalised. Separator
    characters inside words also start a new word.
    """
    parts = [p for word in words for p in _WORD_SEPARATOR_RE.split(word) if p]
    if not parts:
        return ""
    return parts[0] + "".join(p[0].upper() + p[1:] for p in parts[1:])


def default_func_name(method: str, segments: list[PathSegment]) -> list[str]:
    """Function name words for an unnamed endpoint.

    The method, then each segment in order; a capture adds "by" and its name,
    so ``GET /users/{id}`` becomes ``getUsersById``.
    """
    words = [method.lower()]
    for segment in segments:
        if segment.is_capture:
            words += ["by", segment.capture]
        else:
            words.append(segment.literal)
    return words


def get_endpoints(api: ApiDescription, registry: ElmTypeRegistry | None = None) -> list[Request]:
    """Resolve every endpoint of the API, in declaration order."""
    if registry is None:
        registry = ElmTypeRegistry.from_description(api)
    requests = [_to_request(endpoint, registry) for endpoint in api.endpoints]
    logger.debug(f"[EXTRACT] {len(requests)} endpoint(s)")
    return requests


def _to_request(endpoint: EndpointDef, registry: ElmTypeRegistry) -> Request:
    segments = endpoint.segments
    path = tuple(_to_segment(s, registry) for s in segments)
    query = tuple(
        QueryArg(arg=Arg(name=q.name, arg_type=registry.generate(q.param_type)), kind=q.kind)
        for q in endpoint.query
    )
    func_name = [endpoint.name] if endpoint.name else default_func_name(endpoint.method, segments)

    return Request(
        method=endpoint.method,
        func_name=tuple(func_name),
        path=path,
        query=query,
        body=registry.generate(endpoint.body) if endpoint.body else None,
        return_type=registry.generate(endpoint.returns) if endpoint.returns else None,
    )


def _to_segment(segment: PathSegment, registry: ElmTypeRegistry) -> Segment:
    if segment.is_capture:
        return Segment(capture=Arg(name=segment.capture, arg_type=registry.generate(segment.capture_type)))
    return Segment(static=segment.literal)
