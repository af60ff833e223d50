"""Function arguments, type signatures and auxiliary sources for a Request."""

from typing import Callable

from elm_api_gen.generator.elm_types import GeneratedElm
from elm_api_gen.generator.foreign import QueryArg, Request
from elm_api_gen.parser.base import QueryKind

UNIT_TYPE = "()"


def function_args(request: Request) -> list[str]:
    """Argument names: captures, then query parameters, then body."""
    args = [arg.name for arg in request.captures]
    args += [q.arg.name for q in request.query]
    if request.body is not None:
        args.append("body")
    return args


def query_arg_type(query_arg: QueryArg) -> str:
    elm_type = query_arg.arg.arg_type.elm_type
    if query_arg.kind is QueryKind.NORMAL:
        return f"Maybe ({elm_type})"
    if query_arg.kind is QueryKind.LIST:
        return f"List ({elm_type})"
    return "Bool"


def return_type_segment(request: Request) -> str:
    elm_type = request.return_type.elm_type if request.return_type else UNIT_TYPE
    return f"Task.Task Http.Error ({elm_type})"


def type_signature(request: Request) -> str:
    """The ``A -> B -> Task.Task Http.Error (R)`` part of a signature.

    Empty categories are left out; the return segment is always present.
    """
    url_types = " -> ".join(arg.arg_type.elm_type for arg in request.captures)
    query_types = " -> ".join(query_arg_type(q) for q in request.query)
    body_type = request.body.elm_type if request.body else ""
    parts = [url_types, query_types, body_type, return_type_segment(request)]
    return " -> ".join(p for p in parts if p)


def all_generated_sources(select: Callable[[GeneratedElm], tuple[str, ...]], request: Request) -> list[str]:
    """Fragments picked by ``select`` from the body and return types.

    Capture and query types are primitives and never contribute.
    """
    from_body = list(select(request.body)) if request.body else []
    from_return_type = list(select(request.return_type)) if request.return_type else []
    return from_body + from_return_type


def auxiliary_sources(request: Request) -> list[str]:
    """Type aliases, decoders and body encoders needed by one request."""
    sources = (
        all_generated_sources(lambda g: g.type_sources, request)
        + all_generated_sources(lambda g: g.decoder_sources, request)
        + (list(request.body.encoder_sources) if request.body else [])
    )
    return list(dict.fromkeys(sources))
