"""Function emitter — renders one Request as an Elm function.

Each ``mk_*`` builder renders one part of the function and returns an
empty string when that part is absent, so the top-level template can
drop it.
"""

from elm_api_gen.gen_logging import get_logger
from elm_api_gen.generator.foreign import QueryArg, Request, Segment, camel_case
from elm_api_gen.generator.options import ElmOptions
from elm_api_gen.generator.signature import auxiliary_sources, function_args, type_signature
from elm_api_gen.parser.base import QueryKind

logger = get_logger(__name__)

URL_INDENT = " " * 10
UNIT_DECODER = "(Json.Decode.succeed ())"
EMPTY_BODY = "Http.empty"


def elm_string(text: str) -> str:
    """Render text as an Elm string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def mk_url(prefix: str, segments: tuple[Segment, ...] | list[Segment]) -> str:
    """URL expression: prefix literal, then ``"/" ++ segment`` for each segment."""
    new_line = f"\n{URL_INDENT}++ "
    parts = []
    if prefix:
        parts.append(elm_string(prefix))
    if segments:
        parts.append('"/" ++ ' + (new_line + '"/" ++ ').join(_segment_to_str(s) for s in segments))
    return new_line.join(parts)


def _segment_to_str(segment: Segment) -> str:
    if segment.is_capture:
        return f"({segment.capture.name} |> toString |> Http.uriEncode)"
    return elm_string(segment.static)


def mk_let_query_params(indent: str, request: Request) -> str:
    """The ``params`` let-binding: one string per query parameter, empties removed."""
    if not request.query:
        return ""
    params = [_param_to_str(q) for q in request.query]
    lines = [
        "params =",
        "  List.filter (not << String.isEmpty)",
        "    [ " + f"\n{indent}    , ".join(params),
        "    ]",
    ]
    return indent + f"\n{indent}".join(lines)


def _param_to_str(query_arg: QueryArg) -> str:
    name = query_arg.arg.name
    new_line = f"\n{URL_INDENT}"
    if query_arg.kind is QueryKind.NORMAL:
        lines = [
            name,
            f"  |> Maybe.map (toString >> Http.uriEncode >> (++) {elm_string(name + '=')})",
            '  |> Maybe.withDefault ""',
        ]
    elif query_arg.kind is QueryKind.FLAG:
        lines = [
            f"if {name} then",
            f"  {elm_string(name + '=')}",
            "else",
            '  ""',
        ]
    else:
        lines = [
            name,
            f"  |> List.map (\\val -> {elm_string(name + '[]=')} ++ (val |> toString |> Http.uriEncode))",
            '  |> String.join "&"',
        ]
    return new_line.join(lines)


def mk_query_params(indent: str, request: Request) -> str:
    """Appends ``?`` and the joined params to the URL when any are set."""
    if not request.query:
        return ""
    lines = [
        "++ if List.isEmpty params then",
        '     ""',
        "   else",
        '     "?" ++ String.join "&" params',
    ]
    return indent + f"\n{indent}".join(lines)


def mk_body(request: Request) -> str:
    if request.body is None:
        return EMPTY_BODY
    return f"Http.string (Json.Encode.encode 0 ({request.body.elm_encoder} body))"


def mk_decoder(request: Request) -> str:
    if request.return_type is None:
        return UNIT_DECODER
    return request.return_type.elm_decoder


def function_name(request: Request) -> str:
    return camel_case(request.func_name)


def mk_function(options: ElmOptions, request: Request) -> str:
    """Signature line plus function body for one request."""
    fn_name = function_name(request)
    url = mk_url(options.url_prefix, request.path)
    lines = [
        f"{fn_name} : {type_signature(request)}",
        " ".join([fn_name] + function_args(request)) + " =",
        "  let",
        mk_let_query_params("    ", request),
        "    request =",
        "      { verb =",
        f"          {elm_string(request.method)}",
        "      , headers =",
        '          [("Content-Type", "application/json")]',
        "      , url =",
        f"          {url or elm_string('')}",
        mk_query_params(URL_INDENT, request),
        "      , body =",
        f"          {mk_body(request)}",
        "      }",
        "  in",
        "    Http.fromJson",
        f"      {mk_decoder(request)}",
        "      (Http.send Http.defaultSettings request)",
    ]
    return "\n".join(line for line in lines if line)


def generate_elm_for_request(options: ElmOptions, request: Request) -> list[str]:
    """Auxiliary fragments for the request followed by its function."""
    logger.debug(f"  [EMIT] {request.method} {function_name(request)}")
    return auxiliary_sources(request) + [mk_function(options, request)]
