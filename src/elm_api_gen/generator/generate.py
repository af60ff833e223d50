"""Generate Elm code for a whole API.

Returns a list of Elm definitions: type aliases, JSON decoders and
encoders, and one query function per endpoint. Prepend
DEFAULT_ELM_IMPORTS and wrap them in a Spec to write a module.
"""

from elm_api_gen.gen_logging import get_logger
from elm_api_gen.generator.elm_types import ElmTypeRegistry
from elm_api_gen.generator.emitter import generate_elm_for_request
from elm_api_gen.generator.foreign import Request, get_endpoints
from elm_api_gen.generator.options import DEFAULT_ELM_OPTIONS, ElmOptions
from elm_api_gen.parser.base import ApiDescription

logger = get_logger(__name__)


def generate_elm_for_api(api: ApiDescription | list[Request]) -> list[str]:
    """Generate Elm code for the API with default options."""
    return generate_elm_for_api_with(DEFAULT_ELM_OPTIONS, api)


def generate_elm_for_api_with(
    options: ElmOptions,
    api: ApiDescription | list[Request],
    registry: ElmTypeRegistry | None = None,
) -> list[str]:
    """Generate Elm code for the API with custom options.

    ``api`` is either a description (resolved through ``registry``) or an
    already extracted list of requests. Identical definitions are emitted
    once, at their first position.
    """
    requests = get_endpoints(api, registry) if isinstance(api, ApiDescription) else api

    sources: list[str] = []
    for request in requests:
        sources.extend(generate_elm_for_request(options, request))

    unique = list(dict.fromkeys(sources))
    logger.info(f"[GENERATE] {len(requests)} endpoint(s) -> {len(unique)} definition(s)")
    return unique
