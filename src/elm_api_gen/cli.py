"""CLI entry point for elm-api-gen."""

from fnmatch import fnmatch
from pathlib import Path

import click

from elm_api_gen.gen_logging import configure_gen_logging
from elm_api_gen.generator.elm_types import ElmTypeError
from elm_api_gen.generator.emitter import function_name
from elm_api_gen.generator.foreign import get_endpoints
from elm_api_gen.generator.generate import generate_elm_for_api_with
from elm_api_gen.generator.options import DEFAULT_ELM_IMPORTS, ElmOptions
from elm_api_gen.generator.spec import spec_from_module_name, specs_to_dir
from elm_api_gen.generator.validator import validate_declarations
from elm_api_gen.parser.base import ApiDescription, EndpointDef
from elm_api_gen.parser.loader import ApiDescriptionError, load_api


def _load(doc_path: Path, patterns: tuple[str, ...]) -> ApiDescription:
    """Load the description and keep only endpoints matching the patterns."""
    try:
        api = load_api(doc_path)
    except ApiDescriptionError as e:
        raise click.ClickException(str(e)) from e
    if patterns:
        api = api.model_copy(update={"endpoints": _filter_endpoints(api.endpoints, patterns)})
    return api


def _filter_endpoints(endpoints: list[EndpointDef], patterns: tuple[str, ...]) -> list[EndpointDef]:
    """Keep endpoints matching any pattern.

    A pattern is either "METHOD /path" (exact) or a path glob like "/users/*".
    """
    result = []
    for ep in endpoints:
        for pattern in patterns:
            head, sep, tail = pattern.strip().partition(" ")
            method, path = (head, tail.strip()) if sep else ("", head)
            if method:
                matched = ep.method == method.upper() and ep.path == path
            else:
                matched = fnmatch(ep.path, path)
            if matched:
                result.append(ep)
                break
    return result


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show per-endpoint detail.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
def main(verbose: bool, quiet: bool):
    """Elm API Gen — generate an Elm client module from an API description."""
    configure_gen_logging(verbose=verbose, quiet=quiet)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Elm source directory to write into.")
@click.option("--module", "module_name", default="Generated.Api", show_default=True, help="Dotted Elm module name.")
@click.option("--url-prefix", default=None, envvar="ELM_API_URL_PREFIX", help="Base URL prepended to every request. Overrides the document's url_prefix.")
@click.option("--endpoint", "patterns", multiple=True, help='Only generate matching endpoints: "GET /users" or a path glob.')
@click.option("--no-imports", is_flag=True, help="Leave out the default import block.")
def generate(doc_path: Path, output: Path, module_name: str, url_prefix: str | None, patterns: tuple[str, ...], no_imports: bool):
    """Generate an Elm module from an API description."""
    click.echo(f"Parsing {doc_path}...")
    api = _load(doc_path, patterns)
    click.echo(f"Found {len(api.endpoints)} endpoints.")

    if url_prefix is None:
        url_prefix = api.url_prefix or ""
    options = ElmOptions(url_prefix=url_prefix)

    try:
        declarations = generate_elm_for_api_with(options, api)
    except ElmTypeError as e:
        raise click.ClickException(str(e)) from e

    for name, err in validate_declarations(declarations).items():
        click.echo(f"  Warning: {name}: {err}", err=True)

    if not no_imports:
        declarations = [DEFAULT_ELM_IMPORTS] + declarations
    try:
        spec = spec_from_module_name(module_name, declarations)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--module") from e

    for file_path in specs_to_dir([spec], output):
        click.echo(f"  Created {file_path}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--endpoint", "patterns", multiple=True, help='Only list matching endpoints: "GET /users" or a path glob.')
def endpoints(doc_path: Path, patterns: tuple[str, ...]):
    """List endpoints and the Elm function generated for each."""
    api = _load(doc_path, patterns)
    try:
        requests = get_endpoints(api)
    except ElmTypeError as e:
        raise click.ClickException(str(e)) from e

    for ep, request in zip(api.endpoints, requests):
        click.echo(f"{ep.method} {ep.path} -> {function_name(request)}")
