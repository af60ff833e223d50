"""API description document loader.

Reads YAML or JSON (JSON is valid YAML) into an ApiDescription.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .base import ApiDescription


class ApiDescriptionError(ValueError):
    """The description document cannot be read as an API description."""


def load_api(file_path: Path) -> ApiDescription:
    """Parse a description file into an ApiDescription."""
    text = file_path.read_text(encoding="utf-8")
    return parse_api(text, source=str(file_path))


def parse_api(text: str, source: str = "<string>") -> ApiDescription:
    """Parse description document text into an ApiDescription."""
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ApiDescriptionError(f"{source}: not valid YAML/JSON: {e}") from e

    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ApiDescriptionError(f"{source}: top level must be a mapping, got {type(doc).__name__}")

    try:
        return ApiDescription.model_validate(doc)
    except ValidationError as e:
        raise ApiDescriptionError(f"{source}: {e}") from e
