"""Generation options and the import preamble for generated Elm modules."""

from pydantic import BaseModel, ConfigDict


class ElmOptions(BaseModel):
    """Options to configure how code is generated."""

    model_config = ConfigDict(frozen=True)

    # Protocol, host and path prefix used as the base for all requests,
    # e.g. "https://mydomain.com/api/v1". Prepended literally.
    url_prefix: str = ""


DEFAULT_ELM_OPTIONS = ElmOptions()

# Imports required by generated code; put these at the top of the module.
DEFAULT_ELM_IMPORTS = "\n".join([
    "import Json.Decode exposing ((:=))",
    "import Json.Decode.Extra exposing ((|:))",
    "import Json.Encode",
    "import Http",
    "import String",
    "import Task",
]) + "\n"
