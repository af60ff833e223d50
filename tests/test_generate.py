from pathlib import Path

from elm_api_gen.generator.foreign import get_endpoints
from elm_api_gen.generator.generate import generate_elm_for_api, generate_elm_for_api_with
from elm_api_gen.generator.options import DEFAULT_ELM_IMPORTS, ElmOptions
from elm_api_gen.generator.validator import validate_declarations
from elm_api_gen.parser.base import ApiDescription
from elm_api_gen.parser.loader import load_api

FIXTURES = Path(__file__).parent / "fixtures"

USER = {"id": "Int", "name": "String"}


def _api(*endpoints, **types) -> ApiDescription:
    return ApiDescription(types=types, endpoints=list(endpoints))


class TestGenerateElmForApi:
    def test_empty_api(self):
        assert generate_elm_for_api(ApiDescription()) == []

    def test_identical_functions_deduplicated(self):
        endpoint = {"method": "GET", "path": "/users"}
        sources = generate_elm_for_api(_api(endpoint, endpoint))
        assert len(sources) == 1

    def test_same_name_different_text_both_kept(self):
        api = _api(
            {"name": "fetch", "method": "GET", "path": "/a"},
            {"name": "fetch", "method": "GET", "path": "/b"},
        )
        assert len(generate_elm_for_api(api)) == 2

    def test_collection_and_item_get_distinct_names(self):
        api = _api(
            {"method": "GET", "path": "/users"},
            {"method": "GET", "path": "/users/{id:Int}"},
        )
        names = [s.split(" ", 1)[0] for s in generate_elm_for_api(api)]
        assert names == ["getUsers", "getUsersById"]
        assert validate_declarations(generate_elm_for_api(api)) == {}

    def test_url_prefix_changes_text(self):
        api = _api({"method": "GET", "path": "/users"})
        plain = generate_elm_for_api(api)
        prefixed = generate_elm_for_api_with(ElmOptions(url_prefix="https://example.com"), api)
        assert plain != prefixed
        assert len(set(plain + prefixed)) == 2

    def test_shared_return_type_sources_once_in_first_use_order(self):
        api = _api(
            {"name": "getUser", "method": "GET", "path": "/users/{id:Int}", "returns": "User"},
            {"name": "getMe", "method": "GET", "path": "/me", "returns": "User"},
            User=USER,
        )
        sources = generate_elm_for_api(api)
        heads = [s.split("\n", 1)[0] for s in sources]
        assert heads == [
            "type alias User =",
            "decodeUser : Json.Decode.Decoder User",
            "getUser : Int -> Task.Task Http.Error (User)",
            "getMe : Task.Task Http.Error (User)",
        ]

    def test_accepts_extracted_requests(self):
        api = _api({"method": "GET", "path": "/users"})
        requests = get_endpoints(api)
        assert generate_elm_for_api(requests) == generate_elm_for_api(api)

    def test_output_is_repeatable(self):
        api = load_api(FIXTURES / "users_api.yaml")
        assert generate_elm_for_api(api) == generate_elm_for_api(api)


class TestFixtureApi:
    def test_functions_in_declaration_order(self):
        sources = generate_elm_for_api(load_api(FIXTURES / "users_api.yaml"))
        functions = [s.split(" ", 1)[0] for s in sources if " : " in s.split("\n", 1)[0] and not s.startswith(("decode", "encode"))]
        assert functions == ["getUser", "getUsers", "createUser", "deleteUser"]

    def test_nested_record_defined_before_user(self):
        sources = generate_elm_for_api(load_api(FIXTURES / "users_api.yaml"))
        heads = [s.split("\n", 1)[0] for s in sources]
        assert heads.index("type alias Address =") < heads.index("type alias User =")
        assert heads.count("type alias User =") == 1

    def test_encoders_only_for_bodies(self):
        sources = generate_elm_for_api(load_api(FIXTURES / "users_api.yaml"))
        heads = [s.split("\n", 1)[0] for s in sources]
        encoders = [h for h in heads if h.startswith("encode")]
        assert encoders == ["encodeAddress : Address -> Json.Encode.Value", "encodeUser : User -> Json.Encode.Value"]
        assert heads.index("encodeUser : User -> Json.Encode.Value") < heads.index(
            "createUser : User -> Task.Task Http.Error (User)"
        )


class TestDefaultImports:
    def test_import_lines(self):
        assert DEFAULT_ELM_IMPORTS.splitlines() == [
            "import Json.Decode exposing ((:=))",
            "import Json.Decode.Extra exposing ((|:))",
            "import Json.Encode",
            "import Http",
            "import String",
            "import Task",
        ]
        assert DEFAULT_ELM_IMPORTS.endswith("\n")
