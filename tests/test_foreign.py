import pytest

from elm_api_gen.generator.elm_types import ElmTypeError
from elm_api_gen.generator.foreign import camel_case, default_func_name, get_endpoints
from elm_api_gen.parser.base import ApiDescription, QueryKind, parse_path


def _api(*endpoints, **types) -> ApiDescription:
    return ApiDescription(types=types, endpoints=list(endpoints))


class TestCamelCase:
    def test_first_word_kept(self):
        assert camel_case(["get", "users"]) == "getUsers"

    def test_already_camel(self):
        assert camel_case(["getUser"]) == "getUser"

    def test_separators_split_words(self):
        assert camel_case(["get", "user-profiles", "by_id"]) == "getUserProfilesById"

    def test_empty(self):
        assert camel_case([]) == ""


class TestDefaultFuncName:
    def test_method_then_segments_with_captures(self):
        assert default_func_name("GET", parse_path("/users/{id:Int}/posts")) == ["get", "users", "by", "id", "posts"]

    def test_capture_name_in_function_name(self):
        requests = get_endpoints(_api({"method": "GET", "path": "/users/{userId:Int}"}))
        assert camel_case(requests[0].func_name) == "getUsersByUserId"


class TestGetEndpoints:
    def test_declaration_order_kept(self):
        api = _api(
            {"method": "GET", "path": "/b"},
            {"method": "GET", "path": "/a"},
        )
        requests = get_endpoints(api)
        assert [r.func_name for r in requests] == [("get", "b"), ("get", "a")]

    def test_explicit_name_wins(self):
        requests = get_endpoints(_api({"name": "fetchAll", "method": "GET", "path": "/users"}))
        assert requests[0].func_name == ("fetchAll",)

    def test_captures_resolved(self):
        requests = get_endpoints(_api({"method": "GET", "path": "/users/{id:Int}"}))
        request = requests[0]
        assert request.path[0].static == "users"
        assert request.path[1].capture.name == "id"
        assert request.path[1].capture.arg_type.elm_type == "Int"
        assert [a.name for a in request.captures] == ["id"]

    def test_query_and_body(self):
        api = _api(
            {
                "method": "POST",
                "path": "/users",
                "query": [{"name": "dry", "kind": "flag"}],
                "body": "User",
                "returns": "User",
            },
            User={"id": "Int"},
        )
        request = get_endpoints(api)[0]
        assert request.query[0].kind is QueryKind.FLAG
        assert request.query[0].arg.arg_type.elm_type == "Bool"
        assert request.body.elm_encoder == "encodeUser"
        assert request.return_type.elm_decoder == "decodeUser"

    def test_no_body_no_return(self):
        request = get_endpoints(_api({"method": "DELETE", "path": "/x"}))[0]
        assert request.body is None
        assert request.return_type is None

    def test_unknown_type_raises(self):
        with pytest.raises(ElmTypeError):
            get_endpoints(_api({"method": "GET", "path": "/x", "returns": "Missing"}))

    def test_empty_api(self):
        assert get_endpoints(ApiDescription()) == []
