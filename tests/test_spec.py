import pytest

from elm_api_gen.generator.options import DEFAULT_ELM_IMPORTS
from elm_api_gen.generator.spec import Spec, spec_from_module_name, specs_to_dir


class TestSpec:
    def test_render_module_header(self):
        spec = Spec(namespace=["Generated", "MyApi"], declarations=["a : Int\na =\n  1"])
        assert spec.render() == "module Generated.MyApi exposing (..)\n\na : Int\na =\n  1\n"

    def test_render_with_imports(self):
        spec = Spec(namespace=["Api"], declarations=[DEFAULT_ELM_IMPORTS, "x : Int\nx =\n  1"])
        rendered = spec.render()
        assert rendered.startswith("module Api exposing (..)\n\nimport Json.Decode exposing ((:=))\n")
        assert "import Task\n\nx : Int" in rendered

    def test_from_module_name(self):
        spec = spec_from_module_name("Generated.MyApi", [])
        assert spec.namespace == ["Generated", "MyApi"]
        assert spec.module_name == "Generated.MyApi"

    def test_invalid_module_name(self):
        with pytest.raises(ValueError):
            spec_from_module_name("...", [])


class TestSpecsToDir:
    def test_writes_nested_module(self, tmp_path):
        spec = Spec(namespace=["Generated", "MyApi"], declarations=["x : Int\nx =\n  1"])
        written = specs_to_dir([spec], tmp_path)
        target = tmp_path / "Generated" / "MyApi.elm"
        assert written == [target]
        assert target.read_text(encoding="utf-8").startswith("module Generated.MyApi exposing (..)")

    def test_writes_top_level_module(self, tmp_path):
        specs_to_dir([Spec(namespace=["Api"], declarations=[])], tmp_path)
        assert (tmp_path / "Api.elm").read_text(encoding="utf-8") == "module Api exposing (..)\n"
