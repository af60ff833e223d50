"""Elm module specs and writing them to a source directory."""

from pathlib import Path

from pydantic import BaseModel

from elm_api_gen.gen_logging import get_logger

logger = get_logger(__name__)


class Spec(BaseModel):
    """An Elm module: its dotted namespace and top-level declarations."""

    namespace: list[str]  # ["Generated", "MyApi"]
    declarations: list[str]

    @property
    def module_name(self) -> str:
        return ".".join(self.namespace)

    def render(self) -> str:
        header = f"module {self.module_name} exposing (..)"
        return "\n\n".join([header] + [d.strip("\n") for d in self.declarations]) + "\n"


def spec_from_module_name(module_name: str, declarations: list[str]) -> Spec:
    """Build a Spec from a dotted module name like ``Generated.MyApi``."""
    namespace = [part for part in module_name.split(".") if part]
    if not namespace:
        raise ValueError(f"invalid Elm module name: {module_name!r}")
    return Spec(namespace=namespace, declarations=declarations)


def specs_to_dir(specs: list[Spec], root: Path) -> list[Path]:
    """Write each spec to ``root/<A>/<B>.elm``. Returns the written paths."""
    written = []
    for spec in specs:
        file_path = root.joinpath(*spec.namespace[:-1]) / f"{spec.namespace[-1]}.elm"
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(spec.render(), encoding="utf-8")
        logger.debug(f"[GENERATED] {file_path}")
        written.append(file_path)
    return written
