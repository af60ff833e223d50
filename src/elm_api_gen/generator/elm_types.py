"""Elm type registry.

Maps type references to Elm type names, JSON decoder/encoder references
and the source fragments (type aliases, decoders, encoders) they need.
"""

from pydantic import BaseModel, ConfigDict

from elm_api_gen.gen_logging import get_logger
from elm_api_gen.parser.base import ApiDescription, TypeRef

logger = get_logger(__name__)


class ElmTypeError(ValueError):
    """A type reference cannot be rendered as Elm."""


class GeneratedElm(BaseModel):
    """A resolved type: references plus the fragments that define them."""

    model_config = ConfigDict(frozen=True)

    elm_type: str
    elm_decoder: str
    elm_encoder: str
    type_sources: tuple[str, ...] = ()
    decoder_sources: tuple[str, ...] = ()
    encoder_sources: tuple[str, ...] = ()


def _merge(*groups) -> tuple[str, ...]:
    return tuple(dict.fromkeys(source for group in groups for source in group))


class ElmType:
    """Rendering capability for one Elm type constructor.

    Subclasses name the constructor applied to already resolved arguments
    and give references to its JSON decoder and encoder.
    """

    arity = 0

    def name_of(self, args: list[GeneratedElm]) -> str:
        raise NotImplementedError

    def decoder_ref_of(self, args: list[GeneratedElm]) -> str:
        raise NotImplementedError

    def encoder_ref_of(self, args: list[GeneratedElm]) -> str:
        raise NotImplementedError

    def generate(self, args: list[GeneratedElm], registry: "ElmTypeRegistry") -> GeneratedElm:
        return GeneratedElm(
            elm_type=self.name_of(args),
            elm_decoder=self.decoder_ref_of(args),
            elm_encoder=self.encoder_ref_of(args),
            type_sources=_merge(*(a.type_sources for a in args)),
            decoder_sources=_merge(*(a.decoder_sources for a in args)),
            encoder_sources=_merge(*(a.encoder_sources for a in args)),
        )


class PrimitiveType(ElmType):
    def __init__(self, name: str, decoder: str, encoder: str):
        self.name = name
        self.decoder = decoder
        self.encoder = encoder

    def name_of(self, args):
        return self.name

    def decoder_ref_of(self, args):
        return self.decoder

    def encoder_ref_of(self, args):
        return self.encoder


class ListType(ElmType):
    arity = 1

    def name_of(self, args):
        return f"List ({args[0].elm_type})"

    def decoder_ref_of(self, args):
        return f"(Json.Decode.list {args[0].elm_decoder})"

    def encoder_ref_of(self, args):
        return f"(Json.Encode.list << List.map {args[0].elm_encoder})"


class MaybeType(ElmType):
    arity = 1

    def name_of(self, args):
        return f"Maybe ({args[0].elm_type})"

    def decoder_ref_of(self, args):
        return f"(Json.Decode.maybe {args[0].elm_decoder})"

    def encoder_ref_of(self, args):
        return f"(Maybe.withDefault Json.Encode.null << Maybe.map {args[0].elm_encoder})"


class RecordType(ElmType):
    """A record type alias that brings its own definition, decoder and encoder."""

    def __init__(self, name: str, fields: dict[str, TypeRef]):
        self.name = name
        self.fields = fields

    def name_of(self, args):
        return self.name

    def decoder_ref_of(self, args):
        return f"decode{self.name}"

    def encoder_ref_of(self, args):
        return f"encode{self.name}"

    def generate(self, args, registry):
        fields = [(name, registry.generate(ref)) for name, ref in self.fields.items()]
        resolved = [f for _, f in fields]
        return GeneratedElm(
            elm_type=self.name,
            elm_decoder=self.decoder_ref_of(args),
            elm_encoder=self.encoder_ref_of(args),
            type_sources=_merge(*(f.type_sources for f in resolved), [self._type_source(fields)]),
            decoder_sources=_merge(*(f.decoder_sources for f in resolved), [self._decoder_source(fields)]),
            encoder_sources=_merge(*(f.encoder_sources for f in resolved), [self._encoder_source(fields)]),
        )

    def _type_source(self, fields: list[tuple[str, GeneratedElm]]) -> str:
        lines = [f"type alias {self.name} ="]
        if not fields:
            lines.append("  {}")
        else:
            for i, (name, field) in enumerate(fields):
                lead = "{" if i == 0 else ","
                lines.append(f"  {lead} {name} : {field.elm_type}")
            lines.append("  }")
        return "\n".join(lines)

    def _decoder_source(self, fields: list[tuple[str, GeneratedElm]]) -> str:
        fn = self.decoder_ref_of([])
        lines = [
            f"{fn} : Json.Decode.Decoder {self.name}",
            f"{fn} =",
            f"  Json.Decode.succeed {self.name}",
        ]
        for name, field in fields:
            lines.append(f'    |: ("{name}" := {field.elm_decoder})')
        return "\n".join(lines)

    def _encoder_source(self, fields: list[tuple[str, GeneratedElm]]) -> str:
        fn = self.encoder_ref_of([])
        lines = [
            f"{fn} : {self.name} -> Json.Encode.Value",
            f"{fn} x =",
            "  Json.Encode.object",
        ]
        if not fields:
            lines.append("    []")
        else:
            for i, (name, field) in enumerate(fields):
                lead = "[" if i == 0 else ","
                lines.append(f'    {lead} ( "{name}", {field.elm_encoder} x.{name} )')
            lines.append("    ]")
        return "\n".join(lines)


BUILTIN_TYPES: dict[str, ElmType] = {
    "Int": PrimitiveType("Int", "Json.Decode.int", "Json.Encode.int"),
    "Float": PrimitiveType("Float", "Json.Decode.float", "Json.Encode.float"),
    "String": PrimitiveType("String", "Json.Decode.string", "Json.Encode.string"),
    "Bool": PrimitiveType("Bool", "Json.Decode.bool", "Json.Encode.bool"),
    "()": PrimitiveType("()", "(Json.Decode.succeed ())", "(\\_ -> Json.Encode.null)"),
    "List": ListType(),
    "Maybe": MaybeType(),
}


class ElmTypeRegistry:
    """Lookup table from type constructor names to ElmType capabilities."""

    def __init__(self, types: dict[str, ElmType] | None = None):
        self._types: dict[str, ElmType] = dict(BUILTIN_TYPES)
        if types:
            self._types.update(types)
        self._cache: dict[TypeRef, GeneratedElm] = {}
        self._resolving: set[TypeRef] = set()

    @classmethod
    def from_description(cls, api: ApiDescription) -> "ElmTypeRegistry":
        """Registry with every record type declared in the description."""
        registry = cls()
        for name, fields in api.types.items():
            registry.register(name, RecordType(name, fields))
        return registry

    def register(self, name: str, elm_type: ElmType) -> None:
        if name in self._types:
            logger.debug(f"  [types] overriding {name}")
        self._types[name] = elm_type
        self._cache.clear()

    def generate(self, ref: TypeRef) -> GeneratedElm:
        """Resolve a type reference, including the fragments it depends on."""
        if ref in self._cache:
            return self._cache[ref]

        elm_type = self._types.get(ref.name)
        if elm_type is None:
            raise ElmTypeError(f"unknown type {ref.name!r}")
        if len(ref.args) != elm_type.arity:
            raise ElmTypeError(
                f"{ref.name} expects {elm_type.arity} type argument(s), got {len(ref.args)} in {ref}"
            )
        if ref in self._resolving:
            raise ElmTypeError(f"recursive type alias {ref}")

        self._resolving.add(ref)
        try:
            args = [self.generate(arg) for arg in ref.args]
            generated = elm_type.generate(args, self)
        finally:
            self._resolving.discard(ref)

        self._cache[ref] = generated
        return generated

    def name_of(self, ref: TypeRef) -> str:
        return self.generate(ref).elm_type

    def decoder_ref_of(self, ref: TypeRef) -> str:
        return self.generate(ref).elm_decoder

    def encoder_ref_of(self, ref: TypeRef) -> str:
        return self.generate(ref).elm_encoder
