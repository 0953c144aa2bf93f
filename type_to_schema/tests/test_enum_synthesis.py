import json
from pathlib import Path

import pytest

from type_to_schema import PipelineGenerator, SchemaAssembler, SchemaGeneratorConfig
from type_to_schema.pipeline.declaration import DeclarationParser
from type_to_schema.pipeline.errors import MalformedDeclaration
from type_to_schema.pipeline.resolvers import DefaultTypeResolver, ResolvedType, SerdeRuleResolver
from type_to_schema.pipeline.schema_tree import OneOfSchema, PrimitiveSchema
from type_to_schema.pipeline.synthesis.enum_synthesizer import EnumKind, cast_discriminant, classify_enum


def load_test_data():
    """Load test cases from JSON file"""
    test_data_path = Path(__file__).parent / "test_data" / "enum_synthesis_tests.json"
    with open(test_data_path) as f:
        return json.load(f)


@pytest.mark.parametrize("test_case", load_test_data(), ids=lambda tc: tc["name"])
def test_enum_synthesis(test_case):
    """Test schema synthesis of enums for every tagging representation"""
    config = SchemaGeneratorConfig.from_dict(test_case.get("config", {}))

    generator = PipelineGenerator(test_case["declaration"], config)
    [result] = generator.generate()

    assert result.schema.to_dict() == test_case["expected"]


@pytest.mark.parametrize(
    "declaration,config,expected",
    [
        ({"kind": "enum", "name": "E", "variants": [{"name": "A"}]}, {}, EnumKind.SIMPLE),
        ({"kind": "enum", "name": "E", "repr": "u8", "variants": [{"name": "A"}]}, {}, EnumKind.DISCRIMINANT),
        (
            {"kind": "enum", "name": "E", "repr": "u8", "variants": [{"name": "A"}]},
            {"repr_enums": False},
            EnumKind.SIMPLE,
        ),
        (
            {"kind": "enum", "name": "E", "variants": [{"name": "A"}, {"name": "B", "fields": [{"type": "i32"}]}]},
            {},
            EnumKind.COMPLEX,
        ),
    ],
)
def test_classify_enum(declaration, config, expected):
    """Test enum classification"""
    parsed = DeclarationParser().parse(declaration)
    assert classify_enum(parsed, SchemaGeneratorConfig.from_dict(config)) == expected


@pytest.mark.parametrize(
    "value,base_type,expected",
    [
        (3, "u8", 3),
        (256, "u8", 0),
        (-1, "u8", 255),
        (128, "i8", -128),
        (-1, "u32", 4294967295),
        (2**63, "isize", -(2**63)),
        (2**64, "u128", 2**64),
        (-5, "i128", -5),
    ],
)
def test_cast_discriminant(value, base_type, expected):
    """Test discriminant wrapping to the declared base type"""
    assert cast_discriminant(value, base_type) == expected


def test_untagged_simple_enum_with_metadata():
    """Container metadata is kept on the empty schema of an untagged unit-only enum"""
    generator = PipelineGenerator(
        {
            "kind": "enum",
            "name": "Any",
            "docs": [" Accepts anything."],
            "serde": {"untagged": True},
            "variants": [{"name": "A"}],
        }
    )
    [result] = generator.generate()
    assert result.schema.to_dict() == {"description": "Accepts anything."}


class EitherResolver(DefaultTypeResolver):
    """Resolves ``Either`` as a union of a string and an integer"""

    def resolve(self, type_expr):
        if type_expr.is_path and type_expr.name == "Either":
            return ResolvedType(OneOfSchema(items=[PrimitiveSchema(schema_type="string"), PrimitiveSchema(schema_type="integer")]))
        return super().resolve(type_expr)


def test_internally_tagged_union_newtype_fails():
    """A union cannot carry the tag property of an internally tagged variant"""
    declaration = DeclarationParser().parse(
        {
            "kind": "enum",
            "name": "Choice",
            "location": "src/choice.rs:5",
            "serde": {"tag": "type"},
            "variants": [{"name": "Either", "fields": [{"type": "Either"}]}],
        }
    )
    assembler = SchemaAssembler(SchemaGeneratorConfig(), EitherResolver(), SerdeRuleResolver())
    with pytest.raises(MalformedDeclaration) as exc_info:
        assembler.assemble(declaration)
    assert "src/choice.rs:5: Newtype enum variant `Either` of `Choice` wraps a union" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__])
