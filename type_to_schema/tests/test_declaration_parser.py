from unittest import TestCase

from type_to_schema.pipeline.declaration import (
    DeclarationParser,
    EnumShape,
    NamedFields,
    PositionalFields,
    TypeExpr,
    UnitShape,
)
from type_to_schema.pipeline.errors import MalformedDeclaration
from type_to_schema.pipeline.schema_tree import OpaqueSchema
from type_to_schema.utils import RenameRule


class TestDeclarationParser(TestCase):
    """Test parsing of declaration dictionaries"""

    def setUp(self):
        self.parser = DeclarationParser()

    def test_struct_shapes(self):
        unit = self.parser.parse({"name": "Unit"})
        self.assertIsInstance(unit.shape, UnitShape)

        named = self.parser.parse({"name": "Named", "fields": [{"name": "a", "type": "i32"}]})
        self.assertIsInstance(named.shape, NamedFields)
        self.assertEqual(named.shape.fields[0].ty, TypeExpr.path("i32"))

        positional = self.parser.parse({"name": "Tuple", "fields": [{"type": "i32"}, {"type": "u8"}]})
        self.assertIsInstance(positional.shape, PositionalFields)
        self.assertIsNone(positional.shape.fields[1].ident)
        self.assertEqual(positional.shape.fields[1].display_name(1), "1")

    def test_enum_variants(self):
        declaration = self.parser.parse(
            {
                "kind": "enum",
                "name": "Shape",
                "repr": "u8",
                "variants": [
                    {"name": "Dot", "discriminant": 3},
                    {"name": "Circle", "fields": [{"name": "radius", "type": "f64"}], "docs": " Round."},
                    {"name": "Pair", "fields": [{"type": "i32"}, {"type": "i32"}]},
                ],
            }
        )
        self.assertIsInstance(declaration.shape, EnumShape)
        dot, circle, pair = declaration.shape.variants
        self.assertEqual(dot.discriminant, 3)
        self.assertIsInstance(dot.shape, UnitShape)
        self.assertIsInstance(circle.shape, NamedFields)
        self.assertEqual(circle.docs, (" Round.",))
        self.assertIsInstance(pair.shape, PositionalFields)
        self.assertEqual(declaration.repr, "u8")

    def test_features(self):
        declaration = self.parser.parse(
            {
                "name": "Pet",
                "schema": {
                    "title": "A pet",
                    "rename_all": "camelCase",
                    "as": "api::models::Pet<T>",
                    "default": None,
                },
                "fields": [
                    {
                        "name": "photo",
                        "type": "Vec<u8>",
                        "schema": {"schema_with": {"type": "string"}, "required": True, "example": "abc"},
                    }
                ],
            }
        )
        features = declaration.features
        self.assertEqual(features.title, "A pet")
        self.assertEqual(features.rename_all, RenameRule.CAMEL_CASE)
        self.assertEqual(features.schema_as.segments, ("api", "models", "Pet"))
        self.assertTrue(features.has_default)
        self.assertIsNone(features.default)

        field_features = declaration.shape.fields[0].features
        self.assertEqual(field_features.schema_with, OpaqueSchema(body={"type": "string"}))
        self.assertTrue(field_features.required)
        self.assertFalse(field_features.has_default)

    def test_generics_and_aliases(self):
        declaration = self.parser.parse(
            {
                "name": "Wrapper",
                "generics": ["'a", "T", "U"],
                "aliases": ["A = Wrapper<'a, i32, u8>", {"name": "B", "target": "Wrapper<String>"}],
                "fields": [{"name": "a", "type": "T"}],
            }
        )
        self.assertEqual(declaration.generics.lifetimes, ("'a",))
        self.assertEqual(declaration.generics.type_params, ("T", "U"))
        self.assertEqual([alias.name for alias in declaration.aliases], ["A", "B"])
        self.assertEqual(declaration.aliases[1].target, TypeExpr.parse("Wrapper<String>"))

    def test_generics_as_dict(self):
        declaration = self.parser.parse({"name": "W", "generics": {"lifetimes": ["'a"], "type_params": ["T"]}})
        self.assertEqual(declaration.generics.lifetimes, ("'a",))
        self.assertEqual(declaration.generics.type_params, ("T",))

    def test_docs_as_string(self):
        declaration = self.parser.parse({"name": "Doc", "docs": " First.\n Second."})
        self.assertEqual(declaration.docs, (" First.", " Second."))

    def test_malformed_declarations(self):
        cases = [
            {"kind": "struct"},
            {"kind": "union", "name": "U"},
            {"name": "S", "fields": [{"name": "a"}]},
            {"name": "S", "fields": [{"name": "not an ident", "type": "i32"}]},
            {"kind": "enum", "name": "E", "variants": [{"name": "A", "discriminant": "one"}]},
            {"name": "S", "schema": {"rename_all": "Sentence case"}},
            {"name": "S", "schema": {"as": "&Pet"}},
            {"name": "S", "fields": [{"name": "a", "type": "i32", "schema": {"schema_with": "not a schema"}}]},
            {"name": "S", "generics": "T"},
            {"name": "S", "generics": ["T", 1]},
            {"name": "S", "generics": {"type_params": [None]}},
            {"name": "S", "aliases": [{"name": "A"}]},
            {"name": "S", "aliases": [{"name": 7, "target": "S<i32>"}]},
            {"name": "S", "aliases": ["1A = S<i32>"]},
        ]
        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(MalformedDeclaration):
                    self.parser.parse(data)

    def test_location_is_attached_to_errors(self):
        with self.assertRaises(MalformedDeclaration) as ctx:
            self.parser.parse({"name": "S", "location": "src/s.rs:9", "fields": [{"name": "a", "type": "Vec<"}]})
        self.assertEqual(ctx.exception.location, "src/s.rs:9")
