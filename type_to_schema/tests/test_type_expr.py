from unittest import TestCase

import pytest

from type_to_schema.pipeline.declaration import TypeExpr, TypeExprKind
from type_to_schema.pipeline.errors import MalformedDeclaration


class TestTypeExprParser(TestCase):
    """Test parsing of declared field types"""

    def test_nested_generics(self):
        expr = TypeExpr.parse("Vec<Option<String>>")
        self.assertEqual(expr.name, "Vec")
        [inner] = expr.args
        self.assertEqual(inner.name, "Option")
        self.assertEqual(inner.args[0], TypeExpr.path("String"))

    def test_qualified_path(self):
        expr = TypeExpr.parse("std::collections::HashMap<String, T>")
        self.assertEqual(expr.segments, ("std", "collections", "HashMap"))
        self.assertEqual(expr.name, "HashMap")
        self.assertEqual(expr.type_args, (TypeExpr.path("String"), TypeExpr.path("T")))

    def test_reference(self):
        expr = TypeExpr.parse("&'a mut str")
        self.assertEqual(expr.kind, TypeExprKind.REFERENCE)
        self.assertEqual(expr.lifetime, "'a")
        self.assertTrue(expr.mutable)
        self.assertEqual(expr.args[0].name, "str")

    def test_lifetime_arguments_are_not_type_arguments(self):
        expr = TypeExpr.parse("Cow<'static, str>")
        self.assertEqual(len(expr.args), 2)
        self.assertEqual(expr.type_args, (TypeExpr.path("str"),))

    def test_tuple_slice_and_array(self):
        self.assertEqual(TypeExpr.parse("(i32, u8)").kind, TypeExprKind.TUPLE)
        self.assertEqual(TypeExpr.parse("()").args, ())
        self.assertEqual(TypeExpr.parse("[u8]").kind, TypeExprKind.SLICE)
        array = TypeExpr.parse("[u8; 4]")
        self.assertEqual(array.kind, TypeExprKind.ARRAY)
        self.assertEqual(array.length, "4")

    def test_raw_identifier(self):
        self.assertEqual(TypeExpr.parse("r#type").name, "r#type")

    def test_structural_equality(self):
        self.assertEqual(TypeExpr.parse("Vec< String >"), TypeExpr.parse("Vec<String>"))
        self.assertNotEqual(TypeExpr.parse("Vec<String>"), TypeExpr.parse("Vec<str>"))


@pytest.mark.parametrize(
    "text",
    [
        "Vec<Option<String>>",
        "std::collections::HashMap<String, T>",
        "&'a mut str",
        "&str",
        "(i32,)",
        "(i32, u8)",
        "()",
        "[u8]",
        "[u8; 4]",
        "Cow<'static, str>",
    ],
)
def test_render(text):
    """Rendering a parsed type gives back its canonical spelling"""
    assert TypeExpr.parse(text).render() == text


@pytest.mark.parametrize("text", ["Vec<String", "Vec<>>", "", "i32 i32", "[u8; 4", "Map<String,, i32>", "$"])
def test_parse_errors(text):
    with pytest.raises(MalformedDeclaration, match="Cannot parse type"):
        TypeExpr.parse(text)


def test_substitute_walks_generic_arguments():
    """Bound parameters are replaced at every depth of the type"""
    expr = TypeExpr.parse("HashMap<K, Vec<Option<V>>>")
    bindings = {"K": TypeExpr.path("String"), "V": TypeExpr.parse("Box<Pet>")}
    assert expr.substitute(bindings) == TypeExpr.parse("HashMap<String, Vec<Option<Box<Pet>>>>")


def test_substitute_leaves_qualified_paths():
    """Only bare single-segment names are type parameters"""
    expr = TypeExpr.parse("models::T<T>")
    assert expr.substitute({"T": TypeExpr.path("u8")}).render() == "models::T<u8>"


def test_substitute_through_references_and_tuples():
    expr = TypeExpr.parse("(&'a T, [T; 2])")
    assert expr.substitute({"T": TypeExpr.path("bool")}).render() == "(&'a bool, [bool; 2])"
