"""
Type resolver for declared field types.

Maps a type expression to a schema node and reports whether the type is
optional, map-like or a reference to another named schema.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Mapping

from ..declaration.type_expr import TypeExpr, TypeExprKind
from ..schema_tree.nodes import (
    ArraySchema,
    EmptySchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)


@dataclass
class ResolvedType:
    """Result of resolving a declared type."""

    node: SchemaNode
    is_optional: bool = False
    is_map_like: bool = False
    is_reference: bool = False


class TypeResolver(ABC):
    """Resolves declared types to schema nodes.

    Implementations must be referentially transparent: the same type always
    resolves to an equal schema.
    """

    @abstractmethod
    def resolve(self, type_expr: TypeExpr) -> ResolvedType:
        """
        Resolve a type expression.

        Args:
            type_expr: The declared type

        Returns:
            ResolvedType with a fresh schema node
        """

    def view(self, type_expr: TypeExpr) -> TypeExpr:
        """The type expression this resolver actually resolves for ``type_expr``."""
        return type_expr


class DefaultTypeResolver(TypeResolver):
    """Resolves standard library types; everything else is a reference by name."""

    # Primitive type names -> (schema type, format)
    PRIMITIVES: dict[str, tuple[str, str | None]] = {
        "String": ("string", None),
        "str": ("string", None),
        "char": ("string", None),
        "bool": ("boolean", None),
        "i8": ("integer", "int32"),
        "i16": ("integer", "int32"),
        "i32": ("integer", "int32"),
        "i64": ("integer", "int64"),
        "isize": ("integer", "int64"),
        "u8": ("integer", "int32"),
        "u16": ("integer", "int32"),
        "u32": ("integer", "int32"),
        "u64": ("integer", "int64"),
        "usize": ("integer", "int64"),
        "i128": ("integer", None),
        "u128": ("integer", None),
        "f32": ("number", "float"),
        "f64": ("number", "double"),
        "Uuid": ("string", "uuid"),
        "PathBuf": ("string", None),
    }

    OPTIONS = {"Option"}
    SEQUENCES = {"Vec", "VecDeque", "LinkedList"}
    SETS = {"HashSet", "BTreeSet", "IndexSet"}
    MAPS = {"HashMap", "BTreeMap", "IndexMap"}
    WRAPPERS = {"Box", "Rc", "Arc", "Cow", "RefCell", "Cell"}
    FREE_FORM = {"Value"}

    def resolve(self, type_expr: TypeExpr) -> ResolvedType:
        if type_expr.kind == TypeExprKind.REFERENCE:
            return self.resolve(type_expr.args[0])

        if type_expr.kind in (TypeExprKind.SLICE, TypeExprKind.ARRAY):
            items = self.resolve(type_expr.args[0]).node
            length = int(type_expr.length) if type_expr.length and type_expr.length.isdigit() else None
            return ResolvedType(ArraySchema(items=items, min_items=length, max_items=length))

        if type_expr.kind == TypeExprKind.TUPLE:
            if not type_expr.args:
                return ResolvedType(EmptySchema())
            count = len(type_expr.args)
            return ResolvedType(ArraySchema(items=ObjectSchema(), min_items=count, max_items=count))

        if type_expr.kind == TypeExprKind.LIFETIME:
            return ResolvedType(EmptySchema())

        return self._resolve_path(type_expr)

    def _resolve_path(self, type_expr: TypeExpr) -> ResolvedType:
        name = type_expr.name
        type_args = type_expr.type_args

        if name in self.OPTIONS and type_args:
            inner = self.resolve(type_args[0])
            return ResolvedType(
                node=replace(inner.node, nullable=True),
                is_optional=True,
                is_map_like=inner.is_map_like,
                is_reference=inner.is_reference,
            )

        if name in self.SEQUENCES or name in self.SETS:
            items = self.resolve(type_args[0]).node if type_args else EmptySchema()
            return ResolvedType(ArraySchema(items=items, unique_items=name in self.SETS))

        if name in self.MAPS:
            values: SchemaNode | bool = self.resolve(type_args[1]).node if len(type_args) > 1 else True
            return ResolvedType(ObjectSchema(additional_properties=values), is_map_like=True)

        if name in self.WRAPPERS and type_args:
            return self.resolve(type_args[-1])

        if name in self.FREE_FORM:
            return ResolvedType(ObjectSchema())

        if name in self.PRIMITIVES:
            schema_type, fmt = self.PRIMITIVES[name]
            return ResolvedType(PrimitiveSchema(schema_type=schema_type, format=fmt))

        return ResolvedType(RefSchema(name=name), is_reference=True)


class SubstitutedTypeResolver(TypeResolver):
    """A view of another resolver with type parameters bound to concrete types."""

    def __init__(self, inner: TypeResolver, bindings: Mapping[str, TypeExpr]):
        self.inner = inner
        self.bindings = dict(bindings)

    def view(self, type_expr: TypeExpr) -> TypeExpr:
        return self.inner.view(type_expr.substitute(self.bindings))

    def resolve(self, type_expr: TypeExpr) -> ResolvedType:
        return self.inner.resolve(type_expr.substitute(self.bindings))
