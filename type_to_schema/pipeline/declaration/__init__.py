"""
Declaration module.

Contains the declaration node definitions, type expressions and the parser
for declaration dictionaries.
"""

from __future__ import annotations

from .nodes import (
    AdjacentlyTagged,
    AliasBinding,
    ContainerFeatures,
    ContainerRules,
    Declaration,
    EnumShape,
    ExternallyTagged,
    FieldDecl,
    FieldFeatures,
    FieldRules,
    Generics,
    InternallyTagged,
    NamedFields,
    PositionalFields,
    UnitShape,
    Untagged,
    VariantDecl,
    VariantFeatures,
    VariantRules,
)
from .parser import DeclarationParser
from .type_expr import TypeExpr, TypeExprKind

__all__ = [
    "Declaration",
    "NamedFields",
    "PositionalFields",
    "UnitShape",
    "EnumShape",
    "FieldDecl",
    "VariantDecl",
    "Generics",
    "AliasBinding",
    "ContainerFeatures",
    "FieldFeatures",
    "VariantFeatures",
    "ContainerRules",
    "FieldRules",
    "VariantRules",
    "ExternallyTagged",
    "InternallyTagged",
    "AdjacentlyTagged",
    "Untagged",
    "TypeExpr",
    "TypeExprKind",
    "DeclarationParser",
]
