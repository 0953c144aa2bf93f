"""
Declaration node definitions.

These nodes describe a data-type declaration exactly as it was written:
its shape, its raw serialization directives and its pre-parsed schema
features. They are read-only for the whole synthesis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...utils import RenameRule
from .type_expr import TypeExpr

# Serialization rules


@dataclass(frozen=True)
class ExternallyTagged:
    """``{"Variant": payload}``"""


@dataclass(frozen=True)
class InternallyTagged:
    """``{"tag": "Variant", ...payload fields}``"""

    tag: str = "type"


@dataclass(frozen=True)
class AdjacentlyTagged:
    """``{"tag": "Variant", "content": payload}``"""

    tag: str = "t"
    content: str = "c"


@dataclass(frozen=True)
class Untagged:
    """Bare payload, no variant marker."""


EnumRepresentation = ExternallyTagged | InternallyTagged | AdjacentlyTagged | Untagged


@dataclass(frozen=True)
class ContainerRules:
    """Container level serialization rules."""

    rename_all: RenameRule | None = None
    deny_unknown_fields: bool = False
    default: bool = False
    enum_repr: EnumRepresentation = field(default_factory=ExternallyTagged)


@dataclass(frozen=True)
class FieldRules:
    """Field level serialization rules."""

    skip: bool = False
    skip_serializing_if: bool = False
    double_option: bool = False
    flatten: bool = False
    rename: str | None = None
    default: bool = False


@dataclass(frozen=True)
class VariantRules:
    """Variant level serialization rules.

    ``rename_all`` applies to the fields of the variant, not to its name.
    """

    skip: bool = False
    rename: str | None = None
    rename_all: RenameRule | None = None


# Schema features


@dataclass(frozen=True)
class ContainerFeatures:
    """Pre-parsed schema features of a struct or enum."""

    title: str | None = None
    example: Any = None
    default: Any = None
    has_default: bool = False
    deprecated: bool = False
    rename_all: RenameRule | None = None

    # Override of the emitted schema name ("schema as")
    schema_as: TypeExpr | None = None

    # Override of the element type of a positional struct
    value_type: TypeExpr | None = None


@dataclass(frozen=True)
class FieldFeatures:
    """Pre-parsed schema features of a field."""

    rename: str | None = None
    required: bool | None = None
    default: Any = None
    has_default: bool = False
    example: Any = None
    title: str | None = None
    deprecated: bool = False

    # Schema used verbatim instead of resolving the field type
    schema_with: Any = None

    # Type resolved instead of the declared one
    value_type: TypeExpr | None = None


@dataclass(frozen=True)
class VariantFeatures:
    """Pre-parsed schema features of an enum variant."""

    title: str | None = None
    rename: str | None = None
    rename_all: RenameRule | None = None
    example: Any = None


# Shapes


@dataclass(frozen=True)
class FieldDecl:
    """A struct or variant field. ``ident`` is None for positional fields."""

    ident: str | None = None
    ty: TypeExpr = field(default_factory=TypeExpr)
    serde: dict[str, Any] = field(default_factory=dict)
    features: FieldFeatures = field(default_factory=FieldFeatures)
    docs: tuple[str, ...] = ()
    deprecated: bool = False

    def display_name(self, index: int) -> str:
        return self.ident if self.ident is not None else str(index)


@dataclass(frozen=True)
class NamedFields:
    fields: tuple[FieldDecl, ...] = ()


@dataclass(frozen=True)
class PositionalFields:
    fields: tuple[FieldDecl, ...] = ()


@dataclass(frozen=True)
class UnitShape:
    pass


@dataclass(frozen=True)
class VariantDecl:
    """An enum variant with its own nested shape."""

    ident: str = ""
    shape: NamedFields | PositionalFields | UnitShape = field(default_factory=UnitShape)
    serde: dict[str, Any] = field(default_factory=dict)
    features: VariantFeatures = field(default_factory=VariantFeatures)
    docs: tuple[str, ...] = ()
    deprecated: bool = False

    # Explicit numeric discriminant (``Variant = 3``)
    discriminant: int | None = None


@dataclass(frozen=True)
class EnumShape:
    variants: tuple[VariantDecl, ...] = ()


TypeShape = NamedFields | PositionalFields | UnitShape | EnumShape


# Declaration


@dataclass(frozen=True)
class Generics:
    """Generic parameters of a declaration, in declaration order."""

    lifetimes: tuple[str, ...] = ()
    type_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class AliasBinding:
    """A named concrete instantiation of a generic declaration."""

    name: str = ""
    target: TypeExpr = field(default_factory=TypeExpr)


@dataclass(frozen=True)
class Declaration:
    """A struct or enum declaration."""

    ident: str = ""
    shape: TypeShape = field(default_factory=UnitShape)
    serde: dict[str, Any] = field(default_factory=dict)
    features: ContainerFeatures = field(default_factory=ContainerFeatures)
    docs: tuple[str, ...] = ()
    deprecated: bool = False

    # Numeric base type of a fieldless enum (``#[repr(u8)]``)
    repr: str | None = None

    generics: Generics = field(default_factory=Generics)
    aliases: tuple[AliasBinding, ...] = ()
    visibility: str = "pub"

    # Source location for error messages (e.g. "src/models.rs:12")
    location: str = ""
