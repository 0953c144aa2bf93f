"""
Enum classifier and tag-strategy synthesizer.

Classifies an enum as simple, discriminant or complex and folds every
variant into the parent document according to the enum representation:

    representation      unit           named            positional(1)      positional(N>1)
    externally tagged   {name: {}}     {name: object}   {name: inner}      {name: array}
    internally tagged   {tag}          object + tag     inner + tag        error
    adjacently tagged   {tag}          {tag, content}   {tag, content}     error
    untagged            {}             object           inner              array
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ...utils import format_docs
from ..config import SchemaGeneratorConfig
from ..declaration.nodes import (
    AdjacentlyTagged,
    ContainerRules,
    Declaration,
    EnumRepresentation,
    EnumShape,
    ExternallyTagged,
    InternallyTagged,
    NamedFields,
    PositionalFields,
    UnitShape,
    Untagged,
    VariantDecl,
    VariantRules,
)
from ..errors import MalformedDeclaration, UnsupportedTaggedTuple
from ..resolvers.rule_resolver import RuleResolver
from ..resolvers.type_resolver import TypeResolver
from ..schema_tree.nodes import (
    AllOfSchema,
    EmptySchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    copy_object,
    single_value_enum,
    with_metadata,
)
from .naming import NameKind, first_of, resolve_name
from .struct_synthesizer import StructSynthesizer

logger = logging.getLogger(__name__)

# Integer base types of fieldless enums -> (bits, signed)
REPR_TYPES: dict[str, tuple[int, bool]] = {
    "u8": (8, False),
    "u16": (16, False),
    "u32": (32, False),
    "u64": (64, False),
    "u128": (128, False),
    "usize": (64, False),
    "i8": (8, True),
    "i16": (16, True),
    "i32": (32, True),
    "i64": (64, True),
    "i128": (128, True),
    "isize": (64, True),
}


class EnumKind(Enum):
    """Classification of an enum."""

    SIMPLE = "simple"  # only unit variants, values are names
    DISCRIMINANT = "discriminant"  # only unit variants, values are numeric discriminants
    COMPLEX = "complex"  # at least one variant carries fields


def classify_enum(declaration: Declaration, config: SchemaGeneratorConfig) -> EnumKind:
    """Classify an enum declaration."""
    variants = _enum_variants(declaration)
    if all(isinstance(variant.shape, UnitShape) for variant in variants):
        if declaration.repr is not None and config.repr_enums:
            _check_repr(declaration.repr, declaration.location)
            return EnumKind.DISCRIMINANT
        return EnumKind.SIMPLE
    return EnumKind.COMPLEX


def cast_discriminant(value: int, base_type: str, location: str = "") -> int:
    """Cast a discriminant to the enum's integer base type, wrapping like ``as``."""
    _check_repr(base_type, location)
    bits, signed = REPR_TYPES[base_type]
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _check_repr(base_type: str, location: str) -> None:
    if base_type not in REPR_TYPES:
        raise MalformedDeclaration(
            f"unsupported enum base type `{base_type}`",
            location=location,
            help=f"expected one of {', '.join(REPR_TYPES)}",
        )


@dataclass
class VariantContext:
    """A non-skipped variant with its resolved wire name."""

    variant: VariantDecl
    rules: VariantRules
    name: str
    value: Any


class EnumSynthesizer:
    """Synthesizes enum schemas against one type resolver view."""

    def __init__(
        self,
        config: SchemaGeneratorConfig,
        type_resolver: TypeResolver,
        rule_resolver: RuleResolver,
        struct_synthesizer: StructSynthesizer,
    ):
        self.config = config
        self.type_resolver = type_resolver
        self.rule_resolver = rule_resolver
        self.structs = struct_synthesizer

    def synthesize(self, declaration: Declaration, container_rules: ContainerRules) -> SchemaNode:
        """
        Build the schema of an enum.

        Args:
            declaration: The enum declaration
            container_rules: Its serialization rules

        Returns:
            A string/integer enum for simple enums under external tagging,
            otherwise a union of the variant fragments
        """
        kind = classify_enum(declaration, self.config)
        logger.debug(
            "%s: %s enum, %s",
            declaration.ident,
            kind.value,
            type(container_rules.enum_repr).__name__,
        )
        variants = self._variant_contexts(declaration, container_rules, kind)
        if kind == EnumKind.COMPLEX:
            return self._complex_enum(declaration, container_rules.enum_repr, variants)
        value_type = "integer" if kind == EnumKind.DISCRIMINANT else "string"
        return self._regular_enum(container_rules.enum_repr, variants, value_type)

    def _variant_contexts(
        self,
        declaration: Declaration,
        container_rules: ContainerRules,
        kind: EnumKind,
    ) -> list[VariantContext]:
        rename_all = first_of(container_rules.rename_all, declaration.features.rename_all)
        contexts = []
        discriminant = -1
        for variant in _enum_variants(declaration):
            # Implicit discriminants keep counting through skipped variants
            discriminant = variant.discriminant if variant.discriminant is not None else discriminant + 1
            rules = self.rule_resolver.variant_rules(variant)
            if rules.skip:
                continue
            name = resolve_name(
                variant.ident,
                first_of(rules.rename, variant.features.rename),
                rename_all,
                NameKind.VARIANT,
            )
            value: Any = name
            if kind == EnumKind.DISCRIMINANT:
                value = cast_discriminant(discriminant, declaration.repr, declaration.location)
            contexts.append(VariantContext(variant=variant, rules=rules, name=name, value=value))
        return contexts

    # Unit-only enums

    def _regular_enum(
        self,
        enum_repr: EnumRepresentation,
        variants: list[VariantContext],
        value_type: str,
    ) -> SchemaNode:
        values = [context.value for context in variants]
        if isinstance(enum_repr, ExternallyTagged):
            return PrimitiveSchema(schema_type=value_type, enum_values=values)
        if isinstance(enum_repr, (InternallyTagged, AdjacentlyTagged)):
            # Adjacent tagging has no payload to place under `content` for unit variants
            return OneOfSchema(
                items=[
                    self._variant_metadata(_tag_object(enum_repr.tag, context.value), context.variant)
                    for context in variants
                ],
                discriminator=enum_repr.tag,
            )
        if isinstance(enum_repr, Untagged):
            return EmptySchema()
        raise MalformedDeclaration(f"unknown enum representation {enum_repr!r}")

    # Enums with fields

    def _complex_enum(
        self,
        declaration: Declaration,
        enum_repr: EnumRepresentation,
        variants: list[VariantContext],
    ) -> SchemaNode:
        fragments = []
        for context in variants:
            if isinstance(enum_repr, ExternallyTagged):
                fragment = self._externally_tagged(declaration, context)
            elif isinstance(enum_repr, InternallyTagged):
                fragment = self._internally_tagged(declaration, context, enum_repr.tag)
            elif isinstance(enum_repr, AdjacentlyTagged):
                fragment = self._adjacently_tagged(declaration, context, enum_repr.tag, enum_repr.content)
            elif isinstance(enum_repr, Untagged):
                fragment = self._untagged(declaration, context)
            else:
                raise MalformedDeclaration(f"unknown enum representation {enum_repr!r}")
            fragments.append(self._variant_metadata(fragment, context.variant))

        discriminator = enum_repr.tag if isinstance(enum_repr, (InternallyTagged, AdjacentlyTagged)) else None
        return OneOfSchema(items=fragments, discriminator=discriminator)

    def _externally_tagged(self, declaration: Declaration, context: VariantContext) -> SchemaNode:
        shape = context.variant.shape
        if isinstance(shape, UnitShape):
            payload: SchemaNode = EmptySchema()
        else:
            payload = self._payload(declaration, context)
        fragment = ObjectSchema()
        fragment.add_property(context.name, payload, required=True)
        return fragment

    def _internally_tagged(self, declaration: Declaration, context: VariantContext, tag: str) -> SchemaNode:
        shape = context.variant.shape
        if isinstance(shape, UnitShape) or (isinstance(shape, PositionalFields) and not shape.fields):
            return _tag_object(tag, context.value)

        if isinstance(shape, PositionalFields) and len(shape.fields) > 1:
            raise UnsupportedTaggedTuple(
                f"Unnamed (tuple) enum variant `{context.variant.ident}` of `{declaration.ident}` "
                f"is unsupported for internally tagged enums using `tag = \"{tag}\"`",
                location=declaration.location,
                help="Try using a different serde enum representation",
                notes=["See more about enum limitations here: `https://serde.rs/enum-representations.html#internally-tagged`"],
            )

        payload = self._payload(declaration, context)
        if isinstance(payload, ObjectSchema):
            merged = copy_object(payload)
            merged.add_property(tag, single_value_enum(context.value), required=True)
            return merged
        if isinstance(payload, (RefSchema, AllOfSchema)):
            # The payload's own properties stay behind the reference; the tag lives beside it
            items = list(payload.items) if isinstance(payload, AllOfSchema) and isinstance(shape, NamedFields) else [payload]
            return AllOfSchema(items=[*items, _tag_object(tag, context.value)])
        if isinstance(payload, OneOfSchema):
            raise MalformedDeclaration(
                f"Newtype enum variant `{context.variant.ident}` of `{declaration.ident}` wraps a union, "
                f"which cannot carry the `{tag}` property",
                location=declaration.location,
                help="Wrap the value in a struct or use a different serde enum representation",
            )
        # Primitive, array and opaque values have no properties of their own
        return with_metadata(
            _tag_object(tag, context.value),
            title=payload.title,
            description=payload.description,
            deprecated=payload.deprecated,
            example=payload.example,
        )

    def _adjacently_tagged(
        self,
        declaration: Declaration,
        context: VariantContext,
        tag: str,
        content: str,
    ) -> SchemaNode:
        shape = context.variant.shape
        if isinstance(shape, UnitShape) or (isinstance(shape, PositionalFields) and not shape.fields):
            return _tag_object(tag, context.value)

        if isinstance(shape, PositionalFields) and len(shape.fields) > 1:
            raise UnsupportedTaggedTuple(
                f"Unnamed (tuple) enum variant `{context.variant.ident}` of `{declaration.ident}` "
                f"is unsupported for adjacently tagged enums using `tag = \"{tag}\", content = \"{content}\"`",
                location=declaration.location,
                help="Try using a different serde enum representation",
                notes=["See more about enum limitations here: `https://serde.rs/enum-representations.html#adjacently-tagged`"],
            )

        fragment = _tag_object(tag, context.value)
        fragment.add_property(content, self._payload(declaration, context), required=True)
        return fragment

    def _untagged(self, declaration: Declaration, context: VariantContext) -> SchemaNode:
        if isinstance(context.variant.shape, UnitShape):
            return EmptySchema()
        return self._payload(declaration, context)

    def _payload(self, declaration: Declaration, context: VariantContext) -> SchemaNode:
        """Schema of the fields carried by a variant."""
        variant = context.variant
        shape = variant.shape
        if isinstance(shape, NamedFields):
            return self.structs.synthesize_named(
                declaration.ident,
                shape.fields,
                ContainerRules(rename_all=context.rules.rename_all),
                rename_all_feature=variant.features.rename_all,
                location=declaration.location,
            )
        if isinstance(shape, PositionalFields):
            return self.structs.synthesize_positional(
                declaration.ident,
                shape.fields,
                location=declaration.location,
            )
        if isinstance(shape, UnitShape):
            return EmptySchema()
        raise MalformedDeclaration(
            f"variant `{variant.ident}` of `{declaration.ident}` has an unknown shape",
            location=declaration.location,
        )

    @staticmethod
    def _variant_metadata(fragment: SchemaNode, variant: VariantDecl) -> SchemaNode:
        return with_metadata(
            fragment,
            title=variant.features.title,
            description=format_docs(variant.docs),
            deprecated=variant.deprecated,
            example=variant.features.example,
        )


def _tag_object(tag: str, value: Any) -> ObjectSchema:
    """Object whose only property names the variant."""
    fragment = ObjectSchema()
    fragment.add_property(tag, single_value_enum(value), required=True)
    return fragment


def _enum_variants(declaration: Declaration) -> tuple[VariantDecl, ...]:
    shape = declaration.shape
    if not isinstance(shape, EnumShape):
        raise MalformedDeclaration(
            f"`{declaration.ident}` is not an enum",
            location=declaration.location,
        )
    return shape.variants


__all__ = [
    "EnumKind",
    "EnumSynthesizer",
    "cast_discriminant",
    "classify_enum",
]
