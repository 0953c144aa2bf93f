"""
Struct synthesizer.

Builds the schema of named-field, positional-field and unit structs. Enum
variants with fields reuse the same synthesis for their payload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ...utils import RenameRule, format_docs
from ..config import SchemaGeneratorConfig
from ..declaration.nodes import ContainerRules, FieldDecl, FieldRules
from ..declaration.type_expr import TypeExpr
from ..errors import MalformedDeclaration, MultipleFlattenedMaps
from ..resolvers.rule_resolver import RuleResolver
from ..resolvers.type_resolver import TypeResolver
from ..schema_tree.nodes import (
    AllOfSchema,
    ArraySchema,
    EmptySchema,
    ObjectSchema,
    OpaqueSchema,
    SchemaNode,
    with_metadata,
)
from .naming import NameKind, first_of, resolve_name

logger = logging.getLogger(__name__)


@dataclass
class FieldOptions:
    """A named field with everything needed to place it in its parent object."""

    field: FieldDecl
    rules: FieldRules
    name: str
    schema: SchemaNode
    is_option: bool = False
    is_map: bool = False


class StructSynthesizer:
    """Synthesizes struct shapes against one type resolver view."""

    def __init__(
        self,
        config: SchemaGeneratorConfig,
        type_resolver: TypeResolver,
        rule_resolver: RuleResolver,
    ):
        self.config = config
        self.type_resolver = type_resolver
        self.rule_resolver = rule_resolver

    def synthesize_unit(self) -> SchemaNode:
        """A unit struct serializes as nothing in particular."""
        return EmptySchema()

    def synthesize_named(
        self,
        struct_name: str,
        fields: tuple[FieldDecl, ...],
        container_rules: ContainerRules,
        rename_all_feature: RenameRule | None = None,
        default_instance: Mapping[str, Any] | None = None,
        location: str = "",
    ) -> SchemaNode:
        """
        Build the object schema of a struct with named fields.

        Args:
            struct_name: Name used in error messages
            fields: Fields in declaration order
            container_rules: Serialization rules of the enclosing container
            rename_all_feature: Schema level rename_all, overridden by the serde one
            default_instance: Field values of the container's default instance
            location: Source location for error messages

        Returns:
            An ObjectSchema, or an AllOfSchema when fields are flattened
        """
        rename_all = first_of(container_rules.rename_all, rename_all_feature)
        options = [self._field_options(field, rename_all, default_instance) for field in fields]

        object_schema = ObjectSchema()
        for option in options:
            if option.rules.skip or option.rules.flatten:
                continue
            if option.name in object_schema.properties:
                raise MalformedDeclaration(
                    f"The structure `{struct_name}` serializes more than one field as `{option.name}`",
                    location=location,
                )
            object_schema.add_property(
                option.name,
                option.schema,
                required=self._is_required(option, container_rules),
            )

        flattened = [option for option in options if option.rules.flatten and not option.rules.skip]
        flattened_items: list[SchemaNode] = []
        flattened_map: FieldOptions | None = None
        for option in flattened:
            if not option.is_map:
                flattened_items.append(option.schema)
                continue
            if flattened_map is not None:
                raise MultipleFlattenedMaps(
                    struct_name,
                    flattened_map.field.ident or "",
                    option.field.ident or "",
                    location=location,
                )
            object_schema.additional_properties = _map_values(option.schema)
            flattened_map = option

        if flattened_items:
            logger.debug("%s: composing %d flattened fields with allOf", struct_name, len(flattened_items))
            return AllOfSchema(items=[*flattened_items, object_schema])

        if not flattened and container_rules.deny_unknown_fields:
            object_schema.additional_properties = False
        return object_schema

    def synthesize_positional(
        self,
        struct_name: str,
        fields: tuple[FieldDecl, ...],
        value_type: TypeExpr | None = None,
        location: str = "",
    ) -> SchemaNode:
        """
        Build the schema of a struct with positional fields.

        A single field is transparent. More fields serialize as a fixed length
        array of the shared element schema.
        """
        count = len(fields)
        if count == 0:
            return ArraySchema(min_items=0, max_items=0)

        types = [self.type_resolver.view(field.features.value_type or field.ty) for field in fields]
        if all(ty == types[0] for ty in types[1:]):
            element_type = value_type or fields[0].features.value_type or fields[0].ty
            element = self.type_resolver.resolve(element_type).node
        elif self.config.reject_heterogeneous_tuples:
            raise MalformedDeclaration(
                f"The structure `{struct_name}` has positional fields of different types",
                location=location,
                help="Use fields of a single type or named fields",
            )
        else:
            # Mixed element types cannot be expressed by an array item schema;
            # fall back to a free-form object
            logger.debug("%s: heterogeneous positional fields, using a free-form object", struct_name)
            element = ObjectSchema()

        if count > 1:
            return ArraySchema(items=element, min_items=count, max_items=count)
        return element

    def _field_options(
        self,
        field: FieldDecl,
        rename_all: RenameRule | None,
        default_instance: Mapping[str, Any] | None,
    ) -> FieldOptions:
        rules = self.rule_resolver.field_rules(field)
        features = field.features
        resolved = self.type_resolver.resolve(features.value_type or field.ty)

        if features.schema_with is not None:
            schema = features.schema_with
            if not isinstance(schema, SchemaNode):
                schema = OpaqueSchema(body=dict(schema))
            is_map = False
        else:
            schema = resolved.node
            is_map = resolved.is_map_like

        ident = field.ident or ""
        default, has_default = features.default, features.has_default
        if not has_default and default_instance is not None and ident in default_instance:
            default, has_default = default_instance[ident], True

        schema = with_metadata(
            schema,
            title=features.title,
            description=format_docs(field.docs),
            deprecated=field.deprecated or features.deprecated,
            example=features.example,
            default=default,
            has_default=has_default,
        )

        name = resolve_name(ident, first_of(rules.rename, features.rename), rename_all, NameKind.FIELD)
        return FieldOptions(
            field=field,
            rules=rules,
            name=name,
            schema=schema,
            is_option=resolved.is_optional,
            is_map=is_map,
        )

    @staticmethod
    def _is_required(option: FieldOptions, container_rules: ContainerRules) -> bool:
        rules = option.rules
        rules_require = not (
            rules.default or container_rules.default or rules.skip_serializing_if or rules.double_option
        )
        return (not option.is_option and rules_require) or option.field.features.required is True


def _map_values(schema: SchemaNode) -> SchemaNode | bool:
    """Value schema of a map, placed in the parent's additionalProperties slot."""
    if isinstance(schema, ObjectSchema) and schema.additional_properties is not None:
        return schema.additional_properties
    return True
