"""
Schema-tree assembler.

Entry point of synthesis: dispatches a declaration to the struct or enum
synthesizer, applies container level metadata, resolves the emitted schema
name and runs the alias instantiator for generic declarations.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...utils import format_docs
from ..config import SchemaGeneratorConfig
from ..declaration.nodes import (
    ContainerRules,
    Declaration,
    EnumShape,
    NamedFields,
    PositionalFields,
    UnitShape,
)
from ..errors import MalformedDeclaration, SchemaSynthesisError
from ..resolvers.rule_resolver import RuleResolver, SerdeRuleResolver
from ..resolvers.type_resolver import DefaultTypeResolver, TypeResolver
from ..schema_tree.nodes import SchemaNode, with_metadata
from .alias_instantiator import AliasInstantiator, AliasSchema, TypeAliasDeclaration
from .enum_synthesizer import EnumSynthesizer
from .struct_synthesizer import StructSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class SchemaResult:
    """Everything synthesized for one declaration."""

    name: str
    schema: SchemaNode
    aliases: list[tuple[str, SchemaNode]] = field(default_factory=list)
    type_aliases: list[TypeAliasDeclaration] = field(default_factory=list)

    def to_dict(self, reference_prefix: str | None = None) -> dict[str, Any]:
        """Render the primary schema and the alias schemas, keyed by name."""
        kwargs = {} if reference_prefix is None else {"reference_prefix": reference_prefix}
        schemas = {self.name: self.schema.to_dict(**kwargs)}
        for name, schema in self.aliases:
            schemas[name] = schema.to_dict(**kwargs)
        return schemas


class SchemaAssembler:
    """Turns declarations into schema trees."""

    def __init__(
        self,
        config: SchemaGeneratorConfig | None = None,
        type_resolver: TypeResolver | None = None,
        rule_resolver: RuleResolver | None = None,
    ):
        self.config = config or SchemaGeneratorConfig()
        self.type_resolver = type_resolver or DefaultTypeResolver()
        self.rule_resolver = rule_resolver or SerdeRuleResolver()

    def assemble(self, declaration: Declaration) -> SchemaResult:
        """
        Synthesize the schema of a declaration.

        Args:
            declaration: The struct or enum declaration

        Returns:
            SchemaResult with the primary schema and one schema per alias

        Raises:
            SchemaSynthesisError: If the declaration cannot be represented.
                Nothing is returned for a declaration that fails.
        """
        try:
            return self._assemble(declaration)
        except SchemaSynthesisError as e:
            if not e.location:
                e.location = declaration.location
            raise

    def _assemble(self, declaration: Declaration) -> SchemaResult:
        logger.debug("Assembling %s (%s)", declaration.ident, type(declaration.shape).__name__)
        container_rules = self.rule_resolver.container_rules(declaration)

        schema = self.synthesize(declaration, container_rules, self.type_resolver)
        alias_schemas: list[AliasSchema] = AliasInstantiator(self.type_resolver).instantiate(
            declaration,
            lambda resolver: self.synthesize(declaration, container_rules, resolver),
        )

        return SchemaResult(
            name=self.schema_name(declaration),
            schema=schema,
            aliases=[(alias.name, alias.schema) for alias in alias_schemas],
            type_aliases=[alias.declaration for alias in alias_schemas],
        )

    def synthesize(
        self,
        declaration: Declaration,
        container_rules: ContainerRules,
        type_resolver: TypeResolver,
    ) -> SchemaNode:
        """Build the schema of ``declaration`` against one resolver view."""
        structs = StructSynthesizer(self.config, type_resolver, self.rule_resolver)
        features = declaration.features

        match declaration.shape:
            case NamedFields(fields=fields):
                default_instance = features.default if isinstance(features.default, Mapping) else None
                schema = structs.synthesize_named(
                    declaration.ident,
                    fields,
                    container_rules,
                    rename_all_feature=features.rename_all,
                    default_instance=default_instance,
                    location=declaration.location,
                )
            case PositionalFields(fields=fields):
                schema = structs.synthesize_positional(
                    declaration.ident,
                    fields,
                    value_type=features.value_type,
                    location=declaration.location,
                )
            case UnitShape():
                schema = structs.synthesize_unit()
            case EnumShape():
                enums = EnumSynthesizer(self.config, type_resolver, self.rule_resolver, structs)
                schema = enums.synthesize(declaration, container_rules)
            case _:
                raise MalformedDeclaration(
                    f"`{declaration.ident}` is neither a struct nor an enum",
                    location=declaration.location,
                )

        return with_metadata(
            schema,
            title=features.title,
            description=format_docs(declaration.docs),
            deprecated=declaration.deprecated or features.deprecated,
            example=features.example,
            default=features.default,
            has_default=features.has_default,
        )

    @staticmethod
    def schema_name(declaration: Declaration) -> str:
        """Emitted schema name: the identifier, or the ``schema_as`` path without generic arguments."""
        schema_as = declaration.features.schema_as
        if schema_as is None:
            return declaration.ident
        return ".".join(schema_as.segments)
