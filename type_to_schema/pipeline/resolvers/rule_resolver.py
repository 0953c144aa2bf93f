"""
Rule resolver for serialization directives.

Interprets the raw serde-style directives attached to a declaration, its
fields and its variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ...utils import RenameRule
from ..declaration.nodes import (
    AdjacentlyTagged,
    ContainerRules,
    Declaration,
    EnumRepresentation,
    ExternallyTagged,
    FieldDecl,
    FieldRules,
    InternallyTagged,
    Untagged,
    VariantDecl,
    VariantRules,
)
from ..declaration.parser import parse_rename_rule
from ..errors import MalformedDeclaration


class RuleResolver(ABC):
    """Supplies the serialization contract of a declaration."""

    @abstractmethod
    def container_rules(self, declaration: Declaration) -> ContainerRules:
        """Rules of the struct or enum itself."""

    @abstractmethod
    def field_rules(self, field: FieldDecl) -> FieldRules:
        """Rules of a single field."""

    @abstractmethod
    def variant_rules(self, variant: VariantDecl) -> VariantRules:
        """Rules of a single enum variant."""


class SerdeRuleResolver(RuleResolver):
    """Reads serde attribute directives (``rename_all``, ``tag``, ``flatten``...)."""

    def container_rules(self, declaration: Declaration) -> ContainerRules:
        serde = declaration.serde
        return ContainerRules(
            rename_all=self.rename_rule(serde.get("rename_all"), declaration.location),
            deny_unknown_fields=bool(serde.get("deny_unknown_fields", False)),
            default=bool(serde.get("default", False)),
            enum_repr=self._enum_repr(serde, declaration.location),
        )

    def field_rules(self, field: FieldDecl) -> FieldRules:
        serde = field.serde
        skip = bool(serde.get("skip", False)) or (
            bool(serde.get("skip_serializing", False)) and bool(serde.get("skip_deserializing", False))
        )
        return FieldRules(
            skip=skip,
            skip_serializing_if=bool(serde.get("skip_serializing_if", False)),
            double_option=bool(serde.get("with")) and str(serde.get("with")).endswith("double_option"),
            flatten=bool(serde.get("flatten", False)),
            rename=serde.get("rename"),
            default=bool(serde.get("default", False)),
        )

    def variant_rules(self, variant: VariantDecl) -> VariantRules:
        serde = variant.serde
        return VariantRules(
            skip=bool(serde.get("skip", False)),
            rename=serde.get("rename"),
            rename_all=self.rename_rule(serde.get("rename_all")),
        )

    def _enum_repr(self, serde: dict[str, Any], location: str) -> EnumRepresentation:
        tag = serde.get("tag")
        content = serde.get("content")
        untagged = bool(serde.get("untagged", False))

        if untagged and (tag is not None or content is not None):
            raise MalformedDeclaration(
                "enum cannot be both untagged and tagged",
                location=location,
            )
        if untagged:
            return Untagged()
        if content is not None and tag is None:
            raise MalformedDeclaration(
                "`content` requires `tag` to be set",
                location=location,
                help="Add `tag = \"...\"` for an adjacently tagged representation",
            )
        if tag is not None and content is not None:
            return AdjacentlyTagged(tag=tag, content=content)
        if tag is not None:
            return InternallyTagged(tag=tag)
        return ExternallyTagged()

    @staticmethod
    def rename_rule(value: Any, location: str = "") -> RenameRule | None:
        """Parse a case rule name, accepting an already parsed rule."""
        return parse_rename_rule(value, location)
