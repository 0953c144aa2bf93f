"""
Declaration parser.

Phase 1 of the pipeline: turn a JSON-compatible description of a struct or
enum into an immutable Declaration, parsing type strings, schema features and
alias bindings on the way.

Input format::

    {
        "kind": "struct",
        "name": "Pet",
        "docs": ["A pet in the store."],
        "generics": ["'a", "T"],
        "aliases": ["StringPet = Pet<'a, String>"],
        "serde": {"rename_all": "camelCase"},
        "schema": {"title": "Pet", "example": {"id": 1}},
        "fields": [
            {"name": "id", "type": "u64"},
            {"name": "tag", "type": "Option<T>", "serde": {"default": true}}
        ]
    }

Enums carry ``variants`` instead of ``fields``; each variant has its own
optional ``fields`` list and ``discriminant``.
"""

from __future__ import annotations

import re
from typing import Any

from ...utils import RenameRule
from ..errors import MalformedDeclaration
from ..schema_tree.nodes import OpaqueSchema, SchemaNode
from .nodes import (
    AliasBinding,
    ContainerFeatures,
    Declaration,
    EnumShape,
    FieldDecl,
    FieldFeatures,
    Generics,
    NamedFields,
    PositionalFields,
    UnitShape,
    VariantDecl,
    VariantFeatures,
)
from .type_expr import TypeExpr

_IDENTIFIER = re.compile(r"^(r#)?[A-Za-z_][A-Za-z0-9_]*$")


class DeclarationParser:
    """Parses declaration dictionaries into Declaration nodes."""

    KINDS = {"struct", "enum"}

    def parse(self, data: dict[str, Any]) -> Declaration:
        """
        Parse a declaration.

        Args:
            data: The declaration dictionary

        Returns:
            The parsed Declaration

        Raises:
            MalformedDeclaration: If the dictionary does not describe a struct or enum
        """
        location = str(data.get("location", ""))
        ident = data.get("name")
        if not isinstance(ident, str) or not ident:
            raise MalformedDeclaration("declaration has no `name`", location=location)

        kind = data.get("kind", "struct")
        if kind not in self.KINDS:
            raise MalformedDeclaration(
                f"`{ident}` is a {kind}; only structs and enums can derive a schema",
                location=location,
            )

        if kind == "enum":
            shape = EnumShape(variants=tuple(self._parse_variant(v, location) for v in data.get("variants", [])))
        else:
            shape = self._parse_fields(data.get("fields"), ident, location)

        return Declaration(
            ident=ident,
            shape=shape,
            serde=dict(data.get("serde", {})),
            features=self._container_features(data.get("schema", {}), location),
            docs=_docs(data.get("docs")),
            deprecated=bool(data.get("deprecated", False)),
            repr=data.get("repr"),
            generics=self._parse_generics(data.get("generics"), location),
            aliases=tuple(self._parse_alias(alias, location) for alias in data.get("aliases", [])),
            visibility=data.get("visibility", "pub"),
            location=location,
        )

    def _parse_fields(
        self,
        fields: list[dict[str, Any]] | None,
        owner: str,
        location: str,
    ) -> NamedFields | PositionalFields | UnitShape:
        if fields is None:
            return UnitShape()
        parsed = tuple(self._parse_field(field, location) for field in fields)
        named = [field.ident is not None for field in parsed]
        if all(named):
            return NamedFields(fields=parsed)
        if not any(named):
            return PositionalFields(fields=parsed)
        raise MalformedDeclaration(
            f"`{owner}` mixes named and positional fields",
            location=location,
        )

    def _parse_field(self, data: dict[str, Any], location: str) -> FieldDecl:
        if "type" not in data:
            raise MalformedDeclaration(
                f"field `{data.get('name', '?')}` has no `type`",
                location=location,
            )
        ident = data.get("name")
        if ident is not None:
            _check_identifier(ident, location)
        return FieldDecl(
            ident=ident,
            ty=TypeExpr.parse(data["type"], location),
            serde=dict(data.get("serde", {})),
            features=self._field_features(data.get("schema", {}), location),
            docs=_docs(data.get("docs")),
            deprecated=bool(data.get("deprecated", False)),
        )

    def _parse_variant(self, data: dict[str, Any], location: str) -> VariantDecl:
        ident = data.get("name", "")
        _check_identifier(ident, location)
        discriminant = data.get("discriminant")
        if discriminant is not None and (isinstance(discriminant, bool) or not isinstance(discriminant, int)):
            raise MalformedDeclaration(
                f"discriminant of variant `{ident}` must be an integer, got {discriminant!r}",
                location=location,
            )
        features = data.get("schema", {})
        return VariantDecl(
            ident=ident,
            shape=self._parse_fields(data.get("fields"), ident, location),
            serde=dict(data.get("serde", {})),
            features=VariantFeatures(
                title=features.get("title"),
                rename=features.get("rename"),
                rename_all=parse_rename_rule(features.get("rename_all"), location),
                example=features.get("example"),
            ),
            docs=_docs(data.get("docs")),
            deprecated=bool(data.get("deprecated", False)),
            discriminant=discriminant,
        )

    def _container_features(self, data: dict[str, Any], location: str) -> ContainerFeatures:
        schema_as = None
        if data.get("as") is not None:
            schema_as = TypeExpr.parse(data["as"], location)
            if not schema_as.is_path:
                raise MalformedDeclaration(
                    f"schema name override `{data['as']}` must be a path",
                    location=location,
                )
        return ContainerFeatures(
            title=data.get("title"),
            example=data.get("example"),
            default=data.get("default"),
            has_default="default" in data,
            deprecated=bool(data.get("deprecated", False)),
            rename_all=parse_rename_rule(data.get("rename_all"), location),
            schema_as=schema_as,
            value_type=_optional_type(data.get("value_type"), location),
        )

    def _field_features(self, data: dict[str, Any], location: str) -> FieldFeatures:
        schema_with = data.get("schema_with")
        if schema_with is not None and not isinstance(schema_with, SchemaNode):
            if not isinstance(schema_with, dict):
                raise MalformedDeclaration(
                    f"`schema_with` must be a schema object, got {type(schema_with).__name__}",
                    location=location,
                )
            schema_with = OpaqueSchema(body=dict(schema_with))
        return FieldFeatures(
            rename=data.get("rename"),
            required=data.get("required"),
            default=data.get("default"),
            has_default="default" in data,
            example=data.get("example"),
            title=data.get("title"),
            deprecated=bool(data.get("deprecated", False)),
            schema_with=schema_with,
            value_type=_optional_type(data.get("value_type"), location),
        )

    def _parse_generics(self, data: Any, location: str) -> Generics:
        if data is None:
            return Generics()
        if isinstance(data, dict):
            lifetimes = data.get("lifetimes", [])
            type_params = data.get("type_params", [])
            _check_generic_params(lifetimes, location)
            _check_generic_params(type_params, location)
            return Generics(lifetimes=tuple(lifetimes), type_params=tuple(type_params))
        if isinstance(data, list):
            _check_generic_params(data, location)
            return Generics(
                lifetimes=tuple(param for param in data if param.startswith("'")),
                type_params=tuple(param for param in data if not param.startswith("'")),
            )
        raise MalformedDeclaration(f"cannot parse generics {data!r}", location=location)

    def _parse_alias(self, data: Any, location: str) -> AliasBinding:
        """Parse ``"Name = Target<Args>"`` or ``{"name": ..., "target": ...}``."""
        if isinstance(data, str):
            name, sep, target = data.partition("=")
            if not sep:
                raise MalformedDeclaration(
                    f"cannot parse alias `{data}`",
                    location=location,
                    help="expected `Name = Type<Args>`",
                )
        elif isinstance(data, dict) and isinstance(data.get("name"), str) and isinstance(data.get("target"), str):
            name, target = data["name"], data["target"]
        else:
            raise MalformedDeclaration(f"cannot parse alias {data!r}", location=location)

        name = name.strip()
        if not _IDENTIFIER.match(name):
            raise MalformedDeclaration(f"alias name `{name}` is not an identifier", location=location)
        return AliasBinding(name=name, target=TypeExpr.parse(target.strip(), location))


def _docs(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.splitlines())
    return tuple(value)


def _optional_type(value: str | None, location: str) -> TypeExpr | None:
    return TypeExpr.parse(value, location) if value is not None else None


def _check_identifier(ident: Any, location: str) -> None:
    if not isinstance(ident, str) or not _IDENTIFIER.match(ident):
        raise MalformedDeclaration(f"`{ident}` is not a valid identifier", location=location)


def _check_generic_params(params: Any, location: str) -> None:
    if not isinstance(params, list) or not all(isinstance(param, str) and param for param in params):
        raise MalformedDeclaration(f"generic parameters must be names, got {params!r}", location=location)


def parse_rename_rule(value: Any, location: str = "") -> RenameRule | None:
    """Parse a case rule name, accepting an already parsed rule."""
    if value is None:
        return None
    try:
        return RenameRule(value)
    except ValueError as e:
        allowed = ", ".join(f'"{rule.value}"' for rule in RenameRule)
        raise MalformedDeclaration(
            f"unknown rename rule `{value}`",
            location=location,
            help=f"expected one of {allowed}",
        ) from e
