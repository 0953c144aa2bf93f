"""
Schema tree node definitions.

These nodes are the output of synthesis: a language-neutral description of
the accepted document shape, rendered to an OpenAPI style dictionary with
``to_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ..config import DEFAULT_REFERENCE_PREFIX


@dataclass
class SchemaNode:
    """Base class for all schema nodes."""

    title: str | None = None
    description: str | None = None
    deprecated: bool = False
    example: Any = None
    default: Any = None
    has_default: bool = False
    nullable: bool = False

    def to_dict(self, reference_prefix: str = DEFAULT_REFERENCE_PREFIX) -> dict[str, Any]:
        """Render the node and its children."""
        data = self._body(reference_prefix)
        if self.title is not None:
            data["title"] = self.title
        if self.description:
            data["description"] = self.description
        if self.deprecated:
            data["deprecated"] = True
        if self.has_default:
            data["default"] = self.default
        if self.example is not None:
            data["example"] = self.example
        if self.nullable:
            data["nullable"] = True
        return data

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        return {}


@dataclass
class EmptySchema(SchemaNode):
    """Matches any payload (``{}``)."""


@dataclass
class OpaqueSchema(SchemaNode):
    """A schema supplied verbatim by the author."""

    body: dict[str, Any] = field(default_factory=dict)

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        return dict(self.body)


@dataclass
class PrimitiveSchema(SchemaNode):
    """A primitive type, optionally restricted to a set of values."""

    schema_type: str = "string"  # "string", "integer", "number", "boolean", "null"
    format: str | None = None
    enum_values: list[Any] | None = None

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.schema_type}
        if self.format:
            data["format"] = self.format
        if self.enum_values is not None:
            data["enum"] = list(self.enum_values)
        return data


@dataclass
class RefSchema(SchemaNode):
    """Reference to another named schema."""

    name: str = ""

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        ref = {"$ref": f"{reference_prefix}{self.name}"}
        if self.nullable:
            # Siblings of $ref are ignored, so nullability needs a wrapper
            return {"allOf": [ref]}
        return ref


@dataclass
class ObjectSchema(SchemaNode):
    """An object with ordered properties.

    An object without properties and without ``additional_properties`` is a
    free-form object.
    """

    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    additional_properties: SchemaNode | bool | None = None

    def add_property(self, name: str, schema: SchemaNode, required: bool = False) -> None:
        self.properties[name] = schema
        if required and name not in self.required:
            self.required.append(name)

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        data: dict[str, Any] = {"type": "object"}
        if self.properties:
            data["properties"] = {name: prop.to_dict(reference_prefix) for name, prop in self.properties.items()}
        if self.required:
            data["required"] = list(self.required)
        if isinstance(self.additional_properties, SchemaNode):
            data["additionalProperties"] = self.additional_properties.to_dict(reference_prefix)
        elif self.additional_properties is not None:
            data["additionalProperties"] = self.additional_properties
        return data


@dataclass
class ArraySchema(SchemaNode):
    """An array, optionally with fixed length bounds."""

    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        data: dict[str, Any] = {"type": "array"}
        data["items"] = self.items.to_dict(reference_prefix) if self.items is not None else {}
        if self.min_items is not None:
            data["minItems"] = self.min_items
        if self.max_items is not None:
            data["maxItems"] = self.max_items
        if self.unique_items:
            data["uniqueItems"] = True
        return data


@dataclass
class AllOfSchema(SchemaNode):
    """Composition: a value must match every item."""

    items: list[SchemaNode] = field(default_factory=list)

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        return {"allOf": [item.to_dict(reference_prefix) for item in self.items]}


@dataclass
class OneOfSchema(SchemaNode):
    """Union: a value must match exactly one item."""

    items: list[SchemaNode] = field(default_factory=list)

    # Property naming the variant, when the union is tagged
    discriminator: str | None = None

    def _body(self, reference_prefix: str) -> dict[str, Any]:
        data: dict[str, Any] = {"oneOf": [item.to_dict(reference_prefix) for item in self.items]}
        if self.discriminator:
            data["discriminator"] = {"propertyName": self.discriminator}
        return data


def single_value_enum(value: Any) -> PrimitiveSchema:
    """Schema accepting exactly one string or integer value."""
    schema_type = "integer" if isinstance(value, int) and not isinstance(value, bool) else "string"
    return PrimitiveSchema(schema_type=schema_type, enum_values=[value])


def with_metadata(
    node: SchemaNode,
    title: str | None = None,
    description: str | None = None,
    deprecated: bool = False,
    example: Any = None,
    default: Any = None,
    has_default: bool = False,
) -> SchemaNode:
    """Return a copy of ``node`` carrying the given metadata.

    Only metadata that is actually present overrides what the node already has.
    """
    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if description:
        changes["description"] = description
    if deprecated:
        changes["deprecated"] = True
    if example is not None:
        changes["example"] = example
    if has_default:
        changes["default"] = default
        changes["has_default"] = True
    return replace(node, **changes) if changes else node


def copy_object(node: ObjectSchema) -> ObjectSchema:
    """Shallow copy an object so properties can be appended without touching the original."""
    return replace(node, properties=dict(node.properties), required=list(node.required))
