"""
Schema tree module.

Contains the schema node definitions produced by synthesis.
"""

from __future__ import annotations

from .nodes import (
    AllOfSchema,
    ArraySchema,
    EmptySchema,
    ObjectSchema,
    OneOfSchema,
    OpaqueSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)

__all__ = [
    "SchemaNode",
    "EmptySchema",
    "OpaqueSchema",
    "PrimitiveSchema",
    "RefSchema",
    "ObjectSchema",
    "ArraySchema",
    "AllOfSchema",
    "OneOfSchema",
]
