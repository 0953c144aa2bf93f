"""Type to Schema

A Python package for synthesizing OpenAPI style schemas from struct and
enum declarations, honoring their serialization rules (renames, tagging,
flattening, skipping) and instantiating generic type aliases.
"""

__version__ = "0.1.0"

from .pipeline import (
    Declaration,
    DeclarationParser,
    MalformedDeclaration,
    MultipleFlattenedMaps,
    PipelineGenerator,
    SchemaAssembler,
    SchemaGeneratorConfig,
    SchemaResult,
    SchemaSynthesisError,
    UnsupportedAliasTarget,
    UnsupportedTaggedTuple,
)

__all__ = [
    "PipelineGenerator",
    "SchemaGeneratorConfig",
    "SchemaAssembler",
    "SchemaResult",
    "Declaration",
    "DeclarationParser",
    "SchemaSynthesisError",
    "MultipleFlattenedMaps",
    "UnsupportedTaggedTuple",
    "UnsupportedAliasTarget",
    "MalformedDeclaration",
]
