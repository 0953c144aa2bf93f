"""
Pipeline - declaration to schema synthesis.

This module provides a multi-phase architecture for synthesizing schemas
from data-type declarations:

1. Phase 1 (Parser): Parse declaration dictionaries into Declarations
2. Phase 2 (Rules): Resolve serialization rules and declared types
3. Phase 3 (Synthesis): Build schema trees for structs, enums and aliases
4. Phase 4 (Rendering): Render schema trees to OpenAPI style dictionaries
"""

from __future__ import annotations

from .config import SchemaGeneratorConfig
from .declaration import Declaration, DeclarationParser
from .errors import (
    MalformedDeclaration,
    MultipleFlattenedMaps,
    SchemaSynthesisError,
    UnsupportedAliasTarget,
    UnsupportedTaggedTuple,
)
from .generator import PipelineGenerator
from .synthesis import SchemaAssembler, SchemaResult

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
