"""
Synthesis module.

Contains the naming engine, the struct and enum synthesizers, the alias
instantiator and the schema-tree assembler.
"""

from __future__ import annotations

from .alias_instantiator import AliasInstantiator, TypeAliasDeclaration
from .assembler import SchemaAssembler, SchemaResult
from .enum_synthesizer import EnumKind, EnumSynthesizer
from .struct_synthesizer import StructSynthesizer

__all__ = [
    "SchemaAssembler",
    "SchemaResult",
    "StructSynthesizer",
    "EnumSynthesizer",
    "EnumKind",
    "AliasInstantiator",
    "TypeAliasDeclaration",
]
