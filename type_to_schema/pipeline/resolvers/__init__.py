"""
Resolvers module.

Contains the type resolver and the serialization rule resolver.
"""

from __future__ import annotations

from .rule_resolver import RuleResolver, SerdeRuleResolver
from .type_resolver import DefaultTypeResolver, ResolvedType, SubstitutedTypeResolver, TypeResolver

__all__ = [
    "TypeResolver",
    "DefaultTypeResolver",
    "SubstitutedTypeResolver",
    "ResolvedType",
    "RuleResolver",
    "SerdeRuleResolver",
]
