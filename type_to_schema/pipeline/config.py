"""
Configuration for the schema synthesis pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_REFERENCE_PREFIX = "#/components/schemas/"


@dataclass
class SchemaGeneratorConfig:
    """Configuration options for schema synthesis."""

    # Classify unit-only enums with a numeric base type as discriminant enums
    repr_enums: bool = True

    # Prefix used when rendering references to other schemas
    reference_prefix: str = DEFAULT_REFERENCE_PREFIX

    # Fail on heterogeneous positional structs instead of emitting a free-form object
    reject_heterogeneous_tuples: bool = False

    @staticmethod
    def from_dict(d: dict) -> SchemaGeneratorConfig:
        """Create a config from a dictionary."""
        config = SchemaGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "repr_enums": self.repr_enums,
            "reference_prefix": self.reference_prefix,
            "reject_heterogeneous_tuples": self.reject_heterogeneous_tuples,
        }
