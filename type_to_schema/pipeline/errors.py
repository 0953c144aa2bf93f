"""
Synthesis errors.

Every error is fatal for the declaration being synthesized: no partial
schema is ever returned. The caller decides whether to abort the whole run
or skip the declaration.
"""

from __future__ import annotations


class SchemaSynthesisError(Exception):
    """Raised when a declaration cannot be turned into a schema.

    Attributes:
        message: Human readable cause
        location: Source location of the originating declaration
        notes: Additional context lines (e.g. where a conflicting field was declared)
        help: Suggested fix, if any
    """

    def __init__(
        self,
        message: str,
        location: str = "",
        notes: list[str] | None = None,
        help: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.notes = list(notes or [])
        self.help = help

    def __str__(self) -> str:
        lines = [f"{self.location}: {self.message}" if self.location else self.message]
        lines.extend(f"note: {note}" for note in self.notes)
        if self.help:
            lines.append(f"help: {self.help}")
        return "\n".join(lines)


class MultipleFlattenedMaps(SchemaSynthesisError):
    """Raised when more than one flattened field resolves to a map.

    Only one map can occupy the ``additionalProperties`` slot of an object.
    """

    def __init__(self, struct_name: str, first_field: str, second_field: str, location: str = ""):
        super().__init__(
            f"The structure `{struct_name}` contains multiple flattened map fields.",
            location=location,
            notes=[
                f"first flattened map field was declared here as `{first_field}`",
                f"second flattened map field was declared here as `{second_field}`",
            ],
        )
        self.struct_name = struct_name
        self.first_field = first_field
        self.second_field = second_field


class UnsupportedTaggedTuple(SchemaSynthesisError):
    """Raised when a positional variant cannot be folded into a tag-bearing object."""

    pass


class UnsupportedAliasTarget(SchemaSynthesisError):
    """Raised when an alias target is not a plain path type."""

    pass


class MalformedDeclaration(SchemaSynthesisError):
    """Raised when a declaration is structurally invalid.

    This can happen when:
    - The declaration is neither a struct nor an enum
    - The alias list cannot be parsed or contains duplicates
    - A type expression or serialization directive cannot be understood
    - Two fields resolve to the same property name
    """

    pass
