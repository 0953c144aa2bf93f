"""
Naming engine for wire names of fields and variants.

Precedence, highest first: explicit rename, inherited ``rename_all`` case
transform, original identifier (raw identifier prefix stripped).
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ...utils import RenameRule, strip_raw_identifier

T = TypeVar("T")


class NameKind(Enum):
    """What kind of identifier is being renamed."""

    FIELD = "field"
    VARIANT = "variant"


def first_of(*candidates: T | None) -> T | None:
    """Return the first candidate that is set; earlier layers override later ones."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def resolve_name(
    original: str,
    explicit_rename: str | None = None,
    rename_all: RenameRule | None = None,
    kind: NameKind = NameKind.FIELD,
) -> str:
    """
    Compute the effective wire name of a field or variant.

    Args:
        original: Identifier as declared
        explicit_rename: Per-field or per-variant rename, if any
        rename_all: Case rule inherited from the container, if any
        kind: Whether ``original`` is a field or a variant identifier

    Returns:
        The name used in the serialized document
    """
    if explicit_rename is not None:
        return explicit_rename

    name = strip_raw_identifier(original)
    if rename_all is None:
        return name
    if kind == NameKind.VARIANT:
        return rename_all.apply_to_variant(name)
    return rename_all.apply_to_field(name)
