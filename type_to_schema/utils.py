"""
Utility functions for Type to Schema synthesis.

Case conversion follows the serde rename rules: field identifiers are
assumed to be snake_case and variant identifiers PascalCase.
"""

from __future__ import annotations

import re
from enum import Enum

# Regex pattern to split a snake_case identifier into words
_SNAKE_WORD_PATTERN = re.compile(r"[^_]+")

RAW_IDENTIFIER_PREFIX = "r#"


class RenameRule(str, Enum):
    """Case transform applied by a ``rename_all`` directive."""

    LOWER_CASE = "lowercase"
    UPPER_CASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"

    def apply_to_field(self, field: str) -> str:
        """Apply the rule to a snake_case field identifier.

        Examples:
            CAMEL_CASE: "first_name" -> "firstName"
            PASCAL_CASE: "first_name" -> "FirstName"
            SCREAMING_KEBAB_CASE: "first_name" -> "FIRST-NAME"
        """
        if self in (RenameRule.LOWER_CASE, RenameRule.SNAKE_CASE):
            return field
        if self in (RenameRule.UPPER_CASE, RenameRule.SCREAMING_SNAKE_CASE):
            return field.upper()
        if self == RenameRule.PASCAL_CASE:
            return _snake_to_pascal(field)
        if self == RenameRule.CAMEL_CASE:
            pascal = _snake_to_pascal(field)
            return pascal[:1].lower() + pascal[1:]
        if self == RenameRule.KEBAB_CASE:
            return field.replace("_", "-")
        return field.upper().replace("_", "-")

    def apply_to_variant(self, variant: str) -> str:
        """Apply the rule to a PascalCase variant identifier.

        Examples:
            SNAKE_CASE: "VeryTasty" -> "very_tasty"
            CAMEL_CASE: "VeryTasty" -> "veryTasty"
            LOWER_CASE: "VeryTasty" -> "verytasty"
        """
        if self == RenameRule.PASCAL_CASE:
            return variant
        if self == RenameRule.LOWER_CASE:
            return variant.lower()
        if self == RenameRule.UPPER_CASE:
            return variant.upper()
        if self == RenameRule.CAMEL_CASE:
            return variant[:1].lower() + variant[1:]
        snake = _pascal_to_snake(variant)
        if self == RenameRule.SNAKE_CASE:
            return snake
        if self == RenameRule.SCREAMING_SNAKE_CASE:
            return snake.upper()
        if self == RenameRule.KEBAB_CASE:
            return snake.replace("_", "-")
        return snake.upper().replace("_", "-")


def _snake_to_pascal(text: str) -> str:
    """Capitalize the first letter of every underscore separated word."""
    words = _SNAKE_WORD_PATTERN.findall(text)
    return "".join(word[:1].upper() + word[1:] for word in words)


def _pascal_to_snake(text: str) -> str:
    """Insert an underscore before every inner uppercase letter and lowercase the result."""
    out = []
    for i, char in enumerate(text):
        if char.isupper() and i > 0:
            out.append("_")
        out.append(char.lower())
    return "".join(out)


def strip_raw_identifier(ident: str) -> str:
    """Normalize a keyword-escaped identifier (``r#type``) to its plain spelling."""
    if ident.startswith(RAW_IDENTIFIER_PREFIX):
        return ident[len(RAW_IDENTIFIER_PREFIX) :]
    return ident


def format_docs(lines: list[str] | tuple[str, ...]) -> str:
    """Join doc comment lines into a description.

    A single leading space is dropped from every line (the one following the
    comment marker) and surrounding blank lines are removed.
    """
    cleaned = [line[1:] if line.startswith(" ") else line for line in lines]
    return "\n".join(cleaned).strip()
