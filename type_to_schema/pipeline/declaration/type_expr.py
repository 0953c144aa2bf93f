"""
Generic type expressions.

A small AST for declared field types (``Vec<Option<String>>``, ``&'a str``,
``[u8; 4]``...) together with a recursive descent parser. Type expressions
are immutable and compared structurally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, NoReturn

from ..errors import MalformedDeclaration

STATIC_LIFETIME = "'static"


class TypeExprKind(Enum):
    """Kind of type expression."""

    PATH = "path"  # a::b::Name<Args>
    REFERENCE = "reference"  # &'a T
    TUPLE = "tuple"  # (A, B)
    SLICE = "slice"  # [T]
    ARRAY = "array"  # [T; N]
    LIFETIME = "lifetime"  # 'a (only valid as a generic argument)


@dataclass(frozen=True)
class TypeExpr:
    """A parsed type expression."""

    kind: TypeExprKind = TypeExprKind.PATH

    # Path segments (PATH only)
    segments: tuple[str, ...] = ()

    # Generic arguments of the last segment, or element types for other kinds
    args: tuple[TypeExpr, ...] = ()

    # Lifetime name for LIFETIME and REFERENCE
    lifetime: str | None = None

    # Length of an ARRAY
    length: str | None = None

    mutable: bool = False

    @staticmethod
    def parse(text: str, location: str = "") -> TypeExpr:
        """Parse a type expression from its source spelling."""
        return TypeExprParser(text, location).parse()

    @staticmethod
    def path(name: str, *args: TypeExpr) -> TypeExpr:
        """Build a path type from a ``::`` separated name and generic arguments."""
        return TypeExpr(segments=tuple(name.split("::")), args=tuple(args))

    @property
    def name(self) -> str:
        """Last path segment."""
        return self.segments[-1] if self.segments else ""

    @property
    def is_path(self) -> bool:
        return self.kind == TypeExprKind.PATH

    @property
    def type_args(self) -> tuple[TypeExpr, ...]:
        """Generic arguments that are types (lifetimes excluded)."""
        return tuple(arg for arg in self.args if arg.kind != TypeExprKind.LIFETIME)

    def substitute(self, bindings: Mapping[str, TypeExpr]) -> TypeExpr:
        """Replace bound type parameters by their concrete types.

        Only bare single-segment paths without arguments are considered type
        parameters; substitution walks declared generic arguments only.
        """
        if not bindings:
            return self
        if self.kind == TypeExprKind.LIFETIME:
            return self
        if self.kind == TypeExprKind.PATH and len(self.segments) == 1 and not self.args and self.name in bindings:
            return bindings[self.name]
        return TypeExpr(
            kind=self.kind,
            segments=self.segments,
            args=tuple(arg.substitute(bindings) for arg in self.args),
            lifetime=self.lifetime,
            length=self.length,
            mutable=self.mutable,
        )

    def render(self) -> str:
        """Render the expression back to source form."""
        if self.kind == TypeExprKind.LIFETIME:
            return self.lifetime or ""
        if self.kind == TypeExprKind.REFERENCE:
            parts = ["&"]
            if self.lifetime:
                parts.append(f"{self.lifetime} ")
            if self.mutable:
                parts.append("mut ")
            parts.append(self.args[0].render())
            return "".join(parts)
        if self.kind == TypeExprKind.TUPLE:
            inner = ", ".join(arg.render() for arg in self.args)
            return f"({inner},)" if len(self.args) == 1 else f"({inner})"
        if self.kind == TypeExprKind.SLICE:
            return f"[{self.args[0].render()}]"
        if self.kind == TypeExprKind.ARRAY:
            return f"[{self.args[0].render()}; {self.length}]"
        path = "::".join(self.segments)
        if self.args:
            return f"{path}<{', '.join(arg.render() for arg in self.args)}>"
        return path

    def __str__(self) -> str:
        return self.render()


# Tokens: path separator, lifetimes, identifiers, integers and punctuation
_TOKEN_PATTERN = re.compile(r"\s*(::|'[A-Za-z_][A-Za-z0-9_]*|[A-Za-z_][A-Za-z0-9_#]*|\d+|[<>,()\[\];&])")


class TypeExprParser:
    """Recursive descent parser for type expressions."""

    def __init__(self, text: str, location: str = ""):
        self.text = text
        self.location = location
        self.tokens = self._tokenize(text)
        self.pos = 0

    def parse(self) -> TypeExpr:
        expr = self._parse_type()
        if self.pos != len(self.tokens):
            self._fail(f"unexpected `{self.tokens[self.pos]}`")
        return expr

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        pos = 0
        stripped_end = len(text.rstrip())
        while pos < stripped_end:
            match = _TOKEN_PATTERN.match(text, pos)
            if not match:
                raise MalformedDeclaration(
                    f"Cannot parse type `{text}`: unexpected character `{text[pos:].strip()[:1]}`",
                    location=self.location,
                )
            tokens.append(match.group(1))
            pos = match.end()
        return tokens

    def _fail(self, reason: str) -> NoReturn:
        raise MalformedDeclaration(f"Cannot parse type `{self.text}`: {reason}", location=self.location)

    def _peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            self._fail("unexpected end of input")
        self.pos += 1
        return token

    def _expect(self, token: str) -> None:
        found = self._next()
        if found != token:
            self._fail(f"expected `{token}`, found `{found}`")

    def _parse_type(self) -> TypeExpr:
        token = self._peek()
        if token == "&":
            return self._parse_reference()
        if token == "(":
            return self._parse_tuple()
        if token == "[":
            return self._parse_slice_or_array()
        if token is not None and (token == "::" or _is_identifier(token)):
            return self._parse_path()
        self._fail(f"expected a type, found `{token}`" if token else "empty type")

    def _parse_reference(self) -> TypeExpr:
        self._expect("&")
        lifetime = None
        mutable = False
        if (self._peek() or "").startswith("'"):
            lifetime = self._next()
        if self._peek() == "mut":
            self._next()
            mutable = True
        inner = self._parse_type()
        return TypeExpr(kind=TypeExprKind.REFERENCE, args=(inner,), lifetime=lifetime, mutable=mutable)

    def _parse_tuple(self) -> TypeExpr:
        self._expect("(")
        elements = []
        while self._peek() != ")":
            elements.append(self._parse_type())
            if self._peek() == ",":
                self._next()
            elif self._peek() != ")":
                self._fail(f"expected `,` or `)`, found `{self._peek()}`")
        self._expect(")")
        return TypeExpr(kind=TypeExprKind.TUPLE, args=tuple(elements))

    def _parse_slice_or_array(self) -> TypeExpr:
        self._expect("[")
        inner = self._parse_type()
        if self._peek() == ";":
            self._next()
            length = self._next()
            self._expect("]")
            return TypeExpr(kind=TypeExprKind.ARRAY, args=(inner,), length=length)
        self._expect("]")
        return TypeExpr(kind=TypeExprKind.SLICE, args=(inner,))

    def _parse_path(self) -> TypeExpr:
        if self._peek() == "::":
            self._next()
        segments = [self._parse_identifier()]
        while self._peek() == "::":
            self._next()
            segments.append(self._parse_identifier())

        args: list[TypeExpr] = []
        if self._peek() == "<":
            self._next()
            while self._peek() != ">":
                args.append(self._parse_generic_argument())
                if self._peek() == ",":
                    self._next()
                elif self._peek() != ">":
                    self._fail(f"expected `,` or `>`, found `{self._peek()}`")
            self._expect(">")
        return TypeExpr(segments=tuple(segments), args=tuple(args))

    def _parse_generic_argument(self) -> TypeExpr:
        token = self._peek()
        if token is not None and token.startswith("'"):
            return TypeExpr(kind=TypeExprKind.LIFETIME, lifetime=self._next())
        return self._parse_type()

    def _parse_identifier(self) -> str:
        token = self._next()
        if not _is_identifier(token):
            self._fail(f"expected an identifier, found `{token}`")
        return token


def _is_identifier(token: str) -> bool:
    return token[:1].isalpha() or token[:1] == "_"
