"""
Alias instantiator.

Produces one named, fully concrete schema per alias binding of a generic
declaration, together with the type alias declaration that binds the name to
the concrete instantiation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import jinja2

from ..declaration.nodes import AliasBinding, Declaration
from ..declaration.type_expr import STATIC_LIFETIME, TypeExpr, TypeExprKind
from ..errors import MalformedDeclaration, UnsupportedAliasTarget
from ..resolvers.type_resolver import SubstitutedTypeResolver, TypeResolver
from ..schema_tree.nodes import SchemaNode

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "rust"

_jinja_env: jinja2.Environment | None = None


def _template_env() -> jinja2.Environment:
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
    return _jinja_env


@dataclass(frozen=True)
class TypeAliasDeclaration:
    """``pub type Name<'a> = Target<'a, Concrete>;``"""

    name: str
    target: TypeExpr
    lifetimes: tuple[str, ...] = ()
    visibility: str = "pub"

    def render(self) -> str:
        template = _template_env().get_template("type_alias.rs.jinja2")
        return template.render(
            visibility=self.visibility,
            name=self.name,
            lifetimes=list(self.lifetimes),
            target=self.target.render(),
        ).strip()


@dataclass
class AliasSchema:
    """A schema synthesized for one alias binding."""

    name: str
    schema: SchemaNode
    declaration: TypeAliasDeclaration


def collect_lifetimes(type_expr: TypeExpr) -> tuple[str, ...]:
    """Lifetimes used anywhere in ``type_expr``, first-seen order, ``'static`` excluded."""
    found: list[str] = []

    def walk(expr: TypeExpr) -> None:
        if expr.lifetime and expr.lifetime != STATIC_LIFETIME and expr.lifetime not in found:
            found.append(expr.lifetime)
        for arg in expr.args:
            walk(arg)

    walk(type_expr)
    return tuple(found)


def check_alias_target(type_expr: TypeExpr, location: str = "") -> None:
    """Raise unless ``type_expr`` and all its type arguments are plain paths."""
    if type_expr.kind == TypeExprKind.LIFETIME:
        return
    if not type_expr.is_path:
        raise UnsupportedAliasTarget(
            f"Unsupported type `{type_expr.render()}` in alias: only path types "
            f"(`Name<Args>`) can be substituted, found a {type_expr.kind.value} type",
            location=location,
        )
    for arg in type_expr.args:
        check_alias_target(arg, location)


class AliasInstantiator:
    """Runs synthesis once per alias binding with type parameters substituted."""

    def __init__(self, type_resolver: TypeResolver):
        self.type_resolver = type_resolver

    def instantiate(
        self,
        declaration: Declaration,
        synthesize: Callable[[TypeResolver], SchemaNode],
    ) -> list[AliasSchema]:
        """
        Synthesize every alias binding of a declaration.

        Args:
            declaration: The generic declaration
            synthesize: Builds the declaration's schema against a resolver view

        Returns:
            One AliasSchema per binding, in declaration order
        """
        if not declaration.aliases:
            return []
        if not declaration.generics.type_params:
            logger.debug("%s: not generic, ignoring %d aliases", declaration.ident, len(declaration.aliases))
            return []

        # Alias schemas share the components namespace with the primary schema
        reserved = {declaration.ident}
        if declaration.features.schema_as is not None:
            reserved.add(".".join(declaration.features.schema_as.segments))

        seen: set[str] = set()
        results = []
        for alias in declaration.aliases:
            if alias.name in reserved:
                raise MalformedDeclaration(
                    f"alias `{alias.name}` reuses the schema name of `{declaration.ident}`",
                    location=declaration.location,
                    help="Give the alias a name of its own",
                )
            if alias.name in seen:
                raise MalformedDeclaration(
                    f"duplicate alias `{alias.name}` on `{declaration.ident}`",
                    location=declaration.location,
                )
            seen.add(alias.name)

            bindings = self.bindings(declaration, alias)
            logger.debug(
                "%s: instantiating alias %s with %s",
                declaration.ident,
                alias.name,
                ", ".join(f"{param} = {ty}" for param, ty in bindings.items()),
            )
            schema = synthesize(SubstitutedTypeResolver(self.type_resolver, bindings))
            results.append(
                AliasSchema(
                    name=alias.name,
                    schema=schema,
                    declaration=TypeAliasDeclaration(
                        name=alias.name,
                        target=alias.target,
                        lifetimes=collect_lifetimes(alias.target),
                        visibility=declaration.visibility,
                    ),
                )
            )
        return results

    def bindings(self, declaration: Declaration, alias: AliasBinding) -> dict[str, TypeExpr]:
        """Map the declaration's type parameters to the alias's type arguments."""
        check_alias_target(alias.target, declaration.location)
        params = declaration.generics.type_params
        type_args = alias.target.type_args
        if len(type_args) > len(params):
            raise MalformedDeclaration(
                f"alias `{alias.name}` passes {len(type_args)} type arguments but "
                f"`{declaration.ident}` declares {len(params)} type parameters",
                location=declaration.location,
            )
        return dict(zip(params, type_args))
