"""
Pipeline generator - orchestrates the synthesis phases.

1. Phase 1 (Parser): Parse declaration dictionaries into Declarations
2. Phase 2 (Rules): Resolve serialization rules of containers, fields and variants
3. Phase 3 (Synthesis): Build schema trees, one per declaration and alias
4. Phase 4 (Rendering): Render schema trees to OpenAPI style dictionaries
"""

from __future__ import annotations

import logging
from typing import Any

from .config import SchemaGeneratorConfig
from .declaration.nodes import Declaration
from .declaration.parser import DeclarationParser
from .errors import MalformedDeclaration
from .resolvers.rule_resolver import RuleResolver
from .resolvers.type_resolver import TypeResolver
from .synthesis.assembler import SchemaAssembler, SchemaResult

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Synthesizes schemas for a set of declarations."""

    def __init__(
        self,
        declarations: list[Declaration | dict[str, Any]] | Declaration | dict[str, Any],
        config: SchemaGeneratorConfig | None = None,
        type_resolver: TypeResolver | None = None,
        rule_resolver: RuleResolver | None = None,
    ):
        """
        Initialize the generator.

        Args:
            declarations: One declaration or a list of them, parsed or as dictionaries
            config: Synthesis configuration
            type_resolver: Resolver for declared field types
            rule_resolver: Resolver for serialization directives
        """
        self.config = config or SchemaGeneratorConfig()
        if isinstance(declarations, (Declaration, dict)):
            declarations = [declarations]

        parser = DeclarationParser()
        self.declarations = [
            declaration if isinstance(declaration, Declaration) else parser.parse(declaration)
            for declaration in declarations
        ]
        self.assembler = SchemaAssembler(self.config, type_resolver, rule_resolver)

    def generate(self) -> list[SchemaResult]:
        """Synthesize every declaration, in order. The first failure aborts the run."""
        return [self.assembler.assemble(declaration) for declaration in self.declarations]

    def generate_components(self) -> dict[str, Any]:
        """
        Render all schemas into one ``components.schemas`` mapping.

        Raises:
            MalformedDeclaration: If two declarations or aliases emit the same schema name
        """
        schemas: dict[str, Any] = {}
        for result in self.generate():
            for name, schema in result.to_dict(self.config.reference_prefix).items():
                if name in schemas:
                    raise MalformedDeclaration(f"schema `{name}` is emitted more than once")
                schemas[name] = schema
        logger.debug("Generated %d schemas from %d declarations", len(schemas), len(self.declarations))
        return {"components": {"schemas": schemas}}

    def generate_type_aliases(self) -> str:
        """Render the alias declarations of every generic declaration, one per line."""
        lines = [alias.render() for result in self.generate() for alias in result.type_aliases]
        return "\n".join(lines) + ("\n" if lines else "")
