"""Generation of serialization code for a file's marked types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from gentools.format_registry import FileFormatRegistry, default_registry
from gentools.sast import SASTNode

logger = logging.getLogger(__name__)


@dataclass
class GeneratedCode:
    """Generated code for one file, keyed by format name."""

    code: dict[str, str] = field(default_factory=dict)


class CodeGenerator:
    """Runs the format plugins over the nodes of one file."""

    def __init__(
        self,
        nodes: Iterable[SASTNode],
        registry: Optional[FileFormatRegistry] = None,
    ) -> None:
        self.nodes = list(nodes)
        self.registry = registry if registry is not None else default_registry()

    def generate_code(self) -> GeneratedCode:
        """Generate code for every format of every node.

        Code for the same format is concatenated in node order. A format
        without a plugin is reported and skipped.
        """
        generated = GeneratedCode()
        for node in self.nodes:
            for format_name in node.formats:
                plugin = self.registry.get_plugin(format_name)
                if plugin is None:
                    logger.error("Error: No plugin found for format: %s", format_name)
                    continue
                generated.code[format_name] = generated.code.get(
                    format_name, ""
                ) + plugin.generate_code(node)
        return generated