"""Linking of object fields to the nodes of the types they hold."""

from __future__ import annotations

from typing import Mapping, Sequence

from gentools.sast import SASTNode, SASTType


class SASTLinker:
    """Fills in the node links of object fields from a map of all known nodes."""

    def __init__(self, tree: Sequence[SASTNode], global_map: Mapping[str, SASTNode]) -> None:
        self.tree = tree
        self.global_map = global_map

    def link(self) -> None:
        """Link every unlinked object field whose type name is known."""
        for node in self.tree:
            for field in node.fields:
                if field.type is SASTType.OBJECT and field.object_node is None:
                    target = self.global_map.get(field.original_type_name)
                    if target is not None:
                        field.object_node = target