"""The serialization syntax tree: the types marked for serialization and their fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SASTType(Enum):
    """The basic kinds of value a field can hold for serialization."""

    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    STRING = "string"
    OBJECT = "object"


class SerializationPolicy(Enum):
    """Which fields of a type are serialized when they are not marked one by one."""

    POD = "pod"
    ALL = "all"
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    CUSTOM = "custom"


@dataclass
class SASTField:
    """One serialized field of a type."""

    name: str
    type: SASTType
    original_type_name: str = ""
    object_node: Optional["SASTNode"] = None


@dataclass(eq=False)
class SASTNode:
    """A type marked for serialization.

    Nodes are shared between trees and maps, so two nodes are equal only
    when they are the same object.
    """

    name: str
    serialization_policy: SerializationPolicy = SerializationPolicy.CUSTOM
    formats: list[str] = field(default_factory=list)
    fields: list[SASTField] = field(default_factory=list)
    base_nodes: list["SASTNode"] = field(default_factory=list)