"""Reading of annotated type declarations into the serialization syntax tree."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from gentools.file_validator import validate_file
from gentools.sast import SASTField, SASTNode, SASTType, SerializationPolicy

_TYPE_PREFIX = "serializable"
_TYPE_PARAMS_START = len("serializable:")
_FIELD_MARK = "serialize"
_FIELD_PREFIX = "serialize:"
_EXCLUDE = "exclude"
_STRING_TYPE = "std::string"

_POLICIES = {
    "all": SerializationPolicy.ALL,
    "public": SerializationPolicy.PUBLIC,
    "protected": SerializationPolicy.PROTECTED,
    "private": SerializationPolicy.PRIVATE,
    "pod": SerializationPolicy.POD,
}


class FieldKind(Enum):
    """The category of a field's declared type."""

    RECORD = "record"
    INTEGER = "integer"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    OTHER = "other"


@dataclass
class FieldDecl:
    """A data member as declared in source.

    ``record_name`` is the qualified name of the record a ``RECORD`` field
    holds; when it is not given the type name is used.
    """

    name: str
    type_name: str
    kind: FieldKind
    annotations: list[str] = field(default_factory=list)
    record_name: Optional[str] = None


@dataclass
class RecordDecl:
    """A class or struct declaration as found in a translation unit."""

    name: str
    annotations: list[str] = field(default_factory=list)
    fields: list[FieldDecl] = field(default_factory=list)
    bases: list["RecordDecl"] = field(default_factory=list)
    nested: list["RecordDecl"] = field(default_factory=list)
    is_definition: bool = True


@dataclass
class SASTResult:
    """The nodes found in one file: in declaration order and by name."""

    tree: list[SASTNode] = field(default_factory=list)
    map: dict[str, SASTNode] = field(default_factory=dict)
    file_path: str = ""


def _walk(records: Iterable[RecordDecl]) -> Iterable[RecordDecl]:
    for record in records:
        yield record
        yield from _walk(record.nested)


def _read_type_annotations(
    annotations: Iterable[str],
) -> tuple[bool, SerializationPolicy, list[str]]:
    serializable = False
    policy = SerializationPolicy.CUSTOM
    formats: list[str] = []
    for annotation in annotations:
        if not annotation.startswith(_TYPE_PREFIX):
            continue
        serializable = True
        params = annotation[_TYPE_PARAMS_START:]
        if params in _POLICIES:
            policy = _POLICIES[params]
        elif params:
            parts = params.split(",")
            if parts[-1] == "":
                parts.pop()
            formats.extend(parts)
    return serializable, policy, formats


def _read_field_annotations(annotations: Iterable[str]) -> tuple[bool, str]:
    include = False
    custom_name = ""
    for annotation in annotations:
        if annotation == _FIELD_MARK:
            include = True
        elif annotation.startswith(_FIELD_PREFIX):
            param = annotation[len(_FIELD_PREFIX):]
            if param == _EXCLUDE:
                include = False
            else:
                custom_name = param
                include = True
    return include, custom_name


class ASTParser:
    """Builds SAST nodes from record declarations into a shared result."""

    def __init__(self, result: SASTResult) -> None:
        self.result = result
        self._lock = threading.Lock()

    def handle_translation_unit(self, records: Iterable[RecordDecl]) -> Optional[bool]:
        """Visit every record, nested ones after their parent.

        When any serializable type was found the file is validated and the
        outcome returned; otherwise None.
        """
        for record in _walk(records):
            self.visit_record(record)
        if not self.result.tree:
            return None
        return validate_file(self.result.file_path)

    def visit_record(self, record: RecordDecl) -> Optional[SASTNode]:
        """Add a node for a serializable record definition and return it."""
        if not record.is_definition:
            return None
        serializable, policy, formats = _read_type_annotations(record.annotations)
        if not serializable:
            return None

        node = SASTNode(name=record.name, serialization_policy=policy, formats=formats)
        for base in record.bases:
            if base.annotations:
                base_node = self.result.map.get(base.name)
                if base_node is not None:
                    node.base_nodes.append(base_node)

        self._process_fields(record, node)

        with self._lock:
            self.result.map[node.name] = node
            self.result.tree.append(node)
        return node

    def _process_fields(self, record: RecordDecl, node: SASTNode) -> None:
        auto_include = node.serialization_policy in (
            SerializationPolicy.ALL,
            SerializationPolicy.POD,
        )
        for decl in record.fields:
            include, custom_name = _read_field_annotations(decl.annotations)
            if not include and auto_include:
                include = True
            if not include:
                continue
            node.fields.append(self._make_field(decl, custom_name or decl.name))

    def _make_field(self, decl: FieldDecl, name: str) -> SASTField:
        kind = decl.kind
        if kind is FieldKind.RECORD:
            if decl.type_name == _STRING_TYPE:
                return SASTField(name, SASTType.STRING, decl.type_name)
            target = self.result.map.get(decl.record_name or decl.type_name)
            return SASTField(name, SASTType.OBJECT, decl.type_name, target)
        simple = {
            FieldKind.INTEGER: SASTType.INT,
            FieldKind.FLOAT: SASTType.FLOAT,
            FieldKind.DOUBLE: SASTType.DOUBLE,
            FieldKind.BOOLEAN: SASTType.BOOL,
        }
        return SASTField(name, simple.get(kind, SASTType.OBJECT), decl.type_name)