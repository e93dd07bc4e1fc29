"""Actions that turn one translation unit into SAST results, and the factory for them."""

from __future__ import annotations

import threading
from typing import Iterable, MutableMapping, Optional

from gentools.ast_parser import ASTParser, RecordDecl, SASTResult
from gentools.sast import SASTNode

_FIXED_TYPE_MACROS = {
    "SERIALIZABLE_ALL": "serializable:all",
    "SERIALIZABLE_PUBLIC": "serializable:public",
    "SERIALIZABLE_PROTECTED": "serializable:protected",
    "SERIALIZABLE_PRIVATE": "serializable:private",
}

_OBJECT_MACROS = {
    "SERIALIZABLE_POD": "serializable:pod",
    "SERIALIZE_FIELD": "serialize",
    "SERIALIZE_EXCLUDE": "serialize:exclude",
}


def macro_annotation(macro: str, *args: str) -> Optional[str]:
    """Return the annotation a serialization macro attaches to a declaration.

    ``GENERATED_SERIALIZATION_BODY`` attaches none, so it gives None.
    """
    if macro == "SERIALIZABLE":
        return "serializable:" + ", ".join(arg.strip() for arg in args)
    if macro in _FIXED_TYPE_MACROS:
        return _FIXED_TYPE_MACROS[macro]
    if macro in _OBJECT_MACROS:
        if args:
            raise ValueError(f"Macro {macro} takes no arguments")
        return _OBJECT_MACROS[macro]
    if macro == "SERIALIZE_FIELD_AS":
        if len(args) != 1:
            raise ValueError("Macro SERIALIZE_FIELD_AS takes exactly one argument")
        return "serialize:" + args[0].strip()
    if macro == "GENERATED_SERIALIZATION_BODY":
        if args:
            raise ValueError("Macro GENERATED_SERIALIZATION_BODY takes no arguments")
        return None
    raise ValueError(f"Unknown serialization macro: {macro}")


class SASTGeneratorAction:
    """Processes one translation unit into a shared result."""

    def __init__(self, result: SASTResult) -> None:
        self.result = result

    def create_consumer(self, in_file: str) -> ASTParser:
        """Record the file being processed and return the parser for it."""
        self.result.file_path = str(in_file)
        return ASTParser(self.result)

    def run(self, in_file: str, records: Iterable[RecordDecl]) -> SASTResult:
        """Parse the records of one file and return the filled result."""
        self.create_consumer(in_file).handle_translation_unit(records)
        return self.result


class SASTGeneratorActionFactory:
    """Creates one action per file and keeps every result for merging."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.results: list[SASTResult] = []

    def create(self) -> SASTGeneratorAction:
        """Return a new action with its own result."""
        result = SASTResult()
        with self._lock:
            self.results.append(result)
        return SASTGeneratorAction(result)

    def merge_results(
        self,
        global_trees: MutableMapping[str, list[SASTNode]],
        global_map: MutableMapping[str, SASTNode],
    ) -> None:
        """Merge every result: trees by file path, nodes by name; later ones win."""
        with self._lock:
            results = list(self.results)
        for result in results:
            global_trees[result.file_path] = list(result.tree)
            global_map.update(result.map)