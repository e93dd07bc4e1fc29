"""The whole generation run: parse every file, link the trees, generate code."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from gentools.ast_parser import RecordDecl
from gentools.code_generator import CodeGenerator, GeneratedCode
from gentools.format_registry import FileFormatRegistry
from gentools.generator_action import SASTGeneratorActionFactory
from gentools.linker import SASTLinker
from gentools.sast import SASTNode

T = TypeVar("T")
R = TypeVar("R")

_FALLBACK_WORKERS = 4

TranslationUnits = Union[
    Mapping[str, Iterable[RecordDecl]],
    Iterable[tuple[str, Iterable[RecordDecl]]],
]


def _resolve_workers(workers: Optional[int]) -> int:
    if workers is None or workers == 0:
        return os.cpu_count() or _FALLBACK_WORKERS
    if workers < 0:
        raise ValueError(f"Number of workers must not be negative, got {workers}")
    return workers


def chunked(items: Iterable[T], workers: Optional[int] = 0) -> list[list[T]]:
    """Split items into at most ``workers`` chunks of equal size, the last one shorter.

    Zero or None workers means one per available processor.
    """
    values = list(items)
    count = _resolve_workers(workers)
    if not values:
        return []
    size = -(-len(values) // count)
    return [values[start:start + size] for start in range(0, len(values), size)]


def _run_chunks(
    items: Iterable[T],
    workers: Optional[int],
    work: Callable[[Sequence[T]], R],
) -> list[R]:
    chunks = chunked(items, workers)
    if not chunks:
        return []
    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        futures = [pool.submit(work, chunk) for chunk in chunks]
        return [future.result() for future in futures]


def link_all(
    trees: Mapping[str, Sequence[SASTNode]],
    global_map: Mapping[str, SASTNode],
    workers: Optional[int] = 0,
) -> None:
    """Link the object fields of every file's tree, spreading files over threads."""

    def link_chunk(chunk: Sequence[tuple[str, Sequence[SASTNode]]]) -> None:
        for _path, tree in chunk:
            SASTLinker(tree, global_map).link()

    _run_chunks(trees.items(), workers, link_chunk)


def generate_all(
    trees: Mapping[str, Sequence[SASTNode]],
    registry: Optional[FileFormatRegistry] = None,
    workers: Optional[int] = 0,
) -> dict[str, GeneratedCode]:
    """Generate code for every file's tree; the result keeps the files' order."""

    def generate_chunk(
        chunk: Sequence[tuple[str, Sequence[SASTNode]]],
    ) -> list[tuple[str, GeneratedCode]]:
        return [
            (path, CodeGenerator(tree, registry).generate_code()) for path, tree in chunk
        ]

    generated: dict[str, GeneratedCode] = {}
    for part in _run_chunks(trees.items(), workers, generate_chunk):
        generated.update(part)
    return generated


def run_pipeline(
    translation_units: TranslationUnits,
    registry: Optional[FileFormatRegistry] = None,
    link_workers: Optional[int] = 0,
    gen_workers: Optional[int] = 0,
) -> dict[str, GeneratedCode]:
    """Parse each file's records, link across files and generate code per file.

    ``translation_units`` maps each file path to the records declared in it,
    or is a sequence of such pairs.
    """
    units = (
        translation_units.items()
        if isinstance(translation_units, Mapping)
        else translation_units
    )
    factory = SASTGeneratorActionFactory()
    for path, records in units:
        factory.create().run(path, records)

    trees: dict[str, list[SASTNode]] = {}
    global_map: dict[str, SASTNode] = {}
    factory.merge_results(trees, global_map)

    link_all(trees, global_map, link_workers)
    return generate_all(trees, registry, gen_workers)