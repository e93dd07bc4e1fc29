"""Checks that a source file holding serializable types is prepared for generated code."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_BODY_PATTERN = re.compile(r"GENERATED_SERIALIZATION_BODY\s*\(\s*\)")


def _include_pattern(header_name: str) -> "re.Pattern[str]":
    return re.compile(
        r'#include\s*[<"]([a-zA-Z0-9_/]*)'
        + re.escape(header_name)
        + r'\.generated\.h[>"]'
    )


def validate_source(text: str, path: PathLike) -> bool:
    """Check source text for the generated-header include and the body macro.

    The header expected is ``<stem>.generated.h``, where the stem comes from
    ``path``. Problems are reported and make the result False.
    """
    source_path = Path(path)
    if not _include_pattern(source_path.stem).search(text):
        logger.error(
            "ERROR: File %s contains serializable objects but does not include "
            "the generated header file",
            source_path.name,
        )
        return False
    if not _BODY_PATTERN.search(text):
        logger.error(
            "ERROR: File %s contains serializable objects but does not contain "
            "the GENERATED_SERIALIZATION_BODY() macro",
            source_path.name,
        )
        return False
    return True


def validate_file(path: PathLike) -> bool:
    """Read a source file and validate it; a file that cannot be read fails."""
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.error("Error: Could not open file %s for validation", source_path)
        return False
    return validate_source(text, source_path)