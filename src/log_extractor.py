#!/usr/bin/env python3
"""
Artifact value extraction from build log chunks
"""

import re
from typing import Iterable, Optional, Union

from constants import ARTIFACT_VALUE_PATTERN
from models import LogChunk


def build_artifact_pattern(artifact_name: str) -> re.Pattern:
    """Pattern matching `<artifact name> <value>`, the name taken literally"""
    return re.compile(f"{re.escape(artifact_name)} {ARTIFACT_VALUE_PATTERN}")


def extract_artifact_value(artifact_name: str, chunks: Iterable[Union[LogChunk, str]]) -> Optional[str]:
    """Return the value following the artifact name in the first matching chunk.

    Chunks are scanned in the order given and scanning stops at the first
    match. Returns None when no chunk matches.
    """
    pattern = build_artifact_pattern(artifact_name)

    for chunk in chunks:
        text = chunk.chunk if isinstance(chunk, LogChunk) else chunk
        match = pattern.search(text)
        if match:
            return match.group(1)

    return None
