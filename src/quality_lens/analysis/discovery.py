"""File discovery and exclude-pattern matching.

Exclude pattern semantics:
    - a pattern without wildcards matches as a plain substring of the path
    - ``**`` matches any characters, including ``/``
    - ``*`` and ``?`` match within a single path segment
    - a leading ``**/`` matches from the start of the path or any ``/``
    - the pattern must match through the end of the path unless it ends with ``**``

Paths are compared with ``/`` separators on every platform.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config import AnalysisConfig
from ..logging_config import get_logger
from ..scanning.languages import is_supported

logger = get_logger(__name__)

_WILDCARDS = ("*", "?")


def _normalise(path: Union[str, Path]) -> str:
    return str(path).replace("\\", "/")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Optional[re.Pattern]:
    """Regex for a wildcard pattern, or None for a plain substring pattern."""
    pattern = _normalise(pattern)
    if not any(w in pattern for w in _WILDCARDS):
        return None

    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            parts.append("(?:^|/)" if i == 0 else "(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1

    if not pattern.endswith("**"):
        # A pattern naming a directory also covers everything below it
        parts.append("(?:/|$)")
    return re.compile("".join(parts))


def is_excluded(path: Union[str, Path], patterns: Iterable[str]) -> bool:
    """True if ``path`` matches any exclude pattern."""
    target = _normalise(path)
    for pattern in patterns:
        regex = compile_pattern(pattern)
        if regex is None:
            if _normalise(pattern) in target:
                return True
        elif regex.search(target):
            return True
    return False


def discover_files(root: Path, config: Optional[AnalysisConfig] = None) -> list[Path]:
    """All analysable files under ``root``, sorted.

    A file is kept when its language is supported, it matches no exclude
    pattern and it is within ``max_file_size_mb``.
    """
    config = config or AnalysisConfig()
    found: list[Path] = []
    skipped = 0

    for filepath in sorted(root.rglob("*")):
        if not filepath.is_file() or not is_supported(filepath):
            continue

        # Patterns apply to the path below root
        if is_excluded(filepath.relative_to(root), config.exclude_patterns):
            skipped += 1
            logger.debug(f"Skipped (pattern): {filepath}")
            continue

        try:
            size = filepath.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {filepath}: {e}")
            continue
        if size > config.max_file_size_bytes:
            skipped += 1
            logger.debug(f"Skipped (size): {filepath} ({size} bytes)")
            continue

        found.append(filepath)

    logger.info(f"Discovered {len(found)} files under {root} ({skipped} excluded)")
    return found
