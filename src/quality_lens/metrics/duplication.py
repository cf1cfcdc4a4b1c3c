"""Code duplication: similar function pairs and repeated line blocks.

Function similarity is ``1 - levenshtein(a, b) / max(len(a), len(b))``.
The edit distance is computed one row at a time with numpy: the
insertion term of each row is a running minimum, so a row costs a few
vector operations instead of a Python loop over the shorter string.
"""

from __future__ import annotations

from itertools import combinations

import numpy as np

from ..scanning.languages import LanguageRules
from ..scanning.models import ParsedFile
from .base import BaseMetric


def _codepoints(text: str) -> np.ndarray:
    return np.frombuffer(text.encode("utf-32-le"), dtype=np.uint32)


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert, delete and substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    longer = _codepoints(a)
    shorter = _codepoints(b)
    n = len(shorter)
    offsets = np.arange(n + 1, dtype=np.int64)
    prev = offsets.copy()
    row = np.empty(n + 1, dtype=np.int64)

    for i, ch in enumerate(longer, start=1):
        cost = (shorter != ch).astype(np.int64)
        row[0] = i
        # deletion and substitution
        np.minimum(prev[1:] + 1, prev[:-1] + cost, out=row[1:])
        # insertion: row[j] = min_k(row[k] + j - k)
        prev = np.minimum.accumulate(row - offsets) + offsets

    return int(prev[n])


def similarity(a: str, b: str) -> float:
    """Normalised similarity in [0, 1]; 0 when either text is empty."""
    if not a or not b:
        return 0.0
    longest = max(len(a), len(b))
    return (longest - levenshtein(a, b)) / longest


def duplicate_blocks(text: str, min_size: int = 3, max_size: int = 10) -> list[str]:
    """Every repeated occurrence of a contiguous ``min_size``..``max_size`` line window.

    A window seen before is reported each time it recurs. Windows made only
    of blank lines are ignored.
    """
    lines = text.split("\n")
    seen: set[str] = set()
    duplicates: list[str] = []
    for start in range(len(lines) - min_size + 1):
        for size in range(min_size, min(max_size, len(lines) - start) + 1):
            window = lines[start : start + size]
            if not any(line.strip() for line in window):
                continue
            block = "\n".join(window)
            if block in seen:
                duplicates.append(block)
            else:
                seen.add(block)
    return duplicates


class CodeDuplicationMetric(BaseMetric):
    name = "code_duplication"
    title = "Code Duplication"
    description = "Near-identical functions and repeated blocks of lines"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        t = self.thresholds
        issues = []

        pairs = 0
        for first, second in combinations(parsed.functions, 2):
            a, b = first.body, second.body
            if not a or not b:
                continue
            # similarity can never exceed shorter/longer
            if min(len(a), len(b)) / max(len(a), len(b)) <= t.duplication_similarity:
                continue
            sim = similarity(a, b)
            if sim > t.duplication_similarity:
                pairs += 1
                issues.append(
                    f"duplicate functions: {first.name} and {second.name} (similarity: {sim:.1%})"
                )

        blocks = duplicate_blocks(parsed.content, t.duplication_min_block, t.duplication_max_block)
        if blocks:
            issues.append(f"{len(blocks)} duplicate code blocks found")

        score = 0.0
        if parsed.functions:
            score = min(2 * pairs / len(parsed.functions), 1.0)
        if blocks:
            score = min(score + t.duplication_block_penalty, 1.0)
        return score, issues
