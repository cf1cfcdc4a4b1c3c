"""Line classification: code / comment / blank.

Shared by the extractor (line counts on ParsedFile) and by the
CommentRatio and FunctionLength metrics, which re-derive counts from raw
text with the same rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator


class LineKind(Enum):
    CODE = "code"
    COMMENT = "comment"
    BLANK = "blank"


@dataclass(frozen=True)
class LineCounts:
    code: int = 0
    comment: int = 0
    blank: int = 0

    @property
    def total(self) -> int:
        return self.code + self.comment + self.blank


def _classify_c_style(lines: list[str]) -> Iterator[LineKind]:
    in_block = False
    for raw in lines:
        line = raw.strip()
        if not line:
            yield LineKind.BLANK
        elif in_block:
            if "*/" in line:
                in_block = False
            yield LineKind.COMMENT
        elif line.startswith("//"):
            yield LineKind.COMMENT
        elif line.startswith("/*"):
            # Block stays open unless it also closes on this line
            in_block = "*/" not in line[2:]
            yield LineKind.COMMENT
        else:
            yield LineKind.CODE


def _classify_hash_style(lines: list[str]) -> Iterator[LineKind]:
    for raw in lines:
        line = raw.strip()
        if not line:
            yield LineKind.BLANK
        elif line.startswith("#"):
            yield LineKind.COMMENT
        else:
            yield LineKind.CODE


_CLASSIFIERS: dict[str, Callable[[list[str]], Iterator[LineKind]]] = {
    "c": _classify_c_style,
    "hash": _classify_hash_style,
}


def classify_lines(text: str, comment_style: str = "c") -> list[LineKind]:
    """Classify every line of ``text``.

    ``comment_style`` is ``"c"`` (``//`` and ``/* */``) or ``"hash"`` (``#``).
    """
    return list(_CLASSIFIERS[comment_style](text.splitlines()))


def count_lines(text: str, comment_style: str = "c") -> LineCounts:
    code = comment = blank = 0
    for kind in classify_lines(text, comment_style):
        if kind is LineKind.CODE:
            code += 1
        elif kind is LineKind.COMMENT:
            comment += 1
        else:
            blank += 1
    return LineCounts(code=code, comment=comment, blank=blank)
