"""Structural inventory produced by the extractor.

ParsedFile is built once per file and consumed read-only by every metric:
    - line category counts (code / comment / blank)
    - FunctionRecord, ClassRecord and VariableRecord sequences

Records are frozen; collections are tuples so nothing downstream can
mutate the inventory it was handed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .languages import Language


class AccessQualifier(Enum):
    """Declared (or conventionally implied) visibility of a symbol."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"
    NONE = "none"


@dataclass(frozen=True)
class FunctionRecord:
    """A function or method found by a signature pattern.

    Attributes:
        name: Function name (last segment for qualified C++ names)
        body: Source text from the signature to the end of the body,
            empty when the body could not be delimited
        start_line: 1-indexed line of the signature
        end_line: 1-indexed line where the body ends
        parameters: Parameter names
        return_type: Declared return type, empty when none is written
        access: Access qualifier
    """

    name: str
    body: str
    start_line: int
    end_line: int
    parameters: tuple[str, ...] = ()
    return_type: str = ""
    access: AccessQualifier = AccessQualifier.NONE
    is_static: bool = False

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    @property
    def line_span(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class ClassRecord:
    """A class, struct, interface or record declaration."""

    name: str
    body: str
    start_line: int
    end_line: int
    access: AccessQualifier = AccessQualifier.NONE
    base_types: tuple[str, ...] = ()
    interfaces: tuple[str, ...] = ()
    kind: str = "class"

    @property
    def line_span(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class VariableRecord:
    """A variable, field or constant declaration.

    ``declared_type`` is the dynamic marker (``"inferred"``) where the
    declaration site carries no static type.
    """

    name: str
    declared_type: str
    line: int
    access: AccessQualifier = AccessQualifier.NONE
    is_const: bool = False
    is_static: bool = False


@dataclass(frozen=True)
class ParsedFile:
    """Structural inventory of one source file.

    Invariant: total_lines == code_lines + comment_lines + blank_lines.
    """

    path: str
    language: Language
    content: str
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    functions: tuple[FunctionRecord, ...] = field(default_factory=tuple)
    classes: tuple[ClassRecord, ...] = field(default_factory=tuple)
    variables: tuple[VariableRecord, ...] = field(default_factory=tuple)

    @property
    def comment_ratio(self) -> float:
        """Comment lines over all lines (0.0 for an empty file)."""
        if self.total_lines == 0:
            return 0.0
        return self.comment_lines / self.total_lines

    @property
    def blank_ratio(self) -> float:
        """Blank lines over all lines (0.0 for an empty file)."""
        if self.total_lines == 0:
            return 0.0
        return self.blank_lines / self.total_lines
