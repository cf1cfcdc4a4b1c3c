"""StructuralExtractor: raw text -> ParsedFile.

Four independent passes over the same text, each driven entirely by the
file's LanguageRules:
    1. line classification (code / comment / blank)
    2. function signatures, with brace- or indentation-delimited bodies
    3. class / struct / interface declarations
    4. variable declarations

Extraction never raises. A language without rules, or text without
matches, yields empty record collections.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..logging_config import get_logger
from .languages import DYNAMIC_TYPE, LANGUAGE_RULES, Language, LanguageRules, detect_language
from .lines import count_lines
from .models import AccessQualifier, ClassRecord, FunctionRecord, ParsedFile, VariableRecord

logger = get_logger(__name__)

_KEYWORD_ACCESS = {
    "public": AccessQualifier.PUBLIC,
    "private": AccessQualifier.PRIVATE,
    "protected": AccessQualifier.PROTECTED,
    "internal": AccessQualifier.INTERNAL,
}

_PARAM_NAME = re.compile(r"[A-Za-z_$][\w$]*")
_GO_EMBEDDED = re.compile(r"^\s*\*?(?P<name>[A-Za-z_][\w.]*)\s*(?://.*)?$")
_INTERFACE_NAME = re.compile(r"^I[A-Z]")
_CPP_BASE_PREFIX = re.compile(r"^(?:(?:public|private|protected|virtual)\s+)+")


def _line_of(text: str, pos: int) -> int:
    """1-indexed line number of character offset ``pos``."""
    return text.count("\n", 0, pos) + 1


def _split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split on ``sep`` outside of (), [], {} and <> nesting."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch in "([{<":
            depth += 1
        elif ch in ")]}>" and depth > 0:
            depth -= 1
        if ch == sep and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def _group(match: re.Match, name: str) -> str:
    """Named group value, or "" when the pattern lacks it or it did not participate."""
    value = match.groupdict().get(name)
    return value.strip() if value else ""


class StructuralExtractor:
    """Builds the structural inventory of a source file.

    Args:
        deduplicate: Drop records that repeat an earlier (name, start_line)
            pair. Several signature patterns can match the same declaration;
            pass False to keep every raw match.
    """

    def __init__(self, deduplicate: bool = True) -> None:
        self.deduplicate = deduplicate

    def parse(self, path: str, text: str, language: Language) -> ParsedFile:
        rules = LANGUAGE_RULES.get(language)
        comment_style = rules.comment_style if rules else "c"
        counts = count_lines(text, comment_style)

        functions: tuple[FunctionRecord, ...] = ()
        classes: tuple[ClassRecord, ...] = ()
        variables: tuple[VariableRecord, ...] = ()
        if rules is not None:
            functions = tuple(self._dedupe(self._extract_functions(text, rules)))
            classes = tuple(self._dedupe(self._extract_classes(text, rules)))
            variables = tuple(self._dedupe(self._extract_variables(text, rules)))

        logger.debug(
            f"{path}: {len(functions)} functions, {len(classes)} classes, "
            f"{len(variables)} variables"
        )

        return ParsedFile(
            path=path,
            language=language,
            content=text,
            total_lines=counts.total,
            code_lines=counts.code,
            comment_lines=counts.comment,
            blank_lines=counts.blank,
            functions=functions,
            classes=classes,
            variables=variables,
        )

    def _dedupe(self, records: Iterable) -> list:
        records = sorted(records, key=lambda r: getattr(r, "start_line", getattr(r, "line", 0)))
        if not self.deduplicate:
            return records
        seen: set[tuple[str, int]] = set()
        unique = []
        for record in records:
            key = (record.name, getattr(record, "start_line", getattr(record, "line", 0)))
            if key in seen:
                continue
            seen.add(key)
            unique.append(record)
        return unique

    # ── Functions ──────────────────────────────────────────────────

    def _extract_functions(self, text: str, rules: LanguageRules) -> list[FunctionRecord]:
        records: list[FunctionRecord] = []
        for pattern in rules.function_patterns:
            for match in pattern.finditer(text):
                name = _group(match, "name")
                return_type = _group(match, "rtype")
                if not name or name in rules.reserved_words:
                    continue
                if return_type and return_type.split()[0] in rules.reserved_words:
                    continue

                body, end_pos = self._body(text, match, rules)
                start_line = _line_of(text, match.start())
                end_line = _line_of(text, end_pos) if body else start_line
                mods = _group(match, "mods").split()

                records.append(
                    FunctionRecord(
                        name=name,
                        body=body,
                        start_line=start_line,
                        end_line=end_line,
                        parameters=self._parameters(_group(match, "params"), rules),
                        return_type=return_type,
                        access=self._access(name, mods, rules),
                        is_static="static" in mods,
                    )
                )
        return records

    def _parameters(self, params: str, rules: LanguageRules) -> tuple[str, ...]:
        names: list[str] = []
        for raw in _split_top_level(params):
            if rules.parameter_style == "annotated" and raw[0] in "{[":
                # Destructured: one parameter per bound member
                inner = raw[1 : raw.rfind("}" if raw[0] == "{" else "]")]
                names.extend(self._parameters(inner, rules))
                continue
            declared = raw.split("=", 1)[0].strip()
            if rules.parameter_style == "annotated":
                declared = declared.split(":", 1)[0].strip().lstrip("*.").rstrip("?")
                name = declared or raw
            elif rules.parameter_style == "first":
                tokens = declared.split()
                name = tokens[0] if tokens else raw
            else:
                # Strip array suffixes, then take the last identifier
                declared = re.sub(r"\[[^\]]*\]", "", declared)
                idents = _PARAM_NAME.findall(declared)
                name = idents[-1] if idents else declared
            if raw in rules.ignored_parameters or name in rules.ignored_parameters:
                continue
            names.append(name)
        return tuple(names)

    # ── Classes ────────────────────────────────────────────────────

    def _extract_classes(self, text: str, rules: LanguageRules) -> list[ClassRecord]:
        records: list[ClassRecord] = []
        for pattern in rules.class_patterns:
            for match in pattern.finditer(text):
                name = _group(match, "name")
                if not name or name in rules.reserved_words:
                    continue

                body, end_pos = self._body(text, match, rules)
                start_line = _line_of(text, match.start())
                kind = _group(match, "kind") or "class"
                base_types, interfaces = self._bases(match, body, kind, rules)

                records.append(
                    ClassRecord(
                        name=name,
                        body=body,
                        start_line=start_line,
                        end_line=_line_of(text, end_pos) if body else start_line,
                        access=self._access(name, _group(match, "mods").split(), rules),
                        base_types=base_types,
                        interfaces=interfaces,
                        kind=kind,
                    )
                )
        return records

    def _bases(
        self, match: re.Match, body: str, kind: str, rules: LanguageRules
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        style = rules.base_style
        if style == "extends":
            return (
                tuple(_split_top_level(_group(match, "extends"))),
                tuple(_split_top_level(_group(match, "implements"))),
            )
        if style == "embed":
            embedded = self._embedded_types(body)
            return ((), embedded) if kind == "interface" else (embedded, ())

        entries = _split_top_level(_group(match, "bases"))
        if style == "colon_split":
            bases = tuple(b for b in entries if not _INTERFACE_NAME.match(b))
            interfaces = tuple(b for b in entries if _INTERFACE_NAME.match(b))
            return bases, interfaces

        # Plain lists: Python keyword arguments (metaclass=...) are not bases
        return tuple(_CPP_BASE_PREFIX.sub("", b) for b in entries if "=" not in b), ()

    @staticmethod
    def _embedded_types(body: str) -> tuple[str, ...]:
        if "{" not in body:
            return ()
        inner = body[body.index("{") + 1 : body.rindex("}")] if "}" in body else ""
        names = []
        for line in inner.splitlines():
            m = _GO_EMBEDDED.match(line)
            if m:
                names.append(m.group("name").split(".")[-1])
        return tuple(names)

    # ── Variables ──────────────────────────────────────────────────

    def _extract_variables(self, text: str, rules: LanguageRules) -> list[VariableRecord]:
        records: list[VariableRecord] = []
        for pattern in rules.variable_patterns:
            for match in pattern.finditer(text):
                name = _group(match, "name")
                declared_type = _group(match, "type")
                if not name or name in rules.reserved_words:
                    continue
                if declared_type and declared_type.split()[0] in rules.reserved_words:
                    continue
                if not declared_type or declared_type in rules.inferred_type_keywords:
                    declared_type = DYNAMIC_TYPE

                mods = _group(match, "mods").split()
                is_const = any(m in rules.const_keywords for m in mods) or (
                    rules.upper_case_constants and name.isupper()
                )

                records.append(
                    VariableRecord(
                        name=name,
                        declared_type=declared_type,
                        line=_line_of(text, match.start("name")),
                        access=self._access(name, mods, rules),
                        is_const=is_const,
                        is_static="static" in mods,
                    )
                )
        return records

    # ── Shared helpers ─────────────────────────────────────────────

    @staticmethod
    def _access(name: str, mods: list[str], rules: LanguageRules) -> AccessQualifier:
        style = rules.access_style
        if style in ("keyword", "keyword_export"):
            for mod in mods:
                if mod in _KEYWORD_ACCESS:
                    return _KEYWORD_ACCESS[mod]
            if style == "keyword_export" and "export" in mods:
                return AccessQualifier.PUBLIC
            return AccessQualifier.NONE
        if style == "export":
            return AccessQualifier.PUBLIC if "export" in mods else AccessQualifier.NONE
        if style == "capitalization":
            return AccessQualifier.PUBLIC if name[:1].isupper() else AccessQualifier.PRIVATE
        if style == "underscore":
            if name.startswith("__") and not name.endswith("__"):
                return AccessQualifier.PRIVATE
            if name.startswith("_") and not name.startswith("__"):
                return AccessQualifier.PROTECTED
            return AccessQualifier.PUBLIC
        if style == "linkage":
            return AccessQualifier.PRIVATE if "static" in mods else AccessQualifier.NONE
        return AccessQualifier.NONE

    def _body(self, text: str, match: re.Match, rules: LanguageRules) -> tuple[str, int]:
        if rules.block_mode == "indent":
            return _indent_body(text, match)
        # The signature itself may hold braces (`interface{}`, destructuring),
        # so the opening brace is searched for from where the match ends.
        end = match.end()
        scan_from = end - 1 if text[end - 1] == "{" else end
        return _brace_body(text, match.start(), rules.string_delimiters, scan_from=scan_from)


def _brace_body(
    text: str, start: int, delimiters: tuple[str, ...], scan_from: Optional[int] = None
) -> tuple[str, int]:
    """Text from ``start`` through the brace that closes the first ``{`` at or
    after ``scan_from`` (default ``start``).

    String/char literals and comments are skipped while counting. Returns
    ("", start) when no opening brace exists or it is never closed.
    """
    depth = 0
    opened = False
    i = start if scan_from is None else scan_from
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "/" and i + 1 < n and text[i + 1] == "/":
            nl = text.find("\n", i)
            i = n if nl == -1 else nl
            continue
        if ch == "/" and i + 1 < n and text[i + 1] == "*":
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
            continue
        if ch in delimiters:
            i = _skip_literal(text, i, ch)
            continue
        if ch == "{":
            depth += 1
            opened = True
        elif ch == "}" and opened:
            depth -= 1
            if depth == 0:
                return text[start : i + 1], i
        i += 1
    return "", start


def _skip_literal(text: str, i: int, quote: str) -> int:
    """Index just past the literal opened at ``i``."""
    j = i + 1
    n = len(text)
    while j < n:
        ch = text[j]
        if ch == "\\":
            j += 2
            continue
        if ch == quote:
            return j + 1
        # Only backtick literals span lines
        if ch == "\n" and quote != "`":
            return j
        j += 1
    return n


def _indentation(line: str) -> int:
    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip())


def _indent_body(text: str, match: re.Match) -> tuple[str, int]:
    """Indentation block starting at ``match``: the header plus every deeper line.

    Blank and comment-only lines are kept only when deeper code follows them.
    """
    header_end = text.find("\n", match.end())
    if header_end == -1:
        return text[match.start() :], len(text)

    # One-liner: `def f(): return 1`
    trailing = text[match.end() : header_end].strip()
    if trailing and not trailing.startswith("#"):
        return text[match.start() : header_end], header_end

    base = _indentation(match.group("indent") or "")
    end = header_end
    pos = header_end + 1
    n = len(text)
    while pos < n:
        nl = text.find("\n", pos)
        line_end = n if nl == -1 else nl
        line = text[pos:line_end]
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            if _indentation(line) <= base:
                break
            end = line_end
        pos = line_end + 1

    if end == header_end:
        return text[match.start() : header_end], header_end
    return text[match.start() : end], end


def parse_source(
    path: str, text: str, language: Optional[Language] = None, deduplicate: bool = True
) -> ParsedFile:
    """Convenience wrapper: classify by path when no language is given."""
    return StructuralExtractor(deduplicate).parse(path, text, language or detect_language(path))
