"""Language rules: the single source of truth for all per-language patterns.

Every language-specific decision made by the extractor and the metrics
(comment syntax, signature patterns, naming conventions, complexity and
error-handling markers) is read from the LanguageRules entry for the
file's Language. Nothing else in the package branches on the language.

Adding a new language:
  1. Add a member to Language.
  2. Add a LanguageRules entry to LANGUAGE_RULES below.
"""

from __future__ import annotations

import re as _re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class Language(Enum):
    """Supported source languages."""

    CSHARP = "csharp"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    GO = "go"
    UNSUPPORTED = "unsupported"


DYNAMIC_TYPE = "inferred"


@dataclass(frozen=True)
class NamingRules:
    """Accepted spellings per symbol category. A name is valid if any regex matches."""

    function: tuple[_re.Pattern, ...]
    klass: tuple[_re.Pattern, ...]
    variable: tuple[_re.Pattern, ...]
    constant: tuple[_re.Pattern, ...]

    def is_valid(self, category: str, name: str) -> bool:
        if not name:
            return False
        rules = {
            "function": self.function,
            "class": self.klass,
            "variable": self.variable,
            "constant": self.constant + self.variable,
        }[category]
        return any(rule.match(name) for rule in rules)


@dataclass(frozen=True)
class LanguageRules:
    """Everything the extractor and metrics need to know about a language."""

    language: Language
    extensions: tuple[str, ...]

    # "c": // line comments and /* */ blocks. "hash": leading #.
    comment_style: str = "c"

    # "brace": bodies are delimited by {}. "indent": bodies are indentation blocks.
    block_mode: str = "brace"

    # Quote characters that open string/char literals (skipped while brace matching).
    string_delimiters: tuple[str, ...] = ('"', "'")

    # Ordered signature patterns. Named groups: name (required), mods,
    # rtype, params, receiver, kind, bases, extends, implements, type, indent.
    function_patterns: tuple[_re.Pattern, ...] = ()
    class_patterns: tuple[_re.Pattern, ...] = ()
    variable_patterns: tuple[_re.Pattern, ...] = ()

    # Words that can never be a function/variable name or a declared type.
    reserved_words: frozenset[str] = frozenset()

    # How access qualifiers are derived:
    #   "keyword"         explicit public/private/... modifiers
    #   "export"          `export` means public, otherwise none
    #   "keyword_export"  explicit modifiers, then `export`
    #   "capitalization"  Go: exported identifiers start upper-case
    #   "underscore"      Python: _protected, __private
    #   "linkage"         C/C++: static means file-private
    access_style: str = "keyword"

    # "colon_split": C# `: Base, IFoo`. "extends": extends/implements.
    # "list": every entry is a base type. "embed": Go struct/interface embedding.
    base_style: str = "list"

    # Modifiers that mark a declaration constant.
    const_keywords: frozenset[str] = frozenset({"const"})

    # Declared types that actually mean "let the compiler infer it".
    inferred_type_keywords: frozenset[str] = frozenset()

    # Parameter names that are not real parameters (self, cls, void, ...).
    ignored_parameters: frozenset[str] = frozenset()

    # Where a parameter's name sits in its declaration:
    #   "last"       C-family `const Foo& name`
    #   "annotated"  Python/JS/TS `name: Type = default`
    #   "first"      Go `name Type`
    parameter_style: str = "last"

    # ALL_CAPS names count as constants even without a const keyword.
    upper_case_constants: bool = False

    complexity_patterns: tuple[_re.Pattern, ...] = ()
    error_handling_patterns: tuple[_re.Pattern, ...] = ()

    naming: NamingRules = field(
        default_factory=lambda: NamingRules(function=(), klass=(), variable=(), constant=())
    )

    @property
    def comment_prefixes(self) -> tuple[str, ...]:
        """Prefixes that mark a trimmed line as a comment line."""
        return ("#",) if self.comment_style == "hash" else ("//", "/*")


# ── Re-usable building blocks ──────────────────────────────────────

_M = _re.MULTILINE

_IDENT = r"[A-Za-z_]\w*"

# Type with optional (one-level nested) generic arguments, arrays and nullable marker.
_GENERIC = r"<[^<>;(){}]*(?:<[^<>;(){}]*>[^<>;(){}]*)*>"
_TYPE = rf"[A-Za-z_][\w.]*(?:{_GENERIC})?(?:\[\])*\??"
_CPP_TYPE = rf"[A-Za-z_][\w:]*(?:{_GENERIC})?"

# Next structural character after the signature must open a body.
_BRACE_AHEAD = r"(?=[^;{}]*\{)"

# Parameter list allowing one level of nested parentheses. Brace languages
# exclude braces and semicolons so calls taking callbacks never match.
_PARAMS = r"(?P<params>[^(){};]*(?:\([^(){};]*\)[^(){};]*)*)"
_PY_PARAMS = r"(?P<params>[^()]*(?:\([^()]*\)[^()]*)*)"
# Keyword-led signatures may also carry brace groups: destructuring,
# object type literals, `interface{}` and `struct{}`.
_BRACED_PARAMS = (
    r"(?P<params>(?:[^(){};]|\{[^{}()]*\}|\((?:[^(){};]|\{[^{}()]*\})*\))*)"
)
# Go return types: `interface{}` and `struct{}` do not open the body.
_GO_RTYPE = (
    r"(?P<rtype>(?:[^{\n]|(?<=interface)\{\}|(?<=struct)\{\})*?)"
    r"[ \t]*(?<!interface)(?<!struct)\{"
)

_TERNARY = r"\?(?![.?:\[])[^:;?\n]*:"

_PASCAL = _re.compile(r"^[A-Z][a-zA-Z0-9]*$")
_CAMEL = _re.compile(r"^[a-z][a-zA-Z0-9]*$")
_SNAKE = _re.compile(r"^[a-z][a-z0-9_]*$")
_UPPER_SNAKE = _re.compile(r"^[A-Z][A-Z0-9_]*$")
_LOWER_MIXED = _re.compile(r"^[a-z][a-zA-Z0-9_]*$")


def _compile(*patterns: str, flags: int = _M) -> tuple[_re.Pattern, ...]:
    return tuple(_re.compile(p, flags) for p in patterns)


_C_FAMILY_RESERVED = frozenset({
    "if", "else", "for", "foreach", "while", "do", "switch", "case", "default",
    "catch", "try", "finally", "return", "throw", "new", "delete", "goto",
    "break", "continue", "sizeof", "typeof", "using", "namespace", "lock",
    "yield", "await", "in", "out", "ref", "is", "as", "import", "package",
    "typedef", "operator", "template", "echo", "fixed", "checked", "unchecked",
})

_C_FAMILY_COMPLEXITY = (
    r"\bif\s*\(",
    r"\belse\s+if\s*\(",
    r"\bwhile\s*\(",
    r"\bfor\s*\(",
    r"\bforeach\s*\(",
    r"\bswitch\s*\(",
    r"\bcase\s+",
    r"\bdefault\s*:",
    r"\bcatch\s*\(",
    r"&&",
    r"\|\|",
    _TERNARY,
)


# ── C# ─────────────────────────────────────────────────────────────

_CSHARP_MODS = (
    "public|private|protected|internal|static|virtual|override|abstract|async|"
    "sealed|extern|unsafe|new|partial|readonly"
)

_CSHARP = LanguageRules(
    language=Language.CSHARP,
    extensions=(".cs", ".razor"),
    function_patterns=_compile(
        # [mods] ReturnType Name<T>(params) {
        rf"^[ \t]*(?P<mods>(?:(?:{_CSHARP_MODS})[ \t]+)*)(?!(?:{_CSHARP_MODS})\b)"
        rf"(?P<rtype>{_TYPE})[ \t]+(?P<name>{_IDENT})[ \t]*(?:{_GENERIC})?[ \t]*\({_PARAMS}\){_BRACE_AHEAD}",
        # constructors: at least one modifier, no return type
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected|internal|static)[ \t]+)+)"
        rf"(?P<name>{_IDENT})[ \t]*\({_PARAMS}\)(?:\s*:\s*(?:base|this)\s*\([^()]*\))?{_BRACE_AHEAD}",
    ),
    class_patterns=_compile(
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected|internal|static|abstract|sealed|partial|readonly|unsafe|new)[ \t]+)*)"
        rf"(?P<kind>class|struct|interface|record)[ \t]+(?P<name>{_IDENT})(?:{_GENERIC})?"
        r"(?:[ \t]*:[ \t]*(?P<bases>[^{;\n]+?))?(?:\s+where[^{;]*)?\s*(?=\{)",
    ),
    variable_patterns=_compile(
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected|internal|static|readonly|const|volatile|new)[ \t]+)*)"
        rf"(?P<type>{_TYPE})[ \t]+(?P<name>{_IDENT})[ \t]*(?:=(?!=)|;)",
    ),
    reserved_words=_C_FAMILY_RESERVED,
    access_style="keyword",
    base_style="colon_split",
    const_keywords=frozenset({"const", "readonly"}),
    inferred_type_keywords=frozenset({"var", "dynamic"}),
    complexity_patterns=_compile(*_C_FAMILY_COMPLEXITY),
    error_handling_patterns=_compile(
        r"\btry\s*\{",
        r"\bcatch\b",
        r"\bfinally\s*\{",
        r"\bthrow\b",
        r"[!=]=\s*null\b",
        r"\bis\s+(?:not\s+)?null\b",
        r"\?\?",
    ),
    naming=NamingRules(
        function=(_PASCAL,),
        klass=(_PASCAL,),
        variable=(_CAMEL, _re.compile(r"^_[a-z][a-zA-Z0-9]*$")),
        constant=(_PASCAL, _UPPER_SNAKE),
    ),
)


# ── Java ───────────────────────────────────────────────────────────

_JAVA_MODS = "public|private|protected|static|final|abstract|synchronized|native|default|strictfp"

_JAVA = LanguageRules(
    language=Language.JAVA,
    extensions=(".java",),
    function_patterns=_compile(
        rf"^[ \t]*(?P<mods>(?:(?:{_JAVA_MODS})[ \t]+)*)(?:{_GENERIC}[ \t]+)?(?!(?:{_JAVA_MODS})\b)"
        rf"(?P<rtype>{_TYPE})[ \t]+(?P<name>{_IDENT})[ \t]*\({_PARAMS}\){_BRACE_AHEAD}",
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected)[ \t]+)+)"
        rf"(?P<name>{_IDENT})[ \t]*\({_PARAMS}\){_BRACE_AHEAD}",
    ),
    class_patterns=_compile(
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected|static|abstract|final|sealed|strictfp)[ \t]+)*)"
        rf"(?P<kind>class|interface|record)[ \t]+(?P<name>{_IDENT})(?:{_GENERIC})?(?:[ \t]*\([^)]*\))?"
        r"(?:\s+extends\s+(?P<extends>[^{]+?))?(?:\s+implements\s+(?P<implements>[^{]+?))?"
        r"(?:\s+permits\s+[^{]+?)?\s*(?=\{)",
    ),
    variable_patterns=_compile(
        rf"^[ \t]*(?P<mods>(?:(?:public|private|protected|static|final|volatile|transient)[ \t]+)*)"
        rf"(?P<type>{_TYPE})[ \t]+(?P<name>{_IDENT})[ \t]*(?:=(?!=)|;)",
    ),
    reserved_words=_C_FAMILY_RESERVED | {"throws", "extends", "implements", "assert"},
    access_style="keyword",
    base_style="extends",
    const_keywords=frozenset({"final"}),
    inferred_type_keywords=frozenset({"var"}),
    complexity_patterns=_compile(*_C_FAMILY_COMPLEXITY),
    error_handling_patterns=_compile(
        r"\btry\s*[({]",
        r"\bcatch\b",
        r"\bfinally\s*\{",
        r"\bthrows?\b",
        r"[!=]=\s*null\b",
        r"\bObjects\.requireNonNull\b",
    ),
    naming=NamingRules(
        function=(_CAMEL,),
        klass=(_PASCAL,),
        variable=(_CAMEL,),
        constant=(_UPPER_SNAKE,),
    ),
)


# ── JavaScript / TypeScript ────────────────────────────────────────

_JS_RESERVED = frozenset({
    "if", "else", "for", "while", "do", "switch", "case", "default", "catch",
    "try", "finally", "return", "throw", "new", "delete", "typeof", "instanceof",
    "function", "class", "import", "export", "await", "yield", "with", "void",
    "super", "this", "in", "of", "break", "continue",
})


def _script_function_patterns(typed: bool) -> tuple[_re.Pattern, ...]:
    rtype = r"(?:[ \t]*:[ \t]*(?P<rtype>[^{;]+?))?" if typed else ""
    generic = rf"(?:{_GENERIC})?" if typed else ""
    annot = r"(?:[ \t]*:[^=\n]+)?" if typed else ""
    method_mods = (
        "public|private|protected|static|async|readonly|abstract|override|get|set"
        if typed
        else "static|async|get|set"
    )
    return _compile(
        # function name(params) {
        rf"^[ \t]*(?P<mods>(?:(?:export|default|async)[ \t]+)*)function\*?[ \t]*(?P<name>{_IDENT})[ \t]*{generic}"
        rf"[ \t]*\({_BRACED_PARAMS}\){rtype}\s*(?=\{{)",
        # name: function(params) {
        rf"^[ \t]*(?P<name>{_IDENT})[ \t]*:[ \t]*(?:async[ \t]+)?function\*?[ \t]*(?:{_IDENT})?[ \t]*\({_BRACED_PARAMS}\)\s*(?=\{{)",
        # [const] name = function(params) {
        rf"^[ \t]*(?P<mods>(?:(?:export|const|let|var)[ \t]+)*)(?:[A-Za-z_$][\w$]*\.)*(?P<name>{_IDENT}){annot}[ \t]*=[ \t]*"
        rf"(?:async[ \t]+)?function\*?[ \t]*(?:{_IDENT})?[ \t]*\({_BRACED_PARAMS}\)\s*(?=\{{)",
        # [const] name = (params) => {
        rf"^[ \t]*(?P<mods>(?:(?:export|const|let|var)[ \t]+)*)(?:[A-Za-z_$][\w$]*\.)*(?P<name>{_IDENT}){annot}[ \t]*=[ \t]*"
        rf"(?:async[ \t]+)?\({_BRACED_PARAMS}\){rtype}[ \t]*=>\s*(?=\{{)",
        # class methods: [mods] name(params) {
        rf"^[ \t]*(?P<mods>(?:(?:{method_mods})[ \t]+)*)(?P<name>{_IDENT})[ \t]*{generic}[ \t]*\({_PARAMS}\){rtype}\s*(?=\{{)",
    )


def _script_class_patterns(typed: bool) -> tuple[_re.Pattern, ...]:
    patterns = [
        rf"^[ \t]*(?P<mods>(?:(?:export|default|abstract|declare)[ \t]+)*)(?P<kind>class)[ \t]+(?P<name>{_IDENT})"
        rf"(?:{_GENERIC})?(?:\s+extends\s+(?P<extends>[^{{]+?))?(?:\s+implements\s+(?P<implements>[^{{]+?))?\s*(?=\{{)",
    ]
    if typed:
        patterns.append(
            rf"^[ \t]*(?P<mods>(?:(?:export|declare)[ \t]+)*)(?P<kind>interface)[ \t]+(?P<name>{_IDENT})"
            rf"(?:{_GENERIC})?(?:\s+extends\s+(?P<implements>[^{{]+?))?\s*(?=\{{)"
        )
    return _compile(*patterns)


def _script_variable_patterns(typed: bool) -> tuple[_re.Pattern, ...]:
    annot = r"(?:[ \t]*:[ \t]*(?P<type>[^=;\n]+?))?" if typed else ""
    return _compile(
        rf"(?:^|(?<=[\s(;{{]))(?P<mods>(?:export[ \t]+)?(?:var|let|const))[ \t]+(?P<name>{_IDENT}){annot}"
        r"[ \t]*(?=[=;,)\n]|$|\s+of\b|\s+in\b)",
    )


_SCRIPT_COMPLEXITY = (
    r"\bif\s*\(",
    r"\belse\s+if\s*\(",
    r"\bwhile\s*\(",
    r"\bfor\s*\(",
    r"\bswitch\s*\(",
    r"\bcase\s+",
    r"\bdefault\s*:",
    r"\bcatch\s*\(",
    r"&&",
    r"\|\|",
    _TERNARY,
    r"\bdo\s*\{",
)

_SCRIPT_ERROR_HANDLING = (
    r"\btry\s*\{",
    r"\bcatch\b",
    r"\bfinally\s*\{",
    r"\bthrow\b",
    r"[!=]==?\s*(?:null|undefined)\b",
    r"\btypeof\s+\w+\s*[!=]==?\s*['\"]undefined['\"]",
)

_SCRIPT_NAMING = NamingRules(
    function=(_CAMEL,),
    klass=(_PASCAL,),
    variable=(_CAMEL,),
    constant=(_UPPER_SNAKE, _PASCAL),
)

_JAVASCRIPT = LanguageRules(
    language=Language.JAVASCRIPT,
    extensions=(".js", ".jsx"),
    string_delimiters=('"', "'", "`"),
    function_patterns=_script_function_patterns(typed=False),
    class_patterns=_script_class_patterns(typed=False),
    variable_patterns=_script_variable_patterns(typed=False),
    reserved_words=_JS_RESERVED,
    access_style="export",
    parameter_style="annotated",
    base_style="extends",
    const_keywords=frozenset({"const"}),
    complexity_patterns=_compile(*_SCRIPT_COMPLEXITY),
    error_handling_patterns=_compile(*_SCRIPT_ERROR_HANDLING),
    naming=_SCRIPT_NAMING,
)

_TYPESCRIPT = LanguageRules(
    language=Language.TYPESCRIPT,
    extensions=(".ts", ".tsx"),
    string_delimiters=('"', "'", "`"),
    function_patterns=_script_function_patterns(typed=True),
    class_patterns=_script_class_patterns(typed=True),
    variable_patterns=_script_variable_patterns(typed=True),
    reserved_words=_JS_RESERVED | {"interface", "type", "enum", "declare", "namespace"},
    access_style="keyword_export",
    parameter_style="annotated",
    base_style="extends",
    const_keywords=frozenset({"const", "readonly"}),
    complexity_patterns=_compile(*_SCRIPT_COMPLEXITY),
    error_handling_patterns=_compile(*_SCRIPT_ERROR_HANDLING),
    naming=_SCRIPT_NAMING,
)


# ── Python ─────────────────────────────────────────────────────────

_PY_PRIVATE_SNAKE = _re.compile(r"^_{0,2}[a-z][a-z0-9_]*$")

_PYTHON = LanguageRules(
    language=Language.PYTHON,
    extensions=(".py",),
    comment_style="hash",
    block_mode="indent",
    function_patterns=_compile(
        rf"^(?P<indent>[ \t]*)(?:async[ \t]+)?def[ \t]+(?P<name>{_IDENT})[ \t]*\({_PY_PARAMS}\)"
        r"(?:[ \t]*->[ \t]*(?P<rtype>[^:\n]+?))?[ \t]*:",
    ),
    class_patterns=_compile(
        rf"^(?P<indent>[ \t]*)class[ \t]+(?P<name>{_IDENT})[ \t]*(?:\((?P<bases>[^()]*)\))?[ \t]*:",
    ),
    variable_patterns=_compile(
        rf"^[ \t]*(?P<name>{_IDENT})[ \t]*(?::[ \t]*(?P<type>[^=\n]+?))?[ \t]*=(?!=)",
    ),
    reserved_words=frozenset({
        "if", "elif", "else", "for", "while", "try", "except", "finally", "with",
        "def", "class", "return", "yield", "lambda", "import", "from", "as",
        "pass", "raise", "global", "nonlocal", "assert", "del", "not", "and",
        "or", "is", "in", "None", "True", "False", "await", "async",
    }),
    access_style="underscore",
    base_style="list",
    const_keywords=frozenset(),
    ignored_parameters=frozenset({"self", "cls", "*", "/"}),
    parameter_style="annotated",
    upper_case_constants=True,
    complexity_patterns=_compile(
        r"\bif\s+",
        r"\belif\s+",
        r"\bwhile\s+",
        r"\bfor\s+",
        r"\btry\s*:",
        r"\bexcept\b",
        r"\belse\s*:",
        r"\bfinally\s*:",
        r"\band\b",
        r"\bor\b",
    ),
    error_handling_patterns=_compile(
        r"\btry\s*:",
        r"\bexcept\b",
        r"\bfinally\s*:",
        r"\braise\b",
        r"\bis\s+(?:not\s+)?None\b",
    ),
    naming=NamingRules(
        function=(_PY_PRIVATE_SNAKE, _re.compile(r"^__[a-z][a-z0-9_]*__$")),
        klass=(_re.compile(r"^_?[A-Z][a-zA-Z0-9]*$"),),
        variable=(_PY_PRIVATE_SNAKE,),
        constant=(_re.compile(r"^_?[A-Z][A-Z0-9_]*$"),),
    ),
)


# ── C / C++ ────────────────────────────────────────────────────────

_C_FUNC_MODS = "static|inline|extern|virtual|constexpr|explicit|friend|const|unsigned|signed|long|short|struct|enum"
_C_VAR_MODS = (
    "static|const|constexpr|extern|volatile|register|unsigned|signed|inline|"
    "mutable|thread_local|long|short|struct|enum"
)


def _c_function_patterns() -> tuple[_re.Pattern, ...]:
    return _compile(
        rf"^[ \t]*(?P<mods>(?:(?:{_C_FUNC_MODS})[ \t]+)*)(?P<rtype>{_CPP_TYPE})(?:[ \t]*[*&]+[ \t]*|[ \t]+)"
        rf"(?:{_IDENT}::)*(?P<name>~?{_IDENT})[ \t]*\({_PARAMS}\)"
        r"(?:[ \t]*(?:const|noexcept|override|final))*" + _BRACE_AHEAD,
    )


def _c_variable_patterns() -> tuple[_re.Pattern, ...]:
    return _compile(
        rf"^[ \t]*(?P<mods>(?:(?:{_C_VAR_MODS})[ \t]+)*)(?P<type>{_CPP_TYPE})(?:[ \t]*[*&]+[ \t]*|[ \t]+)"
        rf"(?P<name>{_IDENT})(?:\[[^\]]*\])*[ \t]*(?:=(?!=)|;)",
    )


_C_ERROR_HANDLING = (
    r"\btry\s*\{",
    r"\bcatch\s*\(",
    r"\bthrow\b",
    r"[!=]=\s*(?:NULL|nullptr)\b",
    r"\bassert\s*\(",
    r"\berrno\b",
)

_C_NAMING = NamingRules(
    function=(_LOWER_MIXED, _re.compile(r"^~[A-Z][a-zA-Z0-9]*$")),
    klass=(_PASCAL, _SNAKE),
    variable=(_LOWER_MIXED,),
    constant=(_UPPER_SNAKE, _re.compile(r"^k[A-Z][a-zA-Z0-9]*$")),
)

_CPP = LanguageRules(
    language=Language.CPP,
    extensions=(".cpp", ".cc", ".cxx", ".hpp"),
    function_patterns=_c_function_patterns(),
    class_patterns=_compile(
        rf"^[ \t]*(?:template[ \t]*<[^{{;]*?>\s*)?(?P<kind>class|struct)[ \t]+(?P<name>{_IDENT})(?:[ \t]+final)?"
        r"(?:[ \t]*:[ \t]*(?P<bases>[^{;]+?))?\s*(?=\{)",
    ),
    variable_patterns=_c_variable_patterns(),
    reserved_words=_C_FAMILY_RESERVED | {"public", "private", "protected"},
    access_style="linkage",
    base_style="list",
    const_keywords=frozenset({"const", "constexpr"}),
    inferred_type_keywords=frozenset({"auto"}),
    ignored_parameters=frozenset({"void"}),
    complexity_patterns=_compile(*_C_FAMILY_COMPLEXITY),
    error_handling_patterns=_compile(*_C_ERROR_HANDLING),
    naming=_C_NAMING,
)

_C = LanguageRules(
    language=Language.C,
    extensions=(".c", ".h"),
    function_patterns=_c_function_patterns(),
    class_patterns=_compile(
        rf"^[ \t]*(?:typedef[ \t]+)?(?P<kind>struct)[ \t]+(?P<name>{_IDENT})\s*(?=\{{)",
    ),
    variable_patterns=_c_variable_patterns(),
    reserved_words=_C_FAMILY_RESERVED,
    access_style="linkage",
    base_style="list",
    const_keywords=frozenset({"const"}),
    ignored_parameters=frozenset({"void"}),
    complexity_patterns=_compile(*_C_FAMILY_COMPLEXITY),
    error_handling_patterns=_compile(*_C_ERROR_HANDLING),
    naming=_C_NAMING,
)


# ── Go ─────────────────────────────────────────────────────────────

_GO = LanguageRules(
    language=Language.GO,
    extensions=(".go",),
    string_delimiters=('"', "'", "`"),
    function_patterns=_compile(
        rf"^func[ \t]+(?P<name>{_IDENT})[ \t]*(?:\[[^\]]*\])?[ \t]*\({_BRACED_PARAMS}\)[ \t]*{_GO_RTYPE}",
        rf"^func[ \t]*\((?P<receiver>[^()]*)\)[ \t]*(?P<name>{_IDENT})[ \t]*\({_BRACED_PARAMS}\)[ \t]*{_GO_RTYPE}",
    ),
    class_patterns=_compile(
        rf"^type[ \t]+(?P<name>{_IDENT})(?:\[[^\]]*\])?[ \t]+(?P<kind>struct|interface)[ \t]*(?=\{{)",
    ),
    variable_patterns=_compile(
        rf"\b(?P<mods>var|const)[ \t]+(?P<name>{_IDENT})(?:[ \t]+(?P<type>[^=\n]+?))?[ \t]*(?:=|$)",
        rf"(?<![\w.])(?P<name>{_IDENT})(?:[ \t]*,[ \t]*{_IDENT})*[ \t]*:=",
    ),
    reserved_words=frozenset({
        "if", "else", "for", "range", "switch", "case", "default", "select",
        "go", "defer", "return", "func", "type", "var", "const", "package",
        "import", "chan", "map", "struct", "interface", "break", "continue",
        "goto", "fallthrough", "_",
    }),
    access_style="capitalization",
    parameter_style="first",
    base_style="embed",
    const_keywords=frozenset({"const"}),
    complexity_patterns=_compile(
        r"\bif\s+",
        r"\belse\s+if\s+",
        r"\bfor\s+",
        r"\bswitch\s+",
        r"\bcase\s+",
        r"\bdefault\s*:",
        r"\bselect\s+",
        r"\bgo\s+",
        r"\bdefer\s+",
        r"&&",
        r"\|\|",
    ),
    error_handling_patterns=_compile(
        r"[!=]=\s*nil\b",
        r"\bdefer\s+",
        r"\bpanic\s*\(",
        r"\brecover\s*\(",
    ),
    naming=NamingRules(
        function=(_PASCAL, _CAMEL),
        klass=(_PASCAL, _CAMEL),
        variable=(_PASCAL, _CAMEL),
        constant=(_PASCAL, _CAMEL),
    ),
)


# ── Registry ───────────────────────────────────────────────────────

LANGUAGE_RULES: dict[Language, LanguageRules] = {
    rules.language: rules
    for rules in (_CSHARP, _JAVASCRIPT, _TYPESCRIPT, _PYTHON, _JAVA, _CPP, _C, _GO)
}

SUPPORTED_LANGUAGES: frozenset[Language] = frozenset(LANGUAGE_RULES)

# Extension to language mapping (built from LANGUAGE_RULES)
_EXTENSION_TO_LANGUAGE: dict[str, Language] = {}
for _rules in LANGUAGE_RULES.values():
    for _ext in _rules.extensions:
        _EXTENSION_TO_LANGUAGE[_ext] = _rules.language


def detect_language(filepath: Union[str, Path]) -> Language:
    """Detect language from file extension (case-insensitive).

    Returns:
        The matching Language, or Language.UNSUPPORTED
    """
    if not filepath:
        return Language.UNSUPPORTED
    path = Path(filepath) if not hasattr(filepath, "suffix") else filepath
    return _EXTENSION_TO_LANGUAGE.get(path.suffix.lower(), Language.UNSUPPORTED)


def is_supported(filepath: Union[str, Path]) -> bool:
    """True when the file's extension maps to a supported language."""
    return detect_language(filepath) is not Language.UNSUPPORTED


def get_rules(language: Language) -> LanguageRules:
    """Look up the rule set for a language. Raises KeyError for UNSUPPORTED."""
    return LANGUAGE_RULES[language]


def supported_extensions() -> dict[str, Language]:
    """Copy of the extension table, for listings."""
    return dict(_EXTENSION_TO_LANGUAGE)
