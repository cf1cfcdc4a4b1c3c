"""Language classification and structural extraction."""

from .extractor import StructuralExtractor, parse_source
from .languages import (
    DYNAMIC_TYPE,
    LANGUAGE_RULES,
    SUPPORTED_LANGUAGES,
    Language,
    LanguageRules,
    NamingRules,
    detect_language,
    get_rules,
    is_supported,
    supported_extensions,
)
from .lines import LineCounts, LineKind, classify_lines, count_lines
from .models import AccessQualifier, ClassRecord, FunctionRecord, ParsedFile, VariableRecord

__all__ = [
    # Classification
    "Language",
    "LanguageRules",
    "NamingRules",
    "LANGUAGE_RULES",
    "SUPPORTED_LANGUAGES",
    "DYNAMIC_TYPE",
    "detect_language",
    "is_supported",
    "get_rules",
    "supported_extensions",
    # Lines
    "LineKind",
    "LineCounts",
    "classify_lines",
    "count_lines",
    # Extraction
    "StructuralExtractor",
    "parse_source",
    "AccessQualifier",
    "FunctionRecord",
    "ClassRecord",
    "VariableRecord",
    "ParsedFile",
]
