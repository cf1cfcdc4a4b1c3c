"""Structure analysis: shape of classes, functions and the file itself.

Each of the three parts starts at 1.0 (ideal) and loses points per
violated rule. The metric score is one minus their mean, so higher is
worse like every other metric.
"""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.models import AccessQualifier, ParsedFile
from .base import BaseMetric


class StructureAnalysisMetric(BaseMetric):
    name = "structure_analysis"
    title = "Structure Analysis"
    description = "Class, function and file size, inheritance, access modifiers and layout"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        issues: list[str] = []
        parts = (
            self._class_structure(parsed, issues),
            self._function_structure(parsed, issues),
            self._file_structure(parsed, issues),
        )
        return 1.0 - sum(parts) / len(parts), issues

    def _class_structure(self, parsed: ParsedFile, issues: list[str]) -> float:
        if not parsed.classes:
            return 1.0
        t = self.thresholds
        total = 0.0
        for cls in parsed.classes:
            score = 1.0
            if cls.line_span > t.structure_max_class_lines:
                score -= 0.3
                issues.append(f"class too long: {cls.name} ({cls.line_span} lines)")
            if not cls.base_types and not cls.interfaces:
                score -= 0.1
            if cls.access is AccessQualifier.NONE:
                score -= 0.2
                issues.append(f"class missing access modifier: {cls.name}")
            total += score
        return total / len(parsed.classes)

    def _function_structure(self, parsed: ParsedFile, issues: list[str]) -> float:
        if not parsed.functions:
            return 1.0
        t = self.thresholds
        total = 0.0
        for func in parsed.functions:
            score = 1.0
            if func.line_span > t.structure_max_function_lines:
                score -= 0.4
                issues.append(f"function too long: {func.name} ({func.line_span} lines)")
            if func.parameter_count > t.structure_max_parameters:
                score -= 0.3
                issues.append(
                    f"too many parameters: {func.name} ({func.parameter_count} parameters)"
                )
            if not func.return_type:
                score -= 0.1
            if func.access is AccessQualifier.NONE:
                score -= 0.2
                issues.append(f"function missing access modifier: {func.name}")
            total += score
        return total / len(parsed.functions)

    def _file_structure(self, parsed: ParsedFile, issues: list[str]) -> float:
        t = self.thresholds
        score = 1.0
        if parsed.total_lines > t.structure_max_file_lines:
            score -= 0.3
            issues.append(f"file too long: {parsed.total_lines} lines")
        if len(parsed.classes) > t.structure_max_classes:
            score -= 0.2
            issues.append(f"too many classes in file: {len(parsed.classes)}")
        if len(parsed.functions) > t.structure_max_functions:
            score -= 0.2
            issues.append(f"too many functions in file: {len(parsed.functions)}")
        if parsed.comment_ratio < t.structure_min_comment_ratio:
            score -= 0.1
            issues.append(f"file comments insufficient: {parsed.comment_ratio:.1%}")
        if parsed.blank_ratio < t.structure_min_blank_ratio:
            score -= 0.1
            issues.append(f"file blank lines insufficient: {parsed.blank_ratio:.1%}")
        return max(score, 0.0)
