"""Error handling: share of functions containing defensive code."""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.models import ParsedFile
from .base import BaseMetric


def has_error_handling(body: str, rules: LanguageRules) -> bool:
    return any(pattern.search(body) for pattern in rules.error_handling_patterns)


class ErrorHandlingMetric(BaseMetric):
    name = "error_handling"
    title = "Error Handling"
    description = "Functions with try/catch, throws or null checks; unguarded code fails badly"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        if not parsed.functions:
            return 0.0, []

        guarded = sum(1 for f in parsed.functions if has_error_handling(f.body, rules))
        ratio = guarded / len(parsed.functions)

        issues = []
        if ratio < self.thresholds.error_handling_min_ratio:
            issues.append(f"insufficient error handling: {ratio:.1%} of functions")
        return 1.0 - ratio, issues
