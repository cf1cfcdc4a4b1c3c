"""Cyclomatic complexity from branch, loop and logical-operator markers."""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.models import ParsedFile
from .base import BaseMetric


def function_complexity(body: str, rules: LanguageRules) -> int:
    """1 + number of decision points found in ``body``."""
    return 1 + sum(len(pattern.findall(body)) for pattern in rules.complexity_patterns)


class CyclomaticComplexityMetric(BaseMetric):
    name = "cyclomatic_complexity"
    title = "Cyclomatic Complexity"
    description = "Decision points per function; branch-heavy functions are hard to test"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        if not parsed.functions:
            return 0.0, []

        t = self.thresholds
        values = [(f.name, function_complexity(f.body, rules)) for f in parsed.functions]
        mean = sum(c for _, c in values) / len(values)
        worst_name, worst = max(values, key=lambda item: item[1])
        high = [name for name, c in values if c > t.complexity_high]

        issues = []
        if worst > t.complexity_extreme:
            issues.append(f"extremely high complexity: {worst} in {worst_name}")
        if high:
            issues.append(f"{len(high)} high-complexity functions (>{t.complexity_high})")

        return min(mean / t.complexity_scale, 1.0), issues
