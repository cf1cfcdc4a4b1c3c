"""Function length: non-blank, non-comment lines per function body."""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.models import ParsedFile
from .base import BaseMetric


def body_length(body: str, comment_prefixes: tuple[str, ...]) -> int:
    count = 0
    for line in body.splitlines():
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(comment_prefixes):
            count += 1
    return count


class FunctionLengthMetric(BaseMetric):
    name = "function_length"
    title = "Function Length"
    description = "Lines per function; long functions are hard to read and maintain"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        if not parsed.functions:
            return 0.0, []

        t = self.thresholds
        lengths = [body_length(f.body, rules.comment_prefixes) for f in parsed.functions]
        mean = sum(lengths) / len(lengths)
        longest = max(lengths)
        long_count = sum(1 for n in lengths if n > t.length_long)

        issues = []
        if longest > t.length_max:
            issues.append(f"extremely long function: {longest} lines")
        if long_count:
            issues.append(f"{long_count} long functions (>{t.length_long} lines)")
        if mean > t.length_mean_max:
            issues.append(f"average function length too high: {mean:.1f} lines")

        return min(mean / t.length_scale, 1.0), issues
