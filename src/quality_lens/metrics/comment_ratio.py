"""Comment ratio: distance of the comment density from an ideal band."""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.lines import count_lines
from ..scanning.models import ParsedFile
from .base import BaseMetric


class CommentRatioMetric(BaseMetric):
    name = "comment_ratio"
    title = "Comment Ratio"
    description = "Share of comment lines; both too few and too many comments are penalised"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        t = self.thresholds
        # Recount from the raw text rather than trusting the inventory
        counts = count_lines(parsed.content, rules.comment_style)
        considered = counts.code + counts.comment
        ratio = counts.comment / considered if considered else 0.0

        if ratio < t.comment_ratio_min:
            return 0.8 - 4 * ratio, [f"comment ratio too low: {ratio:.1%}"]
        if ratio > t.comment_ratio_max:
            return 2 * (ratio - t.comment_ratio_max), [f"comment ratio too high: {ratio:.1%}"]
        return 2 * abs(ratio - t.comment_ratio_ideal), []
