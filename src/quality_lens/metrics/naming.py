"""Naming convention: identifier casing per language and symbol category."""

from __future__ import annotations

from ..scanning.languages import LanguageRules
from ..scanning.models import ParsedFile
from .base import BaseMetric


class NamingConventionMetric(BaseMetric):
    name = "naming_convention"
    title = "Naming Convention"
    description = "Functions, classes and variables following the language's casing style"

    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        items = [("function", f.name) for f in parsed.functions]
        items += [("class", c.name) for c in parsed.classes]
        items += [("constant" if v.is_const else "variable", v.name) for v in parsed.variables]
        if not items:
            return 0.0, []

        issues = []
        valid = 0
        for category, name in items:
            if rules.naming.is_valid(category, name):
                valid += 1
            else:
                issues.append(f"invalid {category} name: {name}")

        return 1.0 - valid / len(items), issues
