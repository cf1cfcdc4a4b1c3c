"""Base class for metric rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..scanning.languages import SUPPORTED_LANGUAGES, Language, LanguageRules, get_rules
from ..scanning.models import ParsedFile


@dataclass(frozen=True)
class MetricOutcome:
    """Result of one metric on one file.

    Attributes:
        name: Stable metric key (e.g. "cyclomatic_complexity")
        title: Human-readable metric name
        description: What the metric measures
        score: Badness in [0, 1], 0 = ideal
        weight: Weight used in the weighted file score
        issues: Human-readable findings
    """

    name: str
    title: str
    description: str
    score: float
    weight: float
    issues: tuple[str, ...] = ()


def clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class BaseMetric(ABC):
    """A scoring rule: ParsedFile -> MetricOutcome.

    Subclasses set the class attributes and implement ``evaluate``. They
    never see a file in an unsupported language and never mutate the
    ParsedFile they are given.
    """

    name: str
    title: str
    description: str
    supported_languages: frozenset[Language] = SUPPORTED_LANGUAGES

    def __init__(self, weight: float, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
        self.weight = weight
        self.thresholds = thresholds

    def supports(self, language: Language) -> bool:
        return language in self.supported_languages

    def analyze(self, parsed: ParsedFile) -> MetricOutcome:
        if not self.supports(parsed.language):
            return self._outcome(0.0, [])
        score, issues = self.evaluate(parsed, get_rules(parsed.language))
        return self._outcome(score, issues)

    @abstractmethod
    def evaluate(self, parsed: ParsedFile, rules: LanguageRules) -> tuple[float, list[str]]:
        """Return (raw score, issues) for a file in a supported language."""
        ...

    def _outcome(self, score: float, issues: list[str]) -> MetricOutcome:
        return MetricOutcome(
            name=self.name,
            title=self.title,
            description=self.description,
            score=clamp(score),
            weight=self.weight,
            issues=tuple(issues),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(weight={self.weight})"
