"""Configuration loading and management for Quality Lens.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.quality-lens.toml)
    3. Project config (./quality-lens.toml)
    4. Explicit config file
    5. Environment variables (QUALITY_LENS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=2, exclude_patterns=("**/vendor/**",))
    >>> config.workers
    2
    >>> config.weights.cyclomatic_complexity
    0.2
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "QUALITY_LENS_"

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass(frozen=True)
class MetricWeights:
    """Per-metric weights for the weighted file score.

    The same instance feeds both the metric set (each metric's ``weight``)
    and the orchestrator's score fold, so the two can never disagree.

    Attributes:
        cyclomatic_complexity: Branching complexity
        function_length: Function body length
        comment_ratio: Comment density
        error_handling: Defensive code presence
        naming_convention: Identifier casing
        code_duplication: Similar functions and repeated blocks
        structure_analysis: Class, function and file shape
    """

    cyclomatic_complexity: float = 0.20
    function_length: float = 0.15
    comment_ratio: float = 0.10
    error_handling: float = 0.10
    naming_convention: float = 0.15
    code_duplication: float = 0.15
    structure_analysis: float = 0.15

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise InvalidConfigError(f"weights.{f.name}", value, "weights must be non-negative")

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, name: str, default: float = 0.0) -> float:
        return self.as_dict().get(name, default)

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())

    def validate(self) -> bool:
        """True when the weights sum to 1.0 (+/- 0.01).

        Advisory only: analysis runs regardless, scores are normalised by
        the weight sum.
        """
        return abs(self.total - 1.0) < 0.01


@dataclass(frozen=True)
class ThresholdConfig:
    """Numeric constants used by the metrics and by severity classification.

    Attributes:
        Cyclomatic complexity:
            complexity_scale: Mean complexity that maps to a score of 1.0
            complexity_extreme: A single function above this is reported
            complexity_high: Functions above this are counted and reported

        Function length:
            length_scale: Mean length that maps to a score of 1.0
            length_max: A function above this is reported
            length_long: Functions above this are counted and reported
            length_mean_max: Mean length above this is reported

        Comment ratio:
            comment_ratio_min: Below this is "too few comments"
            comment_ratio_max: Above this is "too many comments"
            comment_ratio_ideal: Target ratio inside the acceptable band

        Error handling:
            error_handling_min_ratio: Share of functions with defensive code below
                which an issue is raised

        Duplication:
            duplication_similarity: Function pairs more similar than this are duplicates
            duplication_min_block: Smallest repeated line window
            duplication_max_block: Largest repeated line window
            duplication_block_penalty: Added to the score when any block repeats

        Structure:
            structure_max_class_lines, structure_max_function_lines,
            structure_max_parameters, structure_max_file_lines,
            structure_max_classes, structure_max_functions,
            structure_min_comment_ratio, structure_min_blank_ratio

        Severity:
            severity_critical: Metric score at or above which issues are Critical
            severity_warning: Metric score at or above which issues are Warning
    """

    # === Cyclomatic Complexity ===
    complexity_scale: float = 15.0
    complexity_extreme: int = 20
    complexity_high: int = 10

    # === Function Length ===
    length_scale: float = 100.0
    length_max: int = 100
    length_long: int = 50
    length_mean_max: float = 30.0

    # === Comment Ratio ===
    comment_ratio_min: float = 0.10
    comment_ratio_max: float = 0.50
    comment_ratio_ideal: float = 0.30

    # === Error Handling ===
    error_handling_min_ratio: float = 0.30

    # === Code Duplication ===
    duplication_similarity: float = 0.80
    duplication_min_block: int = 3
    duplication_max_block: int = 10
    duplication_block_penalty: float = 0.30

    # === Structure Analysis ===
    structure_max_class_lines: int = 500
    structure_max_function_lines: int = 100
    structure_max_parameters: int = 5
    structure_max_file_lines: int = 1000
    structure_max_classes: int = 10
    structure_max_functions: int = 50
    structure_min_comment_ratio: float = 0.10
    structure_min_blank_ratio: float = 0.05

    # === Severity ===
    severity_critical: float = 0.8
    severity_warning: float = 0.5

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value <= 0:
                raise InvalidConfigError(f"thresholds.{f.name}", value, "must be positive")

        # Ratios must be in (0, 1]
        ratio_fields = [
            "comment_ratio_min",
            "comment_ratio_max",
            "comment_ratio_ideal",
            "error_handling_min_ratio",
            "duplication_similarity",
            "duplication_block_penalty",
            "structure_min_comment_ratio",
            "structure_min_blank_ratio",
            "severity_critical",
            "severity_warning",
        ]
        for field_name in ratio_fields:
            value = getattr(self, field_name)
            if value > 1.0:
                raise InvalidConfigError(
                    f"thresholds.{field_name}", value, "must be between 0.0 and 1.0"
                )

        if self.duplication_min_block > self.duplication_max_block:
            raise InvalidConfigError(
                "thresholds.duplication_min_block",
                self.duplication_min_block,
                "must not exceed duplication_max_block",
            )
        if self.severity_warning > self.severity_critical:
            raise InvalidConfigError(
                "thresholds.severity_warning",
                self.severity_warning,
                "must not exceed severity_critical",
            )


# Default threshold configuration (singleton)
DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    All fields have sensible defaults. Users typically override only a few
    fields via CLI flags or config file.

    Attributes:
        File filtering:
            exclude_patterns: Path patterns to skip (see analysis.discovery)
            max_file_size_mb: Files larger than this are skipped

        Scoring:
            weights: Per-metric weights, shared by metrics and score fold
            thresholds: Numeric limits used by the metrics

        Extraction:
            deduplicate_records: Drop repeated (name, start line) records

        Performance tuning:
            workers: Number of parallel workers (None = auto-detect)

        Output control:
            top_files: Worst files listed in summaries
            max_issues: Issues listed per file in summaries
            verbosity: Logging verbosity level
    """

    # File filtering
    exclude_patterns: tuple[str, ...] = (
        "**/node_modules/**",
        "**/dist/**",
        "**/build/**",
        "**/.git/**",
        "**/obj/**",
        "**/bin/**",
        "**/Library/**",
        "**/Temp/**",
        "**/__pycache__/**",
        "**/.venv/**",
        "**/venv/**",
        "**/*.min.js",
    )
    max_file_size_mb: float = 10.0

    # Scoring
    weights: MetricWeights = field(default_factory=MetricWeights)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    # Extraction
    deduplicate_records: bool = True

    # Performance tuning
    workers: Optional[int] = None  # None = auto-detect from CPU cores

    # Output control
    top_files: int = 5
    max_issues: int = 5
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # TOML and CLI hand over lists; keep the frozen config hashable
        if isinstance(self.exclude_patterns, str):
            object.__setattr__(self, "exclude_patterns", (self.exclude_patterns,))
        elif not isinstance(self.exclude_patterns, tuple):
            object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.top_files < 1:
            raise InvalidConfigError("top_files", self.top_files, "must be at least 1")
        if self.max_issues < 1:
            raise InvalidConfigError("max_issues", self.max_issues, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        return self.workers or DEFAULT_WORKERS

    def validate(self) -> bool:
        """Advisory weight-sum check. The analysis never refuses to run on False."""
        return self.weights.validate()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Configuration sources are merged in priority order (lowest to highest):
        1. Defaults (AnalysisConfig field defaults)
        2. Global config (~/.quality-lens.toml)
        3. Project config (./quality-lens.toml)
        4. Explicit config file (if config_file provided)
        5. Environment variables (QUALITY_LENS_* prefix)
        6. CLI overrides (kwargs)

    ``[weights]`` and ``[thresholds]`` tables (or ``weights`` / ``thresholds``
    dict overrides) are merged key by key across sources.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value is out of range
    """
    # Start with empty dicts - dataclass defaults will fill in
    merged: dict = {}
    weights: dict = {}
    thresholds: dict = {}

    def _merge(source: dict) -> None:
        source = dict(source)
        weights.update(_table(source.pop("weights", None), "weights"))
        thresholds.update(_table(source.pop("thresholds", None), "thresholds"))
        merged.update(source)

    # 1. Global and project config
    for candidate in (Path.home() / ".quality-lens.toml", Path.cwd() / "quality-lens.toml"):
        if candidate.exists():
            _merge(_load_toml_file(candidate))

    # 2. Explicit config file (highest priority from files)
    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(_load_toml_file(config_file))

    # 3. Environment variables
    _merge(_load_env_vars())

    # 4. CLI overrides (highest priority)
    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    _merge({k: v for k, v in overrides.items() if v is not None})

    try:
        if weights:
            merged["weights"] = MetricWeights(**weights)
        if thresholds:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _table(value: Any, name: str) -> dict:
    """Normalise a [weights]/[thresholds] source value to a plain dict."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, (MetricWeights, ThresholdConfig)):
        return {f.name: getattr(value, f.name) for f in fields(value)}
    raise ConfigurationError(
        f"Invalid [{name}] config: expected a table, got {type(value).__name__}"
    )


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from QUALITY_LENS_* environment variables.

    Top-level fields use ``QUALITY_LENS_<FIELD>``; weights and thresholds use
    ``QUALITY_LENS_WEIGHT_<NAME>`` and ``QUALITY_LENS_THRESHOLD_<NAME>``.
    ``QUALITY_LENS_EXCLUDE_PATTERNS`` is a comma-separated list.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    result: dict[str, Any] = {}
    result.update(_env_fields(AnalysisConfig, ENV_PREFIX, skip={"weights", "thresholds"}))

    weights = _env_fields(MetricWeights, f"{ENV_PREFIX}WEIGHT_")
    if weights:
        result["weights"] = weights
    thresholds = _env_fields(ThresholdConfig, f"{ENV_PREFIX}THRESHOLD_")
    if thresholds:
        result["thresholds"] = thresholds
    return result


def _env_fields(cls: type, prefix: str, skip: frozenset = frozenset()) -> dict[str, Any]:
    # Map of field name -> expected type
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for field_name in cls.__dataclass_fields__:
        if field_name in skip:
            continue
        env_key = f"{prefix}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the type is not representable

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Tuples of strings (exclude_patterns): comma separated
    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    # Bool: accept true/false/1/0/yes/no
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML support is missing or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Declared dependency for Python < 3.11
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
