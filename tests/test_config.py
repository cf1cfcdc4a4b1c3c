"""Tests for configuration loading, merging and validation."""

import pytest

from quality_lens.config import (
    AnalysisConfig,
    MetricWeights,
    ThresholdConfig,
    load_config,
)
from quality_lens.exceptions import ConfigurationError, InvalidConfigError


class TestMetricWeights:
    """Test the single weight table."""

    def test_defaults_sum_to_one(self):
        weights = MetricWeights()
        assert weights.total == pytest.approx(1.0)
        assert weights.validate()

    def test_invalid_sum_is_advisory(self):
        weights = MetricWeights(comment_ratio=0.5)
        assert not weights.validate()
        assert not AnalysisConfig(weights=weights).validate()

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigError):
            MetricWeights(error_handling=-0.1)

    def test_get_unknown_name(self):
        assert MetricWeights().get("no_such_metric") == 0.0


class TestThresholdConfig:
    """Test threshold validation."""

    def test_defaults(self):
        t = ThresholdConfig()
        assert t.complexity_scale == 15.0
        assert t.comment_ratio_ideal == 0.30
        assert (t.duplication_min_block, t.duplication_max_block) == (3, 10)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"complexity_scale": 0},
            {"comment_ratio_max": 1.5},
            {"duplication_min_block": 12},
            {"severity_warning": 0.9},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(**kwargs)


class TestAnalysisConfig:
    """Test AnalysisConfig validation."""

    def test_list_patterns_become_tuple(self):
        config = AnalysisConfig(exclude_patterns=["**/gen/**"])
        assert config.exclude_patterns == ("**/gen/**",)
        hash(config.exclude_patterns)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"max_file_size_mb": 0},
            {"top_files": 0},
            {"verbosity": "loud"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(**kwargs)

    def test_effective_workers(self):
        assert AnalysisConfig(workers=3).effective_workers == 3
        assert AnalysisConfig().effective_workers >= 1


class TestLoadConfig:
    """Test source discovery and priority order."""

    def test_defaults(self, isolated_env):
        config = load_config()
        assert config == AnalysisConfig()

    def test_project_file(self, isolated_env):
        (isolated_env / "quality-lens.toml").write_text(
            'workers = 2\nexclude_patterns = ["**/gen/**"]\n\n'
            "[weights]\ncomment_ratio = 0.5\n\n"
            "[thresholds]\ncomplexity_high = 12\n"
        )
        config = load_config()
        assert config.workers == 2
        assert config.exclude_patterns == ("**/gen/**",)
        assert config.weights.comment_ratio == 0.5
        assert config.weights.function_length == 0.15
        assert config.thresholds.complexity_high == 12
        assert not config.validate()

    def test_explicit_file_beats_project_file(self, isolated_env):
        (isolated_env / "quality-lens.toml").write_text("workers = 2\ntop_files = 7\n")
        explicit = isolated_env / "ci.toml"
        explicit.write_text("workers = 6\n")
        config = load_config(config_file=explicit)
        assert config.workers == 6
        assert config.top_files == 7

    def test_global_file(self, isolated_env):
        (isolated_env / "home" / ".quality-lens.toml").write_text("max_issues = 9\n")
        assert load_config().max_issues == 9

    def test_environment_variables(self, isolated_env, monkeypatch):
        monkeypatch.setenv("QUALITY_LENS_WORKERS", "3")
        monkeypatch.setenv("QUALITY_LENS_EXCLUDE_PATTERNS", "**/a/**, **/b/**")
        monkeypatch.setenv("QUALITY_LENS_DEDUPLICATE_RECORDS", "false")
        monkeypatch.setenv("QUALITY_LENS_WEIGHT_NAMING_CONVENTION", "0.25")
        monkeypatch.setenv("QUALITY_LENS_THRESHOLD_LENGTH_LONG", "40")
        config = load_config()
        assert config.workers == 3
        assert config.exclude_patterns == ("**/a/**", "**/b/**")
        assert config.deduplicate_records is False
        assert config.weights.naming_convention == 0.25
        assert config.thresholds.length_long == 40

    def test_overrides_beat_environment(self, isolated_env, monkeypatch):
        monkeypatch.setenv("QUALITY_LENS_WORKERS", "3")
        assert load_config(workers=5).workers == 5
        assert load_config(workers=None).workers == 3

    def test_verbosity_flags(self, isolated_env):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_weight_overrides_merge_with_file(self, isolated_env):
        (isolated_env / "quality-lens.toml").write_text("[weights]\ncomment_ratio = 0.3\n")
        config = load_config(weights={"code_duplication": 0.05})
        assert config.weights.comment_ratio == 0.3
        assert config.weights.code_duplication == 0.05

    def test_bad_environment_value(self, isolated_env, monkeypatch):
        monkeypatch.setenv("QUALITY_LENS_WORKERS", "many")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_missing_explicit_file(self, isolated_env):
        with pytest.raises(ConfigurationError):
            load_config(config_file=isolated_env / "missing.toml")

    def test_malformed_toml(self, isolated_env):
        bad = isolated_env / "bad.toml"
        bad.write_text("workers = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_unknown_key(self, isolated_env):
        with pytest.raises(ConfigurationError):
            load_config(colour="blue")

    def test_unknown_weight(self, isolated_env):
        with pytest.raises(ConfigurationError):
            load_config(weights={"bogus": 1.0})
