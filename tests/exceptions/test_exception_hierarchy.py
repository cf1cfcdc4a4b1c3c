"""Tests for the exception hierarchy."""

from pathlib import Path

from quality_lens.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAnalysisError,
    InvalidConfigError,
    PathNotFoundError,
    QualityLensError,
)


class TestExceptionHierarchy:
    def test_path_not_found(self):
        err = PathNotFoundError("src/missing", kind="directory")
        assert isinstance(err, AnalysisError)
        assert isinstance(err, QualityLensError)
        assert isinstance(err, FileNotFoundError)
        assert err.path == Path("src/missing")
        assert str(err) == "Directory not found: src/missing (path=src/missing, kind=directory)"

    def test_file_analysis_error(self):
        err = FileAnalysisError("a.py", "cannot read file")
        assert isinstance(err, AnalysisError)
        assert err.filepath == Path("a.py")
        assert err.reason == "cannot read file"
        assert err.details["reason"] == "cannot read file"

    def test_invalid_config(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert isinstance(err, ConfigurationError)
        assert err.key == "workers"
        assert "Invalid configuration for workers: 0" in str(err)

    def test_message_without_details(self):
        assert str(QualityLensError("plain")) == "plain"
