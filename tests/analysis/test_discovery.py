"""Tests for exclude-pattern matching and file discovery."""

import pytest

from quality_lens.analysis import compile_pattern, discover_files, is_excluded
from quality_lens.config import AnalysisConfig


class TestExcludePatterns:
    """Test wildcard and substring exclude semantics."""

    def test_node_modules(self):
        patterns = ["**/node_modules/**"]
        assert is_excluded("/repo/node_modules/x/y.js", patterns)
        assert not is_excluded("/repo/src/y.js", patterns)

    def test_leading_double_star_matches_at_root(self):
        assert is_excluded("node_modules/lib.js", ["**/node_modules/**"])

    def test_single_star_stays_in_segment(self):
        patterns = ["src/*.py"]
        assert is_excluded("src/a.py", patterns)
        assert not is_excluded("src/sub/a.py", patterns)

    def test_directory_pattern_covers_its_contents(self):
        assert is_excluded("vendor/lib/a.go", ["**/vendor"])
        assert is_excluded("src/a/test/x.py", ["src/**/test"])
        assert not is_excluded("src/testing/x.py", ["**/test"])

    def test_suffix_pattern(self):
        patterns = ["**/*.min.js"]
        assert is_excluded("vendor/jquery.min.js", patterns)
        assert is_excluded("jquery.min.js", patterns)
        assert not is_excluded("jquery.js", patterns)

    def test_question_mark(self):
        assert is_excluded("gen/a1.cs", ["gen/a?.cs"])
        assert not is_excluded("gen/a12.cs", ["gen/a?.cs"])

    def test_plain_pattern_is_substring(self):
        assert compile_pattern("generated") is None
        assert is_excluded("src/generated/api.ts", ["generated"])

    def test_windows_separators(self):
        assert is_excluded("repo\\bin\\Debug\\a.cs", ["**/bin/**"])

    def test_no_patterns(self):
        assert not is_excluded("anything.py", [])


class TestDiscoverFiles:
    """Test directory walking."""

    def test_keeps_supported_non_excluded_files(self, write_file, tmp_path):
        write_file("src/app.js", "let a = 1;\n")
        write_file("src/notes.md", "# notes\n")
        write_file("node_modules/lib/index.js", "let b = 2;\n")
        write_file("build/out.js", "let c = 3;\n")

        found = discover_files(tmp_path, AnalysisConfig())
        assert found == [tmp_path / "src" / "app.js"]

    def test_patterns_are_relative_to_root(self, tmp_path):
        """An excluded directory name above the root does not exclude everything."""
        root = tmp_path / "build" / "project"
        root.mkdir(parents=True)
        (root / "main.go").write_text("package main\n")

        assert discover_files(root, AnalysisConfig()) == [root / "main.go"]

    def test_sorted_order(self, write_file, tmp_path):
        for name in ("b.py", "a.py", "c/d.py"):
            write_file(name, "x = 1\n")
        found = discover_files(tmp_path, AnalysisConfig())
        assert found == sorted(found)
        assert len(found) == 3

    def test_size_limit(self, write_file, tmp_path):
        write_file("small.py", "x = 1\n")
        write_file("large.py", "x = 1\n" * 1000)
        config = AnalysisConfig(max_file_size_mb=1000 / (1024 * 1024))
        assert discover_files(tmp_path, config) == [tmp_path / "small.py"]

    @pytest.mark.parametrize("pattern", ["**/gen/**", "gen"])
    def test_custom_excludes(self, write_file, tmp_path, pattern):
        write_file("gen/model.cs", "class A {}\n")
        write_file("core/model.cs", "class B {}\n")
        config = AnalysisConfig(exclude_patterns=(pattern,))
        assert discover_files(tmp_path, config) == [tmp_path / "core" / "model.cs"]
