"""Tests for the quality-lens command line."""

import json

from typer.testing import CliRunner

from quality_lens.cli import app

runner = CliRunner()


class TestAnalyzeCommand:
    """Test `quality-lens analyze`."""

    def test_json_output(self, isolated_env, write_file):
        write_file("src/app.py", "def run():\n    return 1\n")
        result = runner.invoke(app, ["analyze", str(isolated_env / "src"), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_files"] == 1
        assert set(data["metrics"]) >= {"comment_ratio", "structure_analysis"}
        assert data["files"][0]["language"] == "python"

    def test_rich_output(self, isolated_env, write_file):
        write_file("src/app.py", "def run():\n    return 1\n")
        result = runner.invoke(app, ["analyze", str(isolated_env / "src"), "--top", "1"])
        assert result.exit_code == 0
        assert "Overall score" in result.stdout
        assert "Worst files" in result.stdout

    def test_empty_directory(self, isolated_env):
        empty = isolated_env / "empty"
        empty.mkdir()
        result = runner.invoke(app, ["analyze", str(empty)])
        assert result.exit_code == 0
        assert "No supported source files found" in result.stdout

    def test_exclude_option(self, isolated_env, write_file):
        write_file("src/keep.py", "x = 1\n")
        write_file("src/gen/skip.py", "y = 2\n")
        result = runner.invoke(
            app, ["analyze", str(isolated_env / "src"), "--json", "-e", "**/gen/**"]
        )
        assert result.exit_code == 0
        paths = [f["path"] for f in json.loads(result.stdout)["files"]]
        assert len(paths) == 1
        assert paths[0].endswith("keep.py")

    def test_log_file_uses_config_verbosity(self, isolated_env, write_file, package_logger):
        write_file("src/app.py", "x = 1\n")
        config_file = write_file("ci.toml", 'verbosity = "verbose"\n')
        log_file = isolated_env / "run.log"
        result = runner.invoke(
            app,
            [
                "analyze",
                str(isolated_env / "src"),
                "--json",
                "-c",
                str(config_file),
                "--log-file",
                str(log_file),
            ],
        )
        assert result.exit_code == 0
        assert "Discovered 1 files" in log_file.read_text()

    def test_missing_path_exits_2(self, isolated_env):
        result = runner.invoke(app, ["analyze", str(isolated_env / "missing")])
        assert result.exit_code == 2

    def test_invalid_config_exits_1(self, isolated_env):
        bad = isolated_env / "bad.toml"
        bad.write_text("workers = 0\n")
        result = runner.invoke(app, ["analyze", str(isolated_env), "-c", str(bad)])
        assert result.exit_code == 1


class TestLanguagesCommand:
    """Test `quality-lens languages`."""

    def test_json(self):
        result = runner.invoke(app, ["languages", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["python"] == [".py"]
        assert ".cs" in data["csharp"]

    def test_table(self):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        assert "typescript" in result.stdout
