"""Shared test fixtures for Quality Lens tests."""

import logging
import os

import pytest


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with no global/project config files and no QUALITY_LENS_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("QUALITY_LENS_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def write_file(tmp_path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def flat_python_source():
    """Ten lines of code: no functions, no comments, no blank lines."""
    return "".join(f"x_{i} = {i}\n" for i in range(10))


@pytest.fixture
def package_logger():
    """The quality_lens logger, with its handlers and level restored afterwards."""
    logger = logging.getLogger("quality_lens")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)
