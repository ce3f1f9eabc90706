#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli.py
"""Integration tests for the canonmark command line.

This module runs :func:`canonmark.cli.main` end to end on real files: in-place
formatting, ``--check``, ``--diff``, ``--stdin``, configuration files and
error exit codes.
"""

import io
import logging
import subprocess
import sys

import pytest
from utils import cleanup_test_dir, create_test_temp_dir

from canonmark import __version__
from canonmark.cli import main
from canonmark.exceptions import ParsingError
from canonmark.logging_utils import PACKAGE_LOGGER

UNFORMATTED = "# Title\n\n* one\n* two\n"
FORMATTED = "Title\n=====\n\n -  one\n -  two\n"
LONG_PARAGRAPH = "alpha beta gamma delta epsilon zeta eta theta\n"


@pytest.fixture(autouse=True)
def restore_package_logger():
    """main() installs handlers on the canonmark logger; remove them after each test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


@pytest.mark.integration
@pytest.mark.cli
class TestCLIFormatting:
    """Tests for the three output modes."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = create_test_temp_dir()

    def teardown_method(self):
        """Clean up test environment."""
        cleanup_test_dir(self.temp_dir)

    def _write(self, name, content):
        path = self.temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_rewrites_in_place(self):
        path = self._write("doc.md", UNFORMATTED)
        assert main([str(path), "--no-config"]) == 0
        assert path.read_text(encoding="utf-8") == FORMATTED

    def test_formatted_file_is_left_alone(self):
        path = self._write("doc.md", FORMATTED)
        before = path.stat().st_mtime_ns
        assert main([str(path), "--no-config"]) == 0
        assert path.stat().st_mtime_ns == before

    def test_check_reports_unformatted(self, capsys):
        path = self._write("doc.md", UNFORMATTED)
        assert main([str(path), "--check", "--no-config"]) == 1
        assert path.read_text(encoding="utf-8") == UNFORMATTED
        assert f"would reformat {path}" in capsys.readouterr().err

    def test_check_passes_on_formatted(self, capsys):
        path = self._write("doc.md", FORMATTED)
        assert main([str(path), "--check", "--no-config"]) == 0
        assert "would reformat" not in capsys.readouterr().err

    def test_check_with_several_files(self):
        good = self._write("good.md", FORMATTED)
        bad = self._write("bad.md", UNFORMATTED)
        assert main([str(good), str(bad), "--check", "--no-config"]) == 1

    def test_diff(self, capsys):
        path = self._write("doc.md", UNFORMATTED)
        assert main([str(path), "--diff", "--no-config"]) == 0
        out = capsys.readouterr().out
        assert f"--- {path}" in out
        assert f"+++ {path}" in out
        assert "-# Title" in out
        assert "+Title" in out
        assert path.read_text(encoding="utf-8") == UNFORMATTED

    def test_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO(UNFORMATTED))
        assert main(["--stdin", "--no-config"]) == 0
        assert capsys.readouterr().out == FORMATTED

    def test_option_flags(self):
        path = self._write("doc.md", LONG_PARAGRAPH)
        assert main([str(path), "--no-config", "--line-width", "20"]) == 0
        assert path.read_text(encoding="utf-8") == "alpha beta gamma\ndelta epsilon zeta\neta theta\n"

    def test_boolean_flag(self):
        path = self._write("doc.md", "a \\*b\\*\n")
        assert main([str(path), "--no-config", "--no-escape-special"]) == 0
        assert path.read_text(encoding="utf-8") == "a *b*\n"

    def test_warnings_are_reported(self, capsys):
        path = self._write("table.md", "| A | B |\n|---|---|\n| 1 | x|y |\n")
        assert main([str(path), "--check", "--no-config"]) == 1
        assert f"{path}:3: warning:" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
class TestCLIConfiguration:
    """Tests for configuration files and their precedence."""

    def test_explicit_config(self, tmp_path):
        config = tmp_path / "fmt.toml"
        config.write_text("line-width = 20\n", encoding="utf-8")
        path = tmp_path / "doc.md"
        path.write_text(LONG_PARAGRAPH, encoding="utf-8")
        assert main([str(path), "--config", str(config)]) == 0
        assert path.read_text(encoding="utf-8") == "alpha beta gamma\ndelta epsilon zeta\neta theta\n"

    def test_discovered_config(self, tmp_path, monkeypatch):
        (tmp_path / ".canonmark.yaml").write_text("line_width: 20\n", encoding="utf-8")
        path = tmp_path / "doc.md"
        path.write_text(LONG_PARAGRAPH, encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert main(["doc.md"]) == 0
        assert path.read_text(encoding="utf-8") == "alpha beta gamma\ndelta epsilon zeta\neta theta\n"

    def test_flags_override_config(self, tmp_path):
        config = tmp_path / "fmt.json"
        config.write_text('{"line_width": 20}', encoding="utf-8")
        path = tmp_path / "doc.md"
        path.write_text(LONG_PARAGRAPH, encoding="utf-8")
        assert main([str(path), "--config", str(config), "--line-width", "80"]) == 0
        assert path.read_text(encoding="utf-8") == LONG_PARAGRAPH

    def test_unknown_config_key(self, tmp_path, capsys):
        config = tmp_path / "fmt.toml"
        config.write_text("colour = 'blue'\n", encoding="utf-8")
        path = tmp_path / "doc.md"
        path.write_text(FORMATTED, encoding="utf-8")
        assert main([str(path), "--config", str(config)]) == 3
        assert "colour" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text(FORMATTED, encoding="utf-8")
        assert main([str(path), "--config", str(tmp_path / "nope.toml")]) == 3


@pytest.mark.integration
@pytest.mark.cli
class TestCLIErrors:
    """Tests for error exit codes."""

    def test_no_input(self, capsys):
        assert main(["--no-config"]) == 3
        assert "no input files" in capsys.readouterr().err

    def test_files_and_stdin(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text(FORMATTED, encoding="utf-8")
        assert main([str(path), "--stdin", "--no-config"]) == 3

    def test_invalid_option_value(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text(FORMATTED, encoding="utf-8")
        assert main([str(path), "--no-config", "--line-width", "0"]) == 3

    def test_check_and_diff_are_exclusive(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "doc.md"), "--check", "--diff"])
        assert exc_info.value.code == 2

    def test_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.md"
        assert main([str(missing), "--no-config"]) == 4
        assert f"{missing}: error:" in capsys.readouterr().err

    def test_missing_file_does_not_stop_others(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text(UNFORMATTED, encoding="utf-8")
        assert main([str(tmp_path / "missing.md"), str(path), "--no-config"]) == 4
        assert path.read_text(encoding="utf-8") == FORMATTED

    def test_parsing_error(self, tmp_path, monkeypatch, capsys):
        def fail(self, text):
            raise ParsingError("boom", parsing_stage="tokenize")

        monkeypatch.setattr("canonmark.api.MarkdownParser.parse", fail)
        path = tmp_path / "doc.md"
        path.write_text(FORMATTED, encoding="utf-8")
        assert main([str(path), "--no-config"]) == 6
        assert "boom" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_module_entry_point(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text(UNFORMATTED, encoding="utf-8")
        result = subprocess.run(
            [sys.executable, "-m", "canonmark", "--check", "--no-config", str(path)],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 1
        assert "would reformat" in result.stderr
