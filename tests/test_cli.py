"""Tests for the axiomatic CLI and config loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from axiomatic.cli import main
from axiomatic.config import find_config, load_config

GROUP = "def type[group] {\n  forall a forall b in(*(a,b), G)\n}\n"


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI installs a handler on the axiomatic logger; undo it per test."""
    logger = logging.getLogger("axiomatic")
    level, handlers, propagate = logger.level, list(logger.handlers), logger.propagate
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
    logger.propagate = propagate


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a minimal definitions project in a temp dir."""
    toml = tmp_path / "axiomatic.toml"
    toml.write_text(
        '[package]\nname = "algebra"\nversion = "1.0.0"\n'
        '[check]\nsources = ["defs"]\n'
    )
    defs = tmp_path / "defs"
    defs.mkdir()
    (defs / "group.axm").write_text(GROUP)
    return tmp_path


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "tokens" in result.output
        assert "parse" in result.output
        assert "check" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_tokens(self, runner, tmp_path):
        f = tmp_path / "a.axm"
        f.write_text("  forall x\n")
        result = runner.invoke(main, ["tokens", str(f)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            'FORALL: "forall" @0 len=6',
            'SYMBOL: "x" @7 len=1',
            'EOF: "" @8 len=0',
        ]

    def test_tokens_lex_error(self, runner, tmp_path):
        f = tmp_path / "bad.axm"
        f.write_text("a # b")
        result = runner.invoke(main, ["tokens", str(f)])
        assert result.exit_code == 1
        assert "offset 2" in result.output

    def test_parse_census(self, runner, tmp_path):
        f = tmp_path / "group.axm"
        f.write_text(GROUP)
        result = runner.invoke(main, ["parse", str(f)])
        assert result.exit_code == 0
        assert "definition group" in result.output
        assert "Quantifier: 2" in result.output
        assert "FunctionCall: 1" in result.output

    def test_parse_not_a_definition(self, runner, tmp_path):
        f = tmp_path / "bad.axm"
        f.write_text("forall a a = a")
        result = runner.invoke(main, ["parse", str(f)])
        assert result.exit_code == 1
        assert "not a definition" in result.output

    def test_check_ok(self, runner, tmp_project):
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 0
        assert "checking algebra" in result.output
        assert "ok " in result.output
        assert "group.axm" in result.output

    def test_check_reports_failures(self, runner, tmp_project):
        (tmp_project / "defs" / "broken.axm").write_text("def type[x] { a = }")
        (tmp_project / "defs" / "garbage.axm").write_text("def type[x] { a ~ b }")
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 1
        assert "broken.axm: not a definition (stopped at offset 18)" in result.output
        assert "garbage.axm: unexpected character '~' at offset 16" in result.output
        assert "2 of 3 file(s) failed" in result.output

    def test_check_without_furthest_offset(self, runner, tmp_project):
        (tmp_project / "axiomatic.toml").write_text(
            '[check]\nsources = ["defs"]\nfurthest_offset = false\n'
        )
        (tmp_project / "defs" / "broken.axm").write_text("def type[x] { }")
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 1
        assert "broken.axm: not a definition" in result.output
        assert "stopped at" not in result.output

    def test_check_no_sources(self, runner, tmp_path):
        (tmp_path / "axiomatic.toml").write_text('[package]\nname = "empty"\n')
        result = runner.invoke(main, ["check", str(tmp_path)])
        assert result.exit_code == 0
        assert "no .axm files found" in result.output

    def test_check_no_config(self, runner, tmp_path, monkeypatch):
        def missing(path):
            raise FileNotFoundError(path)

        monkeypatch.setattr("axiomatic.cli.find_config", missing)
        result = runner.invoke(main, ["check", str(tmp_path)])
        assert result.exit_code == 1
        assert "no axiomatic.toml found" in result.output

    def test_verbose_enables_debug_logging(self, runner, tmp_path):
        f = tmp_path / "a.axm"
        f.write_text("def type[x] { a = b }")
        result = runner.invoke(main, ["-vv", "parse", str(f)])
        assert result.exit_code == 0
        assert logging.getLogger("axiomatic").level == logging.DEBUG

    def test_logging_does_not_propagate_to_root(self, runner, tmp_path):
        f = tmp_path / "a.axm"
        f.write_text("def type[x] { a = b }")
        result = runner.invoke(main, ["parse", str(f)])
        assert result.exit_code == 0
        logger = logging.getLogger("axiomatic")
        assert logger.propagate is False
        assert len(logger.handlers) == 1


# --- Config tests ---


class TestConfig:
    def test_find_config(self, tmp_project):
        nested = tmp_project / "defs"
        assert find_config(nested) == (tmp_project / "axiomatic.toml").resolve()

    def test_find_config_from_file(self, tmp_project):
        path = find_config(tmp_project / "defs" / "group.axm")
        assert path == (tmp_project / "axiomatic.toml").resolve()

    def test_load_config(self, tmp_project):
        config = load_config(tmp_project / "axiomatic.toml")
        assert config.package.name == "algebra"
        assert config.package.version == "1.0.0"
        assert config.check.sources == ["defs"]
        assert config.check.extension == ".axm"
        assert config.check.furthest_offset is True
        assert config.root == tmp_project.resolve()

    def test_load_config_defaults(self, tmp_path):
        toml = tmp_path / "axiomatic.toml"
        toml.write_text("")
        config = load_config(toml)
        assert config.package.name == "untitled"
        assert config.check.sources == ["."]

    def test_source_files(self, tmp_project):
        extra = tmp_project / "defs" / "nested"
        extra.mkdir()
        (extra / "ring.axm").write_text(GROUP)
        (extra / "notes.txt").write_text("ignored")
        config = load_config(tmp_project / "axiomatic.toml")
        names = [p.name for p in config.source_files()]
        assert names == ["group.axm", "ring.axm"]

    def test_source_files_single_file(self, tmp_project):
        (tmp_project / "axiomatic.toml").write_text(
            '[check]\nsources = ["defs/group.axm", "missing"]\n'
        )
        config = load_config(tmp_project / "axiomatic.toml")
        assert [p.name for p in config.source_files()] == ["group.axm"]

    def test_custom_extension(self, tmp_project):
        (tmp_project / "defs" / "monoid.def").write_text(GROUP)
        (tmp_project / "axiomatic.toml").write_text(
            '[check]\nsources = ["defs"]\nextension = ".def"\n'
        )
        config = load_config(tmp_project / "axiomatic.toml")
        assert [p.name for p in config.source_files()] == ["monoid.def"]


def test_find_config_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    with pytest.raises(FileNotFoundError):
        find_config(tmp_path)
