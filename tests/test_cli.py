"""Tests for the rpkgtests command line."""

import argparse
import shutil
from pathlib import Path

import pytest

from rpkgtests.cli import build_parser, main
from rpkgtests.modules import MODULES_START
from rpkgtests.modules.region import read_modules

FIXTURES = Path(__file__).parent / "fixtures"


class TestParser:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_no_args_shows_help(self, capsys):
        assert main([]) == 0
        assert "rpkgtests" in capsys.readouterr().out

    @pytest.mark.parametrize("cmd", [
        ["--help"],
        ["create-test-modules", "--help"],
        ["sync-modules", "--help"],
        ["modules", "--help"],
        ["replace", "--help"],
    ])
    def test_help_exits_zero(self, cmd):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(cmd)
        assert exc_info.value.code == 0

    def test_repeatable_test_jars(self):
        args = build_parser().parse_args([
            "create-test-modules", "--test-jar", "g:a:1", "--test-jar", "g:b:1", "--no-clean",
        ])
        assert args.test_jar == ["g:a:1", "g:b:1"]
        assert args.no_clean is True


class TestReplace:
    def test_prints_derived_values(self, capsys):
        assert main(["replace", "/-tests$//, /^camel-/itest-/", "camel-core-tests", "foo"]) == 0
        out = capsys.readouterr().out
        assert "camel-core-tests -> itest-core" in out
        assert "foo -> foo" in out

    def test_malformed_rule(self, capsys):
        assert main(["replace", "abc", "foo"]) == 1
        assert "ERROR" in capsys.readouterr().out


class TestModulesCommands:
    def test_sync_then_list(self, tmp_path, capsys):
        pom = tmp_path / "pom.xml"
        shutil.copy(FIXTURES / "parent-pom.xml", pom)

        assert main(["sync-modules", str(pom), "foo", "bar"]) == 0
        assert read_modules(pom.read_text()) == ["foo", "bar"]
        assert "updated" in capsys.readouterr().out

        assert main(["modules", "list", str(pom)]) == 0
        out = capsys.readouterr().out
        assert "Found 2 generated modules" in out
        assert out.index("foo") < out.index("bar")

    def test_sync_dry_run(self, tmp_path, capsys):
        pom = tmp_path / "pom.xml"
        shutil.copy(FIXTURES / "parent-pom.xml", pom)
        assert main(["sync-modules", str(pom), "foo", "--dry-run"]) == 0
        assert MODULES_START not in pom.read_text()
        assert "[DRY RUN]" in capsys.readouterr().out

    def test_sync_without_anchor(self, tmp_path, capsys):
        pom = tmp_path / "pom.xml"
        pom.write_text("<foo/>")
        assert main(["sync-modules", str(pom), "m"]) == 1
        assert "Could not find </project>" in capsys.readouterr().out

    def test_sync_undecodable_pom(self, tmp_path, capsys):
        pom = tmp_path / "pom.xml"
        pom.write_bytes(b"<project>\xff</project>")
        assert main(["sync-modules", str(pom), "m1"]) == 1
        assert "ERROR: Could not read" in capsys.readouterr().out
        assert pom.read_bytes() == b"<project>\xff</project>"

    def test_list_missing_file(self, tmp_path, capsys):
        assert main(["modules", "list", str(tmp_path / "nope.xml")]) == 1
        assert "ERROR" in capsys.readouterr().out


class TestCreateTestModules:
    def test_from_config_file(self, project, capsys):
        shutil.copy(FIXTURES / "rpkgtests.yaml", project / "rpkgtests.yaml")
        rc = main(["create-test-modules", "--config", str(project / "rpkgtests.yaml")])
        assert rc == 0
        assert (project / "tests" / "foo" / "pom.xml").is_file()
        assert read_modules((project / "tests" / "pom.xml").read_text()) == ["foo", "bar"]
        out = capsys.readouterr().out
        assert "Modules:   2" in out

    def test_command_line_overrides(self, project, capsys):
        shutil.copy(FIXTURES / "rpkgtests.yaml", project / "rpkgtests.yaml")
        rc = main([
            "create-test-modules",
            "--config", str(project / "rpkgtests.yaml"),
            "--test-jar", "org.acme:baz-tests:1.0",
            "--dir-replacers", "/-tests$/-it/",
        ])
        assert rc == 0
        assert read_modules((project / "tests" / "pom.xml").read_text()) == ["baz-it"]

    def test_config_is_directory(self, tmp_path, capsys):
        assert main(["create-test-modules", "--config", str(tmp_path)]) == 1
        assert "ERROR: Could not read" in capsys.readouterr().out

    def test_without_config_file(self, project, monkeypatch, capsys):
        monkeypatch.chdir(project)
        monkeypatch.delenv("RPKGTESTS_CONFIG", raising=False)
        rc = main([
            "create-test-modules",
            "--parent-dir", "tests",
            "--rpkg-pom", "tests/rpkg/pom.xml",
            "--test-jar", "org.acme:foo-tests:1.0",
            "--dry-run",
        ])
        assert rc == 0
        assert "[DRY RUN]" in capsys.readouterr().out
        assert not (project / "tests" / "foo-tests").exists()

    def test_without_config_or_rpkg_pom(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("RPKGTESTS_CONFIG", raising=False)
        assert main(["create-test-modules"]) == 1
        assert "--rpkg-pom" in capsys.readouterr().out
