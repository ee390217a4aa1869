"""Tests for the pkginit CLI and diagnostic rendering."""

from __future__ import annotations

import json

import pytest

from pkginit.cli import main
from pkginit.errors import (
    Diagnostic,
    DiagnosticRenderer,
    InvalidFlagError,
    InvalidNameError,
    Severity,
)
from pkginit.normalize import validate_name

_ALL_OPTIONS = [
    "--name", "geocoder",
    "--description", "Resolves addresses",
    "--keywords", "geo, search",
    "--tests", "y",
]


@pytest.fixture
def workdir(tmp_path):
    """A target directory with no pkginit.toml of its own."""
    d = tmp_path / "work"
    d.mkdir()
    return d


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "new" in result.output
        assert "preview" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_new_help(self, runner):
        result = runner.invoke(main, ["new", "--help"])
        assert result.exit_code == 0
        for flag in ("--name", "--tests", "--dry-run", "--no-git", "--no-install", "--wait"):
            assert flag in result.output

    def test_new_with_options(self, runner, workdir):
        result = runner.invoke(
            main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--no-git", "--no-install"],
        )
        assert result.exit_code == 0, result.output
        assert "created project 'geocoder'" in result.output

        project = workdir / "geocoder"
        assert (project / "README.md").read_text() == "# geocoder\n\nResolves addresses\n"
        pkg = json.loads((project / "package.json").read_text())
        assert pkg["keywords"] == ["geo", "search"]
        assert (project / ".travis.yml").exists()
        assert (project / "test" / "test.js").exists()
        assert (project / ".jshintrc").exists()
        assert (project / ".gitignore").exists()

    def test_new_with_prompts(self, runner, workdir):
        result = runner.invoke(
            main,
            ["new", "-C", str(workdir), "--no-git", "--no-install"],
            input="geocoder\nResolves addresses\ngeo, search\nn\n",
        )
        assert result.exit_code == 0, result.output
        project = workdir / "geocoder"
        pkg = json.loads((project / "package.json").read_text())
        assert pkg["description"] == "Resolves addresses"
        assert "test" not in pkg["scripts"]
        assert not (project / ".travis.yml").exists()
        assert not (project / "test").exists()

    def test_prompt_reasks_on_bad_answers(self, runner, workdir):
        result = runner.invoke(
            main,
            ["new", "-C", str(workdir), "--no-git", "--no-install", "--no-color"],
            input="Bad Name!\ngeocoder\n\n\nmaybe\ny\n",
        )
        assert result.exit_code == 0, result.output
        assert "error[E001]" in result.output
        assert "error[E002]" in result.output
        assert (workdir / "geocoder" / "test" / "test.js").exists()

    def test_bad_name_option(self, runner, workdir):
        result = runner.invoke(
            main, ["new", "--name", "Bad Name!", "--tests", "y", "-C", str(workdir)],
        )
        assert result.exit_code == 1
        assert "E001" in result.output
        assert list(workdir.iterdir()) == []

    def test_bad_tests_option(self, runner, workdir):
        result = runner.invoke(
            main,
            ["new", "--name", "geocoder", "--description", "", "--keywords", "",
             "--tests", "x", "-C", str(workdir)],
        )
        assert result.exit_code == 1
        assert "E002" in result.output
        assert list(workdir.iterdir()) == []

    def test_existing_dir_fails(self, runner, workdir):
        (workdir / "geocoder").mkdir()
        result = runner.invoke(
            main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--no-git", "--no-install"],
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_dry_run_writes_nothing(self, runner, workdir):
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--dry-run"])
        assert result.exit_code == 0
        assert "==> package.json <==" in result.output
        assert "==> test/test.js <==" in result.output
        assert list(workdir.iterdir()) == []

    def test_runs_git_then_npm(self, runner, workdir, fake_tools):
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir)])
        assert result.exit_code == 0, result.output
        assert "ran git init" in result.output
        assert "started npm install in the background" in result.output
        assert fake_tools.commands() == ["/usr/bin/git init", "/usr/bin/npm install"]
        assert fake_tools.calls[1][0] == "popen"

    def test_wait_runs_npm_in_foreground(self, runner, workdir, fake_tools):
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--wait"])
        assert result.exit_code == 0, result.output
        assert "ran npm install" in result.output
        assert [c[0] for c in fake_tools.calls] == ["run", "run"]

    def test_git_failure_stops_before_install(self, runner, workdir, fake_tools):
        fake_tools.returncodes["git"] = 1
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir)])
        assert result.exit_code == 1
        assert "git init failed" in result.output
        assert fake_tools.commands() == ["/usr/bin/git init"]

    def test_config_prefix_and_links(self, runner, workdir):
        (workdir / "pkginit.toml").write_text(
            '[package]\nprefix = "pelias-"\n'
            '[repository]\nurl_template = "https://github.com/pelias/{name}"\n'
        )
        result = runner.invoke(
            main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--no-git", "--no-install"],
        )
        assert result.exit_code == 0, result.output
        pkg = json.loads((workdir / "geocoder" / "package.json").read_text())
        assert pkg["name"] == "pelias-geocoder"
        assert pkg["homepage"] == "https://github.com/pelias/geocoder#readme"

    def test_bad_config(self, runner, workdir):
        (workdir / "pkginit.toml").write_text('[readme]\nstyle = "fancy"\n')
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir)])
        assert result.exit_code == 1
        assert "error:" in result.output

    @pytest.mark.parametrize(
        "toml, message",
        [
            ("[package]\nprefix = 1\n", "package.prefix must be a string"),
            ('package = "x"\n', "[package] must be a table"),
        ],
    )
    def test_mistyped_config(self, runner, workdir, toml, message):
        (workdir / "pkginit.toml").write_text(toml)
        result = runner.invoke(main, ["new", *_ALL_OPTIONS, "-C", str(workdir)])
        assert result.exit_code == 1
        assert "error:" in result.output
        assert message in result.output
        assert not (workdir / "geocoder").exists()

    def test_write_failure_reported(self, runner, workdir, monkeypatch):
        def denied(manifest, files, parent=None):
            raise PermissionError(13, "Permission denied", str(parent))

        monkeypatch.setattr("pkginit.cli.scaffold", denied)
        result = runner.invoke(
            main, ["new", *_ALL_OPTIONS, "-C", str(workdir), "--no-git", "--no-install"],
        )
        assert result.exit_code == 1
        assert "error:" in result.output
        assert "Permission denied" in result.output
        assert not isinstance(result.exception, PermissionError)

    def test_preview(self, runner):
        result = runner.invoke(main, ["preview", *_ALL_OPTIONS])
        assert result.exit_code == 0
        assert "==> README.md <==" in result.output
        assert '"name": "geocoder"' in result.output


# --- Diagnostic rendering ---


class TestDiagnosticRenderer:
    def test_invalid_name_plain(self):
        with pytest.raises(InvalidNameError) as exc_info:
            validate_name("Bad Name!")
        text = DiagnosticRenderer(color=False).render(exc_info.value.diagnostic())
        lines = text.splitlines()
        assert lines[0] == "error[E001]: invalid character ' ' in project name"
        assert lines[1] == "  --> name"
        assert lines[3] == '     | "Bad Name!"'
        assert lines[4] == "     |     ^"
        assert lines[5] == "  = note: Valid name characters: [a-zA-Z0-9._-]"

    def test_no_caret_without_column(self):
        err = InvalidFlagError("x", "unrecognized answer 'x' for tests flag")
        text = DiagnosticRenderer(color=False).render(err.diagnostic())
        assert "^" not in text
        assert "error[E002]" in text
        assert "note: Answer 'y' or 'n'" in text

    def test_color(self):
        diag = Diagnostic(severity=Severity.ERROR, code="E001", message="careful")
        text = DiagnosticRenderer(color=True).render(diag)
        assert "\033[1;31m" in text
        assert "careful" in text

    def test_no_color(self):
        diag = Diagnostic(severity=Severity.ERROR, code="E001", message="bad")
        assert "\033[" not in DiagnosticRenderer(color=False).render(diag)
