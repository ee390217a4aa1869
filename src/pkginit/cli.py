"""pkginit CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import click

from pkginit import __version__
from pkginit.config import PkgInitConfig, resolve_config
from pkginit.errors import ConfigError, DiagnosticRenderer, InputError
from pkginit.manifest import GeneratedFileSet, ProjectInput, ProjectManifest
from pkginit.normalize import normalize, parse_test_flag, validate_name
from pkginit.project import scaffold
from pkginit.render import render_files
from pkginit.tooling import PostInitWorkflow, ToolError


def _ask(
    label: str,
    given: str | None,
    renderer: DiagnosticRenderer,
    *,
    check: Callable[[str], object] | None = None,
    default: str | None = None,
) -> str:
    """Use *given* if set, else prompt until *check* accepts the answer."""
    if given is not None:
        if check is not None:
            try:
                check(given)
            except InputError as e:
                click.echo(renderer.render(e.diagnostic()), err=True)
                raise SystemExit(1)
        return given

    while True:
        answer = click.prompt(label, default=default, show_default=False)
        if check is None:
            return answer
        try:
            check(answer)
            return answer
        except InputError as e:
            click.echo(renderer.render(e.diagnostic()), err=True)


def _collect(
    name: str | None,
    description: str | None,
    keywords: str | None,
    tests: str | None,
    renderer: DiagnosticRenderer,
) -> ProjectInput:
    return ProjectInput(
        name=_ask("name", name, renderer, check=validate_name),
        description=_ask("description", description, renderer, default=""),
        keywords_raw=_ask(
            "keywords (comma-separated)", keywords, renderer, default="",
        ),
        init_tests=_ask(
            "Initialize unit-tests? [yn]", tests, renderer, check=parse_test_flag,
        ),
    )


def _load(config_path: str | None, directory: str) -> PkgInitConfig:
    try:
        return resolve_config(
            Path(config_path) if config_path else None, start_path=Path(directory),
        )
    except ConfigError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


def _echo_files(files: GeneratedFileSet) -> None:
    for path, text in files.items():
        click.echo(f"==> {path} <==")
        click.echo(text, nl=False)


def _summary(manifest: ProjectManifest) -> str:
    parts = [manifest.name]
    if manifest.keywords:
        parts.append(f"keywords: {', '.join(manifest.keywords)}")
    parts.append("with tests" if manifest.include_tests else "without tests")
    return " — ".join(parts)


_input_options = [
    click.option("--name", help="Project name ([a-zA-Z0-9._-])."),
    click.option("--description", help="One-sentence project description."),
    click.option("--keywords", help="Comma-separated list of keywords."),
    click.option("--tests", help="Initialize unit tests? (y/n)"),
    click.option(
        "--config", "config_path", type=click.Path(exists=True, dir_okay=False),
        help="Path to pkginit.toml (default: nearest one above the target directory).",
    ),
    click.option("--no-color", is_flag=True, help="Disable colored diagnostics."),
]


def input_options(func: Callable) -> Callable:
    for option in reversed(_input_options):
        func = option(func)
    return func


@click.group()
@click.version_option(__version__, prog_name="pkginit")
def main() -> None:
    """Scaffold new npm projects."""


@main.command()
@input_options
@click.option(
    "--directory", "-C", default=".", type=click.Path(exists=True, file_okay=False),
    help="Create the project inside this directory.",
)
@click.option("--dry-run", is_flag=True, help="Print the files instead of writing them.")
@click.option("--no-git", is_flag=True, help="Skip `git init`.")
@click.option("--no-install", is_flag=True, help="Skip `npm install`.")
@click.option("--wait", is_flag=True, help="Run `npm install` in the foreground.")
def new(
    name: str | None,
    description: str | None,
    keywords: str | None,
    tests: str | None,
    config_path: str | None,
    no_color: bool,
    directory: str,
    dry_run: bool,
    no_git: bool,
    no_install: bool,
    wait: bool,
) -> None:
    """Create a new project, prompting for anything not given as an option."""
    renderer = DiagnosticRenderer(color=not no_color)
    config = _load(config_path, directory)
    project_input = _collect(name, description, keywords, tests, renderer)

    manifest = normalize(project_input, config)
    files = render_files(manifest, config)

    if dry_run:
        _echo_files(files)
        return

    try:
        project_dir = scaffold(manifest, files, Path(directory))
    except (OSError, ValueError) as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"created project '{manifest.name}' at {project_dir}")
    click.echo(_summary(manifest))

    workflow = PostInitWorkflow(git=not no_git, install=not no_install, background=not wait)

    def report(step: str) -> None:
        if step == "npm install" and not wait:
            click.echo(f"started {step} in the background")
        else:
            click.echo(f"ran {step}")

    try:
        workflow.run(project_dir, report)
    except ToolError as e:
        click.echo(f"error: {e}", err=True)
        if e.stderr:
            click.echo(e.stderr.rstrip(), err=True)
        raise SystemExit(1)


@main.command()
@input_options
def preview(
    name: str | None,
    description: str | None,
    keywords: str | None,
    tests: str | None,
    config_path: str | None,
    no_color: bool,
) -> None:
    """Print the files a new project would get, without writing anything."""
    renderer = DiagnosticRenderer(color=not no_color)
    config = _load(config_path, ".")
    project_input = _collect(name, description, keywords, tests, renderer)
    _echo_files(render_files(normalize(project_input, config), config))
