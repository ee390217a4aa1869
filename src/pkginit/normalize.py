"""Validate raw answers and build a ProjectManifest."""

from __future__ import annotations

import string
from typing import Iterable

from pkginit.config import PkgInitConfig
from pkginit.errors import InvalidFlagError, InvalidNameError
from pkginit.manifest import ProjectInput, ProjectManifest

NAME_CHARS = frozenset(string.ascii_letters + string.digits + "._-")


def validate_name(raw: str) -> str:
    """Return *raw* unchanged if it is a valid project name.

    Names are non-empty and limited to ``[A-Za-z0-9._-]``. Nothing is
    trimmed or case-folded; invalid input raises InvalidNameError.
    """
    if not raw:
        raise InvalidNameError(raw, "project name must not be empty")
    for i, ch in enumerate(raw):
        if ch not in NAME_CHARS:
            raise InvalidNameError(
                raw, f"invalid character {ch!r} in project name", column=i,
            )
    return raw


def parse_keywords(raw: str) -> list[str]:
    """Split a comma-separated keyword string, trimming and dropping empties."""
    return [kw for kw in (token.strip() for token in raw.split(",")) if kw]


def parse_test_flag(raw: str | bool) -> bool:
    """Parse a y/n answer (case-insensitive)."""
    if isinstance(raw, bool):
        return raw
    answer = raw.lower()
    if answer == "y":
        return True
    if answer == "n":
        return False
    raise InvalidFlagError(raw, f"unrecognized answer {raw!r} for tests flag")


def build_manifest(
    name: str,
    description: str,
    keywords: Iterable[str],
    include_tests: bool,
    config: PkgInitConfig | None = None,
) -> ProjectManifest:
    """Assemble a ProjectManifest from already-validated fields."""
    config = config or PkgInitConfig()

    repository_url = bugs_url = homepage_url = None
    if config.repository.linked:
        repository_url = config.repository.url_template.replace("{name}", name)
        bugs_url = f"{repository_url}/issues"
        homepage_url = f"{repository_url}#readme"

    return ProjectManifest(
        name=config.package.prefix + name,
        directory=name,
        description=description,
        keywords=tuple(keywords),
        include_tests=include_tests,
        repository_url=repository_url,
        bugs_url=bugs_url,
        homepage_url=homepage_url,
    )


def normalize(
    project_input: ProjectInput, config: PkgInitConfig | None = None,
) -> ProjectManifest:
    """Validate every field of *project_input*, name first."""
    name = validate_name(project_input.name)
    keywords = parse_keywords(project_input.keywords_raw)
    include_tests = parse_test_flag(project_input.init_tests)
    return build_manifest(
        name, project_input.description, keywords, include_tests, config,
    )
