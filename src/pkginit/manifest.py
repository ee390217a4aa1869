"""Project input and manifest records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class ProjectInput:
    """Raw answers collected from the user."""

    name: str
    description: str = ""
    keywords_raw: str = ""
    init_tests: str | bool = "n"


@dataclass(frozen=True)
class ProjectManifest:
    """Normalized project metadata. Optional URL fields are None when unlinked."""

    name: str
    directory: str
    description: str
    keywords: tuple[str, ...]
    include_tests: bool
    repository_url: str | None = None
    bugs_url: str | None = None
    homepage_url: str | None = None


# Relative POSIX path -> file text
GeneratedFileSet = Mapping[str, str]
