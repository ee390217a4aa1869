"""TOML config loading for pkginit.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from pkginit.errors import ConfigError

CONFIG_FILENAME = "pkginit.toml"
README_STYLES = ("plain", "badges")


@dataclass(frozen=True)
class PackageConfig:
    prefix: str = ""
    version: str = "0.0.0"
    author: str = ""
    license: str = "MIT"


@dataclass(frozen=True)
class RepositoryConfig:
    url_template: str = ""  # e.g. "https://github.com/pelias/{name}"

    @property
    def linked(self) -> bool:
        return bool(self.url_template)


@dataclass(frozen=True)
class ReadmeConfig:
    style: str = "plain"


@dataclass(frozen=True)
class PkgInitConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    readme: ReadmeConfig = field(default_factory=ReadmeConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find pkginit.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> PkgInitConfig:
    """Parse a pkginit.toml file into a PkgInitConfig."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    package = PackageConfig()
    repository = RepositoryConfig()
    readme = ReadmeConfig()

    if "package" in data:
        pkg = _section(path, data, "package")
        package = PackageConfig(
            prefix=_string(path, pkg, "package", "prefix", ""),
            version=_string(path, pkg, "package", "version", "0.0.0"),
            author=_string(path, pkg, "package", "author", ""),
            license=_string(path, pkg, "package", "license", "MIT"),
        )

    if "repository" in data:
        repo = _section(path, data, "repository")
        template = _string(path, repo, "repository", "url_template", "")
        if template and "{name}" not in template:
            raise ConfigError(
                f"{path}: repository.url_template must contain '{{name}}'"
            )
        repository = RepositoryConfig(url_template=template)

    if "readme" in data:
        rdm = _section(path, data, "readme")
        style = _string(path, rdm, "readme", "style", "plain")
        if style not in README_STYLES:
            raise ConfigError(
                f"{path}: readme.style must be one of {', '.join(README_STYLES)}"
                f" (got {style!r})"
            )
        readme = ReadmeConfig(style=style)

    return PkgInitConfig(package=package, repository=repository, readme=readme)


def _section(path: Path, data: dict, name: str) -> dict:
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [{name}] must be a table")
    return section


def _string(path: Path, section: dict, section_name: str, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(
            f"{path}: {section_name}.{key} must be a string"
            f" (got {type(value).__name__})"
        )
    return value


def resolve_config(explicit: Path | None = None, start_path: Path | None = None) -> PkgInitConfig:
    """Load *explicit* if given, else the nearest pkginit.toml, else defaults."""
    if explicit is not None:
        return load_config(explicit)
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return PkgInitConfig()
