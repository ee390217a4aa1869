"""Write a rendered project to disk."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pkginit.manifest import GeneratedFileSet, ProjectManifest


def scaffold(
    manifest: ProjectManifest, files: GeneratedFileSet, parent: Path | None = None,
) -> Path:
    """Create the project directory and write *files* into it. Returns the path."""
    base = parent or Path.cwd()
    project_dir = base / manifest.directory

    if project_dir.exists():
        raise FileExistsError(f"Directory '{manifest.directory}' already exists")

    # Reject paths that would escape the project directory before touching disk
    relative = {_checked_path(p): text for p, text in files.items()}

    project_dir.mkdir(parents=True)
    for path, text in relative.items():
        target = project_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8", newline="\n")

    return project_dir


def _checked_path(path: str) -> Path:
    pure = PurePosixPath(path)
    if pure.is_absolute() or ".." in pure.parts or not pure.parts:
        raise ValueError(f"refusing to write outside the project: {path!r}")
    return Path(*pure.parts)
