"""Run `git init` and then `npm install` inside a new project.

The install must not start before `git init` has finished: the
``precommit-hook`` dev dependency installs a Git hook and needs the
repository to exist.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


class ToolError(Exception):
    """Raised when an external tool is missing or fails."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(message)


def find_tool(name: str) -> str:
    """Return the full path of *name* on PATH; raises ToolError if missing."""
    path = shutil.which(name)
    if path is None:
        raise ToolError(f"'{name}' not found on PATH")
    return path


def git_init(project_dir: Path, *, timeout: float = 30) -> None:
    """Initialize a Git repository in *project_dir*, blocking until done."""
    git = find_tool("git")
    try:
        result = subprocess.run(
            [git, "init"],
            cwd=project_dir,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ToolError("git init timed out")

    if result.returncode != 0:
        raise ToolError(
            f"git init failed (exit {result.returncode})", stderr=result.stderr,
        )


def npm_install(
    project_dir: Path, *, background: bool = True, timeout: float = 600,
) -> subprocess.Popen | None:
    """Install dependencies in *project_dir*.

    With *background*, npm runs detached with its output discarded and the
    process handle is returned; otherwise this blocks until npm exits.
    """
    npm = find_tool("npm")
    cmd = [npm, "install"]

    if background:
        return subprocess.Popen(
            cmd,
            cwd=project_dir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    try:
        result = subprocess.run(
            cmd,
            cwd=project_dir,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ToolError("npm install timed out")

    if result.returncode != 0:
        raise ToolError(
            f"npm install failed (exit {result.returncode})", stderr=result.stderr,
        )
    return None


@dataclass
class PostInitWorkflow:
    """The two ordered steps that follow writing a project.

    A background install is left running detached after pkginit exits;
    its handle is kept on *installer* for callers that want to wait on it.
    """

    git: bool = True
    install: bool = True
    background: bool = True
    installer: subprocess.Popen | None = field(default=None, init=False, repr=False)

    def run(
        self, project_dir: Path, report: Callable[[str], None] | None = None,
    ) -> list[str]:
        """Run the enabled steps in order. Returns the names of steps started.

        *report* is called with each step name as soon as that step is done
        (or, for a background install, launched).
        """
        steps: list[str] = []
        if self.git:
            git_init(project_dir)
            steps.append("git init")
            if report:
                report("git init")
        if self.install:
            self.installer = npm_install(project_dir, background=self.background)
            steps.append("npm install")
            if report:
                report("npm install")
        return steps
