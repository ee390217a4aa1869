"""Shared pytest fixtures for the pkginit test suite."""

from __future__ import annotations

import subprocess

import pytest
from click.testing import CliRunner

from pkginit import tooling


@pytest.fixture
def runner():
    return CliRunner()


class FakeTools:
    """Records git/npm invocations instead of running them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], dict]] = []
        self.returncodes: dict[str, int] = {}
        self.missing: set[str] = set()

    def which(self, name: str) -> str | None:
        if name in self.missing:
            return None
        return f"/usr/bin/{name}"

    def run(self, cmd, **kwargs):
        self.calls.append(("run", list(cmd), kwargs))
        tool = cmd[0].rsplit("/", 1)[-1]
        code = self.returncodes.get(tool, 0)
        return subprocess.CompletedProcess(
            cmd, code, stdout="", stderr="boom\n" if code else "",
        )

    def popen(self, cmd, **kwargs):
        self.calls.append(("popen", list(cmd), kwargs))
        return object()

    def commands(self) -> list[str]:
        return [" ".join(c[1]) for c in self.calls]


@pytest.fixture
def fake_tools(monkeypatch):
    """Replace git/npm with recorders."""
    fake = FakeTools()
    monkeypatch.setattr(tooling.shutil, "which", fake.which)
    monkeypatch.setattr(tooling.subprocess, "run", fake.run)
    monkeypatch.setattr(tooling.subprocess, "Popen", fake.popen)
    return fake
