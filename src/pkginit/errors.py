"""Input errors and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass
class Diagnostic:
    """A single diagnostic about one input field."""

    severity: Severity
    code: str
    message: str
    location: str = ""
    value: str | None = None
    column: int | None = None  # 0-indexed offending character in value
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        color = _COLORS[diag.severity]

        # Header: error[E001]: message
        lines.append(
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        if diag.location:
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {diag.location}")

        if diag.value is not None:
            quoted = f'"{diag.value}"'
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)} {quoted}")

            # Caret under the offending character (+1 for the opening quote)
            if diag.column is not None:
                padding = " " * (diag.column + 1)
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}^{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class InputError(ValueError):
    """A user-supplied field failed validation."""

    code = "E000"
    field = ""
    expected = ""

    def __init__(self, value: str, message: str, *, column: int | None = None) -> None:
        self.value = value
        self.column = column
        super().__init__(message)

    def diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=str(self),
            location=self.field,
            value=self.value,
            column=self.column,
            notes=[self.expected] if self.expected else [],
        )


class InvalidNameError(InputError):
    """Raised when a project name is empty or has disallowed characters."""

    code = "E001"
    field = "name"
    expected = "Valid name characters: [a-zA-Z0-9._-]"


class InvalidFlagError(InputError):
    """Raised when the tests flag is not a y/n answer."""

    code = "E002"
    field = "tests"
    expected = "Answer 'y' or 'n' (case-insensitive)"


class ConfigError(Exception):
    """Raised when pkginit.toml is malformed."""
