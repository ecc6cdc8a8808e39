"""Structured error/warning reporting for resource operations.

Why not exceptions:
- A single operation can report several problems (e.g. a config with two
  missing attributes), and warnings must not abort the operation.
- The CLI renders diagnostics as a table; callers decide whether to stop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""
    attribute: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.attribute}] " if self.attribute else ""
        text = f"{prefix}{self.summary}"
        if self.detail:
            text += f": {self.detail}"
        return text


@dataclass
class Diagnostics:
    """Ordered collection of `Diagnostic` entries."""

    items: list[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_attribute_error(self, attribute: str, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail, attribute))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(Severity.WARNING, summary, detail))

    def append(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self.items.extend(other)

    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity is Severity.ERROR]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
