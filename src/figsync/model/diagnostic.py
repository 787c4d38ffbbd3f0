"""Diagnostic model: advisory messages tying a style difference to a source range."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from figsync.model.source import SourceRange


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single difference between a linked scope and layer.

    Attributes:
        rule: ``missing-property`` or ``mismatched-property``.
        severity: How serious the issue is.
        message: Text shown to the user, e.g. ``missing font-size: 12px;``.
        range: Where in the stylesheet the message belongs, if known.
        scope_id: Full selector of the linked scope.
        layer_id: Id of the linked layer.
        css_property: The (longhand) CSS property involved.
    """

    rule: str
    severity: Severity
    message: str
    range: SourceRange | None = None
    scope_id: str | None = None
    layer_id: str | None = None
    css_property: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.range is not None:
            location = f" [{self.range}]"
        elif self.scope_id:
            location = f" [scope={self.scope_id}]"
        return f"{self.severity.value}{location}: {self.message}"
