"""Diagnostics for values that could not be normalized."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class ValueIssue:
    """Describes a raw cell that failed numeric parsing."""

    row: Any
    field_name: str
    raw_value: str
    message: str


class MalformedValueError(ValueError):
    """Raised when a run rejects malformed numeric input."""

    def __init__(self, issues: Sequence[ValueIssue]) -> None:
        self.issues = list(issues)
        preview = ", ".join(
            f"{issue.field_name}[{issue.row}]={issue.raw_value!r}"
            for issue in self.issues[:5]
        )
        more = len(self.issues) - 5
        if more > 0:
            preview += f" (+{more} more)"
        super().__init__(f"Malformed numeric values: {preview}")
