from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


class InvalidInputError(ValueError):
    """A calculation was called with an argument outside its contract."""

    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field = field_name
        self.message = message


@dataclass
class ValidationReport:
    """
    Outcome of a soft validator.

    ``errors`` block calculation; ``warnings`` flag unusual but computable
    inputs and are shown alongside the result.
    """

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return self.errors + self.warnings
