"""Exception types raised by the calculation engine."""

from __future__ import annotations

from typing import Iterable, List


class InvalidInputError(ValueError):
    """A required field is missing, non-numeric, non-finite or out of range.

    Carries one human-readable message per offending field in ``errors``;
    ``str(exc)`` is the combined summary.
    """

    def __init__(self, errors: Iterable[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class InvalidArgumentError(ValueError):
    """Raised by the words converter for negative or non-numeric input."""
