"""Converter error hierarchy."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for converter-specific exceptions."""


class InputError(ReportError):
    """Raised when the source file or its text is unusable."""


class EmptyInputError(InputError):
    """Raised when the delimited text yields no rows (not even a header)."""


class PipelineError(ReportError):
    """Raised for unexpected failures while formatting or writing the workbook."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


__all__ = [
    "ReportError",
    "InputError",
    "EmptyInputError",
    "PipelineError",
]
