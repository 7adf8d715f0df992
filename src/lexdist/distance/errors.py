"""Exceptions raised by the distance engine."""

from __future__ import annotations


class LanguageNotFoundError(KeyError):
    """A language code is not part of the matrix."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Language code not found in matrix: {self.code}"


class BuildError(RuntimeError):
    """The matrix build could not be set up or orchestrated."""


class BuildCancelledError(Exception):
    """The matrix build was cancelled before completion."""
