"""Exceptions raised by the profanity engine."""
from __future__ import annotations


class ProfanityError(ValueError):
    """Base class for engine errors."""


class InvalidInputError(ProfanityError):
    """Raised when no languages are available to build a pattern."""


class UnknownLanguageError(ProfanityError):
    def __init__(self, language: str) -> None:
        super().__init__(f'Invalid language: "{language}"')
        self.language = language


class InvalidCensorTypeError(ProfanityError):
    def __init__(self, censor_type: object) -> None:
        super().__init__(f'Invalid replacement type: "{censor_type}"')
        self.censor_type = censor_type
