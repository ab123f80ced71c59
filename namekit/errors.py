#!/usr/bin/env python3
"""
NameKit Errors
==============
Every failure raised by the generation pipeline derives from NameKitError.

None of these are retried by the pipeline itself. The generation loop already
retries rejected candidates internally, so a RetryLimitExceededError means the
configuration cannot currently produce an acceptable name.
"""


class NameKitError(Exception):
    """Base class for all NameKit errors."""


class EmptyPoolError(NameKitError, ValueError):
    """A symbol was requested from a pool that has nothing to draw."""


class EmptySyllableError(NameKitError):
    """A syllable composer produced no characters and empty output is not allowed."""


class MissingGeneratorError(NameKitError):
    """No syllable composer is configured for a role the chosen name size needs."""


class RetryLimitExceededError(NameKitError):
    """The generation loop ran out of attempts without an accepted name."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a valid name after {attempts} attempts.")


class SerializationError(NameKitError, ValueError):
    """A generator record is malformed or contains something that cannot be persisted."""


class SyllableSetError(NameKitError):
    """A syllable set could not collect enough distinct syllables from its composer."""
