"""Typed domain exceptions for malformed transcript values.

Every failure raised by the transcript model is a subclass of
TranscriptError. None of them derive from ValueError, so pydantic lets them
propagate unchanged out of model validators instead of folding them into a
ValidationError; callers can catch the precise category they care about.
"""

from enum import StrEnum


class TranscriptError(Exception):
    """Base exception for malformed transcript values."""


class TileErrorKind(StrEnum):
    """Reasons a tile notation can be rejected."""

    WRONG_LENGTH = "wrong_length"
    NOT_A_NUMBER = "not_a_number"
    INVALID_HONOR_NUMBER = "invalid_honor_number"
    INVALID_SUIT = "invalid_suit"


class TileDecodeError(TranscriptError):
    """Tile notation could not be decoded.

    Attributes:
        text: The rejected input.
        kind: Which rule of the notation grammar it broke.

    """

    kind: TileErrorKind
    reason: str

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"{self.reason}: {text!r}")


class WrongLengthError(TileDecodeError):
    """Notation is not exactly two characters long."""

    kind = TileErrorKind.WRONG_LENGTH
    reason = "invalid number of characters"


class NotANumberError(TileDecodeError):
    """First character of the notation is not a digit."""

    kind = TileErrorKind.NOT_A_NUMBER
    reason = "first character is not a number"


class InvalidHonorNumberError(TileDecodeError):
    """Honor suit with a digit outside 1-7."""

    kind = TileErrorKind.INVALID_HONOR_NUMBER
    reason = "invalid number for honor tile"


class InvalidSuitError(TileDecodeError):
    """Suit character is not one of m, p, s, z."""

    kind = TileErrorKind.INVALID_SUIT
    reason = "invalid suit"


class InvalidEventError(TranscriptError):
    """Round event is structurally malformed (target, source or payload)."""


class InvalidMeldError(InvalidEventError):
    """Meld shape is malformed (non-sequential chii, wrong source, etc.)."""
