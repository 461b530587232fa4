"""Tests for the transcript exception hierarchy."""

import pytest

from transcript.logic.exceptions import (
    InvalidEventError,
    InvalidHonorNumberError,
    InvalidMeldError,
    InvalidSuitError,
    NotANumberError,
    TileDecodeError,
    TileErrorKind,
    TranscriptError,
    WrongLengthError,
)


class TestTileDecodeErrors:
    @pytest.mark.parametrize(
        "error_cls, kind",
        [
            (WrongLengthError, TileErrorKind.WRONG_LENGTH),
            (NotANumberError, TileErrorKind.NOT_A_NUMBER),
            (InvalidHonorNumberError, TileErrorKind.INVALID_HONOR_NUMBER),
            (InvalidSuitError, TileErrorKind.INVALID_SUIT),
        ],
    )
    def test_kind_and_base(self, error_cls, kind):
        err = error_cls("9q")
        assert err.kind == kind
        assert err.text == "9q"
        assert isinstance(err, TileDecodeError)
        assert isinstance(err, TranscriptError)

    def test_message_format(self):
        assert str(InvalidHonorNumberError("8z")) == "invalid number for honor tile: '8z'"

    def test_not_value_errors(self):
        assert not issubclass(TileDecodeError, ValueError)
        assert not issubclass(InvalidEventError, ValueError)


class TestEventErrors:
    def test_meld_error_is_event_error(self):
        assert issubclass(InvalidMeldError, InvalidEventError)
        assert issubclass(InvalidEventError, TranscriptError)
