"""
Tile values and the two-character tile notation.

Notation: ``<digit><suit>``. Suits ``m`` (characters), ``p`` (dots) and
``s`` (bamboo) take digits 0-9, where 0 is the red five of the suit.
Suit ``z`` (honors) takes digits 1-7:

    1z East    2z South    3z West    4z North
    5z White   6z Green    7z Red

Every valid string decodes to exactly one tile and every tile encodes to
exactly one string, so decode_tile(encode_tile(t)) == t and
encode_tile(decode_tile(s)) == s.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING, Annotated, Any, assert_never

from mahjong.tile import TilesConverter
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator

from transcript.logic.enums import NUMBER_SUITS, Dragon, Suit, Wind
from transcript.logic.exceptions import (
    InvalidHonorNumberError,
    InvalidSuitError,
    NotANumberError,
    TileDecodeError,
    WrongLengthError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

TILE_TEXT_LENGTH = 2
RED_FIVE_RANK = 0
FIVE_RANK = 5

# tile ranges in 34-format (each unique tile type), as used by the mahjong library
MAN_34_START = 0
PIN_34_START = 9
SOU_34_START = 18
HONOR_34_START = 27


class NumberTile(BaseModel):
    """Suited tile. Rank 0 is the red five."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    suit: Suit
    rank: int = Field(ge=0, le=9)

    @field_validator("suit")
    @classmethod
    def _validate_suit(cls, v: Suit) -> Suit:
        if v not in NUMBER_SUITS:
            raise ValueError(f"number tile suit must be one of m, p, s, got {v.value!r}")
        return v

    def __str__(self) -> str:
        return encode_tile(self)


class WindTile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    wind: Wind

    def __str__(self) -> str:
        return encode_tile(self)


class DragonTile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    dragon: Dragon

    def __str__(self) -> str:
        return encode_tile(self)


HonorTile = WindTile | DragonTile
Tile = NumberTile | WindTile | DragonTile


class UnknownTile(BaseModel):
    """Placeholder for a tile the transcript does not reveal to the viewer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return UNKNOWN_TILE_TEXT


UNKNOWN_TILE = UnknownTile()
UNKNOWN_TILE_TEXT = "unknown"

_WIND_NUMBERS: dict[Wind, int] = {
    Wind.EAST: 1,
    Wind.SOUTH: 2,
    Wind.WEST: 3,
    Wind.NORTH: 4,
}

_DRAGON_NUMBERS: dict[Dragon, int] = {
    Dragon.WHITE: 5,
    Dragon.GREEN: 6,
    Dragon.RED: 7,
}

_HONORS_BY_NUMBER: dict[int, HonorTile] = {
    **{number: WindTile(wind=wind) for wind, number in _WIND_NUMBERS.items()},
    **{number: DragonTile(dragon=dragon) for dragon, number in _DRAGON_NUMBERS.items()},
}

_NUMBER_SUIT_CHARS = frozenset(suit.value for suit in NUMBER_SUITS)


def decode_tile(text: str) -> Tile:
    """
    Decode two-character tile notation into a tile.

    Raises a TileDecodeError subclass naming the first rule the text breaks:
    length, then digit, then honor number, then suit.
    """
    if len(text) != TILE_TEXT_LENGTH:
        raise WrongLengthError(text)
    digit, suit_char = text
    # str.isdigit() accepts non-ASCII digits such as "²"
    if digit not in string.digits:
        raise NotANumberError(text)
    number = int(digit)
    if suit_char == Suit.HONOR:
        honor = _HONORS_BY_NUMBER.get(number)
        if honor is None:
            raise InvalidHonorNumberError(text)
        return honor
    if suit_char not in _NUMBER_SUIT_CHARS:
        raise InvalidSuitError(text)
    return NumberTile(suit=Suit(suit_char), rank=number)


def encode_tile(tile: Tile) -> str:
    """Encode a tile as its canonical two-character notation."""
    return f"{tile_number(tile)}{tile_suit(tile).value}"


def decode_tiles(text: str) -> tuple[Tile, ...]:
    """Decode a whitespace-separated list of tile notations."""
    return tuple(decode_tile(part) for part in text.split())


def encode_tiles(tiles: Iterable[Tile]) -> str:
    return " ".join(encode_tile(tile) for tile in tiles)


def tile_number(tile: Tile) -> int:
    """
    Number of the tile in the notation.

    Number tiles give their rank (0 for a red five). Honor ordinals are
    looked up from the variant: winds 1-4, dragons 5-7.
    """
    if isinstance(tile, NumberTile):
        return tile.rank
    if isinstance(tile, WindTile):
        return _WIND_NUMBERS[tile.wind]
    if isinstance(tile, DragonTile):
        return _DRAGON_NUMBERS[tile.dragon]
    assert_never(tile)


def tile_suit(tile: Tile) -> Suit:
    if isinstance(tile, NumberTile):
        return tile.suit
    if isinstance(tile, WindTile | DragonTile):
        return Suit.HONOR
    assert_never(tile)


def is_honor(tile: Tile) -> bool:
    return isinstance(tile, WindTile | DragonTile)


def is_number(tile: Tile) -> bool:
    return isinstance(tile, NumberTile)


def is_red_five(tile: Tile) -> bool:
    return isinstance(tile, NumberTile) and tile.rank == RED_FIVE_RANK


def effective_rank(tile: NumberTile) -> int:
    """Rank used for sequences and tile identity: a red five counts as 5."""
    return FIVE_RANK if tile.rank == RED_FIVE_RANK else tile.rank


def is_terminal(tile: Tile) -> bool:
    """
    Check if tile is a terminal (1 or 9 of any suit).
    """
    return isinstance(tile, NumberTile) and effective_rank(tile) in (1, 9)


_SUIT_34_START: dict[Suit, int] = {
    Suit.MAN: MAN_34_START,
    Suit.PIN: PIN_34_START,
    Suit.SOU: SOU_34_START,
}


def tile_to_34(tile: Tile) -> int:
    """
    Convert a tile to its 34-format index (0-33).

    Red fives share the index of the plain five.
    """
    if isinstance(tile, NumberTile):
        return _SUIT_34_START[tile.suit] + effective_rank(tile) - 1
    return HONOR_34_START + tile_number(tile) - 1


def tiles_to_34_array(tiles: Iterable[Tile]) -> list[int]:
    """
    Convert tiles to a 34-array (tile counts) via the mahjong library.

    Red fives are counted as plain fives.
    """
    digits: dict[Suit, list[str]] = {suit: [] for suit in Suit}
    for tile in tiles:
        number = effective_rank(tile) if isinstance(tile, NumberTile) else tile_number(tile)
        digits[tile_suit(tile)].append(str(number))
    return TilesConverter.string_to_34_array(
        man="".join(digits[Suit.MAN]),
        pin="".join(digits[Suit.PIN]),
        sou="".join(digits[Suit.SOU]),
        honors="".join(digits[Suit.HONOR]),
    )


def _coerce_tile(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, str):
        try:
            return decode_tile(value)
        except TileDecodeError as exc:
            raise ValueError(str(exc)) from exc
    return value


def _coerce_drawn_tile(value: Any) -> Any:  # noqa: ANN401
    if value == UNKNOWN_TILE_TEXT:
        return UNKNOWN_TILE
    return _coerce_tile(value)


def _encode_drawn_tile(value: Tile | UnknownTile) -> str:
    if isinstance(value, UnknownTile):
        return UNKNOWN_TILE_TEXT
    return encode_tile(value)


# Model fields that accept a Tile or its notation and serialize to the notation.
TileField = Annotated[Tile, BeforeValidator(_coerce_tile), PlainSerializer(encode_tile, return_type=str)]
DrawnTileField = Annotated[
    Tile | UnknownTile,
    BeforeValidator(_coerce_drawn_tile),
    PlainSerializer(_encode_drawn_tile, return_type=str),
]
