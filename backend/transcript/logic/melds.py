"""
Immutable meld and hand representation.

Each meld shape is its own frozen model; MeldField discriminates them on
`type`. Structural checks run when a meld is built and raise
InvalidMeldError. Whether the source seat is allowed relative to the
caller is checked where the caller is known (see events.py).
"""

from __future__ import annotations

from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field, model_validator

from transcript.logic.enums import MeldType
from transcript.logic.exceptions import InvalidMeldError
from transcript.logic.seats import PlayerLocation
from transcript.logic.tiles import NumberTile, Tile, TileField, effective_rank, encode_tile, tiles_to_34_array

CHII_SIZE = 3
PON_SIZE = 3
KAN_SIZE = 4


class ChiiMeld(BaseModel):
    """Sequence of three number tiles, one of them claimed from `source`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal[MeldType.CHII] = MeldType.CHII
    tiles: tuple[TileField, TileField, TileField]
    chii_tile: TileField
    source: PlayerLocation

    @model_validator(mode="after")
    def _validate_sequence(self) -> ChiiMeld:
        notation = " ".join(encode_tile(t) for t in self.tiles)
        number_tiles = [t for t in self.tiles if isinstance(t, NumberTile)]
        if len(number_tiles) != CHII_SIZE:
            raise InvalidMeldError(f"chii cannot contain honor tiles: {notation}")
        if len({t.suit for t in number_tiles}) != 1:
            raise InvalidMeldError(f"chii tiles must share one suit: {notation}")
        ranks = sorted(effective_rank(t) for t in number_tiles)
        if ranks != list(range(ranks[0], ranks[0] + CHII_SIZE)):
            raise InvalidMeldError(f"chii tiles must be consecutive: {notation}")
        if self.chii_tile not in self.tiles:
            raise InvalidMeldError(f"chii tile {encode_tile(self.chii_tile)} is not part of {notation}")
        return self


class PonMeld(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal[MeldType.PON] = MeldType.PON
    tile: TileField
    source: PlayerLocation


class OpenKanMeld(BaseModel):
    """Kan formed by claiming a discard against a concealed triplet."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal[MeldType.OPEN_KAN] = MeldType.OPEN_KAN
    tile: TileField
    source: PlayerLocation


class AddedOpenKanMeld(BaseModel):
    """Kan formed by adding a drawn fourth tile to an existing pon from `source`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal[MeldType.ADDED_OPEN_KAN] = MeldType.ADDED_OPEN_KAN
    tile: TileField
    source: PlayerLocation


class ClosedKanMeld(BaseModel):
    """Four copies of `tile` from the caller's own hand. Has no source."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal[MeldType.CLOSED_KAN] = MeldType.CLOSED_KAN
    tile: TileField


Meld = ChiiMeld | PonMeld | OpenKanMeld | AddedOpenKanMeld | ClosedKanMeld
MeldField = Annotated[Meld, Field(discriminator="type")]


def meld_source(meld: Meld) -> PlayerLocation | None:
    """Seat the claimed tile came from; None for a closed kan."""
    if isinstance(meld, ChiiMeld | PonMeld | OpenKanMeld | AddedOpenKanMeld):
        return meld.source
    if isinstance(meld, ClosedKanMeld):
        return None
    assert_never(meld)


def meld_tiles(meld: Meld) -> tuple[Tile, ...]:
    """All tiles making up the meld."""
    if isinstance(meld, ChiiMeld):
        return meld.tiles
    if isinstance(meld, PonMeld):
        return (meld.tile,) * PON_SIZE
    if isinstance(meld, OpenKanMeld | AddedOpenKanMeld | ClosedKanMeld):
        return (meld.tile,) * KAN_SIZE
    assert_never(meld)


class Hand(BaseModel):
    """Concealed tiles (duplicates allowed) plus melds in the order they were formed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tiles: tuple[TileField, ...] = ()
    melds: tuple[MeldField, ...] = ()

    @property
    def is_closed(self) -> bool:
        """True when no tile was claimed from another seat."""
        return all(isinstance(m, ClosedKanMeld) for m in self.melds)

    def all_tiles(self) -> tuple[Tile, ...]:
        """Concealed tiles followed by the tiles of every meld."""
        return self.tiles + tuple(t for meld in self.melds for t in meld_tiles(meld))

    def to_34_array(self, *, include_melds: bool = False) -> list[int]:
        """34-format tile counts, for use with the mahjong library's hand tools."""
        return tiles_to_34_array(self.all_tiles() if include_melds else self.tiles)
