"""
Round action variants.

Each action a seat can perform in a round is its own frozen model carrying
only its payload. RoundActionField discriminates them on `type`; consumers
dispatch with isinstance and finish with assert_never so that adding a
variant is caught by the type checker.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, assert_never

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from transcript.logic.enums import ActionType
from transcript.logic.melds import (
    AddedOpenKanMeld,
    ChiiMeld,
    ClosedKanMeld,
    Hand,
    Meld,
    OpenKanMeld,
    PonMeld,
)
from transcript.logic.seats import PlayerLocation, ensure_unique_seats
from transcript.logic.tiles import DrawnTileField, TileField


class SeatHand(BaseModel):
    """Hand revealed by the player at `seat`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    seat: PlayerLocation
    hand: Hand


def _coerce_seat_hands(value: Any) -> Any:  # noqa: ANN401
    # a {seat: hand} mapping is accepted as shorthand for the entry list
    if isinstance(value, Mapping):
        return tuple(SeatHand(seat=seat, hand=hand) for seat, hand in value.items())
    return value


class RoundAction(BaseModel):
    """Base class for all round actions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ActionType


class DrawAction(RoundAction):
    """Tile drawn from the wall, or UNKNOWN_TILE when hidden from the viewer."""

    type: Literal[ActionType.DRAW] = ActionType.DRAW
    tile: DrawnTileField


class DiscardAction(RoundAction):
    type: Literal[ActionType.DISCARD] = ActionType.DISCARD
    tile: TileField


class ChiiAction(RoundAction):
    type: Literal[ActionType.CHII] = ActionType.CHII
    meld: ChiiMeld


class PonAction(RoundAction):
    type: Literal[ActionType.PON] = ActionType.PON
    meld: PonMeld


class ClosedKanAction(RoundAction):
    type: Literal[ActionType.CLOSED_KAN] = ActionType.CLOSED_KAN
    meld: ClosedKanMeld


class OpenKanAction(RoundAction):
    type: Literal[ActionType.OPEN_KAN] = ActionType.OPEN_KAN
    meld: OpenKanMeld


class AddedOpenKanAction(RoundAction):
    type: Literal[ActionType.ADDED_OPEN_KAN] = ActionType.ADDED_OPEN_KAN
    meld: AddedOpenKanMeld


class RiichiAction(RoundAction):
    type: Literal[ActionType.RIICHI] = ActionType.RIICHI


class TsumoAction(RoundAction):
    """Win by self-draw, with the winning hand."""

    type: Literal[ActionType.TSUMO] = ActionType.TSUMO
    hand: Hand


class RonAction(RoundAction):
    """Win off another seat's discard, with the winning hand."""

    type: Literal[ActionType.RON] = ActionType.RON
    hand: Hand


class ExhaustiveAction(RoundAction):
    """
    Exhaustive draw.

    `hands` has one entry per seat that revealed its hand; seats that did
    not reveal are absent rather than mapped to an empty hand.
    """

    type: Literal[ActionType.EXHAUSTIVE] = ActionType.EXHAUSTIVE
    hands: Annotated[tuple[SeatHand, ...], BeforeValidator(_coerce_seat_hands)] = ()

    @field_validator("hands")
    @classmethod
    def _validate_hands(cls, v: tuple[SeatHand, ...]) -> tuple[SeatHand, ...]:
        ensure_unique_seats(entry.seat for entry in v)
        return v

    @property
    def hands_by_seat(self) -> Mapping[PlayerLocation, Hand]:
        """Read-only view of the revealed hands keyed by seat."""
        return MappingProxyType({entry.seat: entry.hand for entry in self.hands})


MeldAction = ChiiAction | PonAction | ClosedKanAction | OpenKanAction | AddedOpenKanAction

AnyRoundAction = (
    DrawAction
    | DiscardAction
    | ChiiAction
    | PonAction
    | ClosedKanAction
    | OpenKanAction
    | AddedOpenKanAction
    | RiichiAction
    | TsumoAction
    | RonAction
    | ExhaustiveAction
)

RoundActionField = Annotated[AnyRoundAction, Field(discriminator="type")]


def action_meld(action: AnyRoundAction) -> Meld | None:
    """Meld formed by the action, if any."""
    if isinstance(action, MeldAction):
        return action.meld
    if isinstance(
        action,
        DrawAction | DiscardAction | RiichiAction | TsumoAction | RonAction | ExhaustiveAction,
    ):
        return None
    assert_never(action)


def revealed_hands(action: AnyRoundAction, subject: PlayerLocation) -> dict[PlayerLocation, Hand]:
    """Hands shown by the action, keyed by their owner."""
    if isinstance(action, TsumoAction | RonAction):
        return {subject: action.hand}
    if isinstance(action, ExhaustiveAction):
        return dict(action.hands_by_seat)
    if isinstance(action, DrawAction | DiscardAction | MeldAction | RiichiAction):
        return {}
    assert_never(action)
