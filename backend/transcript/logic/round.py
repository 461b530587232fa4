"""
Round transcript: configuration plus the chronological action log.

Round is frozen. append() and extend() return a new Round with the events
added at the end; the receiver is never modified and recorded events are
never reordered or removed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from transcript.logic.enums import FINISHING_ACTIONS, Wind
from transcript.logic.events import RoundEvent
from transcript.logic.melds import Hand
from transcript.logic.seats import PlayerLocation, ensure_unique_seats
from transcript.logic.tiles import TileField

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger()

MIN_ROUND_NUMBER = 1
MAX_ROUND_NUMBER = 4


class SeatScore(BaseModel):
    """Final score of one seat."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    seat: PlayerLocation
    score: int


def validate_result(v: tuple[SeatScore, ...] | None) -> tuple[SeatScore, ...] | None:
    """Results list each seat once, sorted from most to least points."""
    if v is None:
        return v
    ensure_unique_seats((entry.seat for entry in v), "result")
    scores = [entry.score for entry in v]
    if scores != sorted(scores, reverse=True):
        raise ValueError(f"result must be sorted from most to least points, got {scores}")
    return v


class RoundLabel(NamedTuple):
    """Identity of a round within a game, e.g. East 2, repeat 1."""

    round_wind: Wind
    round_number: int
    round_repeat: int


class RoundConfig(BaseModel):
    """Setup of a single hand as seen from the Hero's seat."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    round_wind: Wind = Wind.EAST
    round_number: int = Field(default=MIN_ROUND_NUMBER, ge=MIN_ROUND_NUMBER, le=MAX_ROUND_NUMBER)
    round_repeat: int = Field(default=0, ge=0)
    hero_location: Wind
    initial_hero_hand: Hand = Field(default_factory=Hand)
    dora: tuple[TileField, ...] = ()
    ura_dora: tuple[TileField, ...] = ()
    result: tuple[SeatScore, ...] | None = None

    check_result = field_validator("result")(validate_result)


class Round(BaseModel):
    """A single hand: its configuration and every event in the order it happened."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    config: RoundConfig
    events: tuple[RoundEvent, ...] = ()

    @property
    def label(self) -> RoundLabel:
        return RoundLabel(
            round_wind=self.config.round_wind,
            round_number=self.config.round_number,
            round_repeat=self.config.round_repeat,
        )

    @property
    def is_finished(self) -> bool:
        """True once a win or an exhaustive draw has been recorded."""
        return any(event.action.type in FINISHING_ACTIONS for event in self.events)

    def append(self, event: RoundEvent) -> Round:
        """Return a new Round with `event` recorded after all existing events."""
        return self.extend((event,))

    def extend(self, events: Iterable[RoundEvent]) -> Round:
        """Return a new Round with `events` recorded, in order, after all existing events."""
        added = tuple(events)
        logger.debug("round events appended", round=self.label, count=len(added), total=len(self.events) + len(added))
        return self.model_copy(update={"events": self.events + added})
