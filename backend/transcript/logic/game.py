"""
Game transcript: ruleset configuration plus the rounds played, in order.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from transcript.logic.enums import GameLength, NumPlayers, RedFive
from transcript.logic.round import Round, RoundLabel, SeatScore, validate_result
from transcript.logic.seats import PlayerLocation

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger()

DEFAULT_MAIN_THINKING_SECONDS = 20
DEFAULT_DELAY_THINKING_SECONDS = 5


class GameConfig(BaseModel):
    """
    Ruleset and table metadata for a recorded game.

    Seat names are given relative to the Hero. Optional fields left as None
    were not recorded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_players: NumPlayers = NumPlayers.FOUR
    length: GameLength | None = GameLength.EAST
    main_thinking_time: int | None = Field(default=DEFAULT_MAIN_THINKING_SECONDS, ge=0)
    delay_thinking_time: int | None = Field(default=DEFAULT_DELAY_THINKING_SECONDS, ge=0)
    red_five: RedFive | None = RedFive.THREE
    hero: str = "player1"
    right: str = "player2"
    across: str = "player3"
    left: str = "player4"
    event: str | None = None
    site: str | None = None
    date: datetime | None = None
    result: tuple[SeatScore, ...] | None = None

    check_result = field_validator("result")(validate_result)

    @model_validator(mode="after")
    def _validate_result_size(self) -> GameConfig:
        if self.result is not None and len(self.result) != self.num_players:
            raise ValueError(f"result must list all {int(self.num_players)} players, got {len(self.result)}")
        return self

    def name_of(self, location: PlayerLocation) -> str:
        """Player name seated at `location`."""
        names = {
            PlayerLocation.HERO: self.hero,
            PlayerLocation.RIGHT: self.right,
            PlayerLocation.ACROSS: self.across,
            PlayerLocation.LEFT: self.left,
        }
        return names[location]


class Game(BaseModel):
    """A whole game: its configuration and every round in the order played.

    Repeated rounds (same wind and number) are separate entries.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    config: GameConfig = Field(default_factory=GameConfig)
    rounds: tuple[Round, ...] = ()

    @property
    def labels(self) -> list[RoundLabel]:
        return [r.label for r in self.rounds]

    def append(self, round_: Round) -> Game:
        """Return a new Game with `round_` played after all existing rounds."""
        return self.extend((round_,))

    def extend(self, rounds: Iterable[Round]) -> Game:
        added = tuple(rounds)
        for r in added:
            logger.debug("round recorded", round=r.label, events=len(r.events))
        return self.model_copy(update={"rounds": self.rounds + added})
