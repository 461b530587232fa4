"""Round events: who did what, to whom.

A RoundEvent pairs a subject seat with one RoundAction and, for actions that
take a tile from another seat, the target seat. The event validates itself
on construction:

- transfer actions (chii, pon, open kan, added open kan, ron) need a target
  other than the subject; every other action must not have one;
- a meld's source must be the event target, never the subject, and a chii
  source must be one of the seats allowed by EventRules;
- melds inside revealed hands follow the same source rules for their owner;
- the Hero always sees its own draws.

Violations raise InvalidEventError or InvalidMeldError.

Rules are read from the pydantic validation context under the "rules" key
(see build_event); constructing RoundEvent directly uses DEFAULT_RULES.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator

from transcript.logic.actions import (
    AnyRoundAction,
    DrawAction,
    RoundActionField,
    action_meld,
    revealed_hands,
)
from transcript.logic.enums import TRANSFER_ACTIONS
from transcript.logic.exceptions import InvalidEventError, InvalidMeldError
from transcript.logic.melds import ChiiMeld, Hand, Meld, meld_source
from transcript.logic.seats import PlayerLocation, relative_to
from transcript.logic.tiles import UnknownTile

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = structlog.get_logger()

RULES_CONTEXT_KEY = "rules"


class EventRules(BaseModel):
    """
    Ruleset-dependent structural checks.

    chii_sources: seats, relative to the caller, whose discard may be
    claimed for a chii. Standard rules allow only the seat on the left.
    """

    model_config = ConfigDict(frozen=True)

    chii_sources: frozenset[PlayerLocation] = frozenset({PlayerLocation.LEFT})

    @field_validator("chii_sources")
    @classmethod
    def _validate_chii_sources(cls, v: frozenset[PlayerLocation]) -> frozenset[PlayerLocation]:
        if not v:
            raise ValueError("chii_sources must not be empty")
        if PlayerLocation.HERO in v:
            raise ValueError("chii_sources cannot include the caller's own seat")
        return v


DEFAULT_RULES = EventRules()


def _rules_from_context(context: Mapping[str, Any] | None) -> EventRules:
    if context is None:
        return DEFAULT_RULES
    return context.get(RULES_CONTEXT_KEY) or DEFAULT_RULES


def check_meld_source(meld: Meld, owner: PlayerLocation, rules: EventRules = DEFAULT_RULES) -> None:
    """Raise InvalidMeldError if `owner` could not have claimed the meld's tile from its source."""
    source = meld_source(meld)
    if source is None:
        return
    if source == owner:
        raise InvalidMeldError(f"{meld.type.value} by {owner.name} cannot claim its own tile")
    if isinstance(meld, ChiiMeld) and relative_to(owner, source) not in rules.chii_sources:
        raise InvalidMeldError(
            f"chii by {owner.name} cannot claim from {source.name} "
            f"({relative_to(owner, source).name} of the caller)",
        )


def check_hand_owner(hand: Hand, owner: PlayerLocation, rules: EventRules = DEFAULT_RULES) -> None:
    for meld in hand.melds:
        check_meld_source(meld, owner, rules)


class RoundEvent(BaseModel):
    """One entry of a round's action log."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    subject: PlayerLocation
    action: RoundActionField
    target: PlayerLocation | None = None

    @model_validator(mode="after")
    def _validate_event(self, info: ValidationInfo) -> RoundEvent:
        rules = _rules_from_context(info.context)
        action_type = self.action.type

        if action_type in TRANSFER_ACTIONS:
            if self.target is None:
                raise InvalidEventError(f"{action_type.value} by {self.subject.name} requires a target")
            if self.target == self.subject:
                raise InvalidEventError(f"{action_type.value} by {self.subject.name} cannot target itself")
        elif self.target is not None:
            raise InvalidEventError(f"{action_type.value} cannot have a target, got {self.target.name}")

        meld = action_meld(self.action)
        if meld is not None:
            check_meld_source(meld, self.subject, rules)
            source = meld_source(meld)
            if source is not None and source != self.target:
                raise InvalidMeldError(
                    f"{meld.type.value} source {source.name} does not match event target {self.target.name}",
                )

        for owner, hand in revealed_hands(self.action, self.subject).items():
            check_hand_owner(hand, owner, rules)

        if (
            isinstance(self.action, DrawAction)
            and isinstance(self.action.tile, UnknownTile)
            and self.subject == PlayerLocation.HERO
        ):
            raise InvalidEventError("the Hero's own draw cannot be unknown")

        return self


def build_event(
    subject: PlayerLocation,
    action: AnyRoundAction,
    target: PlayerLocation | None = None,
    *,
    rules: EventRules | None = None,
) -> RoundEvent:
    """Assemble and validate a RoundEvent under the given rules."""
    try:
        return RoundEvent.model_validate(
            {"subject": subject, "action": action, "target": target},
            context={RULES_CONTEXT_KEY: rules or DEFAULT_RULES},
        )
    except InvalidEventError as exc:
        logger.warning(
            "rejected round event",
            subject=subject,
            action=action.type,
            target=target,
            reason=str(exc),
        )
        raise
