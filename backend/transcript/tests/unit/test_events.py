"""
Unit tests for round actions and round event validation.
"""

import logging

import pytest
from pydantic import ValidationError

from transcript.logic.actions import (
    AddedOpenKanAction,
    ChiiAction,
    ClosedKanAction,
    DiscardAction,
    DrawAction,
    ExhaustiveAction,
    OpenKanAction,
    PonAction,
    RiichiAction,
    RonAction,
    SeatHand,
    TsumoAction,
    action_meld,
)
from transcript.logic.enums import ActionType
from transcript.logic.events import DEFAULT_RULES, EventRules, RoundEvent, build_event
from transcript.logic.exceptions import InvalidEventError, InvalidMeldError
from transcript.logic.melds import AddedOpenKanMeld, ChiiMeld, ClosedKanMeld, Hand, OpenKanMeld, PonMeld
from transcript.logic.seats import PlayerLocation
from transcript.logic.tiles import UNKNOWN_TILE, UnknownTile, decode_tiles
from transcript.tests.conftest import create_hand, t

HERO = PlayerLocation.HERO
RIGHT = PlayerLocation.RIGHT
ACROSS = PlayerLocation.ACROSS
LEFT = PlayerLocation.LEFT


def _chii(source: PlayerLocation, tiles: str = "3m 4m 5m", chii_tile: str = "4m") -> ChiiAction:
    return ChiiAction(meld=ChiiMeld(tiles=decode_tiles(tiles), chii_tile=t(chii_tile), source=source))


class TestTargets:
    @pytest.mark.parametrize(
        "action",
        [
            DrawAction(tile=t("1m")),
            DiscardAction(tile=t("1m")),
            ClosedKanAction(meld=ClosedKanMeld(tile=t("1m"))),
            RiichiAction(),
            TsumoAction(hand=create_hand("1m 1m")),
            ExhaustiveAction(),
        ],
    )
    def test_self_actions_reject_target(self, action):
        RoundEvent(subject=HERO, action=action)
        with pytest.raises(InvalidEventError, match="cannot have a target"):
            RoundEvent(subject=HERO, action=action, target=ACROSS)

    @pytest.mark.parametrize(
        "action",
        [
            _chii(LEFT),
            PonAction(meld=PonMeld(tile=t("1z"), source=ACROSS)),
            OpenKanAction(meld=OpenKanMeld(tile=t("1z"), source=ACROSS)),
            AddedOpenKanAction(meld=AddedOpenKanMeld(tile=t("1z"), source=ACROSS)),
            RonAction(hand=create_hand("1m 1m")),
        ],
    )
    def test_transfer_actions_require_target(self, action):
        with pytest.raises(InvalidEventError, match="requires a target"):
            RoundEvent(subject=HERO, action=action)

    def test_ron_cannot_target_subject(self):
        with pytest.raises(InvalidEventError, match="cannot target itself"):
            RoundEvent(subject=RIGHT, action=RonAction(hand=create_hand("1m 1m")), target=RIGHT)

    def test_ron_off_another_seat(self):
        event = RoundEvent(subject=RIGHT, action=RonAction(hand=create_hand("1m 1m")), target=LEFT)
        assert event.target == LEFT


class TestMeldEvents:
    def test_chii_from_left_accepted(self):
        event = RoundEvent(subject=HERO, action=_chii(LEFT), target=LEFT)
        assert action_meld(event.action).chii_tile == t("4m")

    def test_chii_left_is_relative_to_subject(self):
        # the Hero sits to the left of the Right player
        RoundEvent(subject=RIGHT, action=_chii(HERO), target=HERO)
        with pytest.raises(InvalidMeldError, match="cannot claim from"):
            RoundEvent(subject=RIGHT, action=_chii(LEFT), target=LEFT)

    def test_chii_from_across_rejected_by_default(self):
        with pytest.raises(InvalidMeldError, match="cannot claim from ACROSS"):
            RoundEvent(subject=HERO, action=_chii(ACROSS), target=ACROSS)

    def test_chii_from_across_allowed_by_rules(self):
        rules = EventRules(chii_sources=frozenset({LEFT, ACROSS}))
        event = build_event(HERO, _chii(ACROSS), ACROSS, rules=rules)
        assert event.target == ACROSS

    def test_pon_source_equal_to_subject_rejected(self):
        action = PonAction(meld=PonMeld(tile=t("5z"), source=HERO))
        with pytest.raises(InvalidMeldError, match="cannot claim its own tile"):
            RoundEvent(subject=HERO, action=action, target=LEFT)

    @pytest.mark.parametrize("meld_cls, action_cls", [(OpenKanMeld, OpenKanAction), (AddedOpenKanMeld, AddedOpenKanAction)])
    def test_kan_source_equal_to_subject_rejected(self, meld_cls, action_cls):
        action = action_cls(meld=meld_cls(tile=t("5z"), source=ACROSS))
        with pytest.raises(InvalidMeldError):
            RoundEvent(subject=ACROSS, action=action, target=LEFT)

    def test_pon_from_any_opponent(self):
        for source in (RIGHT, ACROSS, LEFT):
            RoundEvent(subject=HERO, action=PonAction(meld=PonMeld(tile=t("5z"), source=source)), target=source)

    def test_target_must_match_source(self):
        action = PonAction(meld=PonMeld(tile=t("5z"), source=ACROSS))
        with pytest.raises(InvalidMeldError, match="does not match event target"):
            RoundEvent(subject=HERO, action=action, target=RIGHT)

    def test_closed_kan_without_target(self):
        event = RoundEvent(subject=LEFT, action=ClosedKanAction(meld=ClosedKanMeld(tile=t("9s"))))
        assert event.target is None


class TestDrawEvents:
    def test_unknown_draw_is_distinct_value(self):
        event = RoundEvent(subject=ACROSS, action=DrawAction(tile=UNKNOWN_TILE))
        assert isinstance(event.action.tile, UnknownTile)
        assert event.action.tile is not None

    def test_draw_requires_tile_or_unknown(self):
        with pytest.raises(ValidationError):
            DrawAction()
        with pytest.raises(ValidationError):
            DrawAction(tile=None)

    def test_hero_draw_cannot_be_unknown(self):
        with pytest.raises(InvalidEventError, match="cannot be unknown"):
            RoundEvent(subject=HERO, action=DrawAction(tile=UNKNOWN_TILE))

    def test_known_opponent_draw(self):
        event = RoundEvent(subject=LEFT, action=DrawAction(tile=t("6p")))
        assert event.action.tile == t("6p")


class TestRevealedHands:
    def test_tsumo_hand_melds_checked_against_subject(self):
        hand = Hand(tiles=decode_tiles("1m 1m"), melds=(PonMeld(tile=t("3z"), source=RIGHT),))
        RoundEvent(subject=HERO, action=TsumoAction(hand=hand))
        with pytest.raises(InvalidMeldError):
            RoundEvent(subject=RIGHT, action=TsumoAction(hand=hand))

    def test_exhaustive_hand_melds_checked_against_owner(self):
        chii = ChiiMeld(tiles=decode_tiles("1s 2s 3s"), chii_tile=t("1s"), source=HERO)
        hand = Hand(tiles=decode_tiles("9m 9m"), melds=(chii,))
        RoundEvent(subject=HERO, action=ExhaustiveAction(hands={RIGHT: hand}))
        with pytest.raises(InvalidMeldError):
            RoundEvent(subject=HERO, action=ExhaustiveAction(hands={LEFT: hand}))

    def test_exhaustive_lists_only_revealing_seats(self):
        action = ExhaustiveAction(hands={HERO: create_hand("1m 2m 3m"), ACROSS: create_hand("5z 5z")})
        assert set(action.hands_by_seat) == {HERO, ACROSS}
        assert RIGHT not in action.hands_by_seat
        assert action.hands == (
            SeatHand(seat=HERO, hand=create_hand("1m 2m 3m")),
            SeatHand(seat=ACROSS, hand=create_hand("5z 5z")),
        )

    def test_exhaustive_rejects_repeated_seat(self):
        hand = create_hand("5z 5z")
        with pytest.raises(ValidationError, match="more than once"):
            ExhaustiveAction(hands=(SeatHand(seat=LEFT, hand=hand), SeatHand(seat=LEFT, hand=hand)))

    def test_exhaustive_hands_cannot_be_changed(self):
        chii = ChiiMeld(tiles=decode_tiles("1s 2s 3s"), chii_tile=t("1s"), source=HERO)
        event = RoundEvent(subject=HERO, action=ExhaustiveAction(hands={RIGHT: create_hand("9m 9m", [chii])}))
        with pytest.raises(TypeError):
            event.action.hands_by_seat[LEFT] = create_hand("9m 9m", [chii])
        with pytest.raises(ValidationError):
            event.action.hands = ()
        assert set(event.action.hands_by_seat) == {RIGHT}

    def test_exhaustive_event_is_hashable(self):
        event = RoundEvent(subject=HERO, action=ExhaustiveAction(hands={ACROSS: create_hand("5z 5z")}))
        assert hash(event) == hash(RoundEvent(subject=HERO, action=ExhaustiveAction(hands={ACROSS: create_hand("5z 5z")})))
        assert isinstance(hash(RoundEvent(subject=HERO, action=ExhaustiveAction())), int)

    def test_exhaustive_json_round_trip(self):
        event = RoundEvent(subject=HERO, action=ExhaustiveAction(hands={ACROSS: create_hand("5z 5z")}))
        restored = RoundEvent.model_validate_json(event.model_dump_json())
        assert restored == event
        assert set(restored.action.hands_by_seat) == {ACROSS}


class TestActionParsing:
    def test_discriminates_on_type(self):
        event = RoundEvent.model_validate(
            {"subject": 0, "action": {"type": "pon", "meld": {"type": "pon", "tile": "2z", "source": 2}}, "target": 2},
        )
        assert isinstance(event.action, PonAction)
        assert event.action.type == ActionType.PON

    def test_unknown_draw_json_round_trip(self):
        event = RoundEvent(subject=RIGHT, action=DrawAction(tile=UNKNOWN_TILE))
        payload = event.model_dump(mode="json")
        assert payload["action"] == {"type": "draw", "tile": "unknown"}
        assert RoundEvent.model_validate(payload) == event

    def test_rules_from_validation_context(self):
        payload = {"subject": 0, "action": _chii(ACROSS).model_dump(mode="json"), "target": 2}
        with pytest.raises(InvalidMeldError):
            RoundEvent.model_validate(payload)
        rules = EventRules(chii_sources=frozenset({ACROSS}))
        event = RoundEvent.model_validate(payload, context={"rules": rules})
        assert event.subject == HERO


class TestEventRules:
    def test_default_allows_left_only(self):
        assert DEFAULT_RULES.chii_sources == frozenset({LEFT})

    def test_rejects_own_seat(self):
        with pytest.raises(ValidationError, match="own seat"):
            EventRules(chii_sources=frozenset({HERO}))

    def test_rejects_empty(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            EventRules(chii_sources=frozenset())


class TestBuildEvent:
    def test_builds_valid_event(self):
        event = build_event(ACROSS, DiscardAction(tile=t("4s")))
        assert event == RoundEvent(subject=ACROSS, action=DiscardAction(tile=t("4s")))

    def test_logs_rejection(self, caplog):
        with caplog.at_level(logging.WARNING), pytest.raises(InvalidEventError):
            build_event(HERO, RiichiAction(), LEFT)
        assert "rejected round event" in caplog.text

    def test_events_are_immutable(self):
        event = build_event(HERO, RiichiAction())
        with pytest.raises(ValidationError):
            event.subject = LEFT
