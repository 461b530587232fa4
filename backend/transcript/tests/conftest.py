from collections.abc import Sequence

from transcript.logic.actions import DiscardAction, DrawAction
from transcript.logic.enums import Wind
from transcript.logic.events import RoundEvent
from transcript.logic.melds import Hand, Meld
from transcript.logic.round import Round, RoundConfig
from transcript.logic.seats import PlayerLocation
from transcript.logic.tiles import Tile, decode_tile, decode_tiles

# ============================================================================
# Test Transcript Builder Helpers
# ============================================================================


def t(text: str) -> Tile:
    """Shorthand for decode_tile in test data."""
    return decode_tile(text)


def create_hand(text: str = "", melds: Sequence[Meld] = ()) -> Hand:
    """Create a Hand from space-separated tile notation."""
    return Hand(tiles=decode_tiles(text), melds=tuple(melds))


def create_round_config(
    *,
    round_wind: Wind = Wind.EAST,
    round_number: int = 1,
    round_repeat: int = 0,
    hero_location: Wind = Wind.EAST,
    hand: str = "1m 2m 3m 4p 5p 6p 7s 8s 9s 1z 1z 5z 5z",
    dora: str = "3p",
) -> RoundConfig:
    """Create a RoundConfig with sensible defaults for testing."""
    return RoundConfig(
        round_wind=round_wind,
        round_number=round_number,
        round_repeat=round_repeat,
        hero_location=hero_location,
        initial_hero_hand=create_hand(hand),
        dora=decode_tiles(dora),
    )


def create_round(events: Sequence[RoundEvent] = (), **config_kwargs) -> Round:
    return Round(config=create_round_config(**config_kwargs), events=tuple(events))


def draw(subject: PlayerLocation, tile: str) -> RoundEvent:
    return RoundEvent(subject=subject, action=DrawAction(tile=t(tile)))


def discard(subject: PlayerLocation, tile: str) -> RoundEvent:
    return RoundEvent(subject=subject, action=DiscardAction(tile=t(tile)))
