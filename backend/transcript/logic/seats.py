"""
Seat positions relative to the transcript's viewpoint.

PlayerLocation values form the cyclic group Z/4Z with Hero as identity,
ordered Hero -> Right -> Across -> Left -> Hero. combine() is addition
modulo 4 and can never fail.
"""

from collections.abc import Iterable
from enum import IntEnum

from transcript.logic.enums import Wind

NUM_SEATS = 4

_WIND_ORDER: tuple[Wind, ...] = (Wind.EAST, Wind.SOUTH, Wind.WEST, Wind.NORTH)


class PlayerLocation(IntEnum):
    """A seat as seen from the Hero."""

    HERO = 0
    RIGHT = 1
    ACROSS = 2
    LEFT = 3

    def move_relative(self, other: "PlayerLocation") -> "PlayerLocation":
        """Location reached by taking `other` as seen from this seat."""
        return combine(self, other)


def combine(a: PlayerLocation, b: PlayerLocation) -> PlayerLocation:
    """Compose two relative locations: `b` as seen from the seat at `a`."""
    return PlayerLocation((a + b) % NUM_SEATS)


def relative_to(observer: PlayerLocation, seat: PlayerLocation) -> PlayerLocation:
    """
    Location of `seat` as seen from `observer`.

    Inverse of combine: combine(observer, relative_to(observer, seat)) == seat.
    """
    return PlayerLocation((seat - observer) % NUM_SEATS)


def location_of(hero_wind: Wind, seat_wind: Wind) -> PlayerLocation:
    """Relative location of the seat holding `seat_wind` when the Hero sits `hero_wind`."""
    offset = _WIND_ORDER.index(seat_wind) - _WIND_ORDER.index(hero_wind)
    return PlayerLocation(offset % NUM_SEATS)


def wind_of(hero_wind: Wind, location: PlayerLocation) -> Wind:
    """Seat wind of the player at `location` when the Hero sits `hero_wind`."""
    return _WIND_ORDER[(_WIND_ORDER.index(hero_wind) + location) % NUM_SEATS]


def ensure_unique_seats(seats: Iterable[PlayerLocation], what: str = "hands") -> None:
    """Raise ValueError if any seat appears more than once."""
    seen = list(seats)
    if len(set(seen)) != len(seen):
        raise ValueError(f"{what} lists a seat more than once: {[s.name for s in seen]}")
