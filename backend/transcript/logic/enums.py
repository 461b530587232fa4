"""
String enum definitions for Mahjong transcript concepts.
"""

from enum import IntEnum, StrEnum


class Suit(StrEnum):
    """Suit characters of the two-character tile notation."""

    MAN = "m"  # characters
    PIN = "p"  # dots
    SOU = "s"  # bamboo
    HONOR = "z"


NUMBER_SUITS: tuple[Suit, ...] = (Suit.MAN, Suit.PIN, Suit.SOU)


class Wind(StrEnum):
    """Wind directions, in turn order."""

    EAST = "East"
    SOUTH = "South"
    WEST = "West"
    NORTH = "North"


class Dragon(StrEnum):
    """Dragon colors."""

    WHITE = "White"
    GREEN = "Green"
    RED = "Red"


class MeldType(StrEnum):
    """Shapes a meld can take."""

    CHII = "chii"
    PON = "pon"
    OPEN_KAN = "open_kan"
    ADDED_OPEN_KAN = "added_open_kan"
    CLOSED_KAN = "closed_kan"


class ActionType(StrEnum):
    """Kinds of actions recorded in a round."""

    DRAW = "draw"
    DISCARD = "discard"
    CHII = "chii"
    PON = "pon"
    CLOSED_KAN = "closed_kan"
    OPEN_KAN = "open_kan"
    ADDED_OPEN_KAN = "added_open_kan"
    RIICHI = "riichi"
    TSUMO = "tsumo"
    RON = "ron"
    EXHAUSTIVE = "exhaustive"


# actions that claim a tile from (or win off) another seat
TRANSFER_ACTIONS: frozenset[ActionType] = frozenset(
    {
        ActionType.CHII,
        ActionType.PON,
        ActionType.OPEN_KAN,
        ActionType.ADDED_OPEN_KAN,
        ActionType.RON,
    },
)

# actions that end a round
FINISHING_ACTIONS: frozenset[ActionType] = frozenset(
    {ActionType.TSUMO, ActionType.RON, ActionType.EXHAUSTIVE},
)


class NumPlayers(IntEnum):
    """Number of players at the table."""

    THREE = 3
    FOUR = 4


class GameLength(StrEnum):
    """Game length: East only, or East + South."""

    EAST = "east"
    SOUTH = "south"


class RedFive(IntEnum):
    """Number of red fives in the tile set."""

    ZERO = 0
    THREE = 3
    FOUR = 4
