"""
String enum definitions for golf wager concepts.
"""

from enum import Enum


class GameType(str, Enum):
    """Side games that can be attached to a round."""

    NASSAU = "NASSAU"
    MATCH_PLAY = "MATCH_PLAY"
    SKINS = "SKINS"
    WOLF = "WOLF"
    NINES = "NINES"
    STABLEFORD = "STABLEFORD"
    VEGAS = "VEGAS"
    SNAKE = "SNAKE"
    BANKER = "BANKER"
    BINGO_BANGO_BONGO = "BINGO_BANGO_BONGO"


# game types that can carry presses
PRESSABLE_GAME_TYPES = frozenset({GameType.NASSAU, GameType.MATCH_PLAY})


class PressSegment(str, Enum):
    """Part of a match a press is attached to."""

    FRONT = "FRONT"  # holes 1-9
    BACK = "BACK"  # holes 10-18
    OVERALL = "OVERALL"  # holes 1-18 of a nassau
    MATCH = "MATCH"  # holes 1-18 of a match play game


class PressStatus(str, Enum):
    """Lifecycle of a press. ACTIVE transitions exactly once to a terminal state."""

    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"
    PUSHED = "PUSHED"
    CANCELED = "CANCELED"


class RoundStatus(str, Enum):
    """Phase of a round."""

    SETUP = "SETUP"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class SettlementStatus(str, Enum):
    """Payment state of a persisted settlement."""

    PENDING = "PENDING"
    PAID = "PAID"
    DISPUTED = "DISPUTED"


class WolfOutcome(str, Enum):
    """Which side took a wolf hole."""

    WOLF = "wolf"
    PACK = "pack"
    TIE = "tie"


class WagerErrorCode(str, Enum):
    """Error codes surfaced to callers for rejected wager requests."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_GAME_TYPE = "UNKNOWN_GAME_TYPE"
    DUPLICATE_GAME_TYPE = "DUPLICATE_GAME_TYPE"
    INVALID_PRESS = "INVALID_PRESS"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_SETTLEMENT = "INVALID_SETTLEMENT"
    FINALIZATION_FAILED = "FINALIZATION_FAILED"
