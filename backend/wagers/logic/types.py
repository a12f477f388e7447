"""
Pydantic models for wager engine results.

Contains the per-game standings and hole-by-hole detail returned by the
scorers, press resolutions and live press status, and the obligation and
settlement records produced at finalization.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from wagers.logic.enums import GameType, PressSegment, PressStatus, SettlementStatus, WolfOutcome


class PlayerStanding(BaseModel):
    """Final position of one player in a game. ``money`` sums to zero across a game."""

    player_id: str
    name: str
    points: Decimal = Decimal(0)
    money: Decimal = Decimal(0)


class MatchResult(BaseModel):
    """Head-to-head match play over a range of holes. ``up`` is from the first player's view."""

    first_id: str
    second_id: str
    start_hole: int
    end_hole: int
    up: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    last_hole_played: int = 0
    winner_id: str | None = None
    loser_id: str | None = None
    margin: int = 0
    status: str = "No scores yet"


# ============================================================================
# Per-game results
# ============================================================================


class NassauResult(BaseModel):
    type: Literal[GameType.NASSAU] = GameType.NASSAU
    game_id: str
    bet_amount: Decimal
    front: MatchResult
    back: MatchResult
    overall: MatchResult
    standings: list[PlayerStanding]


class MatchPlayHole(BaseModel):
    hole: int
    first_net: int | None = None
    second_net: int | None = None
    winner_id: str | None = None


class MatchPlayResult(BaseModel):
    type: Literal[GameType.MATCH_PLAY] = GameType.MATCH_PLAY
    game_id: str
    bet_amount: Decimal
    holes: list[MatchPlayHole]
    match: MatchResult
    match_over: bool
    match_status: str
    standings: list[PlayerStanding]


class SkinHole(BaseModel):
    hole: int
    winner_id: str | None = None
    value: Decimal = Decimal(0)
    carried_in: Decimal = Decimal(0)


class SkinsResult(BaseModel):
    type: Literal[GameType.SKINS] = GameType.SKINS
    game_id: str
    bet_amount: Decimal
    skins: list[SkinHole]
    total_pot: Decimal
    carryover: Decimal
    standings: list[PlayerStanding]


class WolfHole(BaseModel):
    hole: int
    wolf_id: str
    partner_id: str | None = None
    is_lone_wolf: bool
    is_blind: bool = False
    wolf_team_score: int | None = None
    other_team_score: int | None = None
    outcome: WolfOutcome | None = None
    stake: Decimal = Decimal(0)


class WolfResult(BaseModel):
    type: Literal[GameType.WOLF] = GameType.WOLF
    game_id: str
    bet_amount: Decimal
    holes: list[WolfHole]
    standings: list[PlayerStanding]


class HolePoints(BaseModel):
    """Net score and points of one player on one hole."""

    player_id: str
    gross: int | None = None
    net: int | None = None
    points: Decimal = Decimal(0)


class PointsHole(BaseModel):
    hole: int
    scores: list[HolePoints]


class SplitStanding(PlayerStanding):
    """Standing with front-nine / back-nine breakdown."""

    front_points: Decimal = Decimal(0)
    back_points: Decimal = Decimal(0)
    front_money: Decimal = Decimal(0)
    back_money: Decimal = Decimal(0)


class NinesResult(BaseModel):
    type: Literal[GameType.NINES] = GameType.NINES
    game_id: str
    bet_amount: Decimal
    holes: list[PointsHole]
    standings: list[SplitStanding]


class StablefordResult(BaseModel):
    type: Literal[GameType.STABLEFORD] = GameType.STABLEFORD
    game_id: str
    bet_amount: Decimal
    holes: list[PointsHole]
    standings: list[SplitStanding]


class VegasHole(BaseModel):
    hole: int
    team1_number: int | None = None
    team2_number: int | None = None
    diff: int = 0  # positive: team 1 won the hole


class VegasTeamResult(BaseModel):
    team_number: int
    player_ids: tuple[str, str]
    total_diff: int
    money: Decimal


class VegasResult(BaseModel):
    type: Literal[GameType.VEGAS] = GameType.VEGAS
    game_id: str
    bet_amount: Decimal
    holes: list[VegasHole]
    teams: list[VegasTeamResult]
    standings: list[PlayerStanding]


class ThreePutt(BaseModel):
    hole: int
    player_id: str


class SnakeResult(BaseModel):
    type: Literal[GameType.SNAKE] = GameType.SNAKE
    game_id: str
    bet_amount: Decimal
    snake_holder_id: str | None
    three_putts: list[ThreePutt]
    standings: list[PlayerStanding]


class BankerHole(BaseModel):
    hole: int
    banker_id: str
    banker_net: int | None = None
    best_other_net: int | None = None
    banker_won: bool | None = None


class BankerResult(BaseModel):
    type: Literal[GameType.BANKER] = GameType.BANKER
    game_id: str
    bet_amount: Decimal
    holes: list[BankerHole]
    standings: list[PlayerStanding]


class BingoBangoBongoHole(BaseModel):
    hole: int
    bingo_id: str | None = None
    bango_id: str | None = None
    bongo_id: str | None = None


class BingoBangoBongoStanding(PlayerStanding):
    bingo: int = 0
    bango: int = 0
    bongo: int = 0


class BingoBangoBongoResult(BaseModel):
    type: Literal[GameType.BINGO_BANGO_BONGO] = GameType.BINGO_BANGO_BONGO
    game_id: str
    bet_amount: Decimal
    holes: list[BingoBangoBongoHole]
    standings: list[BingoBangoBongoStanding]


class DotsResult(BaseModel):
    """Round-level junk pool: players above the average dot count collect."""

    amount_per_dot: Decimal
    total_dots: int
    standings: list[PlayerStanding]


GameResult = Annotated[
    NassauResult
    | MatchPlayResult
    | SkinsResult
    | WolfResult
    | NinesResult
    | StablefordResult
    | VegasResult
    | SnakeResult
    | BankerResult
    | BingoBangoBongoResult,
    Field(discriminator="type"),
]


# ============================================================================
# Presses
# ============================================================================


class PressResolution(BaseModel):
    """Terminal state of a press decided at finalization."""

    press_id: str
    game_id: str
    status: PressStatus
    winner_id: str | None = None
    loser_id: str | None = None
    amount: Decimal = Decimal(0)


class ActivePressStatus(BaseModel):
    press_id: str
    start_hole: int
    current_score: int  # from the first player's view
    holes_played: int
    holes_remaining: int
    can_press_the_press: bool


class SegmentPressStatus(BaseModel):
    """Live match status of one segment and whether a new press is allowed."""

    segment: PressSegment
    current_score: int  # positive: first player up
    holes_played: int
    holes_remaining: int
    can_press: bool
    suggest_auto_press: bool
    auto_press_hole: int | None = None
    active_presses: list[ActivePressStatus] = Field(default_factory=list)


class GamePressStatus(BaseModel):
    game_id: str
    game_type: GameType
    is_auto_press: bool
    segments: list[SegmentPressStatus]


# ============================================================================
# Settlement
# ============================================================================


class Obligation(BaseModel):
    """One directional debt produced by a game, press, or dots pool."""

    from_id: str
    to_id: str
    amount: Decimal
    source: str = ""


class Settlement(BaseModel):
    """Consolidated net debt between two players for a round. Amount is always positive."""

    from_id: str
    to_id: str
    amount: Decimal = Field(gt=0)
    status: SettlementStatus = SettlementStatus.PENDING


class GameResultEntry(BaseModel):
    """Net money of one player in one game, kept for career stats."""

    game_id: str
    player_id: str
    net_amount: Decimal


class CalculationResult(BaseModel):
    """Live standings for every game of a round."""

    round_id: str
    results: dict[GameType, dict[str, GameResult]]
    press_status: list[GamePressStatus]
    dots: DotsResult | None = None
    # shown live, but too few players to settle when the round is finalized
    unsettled_game_ids: list[str] = []


class FinalizationResult(BaseModel):
    round_id: str
    settlements: list[Settlement]
    press_resolutions: list[PressResolution]
    game_results: list[GameResultEntry]
    finalized_at: datetime
