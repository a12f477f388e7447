"""
Round snapshot models consumed by the wager engine.

The snapshot is an immutable input: players with handicaps and per-hole
scores, the course, configured games with their side data, and presses.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wagers.logic.enums import GameType, PressSegment, PressStatus, RoundStatus

HOLES_PER_ROUND = 18
FRONT_NINE = range(1, 10)
BACK_NINE = range(10, 19)
ALL_HOLES = range(1, HOLES_PER_ROUND + 1)

HoleNumber = Annotated[int, Field(ge=1, le=HOLES_PER_ROUND)]


class Score(BaseModel):
    """Strokes (and optionally putts) for one hole. Missing strokes mean not yet played."""

    model_config = ConfigDict(frozen=True)

    hole_number: HoleNumber
    strokes: int | None = Field(default=None, ge=1)
    putts: int | None = Field(default=None, ge=0)


class Player(BaseModel):
    """A golfer in the round with their course handicap and scorecard."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    name: str = ""
    course_handicap: int | None = None  # None means no allowance
    scores: tuple[Score, ...] = ()

    @model_validator(mode="after")
    def _unique_holes(self) -> Player:
        holes = [s.hole_number for s in self.scores]
        if len(holes) != len(set(holes)):
            raise ValueError(f"player {self.player_id} has more than one score for a hole")
        return self

    @property
    def display_name(self) -> str:
        return self.name or "Unknown"

    def score_for(self, hole_number: int) -> Score | None:
        for score in self.scores:
            if score.hole_number == hole_number:
                return score
        return None

    def strokes_on(self, hole_number: int) -> int | None:
        score = self.score_for(hole_number)
        return score.strokes if score is not None else None

    def putts_on(self, hole_number: int) -> int | None:
        score = self.score_for(hole_number)
        return score.putts if score is not None else None


class Hole(BaseModel):
    model_config = ConfigDict(frozen=True)

    hole_number: HoleNumber
    par: int = Field(default=4, ge=3)
    handicap_rank: HoleNumber  # 1 = hardest hole, receives strokes first


class Course(BaseModel):
    """The holes of the course being played."""

    model_config = ConfigDict(frozen=True)

    holes: tuple[Hole, ...] = ()

    @model_validator(mode="after")
    def _valid_layout(self) -> Course:
        numbers = [h.hole_number for h in self.holes]
        if len(numbers) != len(set(numbers)):
            raise ValueError("hole numbers must be unique")
        ranks = sorted(h.handicap_rank for h in self.holes)
        if ranks != list(range(1, len(self.holes) + 1)):
            raise ValueError("handicap ranks must be a permutation of 1..n")
        return self

    def hole(self, hole_number: int) -> Hole | None:
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None


# ============================================================================
# Game side data
# ============================================================================


class WolfDecision(BaseModel):
    """Wolf choice recorded for one hole."""

    model_config = ConfigDict(frozen=True)

    hole_number: HoleNumber
    wolf_id: str
    partner_id: str | None = None
    is_lone_wolf: bool | None = None  # None: lone wolf when no partner was picked
    is_blind: bool = False


class VegasTeams(BaseModel):
    model_config = ConfigDict(frozen=True)

    team1: tuple[str, str]
    team2: tuple[str, str]


class BankerDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    hole_number: HoleNumber
    banker_id: str


class BingoBangoBongoAward(BaseModel):
    """Points awarded on one hole: first on green, closest once all on, first in the hole."""

    model_config = ConfigDict(frozen=True)

    hole_number: HoleNumber
    bingo_id: str | None = None
    bango_id: str | None = None
    bongo_id: str | None = None


# ============================================================================
# Game variants (tagged by ``type``)
# ============================================================================


class _GameBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_id: str
    name: str | None = None
    bet_amount: Decimal = Decimal(0)
    participant_ids: tuple[str, ...] = ()  # empty means every round player


class NassauGame(_GameBase):
    type: Literal[GameType.NASSAU] = GameType.NASSAU
    is_auto_press: bool = False


class MatchPlayGame(_GameBase):
    type: Literal[GameType.MATCH_PLAY] = GameType.MATCH_PLAY
    is_auto_press: bool = False


class SkinsGame(_GameBase):
    type: Literal[GameType.SKINS] = GameType.SKINS


class WolfGame(_GameBase):
    type: Literal[GameType.WOLF] = GameType.WOLF
    decisions: tuple[WolfDecision, ...] = ()


class NinesGame(_GameBase):
    type: Literal[GameType.NINES] = GameType.NINES


class StablefordGame(_GameBase):
    type: Literal[GameType.STABLEFORD] = GameType.STABLEFORD


class VegasGame(_GameBase):
    type: Literal[GameType.VEGAS] = GameType.VEGAS
    teams: VegasTeams | None = None


class SnakeGame(_GameBase):
    type: Literal[GameType.SNAKE] = GameType.SNAKE


class BankerGame(_GameBase):
    type: Literal[GameType.BANKER] = GameType.BANKER
    decisions: tuple[BankerDecision, ...] = ()


class BingoBangoBongoGame(_GameBase):
    type: Literal[GameType.BINGO_BANGO_BONGO] = GameType.BINGO_BANGO_BONGO
    awards: tuple[BingoBangoBongoAward, ...] = ()


Game = Annotated[
    NassauGame
    | MatchPlayGame
    | SkinsGame
    | WolfGame
    | NinesGame
    | StablefordGame
    | VegasGame
    | SnakeGame
    | BankerGame
    | BingoBangoBongoGame,
    Field(discriminator="type"),
]

PressableGame = NassauGame | MatchPlayGame


class Press(BaseModel):
    """A double-or-nothing side match over the remaining holes of a segment."""

    model_config = ConfigDict(frozen=True)

    press_id: str
    game_id: str
    segment: PressSegment
    start_hole: HoleNumber
    initiator_id: str
    parent_press_id: str | None = None
    bet_multiplier: Decimal = Field(default=Decimal(1), gt=0)
    status: PressStatus = PressStatus.ACTIVE


class DotAward(BaseModel):
    """A junk achievement (sandy, greenie, chip-in...) recorded for a player."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    hole_number: HoleNumber
    kind: str = "dot"


class DotsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount_per_dot: Decimal = Field(ge=0)
    achievements: tuple[DotAward, ...] = ()


class RoundSnapshot(BaseModel):
    """Everything the engine needs to score and settle a round."""

    model_config = ConfigDict(frozen=True)

    round_id: str
    owner_id: str
    status: RoundStatus = RoundStatus.ACTIVE
    players: tuple[Player, ...]
    course: Course
    games: tuple[Game, ...] = ()
    presses: tuple[Press, ...] = ()
    dots: DotsConfig | None = None

    @model_validator(mode="after")
    def _unique_ids(self) -> RoundSnapshot:
        ids = [p.player_id for p in self.players]
        if len(ids) != len(set(ids)):
            raise ValueError("player ids must be unique within a round")
        press_ids = [p.press_id for p in self.presses]
        if len(press_ids) != len(set(press_ids)):
            raise ValueError("press ids must be unique within a round")
        return self

    def player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def game(self, game_id: str) -> Game | None:
        for game in self.games:
            if game.game_id == game_id:
                return game
        return None

    def players_for(self, game: Game) -> tuple[Player, ...]:
        """Return the game roster in round order."""
        if not game.participant_ids:
            return self.players
        wanted = set(game.participant_ids)
        return tuple(p for p in self.players if p.player_id in wanted)

    def presses_for(self, game_id: str) -> tuple[Press, ...]:
        return tuple(p for p in self.presses if p.game_id == game_id)
