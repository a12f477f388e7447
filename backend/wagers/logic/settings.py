"""Centralized wager rules - bet bounds, settlement caps, and press triggers."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from wagers.logic.enums import GameType


class PlayerCountRule(BaseModel):
    """Allowed roster size for a game type."""

    model_config = ConfigDict(frozen=True)

    min_players: int
    max_players: int | None = None
    message: str

    def allows(self, count: int) -> bool:
        if count < self.min_players:
            return False
        return self.max_players is None or count <= self.max_players


# roster sizes enforced before a game is scored
PLAYER_COUNT_RULES: dict[GameType, PlayerCountRule] = {
    GameType.NASSAU: PlayerCountRule(
        min_players=2, max_players=2, message="Nassau requires exactly 2 players (head-to-head match play)"
    ),
    GameType.MATCH_PLAY: PlayerCountRule(min_players=2, max_players=2, message="Match Play requires exactly 2 players"),
    GameType.VEGAS: PlayerCountRule(
        min_players=4, max_players=4, message="Vegas requires exactly 4 players (2 teams of 2)"
    ),
    GameType.WOLF: PlayerCountRule(min_players=4, max_players=4, message="Wolf requires exactly 4 players"),
    GameType.NINES: PlayerCountRule(min_players=3, max_players=4, message="Nines requires 3-4 players"),
    GameType.SKINS: PlayerCountRule(min_players=2, max_players=16, message="Skins requires 2-16 players"),
    GameType.STABLEFORD: PlayerCountRule(min_players=2, max_players=16, message="Stableford requires 2-16 players"),
    GameType.SNAKE: PlayerCountRule(min_players=1, message="Snake requires at least 1 player"),
    GameType.BANKER: PlayerCountRule(min_players=1, message="Banker requires at least 1 player"),
    GameType.BINGO_BANGO_BONGO: PlayerCountRule(min_players=1, message="Bingo-Bango-Bongo requires at least 1 player"),
}

# games with fewer players than this are skipped (not failed) at finalization
FINALIZE_MIN_PLAYERS: dict[GameType, int] = {
    GameType.NASSAU: 2,
    GameType.MATCH_PLAY: 2,
    GameType.SKINS: 2,
    GameType.WOLF: 4,
    GameType.NINES: 2,
    GameType.STABLEFORD: 2,
    GameType.VEGAS: 4,
    GameType.SNAKE: 2,
    GameType.BANKER: 3,
    GameType.BINGO_BANGO_BONGO: 3,
}


def settles_at_finalization(game_type: GameType, player_count: int) -> bool:
    return player_count >= FINALIZE_MIN_PLAYERS[game_type]


class WagerRules(BaseModel):
    """
    Configurable limits for the wager engine.

    Defaults match the house rules the app ships with.
    """

    model_config = ConfigDict(frozen=True)

    # --- Bets ---
    max_bet_amount: Decimal = Field(default=Decimal(10000), ge=0)

    # --- Settlement caps ---
    max_individual_settlement: Decimal = Field(default=Decimal(50000), gt=0)
    max_total_settlement: Decimal = Field(default=Decimal(100000), gt=0)
    # net balances smaller than this are treated as settled
    settlement_epsilon: Decimal = Field(default=Decimal("0.01"), gt=0)

    # --- Presses ---
    press_trigger_margin: int = Field(default=2, ge=1)

    # --- Wolf ---
    blind_wolf_multiplier: int = Field(default=4, ge=1)


DEFAULT_RULES = WagerRules()
