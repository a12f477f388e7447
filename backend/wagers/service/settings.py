"""Wager service configuration via environment variables."""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings

from wagers.logic.settings import WagerRules


class WagerServiceSettings(BaseSettings):
    model_config = {"env_prefix": "WAGERS_"}

    db_path: str = Field(default="backend/data/wagers.db", min_length=1)
    log_dir: str = Field(default="backend/logs/wagers", min_length=1)

    # rule overrides; see WagerRules for the meaning of each limit
    max_bet_amount: Decimal = Field(default=Decimal(10000), ge=0)
    max_individual_settlement: Decimal = Field(default=Decimal(50000), gt=0)
    max_total_settlement: Decimal = Field(default=Decimal(100000), gt=0)
    press_trigger_margin: int = Field(default=2, ge=1)
    blind_wolf_multiplier: int = Field(default=4, ge=1)

    def to_rules(self) -> WagerRules:
        return WagerRules(
            max_bet_amount=self.max_bet_amount,
            max_individual_settlement=self.max_individual_settlement,
            max_total_settlement=self.max_total_settlement,
            press_trigger_margin=self.press_trigger_margin,
            blind_wolf_multiplier=self.blind_wolf_multiplier,
        )
