"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator

from .constants import Difficulty, PLAYERS_PER_DECK


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=3,
        ge=3,
        le=12,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=12,
        ge=3,
        le=24,
        description="Maximum number of players allowed"
    )
    players_per_deck: int = Field(
        default=PLAYERS_PER_DECK,
        ge=1,
        description="One extra deck is added for every this many players"
    )
    target_points: int = Field(
        default=100,
        ge=1,
        description="Total points that end the game"
    )
    default_difficulty: Difficulty = Field(
        default=Difficulty.MEDIUM,
        description="Difficulty given to computer players added without one"
    )
    ai_think_delay: float = Field(
        default=0.8,
        ge=0,
        le=10,
        description="Seconds a computer player waits before acting (cosmetic)"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', 3)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
