"""
Runtime configuration loaded from the environment.

Fixed facts about the game live in constants.py. The values here are the
ones an operator may want to change without touching code: how long the
engine thinks, which heuristic it uses at the leaves, and how chatty the
logs are. Each can be set through an ``AMAZONS_``-prefixed environment
variable, and the play loop lets command-line flags override them.

Example:
    $ AMAZONS_TIME_PER_TURN=2.5 AMAZONS_HEURISTIC=mobility python -m interface.cli
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from amazons.constants import (
    DEFAULT_HEURISTIC,
    MAX_TIME_PER_TURN,
    MIN_TIME_PER_TURN,
    TIME_PER_TURN,
)
from amazons.evaluate import HEURISTICS


class EngineSettings(BaseSettings):
    """
    Engine configuration.

    Attributes:
        time_per_turn: Seconds of wall-clock search per engine move. Clamped
                       to [MIN_TIME_PER_TURN, MAX_TIME_PER_TURN] so that a
                       typo can neither starve the search nor hang a game.
        heuristic:     Registry name of the leaf evaluator (see
                       evaluate.HEURISTICS).
        log_level:     Standard logging level name for the play loop.
    """

    model_config = SettingsConfigDict(
        env_prefix="AMAZONS_",
        extra="ignore",
    )

    time_per_turn: float = TIME_PER_TURN
    heuristic: str = DEFAULT_HEURISTIC
    log_level: str = "INFO"

    @field_validator("time_per_turn")
    @classmethod
    def clamp_time_per_turn(cls, v: float) -> float:
        """Clamp time_per_turn to a safe operating range."""
        return max(MIN_TIME_PER_TURN, min(v, MAX_TIME_PER_TURN))

    @field_validator("heuristic")
    @classmethod
    def known_heuristic(cls, v: str) -> str:
        if v not in HEURISTICS:
            raise ValueError(f"unknown heuristic {v!r}; expected one of {', '.join(HEURISTICS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> EngineSettings:
    """Return the process-wide settings, read from the environment once."""
    return EngineSettings()
