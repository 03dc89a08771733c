"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_bool(name: str, default: str = "false") -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).strip().lower() == "true"


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or blank means an unseeded shuffle."""
    seed = os.getenv("BLACKJACK_SEED", "").strip()
    if not seed:
        return None
    try:
        return int(seed)
    except ValueError:
        raise ValueError(f"BLACKJACK_SEED must be an integer, got {seed!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Game session configuration."""

    player_name: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_PLAYER_NAME", "Player 1")
    )
    seed: int | None = field(default_factory=_parse_seed)
    show_deck: bool = field(default_factory=lambda: _parse_bool("BLACKJACK_SHOW_DECK"))

    # Fixed table rules
    shuffle_passes: int = 4
    max_prompt_attempts: int = 3


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _parse_bool("DEBUG"))
    game: GameConfig = field(default_factory=GameConfig)


# Global configuration instance
config = AppConfig()
