"""
Configuration for the minefield engine.

Defines board dimensions per difficulty and the scoring parameters
used by the combo engine.
"""
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Any, Dict, Mapping, Union

from .errors import ConfigurationError


# ============================================================================
# Difficulty
# ============================================================================

class Difficulty(str, Enum):
    """Preset difficulty identifiers."""

    NOVICE = "NOVICE"
    AGENT = "AGENT"
    HACKER = "HACKER"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        """Resolve a difficulty from its name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ConfigurationError(f"Unknown difficulty: {value!r}") from None


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a single engine instance.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
        difficulty: Difficulty identifier, selects the score table.
    """

    width: int = 9
    height: int = 9
    mine_count: int = 10
    difficulty: Difficulty = Difficulty.CUSTOM

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        object.__setattr__(self, "difficulty", Difficulty.parse(self.difficulty))
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "mine_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.mine_count > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the grid."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mine_count

    @classmethod
    def for_difficulty(
        cls, difficulty: Union[str, Difficulty]
    ) -> "GameConfig":
        """Get the preset configuration for a difficulty."""
        return DIFFICULTY_CONFIGS[Difficulty.parse(difficulty)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """
        Build a configuration from a plain mapping.

        Missing dimensions fall back to the difficulty preset, so
        ``{"difficulty": "hacker"}`` alone is enough.

        Args:
            data: Mapping with optional keys width, height, mine_count
                and difficulty.

        Returns:
            Validated configuration.
        """
        difficulty = Difficulty.parse(data.get("difficulty", Difficulty.CUSTOM))
        preset = DIFFICULTY_CONFIGS[difficulty]
        return cls(
            width=_as_int(data.get("width", preset.width)),
            height=_as_int(data.get("height", preset.height)),
            mine_count=_as_int(data.get("mine_count", preset.mine_count)),
            difficulty=difficulty,
        )


def _as_int(value: Any) -> int:
    """Convert a mapping value to int without truncating fractions."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid configuration: {value!r} is not an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError(f"Invalid configuration: {value!r} is not an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise ConfigurationError(f"Invalid configuration: {error}") from error


# Preset difficulty levels
NOVICE = GameConfig(9, 9, 10, Difficulty.NOVICE)
AGENT = GameConfig(16, 16, 40, Difficulty.AGENT)
HACKER = GameConfig(30, 16, 99, Difficulty.HACKER)

DIFFICULTY_CONFIGS: Dict[Difficulty, GameConfig] = {
    Difficulty.NOVICE: NOVICE,
    Difficulty.AGENT: AGENT,
    Difficulty.HACKER: HACKER,
    Difficulty.CUSTOM: GameConfig(),
}


# ============================================================================
# Score Configuration
# ============================================================================

@dataclass(frozen=True)
class ScoreConfig:
    """
    Scoring parameters for one difficulty.

    Attributes:
        base_reveal_score: Points for every safe cell revealed.
        combo_multiplier: Fraction of the base score added per combo step.
        combo_time_threshold_ms: Max gap between cascading reveals that
            keeps a combo alive.
        time_bonus_multiplier: Points per millisecond under one minute.
        completion_bonus: Flat bonus for winning.
        perfect_flag_bonus: Bonus when flags placed equals mine count.
    """

    base_reveal_score: int = 10
    combo_multiplier: float = 0.5
    combo_time_threshold_ms: int = 1000
    time_bonus_multiplier: float = 0.01
    completion_bonus: int = 500
    perfect_flag_bonus: int = 200

    def __post_init__(self) -> None:
        """Validate score parameters."""
        if self.base_reveal_score < 0:
            raise ConfigurationError("Base reveal score cannot be negative")
        if self.combo_time_threshold_ms < 0:
            raise ConfigurationError("Combo threshold cannot be negative")


SCORE_CONFIGS: Dict[Difficulty, ScoreConfig] = {
    Difficulty.NOVICE: ScoreConfig(),
    Difficulty.AGENT: ScoreConfig(
        base_reveal_score=15,
        combo_multiplier=0.75,
        combo_time_threshold_ms=800,
        time_bonus_multiplier=0.02,
        completion_bonus=1500,
        perfect_flag_bonus=500,
    ),
    Difficulty.HACKER: ScoreConfig(
        base_reveal_score=20,
        combo_multiplier=1.0,
        combo_time_threshold_ms=600,
        time_bonus_multiplier=0.05,
        completion_bonus=5000,
        perfect_flag_bonus=1000,
    ),
    Difficulty.CUSTOM: ScoreConfig(),
}
