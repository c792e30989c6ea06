"""
Scoring and combo engine.

Cascading (zero-adjacency) reveals that follow each other within the
combo time threshold build a combo which multiplies their score. The
final score on a win adds completion, perfect-flag and time bonuses.
"""
import math
from typing import TYPE_CHECKING

from .config import ScoreConfig

if TYPE_CHECKING:
    from .engine import RunState


# Time bonus counts down from one minute
TIME_BONUS_BASE_MS = 60000


class ScoreKeeper:
    """
    Applies a score table to a run state.

    Holds no state of its own; every counter lives on the RunState so a
    reset only has to replace that object.
    """

    def __init__(self, score_config: ScoreConfig) -> None:
        self.config = score_config

    def record_reveal(
        self, run: "RunState", adjacent_mines: int, now: int, cascaded: bool
    ) -> int:
        """
        Score one revealed safe cell and update combo counters.

        Args:
            run: Run state to update in place.
            adjacent_mines: Number shown on the revealed cell.
            now: Current clock value in milliseconds.
            cascaded: True when the cell was opened by a flood fill
                rather than clicked directly.

        Returns:
            Points added to the running score.
        """
        if adjacent_mines == 0:
            self._continue_combo(run, now)
            points = self._combo_score(run.combo_count)
        else:
            if not cascaded:
                run.combo_count = 0
                run.last_reveal_time = now
            points = self.config.base_reveal_score

        run.score += points
        return points

    def _continue_combo(self, run: "RunState", now: int) -> None:
        """Extend the combo if the last cascade was recent, else restart it."""
        last = run.last_reveal_time
        if last is not None and now - last < self.config.combo_time_threshold_ms:
            run.combo_count += 1
        else:
            run.combo_count = 1
        run.best_combo = max(run.best_combo, run.combo_count)
        run.last_reveal_time = now

    def _combo_score(self, combo_count: int) -> int:
        base = self.config.base_reveal_score
        return base + math.floor(base * self.config.combo_multiplier * combo_count)

    def time_bonus(self, elapsed_ms: int) -> int:
        """Bonus for finishing under a minute."""
        remaining = max(0, TIME_BONUS_BASE_MS - elapsed_ms)
        return math.floor(remaining * self.config.time_bonus_multiplier)

    def final_score(
        self, run: "RunState", mine_count: int, elapsed_ms: int
    ) -> int:
        """
        Compute the score of a won game.

        The perfect flag bonus only compares the number of flags with the
        number of mines; it does not check where the flags are.
        """
        total = run.score + self.config.completion_bonus
        if run.flags_placed == mine_count:
            total += self.config.perfect_flag_bonus
        total += self.time_bonus(elapsed_ms)
        return math.floor(total)
