"""Tracing module: records Sudoku solver steps, logs them and writes them to CSV."""

import csv
import logging
from dataclasses import dataclass, asdict, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)


@dataclass
class TraceStep:
    """A single step in the solving process. Values are 1-based."""

    timestamp: float
    step_number: int
    action_type: str  # 'clue', 'finalize', 'conflict', 'round', 'solved', 'unsolvable', 'inconsistent'
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None
    strategy: Optional[str] = None  # 'naked_single', 'row_scan', 'column_scan', 'block_scan'
    round_number: Optional[int] = None
    updates: Optional[int] = None
    state: Optional[str] = None
    reason: Optional[str] = None


class Tracer:
    """
    Trace sink handed to a Grid. Every step is kept in `steps` and forwarded
    to the module logger; a disabled tracer does neither.
    """

    def __init__(self, enabled: bool = True, logger: Optional[logging.Logger] = None):
        self.enabled = enabled
        self.logger = logger or log
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **kwargs: Any) -> Optional[TraceStep]:
        if not self.enabled:
            return None
        self.step_counter += 1
        step = TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **kwargs,
        )
        self.steps.append(step)
        return step

    def log_clue(self, row: int, col: int, value: int):
        """Log a clue placed during construction."""
        if self._record("clue", row=row, col=col, value=value):
            self.logger.debug("clue: row: %d, col: %d, val: %d", row, col, value)

    def log_finalize(self, row: int, col: int, value: int, strategy: str):
        """Log a cell finalized by one of the elimination strategies."""
        if not self._record("finalize", row=row, col=col, value=value, strategy=strategy):
            return
        if strategy == "naked_single":
            self.logger.debug("%s: row: %d, col: %d, must be: %d", strategy, row, col, value)
        else:
            self.logger.info("%s: found one, row: %d, col: %d, val: %d", strategy, row, col, value)

    def log_conflict(self, row: int, col: int, value: int):
        """Log a clue that contradicts an already finalized peer."""
        reason = f"Value {value} already excluded from this cell"
        if self._record("conflict", row=row, col=col, value=value, reason=reason):
            self.logger.warning("conflicting clue: row: %d, col: %d, val: %d", row, col, value)

    def log_round(self, round_number: int, updates: int, state: str):
        """Log the outcome of one solver round."""
        if self._record("round", round_number=round_number, updates=updates, state=state):
            self.logger.debug("round %d: updates: %d, state: %s", round_number, updates, state)

    def log_solved(self, rounds: int):
        if self._record("solved", round_number=rounds, state="Solved"):
            self.logger.info("Solved puzzle, rounds: %d", rounds)

    def log_unsolvable(self, rounds: int):
        reason = "No forward progress"
        if self._record("unsolvable", round_number=rounds, state="Unsolvable", reason=reason):
            self.logger.warning("Puzzle unsolvable, rounds: %d", rounds)

    def log_inconsistent(self, row: int, col: int, rounds: int):
        reason = "No candidates left"
        if self._record(
            "inconsistent", row=row, col=col, round_number=rounds, state="Unsolvable", reason=reason
        ):
            self.logger.warning("Puzzle inconsistent: row: %d, col: %d, rounds: %d", row, col, rounds)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            self.logger.info("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [f.name for f in fields(TraceStep)]
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        self.logger.info("Trace written to %s (%d steps)", filepath, len(self.steps))

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        strategy_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1
            if step.strategy:
                strategy_counts[step.strategy] = strategy_counts.get(step.strategy, 0) + 1

        return {
            "total_steps": len(self.steps),
            "elapsed_time_seconds": self._get_timestamp(),
            "action_counts": action_counts,
            "strategy_counts": strategy_counts,
            "num_finalized": action_counts.get("finalize", 0),
            "num_rounds": action_counts.get("round", 0),
        }
