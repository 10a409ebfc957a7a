"""Tracing module: logs propagation steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'round', 'group_reduced', 'contradiction', 'solve_finished'
    group: Optional[str] = None  # 'row', 'column' or 'block'
    group_index: Optional[int] = None
    round_number: Optional[int] = None
    eliminations: Optional[int] = None
    resolved: Optional[int] = None  # cells that became resolved during the step
    unresolved: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_group_reduction(self, group: str, group_index: int, eliminations: int, resolved: int):
        """Log an elimination pass that removed at least one candidate."""
        if not self.enabled:
            return
        self._record(
            'group_reduced',
            group=group,
            group_index=group_index,
            eliminations=eliminations,
            resolved=resolved,
        )

    def log_round(self, round_number: int, eliminations: int):
        """Log the end of a full row/column/block round."""
        if not self.enabled:
            return
        self._record('round', round_number=round_number, eliminations=eliminations)

    def log_contradiction(self, group: str, group_index: int, round_number: int, reason: str = ""):
        """Log a pass that would have emptied a cell."""
        if not self.enabled:
            return
        self._record(
            'contradiction',
            group=group,
            group_index=group_index,
            round_number=round_number,
            reason=reason,
        )

    def log_solve_finished(self, rounds: int, unresolved: int):
        """Log the end of a solve run."""
        if not self.enabled:
            return
        self._record(
            'solve_finished',
            round_number=rounds,
            unresolved=unresolved,
            reason="Solved" if unresolved == 0 else f"{unresolved} cells still open",
        )

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'group', 'group_index',
            'round_number', 'eliminations', 'resolved', 'unresolved', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_eliminations': sum(
                s.eliminations or 0 for s in self.steps if s.action_type == 'group_reduced'
            ),
            'num_rounds': sum(1 for s in self.steps if s.action_type == 'round'),
            'num_contradictions': sum(1 for s in self.steps if s.action_type == 'contradiction'),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
