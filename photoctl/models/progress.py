"""Progress models for tracking upload status.

Each item's progress bar is split across its two phases. Encoding is local
and quick, so it occupies 1-60; transmission dominates wall-clock time and
occupies 61-99. 100 is reserved for terminal states.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# =============================================================================
# Phase Boundaries
# =============================================================================

ENCODE_PHASE_MIN = 1
ENCODE_PHASE_MAX = 60
TRANSMIT_PHASE_MIN = 61
TRANSMIT_PHASE_MAX = 99
COMPLETE = 100


def _fraction(done: int, total: int) -> float:
    if total <= 0:
        return 1.0
    return min(max(done / total, 0.0), 1.0)


def encode_progress(bytes_read: int, total_bytes: int) -> int:
    """Blend the encode phase into the [1, 60] range."""
    value = round(_fraction(bytes_read, total_bytes) * ENCODE_PHASE_MAX)
    return max(ENCODE_PHASE_MIN, min(ENCODE_PHASE_MAX, value))


def transmit_progress(bytes_sent: int, total_bytes: int) -> int:
    """Blend the transmit phase into the [61, 99] range."""
    span = TRANSMIT_PHASE_MAX - ENCODE_PHASE_MAX
    value = ENCODE_PHASE_MAX + round(_fraction(bytes_sent, total_bytes) * span)
    return max(TRANSMIT_PHASE_MIN, min(TRANSMIT_PHASE_MAX, value))


# =============================================================================
# Summaries
# =============================================================================


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate counts derived from the current item set."""

    total: int = 0
    success: int = 0
    failed: int = 0
    in_progress: int = 0

    @property
    def queued(self) -> int:
        """Items not yet picked up by a worker."""
        return self.total - self.success - self.failed - self.in_progress

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for output."""
        return {
            "total": self.total,
            "success": self.success,
            "failed": self.failed,
            "in_progress": self.in_progress,
        }


@dataclass
class RunResult:
    """Outcome of one scheduler run over a set of items."""

    attempted: int
    succeeded: int
    failed: int
    duration: float
    errors: List[str] = field(default_factory=list)
    skipped: int = 0

    @property
    def had_failure(self) -> bool:
        """Check if at least one item ended in error."""
        return self.failed > 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage over items that still belong to the batch."""
        counted = self.attempted - self.skipped
        if counted <= 0:
            return 100.0
        return (self.succeeded / counted) * 100
