"""Recovery from out-of-date working copies."""

from .coordinator import ConflictRecoveryCoordinator, RecoveryOutcome, is_stale_conflict

__all__ = ["ConflictRecoveryCoordinator", "RecoveryOutcome", "is_stale_conflict"]
