"""
Protocol definition for conflict classifiers.

Defines the interface the repair engine uses to decide which steps must not
share time.
"""

from typing import Protocol

from kondate.models.schemas import Step


class ConflictClassifier(Protocol):
    """
    Protocol for conflict classification implementations.

    KeywordConflictClassifier implements this with fixed vocabulary tables;
    a resource-ownership model can replace it without touching the engine.
    Implementations must be pure: the same pair always gets the same answer.
    """

    def must_serialize(self, a: Step, b: Step) -> bool:
        """
        Decide whether two distinct steps must run one after the other.

        Args:
            a: First step.
            b: Second step.

        Returns:
            True if the steps' time intervals may not overlap.
        """
        ...
