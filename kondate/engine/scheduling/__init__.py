"""
Step scheduling module for cooking plans.

This module provides the pieces the StepScheduler chains together:
1. validate_steps - Rejects malformed producer output
2. earliest_starts - Dependency-only start times in topological order
3. TimelineRepairEngine - Fixes conflict overlaps and idle gaps to a fixpoint
4. optimized_time - Total plan duration

Conflicts are decided by a ConflictClassifier; KeywordConflictClassifier is
the default, keyword-table based implementation.
"""

from kondate.engine.scheduling.protocol import ConflictClassifier
from kondate.engine.scheduling.conflicts import KeywordConflictClassifier, must_serialize
from kondate.engine.scheduling.dependencies import (
    dangling_dependencies,
    dependency_floor,
    earliest_starts,
    topological_order,
)
from kondate.engine.scheduling.repair import RepairResult, TimelineRepairEngine
from kondate.engine.scheduling.summary import optimized_time
from kondate.engine.scheduling.validation import validate_steps

__all__ = [
    # Protocol
    "ConflictClassifier",
    # Classifier
    "KeywordConflictClassifier",
    "must_serialize",
    # Dependencies
    "dangling_dependencies",
    "dependency_floor",
    "earliest_starts",
    "topological_order",
    # Repair
    "RepairResult",
    "TimelineRepairEngine",
    # Summary
    "optimized_time",
    # Validation
    "validate_steps",
]
