"""
Keyword-based conflict classifier.

Decides whether two cooking steps must be serialized. The parallel flag is
absolute; the description heuristics only refine pairs that both declare
themselves parallel-safe.
"""

import logging
from typing import FrozenSet, Iterable, Optional, Sequence, Set

from kondate.engine.scheduling.vocabulary import EQUIPMENT_GROUPS, INGREDIENT_KEYWORDS
from kondate.models.schemas import Step

logger = logging.getLogger(__name__)


class KeywordConflictClassifier:
    """
    Rule-based conflict classifier using fixed vocabulary tables.

    Rules, in order:
    1. Either step is not parallelizable -> conflict.
    2. Both steps carry different dish labels -> no conflict.
    3. The descriptions mention a common ingredient -> conflict.
    4. The descriptions hit the same equipment group -> conflict.
    5. Otherwise no conflict.
    """

    def __init__(
        self,
        ingredient_keywords: Optional[Iterable[str]] = None,
        equipment_groups: Optional[Sequence[FrozenSet[str]]] = None,
    ):
        """
        Initialize the classifier.

        Args:
            ingredient_keywords: Ingredient terms. Defaults to INGREDIENT_KEYWORDS.
            equipment_groups: Groups of equipment terms. Defaults to EQUIPMENT_GROUPS.
        """
        self._ingredient_keywords = tuple(
            INGREDIENT_KEYWORDS if ingredient_keywords is None else ingredient_keywords
        )
        self._equipment_groups = tuple(
            frozenset(group)
            for group in (EQUIPMENT_GROUPS if equipment_groups is None else equipment_groups)
        )

    def must_serialize(self, a: Step, b: Step) -> bool:
        """
        Decide whether two distinct steps must run one after the other.

        Args:
            a: First step.
            b: Second step.

        Returns:
            True if the steps may not overlap in time.
        """
        if not a.can_parallel or not b.can_parallel:
            return True

        if a.dish_label and b.dish_label and a.dish_label != b.dish_label:
            return False

        shared = self.ingredients_in(a.description) & self.ingredients_in(b.description)
        if shared:
            logger.debug(
                f"Steps {a.id} and {b.id} share ingredients {sorted(shared)}"
            )
            return True

        if self._share_equipment(a.description, b.description):
            logger.debug(f"Steps {a.id} and {b.id} compete for the same equipment")
            return True

        return False

    def ingredients_in(self, text: str) -> Set[str]:
        """Return the vocabulary ingredients mentioned in a description."""
        return {term for term in self._ingredient_keywords if term in text}

    def equipment_groups_in(self, text: str) -> Set[int]:
        """Return the indexes of equipment groups mentioned in a description."""
        return {
            index
            for index, group in enumerate(self._equipment_groups)
            if any(term in text for term in group)
        }

    def _share_equipment(self, text_a: str, text_b: str) -> bool:
        return bool(self.equipment_groups_in(text_a) & self.equipment_groups_in(text_b))


_default_classifier = KeywordConflictClassifier()


def must_serialize(a: Step, b: Step) -> bool:
    """Classify a pair with the default vocabulary tables."""
    return _default_classifier.must_serialize(a, b)
