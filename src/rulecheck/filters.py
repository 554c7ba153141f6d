from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from .models import RuleMatch


class RuleMatchFilter(ABC):
    """Post-processes the matches found in one sentence."""

    @abstractmethod
    def filter(self, matches: Sequence[RuleMatch]) -> List[RuleMatch]:
        """Return the matches to keep, in their original order."""
        raise NotImplementedError


class SameRuleGroupFilter(RuleMatchFilter):
    """Keeps only the first of several overlapping matches from one rule group."""

    def filter(self, matches: Sequence[RuleMatch]) -> List[RuleMatch]:
        kept: List[RuleMatch] = []
        for match in matches:
            if not any(_same_group_overlap(previous, match) for previous in kept):
                kept.append(match)
        return kept


def _same_group_overlap(first: RuleMatch, second: RuleMatch) -> bool:
    if first.rule.group_id != second.rule.group_id:
        return False
    if (first.from_pos, first.to_pos) == (second.from_pos, second.to_pos):
        return True
    return first.from_pos < second.to_pos and second.from_pos < first.to_pos
