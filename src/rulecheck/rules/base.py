from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from ..models import AnalyzedSentence, Category, RuleMatch, RuleScope


class Rule(ABC):
    """A self-contained checking unit.

    ``scope`` tells the dispatcher which variant it is dealing with:
    :class:`SentenceRule` sees one sentence at a time, :class:`TextRule` sees
    the full ordered sentence list of a check call.
    """

    id: str = ""
    sub_id: str | None = None
    description: str = ""
    category: Category | None = None
    default_off: bool = False
    scope: RuleScope

    @property
    def group_id(self) -> str:
        """Matches of rules sharing a group id are de-duplicated per sentence."""
        return self.id

    def reset(self) -> None:
        """Clear any state accumulated while checking a text."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class SentenceRule(Rule):
    """Rule that checks one analyzed sentence; offsets are sentence-local."""

    scope = RuleScope.SENTENCE

    @abstractmethod
    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        """Return the matches found in the sentence."""
        raise NotImplementedError

    def can_be_ignored_for(self, sentence: AnalyzedSentence) -> bool:
        """Return True when the rule can't possibly match; must be cheap."""
        return False


class TextRule(Rule):
    """Rule that checks the whole text; offsets are relative to the plain text."""

    scope = RuleScope.TEXT

    @abstractmethod
    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        """Return the matches found across all sentences."""
        raise NotImplementedError


class CallableRule(SentenceRule):
    """Adapt an arbitrary callable into the SentenceRule interface."""

    def __init__(
        self,
        rule_id: str,
        func: Callable[[SentenceRule, AnalyzedSentence], Sequence[RuleMatch]],
        *,
        description: str = "",
        category: Category | None = None,
        default_off: bool = False,
        sub_id: str | None = None,
    ) -> None:
        self.id = rule_id
        self.sub_id = sub_id
        self.description = description
        self.category = category
        self.default_off = default_off
        self._func = func

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        return list(self._func(self, sentence))
