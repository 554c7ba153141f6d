from __future__ import annotations

from typing import List

from ..models import AnalyzedSentence, RuleMatch
from .base import SentenceRule
from .categories import STYLE

DEFAULT_MAX_SENTENCE_WORDS = 40


class SentenceLengthRule(SentenceRule):
    """Flags sentences with more than ``max_words`` words. Off by default."""

    id = "TOO_LONG_SENTENCE"
    description = "Readability: sentence too long"
    category = STYLE
    default_off = True

    def __init__(self, max_words: int = DEFAULT_MAX_SENTENCE_WORDS) -> None:
        self.max_words = max(1, max_words)

    def can_be_ignored_for(self, sentence: AnalyzedSentence) -> bool:
        return len(sentence.tokens) <= self.max_words

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        words = [
            token
            for token in sentence.tokens_without_whitespace
            if not token.is_sentence_start and token.token[:1].isalnum()
        ]
        if len(words) <= self.max_words:
            return []
        return [
            RuleMatch(
                rule=self,
                from_pos=words[0].start_pos,
                to_pos=words[-1].end_pos,
                message=(
                    f"This sentence is {len(words)} words long (more than "
                    f"{self.max_words}). Consider splitting it."
                ),
                short_message="Long sentence",
            )
        ]
