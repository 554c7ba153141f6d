from __future__ import annotations

from typing import List

from ..models import AnalyzedSentence, RuleMatch
from .base import SentenceRule
from .categories import CASING

OPENING_PUNCTUATION = frozenset({'"', "'", "(", "[", "{", "“", "‘", "«"})


class UppercaseSentenceStartRule(SentenceRule):
    """Flags a sentence whose first word starts with a lowercase letter."""

    id = "UPPERCASE_SENTENCE_START"
    description = "Checks that a sentence starts with an uppercase letter"
    category = CASING

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        for token in sentence.tokens_without_whitespace:
            text = token.token
            if token.is_sentence_start or text in OPENING_PUNCTUATION:
                continue
            first = text[:1]
            # Mixed-case words such as "iPhone" are written that way on purpose.
            if not (first.isalpha() and first.islower()) or any(
                ch.isupper() for ch in text[1:]
            ):
                return []
            return [
                RuleMatch(
                    rule=self,
                    from_pos=token.start_pos,
                    to_pos=token.end_pos,
                    message="This sentence does not start with an uppercase letter.",
                    short_message="Lowercase sentence start",
                    suggested_replacements=(first.upper() + text[1:],),
                )
            ]
        return []
