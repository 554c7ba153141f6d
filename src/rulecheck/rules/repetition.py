from __future__ import annotations

from typing import List

from ..models import AnalyzedSentence, RuleMatch, TokenReadings
from .base import SentenceRule
from .categories import GRAMMAR

# Doubled words that are usually intentional.
REPEAT_EXCEPTIONS = frozenset({"had", "that", "blah", "bye", "ha", "no", "very"})


class WordRepeatRule(SentenceRule):
    """Flags a word that is directly repeated ("the the")."""

    id = "WORD_REPEAT_RULE"
    description = "Word repetition (e.g. 'will will')"
    category = GRAMMAR

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        matches: List[RuleMatch] = []
        previous: TokenReadings | None = None
        for token in sentence.tokens_without_whitespace:
            if token.is_sentence_start:
                continue
            if (
                previous is not None
                and token.whitespace_before
                and _is_word(token.token)
                and token.token.lower() == previous.token.lower()
                and token.token.lower() not in REPEAT_EXCEPTIONS
            ):
                matches.append(
                    RuleMatch(
                        rule=self,
                        from_pos=previous.start_pos,
                        to_pos=token.end_pos,
                        message="Possible typo: you repeated a word.",
                        short_message="Word repetition",
                        suggested_replacements=(previous.token,),
                    )
                )
            previous = token
        return matches


def _is_word(value: str) -> bool:
    return value[:1].isalpha()
