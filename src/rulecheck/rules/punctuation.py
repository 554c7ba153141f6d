from __future__ import annotations

from typing import List

from ..models import AnalyzedSentence, RuleMatch
from .base import SentenceRule
from .categories import TYPOGRAPHY

PUNCTUATION_MARKS = frozenset(".,;:!?")


class WhitespaceBeforePunctuationRule(SentenceRule):
    """Flags spaces or tabs in front of a punctuation mark ("end .")."""

    id = "WHITESPACE_BEFORE_PUNCTUATION"
    description = "Whitespace before punctuation"
    category = TYPOGRAPHY

    def can_be_ignored_for(self, sentence: AnalyzedSentence) -> bool:
        return not any(token.token in PUNCTUATION_MARKS for token in sentence.tokens)

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        tokens = sentence.tokens
        matches: List[RuleMatch] = []
        for index, token in enumerate(tokens):
            if token.token not in PUNCTUATION_MARKS or not token.whitespace_before:
                continue
            start = index
            while (
                start > 1
                and tokens[start - 1].is_whitespace
                and not tokens[start - 1].is_linebreak
            ):
                start -= 1
            # Leading whitespace and whitespace after a line break are layout.
            if start == index or start == 1 or tokens[start - 1].is_linebreak:
                continue
            if index + 1 < len(tokens) and tokens[index + 1].token[:1].isdigit():
                continue
            matches.append(
                RuleMatch(
                    rule=self,
                    from_pos=tokens[start].start_pos,
                    to_pos=token.start_pos,
                    message="Don't put a space before the punctuation mark.",
                    short_message="Space before punctuation",
                    suggested_replacements=("",),
                )
            )
        return matches
