"""Rule interfaces and the built-in rule set."""

from __future__ import annotations

from typing import Callable, Dict, List

from .base import CallableRule, Rule, SentenceRule, TextRule
from .brackets import UnpairedBracketsRule
from .casing import UppercaseSentenceStartRule
from .punctuation import WhitespaceBeforePunctuationRule
from .repetition import WordRepeatRule
from .style import DEFAULT_MAX_SENTENCE_WORDS, SentenceLengthRule

__all__ = [
    "Rule",
    "SentenceRule",
    "TextRule",
    "CallableRule",
    "WhitespaceBeforePunctuationRule",
    "WordRepeatRule",
    "UppercaseSentenceStartRule",
    "UnpairedBracketsRule",
    "SentenceLengthRule",
    "BUILTIN_RULES",
    "get_builtin_rules",
]

# Registry of the built-in rules, keyed by rule id.
BUILTIN_RULES: Dict[str, Callable[[], Rule]] = {
    WhitespaceBeforePunctuationRule.id: WhitespaceBeforePunctuationRule,
    WordRepeatRule.id: WordRepeatRule,
    UppercaseSentenceStartRule.id: UppercaseSentenceStartRule,
    UnpairedBracketsRule.id: UnpairedBracketsRule,
    SentenceLengthRule.id: SentenceLengthRule,
}


def get_builtin_rules(max_sentence_words: int = DEFAULT_MAX_SENTENCE_WORDS) -> List[Rule]:
    """Return fresh instances of every built-in rule."""
    rules: List[Rule] = []
    for rule_id, factory in BUILTIN_RULES.items():
        if rule_id == SentenceLengthRule.id:
            rules.append(SentenceLengthRule(max_words=max_sentence_words))
        else:
            rules.append(factory())
    return rules
