from __future__ import annotations

from typing import List, Sequence

from rulecheck.language import Language, create_language
from rulecheck.language.base import Chunker, Disambiguator, SentenceTokenizer, Tagger
from rulecheck.models import AnalyzedSentence, Category, RuleMatch, TokenReadings
from rulecheck.rules.base import SentenceRule, TextRule

TEST_CATEGORY = Category("TEST", "Test rules")


class FirstCharacterRule(SentenceRule):
    """Flags the first character of the first word of every sentence."""

    id = "FIRST_CHARACTER"
    category = TEST_CATEGORY

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        for token in sentence.tokens_without_whitespace:
            if token.is_sentence_start:
                continue
            return [
                RuleMatch(
                    rule=self,
                    from_pos=token.start_pos,
                    to_pos=token.start_pos + 1,
                    message="first character",
                )
            ]
        return []


class FailingRule(SentenceRule):
    id = "FAILING"

    def match(self, sentence: AnalyzedSentence) -> List[RuleMatch]:
        raise RuntimeError("boom")


class FailingTextRule(TextRule):
    id = "FAILING_TEXT"

    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        raise RuntimeError("text boom")


class SentenceCounterTextRule(TextRule):
    """Reports how many sentences it has seen since the last reset."""

    id = "SENTENCE_COUNTER"
    category = TEST_CATEGORY

    def __init__(self) -> None:
        self.seen = 0

    def reset(self) -> None:
        self.seen = 0

    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        self.seen += len(sentences)
        return [RuleMatch(rule=self, from_pos=0, to_pos=0, message=f"{self.seen} sentences")]


class WholeTokenTextRule(TextRule):
    """Flags every token equal to ``target`` using document offsets."""

    id = "WHOLE_TOKEN"

    def __init__(self, target: str) -> None:
        self.target = target

    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        matches: List[RuleMatch] = []
        offset = 0
        for sentence in sentences:
            for token in sentence.tokens:
                if token.token == self.target:
                    matches.append(
                        RuleMatch(
                            rule=self,
                            from_pos=offset,
                            to_pos=offset + len(token.token),
                            message=f"found {self.target}",
                        )
                    )
                offset += token.original_length
        return matches


class FixedSpanTextRule(TextRule):
    """Reports one match at a fixed document span."""

    id = "FIXED_SPAN"

    def __init__(self, from_pos: int, to_pos: int) -> None:
        self.from_pos = from_pos
        self.to_pos = to_pos

    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        return [RuleMatch(rule=self, from_pos=self.from_pos, to_pos=self.to_pos, message="span")]


class ShortTagger(Tagger):
    """Drops the last token, breaking the tagger contract."""

    def tag(self, tokens: Sequence[str]) -> List[TokenReadings]:
        return [TokenReadings(token=token) for token in tokens[:-1]]


class BrokenSentenceTokenizer(SentenceTokenizer):
    def tokenize(self, text: str) -> List[str]:
        raise RuntimeError("segmenter down")


class ExplodingDisambiguator(Disambiguator):
    def disambiguate(self, sentence: AnalyzedSentence) -> AnalyzedSentence:
        raise KeyError("no model")


class NounPhraseChunker(Chunker):
    def add_chunk_tags(self, tokens: Sequence[TokenReadings]) -> List[TokenReadings]:
        return [
            token if token.is_whitespace else token.with_chunk_tags(["B-NP"])
            for token in tokens
        ]


def english(**kwargs) -> Language:
    """English language backend with a tiny lexicon that knows 'foo'."""
    kwargs.setdefault("lexicon", {"foo": [("NN", "foo")], "bar": [("NN", "bar")]})
    return create_language("en", **kwargs)
