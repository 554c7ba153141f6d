from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Sequence, Tuple

from ..models import AnalyzedSentence, AnalyzedToken, TokenReadings
from ..textutils import is_whitespace
from .base import Disambiguator, SentenceTokenizer, Tagger, WordTokenizer

SENTENCE_END_RE = re.compile(r"[.!?…]+[\"'”’)\]]*\s+")
PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n\s*")
LINE_BREAK_RE = re.compile(r"\n")
PREVIOUS_WORD_RE = re.compile(r"(\S+)$")
WORD_TOKEN_RE = re.compile(r"[\w\u00ad]+(?:['\u2019][\w\u00ad]+)*|\s|[^\w\s]")
NUMBER_RE = re.compile(r"\d+")

ABBREVIATIONS = frozenset(
    {"mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "vs", "e.g", "i.e", "cf", "approx"}
)


class RegexSentenceTokenizer(SentenceTokenizer):
    """Splits after terminal punctuation and the whitespace that follows it.

    Blank lines always end a sentence; with ``single_line_breaks_mark_paragraph``
    every newline does. A period after a known abbreviation does not.
    """

    def __init__(
        self,
        single_line_breaks_mark_paragraph: bool = False,
        abbreviations: Iterable[str] = ABBREVIATIONS,
    ) -> None:
        self.single_line_breaks_mark_paragraph = single_line_breaks_mark_paragraph
        self._abbreviations = frozenset(word.lower() for word in abbreviations)

    def tokenize(self, text: str) -> List[str]:
        if not text:
            return []
        boundaries = {
            match.end()
            for match in SENTENCE_END_RE.finditer(text)
            if not self._follows_abbreviation(text, match)
        }
        break_re = (
            LINE_BREAK_RE if self.single_line_breaks_mark_paragraph else PARAGRAPH_BREAK_RE
        )
        boundaries.update(match.end() for match in break_re.finditer(text))

        sentences: List[str] = []
        start = 0
        for boundary in sorted(boundaries):
            if start < boundary < len(text):
                sentences.append(text[start:boundary])
                start = boundary
        sentences.append(text[start:])
        return sentences

    def _follows_abbreviation(self, text: str, match: re.Match[str]) -> bool:
        if not match.group().startswith(".") or match.group().startswith(".."):
            return False
        previous = PREVIOUS_WORD_RE.search(text[max(0, match.start() - 20) : match.start()])
        return previous is not None and previous.group(1).lower() in self._abbreviations


class RegexWordTokenizer(WordTokenizer):
    """Words (with inner apostrophes), single whitespace characters, single symbols."""

    def tokenize(self, sentence: str) -> List[str]:
        return WORD_TOKEN_RE.findall(sentence)


class LexiconTagger(Tagger):
    """Looks tokens up in a lexicon of ``word -> [(pos_tag, lemma), ...]``.

    Numbers are tagged ``CD`` and punctuation ``PUNCT``; any other word missing
    from the lexicon gets a single reading without a tag.
    """

    def __init__(self, lexicon: Mapping[str, Sequence[Tuple[str, str]]] | None = None) -> None:
        self._lexicon = {word.lower(): list(entries) for word, entries in (lexicon or {}).items()}

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._lexicon

    def tag(self, tokens: Sequence[str]) -> List[TokenReadings]:
        return [TokenReadings(token=token, readings=self._readings(token)) for token in tokens]

    def _readings(self, token: str) -> Tuple[AnalyzedToken, ...]:
        if is_whitespace(token):
            return (AnalyzedToken(token),)
        entries = self._lexicon.get(token.lower())
        if entries:
            return tuple(AnalyzedToken(token, pos_tag, lemma) for pos_tag, lemma in entries)
        if NUMBER_RE.fullmatch(token):
            return (AnalyzedToken(token, "CD", token),)
        if not any(ch.isalnum() for ch in token):
            return (AnalyzedToken(token, "PUNCT", token),)
        return (AnalyzedToken(token),)


class IdentityDisambiguator(Disambiguator):
    """Leaves every reading in place."""

    def disambiguate(self, sentence: AnalyzedSentence) -> AnalyzedSentence:
        return sentence
