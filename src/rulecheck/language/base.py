from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from ..models import AnalyzedSentence, AnalyzedToken, TokenReadings


class SentenceTokenizer(ABC):
    """Splits text into sentences; joining the sentences gives back the text."""

    single_line_breaks_mark_paragraph: bool = False

    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        raise NotImplementedError


class WordTokenizer(ABC):
    """Splits a sentence into tokens; joining the tokens gives back the sentence."""

    @abstractmethod
    def tokenize(self, sentence: str) -> List[str]:
        raise NotImplementedError


class Tagger(ABC):
    """Assigns readings to tokens."""

    @abstractmethod
    def tag(self, tokens: Sequence[str]) -> List[TokenReadings]:
        """Return one record per token, in the same order."""
        raise NotImplementedError

    def create_token(self, token: str, pos_tag: str | None) -> AnalyzedToken:
        return AnalyzedToken(token=token, pos_tag=pos_tag, lemma=None)


class Chunker(ABC):
    """Adds chunk tags to tagged tokens."""

    @abstractmethod
    def add_chunk_tags(self, tokens: Sequence[TokenReadings]) -> List[TokenReadings]:
        raise NotImplementedError


class Disambiguator(ABC):
    """Removes or adjusts readings once a sentence has been assembled."""

    @abstractmethod
    def disambiguate(self, sentence: AnalyzedSentence) -> AnalyzedSentence:
        raise NotImplementedError


@dataclass(slots=True)
class Language:
    """The linguistic backend used to analyze text of one language."""

    code: str
    name: str
    sentence_tokenizer: SentenceTokenizer
    word_tokenizer: WordTokenizer
    tagger: Tagger
    disambiguator: Disambiguator
    chunker: Chunker | None = None
    # Characters stripped from tokens before tagging, e.g. soft hyphens.
    ignored_characters: re.Pattern[str] | None = None

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
