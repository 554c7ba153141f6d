from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Sequence, Set

from .errors import AnalysisError, ConfigurationError
from .language.base import Language
from .models import (
    SENTENCE_START_TAGNAME,
    AnalyzedSentence,
    AnalyzedToken,
    TokenReadings,
)
from .textutils import DEFAULT_PREVIEW_LENGTH, abbreviate

logger = logging.getLogger(__name__)


class SentenceAnalyzer:
    """Turns sentence strings into analyzed sentences using a language backend.

    Analysis runs the word tokenizer, the tagger, the optional chunker and
    finally the disambiguator. Tokens are laid out back to back, so the start
    position of every token is an offset into the raw sentence.
    """

    def __init__(
        self,
        language: Language,
        list_unknown_words: bool = False,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        self.language = language
        self.preview_length = preview_length
        self._list_unknown_words = list_unknown_words
        self._unknown_words: Set[str] = set()

    @property
    def list_unknown_words(self) -> bool:
        return self._list_unknown_words

    @list_unknown_words.setter
    def list_unknown_words(self, value: bool) -> None:
        self._list_unknown_words = value

    @property
    def unknown_words(self) -> List[str]:
        """Words without any tag seen since the last reset, sorted."""
        if not self._list_unknown_words:
            raise ConfigurationError(
                "Unknown words are only collected when list_unknown_words is enabled."
            )
        return sorted(self._unknown_words)

    def reset_unknown_words(self) -> None:
        self._unknown_words = set()

    def analyze_sentences(self, sentences: Sequence[str]) -> List[AnalyzedSentence]:
        """Analyze every sentence; the last one is flagged as ending a paragraph."""
        analyzed: List[AnalyzedSentence] = []
        for index, sentence in enumerate(sentences):
            analyzed_sentence = self.analyze_sentence(sentence)
            self._remember_unknown_words(analyzed_sentence)
            if index == len(sentences) - 1:
                analyzed_sentence = analyzed_sentence.with_paragraph_end()
            analyzed.append(analyzed_sentence)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Analyzed sentence:\n%s", analyzed_sentence.annotations())
        return analyzed

    def split_sentences(self, text: str) -> List[str]:
        """Split text into sentences with the language's sentence tokenizer."""
        try:
            return list(self.language.sentence_tokenizer.tokenize(text))
        except AnalysisError:
            raise
        except Exception as exc:  # noqa: broad-except
            raise self._analysis_error("split", text, exc) from exc

    def analyze_sentence(self, sentence: str) -> AnalyzedSentence:
        """Tokenize, tag and disambiguate one sentence."""
        raw = self.raw_analyze_sentence(sentence)
        try:
            return self.language.disambiguator.disambiguate(raw)
        except AnalysisError:
            raise
        except Exception as exc:  # noqa: broad-except
            raise self._analysis_error("disambiguate", sentence, exc) from exc

    def raw_analyze_sentence(self, sentence: str) -> AnalyzedSentence:
        """Tokenize and tag one sentence without disambiguation."""
        try:
            return self._raw_analyze(sentence)
        except AnalysisError:
            raise
        except Exception as exc:  # noqa: broad-except
            raise self._analysis_error("analyze", sentence, exc) from exc

    def _raw_analyze(self, sentence: str) -> AnalyzedSentence:
        tokens = list(self.language.word_tokenizer.tokenize(sentence))
        originals = self._strip_ignored_characters(tokens)
        tagged = list(self.language.tagger.tag(tokens))
        if len(tagged) != len(tokens):
            raise AnalysisError(
                f"Tagger returned {len(tagged)} records for {len(tokens)} tokens in "
                f"'{abbreviate(sentence, self.preview_length)}'"
            )
        if self.language.chunker is not None:
            tagged = list(self.language.chunker.add_chunk_tags(tagged))

        for index, original in originals.items():
            tagged[index] = tagged[index].with_original_token(
                self.language.tagger.create_token(original, None)
            )

        start_token = TokenReadings(
            token="",
            readings=(AnalyzedToken("", SENTENCE_START_TAGNAME),),
            start_pos=0,
            is_sentence_start=True,
        )
        records = [start_token]
        start_pos = 0
        for index, record in enumerate(tagged):
            whitespace_before = index > 0 and tagged[index - 1].is_whitespace
            records.append(
                replace(record, start_pos=start_pos, whitespace_before=whitespace_before)
            )
            start_pos += record.original_length

        # The sentence end sits on the last non-whitespace token.
        end_index = len(records) - 1
        for candidate in range(len(records) - 1, 0, -1):
            if not records[candidate].is_whitespace:
                end_index = candidate
                break
        end = records[end_index]
        records[end_index] = replace(
            end,
            is_sentence_end=True,
            is_paragraph_end=end_index == len(records) - 1 and end.is_linebreak,
        )
        return AnalyzedSentence(tuple(records))

    def _strip_ignored_characters(self, tokens: List[str]) -> Dict[int, str]:
        """Remove ignored characters in place and return the original tokens by index."""
        pattern = self.language.ignored_characters
        originals: Dict[int, str] = {}
        if pattern is None:
            return originals
        for index, token in enumerate(tokens):
            stripped = pattern.sub("", token)
            if stripped != token:
                originals[index] = token
                tokens[index] = stripped
        return originals

    def _remember_unknown_words(self, sentence: AnalyzedSentence) -> None:
        if not self._list_unknown_words:
            return
        for token in sentence.tokens_without_whitespace:
            if not token.is_sentence_start and not token.is_tagged:
                self._unknown_words.add(token.token)

    def _analysis_error(self, step: str, sentence: str, exc: Exception) -> AnalysisError:
        preview = abbreviate(sentence, self.preview_length)
        return AnalysisError(f"Could not {step} sentence '{preview}': {exc}")
