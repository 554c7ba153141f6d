from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .base import (
    Chunker,
    Disambiguator,
    Language,
    SentenceTokenizer,
    Tagger,
    WordTokenizer,
)
from .lexicon import DEFAULT_ENGLISH_LEXICON, Lexicon, load_lexicon
from .nltk_tagger import NltkTagger
from .simple import (
    IdentityDisambiguator,
    LexiconTagger,
    RegexSentenceTokenizer,
    RegexWordTokenizer,
)

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import LanguageSettings

__all__ = [
    "Chunker",
    "Disambiguator",
    "Language",
    "SentenceTokenizer",
    "Tagger",
    "WordTokenizer",
    "IdentityDisambiguator",
    "LexiconTagger",
    "NltkTagger",
    "RegexSentenceTokenizer",
    "RegexWordTokenizer",
    "DEFAULT_ENGLISH_LEXICON",
    "Lexicon",
    "load_lexicon",
    "create_language",
    "build_language_from_config",
]

DEFAULT_IGNORED_CHARACTERS = "\u00ad"

_LANGUAGE_NAMES = {"en": "English", "generic": "Generic"}


def create_language(
    code: str = "en",
    *,
    tagger: str | Tagger = "lexicon",
    lexicon: Lexicon | None = None,
    ignored_characters: str | None = DEFAULT_IGNORED_CHARACTERS,
    single_line_breaks_mark_paragraph: bool = False,
) -> Language:
    """Factory for building a language backend by code."""
    normalized = code.lower().strip()
    if normalized not in _LANGUAGE_NAMES:
        raise ConfigurationError(f"Unknown language '{code}'.")
    if lexicon is None:
        lexicon = DEFAULT_ENGLISH_LEXICON if normalized == "en" else {}
    return Language(
        code=normalized,
        name=_LANGUAGE_NAMES[normalized],
        sentence_tokenizer=RegexSentenceTokenizer(
            single_line_breaks_mark_paragraph=single_line_breaks_mark_paragraph
        ),
        word_tokenizer=RegexWordTokenizer(),
        tagger=tagger if isinstance(tagger, Tagger) else _create_tagger(tagger, lexicon),
        disambiguator=IdentityDisambiguator(),
        ignored_characters=re.compile(ignored_characters) if ignored_characters else None,
    )


def build_language_from_config(settings: "LanguageSettings") -> Language:
    """Convenience helper to build a language from LanguageSettings."""
    lexicon = load_lexicon(Path(settings.lexicon_path)) if settings.lexicon_path else None
    return create_language(
        settings.code,
        tagger=settings.tagger,
        lexicon=lexicon,
        ignored_characters=settings.ignored_characters,
        single_line_breaks_mark_paragraph=settings.single_line_breaks_mark_paragraph,
    )


def _create_tagger(name: str, lexicon: Lexicon) -> Tagger:
    normalized = name.lower().strip()
    if normalized == "lexicon":
        return LexiconTagger(lexicon)
    if normalized == "nltk":
        return NltkTagger()
    raise ConfigurationError(f"Unknown tagger '{name}'.")
