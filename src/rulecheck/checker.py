"""The checking session: rule set, activation switches and the check pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Sequence, Set

from .activation import RuleActivation, active_rules
from .analysis import SentenceAnalyzer
from .dispatch import (
    SentenceBatch,
    check_sentence_batches,
    check_text_rules,
    partition_batch,
)
from .language import Language, build_language_from_config
from .markup import AnnotatedText, annotated_text_from_markup
from .models import AnalyzedSentence, Category, ParagraphMode, RuleMatch
from .rules import Rule, get_builtin_rules
from .textutils import DEFAULT_PREVIEW_LENGTH

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .config import CheckerConfig

logger = logging.getLogger(__name__)


class RuleChecker:
    """A checking session for one language.

    The session owns the rule instances and the activation switches. Switches
    may be changed between calls to :meth:`check`; they are read once at the
    start of every call.
    """

    def __init__(
        self,
        language: Language,
        rules: Iterable[Rule] | None = None,
        *,
        list_unknown_words: bool = False,
        workers: int = 1,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        self._language = language
        self._rules: List[Rule] = list(rules) if rules is not None else get_builtin_rules()
        self._activation = RuleActivation()
        self._analyzer = SentenceAnalyzer(
            language, list_unknown_words=list_unknown_words, preview_length=preview_length
        )
        self.workers = max(1, workers)
        self.preview_length = preview_length
        self._sentence_count = 0

    @property
    def language(self) -> Language:
        return self._language

    @property
    def sentence_count(self) -> int:
        """Number of sentences seen by the last check."""
        return self._sentence_count

    # Rule set management --------------------------------------------------

    @property
    def activation(self) -> RuleActivation:
        return self._activation

    @property
    def disabled_rules(self) -> Set[str]:
        return set(self._activation.disabled_rules)

    @property
    def disabled_categories(self) -> Set[str]:
        return set(self._activation.disabled_categories)

    @property
    def enabled_rules(self) -> Set[str]:
        return set(self._activation.enabled_rules)

    def add_rule(self, rule: Rule) -> None:
        self._rules.append(rule)

    def disable_rule(self, rule_id: str) -> None:
        self._activation.disabled_rules.add(rule_id)

    def disable_rules(self, rule_ids: Iterable[str]) -> None:
        self._activation.disabled_rules.update(rule_ids)

    def disable_category(self, category: str | Category) -> None:
        category_id = category.id if isinstance(category, Category) else category
        self._activation.disabled_categories.add(category_id)

    def enable_rule(self, rule_id: str) -> None:
        """Turn on a rule that is off by default. A disabled rule stays disabled."""
        self._activation.enabled_rules.add(rule_id)

    def remove_disabled_rule(self, rule_id: str) -> None:
        """Undo :meth:`disable_rule`."""
        self._activation.disabled_rules.discard(rule_id)

    def get_all_rules(self) -> List[Rule]:
        """Return every rule of the session, with its text state cleared."""
        for rule in self._rules:
            rule.reset()
        return list(self._rules)

    def get_all_active_rules(self) -> List[Rule]:
        return active_rules(self._rules, self._activation)

    def get_rules_by_id_and_sub_id(self, rule_id: str, sub_id: str | None = None) -> List[Rule]:
        return [
            rule
            for rule in self._rules
            if rule.id == rule_id and (sub_id is None or rule.sub_id == sub_id)
        ]

    # Unknown words ----------------------------------------------------------

    @property
    def list_unknown_words(self) -> bool:
        return self._analyzer.list_unknown_words

    def set_list_unknown_words(self, list_unknown_words: bool) -> None:
        self._analyzer.list_unknown_words = list_unknown_words

    def get_unknown_words(self) -> List[str]:
        """Words the tagger knew nothing about in the last check, sorted."""
        return self._analyzer.unknown_words

    # Analysis ---------------------------------------------------------------

    def sentence_tokenize(self, text: str) -> List[str]:
        return self._analyzer.split_sentences(text)

    def analyze_text(self, text: str) -> List[AnalyzedSentence]:
        """Split and analyze text without running any rule."""
        return self._analyzer.analyze_sentences(self.sentence_tokenize(text))

    def analyze_sentence(self, sentence: str) -> AnalyzedSentence:
        return self._analyzer.analyze_sentence(sentence)

    def raw_analyze_sentence(self, sentence: str) -> AnalyzedSentence:
        return self._analyzer.raw_analyze_sentence(sentence)

    # Checking ---------------------------------------------------------------

    def check(
        self,
        text: str | AnnotatedText,
        tokenize: bool = True,
        paragraph_mode: ParagraphMode | str = ParagraphMode.NORMAL,
    ) -> List[RuleMatch]:
        """Check a text and return its matches ordered by start offset.

        Offsets refer to the original text when ``text`` is an
        :class:`AnnotatedText`, and to the plain text otherwise.
        """
        mode = ParagraphMode.parse(paragraph_mode)
        annotated_text = text if isinstance(text, AnnotatedText) else None
        plain_text = annotated_text.plain_text if annotated_text is not None else text
        sentences = self.sentence_tokenize(plain_text) if tokenize else [plain_text]

        rules = active_rules(self.get_all_rules(), self._activation)
        logger.debug("%d rules activated for language %s", len(rules), self._language)

        self._sentence_count = len(sentences)
        self._analyzer.reset_unknown_words()
        analyzed_sentences = self._analyzer.analyze_sentences(sentences)

        matches = check_text_rules(rules, analyzed_sentences, mode, annotated_text)
        matches.extend(
            self._check_sentences(rules, sentences, analyzed_sentences, mode, annotated_text)
        )
        return sorted(matches, key=lambda match: match.sort_key)

    def check_markup(
        self,
        source: str,
        tokenize: bool = True,
        paragraph_mode: ParagraphMode | str = ParagraphMode.NORMAL,
    ) -> List[RuleMatch]:
        """Check HTML or XML source; offsets refer to ``source``."""
        return self.check(annotated_text_from_markup(source), tokenize, paragraph_mode)

    def _check_sentences(
        self,
        rules: Sequence[Rule],
        sentences: Sequence[str],
        analyzed_sentences: Sequence[AnalyzedSentence],
        mode: ParagraphMode,
        annotated_text: AnnotatedText | None,
    ) -> List[RuleMatch]:
        single_line_breaks = self._language.sentence_tokenizer.single_line_breaks_mark_paragraph
        batch = SentenceBatch(tuple(sentences), tuple(analyzed_sentences))
        batches = partition_batch(batch, self.workers, single_line_breaks)
        return check_sentence_batches(
            rules,
            batches,
            mode,
            annotated_text,
            single_line_breaks_mark_paragraph=single_line_breaks,
            preview_length=self.preview_length,
            workers=self.workers,
        )


def build_checker_from_config(config: "CheckerConfig") -> RuleChecker:
    """Convenience helper to build a fully configured checker from CheckerConfig."""
    checker = RuleChecker(
        build_language_from_config(config.language),
        get_builtin_rules(max_sentence_words=config.max_sentence_words),
        list_unknown_words=config.list_unknown_words,
        workers=config.workers,
        preview_length=config.preview_length,
    )
    checker.disable_rules(config.disabled_rules)
    for category_id in config.disabled_categories:
        checker.disable_category(category_id)
    for rule_id in config.enabled_rules:
        checker.enable_rule(rule_id)
    return checker
