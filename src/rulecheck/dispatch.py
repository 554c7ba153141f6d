"""Run rules over analyzed sentences.

The sentence phase is expressed as a pure work item, :func:`check_sentence_batch`,
so a long text can be split into contiguous :class:`SentenceBatch` chunks that
are checked on separate workers. Each chunk carries the counters computed by a
single sequential pass (:func:`partition_batch`). Text rules need every sentence
at once and are never chunked; they run through :func:`check_text_rules`.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import List, Sequence, Tuple, cast

from .errors import MismatchedInputError, RuleExecutionError
from .filters import RuleMatchFilter, SameRuleGroupFilter
from .markup import AnnotatedText
from .models import AnalyzedSentence, ParagraphMode, RuleMatch, RuleScope
from .positions import (
    TextPosition,
    adjust_rule_match_pos,
    adjust_text_level_match,
    compute_start_positions,
)
from .rules.base import Rule, SentenceRule, TextRule
from .textutils import DEFAULT_PREVIEW_LENGTH, abbreviate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SentenceBatch:
    """A contiguous run of sentences plus the counters at its first sentence."""

    sentences: Tuple[str, ...]
    analyzed_sentences: Tuple[AnalyzedSentence, ...]
    start: TextPosition = TextPosition()

    def __post_init__(self) -> None:
        if len(self.sentences) != len(self.analyzed_sentences):
            raise MismatchedInputError(
                "sentences and analyzed_sentences do not have the same length: "
                f"{len(self.sentences)} != {len(self.analyzed_sentences)}"
            )
        object.__setattr__(self, "sentences", tuple(self.sentences))
        object.__setattr__(self, "analyzed_sentences", tuple(self.analyzed_sentences))


def check_text_rules(
    rules: Sequence[Rule],
    analyzed_sentences: Sequence[AnalyzedSentence],
    paragraph_mode: ParagraphMode = ParagraphMode.NORMAL,
    annotated_text: AnnotatedText | None = None,
) -> List[RuleMatch]:
    """Run every text rule once over the whole sentence list."""
    matches: List[RuleMatch] = []
    for rule in rules:
        if rule.scope is not RuleScope.TEXT or not paragraph_mode.runs(rule.scope):
            continue
        try:
            found = cast(TextRule, rule).match(analyzed_sentences)
            matches.extend(
                adjust_text_level_match(match, analyzed_sentences, annotated_text)
                for match in found
            )
        except Exception as exc:  # noqa: broad-except
            raise RuleExecutionError(
                f"Could not apply text rule {rule.id!r}: {exc}", rule_id=rule.id
            ) from exc
    return matches


def check_analyzed_sentence(
    rules: Sequence[Rule],
    sentence: str,
    analyzed_sentence: AnalyzedSentence,
    position: TextPosition = TextPosition(),
    paragraph_mode: ParagraphMode = ParagraphMode.NORMAL,
    annotated_text: AnnotatedText | None = None,
    match_filter: RuleMatchFilter | None = None,
) -> List[RuleMatch]:
    """Run the sentence rules over one sentence and return document-level matches."""
    sentence_matches: List[RuleMatch] = []
    for rule in rules:
        if rule.scope is not RuleScope.SENTENCE or not paragraph_mode.runs(rule.scope):
            continue
        sentence_rule = cast(SentenceRule, rule)
        if sentence_rule.can_be_ignored_for(analyzed_sentence):
            continue
        for match in sentence_rule.match(analyzed_sentence):
            sentence_matches.append(
                adjust_rule_match_pos(match, position, sentence, annotated_text)
            )
    return (match_filter or SameRuleGroupFilter()).filter(sentence_matches)


def check_sentence_batch(
    rules: Sequence[Rule],
    batch: SentenceBatch,
    paragraph_mode: ParagraphMode = ParagraphMode.NORMAL,
    annotated_text: AnnotatedText | None = None,
    single_line_breaks_mark_paragraph: bool = False,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> List[RuleMatch]:
    """Check the sentences of one batch in order.

    Any failure aborts the batch with a :class:`RuleExecutionError` naming the
    sentence that was being checked.
    """
    matches: List[RuleMatch] = []
    position = batch.start
    for sentence, analyzed_sentence in zip(batch.sentences, batch.analyzed_sentences):
        try:
            matches.extend(
                check_analyzed_sentence(
                    rules,
                    sentence,
                    analyzed_sentence,
                    position,
                    paragraph_mode,
                    annotated_text,
                )
            )
        except Exception as exc:  # noqa: broad-except
            preview = abbreviate(analyzed_sentence.text, preview_length)
            raise RuleExecutionError(
                f"Could not check sentence: '{preview}'", sentence_preview=preview
            ) from exc
        position = position.advance(sentence, single_line_breaks_mark_paragraph)
    return matches


def partition_batch(
    batch: SentenceBatch,
    chunk_count: int,
    single_line_breaks_mark_paragraph: bool = False,
) -> List[SentenceBatch]:
    """Split a batch into up to ``chunk_count`` contiguous batches."""
    total = len(batch.sentences)
    chunk_count = max(1, min(chunk_count, total))
    if chunk_count == 1:
        return [batch]
    positions = compute_start_positions(
        batch.sentences, batch.start, single_line_breaks_mark_paragraph
    )
    size, remainder = divmod(total, chunk_count)
    chunks: List[SentenceBatch] = []
    start_idx = 0
    for index in range(chunk_count):
        end_idx = start_idx + size + (1 if index < remainder else 0)
        chunks.append(
            SentenceBatch(
                sentences=batch.sentences[start_idx:end_idx],
                analyzed_sentences=batch.analyzed_sentences[start_idx:end_idx],
                start=positions[start_idx],
            )
        )
        start_idx = end_idx
    return chunks


def check_sentence_batches(
    rules: Sequence[Rule],
    batches: Sequence[SentenceBatch],
    paragraph_mode: ParagraphMode = ParagraphMode.NORMAL,
    annotated_text: AnnotatedText | None = None,
    single_line_breaks_mark_paragraph: bool = False,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    workers: int = 1,
) -> List[RuleMatch]:
    """Check several batches, concurrently when ``workers`` > 1.

    Results are concatenated in batch order. Sentence rules are shared between
    workers, so they must not keep state.
    """
    work = partial(
        check_sentence_batch,
        rules,
        paragraph_mode=paragraph_mode,
        annotated_text=annotated_text,
        single_line_breaks_mark_paragraph=single_line_breaks_mark_paragraph,
        preview_length=preview_length,
    )
    if workers <= 1 or len(batches) <= 1:
        results = [work(batch) for batch in batches]
    else:
        logger.debug("Checking %d sentence batches on %d workers", len(batches), workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(work, batches))
    matches: List[RuleMatch] = []
    for result in results:
        matches.extend(result)
    return matches
