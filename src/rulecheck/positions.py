"""Turn rule offsets into document offsets, lines and columns.

Line and column numbers are 1-based. Sentence rules report offsets relative to
their sentence; text rules report offsets relative to the whole plain text.
When the input came with markup, offsets are finally mapped onto the original
text through :class:`~rulecheck.markup.AnnotatedText`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from .markup import AnnotatedText
from .models import AnalyzedSentence, RuleMatch
from .textutils import LINE_BREAK, count_line_breaks


@dataclass(frozen=True, slots=True)
class TextPosition:
    """Running counters at the start of a sentence."""

    char_count: int = 0
    line_count: int = 1
    column_count: int = 1

    def advance(
        self, sentence: str, single_line_breaks_mark_paragraph: bool = False
    ) -> TextPosition:
        """Return the counters at the start of the sentence following ``sentence``."""
        line_break_pos = sentence.rfind(LINE_BREAK)
        if line_break_pos == -1:
            column_count = self.column_count + len(sentence)
        elif line_break_pos == 0:
            column_count = len(sentence)
            if not single_line_breaks_mark_paragraph:
                column_count -= 1
        else:
            column_count = len(sentence) - line_break_pos
        return TextPosition(
            char_count=self.char_count + len(sentence),
            line_count=self.line_count + count_line_breaks(sentence),
            column_count=column_count,
        )


@dataclass(frozen=True, slots=True)
class LineColumn:
    line: int
    column: int


def compute_start_positions(
    sentences: Sequence[str],
    start: TextPosition = TextPosition(),
    single_line_breaks_mark_paragraph: bool = False,
) -> List[TextPosition]:
    """Return the counters at the start of every sentence, plus the end position."""
    positions = [start]
    for sentence in sentences:
        positions.append(
            positions[-1].advance(sentence, single_line_breaks_mark_paragraph)
        )
    return positions


def adjust_rule_match_pos(
    match: RuleMatch,
    position: TextPosition,
    sentence: str,
    annotated_text: AnnotatedText | None = None,
) -> RuleMatch:
    """Return a copy of a sentence-local match with document coordinates."""
    plain_from = match.from_pos + position.char_count
    plain_to = match.to_pos + position.char_count
    from_pos, to_pos = _map_span(plain_from, plain_to, annotated_text)

    part_to_error = sentence[: match.from_pos]
    part_to_end_of_error = sentence[: match.to_pos]
    return replace(
        match,
        from_pos=from_pos,
        to_pos=to_pos,
        line=position.line_count + count_line_breaks(part_to_error),
        end_line=position.line_count + count_line_breaks(part_to_end_of_error),
        column=_column(part_to_error, position.column_count),
        end_column=_column(part_to_end_of_error, position.column_count),
        offset=plain_from,
    )


def text_level_line_columns(
    match: RuleMatch, analyzed_sentences: Sequence[AnalyzedSentence]
) -> Tuple[LineColumn | None, LineColumn | None]:
    """Find line/column of a text-level match by scanning all tokens.

    Offsets that don't fall on a token boundary stay ``None``.
    """
    start: LineColumn | None = None
    end: LineColumn | None = None
    line, column, char_count = 1, 0, 0
    for sentence in analyzed_sentences:
        for reading in sentence.tokens:
            token = reading.token
            if token == LINE_BREAK:
                line += 1
                column = 0
            else:
                column += reading.original_length
            char_count += reading.original_length
            if char_count == match.from_pos:
                start = LineColumn(line, column + 1)
            if char_count == match.to_pos:
                end = LineColumn(line, column + 1)
    return start, end


def adjust_text_level_match(
    match: RuleMatch,
    analyzed_sentences: Sequence[AnalyzedSentence],
    annotated_text: AnnotatedText | None = None,
) -> RuleMatch:
    """Return a copy of a text-level match with line/column and mapped offsets."""
    start, end = text_level_line_columns(match, analyzed_sentences)
    from_pos, to_pos = _map_span(match.from_pos, match.to_pos, annotated_text)
    return replace(
        match,
        from_pos=from_pos,
        to_pos=to_pos,
        line=start.line if start else None,
        column=start.column if start else None,
        end_line=end.line if end else None,
        end_column=end.column if end else None,
        offset=match.from_pos,
    )


def _map_span(
    plain_from: int, plain_to: int, annotated_text: AnnotatedText | None
) -> Tuple[int, int]:
    if annotated_text is None:
        return plain_from, plain_to
    from_pos = annotated_text.map_position(plain_from)
    if plain_to <= plain_from:
        return from_pos, from_pos
    # Map the last character of the span; the end itself may sit past a markup gap.
    to_pos = annotated_text.map_position(plain_to - 1) + 1
    return from_pos, max(from_pos, to_pos)


def _column(prefix: str, column_count: int) -> int:
    last_line_break = prefix.rfind(LINE_BREAK)
    if last_line_break == -1:
        return len(prefix) + column_count
    return len(prefix) - last_line_break
