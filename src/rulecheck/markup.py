from __future__ import annotations

import html
from bisect import bisect_right
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import List, Tuple


@dataclass(frozen=True, slots=True)
class _Segment:
    plain_start: int
    original_start: int
    # Every plain character of a fixed segment maps to original_start.
    fixed: bool


@dataclass(frozen=True, slots=True)
class AnnotatedText:
    """Plain text derived from an original source plus a position mapping back.

    Build instances with :class:`AnnotatedTextBuilder`. Rules only ever see
    ``plain_text``; :meth:`map_position` turns plain-text offsets into offsets
    of ``original_text``.
    """

    plain_text: str
    original_text: str
    segments: Tuple[_Segment, ...]
    plain_starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "plain_starts", tuple(s.plain_start for s in self.segments)
        )

    @classmethod
    def from_plain_text(cls, text: str) -> AnnotatedText:
        return AnnotatedTextBuilder().add_text(text).build()

    def map_position(self, plain_offset: int) -> int:
        """Map a plain-text offset to the original text (monotonic, never fails)."""
        if plain_offset >= len(self.plain_text):
            return len(self.original_text)
        plain_offset = max(0, plain_offset)
        segment = self.segments[bisect_right(self.plain_starts, plain_offset) - 1]
        if segment.fixed:
            return segment.original_start
        return segment.original_start + (plain_offset - segment.plain_start)


class AnnotatedTextBuilder:
    """Collects text and markup parts in document order."""

    def __init__(self) -> None:
        self._plain: List[str] = []
        self._original: List[str] = []
        self._segments: List[_Segment] = []
        self._plain_length = 0
        self._original_length = 0

    def add_text(self, text: str) -> AnnotatedTextBuilder:
        self._append(text, text, fixed=False)
        return self

    def add_markup(self, markup: str, interpret_as: str = "") -> AnnotatedTextBuilder:
        """Add markup; ``interpret_as`` is what the markup means in plain text."""
        self._append(markup, interpret_as, fixed=True)
        return self

    def build(self) -> AnnotatedText:
        segments = tuple(self._segments) or (_Segment(0, 0, False),)
        return AnnotatedText(
            plain_text="".join(self._plain),
            original_text="".join(self._original),
            segments=segments,
        )

    def _append(self, original: str, plain: str, *, fixed: bool) -> None:
        if plain:
            self._segments.append(
                _Segment(self._plain_length, self._original_length, fixed)
            )
        self._plain.append(plain)
        self._original.append(original)
        self._plain_length += len(plain)
        self._original_length += len(original)


BLOCK_TAGS = {
    "p",
    "div",
    "li",
    "ul",
    "ol",
    "section",
    "article",
    "blockquote",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
}

_TEXT = "text"
_MARKUP = "markup"
_ENTITY = "entity"


class _MarkupSplitter(HTMLParser):
    """Records where every text, tag and entity part of the source starts.

    A part ends where the next one starts, so the parts tile the source
    exactly and no character is lost.
    """

    def __init__(self, source: str) -> None:
        super().__init__(convert_charrefs=False)
        self._line_starts = [0] + [
            index + 1 for index, char in enumerate(source) if char == "\n"
        ]
        self.parts: List[Tuple[int, str, str]] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._record(_MARKUP, "\n" if tag == "br" else "")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        self._record(_MARKUP, "\n\n" if tag in BLOCK_TAGS else "")

    def handle_data(self, data: str) -> None:
        self._record(_TEXT)

    def handle_entityref(self, name: str) -> None:
        self._record(_ENTITY)

    def handle_charref(self, name: str) -> None:
        self._record(_ENTITY)

    def handle_comment(self, data: str) -> None:
        self._record(_MARKUP)

    def handle_decl(self, decl: str) -> None:
        self._record(_MARKUP)

    def handle_pi(self, data: str) -> None:
        self._record(_MARKUP)

    def unknown_decl(self, data: str) -> None:
        self._record(_MARKUP)

    def _record(self, kind: str, interpret_as: str = "") -> None:
        line, column = self.getpos()
        self.parts.append((self._line_starts[line - 1] + column, kind, interpret_as))


def annotated_text_from_markup(source: str) -> AnnotatedText:
    """Split HTML/XML source into text and markup parts."""
    splitter = _MarkupSplitter(source)
    splitter.feed(source)
    splitter.close()

    builder = AnnotatedTextBuilder()
    parts = splitter.parts
    if not parts or parts[0][0] > 0:
        parts.insert(0, (0, _TEXT, ""))
    for index, (start, kind, interpret_as) in enumerate(parts):
        end = parts[index + 1][0] if index + 1 < len(parts) else len(source)
        chunk = source[start:end]
        if kind == _TEXT:
            builder.add_text(chunk)
        elif kind == _ENTITY:
            builder.add_markup(chunk, html.unescape(chunk))
        else:
            builder.add_markup(chunk, interpret_as)
    return builder.build()
