from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Tuple

from .errors import ConfigurationError
from .textutils import LINE_BREAKS, is_whitespace

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .rules.base import Rule

SENTENCE_START_TAGNAME = "SENT_START"
SENTENCE_END_TAGNAME = "SENT_END"
PARAGRAPH_END_TAGNAME = "PARA_END"


@dataclass(slots=True)
class Document:
    """Represents an input document."""

    doc_id: str
    text: str
    markup: bool = False


@dataclass(frozen=True, slots=True)
class AnalyzedToken:
    """One reading of a token: its surface form, part-of-speech tag and lemma."""

    token: str
    pos_tag: str | None = None
    lemma: str | None = None

    @property
    def has_no_tag(self) -> bool:
        return self.pos_tag is None


@dataclass(frozen=True, slots=True)
class TokenReadings:
    """A token with all of its readings and its boundary flags."""

    token: str
    readings: Tuple[AnalyzedToken, ...] = ()
    start_pos: int = 0
    whitespace_before: bool = False
    is_sentence_start: bool = False
    is_sentence_end: bool = False
    is_paragraph_end: bool = False
    chunk_tags: Tuple[str, ...] = ()
    original_token: str | None = None

    @property
    def original_length(self) -> int:
        """Length of the token in the raw text, ignored characters included."""
        if self.original_token is None:
            return len(self.token)
        return len(self.original_token)

    @property
    def end_pos(self) -> int:
        return self.start_pos + self.original_length

    @property
    def is_whitespace(self) -> bool:
        return is_whitespace(self.token)

    @property
    def is_linebreak(self) -> bool:
        return self.token in LINE_BREAKS

    @property
    def is_tagged(self) -> bool:
        return any(not reading.has_no_tag for reading in self.readings)

    def has_pos_tag(self, pos_tag: str) -> bool:
        return any(reading.pos_tag == pos_tag for reading in self.readings)

    def with_original_token(self, original: AnalyzedToken) -> TokenReadings:
        """Return a copy remembering the raw form of a token stripped of ignored characters.

        The stripped form stays the surface every rule sees; the raw form is
        kept as an extra reading and sizes the token in the raw text.
        """
        return replace(
            self,
            readings=self.readings + (original,),
            original_token=original.token,
        )

    def with_chunk_tags(self, chunk_tags: Iterable[str]) -> TokenReadings:
        return replace(self, chunk_tags=self.chunk_tags + tuple(chunk_tags))

    def __str__(self) -> str:
        tags = ",".join(
            f"{reading.lemma or ''}/{reading.pos_tag}" for reading in self.readings
        )
        return f"{self.token}[{tags}]"


@dataclass(frozen=True, slots=True)
class AnalyzedSentence:
    """An immutable, non-empty run of tokens making up one sentence."""

    tokens: Tuple[TokenReadings, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("An analyzed sentence needs at least one token.")
        if not isinstance(self.tokens, tuple):
            object.__setattr__(self, "tokens", tuple(self.tokens))

    @property
    def tokens_without_whitespace(self) -> Tuple[TokenReadings, ...]:
        return tuple(
            token
            for token in self.tokens
            if token.is_sentence_start or not token.is_whitespace
        )

    @property
    def text(self) -> str:
        return "".join(token.token for token in self.tokens)

    def with_paragraph_end(self) -> AnalyzedSentence:
        """Return a copy whose last token is flagged as the end of a paragraph."""
        last = replace(self.tokens[-1], is_paragraph_end=True)
        return AnalyzedSentence(self.tokens[:-1] + (last,))

    def annotations(self) -> str:
        """Return a one-line-per-token dump of readings, used for debug logging."""
        lines: list[str] = []
        for token in self.tokens:
            flags = [
                name
                for name, enabled in (
                    (SENTENCE_START_TAGNAME, token.is_sentence_start),
                    (SENTENCE_END_TAGNAME, token.is_sentence_end),
                    (PARAGRAPH_END_TAGNAME, token.is_paragraph_end),
                )
                if enabled
            ]
            lines.append(f"{token.start_pos}: {token} {' '.join(flags)}".rstrip())
        return "\n".join(lines)

    def __str__(self) -> str:
        return " ".join(str(token) for token in self.tokens if not token.is_whitespace)


@dataclass(frozen=True, slots=True)
class Category:
    """A named group of rules that can be disabled together."""

    id: str
    name: str


class RuleScope(Enum):
    """What a rule looks at: one sentence or the whole ordered sentence list."""

    SENTENCE = "sentence"
    TEXT = "text"


class ParagraphMode(Enum):
    """Selects which rule variants run during a check."""

    NORMAL = "normal"
    ONLY_PARAGRAPH = "only_paragraph"
    ONLY_SENTENCE = "only_sentence"

    def runs(self, scope: RuleScope) -> bool:
        if self is ParagraphMode.ONLY_PARAGRAPH:
            return scope is RuleScope.TEXT
        if self is ParagraphMode.ONLY_SENTENCE:
            return scope is RuleScope.SENTENCE
        return True

    @classmethod
    def parse(cls, value: str | ParagraphMode) -> ParagraphMode:
        if isinstance(value, ParagraphMode):
            return value
        normalized = value.lower().strip().replace("-", "_")
        for mode in cls:
            if mode.value == normalized:
                return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ConfigurationError(
            f"Unknown paragraph mode {value!r}; expected one of {choices}."
        )


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """A single finding produced by a rule.

    Rules create matches with ``from_pos``/``to_pos`` only; the dispatcher
    returns new matches with document offsets and 1-based line/column fields
    filled in.
    """

    rule: "Rule"
    from_pos: int
    to_pos: int
    message: str
    short_message: str | None = None
    suggested_replacements: Tuple[str, ...] = field(default_factory=tuple)
    line: int | None = None
    end_line: int | None = None
    column: int | None = None
    end_column: int | None = None
    offset: int | None = None

    def __post_init__(self) -> None:
        if self.from_pos < 0 or self.to_pos < self.from_pos:
            raise ValueError(
                f"Invalid match span [{self.from_pos}, {self.to_pos}) for rule {self.rule.id}"
            )
        if not isinstance(self.suggested_replacements, tuple):
            object.__setattr__(
                self, "suggested_replacements", tuple(self.suggested_replacements)
            )

    @property
    def rule_id(self) -> str:
        return self.rule.id

    @property
    def sort_key(self) -> int:
        return self.from_pos

    def __str__(self) -> str:
        return f"{self.rule.id}:{self.from_pos}-{self.to_pos}:{self.message}"
