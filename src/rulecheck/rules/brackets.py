from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..models import AnalyzedSentence, RuleMatch
from .base import TextRule
from .categories import PUNCTUATION

SYMBOL_PAIRS = (
    ("(", ")"),
    ("[", "]"),
    ("{", "}"),
    ("“", "”"),
    ("«", "»"),
)
OPENING: Dict[str, str] = {start: end for start, end in SYMBOL_PAIRS}
CLOSING: Dict[str, str] = {end: start for start, end in SYMBOL_PAIRS}


@dataclass(slots=True)
class _OpenSymbol:
    symbol: str
    position: int
    call: int


class UnpairedBracketsRule(TextRule):
    """Finds brackets and typographic quotes that are never closed or opened.

    Open symbols are remembered across calls to :meth:`match` so that a text
    checked in several pieces is treated as one document; :meth:`reset` forgets
    them.
    """

    id = "UNPAIRED_BRACKETS"
    description = "Unpaired braces, brackets, parentheses and quotation marks"
    category = PUNCTUATION

    def __init__(self) -> None:
        self._open: List[_OpenSymbol] = []
        self._calls = 0

    def reset(self) -> None:
        self._open = []
        self._calls = 0

    def match(self, sentences: Sequence[AnalyzedSentence]) -> List[RuleMatch]:
        self._calls += 1
        matches: List[RuleMatch] = []
        char_count = 0
        for sentence in sentences:
            for token in sentence.tokens:
                symbol = token.token
                if symbol in OPENING:
                    self._open.append(_OpenSymbol(symbol, char_count, self._calls))
                elif symbol in CLOSING:
                    if self._open and self._open[-1].symbol == CLOSING[symbol]:
                        self._open.pop()
                    else:
                        matches.append(
                            self._unpaired(char_count, symbol, CLOSING[symbol])
                        )
                char_count += token.original_length
        for entry in self._open:
            if entry.call == self._calls:
                matches.append(
                    self._unpaired(entry.position, entry.symbol, OPENING[entry.symbol])
                )
        return matches

    def _unpaired(self, position: int, symbol: str, missing: str) -> RuleMatch:
        return RuleMatch(
            rule=self,
            from_pos=position,
            to_pos=position + len(symbol),
            message=f"Unpaired symbol: '{missing}' seems to be missing",
            short_message="Unpaired symbol",
        )
