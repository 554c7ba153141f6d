from __future__ import annotations

from importlib import import_module
from typing import Any, Callable, List, Sequence, Tuple

from ..models import AnalyzedToken, TokenReadings
from ..textutils import is_whitespace
from .base import Tagger

_pos_tag_cache: Callable[..., List[Tuple[str, str]]] | None = None


class NltkTagger(Tagger):
    """Tags tokens with NLTK's averaged perceptron tagger.

    Whitespace tokens are not sent to NLTK and keep a single untagged reading.
    The ``averaged_perceptron_tagger`` resource must be downloaded beforehand.
    """

    def __init__(self, tagset: str | None = None, lang: str = "eng") -> None:
        self.tagset = tagset
        self.lang = lang

    def tag(self, tokens: Sequence[str]) -> List[TokenReadings]:
        pos_tag = _ensure_pos_tag()
        words = [token for token in tokens if not is_whitespace(token)]
        tagged = iter(pos_tag(words, tagset=self.tagset, lang=self.lang) if words else [])
        records: List[TokenReadings] = []
        for token in tokens:
            if is_whitespace(token):
                records.append(TokenReadings(token=token, readings=(AnalyzedToken(token),)))
                continue
            _, pos = next(tagged)
            reading = AnalyzedToken(token, pos, token.lower())
            records.append(TokenReadings(token=token, readings=(reading,)))
        return records


def _ensure_pos_tag() -> Callable[..., List[Tuple[str, str]]]:
    global _pos_tag_cache
    if _pos_tag_cache is None:
        try:  # pragma: no cover - import guard
            tag_module: Any = import_module("nltk.tag")
        except ModuleNotFoundError as exc:  # pragma: no cover - informative
            raise ImportError(
                "nltk is required for the 'nltk' tagger. "
                "Install the 'nltk' extra (e.g., `pip install .[nltk]`)."
            ) from exc
        _pos_tag_cache = getattr(tag_module, "pos_tag")
    return _pos_tag_cache
