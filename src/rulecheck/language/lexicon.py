from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Tuple

Lexicon = Dict[str, List[Tuple[str, str]]]

# Penn Treebank tags for a small set of closed-class and very common English words.
_ENGLISH_WORDS_BY_TAG = {
    "DT": "a an the this that these those every each some any no another",
    "PRP": "i you he she it we they me him her us them",
    "PRP$": "my your his its our their",
    "IN": "of in on at by for with from about into over under after before between through during without",
    "CC": "and or but nor yet so",
    "TO": "to",
    "MD": "can could may might must shall should will would",
    "VBZ": "is has does",
    "VBP": "am are have do",
    "VBD": "was were had did said went",
    "VB": "be go get make see say know take come",
    "VBN": "been done gone made seen known taken",
    "VBG": "being going doing making",
    "RB": "not very too also just only now then here there never always often",
    "WDT": "which what whatever",
    "WP": "who whom",
    "WRB": "when where why how",
    "EX": "there",
    "JJ": "good new old big small long great little other same",
    "NN": "test time year day way thing man woman child world life hand part place case week work",
    "NNS": "tests times years days ways things people children words",
    "UH": "yes hello oh bye ha blah",
}

_LEMMAS = {
    "is": "be", "am": "be", "are": "be", "was": "be", "were": "be", "been": "be", "being": "be",
    "has": "have", "had": "have", "does": "do", "did": "do", "done": "do", "doing": "do",
    "went": "go", "gone": "go", "going": "go", "said": "say", "made": "make", "making": "make",
    "seen": "see", "known": "know", "taken": "take", "tests": "test", "times": "time",
    "years": "year", "days": "day", "ways": "way", "things": "thing", "people": "person",
    "children": "child", "words": "word",
}


def _build_default_lexicon() -> Lexicon:
    lexicon: Lexicon = {}
    for tag, words in _ENGLISH_WORDS_BY_TAG.items():
        for word in words.split():
            lexicon.setdefault(word, []).append((tag, _LEMMAS.get(word, word)))
    return lexicon


DEFAULT_ENGLISH_LEXICON: Lexicon = _build_default_lexicon()


def load_lexicon(path: Path) -> Lexicon:
    """
    Load a TSV lexicon with ``token``, ``tag`` and ``lemma`` columns.

    A token may appear on several rows, one per reading. A missing lemma
    defaults to the token itself.
    """
    lexicon: Lexicon = {}
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, delimiter="\t")
        for row in reader:
            token = (row.get("token") or "").strip()
            if not token:
                continue
            tag = (row.get("tag") or "").strip()
            lemma = (row.get("lemma") or "").strip() or token
            lexicon.setdefault(token.lower(), []).append((tag, lemma))
    return lexicon
