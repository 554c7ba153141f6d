from __future__ import annotations

from ..models import Category

TYPOGRAPHY = Category("TYPOGRAPHY", "Typography")
GRAMMAR = Category("GRAMMAR", "Grammar")
CASING = Category("CASING", "Capitalization")
PUNCTUATION = Category("PUNCTUATION", "Punctuation")
STYLE = Category("STYLE", "Style")

ALL_CATEGORIES = (TYPOGRAPHY, GRAMMAR, CASING, PUNCTUATION, STYLE)
