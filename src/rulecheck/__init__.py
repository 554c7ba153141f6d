"""
rulecheck package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .checker import RuleChecker, build_checker_from_config
from .config import CheckerConfig, config_from_dict, config_from_yaml, load_config
from .errors import (
    AnalysisError,
    ConfigurationError,
    MismatchedInputError,
    RuleCheckError,
    RuleExecutionError,
)
from .language import build_language_from_config, create_language
from .markup import AnnotatedText, AnnotatedTextBuilder, annotated_text_from_markup
from .models import ParagraphMode, RuleMatch

__all__ = [
    "RuleChecker",
    "build_checker_from_config",
    "CheckerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "create_language",
    "build_language_from_config",
    "AnnotatedText",
    "AnnotatedTextBuilder",
    "annotated_text_from_markup",
    "ParagraphMode",
    "RuleMatch",
    "RuleCheckError",
    "ConfigurationError",
    "AnalysisError",
    "RuleExecutionError",
    "MismatchedInputError",
]

__version__ = "0.1.0"
