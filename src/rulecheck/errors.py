from __future__ import annotations


class RuleCheckError(Exception):
    """Base class for every error raised by the checking pipeline."""


class ConfigurationError(RuleCheckError):
    """Raised when the checker session or its configuration is invalid."""


class AnalysisError(RuleCheckError):
    """Raised when a tokenizer, tagger, chunker or disambiguator fails."""


class RuleExecutionError(RuleCheckError):
    """Raised when a rule fails while checking a sentence or a text."""

    def __init__(
        self,
        message: str,
        *,
        sentence_preview: str | None = None,
        rule_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.sentence_preview = sentence_preview
        self.rule_id = rule_id


class MismatchedInputError(RuleCheckError, ValueError):
    """Raised when sentences and analyzed sentences do not line up."""
