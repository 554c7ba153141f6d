from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

import yaml

from .errors import ConfigurationError
from .rules.style import DEFAULT_MAX_SENTENCE_WORDS
from .textutils import DEFAULT_PREVIEW_LENGTH


@dataclass(slots=True)
class LanguageSettings:
    """Configuration block for the linguistic backend."""

    code: str = "en"
    tagger: str = "lexicon"
    lexicon_path: str | None = None
    # Regular expression for characters removed from tokens before tagging.
    ignored_characters: str | None = "\u00ad"
    single_line_breaks_mark_paragraph: bool = False


@dataclass(slots=True)
class CheckerConfig:
    """Configuration options for a checking session."""

    tokenize: bool = True
    paragraph_mode: str = "normal"
    markup: bool = False
    disabled_rules: List[str] = field(default_factory=list)
    enabled_rules: List[str] = field(default_factory=list)
    disabled_categories: List[str] = field(default_factory=list)
    list_unknown_words: bool = False
    max_sentence_words: int = DEFAULT_MAX_SENTENCE_WORDS
    workers: int = 1
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    language: LanguageSettings = field(default_factory=LanguageSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(CheckerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    for key in ("disabled_rules", "enabled_rules", "disabled_categories"):
        if key in kwargs:
            kwargs[key] = _as_list(key, kwargs[key])
    if "language" in data:
        language_value = data["language"]
        if isinstance(language_value, LanguageSettings):
            kwargs["language"] = language_value
        elif isinstance(language_value, Mapping):
            kwargs["language"] = _build_language_settings(language_value)
        else:
            kwargs.pop("language")
    return kwargs


def _build_language_settings(data: Mapping[str, Any]) -> LanguageSettings:
    language_allowed = {field.name for field in fields(LanguageSettings)}
    filtered = {key: data[key] for key in data if key in language_allowed}
    return LanguageSettings(**filtered)


def _as_list(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value]
    raise ConfigurationError(f"'{key}' must be a list of ids.")


def config_from_dict(data: Mapping[str, Any] | None) -> CheckerConfig:
    """Build a CheckerConfig from a dictionary-like input."""
    if data is None:
        return CheckerConfig()
    return CheckerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> CheckerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ConfigurationError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> CheckerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return CheckerConfig()
    return config_from_yaml(path)
