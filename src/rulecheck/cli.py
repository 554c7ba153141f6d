from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .checker import RuleChecker, build_checker_from_config
from .config import CheckerConfig, load_config
from .errors import RuleCheckError
from .markup import annotated_text_from_markup
from .models import AnalyzedSentence, Document, ParagraphMode, RuleMatch

app = typer.Typer(help="Rule-based text checker CLI.", no_args_is_help=True)


# File types the CLI knows how to expand into Document instances.
SUPPORTED_INPUT_EXTENSIONS = {".txt", ".html", ".htm", ".xml"}
MARKUP_EXTENSIONS = {".html", ".htm", ".xml"}


class MatchPayload(TypedDict):
    rule_id: str
    category: str | None
    from_pos: int
    to_pos: int
    line: int | None
    column: int | None
    end_line: int | None
    end_column: int | None
    message: str
    short_message: str | None
    replacements: List[str]


class DocumentResult(TypedDict, total=False):
    doc_id: str
    matches: List[MatchPayload]
    unknown_words: List[str]


@app.command()
def check(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    paragraph_mode: str | None = typer.Option(
        None,
        "--paragraph-mode",
        help="Which rules run: 'normal', 'only_paragraph' or 'only_sentence'.",
    ),
    tokenize: bool | None = typer.Option(
        None,
        "--tokenize/--no-tokenize",
        help="Split the text into sentences (otherwise check it as one sentence).",
    ),
    markup: bool | None = typer.Option(
        None,
        "--markup/--no-markup",
        help="Treat every input as HTML/XML markup.",
    ),
    disable: List[str] | None = typer.Option(
        None, "--disable", help="Rule id to disable (repeatable)."
    ),
    enable: List[str] | None = typer.Option(
        None, "--enable", help="Default-off rule id to enable (repeatable)."
    ),
    disable_category: List[str] | None = typer.Option(
        None, "--disable-category", help="Category id to disable (repeatable)."
    ),
    list_unknown_words: bool = typer.Option(
        False, "--list-unknown-words", help="Report words the tagger does not know."
    ),
    workers: int | None = typer.Option(
        None, "--workers", help="Check sentence chunks on this many threads."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Check the input documents and emit the matches as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    cfg = load_config(config)
    _apply_check_overrides(
        cfg,
        paragraph_mode,
        tokenize,
        markup,
        disable,
        enable,
        disable_category,
        list_unknown_words,
        workers,
    )
    documents = _load_documents(input_path, cfg.markup)
    try:
        mode = ParagraphMode.parse(cfg.paragraph_mode)
        checker = build_checker_from_config(cfg)
        results = [_check_document(checker, doc, cfg.tokenize, mode) for doc in documents]
    except RuleCheckError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps({"documents": results}, indent=2))


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Print the analyzed sentences of a text file as JSON."""
    cfg = load_config(config)
    text = input_path.read_text(encoding="utf-8")
    try:
        checker = build_checker_from_config(cfg)
        sentences = checker.analyze_text(text)
    except RuleCheckError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps({"sentences": [_sentence_dict(s) for s in sentences]}, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = CheckerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _apply_check_overrides(
    config: CheckerConfig,
    paragraph_mode: str | None,
    tokenize: bool | None,
    markup: bool | None,
    disable: List[str] | None,
    enable: List[str] | None,
    disable_category: List[str] | None,
    list_unknown_words: bool,
    workers: int | None,
) -> None:
    """Apply CLI overrides to the checker config when provided."""
    if paragraph_mode is not None:
        config.paragraph_mode = paragraph_mode
    if tokenize is not None:
        config.tokenize = tokenize
    if markup is not None:
        config.markup = markup
    if disable:
        config.disabled_rules.extend(disable)
    if enable:
        config.enabled_rules.extend(enable)
    if disable_category:
        config.disabled_categories.extend(disable_category)
    if list_unknown_words:
        config.list_unknown_words = True
    if workers is not None:
        config.workers = workers


def _load_documents(input_path: Path, markup: bool = False) -> List[Document]:
    """Expand the input path into documents sorted by doc_id."""
    if input_path.is_file():
        return [_document_from_file(input_path, input_path.name, markup)]
    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    return [
        _document_from_file(file, str(file.relative_to(input_path)), markup)
        for file in files
    ]


def _document_from_file(path: Path, doc_id: str, markup: bool) -> Document:
    text = path.read_text(encoding="utf-8")
    return Document(
        doc_id=doc_id,
        text=text,
        markup=markup or path.suffix.lower() in MARKUP_EXTENSIONS,
    )


def _check_document(
    checker: RuleChecker, document: Document, tokenize: bool, mode: ParagraphMode
) -> DocumentResult:
    source = annotated_text_from_markup(document.text) if document.markup else document.text
    matches = checker.check(source, tokenize=tokenize, paragraph_mode=mode)
    result: DocumentResult = {
        "doc_id": document.doc_id,
        "matches": [_match_dict(match) for match in matches],
    }
    if checker.list_unknown_words:
        result["unknown_words"] = checker.get_unknown_words()
    return result


def _match_dict(match: RuleMatch) -> MatchPayload:
    category = match.rule.category
    return {
        "rule_id": match.rule_id,
        "category": category.id if category else None,
        "from_pos": match.from_pos,
        "to_pos": match.to_pos,
        "line": match.line,
        "column": match.column,
        "end_line": match.end_line,
        "end_column": match.end_column,
        "message": match.message,
        "short_message": match.short_message,
        "replacements": list(match.suggested_replacements),
    }


def _sentence_dict(sentence: AnalyzedSentence) -> dict:
    return {
        "text": sentence.text,
        "tokens": [
            {
                "token": token.token,
                "start_pos": token.start_pos,
                "readings": [
                    {"pos_tag": reading.pos_tag, "lemma": reading.lemma}
                    for reading in token.readings
                ],
                "whitespace_before": token.whitespace_before,
                "sentence_start": token.is_sentence_start,
                "sentence_end": token.is_sentence_end,
                "paragraph_end": token.is_paragraph_end,
            }
            for token in sentence.tokens
        ],
    }


if __name__ == "__main__":
    main()
