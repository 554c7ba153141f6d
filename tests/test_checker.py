from __future__ import annotations

import pytest

from rulecheck.checker import RuleChecker, build_checker_from_config
from rulecheck.config import config_from_dict
from rulecheck.errors import AnalysisError, ConfigurationError, RuleExecutionError
from rulecheck.markup import AnnotatedTextBuilder
from rulecheck.models import ParagraphMode, RuleMatch
from rulecheck.rules import (
    CallableRule,
    SentenceLengthRule,
    UnpairedBracketsRule,
    WhitespaceBeforePunctuationRule,
    WordRepeatRule,
)
from rulecheck.rules.categories import GRAMMAR

from tests.utils import (
    BrokenSentenceTokenizer,
    ExplodingDisambiguator,
    FailingRule,
    FirstCharacterRule,
    SentenceCounterTextRule,
    english,
)

SAMPLE_TEXT = (
    "This is a test . the the cat sat (on the mat.\n\n"
    "Another paragraph , with [brackets] and a very very long tail.\n"
    "it ends here } ."
)


def _spans(matches):
    return [(m.rule_id, m.from_pos, m.to_pos) for m in matches]


def test_space_before_punctuation_scenario():
    """A space before the final period is reported with line and column."""
    checker = RuleChecker(english(), [WhitespaceBeforePunctuationRule()])
    matches = checker.check("This is a test .")
    assert len(matches) == 1
    match = matches[0]
    assert (match.from_pos, match.to_pos) == (14, 15)
    assert (match.line, match.column) == (1, 15)
    assert match.suggested_replacements == ("",)


def test_second_sentence_offsets_include_first_sentence_length():
    """Matches in later sentences are shifted by the preceding text."""
    checker = RuleChecker(english(), [FirstCharacterRule()])
    matches = checker.check("Foo bar. Baz qux.")
    assert [m.from_pos for m in matches] == [0, 9]
    assert checker.sentence_count == 2


def test_without_tokenize_text_is_one_sentence():
    """Disabling tokenization checks the text as a single sentence."""
    checker = RuleChecker(english(), [FirstCharacterRule()])
    matches = checker.check("Foo bar. Baz qux.", tokenize=False)
    assert [m.from_pos for m in matches] == [0]
    assert checker.sentence_count == 1


def test_markup_offsets_refer_to_original_text():
    """Offsets of annotated input point into the original text."""
    def flag_word(rule, sentence):
        return [
            RuleMatch(rule=rule, from_pos=t.start_pos, to_pos=t.end_pos, message="w")
            for t in sentence.tokens
            if t.token == "word"
        ]

    checker = RuleChecker(english(), [CallableRule("WORD", flag_word)])
    annotated = (
        AnnotatedTextBuilder().add_markup("<b>").add_text("word").add_markup("</b>").build()
    )
    matches = checker.check(annotated)
    assert [(m.from_pos, m.to_pos) for m in matches] == [(3, 7)]
    assert matches[0].offset == 0


def test_check_markup_parses_html():
    """HTML input is checked on its text and mapped back."""
    checker = RuleChecker(english())
    source = "<p>the cat .</p>"
    matches = checker.check_markup(source)
    spans = {m.rule_id: (m.from_pos, m.to_pos) for m in matches}
    assert spans["UPPERCASE_SENTENCE_START"] == (3, 6)
    assert spans["WHITESPACE_BEFORE_PUNCTUATION"] == (10, 11)
    assert source[10] == " "


def test_line_and_column_on_later_lines():
    """Line and column account for newlines in earlier sentences."""
    checker = RuleChecker(english())
    matches = checker.check("Hello world.\nthe cat sat.")
    (match,) = matches
    assert match.rule_id == "UPPERCASE_SENTENCE_START"
    assert (match.line, match.column) == (2, 1)
    assert (match.from_pos, match.to_pos) == (13, 16)


def test_single_line_breaks_mark_paragraphs():
    """Single newlines split sentences when configured to."""
    language = english(single_line_breaks_mark_paragraph=True)
    checker = RuleChecker(language, [FirstCharacterRule()])
    assert checker.sentence_tokenize("Foo\n\nbar") == ["Foo\n", "\n", "bar"]
    matches = checker.check("Foo\n\nbar")
    assert [(m.from_pos, m.line, m.column) for m in matches] == [(0, 1, 1), (5, 3, 1)]


def test_check_is_deterministic_and_ordered():
    """Repeated checks give identical, offset-ordered results."""
    checker = RuleChecker(english())
    first = checker.check(SAMPLE_TEXT)
    second = checker.check(SAMPLE_TEXT)
    assert first == second
    starts = [m.from_pos for m in first]
    assert starts == sorted(starts)
    assert all(0 <= m.from_pos <= m.to_pos <= len(SAMPLE_TEXT) for m in first)
    assert {m.rule_id for m in first} >= {
        "WHITESPACE_BEFORE_PUNCTUATION",
        "WORD_REPEAT_RULE",
        "UPPERCASE_SENTENCE_START",
        "UNPAIRED_BRACKETS",
    }


def test_workers_do_not_change_results():
    """Chunked dispatch on several workers matches a single worker."""
    sequential = RuleChecker(english()).check(SAMPLE_TEXT * 3)
    chunked = RuleChecker(english(), workers=3).check(SAMPLE_TEXT * 3)
    assert _spans(chunked) == _spans(sequential)
    assert [(m.line, m.column) for m in chunked] == [(m.line, m.column) for m in sequential]


def test_paragraph_mode_exclusivity():
    """Paragraph modes select text rules or sentence rules."""
    checker = RuleChecker(english())
    text = "(the the cat sat."
    only_sentence = checker.check(text, paragraph_mode=ParagraphMode.ONLY_SENTENCE)
    only_paragraph = checker.check(text, paragraph_mode="only_paragraph")
    assert "UNPAIRED_BRACKETS" not in {m.rule_id for m in only_sentence}
    assert {m.rule_id for m in only_sentence} == {
        "WORD_REPEAT_RULE",
        "UPPERCASE_SENTENCE_START",
    }
    assert {m.rule_id for m in only_paragraph} == {"UNPAIRED_BRACKETS"}


def test_unknown_paragraph_mode_is_rejected():
    with pytest.raises(ConfigurationError):
        RuleChecker(english()).check("Foo.", paragraph_mode="sometimes")


def test_text_rule_state_is_reset_between_checks():
    """Text rule state does not leak from one check into the next."""
    checker = RuleChecker(english(), [UnpairedBracketsRule()])
    first = checker.check("(a")
    assert _spans(first) == [("UNPAIRED_BRACKETS", 0, 1)]
    second = checker.check("b)")
    alone = RuleChecker(english(), [UnpairedBracketsRule()]).check("b)")
    assert _spans(second) == _spans(alone) == [("UNPAIRED_BRACKETS", 1, 2)]


def test_accumulating_text_rule_sees_only_current_text():
    """A text rule only counts the sentences of the current check."""
    checker = RuleChecker(english(), [SentenceCounterTextRule()])
    checker.check("One. Two. Three.")
    (match,) = checker.check("Four.")
    assert match.message == "1 sentences"


def test_disable_then_enable_keeps_rule_off():
    """Enabling a disabled rule does not undo the disable."""
    checker = RuleChecker(english())
    checker.disable_rule(WordRepeatRule.id)
    checker.enable_rule(WordRepeatRule.id)
    assert "WORD_REPEAT_RULE" not in {m.rule_id for m in checker.check("The the cat.")}
    checker.remove_disabled_rule(WordRepeatRule.id)
    assert "WORD_REPEAT_RULE" in {m.rule_id for m in checker.check("The the cat.")}


def test_disabled_category_beats_enable():
    checker = RuleChecker(english())
    checker.enable_rule(WordRepeatRule.id)
    checker.disable_category(GRAMMAR)
    assert checker.disabled_categories == {"GRAMMAR"}
    assert "WORD_REPEAT_RULE" not in {m.rule_id for m in checker.check("The the cat.")}


def test_default_off_rule_runs_once_enabled():
    """Default-off rules report matches once enabled."""
    checker = RuleChecker(english(), [SentenceLengthRule(max_words=3)])
    text = "One two three four five."
    assert checker.check(text) == []
    checker.enable_rule(SentenceLengthRule.id)
    (match,) = checker.check(text)
    assert (match.from_pos, match.to_pos) == (0, len("One two three four five"))
    assert [r.id for r in checker.get_all_active_rules()] == [SentenceLengthRule.id]


def test_rule_lookup_and_added_rules():
    """Added rules can be found by id and sub-id."""
    checker = RuleChecker(english(), [])
    rule = CallableRule("CUSTOM", lambda rule, sentence: [], sub_id="1")
    checker.add_rule(rule)
    assert checker.get_rules_by_id_and_sub_id("CUSTOM") == [rule]
    assert checker.get_rules_by_id_and_sub_id("CUSTOM", "1") == [rule]
    assert checker.get_rules_by_id_and_sub_id("CUSTOM", "2") == []


def test_unknown_words_scenario():
    """Unknown words reflect only the most recent check."""
    checker = RuleChecker(english(), [], list_unknown_words=True)
    checker.check("Foo xyzzyplugh.")
    assert checker.get_unknown_words() == ["xyzzyplugh"]
    checker.check("Foo bar.")
    assert checker.get_unknown_words() == []


def test_unknown_words_require_collection():
    checker = RuleChecker(english(), [])
    checker.check("Foo xyzzyplugh.")
    with pytest.raises(ConfigurationError):
        checker.get_unknown_words()
    checker.set_list_unknown_words(True)
    checker.check("Foo xyzzyplugh.")
    assert checker.get_unknown_words() == ["xyzzyplugh"]


def test_rule_failure_aborts_check():
    """A failing rule aborts the check and names the sentence."""
    checker = RuleChecker(english(), [FirstCharacterRule(), FailingRule()])
    with pytest.raises(RuleExecutionError) as excinfo:
        checker.check("Foo bar. Baz qux.")
    assert excinfo.value.sentence_preview == "Foo bar. "


def test_analysis_failure_propagates_from_check():
    """Analysis errors abort the check unchanged."""
    language = english()
    language.disambiguator = ExplodingDisambiguator()
    with pytest.raises(AnalysisError):
        RuleChecker(language).check("Foo bar.")


def test_sentence_tokenizer_failure_propagates_from_check():
    """Sentence splitting errors abort the check as analysis errors."""
    language = english()
    language.sentence_tokenizer = BrokenSentenceTokenizer()
    with pytest.raises(AnalysisError, match="segmenter down"):
        RuleChecker(language, [FirstCharacterRule()]).check("Foo bar.")


def test_soft_hyphen_does_not_hide_word_repeat():
    """Rules match on words stripped of soft hyphens; offsets cover the raw text."""
    text = "the the\u00ad cat. (x\u00ady ]"
    checker = RuleChecker(english(), [WordRepeatRule(), UnpairedBracketsRule()])
    matches = checker.check(text)
    assert _spans(matches) == [
        ("WORD_REPEAT_RULE", 0, 8),
        ("UNPAIRED_BRACKETS", text.index("("), text.index("(") + 1),
        ("UNPAIRED_BRACKETS", text.index("]"), text.index("]") + 1),
    ]


def test_analyze_text_bypasses_rules():
    """Analysis alone never runs a rule."""
    checker = RuleChecker(english(), [FailingRule()])
    sentences = checker.analyze_text("Foo bar. Baz qux.")
    assert [s.text for s in sentences] == ["Foo bar. ", "Baz qux."]
    assert sentences[-1].tokens[-1].is_paragraph_end


def test_build_checker_from_config_applies_switches():
    """Config switches and language settings reach the checker."""
    config = config_from_dict(
        {
            "disabled_rules": ["UPPERCASE_SENTENCE_START"],
            "enabled_rules": ["TOO_LONG_SENTENCE"],
            "disabled_categories": ["PUNCTUATION"],
            "max_sentence_words": 2,
            "list_unknown_words": True,
            "workers": 2,
        }
    )
    checker = build_checker_from_config(config)
    assert checker.disabled_rules == {"UPPERCASE_SENTENCE_START"}
    assert checker.enabled_rules == {"TOO_LONG_SENTENCE"}
    assert checker.workers == 2
    rule_ids = {m.rule_id for m in checker.check("the cat sat (on the mat.")}
    assert rule_ids == {"TOO_LONG_SENTENCE"}
    assert checker.get_unknown_words() == ["cat", "mat", "sat"]
