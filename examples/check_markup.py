"""
Tiny helper script showing a checker session on plain text and on HTML.
"""

from __future__ import annotations

from rulecheck import ParagraphMode, RuleChecker, annotated_text_from_markup, create_language


def main() -> None:
    checker = RuleChecker(create_language("en"), list_unknown_words=True)
    checker.enable_rule("TOO_LONG_SENTENCE")

    samples = [
        "This is a test . the the cat sat (on the mat.",
        "<p>this is <b>is</b> markup .</p><p>Second paragraph.</p>",
    ]
    for sample in samples:
        source = annotated_text_from_markup(sample) if sample.startswith("<") else sample
        print("-" * 40)
        print(sample)
        for match in checker.check(source, paragraph_mode=ParagraphMode.NORMAL):
            print(
                f"  {match.rule_id} [{match.from_pos}, {match.to_pos}) "
                f"line {match.line}, column {match.column}: {match.message}"
            )
        print(f"  unknown words: {checker.get_unknown_words()}")


if __name__ == "__main__":
    main()
