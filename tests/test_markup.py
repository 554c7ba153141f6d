from __future__ import annotations

from rulecheck.markup import AnnotatedText, AnnotatedTextBuilder, annotated_text_from_markup


def test_builder_maps_text_after_markup():
    """Plain offsets inside text parts map past the preceding markup."""
    annotated = (
        AnnotatedTextBuilder().add_markup("<b>").add_text("word").add_markup("</b>").build()
    )
    assert annotated.plain_text == "word"
    assert annotated.original_text == "<b>word</b>"
    assert annotated.map_position(0) == 3
    assert annotated.map_position(3) == 6
    assert annotated.map_position(4) == len(annotated.original_text)


def test_interpreted_markup_maps_to_its_start():
    """Markup standing for a character maps that character to the markup start."""
    annotated = (
        AnnotatedTextBuilder()
        .add_text("a")
        .add_markup("<br/>", "\n")
        .add_text("b")
        .build()
    )
    assert annotated.plain_text == "a\nb"
    assert annotated.map_position(1) == 1
    assert annotated.map_position(2) == 6


def test_map_position_is_monotonic_and_clamped():
    """Mapping never goes backwards and clamps out-of-range offsets."""
    annotated = annotated_text_from_markup("<p>One <i>two</i> &amp; three</p>")
    positions = [annotated.map_position(i) for i in range(-2, len(annotated.plain_text) + 3)]
    assert positions == sorted(positions)
    assert positions[0] == positions[2] == len("<p>")
    assert positions[-1] == len(annotated.original_text)


def test_from_plain_text_is_identity():
    """Text without markup maps every offset onto itself."""
    annotated = AnnotatedText.from_plain_text("Hello there.")
    assert annotated.original_text == annotated.plain_text
    assert [annotated.map_position(i) for i in range(5)] == [0, 1, 2, 3, 4]


def test_empty_builder_maps_everything_to_zero():
    """An empty annotated text maps any offset to zero."""
    annotated = AnnotatedTextBuilder().build()
    assert annotated.plain_text == ""
    assert annotated.map_position(0) == 0
    assert annotated.map_position(10) == 0


def test_markup_interpretation():
    """Entities, line breaks and block ends become plain text."""
    annotated = annotated_text_from_markup(
        "<!-- note --><p>Fish &amp; chips</p><p>Tea<br>time</p>"
    )
    assert annotated.plain_text == "Fish & chips\n\nTea\ntime\n\n"
    ampersand = annotated.plain_text.index("&")
    assert annotated.original_text[annotated.map_position(ampersand)] == "&"
    tea = annotated.plain_text.index("Tea")
    assert annotated.original_text[annotated.map_position(tea) :].startswith("Tea")


def test_quoted_angle_bracket_stays_inside_the_tag():
    """A '>' inside a quoted attribute value does not end the tag."""
    source = '<a title="x>y">word</a>'
    annotated = annotated_text_from_markup(source)
    assert annotated.plain_text == "word"
    assert annotated.map_position(0) == source.index("word")


def test_offsets_survive_line_breaks_in_source():
    """Parts after a newline in the source keep their absolute offsets."""
    source = '<div\n  class="intro">\nHello <b>world</b></div>'
    annotated = annotated_text_from_markup(source)
    assert annotated.plain_text == "\nHello world\n\n"
    assert annotated.map_position(1) == source.index("Hello")
    assert annotated.map_position(7) == source.index("world")
    assert annotated.original_text == source
