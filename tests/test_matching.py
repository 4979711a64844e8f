import logging

from pos_highlighter.matching import (
    build_exclusion_set,
    get_match_ranges,
    is_range_being_edited,
    is_valid_range,
    process_category,
)
from pos_highlighter.models import MatchRange, PosConfig
from tests.fakes import make_doc

NOUN_CONFIG = PosConfig(
    tag="#Noun",
    class_name="cm-pos-noun",
    setting_key="nouns",
    exclusion_tags=["#Pronoun"],
)
VERB_CONFIG = PosConfig(tag="#Verb", class_name="cm-pos-verb", setting_key="verbs")


def test_build_exclusion_set_lowercases_literals():
    doc = make_doc({"#Pronoun": [("he", None), ("she", None), ("They", None)]})
    assert build_exclusion_set(doc, ["#Pronoun"]) == {"he", "she", "they"}


def test_build_exclusion_set_merges_tags_and_drops_blanks():
    doc = make_doc(
        {
            "#Auxiliary": [("is", None), ("are", None), ("  ", None)],
            "#Modal": [("can", None), ("", None), ("will", None)],
        }
    )
    assert build_exclusion_set(doc, ["#Auxiliary", "#Modal"]) == {
        "is",
        "are",
        "can",
        "will",
    }
    assert build_exclusion_set(doc, []) == set()


def test_get_match_ranges_uses_offsets_when_present():
    doc = make_doc({"#Noun": [("cat", (9, 3))]})
    ranges = get_match_ranges(doc, "#Noun", "He saw a cat.", set())
    assert ranges == [MatchRange(start=9, end=12, text="cat")]


def test_get_match_ranges_falls_back_to_word_bounded_search():
    """Matches without offsets find every whole-word occurrence."""
    text = "The cat saw another cat. Concatenate."
    doc = make_doc({"#Noun": [("cat", None)]})
    ranges = get_match_ranges(doc, "#Noun", text, set())
    assert [(r.start, r.end) for r in ranges] == [(4, 7), (20, 23)]


def test_get_match_ranges_escapes_regex_metacharacters():
    text = "Try e.g today, not eXg today."
    doc = make_doc({"#Noun": [("e.g", None)]})
    ranges = get_match_ranges(doc, "#Noun", text, set())
    assert [(r.start, r.end) for r in ranges] == [(4, 7)]


def test_get_match_ranges_skips_excluded_and_blank_matches():
    doc = make_doc({"#Noun": [("He", (0, 2)), ("   ", (3, 3)), ("", None), ("cat", (9, 3))]})
    ranges = get_match_ranges(doc, "#Noun", "He saw a cat.", {"he"})
    assert [r.text for r in ranges] == ["cat"]


def test_get_match_ranges_mixes_offset_and_literal_matches():
    """One category can carry positioned and literal-only matches together."""
    text = "cat and dog, dog"
    doc = make_doc({"#Noun": [("cat", (0, 3)), ("dog", None)]})
    ranges = get_match_ranges(doc, "#Noun", text, set())
    assert ranges == [
        MatchRange(start=0, end=3, text="cat"),
        MatchRange(start=8, end=11, text="dog"),
        MatchRange(start=13, end=16, text="dog"),
    ]


def test_get_match_ranges_unusable_offset_triggers_search():
    doc = make_doc({"#Noun": [("cat", (-1, 3)), ("saw", (4, 0))]})
    ranges = get_match_ranges(doc, "#Noun", "He saw a cat.", set())
    assert [(r.start, r.end) for r in ranges] == [(9, 12), (3, 6)]


def test_get_match_ranges_keeps_tagger_order():
    doc = make_doc({"#Noun": [("dog", (8, 3)), ("cat", (0, 3))]})
    ranges = get_match_ranges(doc, "#Noun", "cat and dog", set())
    assert [r.text for r in ranges] == ["dog", "cat"]


def test_is_range_being_edited_buffer():
    assert is_range_being_edited(0, 5, -1) is False
    assert is_range_being_edited(0, 10, 5) is True
    assert is_range_being_edited(5, 10, 5) is True
    assert is_range_being_edited(5, 10, 10) is True
    assert is_range_being_edited(5, 10, 3) is True
    assert is_range_being_edited(5, 10, 12) is True
    assert is_range_being_edited(5, 10, 0) is False
    assert is_range_being_edited(5, 10, 15) is False


def test_is_valid_range_checks():
    text = "Hello `code` World"
    assert is_valid_range(MatchRange(0, 5, "Hello"), text, -1, set())
    assert not is_valid_range(MatchRange(5, 5, ""), text, -1, set())
    assert not is_valid_range(MatchRange(-1, 3, "x"), text, -1, set())
    assert not is_valid_range(MatchRange(13, 99, "World"), text, -1, set())
    assert not is_valid_range(MatchRange(0, 5, "Hello"), text, -1, {"0-5"})
    assert not is_valid_range(MatchRange(7, 11, "code"), text, -1, set())
    assert not is_valid_range(MatchRange(0, 5, "Hello"), text, 6, set())


def test_process_category_drops_excluded_pronouns():
    """A word also tagged as a pronoun is never shown as a noun."""
    doc = make_doc(
        {
            "#Noun": [("cat", (9, 3)), ("he", (0, 2))],
            "#Pronoun": [("he", None)],
        }
    )
    result = process_category(doc, "He saw a cat.", NOUN_CONFIG, -1, set())
    assert result == [MatchRange(start=9, end=12, text="cat")]


def test_process_category_avoids_caret_for_this_pass_only():
    doc = make_doc({"#Noun": [("cat", (4, 3))]})
    text = "The cat sat."
    assert process_category(doc, text, NOUN_CONFIG, 5, set()) == []
    assert process_category(doc, text, NOUN_CONFIG, -1, set()) == [
        MatchRange(4, 7, "cat")
    ]


def test_process_category_first_category_claims_range():
    doc = make_doc({"#Noun": [("run", (4, 3))], "#Verb": [("run", (4, 3)), ("go", (11, 2))]})
    text = "The run to go"
    processed: set[str] = set()
    nouns = process_category(doc, text, NOUN_CONFIG, -1, processed)
    verbs = process_category(doc, text, VERB_CONFIG, -1, processed)
    assert [r.text for r in nouns] == ["run"]
    assert [r.text for r in verbs] == ["go"]
    assert processed == {"4-7", "11-13"}


def test_process_category_second_call_is_empty():
    doc = make_doc({"#Noun": [("cat", None)]})
    text = "cat and cat"
    processed: set[str] = set()
    first = process_category(doc, text, NOUN_CONFIG, -1, processed)
    assert len(first) == 2
    assert process_category(doc, text, NOUN_CONFIG, -1, processed) == []


def test_process_category_skips_structural_content():
    text = "A `cat` and a [dog](x) near a bird"
    doc = make_doc({"#Noun": [("cat", None), ("dog", None), ("bird", None)]})
    result = process_category(doc, text, NOUN_CONFIG, -1, set())
    assert [r.text for r in result] == ["bird"]


def test_process_category_without_exclusion_tags():
    doc = make_doc({"#Verb": [("saw", (3, 3))], "#Pronoun": [("saw", None)]})
    result = process_category(doc, "He saw a cat.", VERB_CONFIG, -1, set())
    assert result == [MatchRange(3, 6, "saw")]


def test_invalid_ranges_warn_only_in_dev_mode(caplog):
    doc = make_doc({"#Noun": [("cat", (40, 3))]})
    with caplog.at_level(logging.WARNING, logger="pos_highlighter.matching"):
        assert process_category(doc, "short", NOUN_CONFIG, -1, set()) == []
        assert not caplog.records
        assert process_category(doc, "short", NOUN_CONFIG, -1, set(), dev_mode=True) == []
    assert any("Invalid range" in record.getMessage() for record in caplog.records)


def test_process_category_skips_words_inside_fences_only():
    text = "Write code daily.\n```\ncode here\n```\nMore code."
    doc = make_doc({"#Noun": [("code", None)]})
    result = process_category(doc, text, NOUN_CONFIG, -1, set())
    fence_start = text.index("```")
    fence_end = text.rindex("```") + 3
    assert len(result) == 2
    assert all(r.end <= fence_start or r.start >= fence_end for r in result)
