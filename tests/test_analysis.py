import logging

import pytest

from pos_highlighter.analysis import AnalysisError, CategoryHighlight, analyze_text
from pos_highlighter.constants import POS_CONFIGS
from pos_highlighter.models import MatchRange
from tests.fakes import FailingTagger, FakeTagger, make_doc

ALL_KEYS = {config.setting_key for config in POS_CONFIGS}


def _tagger() -> FakeTagger:
    return FakeTagger(
        make_doc(
            {
                "#Noun": [("dog", (4, 3)), ("It", (0, 2))],
                "#Pronoun": [("it", None)],
                "#Verb": [("is", (8, 2)), ("runs", (22, 4)), ("dog", (4, 3))],
                "#Auxiliary": [("is", None)],
                "#Adverb": [("quickly", (27, 7))],
                "#Conjunction": [("and", (15, 3))],
                "#Adjective": [("big", (11, 3))],
            }
        )
    )


def test_analyze_text_runs_categories_in_table_order():
    """Each category is resolved once and nouns win ties with verbs."""
    text = "The dog is big and it runs quickly."
    highlights = analyze_text(text, _tagger(), POS_CONFIGS, ALL_KEYS)
    assert highlights == [
        CategoryHighlight(MatchRange(4, 7, "dog"), "cm-pos-noun"),
        CategoryHighlight(MatchRange(22, 26, "runs"), "cm-pos-verb"),
        CategoryHighlight(MatchRange(11, 14, "big"), "cm-pos-adjective"),
        CategoryHighlight(MatchRange(27, 34, "quickly"), "cm-pos-adverb"),
        CategoryHighlight(MatchRange(15, 18, "and"), "cm-pos-conjunction"),
    ]


def test_analyze_text_skips_disabled_categories():
    text = "The dog is big and it runs quickly."
    highlights = analyze_text(text, _tagger(), POS_CONFIGS, {"verbs", "adverbs"})
    assert [h.match.text for h in highlights] == ["runs", "dog", "quickly"]
    assert {h.class_name for h in highlights} == {"cm-pos-verb", "cm-pos-adverb"}


def test_analyze_text_without_enabled_categories_does_not_tag():
    tagger = _tagger()
    assert analyze_text("The dog.", tagger, POS_CONFIGS, set()) == []
    assert tagger.calls == []


def test_analyze_text_wraps_tagger_failures():
    with pytest.raises(AnalysisError):
        analyze_text("The dog.", FailingTagger(), POS_CONFIGS, ALL_KEYS)


def test_analyze_text_tags_once_per_pass():
    tagger = _tagger()
    analyze_text("The dog is big and it runs quickly.", tagger, POS_CONFIGS, ALL_KEYS)
    assert len(tagger.calls) == 1


def test_analyze_text_keeps_caret_clear():
    text = "The dog is big and it runs quickly."
    highlights = analyze_text(text, _tagger(), POS_CONFIGS, ALL_KEYS, caret=12)
    for highlight in highlights:
        assert not (highlight.match.start - 2 <= 12 <= highlight.match.end + 2)


def test_analyze_text_logs_only_categories_that_ran(caplog):
    text = "The dog is big and it runs quickly."
    with caplog.at_level(logging.DEBUG, logger="pos_highlighter.analysis"):
        analyze_text(text, _tagger(), POS_CONFIGS, {"nouns", "pronouns", "misc"})
    assert any(
        "across 1 categories" in record.getMessage() for record in caplog.records
    )
