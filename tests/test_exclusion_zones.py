from pos_highlighter.exclusion_zones import (
    ExclusionZone,
    ExclusionZoneDetector,
    RegexExclusionZoneDetector,
    is_excluded_content,
)


def test_excludes_content_inside_fenced_code_block():
    """Words inside a ``` fence are excluded."""
    text = "Hello\n```\ncode here\n```\nWorld"
    assert is_excluded_content(text, 10, 19) is True


def test_excludes_fence_delimiters_and_keeps_outside_text():
    text = "Hello\n```\ncode\n```\nWorld"
    assert is_excluded_content("```\ncode\n```", 0, 3) is True
    assert is_excluded_content(text, 19, 24) is False


def test_every_fenced_block_is_found():
    """All fences in the document count, not only the first."""
    text = "```\na\n```\nprose\n```\nsecond block\n```"
    start = text.index("second")
    assert is_excluded_content(text, start, start + len("second")) is True
    prose = text.index("prose")
    assert is_excluded_content(text, prose, prose + 5) is False


def test_inline_code_span():
    text = "Hello `code` World"
    assert is_excluded_content(text, 7, 11) is True
    assert is_excluded_content(text, 6, 7) is True
    assert is_excluded_content(text, 0, 5) is False


def test_inline_code_does_not_span_newlines():
    text = "Open `tick\nand more` here"
    start = text.index("and")
    assert is_excluded_content(text, start, start + 3) is False


def test_frontmatter_only_at_document_start():
    text = "---\ntitle: Test\n---\nContent here"
    assert is_excluded_content(text, 4, 9) is True
    assert is_excluded_content(text, 20, 27) is False
    assert is_excluded_content("Hello\n---\ntitle: Test\n---", 10, 15) is False


def test_link_label_and_target_are_excluded():
    text = "Click [here](https://example.com) to continue"
    assert is_excluded_content(text, 7, 11) is True
    assert is_excluded_content(text, 13, 32) is True
    assert is_excluded_content(text, 0, 5) is False


def test_partial_overlap_is_not_excluded():
    """A range straddling a zone boundary is kept."""
    text = "Hello `code` World"
    assert is_excluded_content(text, 3, 9) is False


def test_edge_cases_and_idempotence():
    assert is_excluded_content("", 0, 0) is False
    text = "Just a plain sentence here."
    assert is_excluded_content(text, 5, 6) is False
    fenced = "Intro ```\nx = 1\n``` outro"
    first = is_excluded_content(fenced, 10, 15)
    assert first is is_excluded_content(fenced, 10, 15) is True


def test_detector_reports_zone_kinds():
    text = "---\na: b\n---\nSee [docs](x) and `y`.\n```\nz\n```"
    kinds = {zone.kind for zone in RegexExclusionZoneDetector().find_zones(text)}
    assert kinds == {"frontmatter", "link", "inline_code", "fenced_code"}


def test_custom_detector_can_be_swapped_in():
    class EverythingDetector(ExclusionZoneDetector):
        def find_zones(self, text):
            return [ExclusionZone("all", 0, len(text))]

    assert is_excluded_content("plain words", 0, 5, detector=EverythingDetector())
