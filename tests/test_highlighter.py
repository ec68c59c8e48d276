"""
Tests for HTML escaping and term highlighting.
"""

from app.core.highlighter import escape_html, highlight


class TestEscapeHtml:

    def test_escapes_five_characters(self):
        assert escape_html("<b>\"Tom\" & 'Jerry'</b>") == (
            "&lt;b&gt;&quot;Tom&quot; &amp; &#39;Jerry&#39;&lt;/b&gt;"
        )

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"


class TestHighlight:
    """Test highlight."""

    def test_marks_known_term(self):
        assert highlight("Your heart rate is fine") == "Your <mark>heart rate</mark> is fine"

    def test_keeps_original_casing(self):
        assert highlight("Blood Tests today") == "<mark>Blood Tests</mark> today"

    def test_whole_words_only(self):
        assert highlight("heart rates") == "heart rates"

    def test_escapes_before_marking(self):
        assert highlight("<heart rate>") == "&lt;<mark>heart rate</mark>&gt;"

    def test_overlapping_terms_double_wrap(self):
        """"blood pressure" is marked again inside "high blood pressure"."""
        assert highlight("high blood pressure") == (
            "<mark>high <mark>blood pressure</mark></mark>"
        )

    def test_custom_terms(self):
        assert highlight("rest at home", terms=("rest",)) == "<mark>rest</mark> at home"

    def test_no_terms_is_plain_escape(self):
        assert highlight("a < b", terms=()) == "a &lt; b"
