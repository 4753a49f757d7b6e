"""Tests for playlist text repair."""

import xml.etree.ElementTree as ET

from src.utils.playlist_sanitizer import escape_field_value, sanitize_playlist_text


class TestEscapeFieldValue:
    """Tests for value escaping."""

    def test_markup_characters(self):
        """Test all markup characters are escaped."""
        assert escape_field_value("<a> & \"b\" 'c'") == "&lt;a&gt; &amp; &quot;b&quot; &apos;c&apos;"

    def test_existing_entities_untouched(self):
        """Test entity references are not escaped twice."""
        value = "Simon &amp; Garfunkel &#39;69 &#x27;"
        assert escape_field_value(value) == value

    def test_unknown_entity_escaped(self):
        """Test HTML-only entities are treated as bare ampersands."""
        assert escape_field_value("Rock&nbsp;Roll") == "Rock&amp;nbsp;Roll"

    def test_plain_value(self):
        """Test value without special characters is unchanged."""
        assert escape_field_value("C:\\Music\\01.mp3") == "C:\\Music\\01.mp3"


class TestSanitizePlaylistText:
    """Tests for line based repair."""

    def test_bare_ampersand_repaired(self):
        """Test raw ampersand in creator becomes parseable."""
        text = "<track>\n      <creator>Simon & Garfunkel</creator>\n</track>"
        result = sanitize_playlist_text(text)
        assert "<creator>Simon &amp; Garfunkel</creator>" in result
        assert ET.fromstring(result).findtext("creator") == "Simon & Garfunkel"

    def test_missing_slash_in_closing_tag(self):
        """Test closing tag without slash is fixed."""
        text = "<track>\n  <title>Hello<title>\n</track>"
        assert sanitize_playlist_text(text) == "<track>\n  <title>Hello</title>\n</track>"

    def test_indentation_preserved(self):
        """Test line indentation is kept."""
        text = "\t\t<album>A & B</album>"
        assert sanitize_playlist_text(text) == "\t\t<album>A &amp; B</album>"

    def test_unindented_lines_untouched(self):
        """Test lines without indentation are left alone."""
        text = "<title>A & B</title>"
        assert sanitize_playlist_text(text) == text

    def test_other_fields_untouched(self):
        """Test fields outside the repair set are left alone."""
        text = "  <date>A & B</date>\n  <info>x < y</info>"
        assert sanitize_playlist_text(text) == text

    def test_trailing_whitespace_dropped(self):
        """Test spaces after the closing tag are removed."""
        assert sanitize_playlist_text("  <title>x</title>   \n") == "  <title>x</title>\n"

    def test_crlf_line_endings_kept(self):
        """Test carriage returns survive repair."""
        text = "<t>\r\n  <creator>A & B</creator>\r\n</t>\r\n"
        assert sanitize_playlist_text(text) == "<t>\r\n  <creator>A &amp; B</creator>\r\n</t>\r\n"

    def test_well_formed_text_unchanged(self):
        """Test sanitizing valid markup is a no-op."""
        text = (
            "<playlist>\n"
            "  <trackList>\n"
            "    <track>\n"
            "      <location>C:\\Music\\AC&amp;DC\\01.mp3</location>\n"
            "      <creator>AC&amp;DC</creator>\n"
            "    </track>\n"
            "  </trackList>\n"
            "</playlist>\n"
        )
        assert sanitize_playlist_text(text) == text

    def test_custom_field_names(self):
        """Test repair set can be replaced."""
        text = "  <info>x < y</info>\n  <title>A & B</title>"
        result = sanitize_playlist_text(text, field_names=["info"])
        assert result == "  <info>x &lt; y</info>\n  <title>A & B</title>"

    def test_multiline_values_untouched(self):
        """Test values spanning lines are not matched."""
        text = "  <annotation>line one &\n  line two</annotation>"
        assert sanitize_playlist_text(text) == text
