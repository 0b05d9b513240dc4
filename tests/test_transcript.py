"""Tests for timed-text document parsing."""

from caption_extractor.diagnostics import DiagnosticCode, Diagnostics
from caption_extractor.models import SubtitleLine
from caption_extractor.transcript import clean_segment_text, parse_timed_text

from tests.conftest import TIMED_TEXT

PROLOG = '<?xml version="1.0" encoding="utf-8" ?><transcript>'


class TestParseTimedText:
    """Tests for parse_timed_text."""

    def test_double_escaped_ampersand(self):
        """Test "&amp;amp;" resolves to a single literal ampersand."""
        document = f'{PROLOG}<text start="0.5" dur="2.3">Hello &amp;amp; world</text></transcript>'

        lines = parse_timed_text(document)

        assert lines == [SubtitleLine(start="0.5", dur="2.3", text="Hello & world")]

    def test_document_order_preserved(self):
        document = (
            f'{PROLOG}<text start="3" dur="1">third?</text>'
            '<text start="1" dur="1">first?</text>'
            '<text start="2" dur="1">second?</text></transcript>'
        )

        lines = parse_timed_text(document)

        assert [line.text for line in lines] == ["third?", "first?", "second?"]
        assert [line.start for line in lines] == ["3", "1", "2"]

    def test_times_kept_as_text(self):
        """Test start and dur keep their exact textual precision."""
        document = f'{PROLOG}<text start="12.340" dur="0.100">x</text></transcript>'

        line = parse_timed_text(document)[0]

        assert line.start == "12.340"
        assert line.dur == "0.100"

    def test_missing_dur_is_skipped(self):
        """Test a fragment without dur is dropped and reported."""
        document = (
            f'{PROLOG}<text start="0.5" dur="2.3">kept</text>'
            '<text start="2.8">dropped</text></transcript>'
        )
        diagnostics = Diagnostics()

        lines = parse_timed_text(document, diagnostics)

        assert len(lines) == 1
        assert lines[0].text == "kept"
        assert diagnostics.codes == [DiagnosticCode.MALFORMED_LINE]

    def test_missing_start_is_skipped(self):
        document = f'{PROLOG}<text dur="1.0">dropped</text></transcript>'

        assert parse_timed_text(document) == []

    def test_whitespace_fragments_ignored(self):
        """Test trailing blank fragments do not produce lines or warnings."""
        document = f'{PROLOG}<text start="1" dur="1">a</text>\n  \n</transcript>'
        diagnostics = Diagnostics()

        lines = parse_timed_text(document, diagnostics)

        assert [line.text for line in lines] == ["a"]
        assert len(diagnostics) == 0

    def test_empty_document(self):
        assert parse_timed_text(f"{PROLOG}</transcript>") == []
        assert parse_timed_text("") == []

    def test_fixture_document(self):
        lines = parse_timed_text(TIMED_TEXT)

        assert [line.to_dict() for line in lines] == [
            {"start": "0.5", "dur": "2.3", "text": "Hello & world"},
            {"start": "2.8", "dur": "1.7", "text": "It's bold"},
        ]


class TestCleanSegmentText:
    """Tests for clean_segment_text."""

    def test_removes_opening_tag(self):
        assert clean_segment_text('<text start="1" dur="2">plain</text') == "plain"

    def test_inline_markup_stripped(self):
        assert clean_segment_text('<text start="1" dur="2"><font color="#fff">hi</font> there') == "hi there"

    def test_escaped_markup_stripped_after_decoding(self):
        """Test tags revealed by entity decoding are removed too."""
        assert clean_segment_text('<text start="1" dur="2">&lt;i&gt;quiet&lt;/i&gt;') == "quiet"

    def test_numeric_entities_decoded(self):
        assert clean_segment_text('<text start="1" dur="2">it&amp;#39;s &amp;quot;ok&amp;quot;') == 'it\'s "ok"'

    def test_uppercase_ampersand_entity(self):
        assert clean_segment_text('<text start="1" dur="2">R &AMP;amp; B') == "R & B"

    def test_unterminated_tag_removed(self):
        assert clean_segment_text('<text start="1" dur="2">music <i') == "music "

    def test_decoded_less_than_kept_as_text(self):
        """Test a "<" revealed by decoding and followed by a space is not a tag."""
        assert clean_segment_text('<text start="1" dur="2">if x &amp;lt; 5 then') == "if x < 5 then"

    def test_decoded_comparison_inside_document(self):
        document = f'{PROLOG}<text start="1" dur="2">a &amp;lt; b &amp;gt; c</text></transcript>'

        assert parse_timed_text(document)[0].text == "a < b > c"
