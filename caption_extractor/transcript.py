"""
Timed-text document parsing.

A timed-text document looks like::

    <?xml version="1.0" encoding="utf-8" ?><transcript>
    <text start="0.5" dur="2.3">Hello &amp;amp; world</text>
    ...
    </transcript>

Segment text is HTML-escaped, sometimes twice, and may carry inline markup
once unescaped. The document is split on the closing text tag rather than
parsed as XML so that unbalanced markup inside a segment cannot break the
whole transcript.
"""

import html
import logging
import re

from caption_extractor.diagnostics import DiagnosticCode, Diagnostics
from caption_extractor.models import SubtitleLine

logger = logging.getLogger(__name__)


TRANSCRIPT_PROLOG = '<?xml version="1.0" encoding="utf-8" ?><transcript>'
TRANSCRIPT_CLOSE = "</transcript>"
SEGMENT_DELIMITER = "</text>"

START_PATTERN = re.compile(r'start="([\d.]+)"')
DUR_PATTERN = re.compile(r'dur="([\d.]+)"')

OPENING_TEXT_TAG_PATTERN = re.compile(r"<text[^>]*>")
AMPERSAND_ENTITY_PATTERN = re.compile(r"&amp;", re.IGNORECASE)
# An unterminated tag at the end of the text is removed as well
TAG_REMOVAL_PATTERN = re.compile(r"</?[^>]+(?:>|$)")
# After decoding, a "<" followed by whitespace is literal text ("x < 5")
DECODED_TAG_PATTERN = re.compile(r"<(?!\s)[^>]*(?:>|$)")


def clean_segment_text(fragment: str) -> str:
    """
    Turn a raw segment into plain text.

    The steps run in a fixed order: drop the opening ``<text>`` tag, collapse
    ``&amp;`` so double-escaped entities become single-escaped, strip tags,
    decode the remaining entities, then strip any tags the decoding revealed.

    Args:
        fragment: Segment markup up to (not including) its closing tag

    Returns:
        Plain decoded text
    """
    text = OPENING_TEXT_TAG_PATTERN.sub("", fragment, count=1)
    text = AMPERSAND_ENTITY_PATTERN.sub("&", text)
    text = TAG_REMOVAL_PATTERN.sub("", text)
    text = html.unescape(text)
    return DECODED_TAG_PATTERN.sub("", text)


def parse_timed_text(document: str, diagnostics: Diagnostics | None = None) -> list[SubtitleLine]:
    """
    Parse a timed-text document into subtitle lines.

    Args:
        document: Raw timed-text document
        diagnostics: Collector for skipped lines

    Returns:
        SubtitleLine objects in document order. Segments without a start or
        duration attribute are skipped.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    body = document.replace(TRANSCRIPT_PROLOG, "", 1).replace(TRANSCRIPT_CLOSE, "", 1)

    lines = []
    for fragment in body.split(SEGMENT_DELIMITER):
        if not fragment.strip():
            continue

        start_match = START_PATTERN.search(fragment)
        dur_match = DUR_PATTERN.search(fragment)
        if not start_match or not dur_match:
            diagnostics.warn(
                DiagnosticCode.MALFORMED_LINE,
                f"Failed to extract start or duration from line: {fragment}",
            )
            continue

        lines.append(
            SubtitleLine(
                start=start_match.group(1),
                dur=dur_match.group(1),
                text=clean_segment_text(fragment),
            )
        )

    logger.debug(f"Parsed {len(lines)} subtitle lines")
    return lines
