"""Tests for the diagnostics collector."""

import logging

from caption_extractor.diagnostics import DiagnosticCode, DiagnosticEvent, Diagnostics


class TestDiagnostics:
    """Tests for Diagnostics."""

    def test_records_events_in_order(self):
        diagnostics = Diagnostics()

        diagnostics.warn(DiagnosticCode.NO_CAPTIONS, "no captions", "vid1")
        diagnostics.warn(DiagnosticCode.MALFORMED_LINE, "bad line")

        assert len(diagnostics) == 2
        assert diagnostics.events == [
            DiagnosticEvent(DiagnosticCode.NO_CAPTIONS, "no captions", "vid1"),
            DiagnosticEvent(DiagnosticCode.MALFORMED_LINE, "bad line", None),
        ]
        assert diagnostics.codes == [DiagnosticCode.NO_CAPTIONS, DiagnosticCode.MALFORMED_LINE]

    def test_events_returns_copy(self):
        diagnostics = Diagnostics()
        diagnostics.warn(DiagnosticCode.TRACK_NOT_FOUND, "x")

        diagnostics.events.clear()

        assert len(diagnostics) == 1

    def test_callback_invoked(self):
        received = []
        diagnostics = Diagnostics(callback=received.append)

        event = diagnostics.warn(DiagnosticCode.TRACK_LIST_MALFORMED, "broken", "vid")

        assert received == [event]

    def test_logs_warning(self, caplog):
        diagnostics = Diagnostics()

        with caplog.at_level(logging.WARNING, logger="caption_extractor.diagnostics"):
            diagnostics.warn(DiagnosticCode.NO_CAPTIONS, "No captions found for video: vid")

        assert "No captions found for video: vid" in caplog.text

    def test_code_values(self):
        assert DiagnosticCode.NO_CAPTIONS.value == "no_captions"
        assert DiagnosticCode.MALFORMED_LINE == "malformed_line"
