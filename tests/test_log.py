"""Tests for resolver instrumentation."""

import logging

from yt_transcript_resolver.config import LoggerOptions
from yt_transcript_resolver.log import ResolverLogger


class TestResolverLogger:
    def test_disabled_is_silent(self, caplog):
        log = ResolverLogger()
        with caplog.at_level(logging.DEBUG):
            log.log("info", "nothing")
        assert caplog.records == []

    def test_stdlib_fallback(self, caplog):
        log = ResolverLogger(LoggerOptions(enabled=True))
        with caplog.at_level(logging.INFO):
            log.log("performance", "HTML Fetch: 12ms")
            log.log("error", "Failed", {"video": "abc"})
        perf, error = caplog.records
        assert perf.name == "youtube-transcript.performance"
        assert perf.levelno == logging.INFO
        assert perf.getMessage() == "HTML Fetch: 12ms"
        assert error.name == "youtube-transcript.error"
        assert error.levelno == logging.ERROR
        assert error.getMessage() == "Failed {'video': 'abc'}"

    def test_sink_handles_record(self, caplog):
        seen = []
        log = ResolverLogger(
            LoggerOptions(enabled=True, sink=lambda kind, msg, data: seen.append((kind, msg, data)) or True)
        )
        with caplog.at_level(logging.INFO):
            log.log("info", "hello", 1)
        assert seen == [("info", "hello", 1)]
        assert caplog.records == []

    def test_declining_sink_falls_through(self, caplog):
        log = ResolverLogger(LoggerOptions(enabled=True, sink=lambda *args: False))
        with caplog.at_level(logging.INFO):
            log.log("info", "hello")
        assert [r.getMessage() for r in caplog.records] == ["hello"]

    def test_custom_namespace(self, caplog):
        log = ResolverLogger(LoggerOptions(enabled=True))
        log.update(namespace="app")
        with caplog.at_level(logging.INFO):
            log.log("info", "hello")
        assert caplog.records[0].name == "app.info"
