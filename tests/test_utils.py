"""Tests for video ID extraction."""

import pytest

from yt_transcript_resolver.errors import InvalidReference
from yt_transcript_resolver.utils import extract_video_id


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?v=dQw4w9WgXcQ",
            "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/live/dQw4w9WgXcQ",
        ],
    )
    def test_all_url_shapes_agree(self, url):
        assert extract_video_id(url) == "dQw4w9WgXcQ"

    def test_url_with_params(self):
        assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=30") == "dQw4w9WgXcQ"

    def test_short_url_with_query(self):
        assert extract_video_id("https://youtu.be/dQw4w9WgXcQ?si=abc") == "dQw4w9WgXcQ"

    def test_embed_with_trailing_segment(self):
        assert extract_video_id("https://www.youtube.com/embed/dQw4w9WgXcQ/extra") == "dQw4w9WgXcQ"

    def test_raw_id(self):
        assert extract_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_opaque_string_passes_through(self):
        assert extract_video_id("invalid-url") == "invalid-url"

    def test_empty_string(self):
        with pytest.raises(InvalidReference):
            extract_video_id("")

    def test_watch_without_v(self):
        with pytest.raises(InvalidReference):
            extract_video_id("https://www.youtube.com/watch")

    def test_watch_with_empty_v(self):
        with pytest.raises(InvalidReference):
            extract_video_id("https://www.youtube.com/watch?v=")

    def test_foreign_host(self):
        with pytest.raises(InvalidReference):
            extract_video_id("https://google.com/watch?v=dQw4w9WgXcQ")

    def test_not_a_url(self):
        with pytest.raises(InvalidReference):
            extract_video_id("youtube.com/watch?v=dQw4w9WgXcQ")

    def test_error_keeps_reference(self):
        with pytest.raises(InvalidReference) as exc_info:
            extract_video_id("https://youtu.be/")
        assert exc_info.value.reference == "https://youtu.be/"
