"""Shared test fixtures."""

import json

import pytest

from yt_transcript_resolver.models import Transcript, TranscriptSnippet

VIDEO_ID = "dQw4w9WgXcQ"
TIMEDTEXT_URL = "https://www.youtube.com/api/timedtext"


def caption_track(code, name, kind=None, translatable=False, video_id=VIDEO_ID):
    track = {
        "baseUrl": f"{TIMEDTEXT_URL}?v={video_id}&lang={code}",
        "name": {"simpleText": name},
        "languageCode": code,
        "isTranslatable": translatable,
    }
    if kind:
        track["kind"] = kind
        track["baseUrl"] += f"&kind={kind}"
    return track


@pytest.fixture
def watch_page():
    """Factory for watch page HTML with an inlined player response."""

    def make(
        video_id=VIDEO_ID,
        tracks=None,
        translation_languages=None,
        captions=True,
        title="Rick Astley - Never Gonna Give You Up",
        publish_date="2009-10-24",
    ):
        if tracks is None:
            tracks = [
                caption_track("en", "English", translatable=True, video_id=video_id),
                caption_track("en", "English (auto-generated)", kind="asr", video_id=video_id),
            ]
        if translation_languages is None:
            translation_languages = [
                {"languageCode": "fr", "languageName": {"simpleText": "French"}},
                {"languageCode": "de", "languageName": {"runs": [{"text": "German"}]}},
            ]
        player = {"playabilityStatus": {"status": "OK"}}
        if captions:
            player["captions"] = {
                "playerCaptionsTracklistRenderer": {
                    "captionTracks": tracks,
                    "translationLanguages": translation_languages,
                }
            }
        player["videoDetails"] = {
            "videoId": video_id,
            "title": title,
            "lengthSeconds": "212",
            "keywords": ["rick astley", "never gonna give you up"],
            "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
            "shortDescription": "The official video &amp; more",
            "thumbnail": {
                "thumbnails": [
                    {"url": "https://i.ytimg.com/vi/x/default.jpg", "width": 120, "height": 90}
                ]
            },
            "viewCount": "1500000000",
            "author": "Rick Astley",
            "isPrivate": False,
            "isLiveContent": False,
        }
        player["microformat"] = {
            "playerMicroformatRenderer": {"publishDate": publish_date, "category": "Music"}
        }
        return (
            "<!DOCTYPE html><html><head><title>YouTube</title></head><body>"
            f"<script>var ytInitialPlayerResponse = {json.dumps(player)};"
            "var meta = document.createElement('meta');</script></body></html>"
        )

    return make


@pytest.fixture
def xml_payload():
    return (
        '<?xml version="1.0" encoding="utf-8" ?><transcript>'
        '<text start="0" dur="2.5">Hello world</text>'
        '<text start="2.5" dur="3">this is a test</text>'
        '<text start="5.5" dur="2">of the transcript</text>'
        "</transcript>"
    )


@pytest.fixture
def sample_snippets():
    return [
        TranscriptSnippet(text="First line", start=0.0, duration=2.5),
        TranscriptSnippet(text="Second line", start=2.5, duration=3.0),
        TranscriptSnippet(text="Third line", start=5.5, duration=2.0),
    ]


@pytest.fixture
def sample_transcript(sample_snippets):
    return Transcript(
        snippets=sample_snippets,
        video_id="test-video",
        language="English",
        language_code="en",
        is_generated=False,
    )
