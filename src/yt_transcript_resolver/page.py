"""Extraction of caption and video data embedded in the watch page.

The watch page inlines the player response as a JavaScript object literal. We
locate a marker token and cut out the balanced ``{...}`` that follows it rather
than splitting on a second marker, since field order in the page changes.
"""

import html
import json
import logging

from pydantic import ValidationError

from yt_transcript_resolver.errors import (
    IpBlocked,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoDataUnparsable,
    VideoUnavailable,
)
from yt_transcript_resolver.models import Thumbnail, VideoMetadata

logger = logging.getLogger(__name__)

CAPTIONS_MARKER = '"captions":'
PLAYABILITY_MARKER = '"playabilityStatus":'
RECAPTCHA_MARKER = 'class="g-recaptcha"'
PLAYER_RESPONSE_TOKEN = "ytInitialPlayerResponse"


def extract_json_object(source: str, start: int = 0) -> str | None:
    """Return the balanced ``{...}`` beginning at the first brace after ``start``."""
    begin = source.find("{", start)
    if begin < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(begin, len(source)):
        ch = source[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth == 0:
                return source[begin : i + 1]
    return None


def extract_captions_json(page: str, video_id: str) -> dict:
    """Classify the page and return the caption track list renderer.

    The captcha check comes first: a challenge page also lacks the captions
    marker and would otherwise be reported as an unavailable video.
    """
    marker = page.find(CAPTIONS_MARKER)
    if marker < 0:
        if RECAPTCHA_MARKER in page:
            raise IpBlocked(video_id)
        if PLAYABILITY_MARKER not in page:
            raise VideoUnavailable(video_id)
        raise TranscriptsDisabled(video_id)

    raw = extract_json_object(page, marker + len(CAPTIONS_MARKER))
    try:
        captions = json.loads(raw) if raw else None
    except json.JSONDecodeError:
        logger.debug("Undecodable captions object for %s", video_id)
        captions = None

    renderer = captions.get("playerCaptionsTracklistRenderer") if isinstance(captions, dict) else None
    if not isinstance(renderer, dict):
        raise TranscriptsDisabled(video_id)
    if "captionTracks" not in renderer:
        raise NoTranscriptFound(video_id, [])
    return renderer


def extract_player_response(page: str) -> dict | None:
    idx = page.find(PLAYER_RESPONSE_TOKEN)
    while idx >= 0:
        eq = page.find("=", idx + len(PLAYER_RESPONSE_TOKEN))
        # Only accept an assignment, not a mere mention of the name.
        if eq >= 0 and not page[idx + len(PLAYER_RESPONSE_TOKEN) : eq].strip():
            raw = extract_json_object(page, eq)
            if raw:
                try:
                    return json.loads(raw)
                except json.JSONDecodeError:
                    return None
        idx = page.find(PLAYER_RESPONSE_TOKEN, idx + 1)
    return None


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _text(value) -> str:
    return html.unescape(value) if isinstance(value, str) else ""


def extract_metadata(page: str, video_id: str) -> VideoMetadata:
    """Build :class:`VideoMetadata` from the player response in ``page``.

    Missing or oddly typed text fields fall back to empty values; anything
    the model still rejects is reported as :class:`VideoDataUnparsable`.
    """
    data = extract_player_response(page)
    if not isinstance(data, dict):
        raise VideoDataUnparsable(video_id, "no player response in page")

    details = data.get("videoDetails")
    if not isinstance(details, dict):
        raise VideoDataUnparsable(video_id, "no video details found")

    microformat = _as_dict(_as_dict(data.get("microformat")).get("playerMicroformatRenderer"))
    thumbnails = _as_list(_as_dict(details.get("thumbnail")).get("thumbnails"))

    try:
        return VideoMetadata(
            id=details.get("videoId") or video_id,
            title=_text(details.get("title")),
            description=_text(details.get("shortDescription")),
            author=_text(details.get("author")),
            channel_id=details.get("channelId") or "",
            length_seconds=_to_int(details.get("lengthSeconds")),
            view_count=_to_int(details.get("viewCount")),
            is_private=bool(details.get("isPrivate", False)),
            is_live_content=bool(details.get("isLiveContent", False)),
            publish_date=microformat.get("publishDate"),
            category=microformat.get("category"),
            keywords=[k for k in _as_list(details.get("keywords")) if isinstance(k, str)],
            thumbnails=[
                Thumbnail(
                    url=thumb["url"],
                    width=_to_int(thumb.get("width")),
                    height=_to_int(thumb.get("height")),
                )
                for thumb in thumbnails
                if isinstance(thumb, dict) and isinstance(thumb.get("url"), str)
            ],
        )
    except ValidationError as e:
        raise VideoDataUnparsable(
            video_id, f"invalid video details ({e.error_count()} errors)"
        ) from e
