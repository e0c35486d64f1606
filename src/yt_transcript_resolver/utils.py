"""Utility functions."""

from urllib.parse import parse_qs, urlsplit

from yt_transcript_resolver.errors import InvalidReference

SHORT_LINK_HOSTS = {"youtu.be"}
WATCH_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com"}
PATH_PREFIXES = ("/shorts/", "/embed/", "/live/")


def extract_video_id(url_or_id: str) -> str:
    """Extract YouTube video ID from URL or return as-is if it looks like an ID.

    Anything without a ``/`` or ``.`` is taken to be a bare ID already.
    """
    if not url_or_id:
        raise InvalidReference(url_or_id)

    if "/" not in url_or_id and "." not in url_or_id:
        return url_or_id

    try:
        url = urlsplit(url_or_id)
        host = (url.hostname or "").lower()
    except ValueError:
        raise InvalidReference(url_or_id)
    if not url.scheme or not host:
        raise InvalidReference(url_or_id)

    video_id = ""
    if host in SHORT_LINK_HOSTS:
        video_id = url.path.lstrip("/").split("/")[0]
    elif host in WATCH_HOSTS:
        if url.path == "/watch":
            video_id = parse_qs(url.query).get("v", [""])[0]
        else:
            for prefix in PATH_PREFIXES:
                if url.path.startswith(prefix):
                    video_id = url.path[len(prefix):].split("/")[0]
                    break

    if not video_id:
        raise InvalidReference(url_or_id)
    return video_id
