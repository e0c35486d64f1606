"""Alternate caption gateway provider.

Talks to mirror services exposing ``GET /transcript/{video_id}``. Base URLs
are tried in order until one answers with a usable transcript. A reply that is
not a JSON object with a non-empty ``segments`` list counts as a failure of
that base URL.
"""

import logging
from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from yt_transcript_resolver.config import GatewayOptions
from yt_transcript_resolver.errors import GatewayUnavailable
from yt_transcript_resolver.models import (
    Transcript,
    TranscriptResponse,
    TranscriptSnippet,
    VideoMetadata,
)
from .base import DEFAULT_LANGUAGES, TranscriptProvider

logger = logging.getLogger(__name__)


class GatewayProvider(TranscriptProvider):
    def __init__(self, options: GatewayOptions):
        self.options = options
        self._base_urls = [url.rstrip("/") for url in options.base_urls]
        self._headers = {}
        if options.api_key:
            self._headers["X-API-Key"] = options.api_key
        self._client = httpx.AsyncClient(
            headers=self._headers,
            timeout=options.timeout,
        )

    async def fetch_transcript(
        self,
        video_id: str,
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
    ) -> TranscriptResponse:
        if not self._base_urls:
            raise GatewayUnavailable(video_id, "no gateway base URLs configured")

        last_error = ""
        for base_url in self._base_urls:
            try:
                resp = await self._client.get(
                    f"{base_url}/transcript/{video_id}",
                    params={"lang": ",".join(languages), "format": "segments"},
                )
                resp.raise_for_status()
                return self._to_response(video_id, languages, resp.json())
            except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
                # ValidationError and JSONDecodeError are both ValueErrors.
                logger.warning("Gateway %s failed for %s: %s", base_url, video_id, e)
                last_error = f"{base_url}: {e}"
        raise GatewayUnavailable(video_id, last_error)

    @staticmethod
    def _to_response(
        video_id: str, languages: Sequence[str], data: dict
    ) -> TranscriptResponse:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        raw_segments = data["segments"]
        if not isinstance(raw_segments, list) or not raw_segments:
            raise ValueError("response carries no segments")
        segments = []
        for s in raw_segments:
            if not isinstance(s, dict):
                raise TypeError(f"malformed segment: {s!r}")
            segments.append(
                TranscriptSnippet(text=s["text"], start=s["start"], duration=s["duration"])
            )

        language_code = (
            data.get("language_code") or data.get("language") or next(iter(languages), "")
        )
        is_generated = data.get("is_generated")
        if is_generated is None:
            extra = data.get("metadata")
            is_generated = extra.get("is_generated", False) if isinstance(extra, dict) else False
        transcript = Transcript(
            snippets=segments,
            video_id=data.get("video_id") or video_id,
            language=data.get("language") or language_code,
            language_code=language_code,
            is_generated=is_generated,
        )

        video = data.get("video")
        if not isinstance(video, dict):
            video = {}
        try:
            metadata = VideoMetadata(**{"id": video_id, **video})
        except ValidationError:
            metadata = VideoMetadata(id=video_id)

        return TranscriptResponse(transcript=transcript, metadata=metadata, source="gateway")

    async def close(self) -> None:
        await self._client.aclose()
