"""Transcript resolution against the YouTube watch page.

    reference -> video id -> watch page -> caption guard -> metadata
              -> track catalog -> selected track -> payload -> snippets
              -> optional formatting

Watch pages and parsed transcripts are cached separately. A transcript cache
hit still goes through the page (or the page cache) so metadata is current.
An alternate gateway can be consulted before the watch page, or after it
fails.
"""

import asyncio
import logging
import math
import time
from collections.abc import Mapping, Sequence

import httpx

from yt_transcript_resolver.cache import ResolverCache
from yt_transcript_resolver.catalog import CaptionTrack, TrackCatalog
from yt_transcript_resolver.client import WATCH_URL, build_client, cookie_header
from yt_transcript_resolver.config import (
    CacheOptions,
    GatewayOptions,
    LoggerOptions,
    NetworkOptions,
    Settings,
)
from yt_transcript_resolver.errors import (
    CouldNotRetrieveTranscript,
    IpBlocked,
    NoTranscriptFound,
    TranscriptError,
    VideoUnavailable,
)
from yt_transcript_resolver.formatters import FormatterFactory
from yt_transcript_resolver.log import ResolverLogger
from yt_transcript_resolver.models import BatchResult, Transcript, TranscriptResponse
from yt_transcript_resolver.page import (
    RECAPTCHA_MARKER,
    extract_captions_json,
    extract_metadata,
)
from yt_transcript_resolver.parser import parse_timed_text
from yt_transcript_resolver.providers.base import DEFAULT_LANGUAGES, TranscriptProvider
from yt_transcript_resolver.providers.gateway import GatewayProvider
from yt_transcript_resolver.utils import extract_video_id

logger = logging.getLogger(__name__)

BATCH_GROUP_SIZE = 3


class TranscriptResolver(TranscriptProvider):
    def __init__(
        self,
        cache: CacheOptions | None = None,
        logger: LoggerOptions | None = None,
        gateway: GatewayOptions | None = None,
        network: NetworkOptions | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timer=time.monotonic,
    ):
        self._cache = ResolverCache(cache, timer)
        self._log = ResolverLogger(logger)
        self._gateway_options = gateway or GatewayOptions()
        self._gateway = GatewayProvider(self._gateway_options)
        self._retired_gateways: list[GatewayProvider] = []
        self._client = client or build_client(network or NetworkOptions())

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranscriptResolver":
        return cls(
            cache=settings.cache,
            logger=settings.logger,
            gateway=settings.gateway,
            network=settings.network,
        )

    # -- configuration -------------------------------------------------

    def set_cache_options(self, **changes) -> None:
        self._cache.update(**changes)

    def set_logger_options(self, **changes) -> None:
        self._log.update(**changes)

    async def set_gateway_options(self, **changes) -> None:
        """Replace the gateway configuration.

        Resolutions already awaiting the previous gateway keep using it; its
        client is closed together with the resolver.
        """
        self._gateway_options = self._gateway_options.model_copy(update=changes)
        self._retired_gateways.append(self._gateway)
        self._gateway = GatewayProvider(self._gateway_options)

    def set_cookies(self, cookies: Mapping[str, str]) -> None:
        """Send ``cookies`` with every watch page and caption request."""
        if cookies:
            self._client.headers["Cookie"] = cookie_header(cookies)
        else:
            self._client.headers.pop("Cookie", None)

    def clear_cache(self, kind: str | None = None) -> None:
        """Clear both caches, or only ``"page"`` / ``"transcript"``."""
        self._cache.clear(kind)

    def cache_stats(self) -> dict:
        return {
            "page": self._cache.pages.stats(),
            "transcript": self._cache.transcripts.stats(),
        }

    @staticmethod
    def get_video_id(url_or_id: str) -> str:
        return extract_video_id(url_or_id)

    # -- single video --------------------------------------------------

    async def fetch_transcript(
        self,
        video_id: str,
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
        formatter: str | None = None,
    ) -> TranscriptResponse:
        """Resolve one video reference (ID or URL) to a transcript.

        ``languages`` are tried in order; manually created tracks win over
        generated ones. When ``formatter`` is given the response also carries
        the rendered text.
        """
        # Fail on an unknown format before any network traffic.
        render = FormatterFactory.create(formatter) if formatter else None
        video_id = extract_video_id(video_id)
        languages = list(languages)
        started = time.perf_counter()

        try:
            response = await self._resolve(video_id, languages, preserve_formatting)
        except TranscriptError as e:
            self._log.log("error", f"Failed to fetch transcript for video {video_id}", e)
            raise

        if render is not None:
            response = response.model_copy(
                update={"formatted_text": render.format(response.transcript)}
            )
        self._timing("Total", started)
        return response

    async def _resolve(
        self, video_id: str, languages: list[str], preserve_formatting: bool
    ) -> TranscriptResponse:
        gateway = self._gateway_options
        if gateway.enabled and gateway.mode == "before":
            try:
                return await self._gateway.fetch_transcript(
                    video_id, languages, preserve_formatting
                )
            except TranscriptError as e:
                self._log.log("info", f"Gateway failed for {video_id}, using watch page", e)

        try:
            return await self._fetch_from_watch_page(
                video_id, languages, preserve_formatting
            )
        except CouldNotRetrieveTranscript as primary_error:
            if not (gateway.enabled and gateway.mode == "after"):
                raise
            self._log.log("info", f"Watch page failed for {video_id}, trying gateway")
            try:
                return await self._gateway.fetch_transcript(
                    video_id, languages, preserve_formatting
                )
            except TranscriptError as e:
                self._log.log("info", f"Gateway fallback failed for {video_id}", e)
            raise primary_error

    async def _fetch_from_watch_page(
        self, video_id: str, languages: list[str], preserve_formatting: bool
    ) -> TranscriptResponse:
        key = ResolverCache.transcript_key(video_id, languages, preserve_formatting)
        cached = self._cache.transcripts.get(key)
        page = await self._get_page(video_id)

        if cached is not None:
            self._log.log("performance", "Using cached transcript")
            # The page may have been refetched since; classify it before use.
            extract_captions_json(page, video_id)
            return TranscriptResponse(
                transcript=cached, metadata=extract_metadata(page, video_id)
            )

        started = time.perf_counter()
        captions = extract_captions_json(page, video_id)
        self._timing("Captions Extract", started)

        started = time.perf_counter()
        metadata = extract_metadata(page, video_id)
        self._timing("Metadata Extract", started)

        track = TrackCatalog.build(video_id, captions).find_transcript(languages)
        transcript = await self._fetch_track(track, preserve_formatting)
        if not transcript.snippets:
            raise NoTranscriptFound(video_id, languages)

        self._cache.transcripts.set(key, transcript)
        return TranscriptResponse(transcript=transcript, metadata=metadata)

    async def _get_page(self, video_id: str) -> str:
        key = ResolverCache.page_key(video_id)
        page = self._cache.pages.get(key)
        if page is not None:
            self._log.log("performance", "Using cached HTML")
            return page

        started = time.perf_counter()
        page = await self._fetch_page(video_id)
        self._timing("HTML Fetch", started)
        # Challenge pages are transient; never serve them from cache.
        if RECAPTCHA_MARKER not in page:
            self._cache.pages.set(key, page)
        return page

    async def _fetch_page(self, video_id: str) -> str:
        logger.debug("Fetching watch page for %s", video_id)
        try:
            resp = await self._client.get(WATCH_URL, params={"v": video_id})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (403, 429):
                raise IpBlocked(video_id) from e
            raise VideoUnavailable(video_id) from e
        except httpx.HTTPError as e:
            raise VideoUnavailable(video_id) from e
        return resp.text

    async def _fetch_track(
        self, track: CaptionTrack, preserve_formatting: bool
    ) -> Transcript:
        started = time.perf_counter()
        try:
            resp = await self._client.get(track.fetch_url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise VideoUnavailable(track.video_id) from e
        self._timing("Fetch Content", started)

        return Transcript(
            snippets=parse_timed_text(resp.text, preserve_formatting),
            video_id=track.video_id,
            language=track.language,
            language_code=track.language_code,
            is_generated=track.is_generated,
        )

    # -- catalog and translation -----------------------------------------

    async def list_transcripts(self, video_id: str) -> TrackCatalog:
        """Return every caption track the video offers."""
        video_id = extract_video_id(video_id)
        page = await self._get_page(video_id)
        return TrackCatalog.build(video_id, extract_captions_json(page, video_id))

    async def fetch_translated_transcript(
        self,
        video_id: str,
        language_code: str,
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
        formatter: str | None = None,
    ) -> TranscriptResponse:
        """Machine-translate the best track for ``languages`` into ``language_code``."""
        render = FormatterFactory.create(formatter) if formatter else None
        video_id = extract_video_id(video_id)
        page = await self._get_page(video_id)
        catalog = TrackCatalog.build(video_id, extract_captions_json(page, video_id))
        track = catalog.find_transcript(languages).translate(language_code)

        transcript = await self._fetch_track(track, preserve_formatting)
        if not transcript.snippets:
            raise NoTranscriptFound(video_id, [language_code])
        return TranscriptResponse(
            transcript=transcript,
            metadata=extract_metadata(page, video_id),
            formatted_text=render.format(transcript) if render else None,
        )

    # -- batch ---------------------------------------------------------

    async def fetch_transcripts(
        self,
        video_ids: Sequence[str],
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
        stop_on_error: bool = False,
        formatter: str | None = None,
    ) -> BatchResult:
        """Resolve many references, at most ``BATCH_GROUP_SIZE`` at a time.

        Each group finishes completely before the next starts. With
        ``stop_on_error`` no group after the first failing one is attempted.
        """
        batch = BatchResult()
        total_groups = math.ceil(len(video_ids) / BATCH_GROUP_SIZE)
        self._log.log("performance", f"Starting batch processing of {len(video_ids)} videos")
        started = time.perf_counter()

        for offset in range(0, len(video_ids), BATCH_GROUP_SIZE):
            group = video_ids[offset : offset + BATCH_GROUP_SIZE]
            self._log.log(
                "info",
                f"Processing batch {offset // BATCH_GROUP_SIZE + 1} of {total_groups}",
            )
            outcomes = await asyncio.gather(
                *(
                    self._fetch_one(ref, languages, preserve_formatting, formatter)
                    for ref in group
                )
            )

            failed = False
            for key, response, error in outcomes:
                if error is not None:
                    batch.errors[key] = error
                    failed = True
                else:
                    batch.results[key] = response
                    self._log.log("info", f"Successfully fetched transcript for {key}")
            if failed and stop_on_error:
                self._log.log("info", "Stopping batch processing due to error (stop_on_error=True)")
                break

        self._log.log(
            "performance",
            f"Batch processing completed in {(time.perf_counter() - started) * 1000:.0f}ms",
            {
                "total_videos": len(video_ids),
                "successful": len(batch.results),
                "failed": len(batch.errors),
            },
        )
        return batch

    async def _fetch_one(
        self,
        reference: str,
        languages: Sequence[str],
        preserve_formatting: bool,
        formatter: str | None,
    ) -> tuple[str, TranscriptResponse | None, TranscriptError | None]:
        # Unnormalizable references are reported under the raw input.
        try:
            key = extract_video_id(reference)
        except TranscriptError as e:
            return reference, None, e
        try:
            response = await self.fetch_transcript(
                key, languages, preserve_formatting, formatter
            )
        except TranscriptError as e:
            return key, None, e
        return key, response, None

    # -- lifecycle -----------------------------------------------------

    def _timing(self, label: str, started: float) -> None:
        self._log.log("performance", f"{label}: {(time.perf_counter() - started) * 1000:.0f}ms")

    async def close(self) -> None:
        for gateway in self._retired_gateways:
            await gateway.close()
        self._retired_gateways.clear()
        await self._gateway.close()
        await self._client.aclose()
