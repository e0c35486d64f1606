"""YouTube Transcript Resolver MCP Server."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from yt_transcript_resolver.config import Settings, Transport
from yt_transcript_resolver.errors import TranscriptError
from yt_transcript_resolver.models import TranscriptResponse
from yt_transcript_resolver.resolver import TranscriptResolver

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("yt-transcript-resolver")

# Module-level state
_resolver = None
_settings = None

# Tool annotations for read-only API tools
TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}

OutputFormat = Literal["text", "json", "srt", "webvtt"]


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _resolver, _settings
    _settings = Settings()
    _resolver = TranscriptResolver.from_settings(_settings)
    if _settings.gateway.enabled:
        logger.info(
            f"Gateway {_settings.gateway.mode} watch page: "
            f"{', '.join(_settings.gateway.base_urls)}"
        )
    logger.info("Server started")
    yield

    if _resolver:
        await _resolver.close()
    logger.info("Server stopped")


mcp = FastMCP(
    "YouTube Transcript Resolver",
    instructions="Resolve, translate and export YouTube video transcripts",
    lifespan=app_lifespan,
)


def _languages(languages: list[str] | None) -> list[str]:
    if languages:
        return languages
    return list(_settings.default_languages) if _settings else ["en"]


def _render(response: TranscriptResponse) -> str:
    meta = response.metadata
    transcript = response.transcript
    kind = "generated" if transcript.is_generated else "manual"
    header = (
        f"## {meta.title or transcript.video_id}\n"
        f"**Author:** {meta.author or 'unknown'} | "
        f"**Language:** {transcript.language} ({transcript.language_code}, {kind}) | "
        f"**Source:** {response.source}\n"
    )
    return f"{header}\n{response.formatted_text}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID (e.g. https://youtube.com/watch?v=dQw4w9WgXcQ or just dQw4w9WgXcQ)")],
    languages: Annotated[list[str] | None, Field(default=None, description="Language codes in priority order (e.g. ['de', 'en']). Manually created captions win over auto-generated ones.")] = None,
    format: Annotated[OutputFormat, Field(default="text", description="Output format: text, json, srt or webvtt")] = "text",
    preserve_formatting: Annotated[bool, Field(default=False, description="Keep inline emphasis tags such as <i> and <b>")] = False,
) -> str:
    """Get the transcript of a YouTube video in the preferred language and format."""
    try:
        response = await _resolver.fetch_transcript(
            url, _languages(languages), preserve_formatting, formatter=format
        )
    except TranscriptError as e:
        return f"Error: {e.message}"
    return _render(response)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def list_transcripts(
    url: Annotated[str, Field(description="YouTube video URL or video ID")],
) -> str:
    """List the manual and auto-generated caption tracks and translation languages of a video."""
    try:
        catalog = await _resolver.list_transcripts(url)
    except TranscriptError as e:
        return f"Error: {e.message}"
    return str(catalog)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def translate_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID")],
    target_language: Annotated[str, Field(description="Language code to translate the transcript into (e.g. fr)")],
    languages: Annotated[list[str] | None, Field(default=None, description="Source language codes in priority order")] = None,
    format: Annotated[OutputFormat, Field(default="text", description="Output format: text, json, srt or webvtt")] = "text",
) -> str:
    """Machine-translate a YouTube transcript into another language."""
    try:
        response = await _resolver.fetch_translated_transcript(
            url, target_language, _languages(languages), formatter=format
        )
    except TranscriptError as e:
        return f"Error: {e.message}"
    return _render(response)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def batch_transcripts(
    urls: Annotated[list[str], Field(description="List of YouTube video URLs or IDs to process (maximum 10 videos per batch)")],
    languages: Annotated[list[str] | None, Field(default=None, description="Language codes in priority order for all videos")] = None,
    stop_on_error: Annotated[bool, Field(default=False, description="Stop after the first group that contains a failure")] = False,
) -> str:
    """Get transcripts for multiple YouTube videos in a single request (max 10 videos)."""
    if len(urls) > 10:
        return "Error: Maximum 10 videos per batch."

    batch = await _resolver.fetch_transcripts(
        urls, _languages(languages), stop_on_error=stop_on_error
    )

    parts = []
    for vid, response in batch.results.items():
        text = response.transcript.text
        preview = text[:500] + ("..." if len(text) > 500 else "")
        parts.append(
            f"### {vid}\n**Language:** {response.transcript.language} | "
            f"**Segments:** {len(response.transcript.snippets)}\n\n{preview}\n"
        )
    for vid, error in batch.errors.items():
        parts.append(f"### {vid}\n**Error:** {error.message}\n")

    header = f"## Batch Transcripts ({len(urls)} videos)\n"
    return header + "\n---\n\n".join(parts)


# -- MCP Resources --


@mcp.resource("youtube://help")
def help_resource() -> str:
    """Usage guide for the YouTube Transcript Resolver MCP server."""
    return """# YouTube Transcript Resolver - Help Guide

## Available Tools

### get_transcript
Fetch the transcript of a video.
- Languages are tried in order; manual captions beat auto-generated ones
- Formats: text, json, srt, webvtt
- Example: get_transcript(url="https://youtube.com/watch?v=VIDEO_ID", languages=["de", "en"], format="srt")

### list_transcripts
Show every caption track a video offers and the languages it can be translated into.
- Example: list_transcripts(url="VIDEO_ID")

### translate_transcript
Machine-translate the best matching track.
- Example: translate_transcript(url="VIDEO_ID", target_language="fr")

### batch_transcripts
Process multiple videos at once (max 10), three at a time.
- Example: batch_transcripts(urls=["VIDEO1", "VIDEO2"], languages=["en"])

## Tips
- Accepts video IDs and watch, youtu.be, shorts, embed and live URLs
- Use list_transcripts to see which language codes exist before asking for one
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
