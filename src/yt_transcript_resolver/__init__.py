"""Resolve YouTube caption tracks from the watch page and render them."""

from yt_transcript_resolver.catalog import CaptionTrack, TrackCatalog
from yt_transcript_resolver.config import (
    CacheOptions,
    GatewayOptions,
    LoggerOptions,
    NetworkOptions,
    Settings,
)
from yt_transcript_resolver.errors import (
    CouldNotRetrieveTranscript,
    GatewayUnavailable,
    InvalidReference,
    IpBlocked,
    NoTranscriptFound,
    NotTranslatable,
    TranscriptError,
    TranscriptsDisabled,
    TranslationLanguageNotAvailable,
    UnsupportedFormatError,
    VideoDataUnparsable,
    VideoUnavailable,
)
from yt_transcript_resolver.formatters import (
    Formatter,
    FormatterFactory,
    JSONFormatter,
    SRTFormatter,
    TextFormatter,
    WebVTTFormatter,
)
from yt_transcript_resolver.models import (
    BatchResult,
    Thumbnail,
    Transcript,
    TranscriptResponse,
    TranscriptSnippet,
    TranslationLanguage,
    VideoMetadata,
)
from yt_transcript_resolver.parser import parse_timed_text
from yt_transcript_resolver.resolver import TranscriptResolver
from yt_transcript_resolver.utils import extract_video_id

__all__ = [
    "TranscriptResolver",
    "extract_video_id",
    "parse_timed_text",
    "CaptionTrack",
    "TrackCatalog",
    "CacheOptions",
    "GatewayOptions",
    "LoggerOptions",
    "NetworkOptions",
    "Settings",
    "Formatter",
    "FormatterFactory",
    "JSONFormatter",
    "SRTFormatter",
    "TextFormatter",
    "WebVTTFormatter",
    "BatchResult",
    "Thumbnail",
    "Transcript",
    "TranscriptResponse",
    "TranscriptSnippet",
    "TranslationLanguage",
    "VideoMetadata",
    "TranscriptError",
    "InvalidReference",
    "UnsupportedFormatError",
    "CouldNotRetrieveTranscript",
    "VideoUnavailable",
    "IpBlocked",
    "TranscriptsDisabled",
    "NoTranscriptFound",
    "NotTranslatable",
    "TranslationLanguageNotAvailable",
    "VideoDataUnparsable",
    "GatewayUnavailable",
]
