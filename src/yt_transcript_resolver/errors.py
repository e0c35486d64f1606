"""Exception hierarchy for transcript resolution.

    TranscriptError
    ├── InvalidReference
    ├── UnsupportedFormatError
    └── CouldNotRetrieveTranscript
        ├── VideoUnavailable
        ├── IpBlocked
        ├── TranscriptsDisabled
        ├── NoTranscriptFound
        ├── NotTranslatable
        ├── TranslationLanguageNotAvailable
        ├── VideoDataUnparsable
        └── GatewayUnavailable
"""

from collections.abc import Iterable


class TranscriptError(Exception):
    """Root exception for everything raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidReference(TranscriptError):
    def __init__(self, reference: str):
        super().__init__(f"Invalid YouTube URL or video ID: {reference!r}")
        self.reference = reference


class UnsupportedFormatError(TranscriptError, ValueError):
    def __init__(self, name: str, choices: Iterable[str]):
        self.choices = list(choices)
        super().__init__(
            f"The format '{name}' is not supported. "
            f"Choose one of the following formats: {', '.join(self.choices)}"
        )
        self.name = name


class CouldNotRetrieveTranscript(TranscriptError):
    """A single video could not be resolved. Always carries the video id."""

    cause = "Could not retrieve a transcript"

    def __init__(self, video_id: str, message: str | None = None):
        super().__init__(message or f"{self.cause} for video {video_id}")
        self.video_id = video_id


class VideoUnavailable(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str):
        super().__init__(video_id, f"Video {video_id} is unavailable")


class IpBlocked(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str):
        super().__init__(
            video_id,
            f"YouTube is blocking requests from this IP (video {video_id})",
        )


class TranscriptsDisabled(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str):
        super().__init__(video_id, f"Transcripts are disabled for video {video_id}")


class NoTranscriptFound(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str, languages: Iterable[str]):
        self.languages = list(languages)
        if self.languages:
            message = (
                f"No transcript found for video {video_id} "
                f"in languages: {', '.join(self.languages)}"
            )
        else:
            message = f"No transcripts exist for video {video_id}"
        super().__init__(video_id, message)


class NotTranslatable(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str):
        super().__init__(video_id, f"Transcript for video {video_id} is not translatable")


class TranslationLanguageNotAvailable(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str, language_code: str):
        super().__init__(
            video_id,
            f"Translation language '{language_code}' is not available "
            f"for video {video_id}",
        )
        self.language_code = language_code


class VideoDataUnparsable(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(video_id, f"Could not parse video data for {video_id}{detail}")


class GatewayUnavailable(CouldNotRetrieveTranscript):
    def __init__(self, video_id: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(
            video_id, f"No caption gateway could serve video {video_id}{detail}"
        )
        self.reason = reason
