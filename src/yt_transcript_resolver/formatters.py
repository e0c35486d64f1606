"""Output formatters for transcripts."""

import json
from abc import ABC, abstractmethod

from yt_transcript_resolver.errors import UnsupportedFormatError
from yt_transcript_resolver.models import Transcript, TranscriptSnippet


class Formatter(ABC):
    @abstractmethod
    def format(self, transcript: Transcript) -> str:
        """Render a single transcript."""
        ...

    def format_transcripts(self, transcripts: list[Transcript]) -> str:
        """Render several transcripts. Default: each one, blank-line separated."""
        return "\n\n\n".join(self.format(t) for t in transcripts)


class JSONFormatter(Formatter):
    def format(self, transcript: Transcript) -> str:
        return json.dumps(transcript.model_dump(mode="json"), indent=2, ensure_ascii=False)

    def format_transcripts(self, transcripts: list[Transcript]) -> str:
        # One array, not one document per transcript.
        return json.dumps(
            [t.model_dump(mode="json") for t in transcripts], indent=2, ensure_ascii=False
        )


class TextFormatter(Formatter):
    def format(self, transcript: Transcript) -> str:
        return "\n".join(s.text for s in transcript.snippets)


class _TimecodedFormatter(TextFormatter):
    """Shared cue layout for SRT and WebVTT.

    A cue ends at its own start + duration, clipped to the next cue's start
    so consecutive cues never overlap.
    """

    ms_separator = ","

    def seconds_to_timestamp(self, time: float) -> str:
        total_ms = round(time * 1000)
        hours, rest = divmod(total_ms, 3_600_000)
        mins, rest = divmod(rest, 60_000)
        secs, ms = divmod(rest, 1000)
        return f"{hours:02d}:{mins:02d}:{secs:02d}{self.ms_separator}{ms:03d}"

    @abstractmethod
    def format_cue(self, index: int, time_text: str, snippet: TranscriptSnippet) -> str:
        ...

    @abstractmethod
    def format_document(self, cues: list[str]) -> str:
        ...

    def format(self, transcript: Transcript) -> str:
        snippets = transcript.snippets
        cues = []
        for i, snippet in enumerate(snippets):
            end = snippet.start + snippet.duration
            if i < len(snippets) - 1:
                end = min(end, snippets[i + 1].start)
            time_text = (
                f"{self.seconds_to_timestamp(snippet.start)} --> "
                f"{self.seconds_to_timestamp(end)}"
            )
            cues.append(self.format_cue(i, time_text, snippet))
        return self.format_document(cues)

    def format_transcripts(self, transcripts: list[Transcript]) -> str:
        return "\n\n".join(
            f"TRANSCRIPT {i}:\n{self.format(t)}" for i, t in enumerate(transcripts, start=1)
        )


class SRTFormatter(_TimecodedFormatter):
    ms_separator = ","

    def format_cue(self, index: int, time_text: str, snippet: TranscriptSnippet) -> str:
        return f"{index + 1}\n{time_text}\n{snippet.text}"

    def format_document(self, cues: list[str]) -> str:
        return "\n\n".join(cues) + "\n"


class WebVTTFormatter(_TimecodedFormatter):
    ms_separator = "."

    def format_cue(self, index: int, time_text: str, snippet: TranscriptSnippet) -> str:
        return f"{time_text}\n{snippet.text}"

    def format_document(self, cues: list[str]) -> str:
        return "WEBVTT\n\n" + "\n\n".join(cues) + "\n"


class FormatterFactory:
    TYPES: dict[str, type[Formatter]] = {
        "json": JSONFormatter,
        "text": TextFormatter,
        "srt": SRTFormatter,
        "webvtt": WebVTTFormatter,
    }
    DEFAULT = "json"

    @classmethod
    def create(cls, name: str | None = None) -> Formatter:
        formatter_class = cls.TYPES.get(name or cls.DEFAULT)
        if formatter_class is None:
            raise UnsupportedFormatError(name, cls.TYPES)
        return formatter_class()
