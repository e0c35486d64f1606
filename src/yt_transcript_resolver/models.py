"""Data models for transcript results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from yt_transcript_resolver.errors import TranscriptError


class TranscriptSnippet(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start: float = Field(ge=0)
    duration: float = Field(ge=0)


class Transcript(BaseModel):
    model_config = ConfigDict(frozen=True)

    snippets: list[TranscriptSnippet] = []
    video_id: str
    language: str
    language_code: str
    is_generated: bool = False

    @property
    def text(self) -> str:
        return " ".join(s.text for s in self.snippets)


class TranslationLanguage(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str
    language_code: str


class Thumbnail(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    width: int = 0
    height: int = 0


class VideoMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    length_seconds: int = 0
    view_count: int = 0
    is_private: bool = False
    is_live_content: bool = False
    publish_date: str | None = None
    category: str | None = None
    keywords: list[str] = []
    thumbnails: list[Thumbnail] = []


class TranscriptResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    transcript: Transcript
    metadata: VideoMetadata
    formatted_text: str | None = None
    source: Literal["watch_page", "gateway"] = "watch_page"


class BatchResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    results: dict[str, TranscriptResponse] = {}
    errors: dict[str, TranscriptError] = {}
