"""Abstract base for transcript providers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from yt_transcript_resolver.models import TranscriptResponse

DEFAULT_LANGUAGES = ("en",)


class TranscriptProvider(ABC):
    @abstractmethod
    async def fetch_transcript(
        self,
        video_id: str,
        languages: Sequence[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
    ) -> TranscriptResponse:
        """Fetch transcript for a single video."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        ...

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
