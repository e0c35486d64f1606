"""Caption track catalog built from the player response.

The catalog keeps manually created and auto-generated (``kind == "asr"``)
tracks in separate language-code keyed mappings. Upstream data is known to be
inconsistent, so malformed tracks are skipped and the last track seen for a
language code wins.
"""

from collections.abc import Iterable, Iterator
from itertools import chain

from pydantic import BaseModel, ConfigDict

from yt_transcript_resolver.errors import (
    NoTranscriptFound,
    NotTranslatable,
    TranslationLanguageNotAvailable,
)
from yt_transcript_resolver.models import TranslationLanguage


def _text_of(node) -> str | None:
    """Read a YouTube text node, either ``simpleText`` or ``runs``."""
    if not isinstance(node, dict):
        return None
    if isinstance(node.get("simpleText"), str):
        return node["simpleText"]
    runs = node.get("runs")
    if isinstance(runs, list) and runs and isinstance(runs[0], dict):
        text = runs[0].get("text")
        if isinstance(text, str):
            return text
    return None


class CaptionTrack(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_id: str
    fetch_url: str
    language: str
    language_code: str
    is_generated: bool = False
    translation_languages: list[TranslationLanguage] = []

    @property
    def is_translatable(self) -> bool:
        return len(self.translation_languages) > 0

    def translate(self, language_code: str) -> "CaptionTrack":
        """Return a machine-translated variant of this track."""
        if not self.is_translatable:
            raise NotTranslatable(self.video_id)
        for target in self.translation_languages:
            if target.language_code == language_code:
                return CaptionTrack(
                    video_id=self.video_id,
                    fetch_url=f"{self.fetch_url}&tlang={language_code}",
                    language=target.language,
                    language_code=language_code,
                    is_generated=True,
                )
        raise TranslationLanguageNotAvailable(self.video_id, language_code)

    def __str__(self) -> str:
        suffix = " [TRANSLATABLE]" if self.is_translatable else ""
        return f"{self.language_code} (\"{self.language}\"){suffix}"


class TrackCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_id: str
    manual: dict[str, CaptionTrack] = {}
    generated: dict[str, CaptionTrack] = {}
    translation_languages: list[TranslationLanguage] = []

    @classmethod
    def build(cls, video_id: str, captions_json: dict) -> "TrackCatalog":
        translation_languages = []
        for raw in captions_json.get("translationLanguages") or []:
            if not isinstance(raw, dict):
                continue
            name = _text_of(raw.get("languageName"))
            code = raw.get("languageCode")
            if name is None or not isinstance(code, str):
                continue
            translation_languages.append(
                TranslationLanguage(language=name, language_code=code)
            )

        manual: dict[str, CaptionTrack] = {}
        generated: dict[str, CaptionTrack] = {}
        for raw in captions_json.get("captionTracks") or []:
            if not isinstance(raw, dict):
                continue
            url = raw.get("baseUrl")
            code = raw.get("languageCode")
            name = _text_of(raw.get("name"))
            if not isinstance(url, str) or not isinstance(code, str) or name is None:
                continue
            is_generated = raw.get("kind") == "asr"
            track = CaptionTrack(
                video_id=video_id,
                fetch_url=url,
                language=name,
                language_code=code,
                is_generated=is_generated,
                translation_languages=(
                    translation_languages if raw.get("isTranslatable") else []
                ),
            )
            (generated if is_generated else manual)[code] = track

        return cls(
            video_id=video_id,
            manual=manual,
            generated=generated,
            translation_languages=translation_languages,
        )

    def tracks(self) -> Iterator[CaptionTrack]:
        return chain(self.manual.values(), self.generated.values())

    def find_transcript(self, language_codes: Iterable[str]) -> CaptionTrack:
        """Pick the best track for ``language_codes``.

        Every requested language is tried against the manual tracks before any
        generated track is considered, so a manual track in a lower-ranked
        language beats a generated one in a higher-ranked language.
        """
        return self._find(language_codes, [self.manual, self.generated])

    def find_manually_created_transcript(
        self, language_codes: Iterable[str]
    ) -> CaptionTrack:
        return self._find(language_codes, [self.manual])

    def find_generated_transcript(self, language_codes: Iterable[str]) -> CaptionTrack:
        return self._find(language_codes, [self.generated])

    def _find(
        self,
        language_codes: Iterable[str],
        mappings: list[dict[str, CaptionTrack]],
    ) -> CaptionTrack:
        codes = list(language_codes)
        for mapping in mappings:
            for code in codes:
                if code in mapping:
                    return mapping[code]
        raise NoTranscriptFound(self.video_id, codes)

    def __str__(self) -> str:
        def fmt(items) -> str:
            lines = [f" - {item}" for item in items]
            return "\n".join(lines) if lines else "None"

        targets = (
            f"{t.language_code} (\"{t.language}\")" for t in self.translation_languages
        )
        return (
            f"Transcripts for {self.video_id}:\n\n"
            f"(MANUALLY CREATED)\n{fmt(self.manual.values())}\n\n"
            f"(GENERATED)\n{fmt(self.generated.values())}\n\n"
            f"(TRANSLATION LANGUAGES)\n{fmt(targets)}"
        )
