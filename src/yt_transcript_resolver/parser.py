"""Timed-text payload parsing.

Caption payloads come in two dialects:

* the XML ``transcript`` dialect served by the timedtext endpoint, a flat list
  of ``<text start="S" dur="D">BODY</text>`` elements whose bodies are escaped
  twice (once for the document, once for the field), and
* WebVTT, a ``WEBVTT`` header followed by ``START --> END`` cue blocks.

Both produce a list of :class:`TranscriptSnippet` in document order.
"""

import html
import re

from yt_transcript_resolver.models import TranscriptSnippet

# Inline emphasis tags kept when formatting is preserved. Output compatibility
# depends on this exact list.
FORMATTING_TAGS = (
    "strong",
    "em",
    "b",
    "i",
    "mark",
    "small",
    "del",
    "ins",
    "sub",
    "sup",
)

_XML_ELEMENT = re.compile(r"<text\b([^>]*)>(.*?)</text>", re.DOTALL)
_START_ATTR = re.compile(r'\bstart="([^"]*)"')
_DUR_ATTR = re.compile(r'\bdur="([^"]*)"')

_ALL_TAGS = re.compile(r"<[^>]*>")
_NON_FORMATTING_TAGS = re.compile(
    r"<(?!/?(?:%s)\b)[^>]*>" % "|".join(FORMATTING_TAGS), re.IGNORECASE
)
_WHITESPACE = re.compile(r"\s+")

_VTT_TIMESTAMP = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})[.,](\d{3})$")


def parse_timed_text(
    payload: str, preserve_formatting: bool = False
) -> list[TranscriptSnippet]:
    """Parse a caption payload in either supported dialect."""
    if payload.lstrip("\ufeff \t\r\n").startswith("WEBVTT"):
        return parse_webvtt(payload, preserve_formatting)
    return parse_xml(payload, preserve_formatting)


def decode_entities(text: str) -> str:
    """Undo one layer of XML/HTML entities and backslash escapes."""
    decoded = (
        text.replace("&quot;", '"')
        .replace("&apos;", "'")
        .replace("&lt;", "<")
        .replace("&gt;", ">")
        .replace("&amp;", "&")
    )
    decoded = html.unescape(decoded)
    return decoded.replace("\\u0026", "&").replace('\\"', '"').replace("\\", "")


def clean_text(text: str, preserve_formatting: bool) -> str:
    """Apply the tag policy, then normalize whitespace when not preserving."""
    if preserve_formatting:
        return _NON_FORMATTING_TAGS.sub("", text)
    text = _ALL_TAGS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def parse_xml(payload: str, preserve_formatting: bool = False) -> list[TranscriptSnippet]:
    snippets = []
    document = decode_entities(payload)
    for match in _XML_ELEMENT.finditer(document):
        attrs, body = match.groups()
        start = _START_ATTR.search(attrs)
        if start is None:
            continue
        dur = _DUR_ATTR.search(attrs)
        try:
            start_s = float(start.group(1))
            duration = float(dur.group(1)) if dur else 0.0
        except ValueError:
            continue
        if not (start_s >= 0 and duration >= 0):
            continue
        snippets.append(
            TranscriptSnippet(
                text=clean_text(decode_entities(body), preserve_formatting),
                start=start_s,
                duration=duration,
            )
        )
    return snippets


def parse_vtt_timestamp(value: str) -> float:
    """Convert ``HH:MM:SS.mmm`` or ``MM:SS.mmm`` to seconds."""
    match = _VTT_TIMESTAMP.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid WebVTT timestamp: {value!r}")
    hours, minutes, seconds, millis = match.groups()
    return (
        int(hours or 0) * 3600
        + int(minutes) * 60
        + int(seconds)
        + int(millis) / 1000
    )


def parse_webvtt(payload: str, preserve_formatting: bool = False) -> list[TranscriptSnippet]:
    snippets = []
    lines = payload.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if "-->" not in line:
            continue

        start_raw, _, rest = line.partition("-->")
        end_fields = rest.split()
        try:
            start = parse_vtt_timestamp(start_raw)
            end = parse_vtt_timestamp(end_fields[0]) if end_fields else start
        except ValueError:
            continue

        body = []
        while i < len(lines) and lines[i].strip():
            body.append(lines[i])
            i += 1

        text = "\n".join(
            clean_text(html.unescape(part), preserve_formatting) for part in body
        )
        snippets.append(
            TranscriptSnippet(text=text, start=start, duration=max(end - start, 0.0))
        )
    return snippets
