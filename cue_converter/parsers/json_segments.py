"""JSON segment importer: transcription JSON to an ordered list of cues.

WHY: Cues arrive as JSON in two shapes. The transcription script writes a
*segmented* document (seconds, fractional speaker attribution), while the
converter's own JSON export is a *flat* list of cues that must re-import
unchanged so edits can round-trip.

HOW: The shape is decided once, up front, by decode_document(): a top-level
object with a "language" key is a SegmentedTranscript, anything else is a
CueList. Each shape is validated with jsonschema against its schema file in
``schemas/`` and decoded into typed records before any conversion happens.
to_cues() then turns either record into Cue objects.

RULES:
- Discrimination uses ONLY the presence of the "language" key
- Segmented: start/end seconds -> integer ms (rounded), text verbatim
- Segmented: speaker = int(first attribution's speaker id) + 1, else unset
- Segmented: segments with empty text are skipped (cues never have empty text)
- Flat: cues are decoded field-for-field, misc flags included
- NaN, Infinity and timings that overflow once scaled to ms are rejected
- Invalid JSON or a schema violation raises FormatError, never partial output
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from cue_converter.core.cue import Cue, FormatError

logger = logging.getLogger(__name__)

_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
SEGMENTED_SCHEMA = "segmented.schema.json"
CUE_LIST_SCHEMA = "cue_list.schema.json"

_CACHED_SCHEMAS: Dict[str, Dict[str, Any]] = {}


def _get_schema(name: str) -> Dict[str, Any]:
    """Load a JSON schema from the schemas directory, cached after first use."""
    if name not in _CACHED_SCHEMAS:
        with open(_SCHEMA_DIR / name, encoding="utf-8") as f:
            _CACHED_SCHEMAS[name] = json.load(f)
    return _CACHED_SCHEMAS[name]


def _validate(data: Any, schema_name: str) -> None:
    """Validate data against a schema, re-raising failures as FormatError."""
    try:
        jsonschema.validate(instance=data, schema=_get_schema(schema_name))
    except jsonschema.ValidationError as e:
        path = "/".join(str(part) for part in e.absolute_path)
        raise FormatError(e.message, path=path or None) from e


@dataclass
class SpeakerShare:
    """One speaker's share of a segment (0-based speaker id)."""

    speaker: int
    talk_fraction: Optional[float] = None


@dataclass
class SegmentRecord:
    """A transcription-engine segment. Times are in float seconds."""

    start: float
    end: float
    text: str
    speakers: List[SpeakerShare] = field(default_factory=list)


@dataclass
class SegmentedTranscript:
    """The transcription script's native output: language + segments."""

    language: str
    segments: List[SegmentRecord]


@dataclass
class CueList:
    """A previously exported flat list of cues."""

    cues: List[Cue]


JsonDocument = Union[SegmentedTranscript, CueList]


def decode_document(data: Any) -> JsonDocument:
    """Decide the document shape and decode it into a typed record.

    WHY: Shape sniffing deep inside conversion logic is fragile. Deciding
    once, from the presence of the "language" key, keeps the conversion
    code free of guesswork.

    HOW: Validate against the matching schema, then build the records.

    Raises:
        FormatError: If the data does not match the schema of its shape.
    """
    if isinstance(data, dict) and "language" in data:
        _validate(data, SEGMENTED_SCHEMA)
        segments = [
            SegmentRecord(
                start=_finite_seconds(seg["start"], "segments/{}/start".format(index)),
                end=_finite_seconds(seg["end"], "segments/{}/end".format(index)),
                text=seg["text"],
                speakers=[
                    SpeakerShare(
                        speaker=int(share["speaker"]),
                        talk_fraction=share.get("talk_fraction"),
                    )
                    for share in seg.get("speakers", [])
                ],
            )
            for index, seg in enumerate(data["segments"])
        ]
        return SegmentedTranscript(language=data["language"], segments=segments)

    _validate(data, CUE_LIST_SCHEMA)
    cues: List[Cue] = []
    for index, item in enumerate(data):
        try:
            cues.append(Cue.from_dict(item))
        except FormatError as e:
            raise FormatError(e.message, path="{}/{}".format(index, e.path)) from e
    return CueList(cues=cues)


def _finite_seconds(seconds: float, path: str) -> float:
    """Reject seconds that are NaN, infinite, or overflow when scaled to ms."""
    if isinstance(seconds, int):
        return seconds
    if not math.isfinite(seconds * 1000):
        raise FormatError("Not a finite number: {!r}".format(seconds), path=path)
    return seconds


def _reject_constant(name: str) -> Any:
    raise FormatError("Invalid JSON: {} is not a valid number".format(name))


def _seconds_to_ms(seconds: float) -> int:
    return int(round(seconds * 1000))


def segment_to_cue(segment: SegmentRecord) -> Cue:
    """Convert one engine segment into a Cue (seconds -> ms, 0- -> 1-based)."""
    cue = Cue(
        start=_seconds_to_ms(segment.start),
        end=_seconds_to_ms(segment.end),
        text=segment.text,
    )
    if segment.speakers:
        cue.speaker = segment.speakers[0].speaker + 1
    return cue


def to_cues(document: JsonDocument) -> List[Cue]:
    """Turn a decoded document into cues."""
    if isinstance(document, CueList):
        return list(document.cues)

    cues: List[Cue] = []
    for index, segment in enumerate(document.segments):
        if not segment.text:
            logger.debug("Skipping segment %d: empty text", index)
            continue
        cues.append(segment_to_cue(segment))
    return cues


def import_json(data: Any) -> List[Cue]:
    """Import already-parsed JSON data (either shape) as cues.

    Raises:
        FormatError: If the data matches neither shape.
    """
    document = decode_document(data)
    cues = to_cues(document)
    logger.debug(
        "Imported %d cues from %s document",
        len(cues), type(document).__name__,
    )
    return cues


def load_json(raw: Union[str, bytes]) -> List[Cue]:
    """Parse a JSON string and import it as cues.

    Args:
        raw: JSON text (str) or UTF-8 bytes.

    Returns:
        Ordered list of Cue objects.

    Raises:
        FormatError: If the text is not valid JSON or matches neither shape.
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise FormatError(
            "Invalid JSON: {} (column {})".format(e.msg, e.colno), line=e.lineno
        ) from e
    except UnicodeDecodeError as e:
        raise FormatError("Invalid JSON: input is not UTF-8 ({})".format(e.reason)) from e
    return import_json(data)
