"""Decoding of answer stream records.

The stream is newline-delimited; each line optionally starts with
``data: `` and carries a JSON object tagged by ``type``. Anything that
does not decode to a known record is ignored.
"""

import json
import logging
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..suggestions import PageSuggestion

log = logging.getLogger(__name__)

DATA_PREFIX = "data: "


class ChunkEvent(BaseModel):
    type: Literal["chunk"] = "chunk"
    content: str


class SuggestionsEvent(BaseModel):
    type: Literal["suggestions"] = "suggestions"
    pages: list[PageSuggestion]


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    message: str = "Unknown error"


StreamEvent = Annotated[
    ChunkEvent | SuggestionsEvent | ErrorEvent,
    Field(discriminator="type")
]

_adapter: TypeAdapter[ChunkEvent | SuggestionsEvent | ErrorEvent] = TypeAdapter(StreamEvent)


def parse_event_line(line: str) -> ChunkEvent | SuggestionsEvent | ErrorEvent | None:
    """Decode one line of the answer stream.

    Args:
        line: Raw line without its trailing newline

    Returns:
        The decoded event, or None for blank, malformed or unknown records
        and for chunk/suggestion records with nothing in them
    """
    text = line.strip()
    if text.startswith(DATA_PREFIX.strip()):
        text = text[len(DATA_PREFIX.strip()):].lstrip()
    if not text:
        return None

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        log.debug("Skipping non-JSON stream line: %r", line[:80])
        return None

    if not isinstance(payload, dict):
        return None

    try:
        event = _adapter.validate_python(payload)
    except ValidationError:
        log.debug("Skipping unrecognized stream record: %r", line[:80])
        return None

    if isinstance(event, ChunkEvent) and not event.content:
        return None
    if isinstance(event, SuggestionsEvent) and not event.pages:
        return None
    return event


class ActionResult(BaseModel):
    """Reply of the one-shot question action.

    Serialized with camelCase keys and without unset fields.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    answer: str | None = None
    suggested_pages: list[PageSuggestion] | None = Field(default=None, alias="suggestedPages")
    error: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
