"""Server-sent event framing for the answer stream."""

import json
from typing import Any

from pydantic import BaseModel

MEDIA_TYPE = "text/event-stream"

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


def encode_event(payload: BaseModel | dict[str, Any]) -> str:
    """Serialize one record as a ``data:`` frame."""
    if isinstance(payload, BaseModel):
        data = payload.model_dump_json(exclude_none=True)
    else:
        data = json.dumps(payload, ensure_ascii=False)
    return f"data: {data}\n\n"
