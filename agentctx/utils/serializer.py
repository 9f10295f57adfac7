"""Text serialization for message content."""

import json
from typing import Any

from pydantic import BaseModel


def content_to_text(content: Any) -> str:
    """Flatten message content to a deterministic text form.

    Strings are returned unchanged. Pydantic models are dumped in JSON mode first.
    Everything else is rendered as compact JSON (no whitespace between separators,
    non-ASCII kept as-is), falling back to str() for values json cannot encode.

    Args:
        content: Message content (str, list of content blocks, dict, model, ...)

    Returns:
        Text form of the content ("" for None)
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, BaseModel):
        content = content.model_dump(mode="json")
    try:
        return json.dumps(content, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return str(content)
