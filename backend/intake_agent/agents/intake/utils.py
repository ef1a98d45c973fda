"""Utility functions for parsing analysis responses and building records."""
import re
import uuid
from datetime import datetime
from typing import Callable


def extract_json_from_text(text: str) -> str:
    """
    Extracts JSON string from text, processing markdown blocks and finding the first/last brace.
    """
    cleaned = text.strip()

    if "```" in cleaned:
        pattern = r"```(?:json)?\s*(\{.*?\})\s*```"
        match = re.search(pattern, cleaned, re.DOTALL)
        if match:
            return match.group(1)

    start = cleaned.find("{")
    end = cleaned.rfind("}")

    if start != -1 and end != -1 and end > start:
        return cleaned[start:end + 1]

    return cleaned


def new_intake_id(exists: Callable[[str], bool] | None = None) -> str:
    """Return a short clinical id, regenerating on collision with `exists`."""
    while True:
        candidate = uuid.uuid4().hex[:12].upper()
        if exists is None or not exists(candidate):
            return candidate


def format_timestamp(moment: datetime) -> str:
    """Medium date, short time: 'Oct 19, 2026, 3:04 PM'."""
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M} {moment:%p}"
