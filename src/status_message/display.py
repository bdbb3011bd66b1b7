"""
Display helpers. Timestamps arrive in nanoseconds and are converted to
milliseconds here, at the rendering boundary, and nowhere else.
"""

from datetime import datetime, timezone
from typing import Optional

from status_message.models.status import MAX_MESSAGE_LENGTH

NS_PER_MS = 1_000_000


def ns_to_ms(timestamp: int) -> int:
    return timestamp // NS_PER_MS


def format_timestamp(timestamp: int, tz: Optional[timezone] = None) -> str:
    ms = ns_to_ms(timestamp)
    return datetime.fromtimestamp(ms / 1000, tz=tz).strftime("%Y-%m-%d %H:%M:%S")


def character_counter(draft: str) -> str:
    return f"{len(draft)}/{MAX_MESSAGE_LENGTH}"
