"""
Timestamp parsing for WebVTT and SRT cues.

Both grammars use the fixed-width shape HH:MM:SS<sep>mmm and differ only in
the millisecond separator: '.' for WebVTT, ',' for SRT.
"""
import re
from enum import Enum

from caption_validator.exceptions import TimeCodeError


class TimeCodeStyle(str, Enum):
    """Millisecond separator style"""
    DOTTED = "."  # WebVTT
    COMMA = ","   # SRT


_PATTERNS = {
    TimeCodeStyle.DOTTED: re.compile(r'(\d{2}):(\d{2}):(\d{2})\.(\d{3})', re.ASCII),
    TimeCodeStyle.COMMA: re.compile(r'(\d{2}):(\d{2}):(\d{2}),(\d{3})', re.ASCII),
}


def parse_timecode(text: str, style: TimeCodeStyle) -> float:
    """
    Convert a timestamp to elapsed seconds.

    Args:
        text: Timestamp such as "00:01:30.500" (surrounding whitespace ignored)
        style: Which millisecond separator the timestamp must use

    Returns:
        Seconds as float

    Raises:
        TimeCodeError: If the text is not exactly HH:MM:SS<sep>mmm
    """
    match = _PATTERNS[style].fullmatch(text.strip())
    if not match:
        raise TimeCodeError(f"Invalid {style.name.lower()} time code: {text!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3))
    milliseconds = int(match.group(4))

    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000


def format_timecode(seconds: float, style: TimeCodeStyle) -> str:
    """Render seconds as HH:MM:SS<sep>mmm, rounded to the millisecond"""
    total_ms = int(round(max(seconds, 0.0) * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{style.value}{millis:03d}"
