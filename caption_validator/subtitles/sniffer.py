"""
Caption format detection from a short prefix of the file.
"""
import re
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from caption_validator.config import settings
from caption_validator.exceptions import CaptionFileError

WEBVTT_MARKER = "WEBVTT"

_SRT_INDEX_PATTERN = re.compile(r'[0-9]+')


class CaptionFormat(str, Enum):
    """Supported caption formats"""
    WEBVTT = "webvtt"
    SRT = "srt"
    UNSUPPORTED = "unsupported"


def sniff_format(prefix: bytes) -> CaptionFormat:
    """
    Classify caption content from its first bytes.

    The WEBVTT marker is checked first so a WebVTT file whose first line
    happens to be numeric is never taken for SRT.

    Args:
        prefix: Head of the file (the first ~100 bytes are enough)

    Returns:
        CaptionFormat; UNSUPPORTED is a normal result, not an error
    """
    # A multi-byte character may be cut at the prefix boundary
    text = prefix.decode("utf-8-sig", errors="replace")

    if WEBVTT_MARKER in text:
        return CaptionFormat.WEBVTT

    first_line = text.split("\n", 1)[0].strip()
    if _SRT_INDEX_PATTERN.fullmatch(first_line):
        return CaptionFormat.SRT

    return CaptionFormat.UNSUPPORTED


def sniff_file(file_path: Union[str, Path], limit: Optional[int] = None) -> CaptionFormat:
    """
    Read the head of a caption file and classify it.

    Args:
        file_path: Path to caption file
        limit: Bytes to read (defaults to settings.SNIFF_BYTES)

    Returns:
        Detected CaptionFormat

    Raises:
        CaptionFileError: If the file cannot be opened or read
    """
    limit = settings.SNIFF_BYTES if limit is None else limit
    file_path = Path(file_path)

    try:
        with open(file_path, "rb") as f:
            prefix = f.read(limit)
    except OSError as e:
        raise CaptionFileError(f"Failed to read caption file header: {e}") from e

    caption_format = sniff_format(prefix)
    logger.debug(f"Sniffed {file_path.name} as {caption_format.value}")
    return caption_format
