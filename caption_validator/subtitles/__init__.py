"""
Caption Processing Module

Provides:
- Caption format sniffing (WebVTT, SRT)
- Time code parsing
- Cue extraction into a unified structure
- Coverage and language validation
"""
from .timecode import TimeCodeStyle, parse_timecode, format_timecode
from .sniffer import CaptionFormat, sniff_format, sniff_file
from .parser import CaptionParser, CaptionCue, ParseResult, SkippedCue
from .validator import (
    CoverageFailure,
    LanguageFailure,
    TimeWindow,
    ValidationFailure,
    calculate_coverage,
    validate_coverage,
    validate_language,
)

__all__ = [
    "TimeCodeStyle",
    "parse_timecode",
    "format_timecode",
    "CaptionFormat",
    "sniff_format",
    "sniff_file",
    "CaptionParser",
    "CaptionCue",
    "ParseResult",
    "SkippedCue",
    "CoverageFailure",
    "LanguageFailure",
    "TimeWindow",
    "ValidationFailure",
    "calculate_coverage",
    "validate_coverage",
    "validate_language",
]
