"""
caption-validator

Checks WebVTT and SRT caption files for time-window coverage and caption
language.
"""
from .pipeline import CaptionValidator, ValidationReport, ValidationStage
from .subtitles import CaptionFormat, CaptionCue, TimeWindow

__version__ = "1.0.0"

__all__ = [
    "CaptionValidator",
    "ValidationReport",
    "ValidationStage",
    "CaptionFormat",
    "CaptionCue",
    "TimeWindow",
]
