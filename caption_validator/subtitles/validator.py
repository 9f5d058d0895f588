"""
Caption Validator

Two independent checks over a parsed cue list:
- Coverage: share of a time window spanned by cues
- Language: detected language of the cue text must be en-US

Each check returns a failure record or None. Failure records serialize to the
JSON objects printed by the CLI.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from caption_validator.exceptions import LanguageDetectionError
from caption_validator.language.detector import LanguageDetector
from caption_validator.subtitles.parser import CaptionCue

EXPECTED_LANGUAGE = "en-US"
UNKNOWN_LANGUAGE = "unknown"


class FailureType(str, Enum):
    """Types of validation failures"""
    CAPTION_COVERAGE = "caption_coverage"
    INCORRECT_LANGUAGE = "incorrect_language"


@dataclass(frozen=True)
class TimeWindow:
    """Time window [start, end) in seconds; both bounds finite and end > start"""
    start: float
    end: float

    def __post_init__(self):
        if not (math.isfinite(self.start) and math.isfinite(self.end) and self.end > self.start):
            raise ValueError(
                f"Window end ({self.end}) must be greater than start ({self.start})"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class CoverageFailure:
    """Cues cover less of the window than required"""
    required_coverage: float
    actual_coverage: float
    start_time: float
    end_time: float
    description: str

    failure_type = FailureType.CAPTION_COVERAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.failure_type.value,
            "required_coverage": self.required_coverage,
            "actual_coverage": self.actual_coverage,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "description": self.description,
        }


@dataclass(frozen=True)
class LanguageFailure:
    """Cue text is not in the expected language, or could not be classified"""
    detected_language: str
    expected_language: str
    description: str

    failure_type = FailureType.INCORRECT_LANGUAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.failure_type.value,
            "detected_language": self.detected_language,
            "expected_language": self.expected_language,
            "description": self.description,
        }


ValidationFailure = Union[CoverageFailure, LanguageFailure]


def calculate_coverage(cues: Sequence[CaptionCue], window: TimeWindow) -> float:
    """
    Calculate the percentage of the window covered by cues.

    Per-cue overlaps are summed, not merged: two cues overlapping each other
    inside the window both count in full. Cue order does not matter.

    Args:
        cues: Parsed cues, in any order
        window: Target time window

    Returns:
        Coverage percentage (may exceed 100 when cues overlap)
    """
    covered = 0.0
    for cue in cues:
        overlap = min(cue.end_time, window.end) - max(cue.start_time, window.start)
        if overlap > 0:
            covered += overlap

    return covered / window.duration * 100


def validate_coverage(
    cues: Sequence[CaptionCue],
    window: TimeWindow,
    required_coverage: float
) -> Optional[CoverageFailure]:
    """
    Check cue coverage of a time window against a threshold.

    Args:
        cues: Parsed cues
        window: Target time window
        required_coverage: Minimum percentage (0-100)

    Returns:
        CoverageFailure if coverage is below the threshold, else None
    """
    actual = calculate_coverage(cues, window)
    logger.info(
        f"Coverage {actual:.2f}% of [{window.start}, {window.end}) "
        f"(required {required_coverage:.2f}%)"
    )

    if actual >= required_coverage:
        return None

    return CoverageFailure(
        required_coverage=required_coverage,
        actual_coverage=actual,
        start_time=window.start,
        end_time=window.end,
        description=f"Caption coverage of {actual:.2f}% is below required {required_coverage:.2f}%",
    )


def collect_text(cues: Sequence[CaptionCue]) -> str:
    """Join non-empty cue texts with single spaces"""
    return " ".join(cue.text for cue in cues if cue.text)


def validate_language(
    cues: Sequence[CaptionCue],
    detector: LanguageDetector,
    expected_language: str = EXPECTED_LANGUAGE
) -> Optional[LanguageFailure]:
    """
    Check that the cue text is in the expected language.

    A detector error is reported as a failure with detected language
    "unknown". Cues without any text are not sent to the detector.

    Args:
        cues: Parsed cues
        detector: Language detection backend
        expected_language: Exact tag the detector must return

    Returns:
        LanguageFailure on mismatch or detection error, else None
    """
    text = collect_text(cues)
    if not text:
        logger.warning("No caption text to send for language detection")
        return None

    try:
        detected = detector.detect(text)
    except LanguageDetectionError as e:
        logger.warning(f"Language detection failed: {e}")
        return LanguageFailure(
            detected_language=UNKNOWN_LANGUAGE,
            expected_language=expected_language,
            description=f"Failed to detect language: {e}",
        )

    logger.info(f"Detected language: {detected}")
    if detected != expected_language:
        return LanguageFailure(
            detected_language=detected,
            expected_language=expected_language,
            description=f"Detected language '{detected}' does not match expected '{expected_language}'",
        )
    return None


def failures_to_dicts(failures: List[ValidationFailure]) -> List[Dict[str, Any]]:
    return [failure.to_dict() for failure in failures]
