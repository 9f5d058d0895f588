"""
Caption Validation Pipeline - Core orchestration module

Stages:
1. Sniff the caption format from the file head
2. Extract cues with the matching grammar
3. Evaluate window coverage
4. Evaluate caption language

An unsupported format stops the run at stage 1 with an exception. Coverage
and language are independent: both always run and each may add a failure.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from caption_validator.exceptions import UnsupportedFormatError
from caption_validator.language.detector import LanguageDetector
from caption_validator.subtitles.parser import CaptionCue, CaptionParser
from caption_validator.subtitles.sniffer import CaptionFormat, sniff_file
from caption_validator.subtitles.timecode import TimeCodeStyle, format_timecode
from caption_validator.subtitles.validator import (
    EXPECTED_LANGUAGE,
    TimeWindow,
    ValidationFailure,
    failures_to_dicts,
    validate_coverage,
    validate_language,
)


class ValidationStage(Enum):
    """Pipeline stage"""
    SNIFFING = "sniffing"
    EXTRACTING = "extracting"
    EVALUATING_COVERAGE = "evaluating_coverage"
    EVALUATING_LANGUAGE = "evaluating_language"
    DONE = "done"


@dataclass
class ValidationReport:
    """Outcome of one validation run"""
    path: Path
    stage: ValidationStage = ValidationStage.SNIFFING
    format: Optional[CaptionFormat] = None
    cues: List[CaptionCue] = field(default_factory=list)
    skipped_count: int = 0
    failures: List[ValidationFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.stage == ValidationStage.DONE and not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "stage": self.stage.value,
            "format": self.format.value if self.format else None,
            "cue_count": len(self.cues),
            "skipped_count": self.skipped_count,
            "failures": failures_to_dicts(self.failures),
        }


class CaptionValidator:
    """
    Runs sniff -> extract -> coverage -> language over one caption file.

    Usage:
        validator = CaptionValidator(HttpLanguageDetector(endpoint))
        report = validator.validate_file("captions.vtt", TimeWindow(0, 30), 80)
        for failure in report.failures:
            print(failure.to_dict())
    """

    def __init__(
        self,
        detector: LanguageDetector,
        parser: Optional[CaptionParser] = None,
        sniff_bytes: Optional[int] = None,
        expected_language: str = EXPECTED_LANGUAGE
    ):
        """
        Initialize validator.

        Args:
            detector: Language detection backend
            parser: Cue parser (a fresh CaptionParser if not provided)
            sniff_bytes: Bytes read for format sniffing (settings.SNIFF_BYTES if not provided)
            expected_language: Language tag the captions must be in
        """
        self.detector = detector
        self.parser = parser or CaptionParser()
        self.sniff_bytes = sniff_bytes
        self.expected_language = expected_language

    def validate_file(
        self,
        file_path: Union[str, Path],
        window: TimeWindow,
        required_coverage: float
    ) -> ValidationReport:
        """
        Validate a caption file.

        Args:
            file_path: Path to caption file
            window: Time window the captions must cover
            required_coverage: Minimum coverage percentage

        Returns:
            ValidationReport in stage DONE, with zero or more failures

        Raises:
            CaptionFileError: If the file cannot be read
            UnsupportedFormatError: If the file is neither WebVTT nor SRT
        """
        report = ValidationReport(path=Path(file_path))
        logger.info(f"Validating {report.path}")

        # Stage 1: sniff
        report.format = sniff_file(report.path, self.sniff_bytes)
        if report.format == CaptionFormat.UNSUPPORTED:
            raise UnsupportedFormatError(f"Unsupported caption format: {report.path}")

        # Stage 2: extract
        report.stage = ValidationStage.EXTRACTING
        parsed = self.parser.parse_file(report.path, report.format)
        report.cues = parsed.cues
        report.skipped_count = parsed.skipped_count
        if parsed.skipped_count:
            logger.warning(f"{parsed.skipped_count} malformed cues skipped in {report.path.name}")

        # Stage 3: coverage
        report.stage = ValidationStage.EVALUATING_COVERAGE
        logger.opt(lazy=True).debug(
            "Coverage window {} - {}",
            lambda: format_timecode(window.start, TimeCodeStyle.DOTTED),
            lambda: format_timecode(window.end, TimeCodeStyle.DOTTED),
        )
        coverage_failure = validate_coverage(report.cues, window, required_coverage)
        if coverage_failure:
            report.failures.append(coverage_failure)

        # Stage 4: language
        report.stage = ValidationStage.EVALUATING_LANGUAGE
        language_failure = validate_language(report.cues, self.detector, self.expected_language)
        if language_failure:
            report.failures.append(language_failure)

        report.stage = ValidationStage.DONE
        logger.info(f"Validation of {report.path.name} done: {len(report.failures)} failure(s)")
        return report
