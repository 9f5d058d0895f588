"""
Caption Parser Module

Parses WebVTT and SRT caption content into a unified cue structure.
Both grammars are tolerant: a malformed cue is recorded as skipped and
parsing carries on with the rest of the file.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from loguru import logger

from caption_validator.exceptions import CaptionFileError
from caption_validator.subtitles.sniffer import CaptionFormat
from caption_validator.subtitles.timecode import TimeCodeStyle, parse_timecode

TIMING_ARROW = "-->"


@dataclass(frozen=True)
class CaptionCue:
    """A single caption cue with timing and text"""
    start_time: float  # Start time in seconds
    end_time: float    # End time in seconds
    text: str

    @property
    def duration(self) -> float:
        """Get duration in seconds"""
        return self.end_time - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "text": self.text,
        }


@dataclass(frozen=True)
class SkippedCue:
    """A cue candidate that could not be parsed"""
    line_number: int  # 1-based line of the timing line or block start
    reason: str


@dataclass
class ParseResult:
    """Cues extracted from one file plus what was dropped along the way"""
    format: CaptionFormat
    cues: List[CaptionCue] = field(default_factory=list)
    skipped: List[SkippedCue] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def _normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


class CaptionParser:
    """
    Unified caption parser for WebVTT and SRT formats.

    Usage:
        parser = CaptionParser()
        result = parser.parse_file("captions.vtt", CaptionFormat.WEBVTT)
        # or
        result = parser.parse_srt(srt_content)
    """

    def parse_file(self, file_path: Union[str, Path], caption_format: CaptionFormat) -> ParseResult:
        """
        Parse a caption file in a known format.

        Args:
            file_path: Path to caption file
            caption_format: Format reported by the sniffer

        Returns:
            ParseResult with cues in file order

        Raises:
            CaptionFileError: If the file cannot be read
        """
        file_path = Path(file_path)

        try:
            content = file_path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            raise CaptionFileError(f"Failed to read caption file: {e}") from e

        return self.parse(content, caption_format)

    def parse(self, content: str, caption_format: CaptionFormat) -> ParseResult:
        """Dispatch to the grammar for caption_format"""
        if caption_format == CaptionFormat.WEBVTT:
            return self.parse_webvtt(content)
        if caption_format == CaptionFormat.SRT:
            return self.parse_srt(content)
        raise ValueError(f"Unsupported caption format: {caption_format.value}")

    def parse_webvtt(self, content: str) -> ParseResult:
        """
        Parse WebVTT content.

        Any line containing '-->' is a timing line. The text of a cue is every
        following non-blank line, each trimmed, joined with single spaces.
        A timing line that fails to parse is skipped on its own; scanning
        resumes at the next line.

        Args:
            content: WebVTT file content

        Returns:
            ParseResult
        """
        result = ParseResult(format=CaptionFormat.WEBVTT)
        lines = _normalize_newlines(content).split("\n")

        i = 0
        while i < len(lines):
            line = lines[i].strip()
            line_number = i + 1
            i += 1

            if TIMING_ARROW not in line:
                continue

            try:
                start_text, end_text = self._split_timing(line)
                # Cue settings after the end timestamp are not interpreted
                end_token = end_text.split()[0] if end_text else end_text
                start = parse_timecode(start_text, TimeCodeStyle.DOTTED)
                end = parse_timecode(end_token, TimeCodeStyle.DOTTED)
            except ValueError as e:
                self._skip(result, line_number, str(e))
                continue

            text_parts = []
            while i < len(lines) and lines[i].strip():
                text_parts.append(lines[i].strip())
                i += 1

            result.cues.append(CaptionCue(
                start_time=start,
                end_time=end,
                text=" ".join(text_parts),
            ))

        logger.info(f"Parsed {len(result.cues)} cues from WebVTT ({result.skipped_count} skipped)")
        return result

    def parse_srt(self, content: str) -> ParseResult:
        """
        Parse SRT content.

        Blocks are separated by blank lines. A block needs at least an index
        line, a timing line and one text line; anything else drops the whole
        block. Text lines are joined with single spaces as they are.

        Args:
            content: SRT file content

        Returns:
            ParseResult
        """
        result = ParseResult(format=CaptionFormat.SRT)
        line_number = 1

        for raw_block in _normalize_newlines(content).split("\n\n"):
            block_line = line_number + self._leading_blank_lines(raw_block)
            line_number += raw_block.count("\n") + 2

            block = raw_block.strip()
            if not block:
                continue

            lines = block.split("\n")
            if len(lines) < 3:
                self._skip(result, block_line, f"block has {len(lines)} lines, need at least 3")
                continue
            if TIMING_ARROW not in lines[1]:
                self._skip(result, block_line, "second line is not a timing line")
                continue

            try:
                start_text, end_text = self._split_timing(lines[1])
                start = parse_timecode(start_text, TimeCodeStyle.COMMA)
                end = parse_timecode(end_text, TimeCodeStyle.COMMA)
            except ValueError as e:
                self._skip(result, block_line, str(e))
                continue

            result.cues.append(CaptionCue(
                start_time=start,
                end_time=end,
                text=" ".join(lines[2:]),
            ))

        logger.info(f"Parsed {len(result.cues)} cues from SRT ({result.skipped_count} skipped)")
        return result

    @staticmethod
    def _split_timing(line: str) -> Tuple[str, str]:
        """Split 'start --> end' into trimmed halves"""
        parts = line.split(TIMING_ARROW)
        if len(parts) != 2:
            raise ValueError(f"Expected one '{TIMING_ARROW}' in timing line: {line!r}")
        return parts[0].strip(), parts[1].strip()

    @staticmethod
    def _leading_blank_lines(block: str) -> int:
        count = 0
        for line in block.split("\n"):
            if line.strip():
                break
            count += 1
        return count

    @staticmethod
    def _skip(result: ParseResult, line_number: int, reason: str) -> None:
        result.skipped.append(SkippedCue(line_number=line_number, reason=reason))
        logger.debug(f"Skipped cue at line {line_number}: {reason}")
