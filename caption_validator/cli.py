"""
Command line entry point.

Exit codes:
    0  the file was evaluated; failures (if any) are printed as JSON lines
    1  the file could not be evaluated (bad arguments, unreadable file,
       unsupported format); nothing is printed on stdout
"""
import json
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
from loguru import logger

from caption_validator.config import settings
from caption_validator.exceptions import CaptionValidatorError
from caption_validator.language.detector import HttpLanguageDetector
from caption_validator.logging_setup import configure_logging
from caption_validator.pipeline import CaptionValidator
from caption_validator.subtitles.validator import TimeWindow

app = typer.Typer(
    help="Validate WebVTT and SRT caption files for window coverage and language.",
    add_completion=False,
)


def _fail(message: str) -> NoReturn:
    logger.error(message)
    raise typer.Exit(code=1)


def _json_number(value: Any) -> Any:
    # Whole numbers print without a fractional part: 50, not 50.0
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def failure_to_json(failure_dict: Dict[str, Any]) -> str:
    """Render one failure record as a compact JSON line"""
    data = {key: _json_number(value) for key, value in failure_dict.items()}
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


@app.command()
def validate(
    captions_file: Optional[Path] = typer.Argument(
        None,
        help="Path to the WebVTT or SRT caption file.",
        show_default=False,
    ),
    t_start: float = typer.Option(
        0.0,
        "--t-start",
        "--t_start",
        help="Start of the time window in seconds.",
    ),
    t_end: float = typer.Option(
        0.0,
        "--t-end",
        "--t_end",
        help="End of the time window in seconds.",
    ),
    coverage: Optional[float] = typer.Option(
        None,
        "--coverage",
        help="Required coverage percentage (default: 80).",
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        help="Language detection endpoint URL (or CAPTION_VALIDATOR_LANGUAGE_ENDPOINT).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Language detection timeout in seconds (default: 30).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr output (default: WARNING).",
    ),
) -> None:
    """Validate caption coverage of [t_start, t_end) and check the language is en-US."""
    try:
        configure_logging(log_level)
    except ValueError:
        configure_logging(settings.LOG_LEVEL)
        _fail(f"Unknown log level: {log_level}")

    if captions_file is None:
        _fail("Usage: caption-validator [OPTIONS] CAPTIONS_FILE")

    endpoint = endpoint or settings.LANGUAGE_ENDPOINT
    if not endpoint:
        _fail("Language detection endpoint is required (use --endpoint)")

    try:
        window = TimeWindow(start=t_start, end=t_end)
    except ValueError:
        _fail("End time must be greater than start time")

    required_coverage = settings.DEFAULT_COVERAGE if coverage is None else coverage
    detector = HttpLanguageDetector(endpoint, timeout=timeout)
    validator = CaptionValidator(detector)

    try:
        report = validator.validate_file(captions_file, window, required_coverage)
    except CaptionValidatorError as e:
        _fail(str(e))

    for failure in report.failures:
        typer.echo(failure_to_json(failure.to_dict()))


def main() -> None:
    """Entry point for `python -m caption_validator` and the console script."""
    app()


if __name__ == "__main__":
    main()
