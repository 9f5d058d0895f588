"""Shared fixtures for caption-validator tests."""
import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest
from loguru import logger

from caption_validator.language.detector import LanguageDetector


class FakeLanguageDetector(LanguageDetector):
    """Detector that answers with a fixed tag or raises a fixed error."""

    def __init__(self, language: str = "en-US", error: Optional[Exception] = None):
        self.language = language
        self.error = error
        self.calls: List[str] = []

    @property
    def name(self) -> str:
        return "fake"

    def detect(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.language


@pytest.fixture
def make_detector() -> Callable[..., FakeLanguageDetector]:
    return FakeLanguageDetector


@pytest.fixture
def write_caption(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write caption content to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "captions.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_loguru():
    """CLI runs rebind loguru to CliRunner streams; restore a plain stderr sink."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
