"""
Language detection backends.

The validator only needs detect(text) -> tag; the HTTP backend is the one
used in production, anything else (tests, offline runs) can implement the
same interface.
"""
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from loguru import logger

from caption_validator.config import get_httpx_client_kwargs
from caption_validator.exceptions import LanguageDetectionError


class LanguageDetector(ABC):
    """Abstract base class for language detectors"""

    @abstractmethod
    def detect(self, text: str) -> str:
        """
        Detect the language of text.

        Returns:
            Language tag such as "en-US"

        Raises:
            LanguageDetectionError: If no language could be determined
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Detector name"""
        pass


class HttpLanguageDetector(LanguageDetector):
    """
    Language detector backed by an HTTP service.

    The service takes the text as a plain-text POST body and answers
    {"lang": "<tag>"}.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize detector.

        Args:
            endpoint: URL of the detection service
            timeout: Request timeout in seconds (settings.LANGUAGE_TIMEOUT if not provided)
            transport: Custom httpx transport, mainly for tests
        """
        if not endpoint:
            raise ValueError("Language detection endpoint is required")
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    @property
    def name(self) -> str:
        return "http"

    def _client(self) -> httpx.Client:
        kwargs = get_httpx_client_kwargs(self.timeout)
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.Client(**kwargs)

    def detect(self, text: str) -> str:
        logger.debug(f"Posting {len(text)} chars to {self.endpoint}")

        try:
            with self._client() as client:
                response = client.post(
                    self.endpoint,
                    content=text.encode("utf-8"),
                    headers={"Content-Type": "text/plain; charset=utf-8"},
                )
        except httpx.HTTPError as e:
            raise LanguageDetectionError(
                f"failed to call language detection endpoint: {e}"
            ) from e

        if response.status_code != httpx.codes.OK:
            raise LanguageDetectionError(
                f"language detection endpoint returned status: {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise LanguageDetectionError(f"failed to decode language response: {e}") from e

        # null, {} and {"lang": null} decode to an empty tag, which then fails the match
        if payload is None:
            return ""
        if not isinstance(payload, dict):
            raise LanguageDetectionError(
                f"language response is not an object: {response.text[:200]}"
            )

        lang = payload.get("lang")
        if lang is None:
            return ""
        if not isinstance(lang, str):
            raise LanguageDetectionError(
                f"language response 'lang' is not a string: {response.text[:200]}"
            )
        return lang
