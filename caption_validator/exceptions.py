"""
Exception hierarchy.

CaptionValidatorError and its subclasses mean the file could not be evaluated
at all; the CLI turns them into exit code 1. Quality problems found in a
readable file are never raised, they come back as failure records.
"""


class CaptionValidatorError(Exception):
    """Base class for fatal validation errors"""


class CaptionFileError(CaptionValidatorError):
    """Caption file is missing or cannot be read"""


class UnsupportedFormatError(CaptionValidatorError):
    """Caption content is neither WebVTT nor SRT"""


class TimeCodeError(ValueError):
    """Timestamp text does not match the expected fixed-width shape"""


class LanguageDetectionError(Exception):
    """Language detection service gave no usable answer"""
