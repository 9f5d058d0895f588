"""Language Detection Package"""
from .detector import HttpLanguageDetector, LanguageDetector

__all__ = [
    "HttpLanguageDetector",
    "LanguageDetector",
]
