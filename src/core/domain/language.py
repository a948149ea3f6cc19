"""Language utilities for watsonkit.

This module centralizes the language codes accepted by the Watson services
(content language, response language and classifier language). Keeping it in
the domain layer lets both the CLI and the adapters share a single source of
truth without circular imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Languages supported by Personality Insights v2 and the classifier."""

    ARABIC = "ar"
    ENGLISH = "en"
    SPANISH = "es"
    JAPANESE = "ja"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return {
            Language.ARABIC: "Arabic",
            Language.ENGLISH: "English",
            Language.SPANISH: "Spanish",
            Language.JAPANESE: "Japanese",
        }[self]
