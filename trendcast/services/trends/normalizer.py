"""Keyword normalization for cross-source comparison.

Keywords reported by different sources for the same topic differ in case,
punctuation and spacing ("AI 혁신!" vs "ai 혁신"). Normalization maps them
to one comparable form while keeping letters of any script, so Hangul
keywords survive untouched.
"""

import re

# \w is Unicode-aware: it keeps Hangul, Latin, digits and underscore.
_SYMBOLS = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


class KeywordNormalizer:
    """Canonicalizes raw keyword text.

    The transformation lowercases, removes punctuation and symbols,
    collapses runs of whitespace and trims. It is pure and idempotent:
    ``normalize(normalize(x)) == normalize(x)``.

    Example:
        >>> KeywordNormalizer().normalize("  AI 혁신!! ")
        'ai 혁신'
    """

    def normalize(self, keyword: str) -> str:
        """Return the canonical form of a keyword.

        Args:
            keyword: Raw keyword text

        Returns:
            Canonical keyword (empty string when nothing meaningful remains)
        """
        text = keyword.lower()
        text = _SYMBOLS.sub("", text)
        return _WHITESPACE.sub(" ", text).strip()


_default_normalizer = KeywordNormalizer()


def normalize_keyword(keyword: str) -> str:
    """Normalize a keyword with the shared normalizer."""
    return _default_normalizer.normalize(keyword)


__all__ = [
    "KeywordNormalizer",
    "normalize_keyword",
]
