"""Category mapping helpers shared by the trend sources."""

from trendcast.services.trends.base import GENERAL_CATEGORY

# YouTube video category id -> content category
YOUTUBE_CATEGORY_MAP: dict[str, str] = {
    "1": "entertainment",  # Film & Animation
    "2": "entertainment",  # Autos & Vehicles
    "10": "lifestyle",  # Music
    "15": "lifestyle",  # Pets & Animals
    "17": "lifestyle",  # Sports
    "19": "lifestyle",  # Travel & Events
    "20": "entertainment",  # Gaming
    "22": "lifestyle",  # People & Blogs
    "23": "entertainment",  # Comedy
    "24": "entertainment",  # Entertainment
    "25": "lifestyle",  # News & Politics
    "26": "lifestyle",  # Howto & Style
    "27": "lifestyle",  # Education
    "28": "technology",  # Science & Technology
}

TITLE_STOP_WORDS: frozenset[str] = frozenset(
    {
        # Korean
        "그", "그리고", "하지만", "그런데", "또한", "이", "저", "것", "수", "때문에", "위해",
        "이런", "저런", "같은", "다른", "새로운", "좋은", "나쁜", "큰", "작은",
        # English
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "by", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do",
        "does", "did", "will", "would", "could", "should", "may", "might", "must", "can",
        "this", "that", "these", "those",
    }
)  # fmt: skip


def map_youtube_category(category_id: str | None) -> str:
    """Map a YouTube category id to a content category."""
    return YOUTUBE_CATEGORY_MAP.get(str(category_id or ""), GENERAL_CATEGORY)


def categorize_keyword(keyword: str, category_keywords: dict[str, list[str]]) -> str:
    """Find the category whose seed list contains the keyword.

    Args:
        keyword: Keyword as reported
        category_keywords: Seed keywords grouped by category

    Returns:
        First matching category, or "general"
    """
    for category, keywords in category_keywords.items():
        if keyword in keywords:
            return category
    return GENERAL_CATEGORY


__all__ = [
    "TITLE_STOP_WORDS",
    "YOUTUBE_CATEGORY_MAP",
    "categorize_keyword",
    "map_youtube_category",
]
