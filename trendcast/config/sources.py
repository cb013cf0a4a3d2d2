"""Trend source configuration models.

Defines default settings and keyword seeds for each trend source.
"""

from pydantic import BaseModel, Field, field_validator

from trendcast.config.validators import normalize_keyword_list

# Seed keywords per category, queried against Naver DataLab.
NAVER_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "technology": ["AI", "인공지능", "챗GPT", "스마트폰", "애플", "삼성", "메타버스", "블록체인"],
    "entertainment": ["드라마", "K-pop", "BTS", "블랙핑크", "넷플릭스", "유튜브", "게임", "LOL"],
    "lifestyle": ["여행", "맛집", "다이어트", "운동", "요리", "패션", "뷰티", "인테리어"],
    "finance": ["주식", "부동산", "투자", "비트코인", "경제", "금리", "환율", "저축"],
    "health": ["건강", "병원", "약국", "백신", "다이어트", "영양제", "운동", "요가"],
}

GOOGLE_BASE_KEYWORDS: list[str] = [
    "AI",
    "인공지능",
    "아이폰",
    "삼성",
    "게임",
    "먹방",
    "음식",
    "여행",
    "드라마",
    "K-pop",
    "축구",
    "야구",
    "주식",
    "부동산",
    "날씨",
    "코로나",
    "백신",
    "영화",
    "넷플릭스",
    "유튜브",
    "틱톡",
]

GOOGLE_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "technology": ["AI", "인공지능", "아이폰", "삼성", "유튜브", "틱톡", "넷플릭스"],
    "entertainment": ["게임", "드라마", "K-pop", "영화", "먹방"],
    "sports": ["축구", "야구"],
    "finance": ["주식", "부동산"],
    "lifestyle": ["음식", "여행", "날씨"],
    "health": ["코로나", "백신"],
}


class NaverTrendsConfig(BaseModel):
    """Naver DataLab source configuration.

    Attributes:
        category_keywords: Seed keywords grouped by category
        batch_size: Keywords per DataLab request (API maximum is 5)
        batch_delay_seconds: Pause between batches
        window_days: Days of daily data requested
        limit: Maximum observations returned
        request_timeout: HTTP request timeout in seconds
    """

    category_keywords: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in NAVER_CATEGORY_KEYWORDS.items()}
    )
    batch_size: int = Field(default=5, ge=1, le=5)
    batch_delay_seconds: float = Field(default=1.0, ge=0.0, le=30.0)
    window_days: int = Field(default=30, ge=14, le=365)
    limit: int = Field(default=10, ge=1, le=50)
    request_timeout: float = Field(default=10.0, ge=1.0, le=60.0)

    @property
    def seed_keywords(self) -> list[str]:
        """All seed keywords, deduplicated in category order."""
        return normalize_keyword_list(
            [kw for keywords in self.category_keywords.values() for kw in keywords]
        )


class YouTubeTrendsConfig(BaseModel):
    """YouTube most-popular chart configuration.

    Attributes:
        limit: Maximum videos requested (API maximum is 50)
        language: Localization hint sent to the API
        request_timeout: HTTP request timeout in seconds
    """

    limit: int = Field(default=20, ge=1, le=50)
    language: str = Field(default="ko")
    request_timeout: float = Field(default=10.0, ge=1.0, le=60.0)


class GoogleTrendsConfig(BaseModel):
    """Google Trends (pytrends) configuration.

    Attributes:
        keywords: Keywords analysed one by one
        max_keywords: Cap on keywords analysed per run
        min_interest: Minimum average interest to keep a keyword
        request_delay_seconds: Pause between keyword requests
        window_days: Days of interest history requested
        language: Host language passed to pytrends
        tz_offset_minutes: Timezone offset passed to pytrends
        include_related_queries: Fetch related queries for kept keywords
    """

    keywords: list[str] = Field(default_factory=lambda: list(GOOGLE_BASE_KEYWORDS))
    max_keywords: int = Field(default=30, ge=1, le=100)
    min_interest: float = Field(default=20.0, ge=0.0, le=100.0)
    request_delay_seconds: float = Field(default=0.5, ge=0.0, le=30.0)
    window_days: int = Field(default=7, ge=1, le=90)
    language: str = Field(default="ko")
    tz_offset_minutes: int = Field(default=540, ge=-720, le=840)
    include_related_queries: bool = Field(default=True)

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, v: list[str]) -> list[str]:
        """Drop blank and duplicate keywords."""
        return normalize_keyword_list(v)


__all__ = [
    "NAVER_CATEGORY_KEYWORDS",
    "GOOGLE_BASE_KEYWORDS",
    "GOOGLE_CATEGORY_KEYWORDS",
    "NaverTrendsConfig",
    "YouTubeTrendsConfig",
    "GoogleTrendsConfig",
]
