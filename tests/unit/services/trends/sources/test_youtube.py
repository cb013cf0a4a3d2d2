"""Unit tests for the YouTube most-popular trend source."""

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from trendcast.config.sources import YouTubeTrendsConfig
from trendcast.core.exceptions import SourceUnavailableError
from trendcast.services.trends.base import TrendSource
from trendcast.services.trends.sources.youtube import (
    YOUTUBE_API_BASE,
    YouTubeTrendsSource,
    extract_main_keyword,
)


def video(title: str, views: int, likes: int, comments: int, days_old: float, **snippet) -> dict:
    published = datetime.now(UTC) - timedelta(days=days_old)
    return {
        "id": title,
        "snippet": {
            "title": title,
            "publishedAt": published.strftime("%Y-%m-%dT%H:%M:%SZ"),
            **snippet,
        },
        "statistics": {
            "viewCount": str(views),
            "likeCount": str(likes),
            "commentCount": str(comments),
        },
    }


@pytest.fixture
def source(mock_http_client) -> YouTubeTrendsSource:
    return YouTubeTrendsSource(YouTubeTrendsConfig(limit=10), mock_http_client, api_key="key")


class TestExtractMainKeyword:
    """Tests for title keyword extraction."""

    def test_first_three_meaningful_words(self):
        """Test stop words and one-character words are skipped."""
        assert extract_main_keyword("The BEST 아이폰 리뷰 (2024)") == "BEST 아이폰 리뷰"

    def test_punctuation_split(self):
        """Test brackets and hashes separate words."""
        assert extract_main_keyword("[MV] 신곡|공개 #kpop") == "MV 신곡 공개"

    def test_empty_title(self):
        """Test a title with nothing meaningful yields an empty keyword."""
        assert extract_main_keyword("a | the") == ""


class TestYouTubeTrendsSource:
    """Tests for YouTubeTrendsSource."""

    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_http_client):
        """Test the source is unavailable without a key."""
        source = YouTubeTrendsSource(YouTubeTrendsConfig(), mock_http_client)
        assert source.is_configured() is False
        with pytest.raises(SourceUnavailableError):
            await source.fetch_observations("KR")

    @pytest.mark.asyncio
    async def test_observations_from_videos(self, source, mock_http_client, make_response):
        """Test metrics are derived from video statistics."""
        mock_http_client.get.return_value = make_response(
            json_data={
                "items": [
                    video(
                        "AI 혁신 리뷰 영상",
                        1_000_000,
                        40_000,
                        10_000,
                        days_old=3,
                        categoryId="28",
                        tags=["ai", "tech", "review", "gadget", "2024", "extra"],
                    ),
                ]
            }
        )

        observations = await source.fetch_observations("KR")

        assert len(observations) == 1
        obs = observations[0]
        assert obs.source == TrendSource.YOUTUBE
        assert obs.raw_keyword == "AI 혁신 리뷰"
        assert obs.score == 100
        assert obs.predicted_views == 1_000_000
        assert obs.competitiveness == 1.0
        assert obs.engagement_rate == pytest.approx(0.05)
        assert obs.category == "technology"
        assert obs.related_queries == ("ai", "tech", "review", "gadget", "2024")
        assert 0.0 < obs.volatility <= 1.0

    @pytest.mark.asyncio
    async def test_sorted_by_trend_score(self, source, mock_http_client, make_response):
        """Test fresher, more engaging videos rank first."""
        mock_http_client.get.return_value = make_response(
            json_data={
                "items": [
                    video("오래된 영상 제목", 500_000, 5_000, 1_000, days_old=25),
                    video("최신 인기 영상", 500_000, 50_000, 10_000, days_old=1),
                ]
            }
        )

        observations = await source.fetch_observations("KR")

        assert [o.raw_keyword for o in observations] == ["최신 인기 영상", "오래된 영상 제목"]

    @pytest.mark.asyncio
    async def test_old_videos_have_no_recency(self, source, mock_http_client, make_response):
        """Test videos older than the recency window score zero trend."""
        mock_http_client.get.return_value = make_response(
            json_data={"items": [video("지난달 영상 모음", 100_000, 1_000, 100, days_old=40)]}
        )

        observations = await source.fetch_observations("KR")

        assert observations[0].trend_score == 0
        assert observations[0].volatility == 0.0

    @pytest.mark.asyncio
    async def test_request_params(self, source, mock_http_client, make_response):
        """Test the chart request parameters."""
        mock_http_client.get.return_value = make_response(json_data={"items": []})

        await source.fetch_observations("US")

        url = mock_http_client.get.call_args.args[0]
        params = mock_http_client.get.call_args.kwargs["params"]
        assert url == f"{YOUTUBE_API_BASE}/videos"
        assert params["chart"] == "mostPopular"
        assert params["regionCode"] == "US"
        assert params["maxResults"] == 10

    @pytest.mark.asyncio
    async def test_http_error_unavailable(self, source, mock_http_client):
        """Test HTTP failures surface as SourceUnavailableError."""
        mock_http_client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(SourceUnavailableError, match="YouTube API request failed"):
            await source.fetch_observations("KR")
