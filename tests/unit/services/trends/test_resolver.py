"""Unit tests for cross-source entity resolution."""

import pytest

from trendcast.services.trends.base import TrendObservation, TrendSource
from trendcast.services.trends.resolver import EntityResolver, keyword_similarity


def observation(source: TrendSource, keyword: str, score: float = 50.0) -> TrendObservation:
    return TrendObservation(source=source, raw_keyword=keyword, score=score)


class TestKeywordSimilarity:
    """Tests for the edit distance similarity."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("abc", "", 0.0),
            ("kitten", "sitting", 4 / 7),
            ("여행", "여행지", 2 / 3),
            ("아이폰 리뷰", "아이폰 리뷰들", 6 / 7),
        ],
    )
    def test_similarity_formula(self, a, b, expected):
        """Test (max_len - distance) / max_len."""
        assert keyword_similarity(a, b) == pytest.approx(expected)

    def test_symmetric(self):
        """Test similarity does not depend on argument order."""
        assert keyword_similarity("flaw", "lawn") == keyword_similarity("lawn", "flaw")

    def test_similarity_bounds(self):
        """Test similarity is 1 for equal strings and 0 for disjoint ones."""
        assert keyword_similarity("", "") == 1.0
        assert keyword_similarity("ai 혁신", "ai 혁신") == 1.0
        assert keyword_similarity("주식", "여행") == 0.0


class TestEntityResolver:
    """Tests for EntityResolver."""

    @pytest.fixture
    def resolver(self) -> EntityResolver:
        return EntityResolver()

    def test_identical_keywords_merge_across_sources(self, resolver):
        """Test identical normalized keywords end in one cluster."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "AI 혁신"),
                observation(TrendSource.YOUTUBE, "ai 혁신"),
                observation(TrendSource.GOOGLE, "AI  혁신"),
            ]
        )

        assert len(clusters) == 1
        assert clusters[0].sources == [TrendSource.NAVER, TrendSource.YOUTUBE, TrendSource.GOOGLE]

    def test_punctuation_variants_merge(self, resolver):
        """Test "AI 혁신" and "AI 혁신!" resolve to the same cluster."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "AI 혁신"),
                observation(TrendSource.GOOGLE, "AI 혁신!"),
            ]
        )
        assert len(clusters) == 1
        assert clusters[0].source_count == 2

    def test_unrelated_keywords_stay_apart(self, resolver):
        """Test "주식" and "여행" never merge."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "주식"),
                observation(TrendSource.YOUTUBE, "여행"),
            ]
        )
        assert [c.canonical_keyword for c in clusters] == ["주식", "여행"]

    def test_similar_keywords_merge(self, resolver):
        """Test near-identical keywords merge above the threshold."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "아이폰 리뷰"),
                observation(TrendSource.YOUTUBE, "아이폰 리뷰들"),
            ]
        )
        assert len(clusters) == 1
        assert clusters[0].aliases == {"아이폰 리뷰", "아이폰 리뷰들"}

    def test_threshold_one_requires_exact_match(self):
        """Test a threshold of 1.0 only merges identical keywords."""
        resolver = EntityResolver(similarity_threshold=1.0)
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "아이폰 리뷰"),
                observation(TrendSource.YOUTUBE, "아이폰 리뷰들"),
            ]
        )
        assert len(clusters) == 2

    def test_priority_source_names_the_cluster(self, resolver):
        """Test the Naver keyword names the cluster even when listed last."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.GOOGLE, "ai 혁신"),
                observation(TrendSource.YOUTUBE, "Ai 혁신"),
                observation(TrendSource.NAVER, "AI 혁신"),
            ]
        )
        assert clusters[0].keyword == "AI 혁신"

    def test_same_source_keeps_higher_score(self, resolver):
        """Test a cluster holds at most one member per source."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.YOUTUBE, "먹방", score=10),
                observation(TrendSource.YOUTUBE, "먹방!", score=30),
            ]
        )
        assert len(clusters) == 1
        assert clusters[0].member(TrendSource.YOUTUBE).score == 30

    def test_blank_keywords_discarded(self, resolver):
        """Test keywords that normalize to nothing are dropped."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "!!!"),
                observation(TrendSource.YOUTUBE, "   "),
                observation(TrendSource.GOOGLE, "날씨"),
            ]
        )
        assert [c.canonical_keyword for c in clusters] == ["날씨"]

    def test_discovery_index_follows_creation_order(self, resolver):
        """Test clusters are numbered in creation order."""
        clusters = resolver.resolve(
            [
                observation(TrendSource.NAVER, "주식"),
                observation(TrendSource.NAVER, "여행"),
                observation(TrendSource.GOOGLE, "야구"),
            ]
        )
        assert [c.discovery_index for c in clusters] == [0, 1, 2]

    def test_empty_input(self, resolver):
        """Test no observations give no clusters."""
        assert resolver.resolve([]) == []
