"""Unit tests for topic ranking and selection."""

import pytest

from trendcast.config.aggregation import SelectionWeights
from trendcast.services.trends.cluster import AggregatedTrend
from trendcast.services.trends.selector import TopicSelector


def make_cluster(
    keyword: str,
    predicted_views: int,
    volatility: float = 0.5,
    competitiveness: float = 0.5,
    index: int = 0,
) -> AggregatedTrend:
    return AggregatedTrend(
        canonical_keyword=keyword.lower(),
        keyword=keyword,
        predicted_views=predicted_views,
        volatility=volatility,
        competitiveness=competitiveness,
        discovery_index=index,
    )


@pytest.fixture
def selector() -> TopicSelector:
    return TopicSelector()


class TestFinalScore:
    """Tests for the selection formula."""

    def test_formula(self, selector):
        """Test views, volatility and low competition are weighted."""
        cluster = make_cluster("A", 1000, volatility=0.2, competitiveness=0.8)
        expected = 0.6 * 1000 + 0.25 * (0.2 * 100) + 0.15 * ((1 - 0.8) * 100)
        assert selector.final_score(cluster) == pytest.approx(expected)

    def test_custom_weights(self):
        """Test configured weights are used."""
        selector = TopicSelector(
            SelectionWeights(predicted_views=0.0, volatility=1.0, low_competition=0.0)
        )
        cluster = make_cluster("A", 1_000_000, volatility=0.3)
        assert selector.final_score(cluster) == pytest.approx(30)


class TestSelectFinal:
    """Tests for select_final."""

    def test_higher_views_wins(self, selector):
        """Test the high-view, low-competition topic is selected."""
        first = make_cluster("A", 1000, volatility=0.2, competitiveness=0.8, index=0)
        second = make_cluster("B", 5000, volatility=0.6, competitiveness=0.3, index=1)

        assert selector.select_final([first, second]) is second

    def test_sets_final_score_on_every_cluster(self, selector):
        """Test every candidate gets its score."""
        clusters = [make_cluster("A", 100, index=0), make_cluster("B", 200, index=1)]
        selector.select_final(clusters)
        assert all(c.final_score is not None for c in clusters)

    def test_tie_goes_to_first_discovered(self, selector):
        """Test equal scores keep discovery order."""
        first = make_cluster("A", 1000, index=0)
        second = make_cluster("B", 1000, index=1)
        assert selector.select_final([second, first]) is first

    def test_empty_returns_none(self, selector):
        """Test no candidates select nothing."""
        assert selector.select_final([]) is None


class TestRank:
    """Tests for rank."""

    def test_orders_by_predicted_views(self, selector):
        """Test ranking is by predicted views, descending."""
        clusters = [
            make_cluster("A", 100, index=0),
            make_cluster("B", 300, index=1),
            make_cluster("C", 200, index=2),
        ]
        assert [c.keyword for c in selector.rank(clusters)] == ["B", "C", "A"]

    def test_limit(self):
        """Test only the top entries are kept."""
        selector = TopicSelector(ranking_limit=2)
        clusters = [make_cluster(str(i), i * 10, index=i) for i in range(5)]
        assert len(selector.rank(clusters)) == 2
        assert len(selector.rank(clusters, limit=3)) == 3

    def test_drops_blank_keywords(self, selector):
        """Test clusters without a keyword are never ranked."""
        blank = AggregatedTrend(canonical_keyword="", keyword="", predicted_views=10**9)
        ranked = selector.rank([blank, make_cluster("A", 100)])
        assert [c.keyword for c in ranked] == ["A"]

    def test_stable_for_equal_views(self, selector):
        """Test equal views keep input order."""
        clusters = [make_cluster("A", 100, index=0), make_cluster("B", 100, index=1)]
        assert [c.keyword for c in selector.rank(clusters)] == ["A", "B"]
