"""Cross-source entity resolution.

Clusters observations from all sources into AggregatedTrend objects using
exact matching on normalized keywords first and edit-distance similarity
second.
"""

from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein

from trendcast.core.logging import get_logger
from trendcast.services.trends.base import SOURCE_PRIORITY, TrendObservation, TrendSource
from trendcast.services.trends.cluster import AggregatedTrend
from trendcast.services.trends.normalizer import KeywordNormalizer

logger = get_logger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.7


def keyword_similarity(a: str, b: str) -> float:
    """Normalized edit-distance similarity in [0, 1].

    ``(max_len - distance) / max_len``; two empty strings are identical.
    """
    return Levenshtein.normalized_similarity(a, b)


class EntityResolver:
    """Merges observations that describe the same real-world topic.

    Observations are processed source by source in ``SOURCE_PRIORITY``
    order and, within a source, in the order they were reported. For each
    observation:

    1. Blank keywords are discarded.
    2. If any cluster already absorbed an identical normalized keyword, the
       observation joins it.
    3. Otherwise the cluster whose canonical keyword is most similar is
       chosen; if that similarity reaches the threshold the observation joins
       it (earliest cluster wins ties).
    4. Otherwise a new cluster is created.

    Matching is O(n^2) in the number of observations per run, which is fine
    for a few dozen keywords per source.

    Example:
        >>> resolver = EntityResolver()
        >>> clusters = resolver.resolve(observations)
    """

    def __init__(
        self,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        normalizer: KeywordNormalizer | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            similarity_threshold: Minimum similarity to merge into a cluster
            normalizer: Keyword normalizer
        """
        self.similarity_threshold = similarity_threshold
        self.normalizer = normalizer or KeywordNormalizer()

    def resolve(self, observations: Iterable[TrendObservation]) -> list[AggregatedTrend]:
        """Cluster observations across sources.

        Args:
            observations: Observations from any sources, in any order

        Returns:
            Clusters in creation order
        """
        clusters: list[AggregatedTrend] = []
        alias_index: dict[str, AggregatedTrend] = {}

        for observation in self._in_priority_order(observations):
            canonical = self.normalizer.normalize(observation.normalized_keyword)
            if not canonical:
                logger.debug(
                    "Discarding blank keyword",
                    source=observation.source.value,
                    raw_keyword=observation.raw_keyword,
                )
                continue
            if canonical != observation.normalized_keyword:
                observation = observation.model_copy(update={"normalized_keyword": canonical})

            cluster = alias_index.get(canonical) or self._best_match(canonical, clusters)
            if cluster is None:
                cluster = AggregatedTrend.from_observation(observation, index=len(clusters))
                clusters.append(cluster)
            else:
                cluster.absorb(observation)
            alias_index[canonical] = cluster

        logger.info(
            "Entity resolution complete",
            clusters=len(clusters),
            cross_platform=sum(1 for c in clusters if c.source_count > 1),
        )
        return clusters

    def _best_match(
        self, canonical: str, clusters: list[AggregatedTrend]
    ) -> AggregatedTrend | None:
        best: AggregatedTrend | None = None
        best_similarity = -1.0
        for cluster in clusters:
            similarity = keyword_similarity(canonical, cluster.canonical_keyword)
            if similarity > best_similarity:
                best, best_similarity = cluster, similarity
        if best is not None and best_similarity >= self.similarity_threshold:
            return best
        return None

    @staticmethod
    def _in_priority_order(
        observations: Iterable[TrendObservation],
    ) -> list[TrendObservation]:
        by_source: dict[TrendSource, list[TrendObservation]] = {s: [] for s in SOURCE_PRIORITY}
        for observation in observations:
            by_source.setdefault(observation.source, []).append(observation)
        return [obs for source in SOURCE_PRIORITY for obs in by_source[source]]


__all__ = [
    "EntityResolver",
    "keyword_similarity",
]
