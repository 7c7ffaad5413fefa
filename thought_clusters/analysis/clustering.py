"""Topic clustering for Thought Clusters.

Groups thoughts into unlabeled topics without any external AI service:
- TF-IDF vectors built from thought text plus tags
- Greedy agglomerative clustering on centroid cosine similarity
- Centroid, coherence, keyword and label summaries per topic

Algorithm:
1. Start with each thought as its own cluster
2. Find the two clusters whose centroids are most similar
3. Merge them if that similarity is above the threshold
4. Repeat until no pair clears the threshold
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from thought_clusters.analysis.summary import TopicCluster, summarize_cluster
from thought_clusters.analysis.text import build_document
from thought_clusters.analysis.vectors import (
    TermVector,
    compute_centroid,
    compute_idf,
    compute_tf,
    compute_tfidf,
    cosine_similarity,
)
from thought_clusters.config import ClusteringConfig
from thought_clusters.thoughts import ThoughtInput

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.15


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class WorkingCluster:
    """A cluster during the merge loop. Indices point into the input list."""
    member_indices: list[int]
    member_vectors: list[TermVector]
    centroid: TermVector = field(default_factory=dict)

    @classmethod
    def from_members(cls, indices: list[int], vectors: list[TermVector]) -> "WorkingCluster":
        return cls(member_indices=indices, member_vectors=vectors, centroid=compute_centroid(vectors))

    @property
    def size(self) -> int:
        return len(self.member_indices)


class ClusterArena:
    """Live working clusters keyed by a stable integer id.

    Ids are handed out in increasing order and the mapping keeps insertion
    order, so iterating live ids reproduces the list order of a
    remove-two-then-append merge loop. A cluster's centroid never changes
    once created, so pairwise similarities are cached and only pairs
    involving a newly merged cluster are computed.
    """

    def __init__(self, vectors: Sequence[TermVector]):
        self._clusters: dict[int, WorkingCluster] = {}
        self._similarities: dict[tuple[int, int], float] = {}
        self._next_id = 0
        for i, vec in enumerate(vectors):
            self._add(WorkingCluster.from_members([i], [vec]))

    def __len__(self) -> int:
        return len(self._clusters)

    def clusters(self) -> list[WorkingCluster]:
        """Live clusters in current order."""
        return list(self._clusters.values())

    def _add(self, cluster: WorkingCluster) -> int:
        cluster_id = self._next_id
        self._next_id += 1
        self._clusters[cluster_id] = cluster
        return cluster_id

    def similarity(self, id_a: int, id_b: int) -> float:
        key = (id_a, id_b) if id_a < id_b else (id_b, id_a)
        sim = self._similarities.get(key)
        if sim is None:
            sim = cosine_similarity(self._clusters[key[0]].centroid, self._clusters[key[1]].centroid)
            self._similarities[key] = sim
        return sim

    def most_similar_pair(self) -> tuple[Optional[tuple[int, int]], float]:
        """Scan all live pairs in row-major order for the highest similarity.

        Ties keep the first pair encountered. Returns (None, -1.0) when
        fewer than two clusters are live.
        """
        ids = list(self._clusters)
        best_pair = None
        best_sim = -1.0

        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                sim = self.similarity(ids[i], ids[j])
                if sim > best_sim:
                    best_sim = sim
                    best_pair = (ids[i], ids[j])

        return best_pair, best_sim

    def merge(self, id_a: int, id_b: int) -> int:
        """Replace two clusters with their union, appended at the end."""
        first = self._clusters.pop(id_a)
        second = self._clusters.pop(id_b)

        for other_id in self._clusters:
            for dead_id in (id_a, id_b):
                key = (dead_id, other_id) if dead_id < other_id else (other_id, dead_id)
                self._similarities.pop(key, None)
        self._similarities.pop((min(id_a, id_b), max(id_a, id_b)), None)

        merged = WorkingCluster.from_members(
            first.member_indices + second.member_indices,
            first.member_vectors + second.member_vectors,
        )
        return self._add(merged)


# =============================================================================
# PIPELINE
# =============================================================================

def vectorize_documents(documents: Sequence[Sequence[str]]) -> list[TermVector]:
    """Compute one TF-IDF vector per token list, with IDF over the whole batch."""
    idf = compute_idf(documents)
    return [compute_tfidf(compute_tf(doc), idf) for doc in documents]


def agglomerate(
    vectors: Sequence[TermVector],
    similarity_threshold: float = SIMILARITY_THRESHOLD,
) -> list[WorkingCluster]:
    """Merge the most similar pair of clusters until none clears the threshold.

    Args:
        vectors: One TF-IDF vector per document.
        similarity_threshold: A pair merges only if its similarity is
            strictly greater than this.

    Returns:
        Surviving clusters in their final working order.
    """
    arena = ClusterArena(vectors)
    merges = 0

    while len(arena) > 1:
        pair, best_sim = arena.most_similar_pair()
        if pair is None or best_sim <= similarity_threshold:
            break
        arena.merge(*pair)
        merges += 1
        logger.debug(f"[Clustering] Merge {merges}: similarity={best_sim:.3f}, {len(arena)} clusters left")

    return arena.clusters()


def cluster_topics(
    thoughts: Sequence[ThoughtInput],
    min_cluster_size: Optional[int] = None,
    config: Optional[ClusteringConfig] = None,
) -> list[TopicCluster]:
    """Cluster thoughts into topics.

    Args:
        thoughts: Thoughts to cluster. Must already be validated; see
            thoughts.validate_thoughts.
        min_cluster_size: Drop clusters with fewer members (>= 1). Defaults
            to the config value, which defaults to 2.
        config: Engine settings. Defaults to ClusteringConfig().

    Returns:
        TopicClusters sorted by size, largest first. Equal sizes keep
        discovery order.
    """
    if not thoughts:
        return []

    config = config or ClusteringConfig()
    if min_cluster_size is None:
        min_cluster_size = config.min_cluster_size

    # Combine text with tags for a richer representation
    documents = [build_document(t.text, t.tags) for t in thoughts]
    vectors = vectorize_documents(documents)

    clusters = agglomerate(vectors, config.similarity_threshold)
    survivors = [c for c in clusters if c.size >= min_cluster_size]

    topic_clusters = [
        summarize_cluster(
            cluster_id=f"cluster-{idx}",
            thought_ids=[thoughts[i].id for i in cluster.member_indices],
            vectors=cluster.member_vectors,
            max_keywords=config.max_keywords,
            label_keywords=config.label_keywords,
        )
        for idx, cluster in enumerate(survivors)
    ]
    topic_clusters.sort(key=lambda c: c.size, reverse=True)

    logger.info(
        f"[Clustering] {len(thoughts)} thoughts -> {len(clusters)} clusters, "
        f"{len(topic_clusters)} with >= {min_cluster_size} members"
    )
    return topic_clusters
