"""Cluster summarization and output formatting.

Turns the member vectors of a surviving cluster into a TopicCluster with
a centroid, a coherence score, top keywords and a readable label.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from thought_clusters.analysis.vectors import (
    TermVector,
    compute_centroid,
    cosine_similarity,
)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class TopicCluster:
    """A group of thoughts sharing a topic."""
    id: str
    label: str
    keywords: list[str] = field(default_factory=list)  # At most max_keywords
    thought_ids: list[str] = field(default_factory=list)
    centroid: TermVector = field(default_factory=dict)
    coherence: float = 1.0  # 0-1, mean member similarity to centroid

    @property
    def size(self) -> int:
        return len(self.thought_ids)

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys display clients expect."""
        return {
            "id": self.id,
            "label": self.label,
            "keywords": list(self.keywords),
            "thoughtIds": list(self.thought_ids),
            "centroid": dict(self.centroid),
            "coherence": self.coherence,
        }


# =============================================================================
# SUMMARY METRICS
# =============================================================================

def compute_coherence(vectors: Sequence[TermVector], centroid: TermVector) -> float:
    """Average cosine similarity of each member vector to the centroid.

    A cluster of zero or one member is perfectly coherent.
    """
    if len(vectors) <= 1:
        return 1.0

    total_sim = sum(cosine_similarity(vec, centroid) for vec in vectors)
    return total_sim / len(vectors)


def extract_top_keywords(centroid: TermVector, count: int = 5) -> list[str]:
    """Return the highest-weighted centroid terms, ties in key order."""
    ranked = sorted(centroid.items(), key=lambda item: item[1], reverse=True)
    return [term for term, _ in ranked[:count]]


def make_label(keywords: Sequence[str], count: int = 3) -> str:
    """Join the first keywords, each with its first letter uppercased."""
    return " & ".join(k[:1].upper() + k[1:] for k in keywords[:count])


def summarize_cluster(
    cluster_id: str,
    thought_ids: list[str],
    vectors: Sequence[TermVector],
    max_keywords: int = 5,
    label_keywords: int = 3,
) -> TopicCluster:
    """Build the TopicCluster for one surviving cluster."""
    centroid = compute_centroid(vectors)
    keywords = extract_top_keywords(centroid, max_keywords)

    return TopicCluster(
        id=cluster_id,
        label=make_label(keywords, label_keywords),
        keywords=keywords,
        thought_ids=thought_ids,
        centroid=centroid,
        coherence=compute_coherence(vectors, centroid),
    )


# =============================================================================
# OUTPUT HELPERS
# =============================================================================

def find_cluster_for_thought(
    clusters: Sequence[TopicCluster],
    thought_id: str,
) -> Optional[TopicCluster]:
    """Find the cluster containing a thought, or None."""
    for cluster in clusters:
        if thought_id in cluster.thought_ids:
            return cluster
    return None


def clusters_to_json_format(clusters: Sequence[TopicCluster]) -> list[dict]:
    """Convert clusters to JSON-serializable dicts."""
    return [cluster.to_dict() for cluster in clusters]


def coherence_label(score: float) -> str:
    """Convert coherence score to label."""
    if score >= 0.7:
        return "tight"
    elif score >= 0.4:
        return "loose"
    else:
        return "scattered"


def format_cluster_summary(clusters: Sequence[TopicCluster]) -> str:
    """Format clusters as markdown."""
    lines = ["## Topic Clusters\n"]

    if not clusters:
        lines.append("_No topic clusters found._")
        return "\n".join(lines)

    for cluster in clusters:
        lines.append(f"### {cluster.label or cluster.id}")
        lines.append(f"- **Thoughts:** {cluster.size}")
        lines.append(
            f"- **Coherence:** {cluster.coherence:.2f} ({coherence_label(cluster.coherence)})"
        )
        if cluster.keywords:
            lines.append(f"- **Keywords:** {', '.join(cluster.keywords)}")
        lines.append(f"- **Thought IDs:** {', '.join(cluster.thought_ids)}")
        lines.append("")

    return "\n".join(lines)
