"""Analysis module for Thought Clusters.

Provides tokenization, TF-IDF vectors, agglomerative topic clustering
and cluster summaries.
"""

from thought_clusters.analysis.text import (
    STOP_WORDS,
    tokenize,
    tag_tokens,
    build_document,
)

from thought_clusters.analysis.vectors import (
    TermVector,
    compute_tf,
    compute_idf,
    compute_tfidf,
    compute_centroid,
    cosine_similarity,
)

from thought_clusters.analysis.summary import (
    TopicCluster,
    compute_coherence,
    extract_top_keywords,
    make_label,
    find_cluster_for_thought,
    clusters_to_json_format,
    format_cluster_summary,
)

from thought_clusters.analysis.clustering import (
    SIMILARITY_THRESHOLD,
    ClusterArena,
    WorkingCluster,
    agglomerate,
    cluster_topics,
    vectorize_documents,
)

__all__ = [
    # Text
    "STOP_WORDS",
    "tokenize",
    "tag_tokens",
    "build_document",
    # Vectors
    "TermVector",
    "compute_tf",
    "compute_idf",
    "compute_tfidf",
    "compute_centroid",
    "cosine_similarity",
    # Summary
    "TopicCluster",
    "compute_coherence",
    "extract_top_keywords",
    "make_label",
    "find_cluster_for_thought",
    "clusters_to_json_format",
    "format_cluster_summary",
    # Clustering
    "SIMILARITY_THRESHOLD",
    "ClusterArena",
    "WorkingCluster",
    "agglomerate",
    "cluster_topics",
    "vectorize_documents",
]
