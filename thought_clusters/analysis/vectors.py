"""Sparse term-weight vectors: TF, IDF, TF-IDF, centroids and cosine similarity.

A term vector is a plain ``dict[str, float]``; a missing key means weight 0.
All weights produced here are non-negative, so cosine similarity between
any two vectors falls in [0, 1].
"""

import math
from collections import Counter
from typing import Sequence

TermVector = dict[str, float]


def compute_tf(tokens: Sequence[str]) -> TermVector:
    """Compute term frequency: each token's count divided by the token total.

    An empty token list yields an empty vector.
    """
    total = len(tokens)
    if total == 0:
        return {}

    token_counts = Counter(tokens)
    return {token: count / total for token, count in token_counts.items()}


def compute_idf(documents: Sequence[Sequence[str]]) -> TermVector:
    """Compute smoothed inverse document frequency across all documents.

    idf(term) = ln((N + 1) / (df + 1)) + 1, where df counts the documents
    containing the term at least once. Every value is >= 1.
    """
    total_docs = len(documents)

    doc_freq: Counter = Counter()
    for doc in documents:
        doc_freq.update(set(doc))

    return {
        term: math.log((total_docs + 1) / (freq + 1)) + 1
        for term, freq in doc_freq.items()
    }


def compute_tfidf(tf: TermVector, idf: TermVector) -> TermVector:
    """Weight a TF vector by IDF. Terms without an IDF entry keep weight 1."""
    return {term: tf_val * (idf.get(term) or 1.0) for term, tf_val in tf.items()}


def cosine_similarity(vec_a: TermVector, vec_b: TermVector) -> float:
    """Compute cosine similarity between two sparse vectors.

    Returns 0.0 when either vector has zero magnitude, including a zero
    vector compared with itself.
    """
    dot_product = 0.0
    magnitude_a = 0.0
    magnitude_b = 0.0

    for key, a in vec_a.items():
        b = vec_b.get(key, 0.0)
        dot_product += a * b
        magnitude_a += a * a
    for b in vec_b.values():
        magnitude_b += b * b

    magnitude_a = math.sqrt(magnitude_a)
    magnitude_b = math.sqrt(magnitude_b)

    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0
    return dot_product / (magnitude_a * magnitude_b)


def compute_centroid(vectors: Sequence[TermVector]) -> TermVector:
    """Element-wise mean of vectors over the union of their keys.

    Keys appear in first-seen order, which later decides keyword ties.
    """
    if not vectors:
        return {}

    sums: TermVector = {}
    for vec in vectors:
        for term, weight in vec.items():
            sums[term] = sums.get(term, 0.0) + weight

    count = len(vectors)
    return {term: total / count for term, total in sums.items()}
