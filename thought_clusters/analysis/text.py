"""Text processing for topic clustering.

Turns free-text thoughts into filtered lowercase word tokens. Tags are
split on hyphens and merged into the same token stream so that short,
explicit tags weigh in alongside the body text.
"""

import re
from typing import Iterable

# =============================================================================
# STOP WORDS
# =============================================================================

STOP_WORDS = frozenset({
    # Articles, conjunctions, auxiliaries
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "must", "shall",
    "can", "need", "dare", "ought", "used",
    # Prepositions and adverbs
    "to", "of", "in", "for", "on", "with", "at", "by", "from", "as",
    "into", "through", "during", "before", "after", "above", "below",
    "between", "out", "off", "over", "under", "again", "further", "then",
    "once", "here", "there", "when", "where", "why", "how", "all", "each",
    "every", "both", "few", "more", "most", "other", "some", "such", "no",
    "not", "only", "own", "same", "so", "than", "too", "very", "just",
    "because", "if", "about", "up",
    # Pronouns
    "it", "its", "i", "me", "my", "we", "our", "you", "your", "he",
    "him", "his", "she", "her", "they", "them", "their", "this", "that",
    "these", "those", "what", "which", "who", "whom",
    # Filler words common in quick notes
    "also", "like", "get", "got", "make", "made", "think", "go", "going",
    "went", "really", "much", "many", "well", "even", "still", "already",
    "yet", "though",
})

MIN_TOKEN_LENGTH = 3

# Anything that is not a lowercase letter, digit, whitespace or hyphen
_NON_WORD_RE = re.compile(r"[^a-z0-9\s-]")


def tokenize(text: str) -> list[str]:
    """Tokenize text into lowercase words, dropping stop words and short words.

    Hyphenated words survive intact ("ai-driven"); all other punctuation
    becomes a word boundary.
    """
    if not text:
        return []
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [
        word for word in cleaned.split()
        if len(word) >= MIN_TOKEN_LENGTH and word not in STOP_WORDS
    ]


def tag_tokens(tags: Iterable[str]) -> list[str]:
    """Split tags into lowercase sub-tokens on hyphens.

    Tags bypass the stop word and length filters; empty fragments
    (from leading, trailing or doubled hyphens) are skipped.
    """
    tokens = []
    for tag in tags:
        # Empty fragments are dropped on purpose rather than counted as an
        # empty-string term.
        tokens.extend(part for part in tag.lower().split("-") if part)
    return tokens


def build_document(text: str, tags: Iterable[str] = ()) -> list[str]:
    """Build the token stream for one thought: text tokens then tag tokens."""
    return tokenize(text) + tag_tokens(tags)
