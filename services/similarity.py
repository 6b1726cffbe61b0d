"""Edit-distance similarity between two normalized strings."""

from rapidfuzz.distance import Levenshtein


def string_similarity(a: str, b: str) -> float:
    """Return ``1 - levenshtein(a, b) / max(len(a), len(b))`` clamped to [0, 1].

    Empty input on either side scores 0; identical strings score 1.
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    distance = Levenshtein.distance(a, b)
    similarity = 1 - distance / max(len(a), len(b))
    return max(0.0, min(1.0, similarity))
