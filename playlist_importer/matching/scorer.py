"""
Similarity scores used by the match selector.

score() blends three set-overlap ratios between a query keyword set (from a
playlist title) and a target keyword set (from one local record):

    recall    = shared / query      (how much of the title is covered)
    jaccard   = shared / union      (overall overlap)
    precision = shared / target     (how little of the record is unrelated)

    score = 0.50 * recall + 0.30 * jaccard + 0.20 * precision

string_similarity() is a cheap whole-string comparison used only by the
filename short-circuit tiers.
"""

from collections.abc import Set


RECALL_WEIGHT = 0.50
JACCARD_WEIGHT = 0.30
PRECISION_WEIGHT = 0.20


def score(query_keywords: Set[str], target_keywords: Set[str]) -> float:
    """
    Compute the weighted keyword similarity between query and target.

    Args:
        query_keywords: Keywords of the playlist title.
        target_keywords: Keywords of one candidate source (file or metadata).

    Returns:
        A value in [0, 1]. 0.0 when nothing is shared or the target is empty.
    """
    shared = len(query_keywords & target_keywords)
    query_size = len(query_keywords)
    target_size = len(target_keywords)

    if shared == 0 or target_size == 0:
        return 0.0

    recall = shared / query_size
    jaccard = shared / (query_size + target_size - shared)
    precision = shared / target_size

    return (
        RECALL_WEIGHT * recall
        + JACCARD_WEIGHT * jaccard
        + PRECISION_WEIGHT * precision
    )


def string_similarity(a: str, b: str) -> float:
    """
    Compare two already-normalized strings.

    Returns:
        1.0 if the strings are equal; len(shorter) / len(longer) if one
        contains the other; otherwise the Jaccard index of their character
        sets.

    Examples:
        string_similarity("abc", "abc")      # 1.0
        string_similarity("abc", "abcdef")   # 0.5
        string_similarity("abc", "bcd")      # 0.5 ({b, c} / {a, b, c, d})
    """
    if a == b:
        return 1.0

    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if shorter in longer:
        return len(shorter) / len(longer)

    chars_a = set(a)
    chars_b = set(b)
    union = chars_a | chars_b
    if not union:
        return 0.0
    return len(chars_a & chars_b) / len(union)
