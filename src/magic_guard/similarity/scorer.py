"""String similarity metrics used by every suggestion component."""

from __future__ import annotations

from rapidfuzz.distance import OSA

# Tokenizer bounds (per input string)
MAX_TOKENS = 32
MAX_TOKEN_LENGTH = 31

PREFIX_BONUS = 0.10
SUFFIX_BONUS = 0.07


def fold_case(text: str) -> str:
    """Lower-case text one character at a time, keeping its length.

    A character whose lower case form is several code points (such as
    U+0130) is replaced by the first of them.
    """
    return "".join(ch.lower()[0] for ch in text)


def _istarts_with(text: str, prefix: str) -> bool:
    return fold_case(text).startswith(fold_case(prefix))


def _iends_with(text: str, suffix: str) -> bool:
    return fold_case(text).endswith(fold_case(suffix))


def tokenize(text: str) -> list[str]:
    """Split text into lower-cased alphanumeric tokens.

    Only ASCII letters and digits form tokens; everything else separates them.
    At most MAX_TOKENS tokens are kept and a run longer than MAX_TOKEN_LENGTH
    is cut, its remainder starting the next token.
    """
    tokens: list[str] = []
    current: list[str] = []

    for ch in text:
        if len(tokens) >= MAX_TOKENS:
            break
        if ch.isascii() and ch.isalnum():
            current.append(ch.lower())
            if len(current) == MAX_TOKEN_LENGTH:
                tokens.append("".join(current))
                current = []
        elif current:
            tokens.append("".join(current))
            current = []

    if current and len(tokens) < MAX_TOKENS:
        tokens.append("".join(current))

    return tokens


def edit_distance(a: str | None, b: str | None) -> int | None:
    """Restricted Damerau-Levenshtein (optimal string alignment) distance, ignoring case.

    Adjacent transpositions count as one edit, but a transposed pair is not
    edited again. Case is folded per character, so the distance is measured
    over strings of the original lengths.

    Args:
        a: First string
        b: Second string

    Returns:
        The distance, or None if either input is missing
    """
    if a is None or b is None:
        return None
    return OSA.distance(a, b, processor=fold_case)


def token_overlap(a: str | None, b: str | None, exact: bool = False) -> int:
    """Jaccard index of the alphanumeric tokens of two strings, scaled 0-100.

    The default mode matches greedily: each token of ``a`` consumes the first
    unused equal token of ``b`` and the union counts duplicates. With
    ``exact=True`` the index is computed over the distinct token sets.

    Args:
        a: First string
        b: Second string
        exact: Use distinct token sets instead of the greedy match

    Returns:
        Integer percentage, 0 when either input is missing or both are empty
    """
    if a is None or b is None:
        return 0

    tokens1 = tokenize(a)
    tokens2 = tokenize(b)

    if exact:
        set1, set2 = set(tokens1), set(tokens2)
        union = len(set1 | set2)
        return 100 * len(set1 & set2) // union if union else 0

    matches = 0
    used = [False] * len(tokens2)
    for token in tokens1:
        for j, other in enumerate(tokens2):
            if not used[j] and token == other:
                used[j] = True
                matches += 1
                break

    total = len(tokens1) + len(tokens2) - matches
    return 100 * matches // total if total else 0


def similarity(a: str | None, b: str | None, exact: bool = False) -> float:
    """Normalized similarity score between two strings.

    Combines the edit distance relative to the longer string, half the token
    overlap, and small bonuses when ``a`` is a prefix or suffix of ``b``.

    Returns:
        Score clamped to [0.0, 1.0]
    """
    if a is None or b is None:
        return 0.0
    if not a and not b:
        return 1.0

    distance = edit_distance(a, b)
    score = 1.0 - distance / max(len(a), len(b))
    score += token_overlap(a, b, exact=exact) / 200.0

    if _istarts_with(b, a):
        score += PREFIX_BONUS
    if len(a) <= len(b) and _iends_with(b, a):
        score += SUFFIX_BONUS

    return clamp(score)


def affix_score(query: str, candidate: str, exact: bool = False) -> float:
    """Similarity plus the prefix/suffix bonuses applied to path and token names."""
    score = similarity(query, candidate, exact=exact)
    if _istarts_with(candidate, query):
        score += PREFIX_BONUS
    if len(query) <= len(candidate) and _iends_with(candidate, query):
        score += SUFFIX_BONUS
    return clamp(score)


def clamp(score: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, score))


class SimilarityScorer:
    """Bundles the metrics with the overlap mode chosen in configuration."""

    def __init__(self, exact_token_overlap: bool = False) -> None:
        self.exact_token_overlap = exact_token_overlap

    def distance(self, a: str | None, b: str | None) -> int | None:
        return edit_distance(a, b)

    def jaccard(self, a: str | None, b: str | None) -> int:
        return token_overlap(a, b, exact=self.exact_token_overlap)

    def similarity(self, a: str | None, b: str | None) -> float:
        return similarity(a, b, exact=self.exact_token_overlap)

    def affix_score(self, query: str, candidate: str) -> float:
        return affix_score(query, candidate, exact=self.exact_token_overlap)
