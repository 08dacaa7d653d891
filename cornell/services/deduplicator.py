"""
Near-duplicate suppression for scored candidates
"""
from typing import Iterable, List
from loguru import logger

from cornell.models import Candidate
from cornell.services.text_utils import jaccard, word_set


SIMILARITY_THRESHOLD = 0.7
DUPLICATE_PENALTY = 2


def dedupe(
    candidates: Iterable[Candidate],
    threshold: float = SIMILARITY_THRESHOLD,
    penalty: int = DUPLICATE_PENALTY,
) -> List[Candidate]:
    """
    Softly suppress near-duplicate candidates

    Candidates are visited in discovery order. One whose word-set similarity
    to any already accepted candidate exceeds ``threshold`` loses ``penalty``
    points (floored at zero) and is kept only while its score stays positive.

    Args:
        candidates: Candidates in discovery order
        threshold: Similarity above which two candidates are near-duplicates
        penalty: Score deducted from a near-duplicate

    Returns:
        Accepted candidates, order preserved
    """
    accepted: List[Candidate] = []
    accepted_words = []
    dropped = 0

    for candidate in candidates:
        words = word_set(candidate.text)
        if any(jaccard(words, other) > threshold for other in accepted_words):
            penalized = max(0, candidate.score - penalty)
            if penalized <= 0:
                dropped += 1
                continue
            candidate = candidate.model_copy(
                update={"score": penalized, "tags": candidate.tags | {"near-duplicate"}}
            )
        accepted.append(candidate)
        accepted_words.append(words)

    if dropped:
        logger.debug(f"Dropped {dropped} near-duplicate candidates")
    return accepted
