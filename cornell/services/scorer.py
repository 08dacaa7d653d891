"""
Candidate scorer
Assigns additive relevance scores to sentences for takeaway selection
"""
import re
from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Sequence, Tuple
from loguru import logger

from cornell.models import Candidate
from cornell.services.text_utils import word_count


EXPOSITION_VERBS = (
    "is",
    "introduces",
    "describes",
    "defines",
    "explains",
    "emphasizes",
    "recommends",
    "provides",
    "demonstrates",
    "enables",
    "results in",
)

_VERB_ALTERNATION = "|".join(
    r"\s+".join(re.escape(part) for part in verb.split()) for verb in EXPOSITION_VERBS
)

# "This/It/The <up to four words> <exposition verb>"
STARTER_RE = re.compile(r"^(?:this|it|the)\b(?:\s+[\w'-]+){0,4}?\s+(?:%s)\b" % _VERB_ALTERNATION, re.IGNORECASE)

QUESTION_STARTERS = frozenset((
    "what", "why", "how", "when", "where", "who", "whom", "whose", "which",
    "is", "are", "am", "was", "were", "do", "does", "did", "can", "could",
    "should", "would", "will", "shall", "may", "might", "must", "has", "have", "had",
))

STARTER_WEIGHT = 3
EXPOSITION_WEIGHT = 2
TERM_WEIGHT = 1
LENGTH_BAND_WEIGHT = 1

LENGTH_BAND_WORDS = (8, 28)
TAKEAWAY_CHAR_BAND = (20, 200)


def is_question(sentence: str) -> bool:
    """True for sentences ending in "?" or opening with an interrogative or auxiliary word"""
    stripped = sentence.strip()
    if stripped.endswith("?"):
        return True
    first = re.match(r"[A-Za-z']+", stripped)
    return bool(first) and first.group(0).lower() in QUESTION_STARTERS


def to_declarative(sentence: str) -> Optional[str]:
    """
    Rewrite a question as a statement

    Questions are recognized but never rewritten; returning None rejects
    the sentence as a takeaway.
    """
    return None


class CandidateScorer:
    """Weighted heuristic scorer for takeaway candidates"""

    def __init__(self, char_band: Sequence[int] = TAKEAWAY_CHAR_BAND):
        self.min_chars, self.max_chars = char_band

    def score(
        self,
        sentence: str,
        keywords: Iterable[str] = (),
        concept_terms: Iterable[str] = (),
        domain_terms: Iterable[str] = (),
    ) -> int:
        """
        Score one sentence

        Args:
            sentence: Sentence text
            keywords: Note keywords, matched as case-insensitive substrings
            concept_terms: Extracted concept terms
            domain_terms: User-supplied domain vocabulary terms

        Returns:
            Non-negative integer score
        """
        score, _ = self._signals(sentence, keywords, concept_terms, domain_terms)
        return score

    def evaluate(
        self,
        sentence: str,
        keywords: Iterable[str] = (),
        concept_terms: Iterable[str] = (),
        domain_terms: Iterable[str] = (),
        index: int = 0,
    ) -> Candidate:
        """Score one sentence and wrap it as a Candidate with its matched tags"""
        score, tags = self._signals(sentence, keywords, concept_terms, domain_terms)
        return Candidate(text=sentence, score=score, tags=tags, index=index)

    def _signals(
        self,
        sentence: str,
        keywords: Iterable[str],
        concept_terms: Iterable[str],
        domain_terms: Iterable[str],
    ) -> Tuple[int, FrozenSet[str]]:
        # Every rule applies independently and the weights are summed
        lowered = sentence.lower()
        score = 0
        tags = set()

        if STARTER_RE.search(sentence.strip()):
            score += STARTER_WEIGHT
            tags.add("starter")
        # Substring match, so "is" also fires inside "analysis"
        if any(verb in lowered for verb in EXPOSITION_VERBS):
            score += EXPOSITION_WEIGHT
            tags.add("exposition-verb")

        for prefix, terms in (("keyword", keywords), ("concept", concept_terms), ("domain", domain_terms)):
            for term in terms:
                term = term.strip().lower()
                if term and term in lowered:
                    score += TERM_WEIGHT
                    tags.add(f"{prefix}:{term}")

        low, high = LENGTH_BAND_WORDS
        if low <= word_count(sentence) <= high:
            score += LENGTH_BAND_WEIGHT
            tags.add("length-band")

        return score, frozenset(tags)

    def is_eligible(self, sentence: str, used: AbstractSet[str] = frozenset()) -> bool:
        """Takeaway eligibility: unused, inside the character band, not a question"""
        if sentence.strip().lower() in used:
            return False
        if not self.min_chars <= len(sentence) <= self.max_chars:
            return False
        if is_question(sentence) and to_declarative(sentence) is None:
            return False
        return True

    def score_sentences(
        self,
        sentences: Iterable[str],
        keywords: Iterable[str] = (),
        concept_terms: Iterable[str] = (),
        domain_terms: Iterable[str] = (),
        used: AbstractSet[str] = frozenset(),
    ) -> List[Candidate]:
        """
        Score every eligible sentence, in discovery order

        Args:
            sentences: Candidate sentences
            keywords: Note keywords
            concept_terms: Extracted concept terms
            domain_terms: User-supplied domain vocabulary terms
            used: Sentences already taken by another selection

        Returns:
            Candidates carrying their discovery index
        """
        keywords = list(keywords)
        concept_terms = sorted(concept_terms)
        domain_terms = list(domain_terms)
        used_keys = {u.strip().lower() for u in used}

        candidates: List[Candidate] = []
        skipped = 0
        for index, sentence in enumerate(sentences):
            if not self.is_eligible(sentence, used_keys):
                skipped += 1
                continue
            candidates.append(self.evaluate(sentence, keywords, concept_terms, domain_terms, index=index))

        logger.debug(f"Scored {len(candidates)} candidates, skipped {skipped} ineligible sentences")
        return candidates
