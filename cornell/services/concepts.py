"""
Concept and keyword extraction
Derives salient terms used as scoring signals and as the note's keyword list
"""
import re
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Set, Tuple
from loguru import logger

from cornell.services.text_utils import STOPWORDS, split_sentences, unique_ordered, words


KEYWORD_MIN = 5
KEYWORD_TARGET = 6
KEYWORD_MAX = 7
CONCEPT_BIGRAM_LIMIT = 10

# Curated study-domain terms, matched before any frequency statistics
DOMAIN_VOCABULARY: Tuple[str, ...] = (
    "business value",
    "three horizons",
    "strategy horizon",
    "initiative horizon",
    "delivery horizon",
    "planning horizon",
    "agile mindset",
    "agile extension",
    "business analysis",
    "business analyst",
    "business need",
    "customer value",
    "value stream",
    "stakeholder",
    "product roadmap",
    "product backlog",
    "backlog refinement",
    "user story",
    "minimum viable product",
    "continuous improvement",
    "feedback loop",
    "decision making",
    "risk management",
    "prioritization",
    "retrospective",
    "iteration",
    "experimentation",
    "transparency",
)

# Used only when the excerpt yields too few terms of its own
FALLBACK_KEYWORDS: Tuple[str, ...] = (
    "key concepts",
    "core principles",
    "main ideas",
    "practical application",
    "study focus",
    "exam preparation",
    "review points",
)

_CAPITALIZED_PHRASE_RE = re.compile(r"\b[A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z]+)+\b")


def _term_pattern(term: str) -> re.Pattern:
    body = r"\s+".join(re.escape(part) for part in term.split())
    return re.compile(r"\b%s(?:s|es)?\b" % body, re.IGNORECASE)


def _overlaps(candidate: str, existing: Iterable[str]) -> bool:
    lowered = candidate.lower()
    for term in existing:
        other = term.lower()
        if lowered in other or other in lowered:
            return True
    return False


def _sentence_tokens(text: str) -> List[List[str]]:
    """Token lists per sentence so n-grams never cross a sentence boundary"""
    return [words(body) for body, _ in split_sentences(text)]


def _rank(counts: Counter, first_seen: Dict[str, int]) -> List[str]:
    return sorted(counts, key=lambda gram: (-counts[gram], first_seen[gram]))


class ConceptExtractor:
    """Extracts concept terms and keywords from sanitized text"""

    def __init__(self, vocabulary: Sequence[str] = DOMAIN_VOCABULARY):
        self.vocabulary = tuple(vocabulary)
        self._patterns = [(term, _term_pattern(term)) for term in self.vocabulary]

    def extract_concepts(self, text: str) -> Set[str]:
        """
        Collect concept terms from two independent signals

        (a) capitalized multi-word phrases such as "Agile Extension";
        (b) stopword-free bigrams seen at least twice, top 10 by frequency.

        Args:
            text: Sanitized text

        Returns:
            Set of lowercase concept phrases
        """
        concepts: Set[str] = set()

        for match in _CAPITALIZED_PHRASE_RE.finditer(text):
            parts = match.group(0).split()
            while parts and parts[0].lower() in STOPWORDS:
                parts = parts[1:]
            phrase = " ".join(parts)
            if len(parts) >= 2 and len(phrase) > 3:
                concepts.add(phrase.lower())

        counts: Counter = Counter()
        first_seen: Dict[str, int] = {}
        position = 0
        for tokens in _sentence_tokens(text):
            for i in range(len(tokens) - 1):
                pair = tokens[i:i + 2]
                position += 1
                if any(token in STOPWORDS for token in pair):
                    continue
                gram = " ".join(pair)
                counts[gram] += 1
                first_seen.setdefault(gram, position)
        frequent = [gram for gram in _rank(counts, first_seen) if counts[gram] >= 2]
        concepts.update(frequent[:CONCEPT_BIGRAM_LIMIT])

        logger.debug(f"Extracted {len(concepts)} concept terms")
        return concepts

    def match_vocabulary(self, text: str) -> List[str]:
        """Curated terms present in the text, most frequent first"""
        hits: List[Tuple[int, int, str]] = []
        for term, pattern in self._patterns:
            found = pattern.findall(text)
            if found:
                hits.append((-len(found), pattern.search(text).start(), term))
        return [term for _, _, term in sorted(hits)]

    def extract_keywords(self, text: str) -> List[str]:
        """
        Build the note's keyword list (5-7 unique phrases)

        Curated vocabulary hits come first. When fewer than five are found,
        frequent bigrams/trigrams fill in, then long single words, then
        generic fallback keywords.

        Args:
            text: Sanitized text

        Returns:
            List of keywords, unique case-insensitively
        """
        keywords = self.match_vocabulary(text)
        logger.debug(f"Curated vocabulary hits: {keywords}")
        if len(keywords) >= KEYWORD_MIN:
            return keywords[:KEYWORD_MAX]

        for gram in self._ranked_ngrams(text):
            if len(keywords) >= KEYWORD_TARGET:
                break
            if not _overlaps(gram, keywords):
                keywords.append(gram)

        if len(keywords) < KEYWORD_MIN:
            for word in self._ranked_long_words(text):
                if len(keywords) >= KEYWORD_MIN:
                    break
                if not _overlaps(word, keywords):
                    keywords.append(word)

        if len(keywords) < KEYWORD_MIN:
            logger.warning("Excerpt yielded too few keywords, using fallback keywords")
            for fallback in FALLBACK_KEYWORDS:
                if len(keywords) >= KEYWORD_MIN:
                    break
                if not _overlaps(fallback, keywords):
                    keywords.append(fallback)

        return unique_ordered(keywords)[:KEYWORD_MAX]

    def _ranked_ngrams(self, text: str) -> List[str]:
        counts: Counter = Counter()
        first_seen: Dict[str, int] = {}
        position = 0
        for tokens in _sentence_tokens(text):
            for size, min_chars in ((2, 7), (3, 11)):
                for i in range(len(tokens) - size + 1):
                    span = tokens[i:i + size]
                    position += 1
                    if any(token in STOPWORDS or any(ch.isdigit() for ch in token) for token in span):
                        continue
                    gram = " ".join(span)
                    if len(gram) < min_chars:
                        continue
                    counts[gram] += 1
                    first_seen.setdefault(gram, position)
        return _rank(counts, first_seen)

    def _ranked_long_words(self, text: str) -> List[str]:
        counts: Counter = Counter()
        first_seen: Dict[str, int] = {}
        for position, token in enumerate(words(text)):
            if len(token) > 6 and token not in STOPWORDS and token.isalpha():
                counts[token] += 1
                first_seen.setdefault(token, position)
        return _rank(counts, first_seen)


_default_extractor = ConceptExtractor()


def extract_concepts(text: str) -> Set[str]:
    return _default_extractor.extract_concepts(text)


def extract_keywords(text: str) -> List[str]:
    return _default_extractor.extract_keywords(text)
