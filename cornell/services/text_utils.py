"""
Text helpers shared by the pipeline stages
Sentence splitting, word sets and lexical similarity
"""
import re
from typing import Iterable, List, Set, Tuple


TERMINALS = ".!?"

# A run of terminal punctuation that ends a sentence (followed by whitespace or end of text).
# Periods inside tokens such as "3.5" are not sentence boundaries.
_TERMINATOR_RE = re.compile(r"([.!?]+)(?=\s|$)")
_WORD_RE = re.compile(r"[a-z0-9]+(?:'[a-z]+)?")
_ALNUM_RE = re.compile(r"[A-Za-z0-9]")

STOPWORDS = frozenset("""
a about above after again against all also am an and any are as at be because been before being
below between both but by can could did do does doing down during each few for from further had
has have having he her here hers him his how i if in into is it its itself just me more most my
no nor not of off on once only or other our ours out over own same she should so some such than
that the their theirs them then there these they this those through to too under until up very
was we were what when where which while who whom why will with would you your yours
""".split())


def split_sentences(text: str) -> List[Tuple[str, str]]:
    """
    Split text into (body, terminator) pairs

    Bodies are trimmed and whitespace-collapsed; pieces without any letter or
    digit are dropped. The terminator is the punctuation run that closed the
    sentence, or "" for trailing text without one.
    """
    parts = _TERMINATOR_RE.split(text)
    pairs: List[Tuple[str, str]] = []
    for i in range(0, len(parts), 2):
        body = " ".join(parts[i].split())
        terminator = parts[i + 1] if i + 1 < len(parts) else ""
        if body and _ALNUM_RE.search(body):
            pairs.append((body, terminator))
    return pairs


def words(text: str) -> List[str]:
    """Lowercased word tokens"""
    return _WORD_RE.findall(text.lower())


def word_set(text: str) -> Set[str]:
    return set(words(text))


def word_count(text: str) -> int:
    """Whitespace-delimited word count"""
    return len(text.split())


def jaccard(a: Set[str], b: Set[str]) -> float:
    """Ratio of shared words to distinct words; 0.0 when both are empty"""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def similarity(first: str, second: str) -> float:
    """Jaccard-style word-set similarity of two sentences"""
    return jaccard(word_set(first), word_set(second))


def content_words(text: str, min_length: int = 5) -> Set[str]:
    """Non-stopword words of at least ``min_length`` characters"""
    return {w for w in words(text) if len(w) >= min_length and w not in STOPWORDS}


def finish_sentence(text: str) -> str:
    """Trim, drop trailing ellipses or dangling separators, ensure terminal punctuation"""
    cleaned = " ".join(text.split())
    cleaned = re.sub(r"(?:\.{2,}|…)+$", "", cleaned)
    cleaned = cleaned.rstrip(" ,;:-")
    if not cleaned:
        return ""
    if cleaned[-1] not in TERMINALS:
        cleaned += "."
    return cleaned


def unique_ordered(items: Iterable[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping first occurrences"""
    seen: Set[str] = set()
    result: List[str] = []
    for item in items:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(item)
    return result
