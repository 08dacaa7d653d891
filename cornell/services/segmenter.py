"""
Sentence segmenter
Splits sanitized text into candidate sentences
"""
from typing import Iterator

from cornell.services.text_utils import split_sentences


# Minimum sentence lengths (characters) used by the downstream stages
TAKEAWAY_MIN_LENGTH = 15
SUMMARY_MIN_LENGTH = 20
QUESTION_MIN_LENGTH = 25


def segment(text: str, min_length: int = 0) -> Iterator[str]:
    """
    Yield the sentences of ``text`` that are at least ``min_length`` characters long

    Sentences keep their terminal punctuation (a run such as "?!" is reduced
    to its first character). The iterator is single-pass; call again to
    iterate twice.

    Args:
        text: Sanitized text
        min_length: Minimum sentence length in characters

    Yields:
        Trimmed sentences in document order
    """
    for body, terminator in split_sentences(text):
        sentence = body + terminator[:1]
        if len(sentence) >= min_length:
            yield sentence
