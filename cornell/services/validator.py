"""
Note validator
Checks an assembled note against its structural invariants
"""
from collections import Counter
from typing import Iterable, List
from loguru import logger

from cornell.models import Note, ValidationResult
from cornell.services.text_utils import TERMINALS, split_sentences


KEYWORD_RANGE = (5, 7)
MIN_QUESTIONS = 5
TAKEAWAY_RANGE = (5, 7)
SUMMARY_SENTENCE_RANGE = (4, 8)


def _duplicates(items: Iterable[str]) -> List[str]:
    counts = Counter(item.strip().lower() for item in items)
    return sorted(item for item, count in counts.items() if count > 1)


def count_sentences(text: str) -> int:
    return len(split_sentences(text))


class NoteValidator:
    """Advisory validator: reports violations, never edits note content"""

    def validate(self, note: Note) -> ValidationResult:
        """
        Check a note

        Args:
            note: Note to check

        Returns:
            ValidationResult with one message per violated invariant
        """
        errors: List[str] = []

        low, high = KEYWORD_RANGE
        if not low <= len(note.keywords) <= high:
            errors.append(f"Keywords must contain {low}-{high} items (found {len(note.keywords)})")

        if len(note.questions) < MIN_QUESTIONS:
            errors.append(f"Questions must contain at least {MIN_QUESTIONS} items (found {len(note.questions)})")

        low, high = TAKEAWAY_RANGE
        if not low <= len(note.takeaways) <= high:
            if note.takeaways_deferred:
                errors.append(f"Select {low}-{high} takeaways (selected {len(note.takeaways)})")
            else:
                errors.append(f"Takeaways must contain {low}-{high} items (found {len(note.takeaways)})")

        low, high = SUMMARY_SENTENCE_RANGE
        summary_sentences = count_sentences(note.summary)
        if not low <= summary_sentences <= high:
            errors.append(f"Summary must contain {low}-{high} sentences (found {summary_sentences})")

        for number, item in enumerate(note.questions, start=1):
            answer = item.answer.strip()
            if not answer or answer[-1] not in TERMINALS:
                errors.append(f"Answer {number} must end with terminal punctuation")
            if "..." in answer or "…" in answer:
                errors.append(f"Answer {number} must not contain an ellipsis")
            if note.strict_mode and not (item.evidence or "").strip():
                errors.append(f"Answer {number} is missing an evidence quote")

        duplicate_keywords = _duplicates(note.keywords)
        if duplicate_keywords:
            errors.append(f"Keywords must be unique (repeated: {', '.join(duplicate_keywords)})")

        if _duplicates(item.question for item in note.questions):
            errors.append("Question texts must be unique")

        if _duplicates(note.takeaways):
            errors.append("Takeaways must be unique")

        if errors:
            logger.warning(f"Note failed validation with {len(errors)} error(s)")
        return ValidationResult(is_valid=not errors, errors=errors)

    def annotate(self, note: Note) -> Note:
        """Copy of ``note`` carrying its validation outcome"""
        result = self.validate(note)
        return note.model_copy(update={"is_valid": result.is_valid, "validation_errors": result.errors})


def validate(note: Note) -> ValidationResult:
    return NoteValidator().validate(note)
