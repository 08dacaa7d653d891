"""
Note assembler
Fills the Cornell note schema from sanitized text, keywords and scored candidates
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple
from loguru import logger

from cornell.models import Candidate, Note, QAItem
from cornell.services.deduplicator import SIMILARITY_THRESHOLD
from cornell.services.scorer import is_question
from cornell.services.segmenter import QUESTION_MIN_LENGTH, SUMMARY_MIN_LENGTH, TAKEAWAY_MIN_LENGTH, segment
from cornell.services.text_utils import content_words, finish_sentence, similarity, unique_ordered


TAKEAWAY_MIN = 5
TAKEAWAY_MAX = 7
SUMMARY_MAX_SENTENCES = 6

FALLBACK_QUESTION_MIN_LENGTH = 30
RELATED_MIN_SHARED_WORDS = 2
RELATED_MAX_LENGTH = 200
EVIDENCE_WORDS = 8
FALLBACK_TAKEAWAY_LENGTH = (40, 100)

FALLBACK_ANSWER = "The excerpt does not address this directly, so review the source text."

FALLBACK_TAKEAWAYS = (
    "Review the excerpt to confirm the main concepts in your own words.",
    "Connect each key term to an example from your own work.",
    "Identify how the ideas in the excerpt affect everyday decisions.",
    "Note any terms that need a clearer definition before the exam.",
    "Summarize the excerpt's central argument in a single sentence.",
)


@dataclass(frozen=True)
class TriggeredTemplate:
    """
    A fixed output bound to trigger word prefixes

    An empty trigger set never matches, so the template is always filled by
    the fallback branch.
    """

    template_id: str
    text: str
    triggers: Tuple[str, ...] = ()
    fallback: str = ""

    def matches(self, sentence: str) -> bool:
        if not self.triggers:
            return False
        pattern = r"\b(?:%s)" % "|".join(re.escape(t) for t in self.triggers)
        return re.search(pattern, sentence, re.IGNORECASE) is not None


QUESTION_TEMPLATES = (
    TriggeredTemplate("subject", "What is the primary subject discussed in this excerpt?"),
    TriggeredTemplate(
        "method",
        "What method or approach is described?",
        ("method", "approach", "technique", "process", "practice", "framework"),
    ),
    TriggeredTemplate(
        "purpose",
        "What purpose or objective is mentioned?",
        ("purpose", "objective", "goal", "aim", "intent"),
    ),
    TriggeredTemplate(
        "value",
        "What benefits or value are highlighted?",
        ("benefit", "value", "advantage", "outcome", "improve"),
    ),
    TriggeredTemplate(
        "requirements",
        "What requirements or recommendations are stated?",
        ("should", "must", "require", "recommend", "need"),
    ),
)

SUMMARY_SLOTS = (
    TriggeredTemplate(
        "purpose",
        "purpose",
        ("purpose", "goal", "objective", "aim", "intend", "introduc"),
        "The excerpt explains the purpose of the practices it describes.",
    ),
    TriggeredTemplate(
        "planning",
        "structural/planning",
        ("plan", "structure", "horizon", "framework", "roadmap", "level", "stage"),
        "It organizes the material into structured planning considerations.",
    ),
    TriggeredTemplate(
        "mindset",
        "mindset",
        ("mindset", "principle", "culture", "thinking", "attitude", "collaborat"),
        "It stresses the mindset needed to apply these ideas well.",
    ),
    TriggeredTemplate(
        "scope",
        "scope",
        ("scope", "context", "apply", "applies", "applied", "across", "organization", "enterprise", "initiative"),
        "The ideas apply across the contexts the excerpt discusses.",
    ),
    TriggeredTemplate(
        "value",
        "value",
        ("value", "benefit", "outcome", "deliver", "improve", "customer"),
        "The overall aim is to deliver lasting value to stakeholders.",
    ),
)


def _key(sentence: str) -> str:
    return sentence.strip().lower()


def make_evidence(sentence: str, max_words: int = EVIDENCE_WORDS) -> str:
    """Short literal quote: the opening words of the sentence"""
    return " ".join(sentence.split()[:max_words]).rstrip(".!?,;:")


def rank_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Highest score first, ties in discovery order"""
    return sorted(candidates, key=lambda c: (-c.score, c.index))


class NoteAssembler:
    """Builds Cornell notes from pipeline outputs"""

    def __init__(
        self,
        question_templates: Sequence[TriggeredTemplate] = QUESTION_TEMPLATES,
        summary_slots: Sequence[TriggeredTemplate] = SUMMARY_SLOTS,
    ):
        self.question_templates = tuple(question_templates)
        self.summary_slots = tuple(summary_slots)

    def assemble(
        self,
        sanitized_text: str,
        keywords: Sequence[str],
        candidates: Sequence[Candidate],
        strict_mode: bool = False,
        title: str = "Study Notes",
        module: str = "",
        questions: Optional[List[QAItem]] = None,
    ) -> Note:
        """
        Assemble a note

        Args:
            sanitized_text: Output of the sanitizer
            keywords: Keyword list (5-7 items)
            candidates: Scored, deduplicated takeaway candidates
            strict_mode: Defer takeaways to an external selection and add evidence quotes
            title: Note title
            module: Study module name
            questions: Pre-built Q&A items; built from the text when omitted

        Returns:
            Unvalidated note
        """
        if questions is None:
            questions, _ = self.build_questions(sanitized_text, strict_mode)

        ranked = rank_candidates(candidates)
        if strict_mode:
            takeaways: List[str] = []
            logger.info(f"Strict mode: deferring takeaways, {len(ranked)} candidates offered for selection")
        else:
            takeaways = self.select_takeaways(ranked, sanitized_text)

        return Note(
            title=title,
            module=module,
            keywords=list(keywords),
            questions=questions,
            takeaways=takeaways,
            summary=self.build_summary(sanitized_text),
            strict_mode=strict_mode,
            takeaway_candidates=ranked if strict_mode else [],
        )

    def build_questions(self, sanitized_text: str, strict_mode: bool = False) -> Tuple[List[QAItem], Set[str]]:
        """
        Fill the five fixed question templates

        Templates are evaluated in order; each takes the first unused sentence
        containing one of its trigger words, else the first unused sentence
        longer than the fallback minimum. Sentences used as answers are not
        reused by later templates.

        Returns:
            Tuple of (Q&A items, lowercased sentences used in answers)
        """
        pool = [s for s in segment(sanitized_text, QUESTION_MIN_LENGTH) if not is_question(s)]
        used: Set[str] = set()
        items: List[QAItem] = []

        for template in self.question_templates:
            primary = next((s for s in pool if _key(s) not in used and template.matches(s)), None)
            if primary is None:
                primary = next(
                    (s for s in pool if _key(s) not in used and len(s) > FALLBACK_QUESTION_MIN_LENGTH),
                    None,
                )
            if primary is None:
                logger.warning(f"No sentence left for question '{template.template_id}', using fallback answer")
                items.append(QAItem(question=template.text, answer=FALLBACK_ANSWER, needs_review=strict_mode))
                continue

            used.add(_key(primary))
            related = self._related_sentence(primary, pool, used)
            if related is not None:
                used.add(_key(related))

            answer = " ".join(finish_sentence(s) for s in (primary, related) if s)
            evidence = make_evidence(primary) if strict_mode else None
            items.append(
                QAItem(
                    question=template.text,
                    answer=answer,
                    evidence=evidence,
                    needs_review=strict_mode and not evidence,
                )
            )

        return items, used

    def _related_sentence(self, primary: str, pool: Sequence[str], used: Set[str]) -> Optional[str]:
        """An unused sentence sharing content words with the primary without restating it"""
        primary_words = content_words(primary)
        if not primary_words:
            return None
        for sentence in pool:
            if _key(sentence) in used or len(sentence) > RELATED_MAX_LENGTH:
                continue
            shared = primary_words & content_words(sentence)
            if len(shared) >= RELATED_MIN_SHARED_WORDS and similarity(primary, sentence) <= SIMILARITY_THRESHOLD:
                return sentence
        return None

    def select_takeaways(self, ranked: Sequence[Candidate], sanitized_text: str) -> List[str]:
        """Top-scoring candidates, topped up with substantive sentences and fallback statements"""
        takeaways = unique_ordered(finish_sentence(c.text) for c in ranked)[:TAKEAWAY_MAX]
        if len(takeaways) >= TAKEAWAY_MIN:
            return takeaways

        logger.warning(f"Only {len(takeaways)} takeaway candidates, filling from fallback sentences")
        low, high = FALLBACK_TAKEAWAY_LENGTH
        extras = [
            finish_sentence(s)
            for s in segment(sanitized_text, TAKEAWAY_MIN_LENGTH)
            if low < len(s) < high and not is_question(s)
        ]
        for sentence in list(extras) + list(FALLBACK_TAKEAWAYS):
            if len(takeaways) >= TAKEAWAY_MIN:
                break
            takeaways = unique_ordered(takeaways + [sentence])
        return takeaways

    def build_summary(self, sanitized_text: str) -> str:
        """
        One paragraph with a sentence per thematic slot

        A slot takes the first sentence matching its triggers that is not a
        near-duplicate of an earlier slot's sentence, otherwise its fixed
        fallback sentence.
        """
        pool = [s for s in segment(sanitized_text, SUMMARY_MIN_LENGTH) if not is_question(s)]
        chosen: List[str] = []

        for slot in self.summary_slots:
            pick = next(
                (
                    s for s in pool
                    if slot.matches(s)
                    and all(similarity(s, c) <= SIMILARITY_THRESHOLD for c in chosen)
                ),
                None,
            )
            if pick is None:
                logger.debug(f"Summary slot '{slot.template_id}' uses its fallback sentence")
                pick = slot.fallback
            chosen.append(finish_sentence(pick))

        return " ".join(chosen[:SUMMARY_MAX_SENTENCES])

    def propose_takeaways(self, candidates: Iterable[Candidate]) -> List[Candidate]:
        """Scored candidates offered for external selection, best first"""
        return rank_candidates(candidates)

    def with_takeaways(self, note: Note, selected: Iterable[str]) -> Note:
        """Copy of ``note`` whose takeaways are the caller's selection"""
        takeaways = unique_ordered(
            finished for finished in (finish_sentence(s) for s in selected) if finished
        )
        return note.model_copy(update={"takeaways": takeaways})
